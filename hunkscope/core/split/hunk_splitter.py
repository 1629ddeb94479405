# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


"""
Materializes agent-proposed splits of oversized hunks.

A proposal gives, per hunk, a list of half-open line-index ranges. Each
range becomes a new hunk with recomputed start lines and counts and a
synthesized header carrying the sub-hunk title. Ranges are clamped to the
hunk; ranges that end up empty are skipped. Gapless coverage of the parent
hunk is asked of the agent but not enforced here.
"""

from collections.abc import Iterable, Sequence, Set
from dataclasses import dataclass, field

from hunkscope.constants import HUNK_LINE_THRESHOLD
from hunkscope.core.data.diff_line import LineKind
from hunkscope.core.data.hunk import Hunk
from hunkscope.core.data.split import SplitEntry, SplitProposal, SubHunkRange


@dataclass
class SplitOutcome:
    hunks: list[Hunk] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def select_large_hunks(
    hunks: Iterable[Hunk], threshold: int = HUNK_LINE_THRESHOLD
) -> list[Hunk]:
    """Hunks with more than `threshold` lines, in their original order."""
    return [hunk for hunk in hunks if len(hunk.lines) > threshold]


def _clamp(index: int, upper: int) -> int:
    return max(0, min(index, upper))


def _is_derived_id(candidate: str, parent_id: str) -> bool:
    prefix = f"{parent_id}."
    return candidate.startswith(prefix) and len(candidate) > len(prefix)


def build_sub_hunk(parent: Hunk, sub_id: str, title: str, start: int, end: int) -> Hunk:
    """Build the hunk for parent.lines[start:end]; the slice must be non-empty."""
    lines = parent.lines[start:end]

    old_start = next(
        (line.old_line_number for line in lines if line.old_line_number is not None),
        parent.old_start,
    )
    new_start = next(
        (line.new_line_number for line in lines if line.new_line_number is not None),
        parent.new_start,
    )
    old_count = sum(1 for line in lines if line.kind is not LineKind.ADD)
    new_count = sum(1 for line in lines if line.kind is not LineKind.REMOVE)

    return Hunk(
        id=sub_id,
        file_path=parent.file_path,
        header=f"@@ -{old_start},{old_count} +{new_start},{new_count} @@ [{title}]",
        old_start=old_start,
        old_line_count=old_count,
        new_start=new_start,
        new_line_count=new_count,
        lines=list(lines),
    )


def split_hunk(
    hunk: Hunk,
    sub_hunks: Sequence[SubHunkRange],
    reserved_ids: Set[str] = frozenset(),
) -> SplitOutcome:
    """
    Replace one hunk by the sub-hunks described by `sub_hunks`.

    Args:
        hunk: The hunk being split
        sub_hunks: Proposed ranges over hunk.lines, end exclusive
        reserved_ids: Ids already in use elsewhere in the hunk set

    Returns:
        Zero or more sub-hunks, in proposal order, plus warnings for every
        range that was skipped and every id that had to be re-derived
    """
    outcome = SplitOutcome()
    used = set(reserved_ids)
    total = len(hunk.lines)

    for position, sub in enumerate(sub_hunks, start=1):
        start = _clamp(sub.start_line_index, total)
        end = _clamp(sub.end_line_index, total)
        if start >= end:
            outcome.warnings.append(
                f"Skipped empty sub-hunk range [{sub.start_line_index}, "
                f"{sub.end_line_index}) for '{hunk.id}'"
            )
            continue

        sub_id = sub.id
        if not _is_derived_id(sub_id, hunk.id) or sub_id in used:
            k = position
            while f"{hunk.id}.{k}" in used:
                k += 1
            sub_id = f"{hunk.id}.{k}"
            outcome.warnings.append(
                f"Replaced sub-hunk id '{sub.id}' with '{sub_id}' for '{hunk.id}'"
            )

        used.add(sub_id)
        outcome.hunks.append(build_sub_hunk(hunk, sub_id, sub.title, start, end))

    return outcome


def _index_entries(
    hunks: Sequence[Hunk], proposal: SplitProposal, warnings: list[str]
) -> dict[str, SplitEntry]:
    known = {hunk.id for hunk in hunks}
    entries: dict[str, SplitEntry] = {}

    for entry in proposal.splits:
        if entry.original_hunk_id not in known:
            warnings.append(
                f"Ignored split for non-existent hunk id '{entry.original_hunk_id}'"
            )
            continue
        if entry.original_hunk_id in entries:
            warnings.append(
                f"Ignored duplicate split for hunk id '{entry.original_hunk_id}'"
            )
            continue
        entries[entry.original_hunk_id] = entry

    return entries


def apply_splits(hunks: Sequence[Hunk], proposal: SplitProposal) -> SplitOutcome:
    """
    Apply a split proposal to a hunk set.

    Hunks without a split entry pass through unchanged; hunks with one are
    replaced in place by their sub-hunks. Relative order is preserved.
    """
    outcome = SplitOutcome()
    entries = _index_entries(hunks, proposal, outcome.warnings)
    reserved = {hunk.id for hunk in hunks}

    for hunk in hunks:
        entry = entries.get(hunk.id)
        if entry is None:
            outcome.hunks.append(hunk)
            continue

        split = split_hunk(hunk, entry.sub_hunks, reserved)
        reserved.update(sub.id for sub in split.hunks)
        outcome.warnings.extend(split.warnings)
        if not split.hunks:
            outcome.warnings.append(
                f"Split of '{hunk.id}' produced no sub-hunks; hunk removed"
            )
        outcome.hunks.extend(split.hunks)

    return outcome
