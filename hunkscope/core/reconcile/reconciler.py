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
Reconciliation of agent-produced groupings against the parsed hunk set.

The agent is asked to place every hunk exactly once, but nothing forces it
to. These functions take whatever came back, drop ids that do not exist,
drop repeated placements (first placement wins), and put every hunk that
was never placed into the unassigned list. Every repair is described by a
warning string. Nothing here raises for bad content.

After reconcile_analysis the union of all group ids and the unassigned ids
is exactly the valid-id set, with no id appearing twice.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hunkscope.core.data.analysis import AnalysisResult, IntentGroup

FALLBACK_SUB_GROUP_TITLE = "Unassigned changes"
FALLBACK_SUB_GROUP_RATIONALE = (
    "These changes were not assigned to a sub-group by the agent, review them manually."
)


@dataclass(frozen=True)
class ReconciliationResult:
    cleaned: AnalysisResult
    warnings: list[str]


@dataclass(frozen=True)
class RefinementResult:
    sub_groups: list[IntentGroup]
    warnings: list[str]


def _retain_ids(
    hunk_ids: Iterable[str],
    valid_ids: set[str],
    seen: set[str],
    warnings: list[str],
    unknown_message: Callable[[str], str],
    duplicate_message: Callable[[str], str],
) -> list[str]:
    """
    Keep ids that are valid and not yet seen, marking kept ids as seen.
    `seen` is shared across calls so placement is first-come first-served.
    """
    kept: list[str] = []
    for hid in hunk_ids:
        if hid not in valid_ids:
            warnings.append(unknown_message(hid))
            continue
        if hid in seen:
            warnings.append(duplicate_message(hid))
            continue
        seen.add(hid)
        kept.append(hid)
    return kept


def _clean_groups(
    groups: Iterable[IntentGroup],
    valid_ids: set[str],
    seen: set[str],
    warnings: list[str],
    label: str,
) -> list[IntentGroup]:
    cleaned: list[IntentGroup] = []
    for group in groups:
        kept = _retain_ids(
            group.hunk_ids,
            valid_ids,
            seen,
            warnings,
            lambda hid: f"Removed non-existent hunk id '{hid}' from {label} '{group.title}'",
            lambda hid: f"Removed duplicate hunk id '{hid}' in {label} '{group.title}'",
        )
        if len(kept) != len(group.hunk_ids):
            warnings.append(
                f"{label.capitalize()} '{group.title}': "
                f"{len(group.hunk_ids)} -> {len(kept)} hunks after cleanup"
            )
        cleaned.append(group.model_copy(update={"hunk_ids": kept}))
    return cleaned


def _drop_empty(
    groups: list[IntentGroup], warnings: list[str], label: str
) -> list[IntentGroup]:
    non_empty = [group for group in groups if group.hunk_ids]
    removed = len(groups) - len(non_empty)
    if removed:
        warnings.append(f"Removed {removed} empty {label}(s) after cleanup")
    return non_empty


def _free_group_id(base: str, groups: list[IntentGroup]) -> str:
    taken = {group.id for group in groups}
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}.{suffix}"
        suffix += 1
    return candidate


def reconcile_analysis(
    result: AnalysisResult, valid_ids: Iterable[str]
) -> ReconciliationResult:
    """
    Validate and repair an agent grouping against the authoritative hunk ids.

    Args:
        result: Grouping as returned by the agent
        valid_ids: Ids of the parsed hunk set, in hunk order

    Returns:
        The cleaned grouping and an ordered list of warnings, one per repair
    """
    ordered_valid = list(dict.fromkeys(valid_ids))
    valid = set(ordered_valid)
    warnings: list[str] = []
    seen: set[str] = set()

    # 1. groups, in order
    groups = _clean_groups(result.groups, valid, seen, warnings, "group")

    # 2. empty groups
    groups = _drop_empty(groups, warnings, "group")

    # 3. explicit unassigned list, against the same running seen set
    unassigned = _retain_ids(
        result.unassigned_hunk_ids,
        valid,
        seen,
        warnings,
        lambda hid: f"Removed non-existent unassigned hunk id '{hid}'",
        lambda hid: f"Removed duplicate unassigned hunk id '{hid}'",
    )

    # 4. everything never placed goes to unassigned
    missing = [hid for hid in ordered_valid if hid not in seen]
    if missing:
        warnings.append(
            f"Added {len(missing)} missing hunk(s) to unassigned: {', '.join(missing)}"
        )
        unassigned.extend(missing)

    # 5. non-substantive ids are advisory, only existence is checked
    non_substantive: list[str] = []
    for hid in result.non_substantive_hunk_ids:
        if hid in valid:
            non_substantive.append(hid)
        else:
            warnings.append(f"Removed non-existent non-substantive hunk id '{hid}'")
    if len(non_substantive) != len(result.non_substantive_hunk_ids):
        warnings.append(
            f"nonSubstantiveHunkIds: {len(result.non_substantive_hunk_ids)} -> "
            f"{len(non_substantive)} after cleanup"
        )

    cleaned = result.model_copy(
        update={
            "groups": groups,
            "unassigned_hunk_ids": unassigned,
            "non_substantive_hunk_ids": non_substantive,
        }
    )
    return ReconciliationResult(cleaned=cleaned, warnings=warnings)


def reconcile_refinement(
    sub_groups: Iterable[IntentGroup],
    allowed_ids: Iterable[str],
    parent_id: str,
) -> RefinementResult:
    """
    Repair the sub-groups proposed when refining one intent group.

    Same id rules as reconcile_analysis; since a refinement has no
    unassigned list, hunks the agent left out are collected into one
    fallback sub-group "<parent_id>.unassigned".
    """
    ordered_allowed = list(dict.fromkeys(allowed_ids))
    allowed = set(ordered_allowed)
    warnings: list[str] = []
    seen: set[str] = set()

    cleaned = _clean_groups(sub_groups, allowed, seen, warnings, "sub-group")
    cleaned = _drop_empty(cleaned, warnings, "sub-group")

    missing = [hid for hid in ordered_allowed if hid not in seen]
    if missing:
        warnings.append(
            f"Added {len(missing)} missing hunk(s) to a fallback sub-group: {', '.join(missing)}"
        )
        cleaned.append(
            IntentGroup(
                id=_free_group_id(f"{parent_id}.unassigned", cleaned),
                title=FALLBACK_SUB_GROUP_TITLE,
                category="other",
                rationale=FALLBACK_SUB_GROUP_RATIONALE,
                risk="medium",
                hunk_ids=missing,
            )
        )

    return RefinementResult(sub_groups=cleaned, warnings=warnings)
