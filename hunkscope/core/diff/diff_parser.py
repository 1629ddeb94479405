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
Unified diff parser.

Turns the text printed by `gh pr diff --patch --color never` (or
`git diff`) into an ordered list of hunks with ids H1..HN, numbered in
file-then-position order. Odd input is tolerated rather than rejected:
unknown file paths become "unknown", omitted header counts default to 1,
and lines that are neither metadata nor hunk content are skipped.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

from loguru import logger

from hunkscope.core.data.diff_line import DiffLine
from hunkscope.core.data.hunk import Hunk, ParsedDiff
from hunkscope.core.exceptions import DiffParseError

HUNK_HEADER_PATTERN = r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$"

FILE_SECTION_MARKERS = ("diff --git ", "diff --combined ")
NEW_PATH_MARKER = "+++ b/"
OLD_PATH_MARKER = "--- a/"
NULL_PATH_MARKERS = ("+++ /dev/null", "--- /dev/null")
NO_NEWLINE_MARKER = "\\"

UNKNOWN_FILE_PATH = "unknown"


@lru_cache(maxsize=1)
def hunk_header_regex() -> re.Pattern[str]:
    try:
        return re.compile(HUNK_HEADER_PATTERN)
    except re.error as e:
        raise DiffParseError("Failed to compile hunk header pattern", str(e)) from e


@dataclass
class _HunkBuilder:
    """Collects the body of the hunk currently being read."""

    file_path: str
    header: str
    old_start: int
    old_line_count: int
    new_start: int
    new_line_count: int
    lines: list[DiffLine] = field(default_factory=list)
    # running cursors used to stamp content lines
    old_line: int = 0
    new_line: int = 0

    def __post_init__(self):
        self.old_line = self.old_start
        self.new_line = self.new_start

    def consume(self, line: str) -> None:
        if line.startswith("+"):
            self.lines.append(DiffLine.add(self.new_line, line[1:]))
            self.new_line += 1
        elif line.startswith("-"):
            self.lines.append(DiffLine.remove(self.old_line, line[1:]))
            self.old_line += 1
        elif line.startswith(" ") or not line:
            self.lines.append(DiffLine.context(self.old_line, self.new_line, line[1:]))
            self.old_line += 1
            self.new_line += 1
        elif line.startswith(NO_NEWLINE_MARKER):
            # "\ No newline at end of file"
            return
        else:
            logger.debug(f"Skipping unrecognized hunk line: {line[:80]!r}")

    def build(self, hunk_id: str) -> Hunk:
        return Hunk(
            id=hunk_id,
            file_path=self.file_path,
            header=self.header,
            old_start=self.old_start,
            old_line_count=self.old_line_count,
            new_start=self.new_start,
            new_line_count=self.new_line_count,
            lines=self.lines,
        )


def _flush(builder: _HunkBuilder | None, counter: int, hunks: list[Hunk]) -> int:
    """Close the open hunk, if any, and return the updated id counter."""
    if builder is None:
        return counter

    counter += 1
    hunks.append(builder.build(f"H{counter}"))
    return counter


def _split_lines(diff_text: str) -> list[str]:
    # str.splitlines() would also break on form feeds and unicode separators
    # that can legitimately appear inside a line of source code
    lines = diff_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _marker_path(line: str, marker: str) -> str:
    # GNU diff appends "\t<timestamp>" after the path
    return line[len(marker) :].split("\t", 1)[0]


def _to_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return 0


def parse_unified_diff(diff_text: str) -> list[Hunk]:
    """
    Parse unified diff text into hunks.

    Args:
        diff_text: Raw unified diff, as produced with color disabled

    Returns:
        Hunks in file-then-position order with ids H1..HN

    Raises:
        DiffParseError: If the hunk header pattern cannot be compiled
    """
    header_re = hunk_header_regex()

    hunks: list[Hunk] = []
    counter = 0
    current_file: str | None = None
    current: _HunkBuilder | None = None

    for line in _split_lines(diff_text):
        if line.startswith(FILE_SECTION_MARKERS):
            counter = _flush(current, counter, hunks)
            current = None
            current_file = None
            continue

        # path markers only count before the first hunk of a file;
        # inside a hunk body they are ordinary content lines
        if current is None:
            if line.startswith(NEW_PATH_MARKER):
                current_file = _marker_path(line, NEW_PATH_MARKER)
                continue
            if line.startswith(OLD_PATH_MARKER):
                if current_file is None:
                    current_file = _marker_path(line, OLD_PATH_MARKER)
                continue
            if line.startswith(NULL_PATH_MARKERS):
                continue

        match = header_re.match(line)
        if match:
            counter = _flush(current, counter, hunks)
            current = _HunkBuilder(
                file_path=current_file or UNKNOWN_FILE_PATH,
                header=line,
                old_start=_to_int(match.group(1), 0),
                old_line_count=_to_int(match.group(2), 1),
                new_start=_to_int(match.group(3), 0),
                new_line_count=_to_int(match.group(4), 1),
            )
            continue

        if current is not None:
            current.consume(line)

    _flush(current, counter, hunks)

    logger.debug(
        "Parsed diff: hunks={count} files={files}",
        count=len(hunks),
        files=len({hunk.file_path for hunk in hunks}),
    )
    return hunks


def parse_diff(diff_text: str) -> ParsedDiff:
    return ParsedDiff(hunks=parse_unified_diff(diff_text), raw=diff_text)
