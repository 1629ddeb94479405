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


from unittest.mock import patch

import pytest

from hunkscope.core.data.diff_line import LineKind
from hunkscope.core.diff import diff_parser
from hunkscope.core.diff.diff_parser import parse_diff, parse_unified_diff
from hunkscope.core.exceptions import DiffParseError

SAMPLE_DIFF = """diff --git a/src/app.py b/src/app.py
index 83db48f..bf269f4 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@ def main():
 import os
-import sys
+import sys, re
+import json
 print(1)
@@ -10,2 +11,2 @@
 a
-b
+c
diff --git a/old.txt b/old.txt
deleted file mode 100644
index 1111111..0000000
--- a/old.txt
+++ /dev/null
@@ -1,2 +0,0 @@
-x
-y
"""

# -----------------------------------------------------------------------------
# Structure
# -----------------------------------------------------------------------------


def test_parse_sample_diff_ids_and_files():
    hunks = parse_unified_diff(SAMPLE_DIFF)

    assert [h.id for h in hunks] == ["H1", "H2", "H3"]
    assert [h.file_path for h in hunks] == ["src/app.py", "src/app.py", "old.txt"]


def test_header_fields_and_trailing_text():
    first = parse_unified_diff(SAMPLE_DIFF)[0]

    assert first.header == "@@ -1,3 +1,4 @@ def main():"
    assert (first.old_start, first.old_line_count) == (1, 3)
    assert (first.new_start, first.new_line_count) == (1, 4)


def test_line_numbers_are_stamped_from_cursors():
    first, second, _ = parse_unified_diff(SAMPLE_DIFF)

    assert [(l.kind, l.old_line_number, l.new_line_number, l.text) for l in first.lines] == [
        (LineKind.CONTEXT, 1, 1, "import os"),
        (LineKind.REMOVE, 2, None, "import sys"),
        (LineKind.ADD, None, 2, "import sys, re"),
        (LineKind.ADD, None, 3, "import json"),
        (LineKind.CONTEXT, 3, 4, "print(1)"),
    ]
    assert [(l.old_line_number, l.new_line_number) for l in second.lines] == [
        (10, 11),
        (11, None),
        (None, 12),
    ]


def test_line_counts_agree_with_header():
    """Context plus removals match the old count, context plus additions the new."""
    for hunk in parse_unified_diff(SAMPLE_DIFF):
        old = sum(1 for l in hunk.lines if l.kind is not LineKind.ADD)
        new = sum(1 for l in hunk.lines if l.kind is not LineKind.REMOVE)
        assert old == hunk.old_line_count
        assert new == hunk.new_line_count


def test_single_hunk_without_trailing_newline():
    diff = "diff --git a/f\n--- a/f\n+++ b/f\n@@ -1,3 +1,4 @@\n a\n+b\n c\n d"

    hunks = parse_unified_diff(diff)

    assert len(hunks) == 1
    hunk = hunks[0]
    assert (hunk.id, hunk.file_path, hunk.header) == ("H1", "f", "@@ -1,3 +1,4 @@")
    assert [(l.kind, l.old_line_number, l.new_line_number, l.text) for l in hunk.lines] == [
        (LineKind.CONTEXT, 1, 1, "a"),
        (LineKind.ADD, None, 2, "b"),
        (LineKind.CONTEXT, 2, 3, "c"),
        (LineKind.CONTEXT, 3, 4, "d"),
    ]


def test_deleted_file_uses_old_path():
    deleted = parse_unified_diff(SAMPLE_DIFF)[2]

    assert deleted.file_path == "old.txt"
    assert deleted.deletions == 2
    assert deleted.additions == 0


def test_new_file_uses_new_path():
    diff = (
        "diff --git a/new.txt b/new.txt\n"
        "new file mode 100644\n"
        "--- /dev/null\n"
        "+++ b/new.txt\n"
        "@@ -0,0 +1 @@\n"
        "+hello\n"
    )
    (hunk,) = parse_unified_diff(diff)

    assert hunk.file_path == "new.txt"
    assert hunk.new_line_count == 1
    assert hunk.lines[0].new_line_number == 1


def test_renamed_file_prefers_new_path():
    diff = "--- a/before.py\n+++ b/after.py\n@@ -1 +1 @@\n-a\n+b\n"

    assert parse_unified_diff(diff)[0].file_path == "after.py"


def test_ids_are_contiguous_across_files():
    diff = SAMPLE_DIFF + SAMPLE_DIFF
    ids = [h.id for h in parse_unified_diff(diff)]

    assert ids == [f"H{i}" for i in range(1, 7)]


# -----------------------------------------------------------------------------
# Tolerated oddities
# -----------------------------------------------------------------------------


def test_missing_counts_default_to_one():
    (hunk,) = parse_unified_diff("+++ b/a.txt\n@@ -5 +7 @@\n-a\n+b\n")

    assert (hunk.old_start, hunk.old_line_count) == (5, 1)
    assert (hunk.new_start, hunk.new_line_count) == (7, 1)


def test_unknown_path_when_no_markers():
    (hunk,) = parse_unified_diff("@@ -1 +1 @@\n-a\n+b\n")

    assert hunk.file_path == "unknown"


def test_no_newline_marker_is_skipped():
    diff = "+++ b/a.txt\n@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n\\ No newline at end of file\n"
    (hunk,) = parse_unified_diff(diff)

    assert [l.kind for l in hunk.lines] == [LineKind.REMOVE, LineKind.ADD]


def test_path_markers_inside_hunk_are_content():
    diff = "+++ b/a.sql\n@@ -1,2 +1,2 @@\n--- a/comment\n+++ b/banner\n"
    (hunk,) = parse_unified_diff(diff)

    assert hunk.file_path == "a.sql"
    assert [(l.kind, l.text) for l in hunk.lines] == [
        (LineKind.REMOVE, "-- a/comment"),
        (LineKind.ADD, "++ b/banner"),
    ]


def test_empty_line_in_hunk_is_context():
    (hunk,) = parse_unified_diff("+++ b/a.txt\n@@ -1,3 +1,3 @@\n a\n\n c\n")

    assert [l.kind for l in hunk.lines] == [LineKind.CONTEXT] * 3
    assert hunk.lines[1].text == ""
    assert hunk.lines[2].old_line_number == 3


def test_trailing_newline_does_not_matter():
    with_newline = parse_unified_diff(SAMPLE_DIFF)
    without_newline = parse_unified_diff(SAMPLE_DIFF.rstrip("\n"))

    assert with_newline == without_newline


def test_crlf_line_endings():
    crlf = SAMPLE_DIFF.replace("\n", "\r\n")

    assert parse_unified_diff(crlf) == parse_unified_diff(SAMPLE_DIFF)


def test_form_feed_stays_inside_line():
    (hunk,) = parse_unified_diff("+++ b/a.c\n@@ -1 +1 @@\n-a\x0cb\n+ab\n")

    assert hunk.lines[0].text == "a\x0cb"


def test_empty_input_yields_no_hunks():
    assert parse_unified_diff("") == []
    assert parse_unified_diff("diff --git a/x b/x\nBinary files differ\n") == []


def test_parse_diff_keeps_raw_text():
    parsed = parse_diff(SAMPLE_DIFF)

    assert parsed.raw == SAMPLE_DIFF
    assert [hunk.id for hunk in parsed.hunks] == ["H1", "H2", "H3"]


def test_uncompilable_header_pattern_raises():
    diff_parser.hunk_header_regex.cache_clear()
    try:
        with patch.object(diff_parser, "HUNK_HEADER_PATTERN", "(unclosed"):
            with pytest.raises(DiffParseError):
                parse_unified_diff(SAMPLE_DIFF)
    finally:
        diff_parser.hunk_header_regex.cache_clear()
