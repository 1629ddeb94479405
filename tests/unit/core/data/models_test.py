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


import json

import pytest
from pydantic import ValidationError

from hunkscope.core.data.analysis import AnalysisResult, IntentGroup, SavedAnalysis
from hunkscope.core.data.diff_line import DiffLine, LineKind
from hunkscope.core.data.hunk import Hunk, dump_hunks


def make_hunk() -> Hunk:
    return Hunk(
        id="H1",
        file_path="a.py",
        header="@@ -1,2 +1,2 @@",
        old_start=1,
        old_line_count=2,
        new_start=1,
        new_line_count=2,
        lines=[
            DiffLine.context(1, 1, "x"),
            DiffLine.remove(2, "y"),
            DiffLine.add(2, "z"),
        ],
    )


def test_diff_line_rejects_wrong_line_numbers():
    with pytest.raises(ValidationError):
        DiffLine(kind=LineKind.ADD, old_line_number=1, new_line_number=1)
    with pytest.raises(ValidationError):
        DiffLine(kind=LineKind.REMOVE, new_line_number=1)
    with pytest.raises(ValidationError):
        DiffLine(kind=LineKind.CONTEXT, old_line_number=1)


def test_hunk_json_uses_camel_case():
    data = json.loads(dump_hunks([make_hunk()]))[0]

    assert data["filePath"] == "a.py"
    assert data["oldLineCount"] == 2
    assert data["lines"][1] == {
        "kind": "remove",
        "oldLineNumber": 2,
        "newLineNumber": None,
        "text": "y",
    }


def test_hunk_counts():
    hunk = make_hunk()

    assert hunk.additions == 1
    assert hunk.deletions == 1


def test_intent_group_normalizes_risk_and_category():
    group = IntentGroup(id="g1", risk="HIGH", category="bogus")

    assert group.risk == "high"
    assert group.category == "other"
    assert IntentGroup(id="g2", risk="extreme").risk == "medium"


def test_analysis_result_reads_agent_json():
    result = AnalysisResult.model_validate_json(
        '{"overallSummary": "s", "groups": [{"id": "g1", "title": "T", '
        '"hunkIds": ["H1"]}], "unassignedHunkIds": ["H2"]}'
    )

    assert result.version == 1
    assert result.groups[0].hunk_ids == ["H1"]
    assert result.unassigned_hunk_ids == ["H2"]
    assert result.non_substantive_hunk_ids == []


def test_saved_analysis_find_group():
    saved = SavedAnalysis(
        repo="octo/hello",
        number=3,
        hunks=[make_hunk()],
        result=AnalysisResult(groups=[IntentGroup(id="g1", hunk_ids=["H1"])]),
    )

    assert saved.find_group("g1").hunk_ids == ["H1"]
    assert saved.find_group("g9") is None
