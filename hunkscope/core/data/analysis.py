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


from typing import Literal

from pydantic import field_validator

from hunkscope.core.data.base import CamelModel
from hunkscope.core.data.hunk import Hunk

Risk = Literal["low", "medium", "high"]
GroupCategory = Literal[
    "schema", "logic", "api", "ui", "test", "config", "docs", "refactor", "other"
]

RISK_LEVELS: tuple[str, ...] = ("low", "medium", "high")
GROUP_CATEGORIES: tuple[str, ...] = (
    "schema",
    "logic",
    "api",
    "ui",
    "test",
    "config",
    "docs",
    "refactor",
    "other",
)


class IntentGroup(CamelModel):
    """A reviewer-facing cluster of hunks believed to share one purpose."""

    id: str
    title: str = ""
    category: GroupCategory = "other"
    rationale: str = ""
    risk: Risk = "medium"
    hunk_ids: list[str] = []
    reviewer_checklist: list[str] = []
    suggested_tests: list[str] = []

    @field_validator("risk", mode="before")
    @classmethod
    def _normalize_risk(cls, value):
        if isinstance(value, str) and value.strip().lower() in RISK_LEVELS:
            return value.strip().lower()
        return "medium"

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value):
        if isinstance(value, str) and value.strip().lower() in GROUP_CATEGORIES:
            return value.strip().lower()
        return "other"


class AnalysisResult(CamelModel):
    """
    Grouping of a hunk set as produced by the agent.

    Only the structure is checked on load; which ids are valid and whether
    every hunk is covered is established by the reconciliation engine.
    """

    version: int = 1
    overall_summary: str = ""
    groups: list[IntentGroup] = []
    unassigned_hunk_ids: list[str] = []
    # advisory; may overlap with groups and unassigned
    non_substantive_hunk_ids: list[str] = []
    questions: list[str] = []


class RefineResult(CamelModel):
    groups: list[IntentGroup] = []


class AnalysisResponse(CamelModel):
    result: AnalysisResult
    codex_log: str = ""
    from_cache: bool = False


class RefineResponse(CamelModel):
    sub_groups: list[IntentGroup] = []
    codex_log: str = ""
    from_cache: bool = False


class SplitResponse(CamelModel):
    hunks: list[Hunk] = []
    codex_log: str = ""
    from_cache: bool = False


class SavedAnalysis(CamelModel):
    """What `analyze --output` writes: the hunks and their reconciled grouping."""

    repo: str
    number: int
    hunks: list[Hunk] = []
    result: AnalysisResult

    def find_group(self, group_id: str) -> IntentGroup | None:
        return next((g for g in self.result.groups if g.id == group_id), None)
