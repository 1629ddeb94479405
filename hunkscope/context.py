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


from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from hunkscope.constants import DATA_DIR, HUNK_LINE_THRESHOLD
from hunkscope.core.analysis.service import AnalysisService
from hunkscope.core.cache.json_cache import JsonCache
from hunkscope.core.codex.codex_runner import CodexRunner
from hunkscope.core.gh.gh_client import GhClient


class GlobalConfig(BaseModel):
    repo: str | None = Field(
        default=None, description="GitHub repository to read PRs from (owner/repo)"
    )
    model: str | None = Field(
        default=None,
        description="Codex model to use, the codex config default when unset",
    )
    lang: str | None = Field(
        default=None, description="Language for titles and summaries (e.g., Japanese)"
    )
    pr_limit: int = Field(default=30, description="Maximum number of PRs to list")
    pr_state: Literal["open", "closed", "merged", "all"] = Field(
        default="open", description="Which PRs to list"
    )
    split_threshold: int = Field(
        default=HUNK_LINE_THRESHOLD,
        description="Hunks with more lines than this are split before analysis",
    )
    split_large_hunks: bool = Field(
        default=True, description="Split large hunks into sub-hunks before analysis"
    )
    use_cache: bool = Field(
        default=True, description="Reuse cached diffs and analysis results"
    )
    codex_bin: str = Field(default="codex", description="Path to the codex binary")
    gh_bin: str = Field(default="gh", description="Path to the GitHub CLI binary")
    verbose: bool = Field(default=False, description="Enable verbose logging output")
    silent: bool = Field(
        default=False, description="Do not output any log text to the console"
    )


@dataclass(frozen=True)
class GlobalContext:
    config: GlobalConfig
    cache: JsonCache
    gh: GhClient
    runner: CodexRunner
    service: AnalysisService

    @classmethod
    def from_global_config(cls, config: GlobalConfig):
        cache = JsonCache(DATA_DIR)
        active_cache = cache if config.use_cache else None

        gh = GhClient(config.gh_bin, active_cache)
        runner = CodexRunner(config.codex_bin)
        service = AnalysisService(runner, active_cache)

        return GlobalContext(config, cache, gh, runner, service)


@dataclass(frozen=True)
class AnalyzeContext:
    number: int
    force: bool = False
    split: bool = True
