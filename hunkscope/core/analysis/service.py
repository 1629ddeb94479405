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


from collections.abc import Sequence

from loguru import logger

from hunkscope.constants import HUNK_LINE_THRESHOLD
from hunkscope.core.cache.json_cache import (
    ANALYSIS_CACHE,
    REFINE_CACHE,
    SPLIT_CACHE,
    JsonCache,
    hash_key,
)
from hunkscope.core.codex.codex_runner import CodexRunner, prepare_workdir, read_output
from hunkscope.core.codex.prompts import (
    build_analysis_prompt,
    build_refine_prompt,
    build_split_prompt,
)
from hunkscope.core.codex.schemas import ANALYSIS_SCHEMA, REFINE_SCHEMA, SPLIT_SCHEMA
from hunkscope.core.data.analysis import (
    AnalysisResponse,
    AnalysisResult,
    RefineResponse,
    RefineResult,
    SplitResponse,
)
from hunkscope.core.data.hunk import Hunk, dump_hunks
from hunkscope.core.data.split import SplitProposal
from hunkscope.core.exceptions import ValidationError, no_hunks
from hunkscope.core.logging.utils import log_hunks, time_block
from hunkscope.core.reconcile.reconciler import reconcile_analysis, reconcile_refinement
from hunkscope.core.split.hunk_splitter import apply_splits, select_large_hunks


def append_warnings(log: str, warnings: list[str]) -> str:
    if not warnings:
        return log
    return log + "--- validation warnings ---\n" + "".join(f"{w}\n" for w in warnings)


def _log_warnings(step: str, warnings: list[str]) -> None:
    for warning in warnings:
        logger.warning(f"[{step}] {warning}")


class AnalysisService:
    """
    Sends hunk sets to the agent and brings back repaired results.

    Every agent answer goes through the reconciliation engine (or the hunk
    splitter) before it is returned or cached, so callers always receive a
    total, conflict-free result.
    """

    def __init__(self, runner: CodexRunner, cache: JsonCache | None = None) -> None:
        self.runner = runner
        self.cache = cache

    def _cached(self, subdir: str, key: str, model, force: bool):
        if force or self.cache is None:
            return None
        cached = self.cache.read(subdir, key, model)
        if cached is None:
            return None
        logger.debug(f"Using cached {subdir} result {key}")
        return cached.model_copy(update={"from_cache": True})

    def _store(self, subdir: str, key: str, value) -> None:
        if self.cache is not None:
            self.cache.write(subdir, key, value)

    def analyze(
        self,
        hunks: Sequence[Hunk],
        pr_body: str | None = None,
        model: str | None = None,
        lang: str | None = None,
        force: bool = False,
    ) -> AnalysisResponse:
        """
        Group a hunk set by change intent.

        Raises:
            ValidationError: If there are no hunks
            ExternalToolError: If codex cannot be run
            AIServiceError: If codex produced no usable output
        """
        if not hunks:
            raise no_hunks()

        hunks_json = dump_hunks(hunks)
        valid_ids = [hunk.id for hunk in hunks]
        key = hash_key("\n".join([hunks_json, pr_body or "", model or "", lang or ""]))

        cached = self._cached(ANALYSIS_CACHE, key, AnalysisResponse, force)
        if cached is not None:
            return cached

        log_hunks("Analysis input", hunks)
        prompt = build_analysis_prompt(len(set(valid_ids)), pr_body, lang)

        with time_block("Codex analysis"):
            with prepare_workdir(hunks_json, ANALYSIS_SCHEMA, "analysis.json") as workdir:
                args = self.runner.build_args(
                    workdir.path, workdir.schema_path, workdir.output_path, model, prompt
                )
                output = self.runner.run(args)
                result = read_output(workdir.output_path, AnalysisResult)

        reconciliation = reconcile_analysis(result, valid_ids)
        _log_warnings("analysis", reconciliation.warnings)

        log = self.runner.build_log("analysis", output)
        log += (
            f"[analysis] hunks={len(set(valid_ids))} "
            f"groups={len(reconciliation.cleaned.groups)}\n"
        )
        log = append_warnings(log, reconciliation.warnings)

        response = AnalysisResponse(
            result=reconciliation.cleaned, codex_log=log, from_cache=False
        )
        self._store(ANALYSIS_CACHE, key, response)
        return response

    def refine_group(
        self,
        hunks: Sequence[Hunk],
        group_id: str,
        group_title: str,
        hunk_ids: Sequence[str],
        model: str | None = None,
        lang: str | None = None,
        force: bool = False,
    ) -> RefineResponse:
        """Split one intent group into smaller sub-groups."""
        wanted = set(hunk_ids)
        group_hunks = [hunk for hunk in hunks if hunk.id in wanted]
        if not group_hunks:
            raise ValidationError("No hunks found for this group.")

        group_json = dump_hunks(group_hunks)
        key = hash_key("\n".join([group_json, group_id, model or "", lang or ""]))

        cached = self._cached(REFINE_CACHE, key, RefineResponse, force)
        if cached is not None:
            return cached

        prompt = build_refine_prompt(group_id, group_title, lang)

        with time_block("Codex refine"):
            with prepare_workdir(group_json, REFINE_SCHEMA, "refine.json") as workdir:
                args = self.runner.build_args(
                    workdir.path, workdir.schema_path, workdir.output_path, model, prompt
                )
                output = self.runner.run(args)
                result = read_output(workdir.output_path, RefineResult)

        refinement = reconcile_refinement(
            result.groups, [hunk.id for hunk in group_hunks], group_id
        )
        _log_warnings("refine", refinement.warnings)

        log = self.runner.build_log("refine", output)
        log += (
            f'[refine] group="{group_title}" '
            f"sub-groups={len(refinement.sub_groups)}\n"
        )
        log = append_warnings(log, refinement.warnings)

        response = RefineResponse(
            sub_groups=refinement.sub_groups, codex_log=log, from_cache=False
        )
        self._store(REFINE_CACHE, key, response)
        return response

    def split_large_hunks(
        self,
        hunks: Sequence[Hunk],
        threshold: int = HUNK_LINE_THRESHOLD,
        model: str | None = None,
        lang: str | None = None,
        force: bool = False,
    ) -> SplitResponse:
        """Ask the agent to split hunks longer than `threshold` lines."""
        large = select_large_hunks(hunks, threshold)
        if not large:
            return SplitResponse(hunks=list(hunks))

        logger.debug(f"{len(large)} hunk(s) exceed {threshold} lines, requesting split")
        key = hash_key(
            "\n".join([dump_hunks(hunks), str(threshold), model or "", lang or ""])
        )

        cached = self._cached(SPLIT_CACHE, key, SplitResponse, force)
        if cached is not None:
            return cached

        with time_block("Codex split"):
            with prepare_workdir(
                dump_hunks(large),
                SPLIT_SCHEMA,
                "split_result.json",
                input_filename="large_hunks.json",
            ) as workdir:
                args = self.runner.build_args(
                    workdir.path,
                    workdir.schema_path,
                    workdir.output_path,
                    model,
                    build_split_prompt(lang),
                )
                output = self.runner.run(args)
                proposal = read_output(workdir.output_path, SplitProposal)

        outcome = apply_splits(hunks, proposal)
        _log_warnings("split", outcome.warnings)

        log = self.runner.build_log("split", output)
        log += f"[split] large={len(large)} hunks={len(hunks)} -> {len(outcome.hunks)}\n"
        log = append_warnings(log, outcome.warnings)

        response = SplitResponse(hunks=outcome.hunks, codex_log=log, from_cache=False)
        self._store(SPLIT_CACHE, key, response)
        return response
