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


from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from hunkscope.commands._common import help_option
from hunkscope.context import AnalyzeContext, GlobalContext
from hunkscope.core.data.analysis import SavedAnalysis
from hunkscope.core.diff.diff_parser import parse_unified_diff
from hunkscope.core.exceptions import FileSystemError, handle_hunkscope_exception
from hunkscope.core.logging.utils import log_hunks, time_block
from hunkscope.core.ui.render import print_analysis
from hunkscope.core.validation import validate_pr_number, validate_repo

console = Console()


def run_pipeline(
    global_context: GlobalContext, repo: str, analyze_context: AnalyzeContext
) -> SavedAnalysis:
    """Fetch, parse, optionally split, and group the hunks of one PR."""
    config = global_context.config

    pr = global_context.gh.get_pr(repo, analyze_context.number)
    diff = global_context.gh.get_pr_diff(
        repo, analyze_context.number, analyze_context.force
    )

    hunks = parse_unified_diff(diff)
    log_hunks("Parsed diff", hunks)

    if analyze_context.split and config.split_large_hunks:
        split = global_context.service.split_large_hunks(
            hunks,
            config.split_threshold,
            config.model,
            config.lang,
            analyze_context.force,
        )
        hunks = split.hunks
        log_hunks("After split", hunks)

    response = global_context.service.analyze(
        hunks, pr.body, config.model, config.lang, analyze_context.force
    )
    if response.from_cache:
        logger.info("[dim]Using cached analysis (pass --force to re-run)[/dim]")
    else:
        logger.debug(response.codex_log)

    return SavedAnalysis(
        repo=repo, number=analyze_context.number, hunks=hunks, result=response.result
    )


def write_saved_analysis(saved: SavedAnalysis, output: Path) -> None:
    try:
        output.write_text(saved.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to write {output}", str(e)) from e


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    number: int = typer.Argument(..., help="Pull request number"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Ignore cached results: refetch the diff and ask codex again",
    ),
    no_split: bool = typer.Option(
        False, "--no-split", help="Do not split large hunks before grouping"
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Save hunks and groups as JSON (input for the refine command)",
    ),
) -> None:
    """Group the hunks of a pull request by change intent.

    Examples:
        hunkscope analyze 42

        hunkscope --lang Japanese analyze 42 -o pr42.json
    """
    global_context: GlobalContext = ctx.obj
    repo = validate_repo(global_context.config.repo)
    analyze_context = AnalyzeContext(
        number=validate_pr_number(number), force=force, split=not no_split
    )

    logger.debug(f"Analyze command started: {repo}#{number}")

    with time_block("Analyze Pipeline E2E"):
        saved = run_pipeline(global_context, repo, analyze_context)

    print_analysis(console, saved.result, saved.hunks)

    if output is not None:
        write_saved_analysis(saved, output)
        logger.info(f"[green]Saved analysis to {output}[/green]")
