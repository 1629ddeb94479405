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
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from hunkscope.commands._common import help_option
from hunkscope.context import GlobalContext
from hunkscope.core.data.analysis import SavedAnalysis
from hunkscope.core.exceptions import (
    FileSystemError,
    ValidationError,
    handle_hunkscope_exception,
)
from hunkscope.core.ui.render import print_groups

console = Console()


def load_saved_analysis(path: Path) -> SavedAnalysis:
    try:
        data = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to read {path}", str(e)) from e

    try:
        return SavedAnalysis.model_validate_json(data)
    except PydanticValidationError as e:
        raise ValidationError(f"{path} is not a saved analysis", str(e)) from e


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    analysis_file: Path = typer.Argument(
        ..., help="File written by 'hunkscope analyze --output'"
    ),
    group_id: str = typer.Argument(..., help="Id of the group to refine"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Ignore cached results and ask codex again"
    ),
) -> None:
    """Split one intent group of a saved analysis into smaller sub-groups.

    Examples:
        hunkscope refine pr42.json g2
    """
    global_context: GlobalContext = ctx.obj
    config = global_context.config

    saved = load_saved_analysis(analysis_file)
    group = saved.find_group(group_id)
    if group is None:
        known = ", ".join(g.id for g in saved.result.groups) or "none"
        raise ValidationError(f"Unknown group id '{group_id}'", f"Known groups: {known}")

    response = global_context.service.refine_group(
        saved.hunks,
        group.id,
        group.title,
        group.hunk_ids,
        config.model,
        config.lang,
        force,
    )
    if not response.from_cache:
        logger.debug(response.codex_log)

    print_groups(console, response.sub_groups, saved.hunks)
