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


import typer
from loguru import logger
from rich.console import Console

from hunkscope.commands._common import help_option
from hunkscope.context import GlobalContext
from hunkscope.core.exceptions import handle_hunkscope_exception
from hunkscope.core.ui.render import pr_table
from hunkscope.core.validation import validate_repo

console = Console()


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    search: str | None = typer.Option(
        None, "--search", help="GitHub search query to filter PRs"
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-n", help="Maximum number of PRs (defaults to pr_limit)"
    ),
) -> None:
    """List pull requests of the configured repository.

    Examples:
        hunkscope --repo owner/repo prs

        hunkscope prs --search "label:bug" -n 10
    """
    global_context: GlobalContext = ctx.obj
    config = global_context.config
    repo = validate_repo(config.repo)

    prs = global_context.gh.list_prs(
        repo, limit or config.pr_limit, config.pr_state, search
    )
    logger.debug(f"Fetched {len(prs)} PR(s) from {repo}")

    if not prs:
        logger.info("[yellow]No pull requests found[/yellow]")
        return

    console.print(pr_table(prs, repo))
