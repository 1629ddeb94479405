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
from rich.console import Console

from hunkscope.commands._common import help_option
from hunkscope.context import GlobalContext
from hunkscope.core.data.hunk import dump_hunks
from hunkscope.core.diff.diff_parser import parse_unified_diff
from hunkscope.core.exceptions import handle_hunkscope_exception
from hunkscope.core.logging.utils import log_hunks
from hunkscope.core.ui.render import hunk_table
from hunkscope.core.validation import validate_repo

console = Console()


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    number: int = typer.Argument(..., help="Pull request number"),
    as_json: bool = typer.Option(
        False, "--json", help="Print the hunks as JSON instead of a table"
    ),
) -> None:
    """Fetch a pull request diff and show its hunks.

    Examples:
        hunkscope hunks 42

        hunkscope hunks 42 --json > hunks.json
    """
    global_context: GlobalContext = ctx.obj
    repo = validate_repo(global_context.config.repo)

    diff = global_context.gh.get_pr_diff(repo, number)
    hunks = parse_unified_diff(diff)
    log_hunks(f"PR #{number}", hunks)

    if as_json:
        typer.echo(dump_hunks(hunks))
    else:
        console.print(hunk_table(hunks))
