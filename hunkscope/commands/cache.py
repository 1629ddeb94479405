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

from hunkscope.commands._common import help_option
from hunkscope.context import GlobalContext
from hunkscope.core.cache.json_cache import format_bytes
from hunkscope.core.exceptions import FileSystemError, handle_hunkscope_exception


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    clear: bool = typer.Option(False, "--clear", help="Delete all cached data"),
) -> None:
    """Show how much disk the cache uses, or clear it.

    Examples:
        hunkscope cache

        hunkscope cache --clear
    """
    global_context: GlobalContext = ctx.obj
    cache = global_context.cache

    if clear:
        try:
            cache.clear()
        except OSError as e:
            raise FileSystemError(f"Failed to clear {cache.cache_dir}", str(e)) from e
        logger.info("[green]Cache cleared[/green]")
        return

    typer.echo(f"{format_bytes(cache.size())} in {cache.cache_dir}")
