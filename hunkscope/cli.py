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
from dotenv import load_dotenv
from loguru import logger
from rich.traceback import install

from hunkscope.commands import analyze, cache, config, hunks, prs, refine
from hunkscope.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from hunkscope.context import GlobalConfig, GlobalContext
from hunkscope.core.config.config_loader import ConfigLoader
from hunkscope.core.exceptions import HunkscopeError
from hunkscope.core.logging.logging import setup_logger
from hunkscope.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# create app
app = typer.Typer(
    help="hunkscope: group the hunks of a pull request by change intent",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

# attach commands
app.command(name="prs")(prs.main)
app.command(name="hunks")(hunks.main)
app.command(name="analyze")(analyze.main)
app.command(name="refine")(refine.main)
app.command(name="cache")(cache.main)
app.command(name="config")(config.main)

# commands that run without a global context
config_command = "config"


def setup_config_args(**kwargs):
    return {key: item for key, item in kwargs.items() if item is not None}


def load_global_context(
    config_args: dict, custom_config: str | None
) -> GlobalContext:
    custom_config_path = Path(custom_config) if custom_config else None

    global_config, used_configs, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        custom_config_path,
    )

    if used_defaults:
        logger.debug("Some configuration keys not set. Using default values.")
    logger.debug(f"Used {used_configs} to build global context.")

    return GlobalContext.from_global_config(global_config)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        help="Show log path (where logs for hunkscope live) and exit",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    repo: str | None = typer.Option(
        None,
        "--repo",
        "-R",
        help="GitHub repository to operate on (owner/repo).",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        help="Codex model to use (defaults to the codex configuration).",
    ),
    lang: str | None = typer.Option(
        None,
        "--lang",
        help="Language for group titles and summaries.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not output any log text to the console.",
    ),
) -> None:
    """
    Global setup callback. Initialize shared objects here.
    """
    # skip --help in subcommands
    if any(arg in ctx.help_option_names for arg in ctx.args):
        return

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # initial setup of logger, updated once the config is known
    setup_logger(ctx.invoked_subcommand, debug=verbose or False, silent=silent or False)

    if ctx.invoked_subcommand == config_command:
        return

    config_args = setup_config_args(
        repo=repo, model=model, lang=lang, verbose=verbose, silent=silent
    )

    try:
        global_context = load_global_context(config_args, custom_config)
    except HunkscopeError as e:
        logger.error(f"[red]Error:[/red] {e.message}")
        if e.details:
            logger.info(e.details)
        raise typer.Exit(1) from e

    setup_logger(
        ctx.invoked_subcommand,
        debug=global_context.config.verbose,
        silent=global_context.config.silent,
    )
    ctx.obj = global_context


def run_app():
    """Run the application with global exception handling."""
    try:
        # force stdout to be utf8 as it can be weird with typers console.print sometimes
        ensure_utf8_output()
        setup_signal_handlers()
        install(show_locals=False)
        load_dotenv()
        app(prog_name=APP_NAME)

    except HunkscopeError as e:
        logger.error(e)

    except KeyboardInterrupt:
        logger.info("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    run_app()
