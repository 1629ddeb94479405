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
from enum import Enum

import typer
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from hunkscope.commands._common import help_option
from hunkscope.constants import ENV_APP_PREFIX, GLOBAL_CONFIG_FILE, LOCAL_CONFIG_FILE
from hunkscope.context import GlobalConfig
from hunkscope.core.config.config_loader import ConfigLoader
from hunkscope.core.exceptions import ConfigurationError, handle_hunkscope_exception

console = Console()


class ConfigScope(str, Enum):
    LOCAL = "local"
    GLOBAL = "global"
    ENV = "env"


def _get_config_schema() -> dict:
    """Available config options, their descriptions and defaults."""
    return {
        name: {
            "description": info.description or "No description available",
            "default": info.default,
        }
        for name, info in GlobalConfig.model_fields.items()
    }


def _truncate_text(text: str, max_length: int = 50) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _check_key_exists(key: str) -> None:
    """Show the available options and exit if `key` is not one of them."""
    schema = _get_config_schema()

    if key not in schema:
        console.print(f"[red]Error:[/red] Unknown configuration key '{key}'\n")
        console.print("[bold]Available configuration options:[/bold]\n")

        table = Table(show_header=True, header_style="bold cyan", show_lines=True)
        table.add_column("Key", style="cyan")
        table.add_column("Description", style="yellow")
        table.add_column("Default", style="green")

        for config_key, info in sorted(schema.items()):
            table.add_row(
                config_key,
                _truncate_text(info["description"], 60),
                str(info["default"]),
            )

        console.print(table)
        raise typer.Exit(1)


def _coerce_value(key: str, value: str):
    """Convert the raw string to the type the config field expects."""
    annotation = GlobalConfig.model_fields[key].annotation
    try:
        return TypeAdapter(annotation).validate_python(value)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid value for {key}: '{value}'", str(e)) from e


def _format_toml_value(value) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _config_path(scope: str) -> Path:
    return GLOBAL_CONFIG_FILE if scope == "global" else LOCAL_CONFIG_FILE


def _set_config(key: str, value: str, scope: str) -> None:
    _check_key_exists(key)
    typed_value = _coerce_value(key, value)

    if scope == "env":
        env_var = f"{ENV_APP_PREFIX}{key.upper()}"
        console.print("[green]To set this as an environment variable:[/green]")
        console.print(f"  Windows (PowerShell): $env:{env_var}='{value}'")
        console.print(f"  Windows (CMD): set {env_var}={value}")
        console.print(f"  Linux/macOS: export {env_var}='{value}'")
        return

    config_path = _config_path(scope)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_data = ConfigLoader.load_toml(config_path)
    config_data[key] = typed_value

    with open(config_path, "w", encoding="utf-8") as f:
        for k, v in config_data.items():
            f.write(f"{k} = {_format_toml_value(v)}\n")

    console.print(f"[green]Set {key} = {typed_value} ({scope})[/green]")
    console.print(f"Config file: {config_path.absolute()}")


def _collect_sources(scope: str | None) -> list[tuple[str, str, dict]]:
    """(name, location, values) for each scope that has values, highest priority first."""
    sources = []

    if scope in (None, "local") and LOCAL_CONFIG_FILE.exists():
        sources.append(
            ("Local", str(LOCAL_CONFIG_FILE), ConfigLoader.load_toml(LOCAL_CONFIG_FILE))
        )

    if scope in (None, "env"):
        env_config = ConfigLoader.load_env(ENV_APP_PREFIX)
        if env_config:
            sources.append(("Environment", "Environment Variables", env_config))

    if scope in (None, "global") and GLOBAL_CONFIG_FILE.exists():
        sources.append(
            ("Global", str(GLOBAL_CONFIG_FILE), ConfigLoader.load_toml(GLOBAL_CONFIG_FILE))
        )

    return sources


def _get_config(key: str | None, scope: str | None) -> None:
    sources = _collect_sources(scope)

    if key:
        _check_key_exists(key)

        table = Table(title=f"Configuration: {key}", show_lines=True)
        table.add_column("Source", style="cyan")
        table.add_column("Value", style="green")
        table.add_column("Location", style="dim")

        matches = [(n, loc, data[key]) for n, loc, data in sources if key in data]
        if not matches:
            console.print(f"[yellow]Key '{key}' not set in scope:{scope or 'all'}[/yellow]")
            return

        for name, location, value in matches:
            table.add_row(name, _truncate_text(str(value), 50), location)
        console.print(table)

        if len(matches) > 1:
            name, _, value = matches[0]
            console.print(f"\n[bold]Active value:[/bold] {value} (from {name})")
        return

    schema = _get_config_schema()
    table = Table(title="Configuration Options", show_lines=True)
    table.add_column("Key", style="cyan")
    table.add_column("Description", style="yellow")
    table.add_column("Value/Default", style="green")
    table.add_column("Source", style="magenta")

    for k in sorted(schema):
        description = _truncate_text(schema[k]["description"], 60)
        active = next(((n, data[k]) for n, _, data in sources if k in data), None)
        if active is not None:
            name, value = active
            table.add_row(k, description, _truncate_text(str(value), 40), name)
        else:
            default = schema[k]["default"]
            default_str = "[dim]No-Default[/dim]" if default is None else str(default)
            table.add_row(k, description, default_str, "[dim](not set)[/dim]")

    console.print(table)


@handle_hunkscope_exception
def main(
    ctx: typer.Context,
    help: bool = help_option(),
    key: str | None = typer.Argument(None, help="Configuration key to get or set."),
    value: str | None = typer.Argument(
        None, help="Value to set (omit to get current value)."
    ),
    scope: ConfigScope | None = typer.Option(
        None,
        "--scope",
        help="Select which scope to read or modify, sets default to local",
    ),
) -> None:
    """
    Manage global and local hunkscope configurations.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:

        # Show all configuration

        hunkscope config

        # Set the repository for this directory

        hunkscope config repo octo/hello

        # Set a global model

        hunkscope config model gpt-5-codex --scope global
    """
    if value is not None:
        if key is None:
            console.print("[red]Error:[/red] Key is required when setting a value")
            raise typer.Exit(1)
        _set_config(key, value, scope.value if scope else "local")
    else:
        _get_config(key, scope.value if scope else None)
