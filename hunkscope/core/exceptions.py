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


"""
Custom exception hierarchy for the hunkscope CLI application.

Errors raised here belong to the boundary of the tool: talking to gh and
codex, reading configuration, and loading files. The diff parser, the
reconciliation engine and the hunk splitter never raise for imperfect
content; they repair it and report warnings instead.
"""

import functools
from collections.abc import Callable

import typer
from loguru import logger


class HunkscopeError(Exception):
    """
    Base exception for all hunkscope-related errors.

    All hunkscope-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a HunkscopeError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(HunkscopeError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as a malformed repository name or PR number.
    """

    pass


class ConfigurationError(HunkscopeError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class DiffParseError(HunkscopeError):
    """
    Raised when the diff parser cannot run at all.

    Malformed diff content never triggers this; only an environment
    fault such as the hunk header pattern failing to compile does.
    """

    pass


class ExternalToolError(HunkscopeError):
    """
    Errors related to running gh or codex.

    Raised when a subprocess exits with a failure status or
    its output cannot be understood.
    """

    pass


class ToolNotInstalledError(ExternalToolError):
    """Raised when a required command-line tool is not on PATH."""

    pass


class ToolNotAuthenticatedError(ExternalToolError):
    """Raised when a tool reports that the user is not logged in."""

    pass


class AIServiceError(HunkscopeError):
    """
    AI agent related errors.

    Raised when the agent produced no output file or
    an output that does not match the expected schema.
    """

    pass


class FileSystemError(HunkscopeError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as permission issues or missing files.
    """

    pass


# Convenience functions for creating common errors
def gh_not_installed() -> ToolNotInstalledError:
    """Create an error for when the GitHub CLI is not available."""
    return ToolNotInstalledError(
        "GitHub CLI (gh) is not installed.",
        "Please install it: https://cli.github.com/",
    )


def gh_not_authenticated() -> ToolNotAuthenticatedError:
    """Create an error for when the GitHub CLI is not logged in."""
    return ToolNotAuthenticatedError(
        "GitHub CLI is not authenticated.",
        "Please run: gh auth login",
    )


def codex_not_installed() -> ToolNotInstalledError:
    """Create an error for when the Codex CLI is not available."""
    return ToolNotInstalledError(
        "Codex CLI is not installed.",
        "Please install it: https://github.com/openai/codex",
    )


def codex_not_authenticated() -> ToolNotAuthenticatedError:
    """Create an error for when the Codex CLI is not logged in."""
    return ToolNotAuthenticatedError(
        "Codex CLI is not authenticated.",
        "Please run: codex login",
    )


def invalid_repo(repo: str) -> ValidationError:
    """Create a ValidationError for a malformed repository name."""
    return ValidationError(
        f"Invalid repo format: '{repo}'. Expected 'owner/repo'.",
        "Repository names are two non-empty parts separated by '/' with no whitespace",
    )


def empty_diff() -> ExternalToolError:
    return ExternalToolError("Diff is empty. The PR may have no changes.")


def no_hunks() -> ValidationError:
    return ValidationError("No hunks to analyze.")


def handle_hunkscope_exception(func: Callable) -> Callable:
    """
    Decorator for typer commands that turns a HunkscopeError into
    a logged message and a non-zero exit code.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HunkscopeError as e:
            logger.error(f"[red]Error:[/red] {e.message}")
            if e.details:
                logger.info(e.details)
            raise typer.Exit(1) from e

    return wrapper
