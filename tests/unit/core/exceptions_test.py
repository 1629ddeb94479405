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


import pytest
import typer

from hunkscope.core.exceptions import (
    AIServiceError,
    ConfigurationError,
    DiffParseError,
    ExternalToolError,
    FileSystemError,
    HunkscopeError,
    ToolNotAuthenticatedError,
    ToolNotInstalledError,
    ValidationError,
    codex_not_authenticated,
    codex_not_installed,
    empty_diff,
    gh_not_authenticated,
    gh_not_installed,
    handle_hunkscope_exception,
    invalid_repo,
    no_hunks,
)


def test_base_exception():
    exc = HunkscopeError("message", "details")
    assert exc.message == "message"
    assert exc.details == "details"
    assert str(exc) == "message"


def test_exception_inheritance():
    assert issubclass(ValidationError, HunkscopeError)
    assert issubclass(ConfigurationError, HunkscopeError)
    assert issubclass(DiffParseError, HunkscopeError)
    assert issubclass(ExternalToolError, HunkscopeError)
    assert issubclass(ToolNotInstalledError, ExternalToolError)
    assert issubclass(ToolNotAuthenticatedError, ExternalToolError)
    assert issubclass(AIServiceError, HunkscopeError)
    assert issubclass(FileSystemError, HunkscopeError)


def test_gh_errors():
    assert isinstance(gh_not_installed(), ToolNotInstalledError)
    exc = gh_not_authenticated()
    assert isinstance(exc, ToolNotAuthenticatedError)
    assert "gh auth login" in exc.details


def test_codex_errors():
    assert isinstance(codex_not_installed(), ToolNotInstalledError)
    exc = codex_not_authenticated()
    assert isinstance(exc, ToolNotAuthenticatedError)
    assert "codex login" in exc.details


def test_invalid_repo():
    exc = invalid_repo("bad repo")
    assert isinstance(exc, ValidationError)
    assert "Invalid repo format: 'bad repo'" in exc.message


def test_empty_diff_and_no_hunks():
    assert isinstance(empty_diff(), ExternalToolError)
    assert isinstance(no_hunks(), ValidationError)


def test_handle_exception_exits_with_code_one():
    @handle_hunkscope_exception
    def command():
        raise ValidationError("bad input", "more")

    with pytest.raises(typer.Exit) as exc_info:
        command()
    assert exc_info.value.exit_code == 1


def test_handle_exception_passes_results_and_other_errors():
    @handle_hunkscope_exception
    def ok(value):
        return value * 2

    @handle_hunkscope_exception
    def broken():
        raise RuntimeError("boom")

    assert ok(4) == 8
    with pytest.raises(RuntimeError):
        broken()
