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


import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from hunkscope.core.codex.codex_runner import (
    CodexOutput,
    CodexRunner,
    prepare_workdir,
    read_output,
)
from hunkscope.core.codex.prompts import (
    build_analysis_prompt,
    build_refine_prompt,
    build_split_prompt,
    lang_suffix,
    pr_context,
)
from hunkscope.core.codex.schemas import ANALYSIS_SCHEMA
from hunkscope.core.data.analysis import AnalysisResult
from hunkscope.core.exceptions import (
    AIServiceError,
    ExternalToolError,
    ToolNotAuthenticatedError,
    ToolNotInstalledError,
)

# -----------------------------------------------------------------------------
# Arguments and logs
# -----------------------------------------------------------------------------


def test_build_args_without_model():
    args = CodexRunner.build_args(
        Path("/w"), Path("/w/schema.json"), Path("/w/out.json"), None, "do it"
    )

    assert args == [
        "exec",
        "-C",
        "/w",
        "--skip-git-repo-check",
        "--full-auto",
        "--sandbox",
        "read-only",
        "--color",
        "never",
        "--output-schema",
        "/w/schema.json",
        "-o",
        "/w/out.json",
        "do it",
    ]


def test_build_args_with_model():
    args = CodexRunner.build_args(
        Path("/w"), Path("/w/s.json"), Path("/w/o.json"), " gpt-5 ", "prompt"
    )

    assert args[-3:] == ["-m", "gpt-5", "prompt"]


def test_blank_model_is_ignored():
    args = CodexRunner.build_args(
        Path("/w"), Path("/w/s.json"), Path("/w/o.json"), "  ", "prompt"
    )

    assert "-m" not in args


def test_build_log():
    output = CodexOutput(stdout="out", stderr="err", elapsed_secs=2.345, model_used="m1")

    assert CodexRunner.build_log("analysis", output) == (
        "[analysis] model=m1 elapsed=2.3s\nerr\nout\n"
    )
    quiet = CodexOutput(stdout="", stderr="", elapsed_secs=1.0, model_used="m1")
    assert CodexRunner.build_log("split", quiet) == "[split] model=m1 elapsed=1.0s\n"


# -----------------------------------------------------------------------------
# Running codex
# -----------------------------------------------------------------------------


@patch("hunkscope.core.codex.codex_runner.subprocess.run")
def test_run_success_reports_model(mock_run):
    mock_run.return_value = Mock(stdout="done", stderr="", returncode=0)

    output = CodexRunner("/bin/codex").run(["exec", "-m", "gpt-5", "p"])

    assert mock_run.call_args.args[0] == ["/bin/codex", "exec", "-m", "gpt-5", "p"]
    assert output.stdout == "done"
    assert output.model_used == "gpt-5"
    assert output.elapsed_secs >= 0


@patch("hunkscope.core.codex.codex_runner.subprocess.run")
def test_run_default_model_label(mock_run):
    mock_run.return_value = Mock(stdout="", stderr="", returncode=0)

    assert CodexRunner().run(["exec", "p"]).model_used == "(config default)"


@patch("hunkscope.core.codex.codex_runner.subprocess.run")
def test_run_missing_binary(mock_run):
    mock_run.side_effect = FileNotFoundError()

    with pytest.raises(ToolNotInstalledError):
        CodexRunner().run(["exec", "p"])


@patch("hunkscope.core.codex.codex_runner.subprocess.run")
def test_run_not_logged_in(mock_run):
    mock_run.return_value = Mock(
        stdout="", stderr="Error: not logged in, run codex login", returncode=1
    )

    with pytest.raises(ToolNotAuthenticatedError):
        CodexRunner().run(["exec", "p"])


@patch("hunkscope.core.codex.codex_runner.subprocess.run")
def test_run_other_failure(mock_run):
    mock_run.return_value = Mock(stdout="", stderr="model overloaded", returncode=1)

    with pytest.raises(ExternalToolError, match="Codex exec failed: model overloaded"):
        CodexRunner().run(["exec", "p"])


# -----------------------------------------------------------------------------
# Work directory and output
# -----------------------------------------------------------------------------


def test_prepare_workdir_writes_inputs_and_cleans_up():
    with prepare_workdir('[{"id": "H1"}]', ANALYSIS_SCHEMA, "analysis.json") as workdir:
        assert json.loads((workdir.path / "hunks.json").read_text()) == [{"id": "H1"}]
        assert json.loads(workdir.schema_path.read_text()) == ANALYSIS_SCHEMA
        assert workdir.output_path == workdir.path / "analysis.json"
        assert not workdir.output_path.exists()
        path = workdir.path

    assert not path.exists()


def test_prepare_workdir_custom_input_name():
    with prepare_workdir("[]", {}, "out.json", input_filename="large_hunks.json") as workdir:
        assert (workdir.path / "large_hunks.json").exists()


def test_read_output_missing_file(tmp_path):
    with pytest.raises(AIServiceError, match="Codex may not have produced output"):
        read_output(tmp_path / "analysis.json", AnalysisResult)


def test_read_output_invalid_json(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text('{"groups": "nope"}')

    with pytest.raises(AIServiceError, match="Failed to parse analysis.json"):
        read_output(path, AnalysisResult)


def test_read_output_valid(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text('{"overallSummary": "ok", "groups": []}')

    assert read_output(path, AnalysisResult).overall_summary == "ok"


# -----------------------------------------------------------------------------
# Prompts
# -----------------------------------------------------------------------------


def test_lang_suffix():
    assert lang_suffix(None) == ""
    assert lang_suffix("  ") == ""
    assert lang_suffix(" Japanese ") == " Respond in Japanese."


def test_pr_context_truncates_body():
    assert pr_context(None) == ""
    assert pr_context("   ") == ""
    context = pr_context("x" * 5000)
    assert context.count("x") == 2000


def test_prompt_builders():
    analysis = build_analysis_prompt(12, "Fixes the login bug", "French")
    assert "contains 12 hunks" in analysis
    assert 'The PR description is: "Fixes the login bug".' in analysis
    assert analysis.endswith("Respond in French.")

    refine = build_refine_prompt("g3", "Auth changes")
    assert '"Auth changes"' in refine
    assert '"g3.1", "g3.2"' in refine

    assert "large_hunks.json" in build_split_prompt()
