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


import contextlib
import json
import os
import subprocess
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from hunkscope.constants import TOOL_ENV
from hunkscope.core.exceptions import (
    AIServiceError,
    ExternalToolError,
    FileSystemError,
    codex_not_authenticated,
    codex_not_installed,
)

AUTH_HINTS = ("login", "auth", "API key")
DEFAULT_MODEL_LABEL = "(config default)"

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CodexOutput:
    stdout: str
    stderr: str
    elapsed_secs: float
    model_used: str


@dataclass(frozen=True)
class Workdir:
    path: Path
    schema_path: Path
    output_path: Path


@contextlib.contextmanager
def prepare_workdir(
    input_json: str,
    schema: dict,
    output_filename: str,
    input_filename: str = "hunks.json",
) -> Iterator[Workdir]:
    """
    Create a throwaway directory holding the agent's input file and output
    schema. The directory and everything the agent wrote into it are removed
    when the block exits.
    """
    with tempfile.TemporaryDirectory(prefix="hunkscope-") as tmp:
        path = Path(tmp)
        schema_path = path / "schema.json"
        try:
            (path / input_filename).write_text(input_json, encoding="utf-8")
            schema_path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to write {input_filename}", str(e)) from e

        logger.debug(f"Prepared codex workdir {path}")
        yield Workdir(path, schema_path, path / output_filename)


def read_output(output_path: Path, model: type[ModelT]) -> ModelT:
    """Load the file codex wrote with -o, validated against `model`."""
    try:
        data = output_path.read_text(encoding="utf-8")
    except OSError as e:
        raise AIServiceError(
            f"Failed to read {output_path.name}: {e}. Codex may not have produced output."
        ) from e

    try:
        return model.model_validate_json(data)
    except PydanticValidationError as e:
        raise AIServiceError(f"Failed to parse {output_path.name}", str(e)) from e


class CodexRunner:
    """Runs `codex exec` non-interactively in a read-only sandbox."""

    def __init__(self, codex_bin: str = "codex") -> None:
        self.codex_bin = codex_bin

    @staticmethod
    def build_args(
        workdir: Path,
        schema_path: Path,
        output_path: Path,
        model: str | None,
        prompt: str,
    ) -> list[str]:
        args = [
            "exec",
            "-C",
            str(workdir),
            "--skip-git-repo-check",
            "--full-auto",
            "--sandbox",
            "read-only",
            "--color",
            "never",
            "--output-schema",
            str(schema_path),
            "-o",
            str(output_path),
        ]

        if model and model.strip():
            args += ["-m", model.strip()]

        args.append(prompt)
        return args

    def run(self, args: list[str]) -> CodexOutput:
        model_used = next(
            (args[i + 1] for i in range(len(args) - 1) if args[i] == "-m"),
            DEFAULT_MODEL_LABEL,
        )

        logger.debug(f"Running codex exec model={model_used}")
        start = perf_counter()
        try:
            result = subprocess.run(
                [self.codex_bin] + args,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                env={**os.environ, **TOOL_ENV},
            )
        except FileNotFoundError as e:
            raise codex_not_installed() from e
        except OSError as e:
            raise ExternalToolError(f"Failed to execute codex: {e}") from e
        elapsed = perf_counter() - start

        stdout = result.stdout or ""
        stderr = result.stderr or ""
        logger.debug(f"codex returncode: {result.returncode} elapsed={elapsed:.1f}s")

        if result.returncode != 0:
            if any(hint in stderr for hint in AUTH_HINTS):
                raise codex_not_authenticated()
            raise ExternalToolError(f"Codex exec failed: {stderr.strip()}")

        return CodexOutput(stdout, stderr, elapsed, model_used)

    @staticmethod
    def build_log(label: str, output: CodexOutput) -> str:
        log = f"[{label}] model={output.model_used} elapsed={output.elapsed_secs:.1f}s\n"
        if output.stderr:
            log += output.stderr + "\n"
        if output.stdout:
            log += output.stdout + "\n"
        return log
