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


import os
import subprocess

from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hunkscope.constants import PR_LIST_FIELDS, TOOL_ENV
from hunkscope.core.cache.json_cache import DIFF_CACHE, JsonCache
from hunkscope.core.data.pr import PrListItem
from hunkscope.core.exceptions import (
    ExternalToolError,
    empty_diff,
    gh_not_authenticated,
    gh_not_installed,
)
from hunkscope.core.validation import validate_pr_number, validate_repo

AUTH_HINTS = ("auth login", "not logged")

_PR_LIST = TypeAdapter(list[PrListItem])


class GhClient:
    """Thin wrapper over the GitHub CLI for the two calls hunkscope needs."""

    def __init__(self, gh_bin: str = "gh", cache: JsonCache | None = None) -> None:
        self.gh_bin = gh_bin
        self.cache = cache

    def _run(self, args: list[str]) -> str:
        cmd = [self.gh_bin] + args
        logger.debug(f"Running gh command: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                env={**os.environ, **TOOL_ENV},
            )
        except FileNotFoundError as e:
            raise gh_not_installed() from e
        except OSError as e:
            raise ExternalToolError(f"Failed to execute gh: {e}") from e

        logger.debug(f"gh returncode: {result.returncode}")
        if result.returncode != 0:
            stderr = result.stderr or ""
            if any(hint in stderr for hint in AUTH_HINTS):
                raise gh_not_authenticated()
            raise ExternalToolError(f"gh {' '.join(args[:2])} failed: {stderr.strip()}")

        return result.stdout

    def list_prs(
        self, repo: str, limit: int, state: str, search: str | None = None
    ) -> list[PrListItem]:
        validate_repo(repo)

        args = [
            "pr",
            "list",
            "-R",
            repo,
            "--state",
            state,
            "--limit",
            str(limit),
            "--json",
            PR_LIST_FIELDS,
        ]
        if search and search.strip():
            args += ["--search", search]

        stdout = self._run(args)
        try:
            return _PR_LIST.validate_json(stdout)
        except PydanticValidationError as e:
            raise ExternalToolError("Failed to parse gh output", str(e)) from e

    def get_pr(self, repo: str, number: int) -> PrListItem:
        validate_repo(repo)
        validate_pr_number(number)

        stdout = self._run(
            ["pr", "view", str(number), "-R", repo, "--json", PR_LIST_FIELDS]
        )
        try:
            return PrListItem.model_validate_json(stdout)
        except PydanticValidationError as e:
            raise ExternalToolError("Failed to parse gh output", str(e)) from e

    def get_pr_diff(self, repo: str, number: int, force: bool = False) -> str:
        """Fetch the PR diff; force skips the cached copy but still refreshes it."""
        validate_repo(repo)
        validate_pr_number(number)

        cache_key = f"{repo.replace('/', '__')}__{number}"
        if self.cache is not None and not force:
            cached = self.cache.read(DIFF_CACHE, cache_key)
            if isinstance(cached, str):
                return cached

        diff = self._run(
            ["pr", "diff", "-R", repo, str(number), "--patch", "--color", "never"]
        )
        if not diff.strip():
            raise empty_diff()

        if self.cache is not None:
            self.cache.write(DIFF_CACHE, cache_key, diff)

        return diff
