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


from unittest.mock import patch

import pytest
from pydantic import ValidationError

from hunkscope.context import GlobalConfig, GlobalContext

# -----------------------------------------------------------------------------
# GlobalConfig Tests
# -----------------------------------------------------------------------------


def test_global_config_defaults():
    config = GlobalConfig()
    assert config.repo is None
    assert config.model is None
    assert config.lang is None
    assert config.pr_limit == 30
    assert config.pr_state == "open"
    assert config.split_threshold == 100
    assert config.split_large_hunks is True
    assert config.use_cache is True
    assert config.codex_bin == "codex"
    assert config.gh_bin == "gh"
    assert config.verbose is False
    assert config.silent is False


def test_global_config_rejects_unknown_state():
    with pytest.raises(ValidationError):
        GlobalConfig(pr_state="draft")


def test_global_config_coerces_strings():
    """Values from env vars arrive as strings."""
    config = GlobalConfig(pr_limit="50", use_cache="false")
    assert config.pr_limit == 50
    assert config.use_cache is False


# -----------------------------------------------------------------------------
# GlobalContext Tests
# -----------------------------------------------------------------------------


def test_global_context_wires_cache(tmp_path):
    with patch("hunkscope.context.DATA_DIR", tmp_path):
        context = GlobalContext.from_global_config(
            GlobalConfig(gh_bin="/opt/gh", codex_bin="/opt/codex")
        )

    assert context.cache.root == tmp_path
    assert context.gh.gh_bin == "/opt/gh"
    assert context.gh.cache is context.cache
    assert context.runner.codex_bin == "/opt/codex"
    assert context.service.runner is context.runner
    assert context.service.cache is context.cache


def test_global_context_without_cache(tmp_path):
    with patch("hunkscope.context.DATA_DIR", tmp_path):
        context = GlobalContext.from_global_config(GlobalConfig(use_cache=False))

    assert context.gh.cache is None
    assert context.service.cache is None
    # still available for the cache command
    assert context.cache.root == tmp_path
