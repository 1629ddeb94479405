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

from hunkscope.core.exceptions import ValidationError
from hunkscope.core.validation import validate_pr_number, validate_repo


@pytest.mark.parametrize("repo", ["octo/hello", "my-org/my.repo", "a/b"])
def test_valid_repos(repo):
    assert validate_repo(repo) == repo


@pytest.mark.parametrize(
    "repo", ["", "hello", "/hello", "octo/", "octo/hello/extra", "octo /hello", "octo/hel lo"]
)
def test_invalid_repos(repo):
    with pytest.raises(ValidationError, match="Invalid repo format"):
        validate_repo(repo)


def test_missing_repo():
    with pytest.raises(ValidationError, match="No repository configured"):
        validate_repo(None)


def test_pr_number():
    assert validate_pr_number(42) == 42
    with pytest.raises(ValidationError):
        validate_pr_number(0)
    with pytest.raises(ValidationError):
        validate_pr_number(-3)
