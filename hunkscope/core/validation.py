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


from hunkscope.core.exceptions import ValidationError, invalid_repo


def validate_repo(repo: str | None) -> str:
    """Check that `repo` is in "owner/repo" form and return it unchanged."""
    if repo is None:
        raise ValidationError(
            "No repository configured.",
            "Pass --repo owner/repo or run: hunkscope config repo owner/repo",
        )

    parts = repo.split("/")
    if (
        len(parts) != 2
        or not parts[0]
        or not parts[1]
        or any(any(c.isspace() for c in part) for part in parts)
    ):
        raise invalid_repo(repo)

    return repo


def validate_pr_number(number: int) -> int:
    if number <= 0:
        raise ValidationError(
            f"Invalid PR number: {number}", "PR numbers are positive integers"
        )
    return number
