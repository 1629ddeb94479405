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


from collections.abc import Sequence

from pydantic import TypeAdapter

from hunkscope.core.data.base import CamelModel
from hunkscope.core.data.diff_line import DiffLine, LineKind


class Hunk(CamelModel):
    id: str
    # post-change path; the pre-change path for deleted files
    file_path: str
    header: str
    old_start: int
    old_line_count: int
    new_start: int
    new_line_count: int
    lines: list[DiffLine] = []

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.ADD)

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.REMOVE)


class ParsedDiff(CamelModel):
    hunks: list[Hunk] = []
    raw: str = ""


_HUNK_LIST = TypeAdapter(list[Hunk])


def dump_hunks(hunks: Sequence[Hunk]) -> str:
    """Serialize hunks to the camelCase JSON array handed to the agent."""
    return _HUNK_LIST.dump_json(list(hunks), by_alias=True).decode("utf-8")
