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


from hunkscope.core.data.base import CamelModel


class SubHunkRange(CamelModel):
    """A proposed slice of a hunk's lines; end_line_index is exclusive."""

    id: str
    title: str = ""
    start_line_index: int
    end_line_index: int


class SplitEntry(CamelModel):
    original_hunk_id: str
    sub_hunks: list[SubHunkRange] = []


class SplitProposal(CamelModel):
    splits: list[SplitEntry] = []
