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


from hunkscope.core.data.analysis import (
    AnalysisResponse,
    AnalysisResult,
    IntentGroup,
    RefineResponse,
    RefineResult,
    SavedAnalysis,
    SplitResponse,
)
from hunkscope.core.data.diff_line import DiffLine, LineKind
from hunkscope.core.data.hunk import Hunk, ParsedDiff, dump_hunks
from hunkscope.core.data.pr import PrAuthor, PrListItem
from hunkscope.core.data.split import SplitEntry, SplitProposal, SubHunkRange

__all__ = [
    "AnalysisResponse",
    "AnalysisResult",
    "DiffLine",
    "Hunk",
    "IntentGroup",
    "LineKind",
    "ParsedDiff",
    "PrAuthor",
    "PrListItem",
    "RefineResponse",
    "RefineResult",
    "SavedAnalysis",
    "SplitEntry",
    "SplitProposal",
    "SplitResponse",
    "SubHunkRange",
    "dump_hunks",
]
