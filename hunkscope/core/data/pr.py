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


class PrAuthor(CamelModel):
    login: str


class PrListItem(CamelModel):
    number: int
    title: str
    url: str
    updated_at: str = ""
    author: PrAuthor | None = None
    head_ref_name: str | None = None
    base_ref_name: str | None = None
    review_decision: str | None = None
    body: str | None = None
