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


from enum import Enum

from pydantic import model_validator

from hunkscope.core.data.base import CamelModel


class LineKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    CONTEXT = "context"


class DiffLine(CamelModel):
    kind: LineKind
    # present for remove and context lines only
    old_line_number: int | None = None
    # present for add and context lines only
    new_line_number: int | None = None
    text: str = ""

    @model_validator(mode="after")
    def _check_line_numbers(self) -> "DiffLine":
        carries_old = self.kind is not LineKind.ADD
        carries_new = self.kind is not LineKind.REMOVE

        if carries_old != (self.old_line_number is not None):
            raise ValueError(
                f"{self.kind.value} line must {'' if carries_old else 'not '}carry an old line number"
            )
        if carries_new != (self.new_line_number is not None):
            raise ValueError(
                f"{self.kind.value} line must {'' if carries_new else 'not '}carry a new line number"
            )
        return self

    @staticmethod
    def add(new_line_number: int, text: str) -> "DiffLine":
        return DiffLine(kind=LineKind.ADD, new_line_number=new_line_number, text=text)

    @staticmethod
    def remove(old_line_number: int, text: str) -> "DiffLine":
        return DiffLine(
            kind=LineKind.REMOVE, old_line_number=old_line_number, text=text
        )

    @staticmethod
    def context(old_line_number: int, new_line_number: int, text: str) -> "DiffLine":
        return DiffLine(
            kind=LineKind.CONTEXT,
            old_line_number=old_line_number,
            new_line_number=new_line_number,
            text=text,
        )
