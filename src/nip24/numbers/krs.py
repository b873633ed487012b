"""KRS (National Court Register number)."""

from __future__ import annotations

import re
from typing import Final

_KRS_RE: Final = re.compile(r"[0-9]{1,10}")


class KRS:
    label = "KRS"

    @staticmethod
    def normalize(number: str) -> str | None:
        if not number:
            return None
        value = re.sub(r"[\s-]+", "", number)
        if not _KRS_RE.fullmatch(value):
            return None
        return value.zfill(10)

    @staticmethod
    def is_valid(number: str) -> bool:
        value = KRS.normalize(number)
        return value is not None and int(value) > 0
