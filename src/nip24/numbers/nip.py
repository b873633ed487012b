"""NIP (Polish tax identification number)."""

from __future__ import annotations

import re
from typing import Final

_NIP_RE: Final = re.compile(r"[0-9]{10}")
_WEIGHTS: Final = (6, 5, 7, 2, 3, 4, 5, 6, 7)


class NIP:
    label = "NIP"

    @staticmethod
    def normalize(number: str) -> str | None:
        if not number:
            return None
        value = re.sub(r"[\s-]+", "", number)
        if not _NIP_RE.fullmatch(value):
            return None
        return value

    @staticmethod
    def is_valid(number: str) -> bool:
        value = NIP.normalize(number)
        if value is None:
            return False
        checksum = sum(w * int(d) for w, d in zip(_WEIGHTS, value)) % 11
        return checksum == int(value[9])
