"""REGON (statistical business register number), 9 or 14 digits."""

from __future__ import annotations

import re
from typing import Final

_REGON_RE: Final = re.compile(r"[0-9]{9}|[0-9]{14}")
_WEIGHTS_9: Final = (8, 9, 2, 3, 4, 5, 6, 7)
_WEIGHTS_14: Final = (2, 4, 8, 5, 0, 9, 7, 3, 6, 1, 2, 4, 8)


def _checksum(digits: str, weights: tuple[int, ...]) -> int:
    remainder = sum(w * int(d) for w, d in zip(weights, digits)) % 11
    return 0 if remainder == 10 else remainder


class REGON:
    label = "REGON"

    @staticmethod
    def normalize(number: str) -> str | None:
        if not number:
            return None
        value = re.sub(r"[\s-]+", "", number)
        if not _REGON_RE.fullmatch(value):
            return None
        return value

    @staticmethod
    def is_valid(number: str) -> bool:
        value = REGON.normalize(number)
        if value is None:
            return False
        weights = _WEIGHTS_9 if len(value) == 9 else _WEIGHTS_14
        return _checksum(value, weights) == int(value[-1])
