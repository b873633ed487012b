"""EU VAT identification number with a two-letter country prefix."""

from __future__ import annotations

import re
from typing import Final

from .nip import NIP

_EUVAT_RE: Final = re.compile(r"[A-Z]{2}[0-9A-Z]{2,12}")

# Country prefix -> pattern of the national part (VIES formats).
_COUNTRY_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    country: re.compile(pattern)
    for country, pattern in {
        "AT": r"U[0-9]{8}",
        "BE": r"[01][0-9]{9}",
        "BG": r"[0-9]{9,10}",
        "CY": r"[0-9]{8}[A-Z]",
        "CZ": r"[0-9]{8,10}",
        "DE": r"[0-9]{9}",
        "DK": r"[0-9]{8}",
        "EE": r"[0-9]{9}",
        "EL": r"[0-9]{9}",
        "ES": r"[0-9A-Z][0-9]{7}[0-9A-Z]",
        "FI": r"[0-9]{8}",
        "FR": r"[0-9A-Z]{2}[0-9]{9}",
        "HR": r"[0-9]{11}",
        "HU": r"[0-9]{8}",
        "IE": r"[0-9][0-9A-Z][0-9]{5}[A-Z]{1,2}",
        "IT": r"[0-9]{11}",
        "LT": r"[0-9]{9}|[0-9]{12}",
        "LU": r"[0-9]{8}",
        "LV": r"[0-9]{11}",
        "MT": r"[0-9]{8}",
        "NL": r"[0-9]{9}B[0-9]{2}",
        "PL": r"[0-9]{10}",
        "PT": r"[0-9]{9}",
        "RO": r"[0-9]{2,10}",
        "SE": r"[0-9]{12}",
        "SI": r"[0-9]{8}",
        "SK": r"[0-9]{10}",
        "XI": r"[0-9]{9}|[0-9]{12}|GD[0-9]{3}|HA[0-9]{3}",
    }.items()
}


class EUVAT:
    label = "EU VAT ID"

    @staticmethod
    def normalize(number: str) -> str | None:
        if not number:
            return None
        value = re.sub(r"[\s.-]+", "", number).upper()
        if not _EUVAT_RE.fullmatch(value):
            return None
        return value

    @staticmethod
    def is_valid(number: str) -> bool:
        value = EUVAT.normalize(number)
        if value is None:
            return False

        country, national = value[:2], value[2:]
        pattern = _COUNTRY_PATTERNS.get(country)
        if pattern is None or not pattern.fullmatch(national):
            return False

        if country == "PL":
            return NIP.is_valid(national)
        return True
