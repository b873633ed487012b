"""Number scheme tags and the resolver interface."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Number(str, Enum):
    """Supported identifier schemes; the value is the URL path segment."""

    NIP = "nip"
    REGON = "regon"
    KRS = "krs"
    EUVAT = "euvat"


class NumberResolver(Protocol):
    """Validation and canonicalization for one numbering scheme."""

    label: str

    def normalize(self, number: str) -> str | None:
        """Return the canonical form, or ``None`` if the shape is wrong."""

        ...

    def is_valid(self, number: str) -> bool:
        """Return ``True`` if the number is well-formed and its checksum holds."""

        ...
