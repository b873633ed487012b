"""Identifier resolvers for the numbering schemes understood by NIP24."""

from __future__ import annotations

from ..errors import InvalidIdentifierError, UnsupportedSchemeError
from .base import Number, NumberResolver
from .euvat import EUVAT
from .krs import KRS
from .nip import NIP
from .regon import REGON

RESOLVERS: dict[Number, NumberResolver] = {
    Number.NIP: NIP(),
    Number.REGON: REGON(),
    Number.KRS: KRS(),
    Number.EUVAT: EUVAT(),
}


def coerce_number_type(number_type: Number | str) -> Number:
    """Return the ``Number`` tag for ``number_type`` or raise ``UnsupportedSchemeError``."""

    if isinstance(number_type, Number):
        return number_type
    try:
        return Number(str(number_type).strip().lower())
    except ValueError:
        raise UnsupportedSchemeError(number_type) from None


def resolver_for(number_type: Number | str) -> NumberResolver:
    return RESOLVERS[coerce_number_type(number_type)]


def path_suffix(number_type: Number | str, number: str) -> str:
    """Validate ``number`` and return ``<scheme>/<canonical>`` for request URLs."""

    tag = coerce_number_type(number_type)
    resolver = RESOLVERS[tag]
    if not resolver.is_valid(number):
        raise InvalidIdentifierError(resolver.label, number)
    return f"{tag.value}/{resolver.normalize(number)}"


__all__ = [
    "EUVAT",
    "KRS",
    "NIP",
    "REGON",
    "RESOLVERS",
    "Number",
    "NumberResolver",
    "coerce_number_type",
    "path_suffix",
    "resolver_for",
]
