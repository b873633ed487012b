"""Klient usługi NIP24: dane firm po numerze NIP, REGON, KRS lub EU VAT."""

from .client import NIP24Client, build_update_body
from .config import DEFAULT_URL, Settings, load_settings
from .errors import (
    InvalidIdentifierError,
    InvalidRequestError,
    MalformedResponseError,
    Nip24Error,
    ServiceError,
    SigningError,
    TransportError,
    UnsupportedSchemeError,
)
from .numbers import EUVAT, KRS, NIP, REGON, Number
from .records import PKD, AllData, InvoiceData, VIESData
from .transport import VERSION as __version__
from .utils.logging_setup import setup_logger

__all__ = [
    "DEFAULT_URL",
    "EUVAT",
    "KRS",
    "NIP",
    "PKD",
    "REGON",
    "AllData",
    "InvalidIdentifierError",
    "InvalidRequestError",
    "InvoiceData",
    "MalformedResponseError",
    "NIP24Client",
    "Nip24Error",
    "Number",
    "ServiceError",
    "Settings",
    "SigningError",
    "TransportError",
    "UnsupportedSchemeError",
    "VIESData",
    "__version__",
    "build_update_body",
    "load_settings",
    "setup_logger",
]
