"""MAC request signing for the NIP24 API.

The service authenticates every request with an ``Authorization: MAC`` header.
The MAC is an HMAC-SHA256 over a newline separated canonical string::

    <ts>\\n<nonce>\\n<METHOD>\\n<path>\\n<host>\\n<port>\\n\\n

The final empty line is reserved for a body digest that this protocol version
does not use.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import threading
import time
from typing import Final
from urllib.parse import urlsplit

from .errors import SigningError
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("auth")

NONCE_BYTES: Final = 4
_DEFAULT_PORTS: Final = {"https": 443, "http": 80}

# key id -> {timestamp: nonces issued in that second}
_issued: dict[str, dict[int, set[str]]] = {}
_issued_lock = threading.Lock()


def _split_url(url: str) -> tuple[str, int, str]:
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise SigningError(f"Nieprawidłowy adres URL: {url}") from exc

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise SigningError(f"Nieprawidłowy adres URL: {url}")

    return parts.hostname, port or _DEFAULT_PORTS[scheme], parts.path or "/"


def canonical_string(
    method: str,
    url: str,
    *,
    timestamp: int,
    nonce: str,
) -> str:
    """Build the string the MAC is computed over."""

    host, port, path = _split_url(url)
    lines = (str(timestamp), nonce, method.upper(), path, host, str(port), "")
    return "".join(f"{line}\n" for line in lines)


def compute_mac(canonical: str, secret: str) -> str:
    """Return the base64 encoded HMAC-SHA256 of ``canonical``."""

    try:
        digest = hmac.new(
            secret.encode("utf-8"),
            canonical.encode("utf-8"),
            hashlib.sha256,
        ).digest()
    except ValueError as exc:
        raise SigningError(f"HMAC-SHA256 niedostępny: {exc}") from exc
    return base64.b64encode(digest).decode("ascii")


def _reserve_nonce(key_id: str, timestamp: int) -> str:
    """Draw a nonce not yet issued for ``key_id`` in this second."""

    with _issued_lock:
        per_key = _issued.setdefault(key_id, {})
        for stale in [ts for ts in per_key if ts < timestamp - 1]:
            del per_key[stale]

        used = per_key.setdefault(timestamp, set())
        nonce = secrets.token_hex(NONCE_BYTES)
        while nonce in used:
            LOGGER.debug("Powtórzony nonce dla ts=%s, losuję ponownie", timestamp)
            nonce = secrets.token_hex(NONCE_BYTES)
        used.add(nonce)
        return nonce


def sign(
    method: str,
    url: str,
    key_id: str,
    secret: str,
    *,
    timestamp: int | None = None,
    nonce: str | None = None,
) -> str:
    """Return the ``Authorization`` header value for a request.

    ``timestamp`` and ``nonce`` are generated per call unless given; passing them
    explicitly is meant for reproducible signatures only.
    """

    ts = int(time.time()) if timestamp is None else int(timestamp)
    if nonce is None:
        nonce = _reserve_nonce(key_id, ts)

    mac = compute_mac(canonical_string(method, url, timestamp=ts, nonce=nonce), secret)
    return f'MAC id="{key_id}", ts="{ts}", nonce="{nonce}", mac="{mac}"'
