"""HTTP transport for signed NIP24 requests."""

from __future__ import annotations

import platform
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

import requests

from . import auth
from .errors import TransportError
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("transport")

VERSION: Final = "0.1.0"
CLIENT_NAME: Final = "NIP24Client"
DEFAULT_TIMEOUT: Final = (5.0, 30.0)


@dataclass(frozen=True)
class Credentials:
    key_id: str
    key: str = field(repr=False)


@dataclass(frozen=True)
class SignedRequest:
    """One-shot request description; never reuse, the nonce is single use."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None = None


def normalize_timeout(timeout: Sequence[float] | float | None) -> tuple[float, float]:
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, int | float):
        return (float(timeout), DEFAULT_TIMEOUT[1])
    if len(timeout) == 1:
        return (float(timeout[0]), DEFAULT_TIMEOUT[1])
    return (float(timeout[0]), float(timeout[1]))


def user_agent(app: str = "") -> str:
    prefix = f"{app.strip()} " if app and app.strip() else ""
    return f"{prefix}{CLIENT_NAME}/{VERSION} Python/{platform.python_version()}"


class Transport:
    """Sends signed GET/POST requests and returns the raw response body.

    HTTP status codes are not interpreted: the service reports application
    errors inside the XML body, so every non-empty body is handed back.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        app: str = "",
        timeout: Sequence[float] | float | None = None,
    ) -> None:
        self._credentials = credentials
        self.app = app
        self._timeout = normalize_timeout(timeout)

    @property
    def timeout(self) -> tuple[float, float]:
        return self._timeout

    def build_request(
        self,
        method: str,
        url: str,
        *,
        content_type: str | None = None,
        body: bytes | None = None,
    ) -> SignedRequest:
        authorization = auth.sign(
            method,
            url,
            self._credentials.key_id,
            self._credentials.key,
        )
        headers = {
            "User-Agent": user_agent(self.app),
            "Authorization": authorization,
        }
        if content_type:
            headers["Content-Type"] = content_type
        return SignedRequest(method=method.upper(), url=url, headers=headers, body=body)

    def get(self, url: str) -> bytes:
        return self._send(self.build_request("GET", url))

    def post(self, url: str, content_type: str, body: bytes) -> bytes:
        return self._send(
            self.build_request("POST", url, content_type=content_type, body=body)
        )

    def _send(self, request: SignedRequest) -> bytes:
        LOGGER.debug("NIP24 %s %s", request.method, request.url)
        try:
            if request.method == "POST":
                response = requests.post(
                    request.url,
                    data=request.body,
                    headers=request.headers,
                    timeout=self._timeout,
                )
            else:
                response = requests.get(
                    request.url,
                    headers=request.headers,
                    timeout=self._timeout,
                )
        except requests.RequestException as exc:
            LOGGER.warning("Błąd połączenia z NIP24 (%s): %s", request.url, exc)
            raise TransportError() from exc

        LOGGER.debug("NIP24 odpowiedź HTTP %s", response.status_code)

        if not response.content:
            LOGGER.warning(
                "Pusta odpowiedź NIP24 (HTTP %s) dla %s",
                response.status_code,
                request.url,
            )
            raise TransportError()

        return response.content
