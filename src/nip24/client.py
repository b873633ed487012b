"""NIP24 service client."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from lxml import etree

from . import decoder
from .config import DEFAULT_URL, Settings
from .decoder import RecordShape
from .errors import InvalidRequestError, Nip24Error, ServiceError
from .numbers import Number, path_suffix
from .records import AllData, InvoiceData, VIESData
from .transport import Credentials, Transport
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("client")

RecordT = TypeVar("RecordT")


def build_update_body(phone: str, email: str, www: str) -> bytes:
    """Return the XML document sent with a contact data update."""

    root = etree.Element("update")
    firm = etree.SubElement(root, "firm")
    try:
        for tag, value in (("phone", phone), ("email", email), ("www", www)):
            etree.SubElement(firm, tag).text = value or ""
    except ValueError as exc:
        raise InvalidRequestError() from exc
    return etree.tostring(root, xml_declaration=True, encoding="utf-8", pretty_print=True)


class NIP24Client:
    """Client for the NIP24 company data service.

    Every operation performs one signed HTTP round trip and raises a subclass
    of :class:`~nip24.errors.Nip24Error` on failure. The message of the last
    failure is also kept in :attr:`last_error`; that slot is shared by all
    calls on the instance, so use one client per thread if you read it.
    """

    def __init__(
        self,
        key_id: str,
        key: str,
        *,
        url: str = DEFAULT_URL,
        app: str = "",
        timeout: Sequence[float] | float | None = None,
    ) -> None:
        if not key_id or not key:
            raise RuntimeError("Identyfikator i klucz NIP24 muszą być ustawione.")

        self._credentials = Credentials(key_id=key_id, key=key)
        self._transport = Transport(self._credentials, app=app, timeout=timeout)
        self._url = DEFAULT_URL
        self.url = url
        self._last_error = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> NIP24Client:
        return cls(
            settings.key_id,
            settings.key,
            url=settings.url,
            app=settings.app,
            timeout=settings.timeout,
        )

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def url(self) -> str:
        return self._url

    @url.setter
    def url(self, value: str) -> None:
        value = (value or "").strip().rstrip("/")
        self._url = value or DEFAULT_URL

    @property
    def app(self) -> str:
        return self._transport.app

    @app.setter
    def app(self, value: str) -> None:
        self._transport.app = value or ""

    @property
    def last_error(self) -> str:
        """Message of the failure of the most recent call, ``""`` after a success."""

        return self._last_error

    @contextmanager
    def _recording_errors(self) -> Iterator[None]:
        self._last_error = ""
        try:
            yield
        except Nip24Error as exc:
            if not self._last_error:
                self._last_error = str(exc)
            raise

    def _fetch(
        self,
        shape: RecordShape[RecordT],
        number_type: Number | str,
        number: str,
        force: bool = False,
    ) -> RecordT:
        suffix = path_suffix(number_type, number)
        fun = "getf" if force and shape.refreshable else "get"
        url = f"{self._url}/{fun}/{shape.resource}/{suffix}"

        LOGGER.debug("Pobieranie %s dla %s", shape.resource, suffix)
        body = self._transport.get(url)
        return decoder.decode(body, shape)

    def is_active(self, number: str, number_type: Number | str = Number.NIP) -> bool:
        """Check whether the company is active.

        The service reports inactive (or unknown) companies with an error
        envelope, so a :class:`ServiceError` yields ``False`` with its
        description in :attr:`last_error`. Other failures are raised.
        """

        with self._recording_errors():
            url = f"{self._url}/check/{path_suffix(number_type, number)}"
            body = self._transport.get(url)
            try:
                decoder.check_error(decoder.parse(body))
            except ServiceError as exc:
                self._last_error = exc.description
                return False
            return True

    def get_invoice_data(
        self,
        number: str,
        number_type: Number | str = Number.NIP,
        *,
        force: bool = False,
    ) -> InvoiceData:
        """Fetch invoice data; ``force`` asks the service to refresh its copy."""

        with self._recording_errors():
            return self._fetch(decoder.INVOICE, number_type, number, force)

    def get_all_data(
        self,
        number: str,
        number_type: Number | str = Number.NIP,
        *,
        force: bool = False,
    ) -> AllData:
        with self._recording_errors():
            return self._fetch(decoder.ALL, number_type, number, force)

    def get_vies_data(self, euvat: str) -> VIESData:
        """Check an EU VAT number (with country prefix) in VIES."""

        with self._recording_errors():
            return self._fetch(decoder.VIES, Number.EUVAT, euvat)

    def update_contact_data(
        self,
        number: str,
        phone: str,
        email: str,
        www: str,
        number_type: Number | str = Number.NIP,
    ) -> bool:
        """Send updated contact data for the company; ``True`` once accepted."""

        with self._recording_errors():
            url = f"{self._url}/update/{path_suffix(number_type, number)}"
            body = build_update_body(phone, email, www)
            response = self._transport.post(url, "text/xml", body)
            decoder.check_error(decoder.parse(response))
            return True
