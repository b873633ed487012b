"""Decoding of NIP24 XML responses into records.

Each response is either an error envelope::

    <result><error><code>..</code><description>..</description></error></result>

or a data envelope with a ``firm`` or ``vies`` element. Field paths are kept in
one table per record shape so that every extracted field is listed in a single
place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Generic, TypeVar

from lxml import etree

from .errors import MalformedResponseError, ServiceError
from .records import PKD, AllData, InvoiceData, VIESData
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("decoder")

RecordT = TypeVar("RecordT")

_ERROR_CODE: Final = "/result/error/code"
_ERROR_DESCRIPTION: Final = "/result/error/description"
_FIRM: Final = "/result/firm"
_VIES: Final = "/result/vies"
_PKD: Final = "/result/firm/PKDs/PKD"

INVOICE_FIELDS: Final[dict[str, str]] = {
    "nip": "nip",
    "name": "name",
    "first_name": "firstname",
    "last_name": "lastname",
    "street": "street",
    "street_number": "streetNumber",
    "house_number": "houseNumber",
    "city": "city",
    "post_code": "postCode",
    "post_city": "postCity",
    "phone": "phone",
    "email": "email",
    "www": "www",
}

ALL_FIELDS: Final[dict[str, str]] = {
    **INVOICE_FIELDS,
    "type": "type",
    "regon": "regon",
    "short_name": "shortname",
    "second_name": "secondname",
    "community": "community",
    "county": "county",
    "state": "state",
    "registry_entity_code": "registryEntity/code",
    "registry_entity_name": "registryEntity/name",
    "registry_code": "registry/code",
    "registry_name": "registry/name",
    "record_number": "record/number",
    "basic_legal_form_code": "basicLegalForm/code",
    "basic_legal_form_name": "basicLegalForm/name",
    "specific_legal_form_code": "specificLegalForm/code",
    "specific_legal_form_name": "specificLegalForm/name",
    "ownership_form_code": "ownershipForm/code",
    "ownership_form_name": "ownershipForm/name",
}

# The service spells the renewal element "renevalDate".
ALL_DATE_FIELDS: Final[dict[str, str]] = {
    "creation_date": "creationDate",
    "start_date": "startDate",
    "registration_date": "registrationDate",
    "hold_date": "holdDate",
    "renewal_date": "renevalDate",
    "last_update_date": "lastUpdateDate",
    "end_date": "endDate",
    "record_creation_date": "record/created",
}

VIES_FIELDS: Final[dict[str, str]] = {
    "country_code": "countryCode",
    "vat_number": "vatNumber",
}

VIES_TRADER_FIELDS: Final[dict[str, str]] = {
    "trader_name": "traderName",
    "trader_company_type": "traderCompanyType",
    "trader_address": "traderAddress",
}

# Tried in order after ISO 8601.
_DATE_FORMATS: Final = (
    "%Y-%m-%d",
    "%Y-%m-%d%z",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y%m%d",
    "%d.%m.%Y",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
)


def parse(body: bytes | str) -> etree._Element:
    """Parse the response body, raising ``MalformedResponseError`` on failure."""

    if isinstance(body, str):
        body = body.encode("utf-8")
    if not body or not body.strip():
        raise MalformedResponseError()

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(body, parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        LOGGER.warning("Nie można przetworzyć odpowiedzi XML: %s", exc)
        raise MalformedResponseError() from exc


def text(doc: etree._Element, path: str) -> str:
    """Return the trimmed text at ``path`` if it resolves to exactly one node."""

    nodes = doc.xpath(f"{path}/text()")
    if not isinstance(nodes, list) or len(nodes) != 1:
        return ""
    return str(nodes[0]).strip()


def normalize_date(value: str) -> str:
    """Re-emit a loosely formatted date as ``YYYY-MM-DD``; ``""`` if unparsable."""

    value = value.strip()
    if not value:
        return ""

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date().isoformat()
        except ValueError:
            continue

    LOGGER.debug("Nierozpoznany format daty: %r", value)
    return ""


def date_text(doc: etree._Element, path: str) -> str:
    return normalize_date(text(doc, path))


def check_error(doc: etree._Element) -> None:
    """Raise ``ServiceError`` if the document carries an error envelope."""

    code = text(doc, _ERROR_CODE)
    if code:
        description = text(doc, _ERROR_DESCRIPTION)
        LOGGER.info("NIP24 zwrócił błąd %s: %s", code, description)
        raise ServiceError(code, description)


def decode_pkd(doc: etree._Element) -> list[PKD]:
    """Collect PKD entries by position until the first entry without a code.

    The service numbers entries contiguously; anything after a gap is not read.
    """

    entries: list[PKD] = []
    position = 1
    while True:
        base = f"{_PKD}[{position}]"
        code = text(doc, f"{base}/code")
        if not code:
            break
        entries.append(
            PKD(
                code=code,
                description=text(doc, f"{base}/description"),
                primary=text(doc, f"{base}/primary") == "true",
            )
        )
        position += 1
    return entries


def decode_invoice_data(doc: etree._Element) -> InvoiceData:
    return InvoiceData(
        **{name: text(doc, f"{_FIRM}/{path}") for name, path in INVOICE_FIELDS.items()}
    )


def decode_all_data(doc: etree._Element) -> AllData:
    values = {name: text(doc, f"{_FIRM}/{path}") for name, path in ALL_FIELDS.items()}
    values.update(
        {name: date_text(doc, f"{_FIRM}/{path}") for name, path in ALL_DATE_FIELDS.items()}
    )
    return AllData(**values, pkd=decode_pkd(doc))


def decode_vies_data(doc: etree._Element) -> VIESData:
    valid = text(doc, f"{_VIES}/valid") == "true"
    values = {name: text(doc, f"{_VIES}/{path}") for name, path in VIES_FIELDS.items()}
    if valid:
        values.update(
            {name: text(doc, f"{_VIES}/{path}") for name, path in VIES_TRADER_FIELDS.items()}
        )
    return VIESData(valid=valid, **values)


@dataclass(frozen=True)
class RecordShape(Generic[RecordT]):
    """Resource segment of the fetch URL paired with its decoder."""

    resource: str
    decoder: Callable[[etree._Element], RecordT]
    refreshable: bool = True


INVOICE: Final = RecordShape("invoice", decode_invoice_data)
ALL: Final = RecordShape("all", decode_all_data)
VIES: Final = RecordShape("vies", decode_vies_data, refreshable=False)


def decode(body: bytes | str, shape: RecordShape[RecordT]) -> RecordT:
    doc = parse(body)
    check_error(doc)
    return shape.decoder(doc)
