"""Typed records returned by the NIP24 client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PKD:
    """Single PKD (Polish classification of activities) entry."""

    code: str = ""
    description: str = ""
    primary: bool = False


@dataclass
class InvoiceData:
    """Company data needed on an invoice.

    Every field is a string; fields the service left out are empty.
    """

    nip: str = ""

    name: str = ""
    first_name: str = ""
    last_name: str = ""

    street: str = ""
    street_number: str = ""
    house_number: str = ""
    city: str = ""
    post_code: str = ""
    post_city: str = ""

    phone: str = ""
    email: str = ""
    www: str = ""


@dataclass
class AllData(InvoiceData):
    """Complete registry record of a company.

    Dates are ``YYYY-MM-DD`` or empty. ``pkd`` keeps document order.
    """

    type: str = ""
    regon: str = ""

    short_name: str = ""
    second_name: str = ""

    community: str = ""
    county: str = ""
    state: str = ""

    creation_date: str = ""
    start_date: str = ""
    registration_date: str = ""
    hold_date: str = ""
    renewal_date: str = ""
    last_update_date: str = ""
    end_date: str = ""

    registry_entity_code: str = ""
    registry_entity_name: str = ""

    registry_code: str = ""
    registry_name: str = ""

    record_creation_date: str = ""
    record_number: str = ""

    basic_legal_form_code: str = ""
    basic_legal_form_name: str = ""

    specific_legal_form_code: str = ""
    specific_legal_form_name: str = ""

    ownership_form_code: str = ""
    ownership_form_name: str = ""

    pkd: list[PKD] = field(default_factory=list)

    @property
    def primary_pkd(self) -> PKD | None:
        return next((entry for entry in self.pkd if entry.primary), None)


@dataclass
class VIESData:
    """Result of an EU VAT number check in VIES."""

    country_code: str = ""
    vat_number: str = ""
    valid: bool = False
    trader_name: str = ""
    trader_company_type: str = ""
    trader_address: str = ""
