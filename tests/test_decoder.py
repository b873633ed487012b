import pytest

from nip24 import decoder
from nip24.errors import MalformedResponseError, ServiceError
from nip24.records import PKD, AllData, InvoiceData, VIESData

ALL_DATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<result>
  <firm>
    <type>1</type>
    <nip>7171642051</nip>
    <regon>000331501</regon>
    <name>Przykładowa Spółka &amp; Wspólnicy Sp. z o.o.</name>
    <shortname>Przykładowa</shortname>
    <firstname>Jan</firstname>
    <secondname>Maria</secondname>
    <lastname>Kowalski</lastname>
    <street>ul. Prosta</street>
    <streetNumber>12</streetNumber>
    <houseNumber>4</houseNumber>
    <city>Warszawa</city>
    <community>Śródmieście</community>
    <county>Warszawa</county>
    <state>mazowieckie</state>
    <postCode>00-001</postCode>
    <postCity>Warszawa</postCity>
    <phone> 221234567 </phone>
    <email>biuro@example.pl</email>
    <www>www.example.pl</www>
    <creationDate>2001-04-05</creationDate>
    <startDate>2001-05-01T00:00:00+02:00</startDate>
    <registrationDate>15.06.2001</registrationDate>
    <holdDate></holdDate>
    <renevalDate>2010-02-03+01:00</renevalDate>
    <lastUpdateDate>2020-13-40</lastUpdateDate>
    <endDate/>
    <registryEntity><code>071</code><name>Sąd Rejonowy</name></registryEntity>
    <registry><code>138</code><name>Rejestr przedsiębiorców</name></registry>
    <record><created>2001-06-15</created><number>0000012345</number></record>
    <basicLegalForm><code>2</code><name>JEDNOSTKA ORGANIZACYJNA</name></basicLegalForm>
    <specificLegalForm><code>117</code><name>SPÓŁKI Z O.O.</name></specificLegalForm>
    <ownershipForm><code>214</code><name>WŁASNOŚĆ KRAJOWYCH OSÓB FIZYCZNYCH</name></ownershipForm>
    <PKDs>
      <PKD><code>62.01.Z</code><description>Działalność związana z oprogramowaniem</description><primary>false</primary></PKD>
      <PKD><code>62.02.Z</code><description>Doradztwo informatyczne</description><primary>true</primary></PKD>
      <PKD><code>63.11.Z</code><description>Przetwarzanie danych</description><primary>false</primary></PKD>
    </PKDs>
  </firm>
</result>
"""

ERROR_XML = """<?xml version="1.0" encoding="UTF-8"?>
<result>
  <error>
    <code>10</code>
    <description>Invalid identifier</description>
  </error>
  <firm><nip>7171642051</nip><name>Ignored</name></firm>
</result>
"""

VIES_VALID_XML = """<result>
  <vies>
    <countryCode>PL</countryCode>
    <vatNumber>7171642051</vatNumber>
    <valid>true</valid>
    <traderName>ACME</traderName>
    <traderCompanyType>---</traderCompanyType>
    <traderAddress>UL. PROSTA 12, 00-001 WARSZAWA</traderAddress>
  </vies>
</result>
"""


def test_all_data_fields():
    record = decoder.decode(ALL_DATA_XML.encode("utf-8"), decoder.ALL)

    assert isinstance(record, AllData)
    assert record.nip == "7171642051"
    assert record.regon == "000331501"
    assert record.name == "Przykładowa Spółka & Wspólnicy Sp. z o.o."
    assert record.second_name == "Maria"
    assert record.phone == "221234567"
    assert record.community == "Śródmieście"
    assert record.registry_entity_code == "071"
    assert record.registry_name == "Rejestr przedsiębiorców"
    assert record.record_number == "0000012345"
    assert record.specific_legal_form_code == "117"
    assert record.ownership_form_name == "WŁASNOŚĆ KRAJOWYCH OSÓB FIZYCZNYCH"


def test_all_data_dates_are_canonical_or_empty():
    record = decoder.decode(ALL_DATA_XML, decoder.ALL)

    assert record.creation_date == "2001-04-05"
    assert record.start_date == "2001-05-01"
    assert record.registration_date == "2001-06-15"
    assert record.hold_date == ""
    assert record.renewal_date == "2010-02-03"
    assert record.last_update_date == ""
    assert record.end_date == ""
    assert record.record_creation_date == "2001-06-15"


def test_pkd_entries_in_document_order():
    record = decoder.decode(ALL_DATA_XML, decoder.ALL)

    assert [entry.code for entry in record.pkd] == ["62.01.Z", "62.02.Z", "63.11.Z"]
    assert [entry.primary for entry in record.pkd] == [False, True, False]
    assert record.primary_pkd == PKD("62.02.Z", "Doradztwo informatyczne", True)


def test_pkd_scan_stops_at_first_entry_without_code():
    xml = """<result><firm><PKDs>
      <PKD><code>01.11.Z</code><primary>true</primary></PKD>
      <PKD><code></code></PKD>
      <PKD><code>01.13.Z</code></PKD>
    </PKDs></firm></result>"""

    record = decoder.decode(xml, decoder.ALL)

    assert record.pkd == [PKD(code="01.11.Z", description="", primary=True)]


def test_missing_pkds_give_empty_list():
    record = decoder.decode("<result><firm><nip>7171642051</nip></firm></result>", decoder.ALL)
    assert record.pkd == []
    assert record.name == ""


def test_invoice_data_shape():
    record = decoder.decode(ALL_DATA_XML, decoder.INVOICE)

    assert type(record) is InvoiceData
    assert record.first_name == "Jan"
    assert record.street_number == "12"
    assert record.post_code == "00-001"
    assert record.www == "www.example.pl"


def test_error_envelope_takes_precedence_over_data():
    with pytest.raises(ServiceError) as excinfo:
        decoder.decode(ERROR_XML, decoder.INVOICE)

    assert excinfo.value.code == "10"
    assert excinfo.value.description == "Invalid identifier"
    assert str(excinfo.value) == "Invalid identifier"


def test_empty_error_code_is_not_an_error():
    xml = "<result><error><code></code></error><firm><nip>1</nip></firm></result>"
    assert decoder.decode(xml, decoder.INVOICE).nip == "1"


def test_vies_valid():
    record = decoder.decode(VIES_VALID_XML, decoder.VIES)

    assert record == VIESData(
        country_code="PL",
        vat_number="7171642051",
        valid=True,
        trader_name="ACME",
        trader_company_type="---",
        trader_address="UL. PROSTA 12, 00-001 WARSZAWA",
    )


def test_vies_invalid_drops_trader_fields():
    xml = VIES_VALID_XML.replace("<valid>true</valid>", "<valid>false</valid>")
    record = decoder.decode(xml, decoder.VIES)

    assert record.valid is False
    assert record.country_code == "PL"
    assert record.trader_name == ""
    assert record.trader_address == ""


@pytest.mark.parametrize("body", [b"", b"   ", "", b"not xml at all", b"<result><firm>"])
def test_malformed_bodies(body):
    with pytest.raises(MalformedResponseError):
        decoder.decode(body, decoder.INVOICE)


def test_text_requires_exactly_one_node():
    doc = decoder.parse(b"<result><firm><phone>1</phone><phone>2</phone></firm></result>")
    assert decoder.text(doc, "/result/firm/phone") == ""
    assert decoder.text(doc, "/result/firm/email") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2015-01-02", "2015-01-02"),
        ("2015-1-2", "2015-01-02"),
        ("2015-01-02 10:20:30", "2015-01-02"),
        ("2015-01-02T10:20:30Z", "2015-01-02"),
        ("2015-01-02T10:20:30+02", "2015-01-02"),
        ("2015-01-02T10:20:30.123+02:00", "2015-01-02"),
        ("2010-02-03+01:00", "2010-02-03"),
        ("2015-01-02 25:99", ""),
        ("02.01.2015 10:20:30", "2015-01-02"),
        ("2015/01/02", "2015-01-02"),
        ("20150102", "2015-01-02"),
        ("02.01.2015", "2015-01-02"),
        ("2015-02-30", ""),
        ("2020-13-40", ""),
        ("yesterday", ""),
        ("", ""),
    ],
)
def test_normalize_date(value, expected):
    assert decoder.normalize_date(value) == expected
