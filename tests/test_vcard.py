import datetime as dt

import pytest
import pytz

from textdirectory import read_content_lines, read_vcard, read_vcards, write_vcard, write_vcards
from textdirectory.base import ContentLine, LocaledText
from textdirectory.exceptions import DirectoryError, ValueTypeError
from textdirectory.profile import ValueSerializer
from textdirectory.registry import Registry
from textdirectory.vcard import (
    Address,
    AddressType,
    Email,
    EmailType,
    Label,
    Name,
    Telephone,
    TelephoneType,
    VCard,
    VCardProfile,
    format_utc_offset,
    parse_utc_offset,
)

from .common import crlf, get_test_file


@pytest.fixture
def jane():
    return read_vcard(get_test_file("janedoe.vcf"))


def test_jane_doe(jane):
    assert isinstance(jane, VCard)
    assert jane.version == "3.0"
    assert jane.formatted_name == "Ms. Jane Lívia Doe"
    assert jane.name.given_name == "Jane"
    assert jane.name.family_name == "Doe"
    assert jane.name.additional == ["Lívia"]
    assert jane.name.prefixes == ["Ms."]
    assert jane.name.suffixes == []
    assert jane.birthday == dt.date(1970, 1, 2)
    assert jane.url == "http://www.example.com/"
    assert jane.notes == ["This is just a test.\nIsso é só um exemplo.", "This is another note."]
    assert [line.name for line in jane.content_lines] == ["X-NOKIA-PNG-CALLER-ID"]


def test_jane_doe_address(jane):
    address = jane.address
    assert address.box is None
    assert address.extended_address == "Oak and Pine"
    assert address.street_address == "123 Oak Street\nDowntown"
    assert address.locality == "San Francisco"
    assert address.region == "CA"
    assert address.postal_code == "94120"
    assert address.country == "USA"
    assert address.types == [AddressType.HOME]


@pytest.mark.parametrize(
    "number, types",
    [
        ("+14155551212", {TelephoneType.PREF, TelephoneType.HOME, TelephoneType.VOICE}),
        ("+1 918 555 1212", {TelephoneType.CELL, TelephoneType.VOICE}),
        ("+1 (510) 555-1212", {TelephoneType.VOICE}),
        ("+552138232003", {TelephoneType.WORK, TelephoneType.VOICE}),
    ],
)
def test_jane_doe_telephones(jane, number, types):
    assert len(jane.telephones) == 4
    telephone = jane.get_telephone(number)
    assert telephone is not None
    assert set(telephone.types) == types


def test_jane_doe_email(jane):
    assert jane.email == Email("jane@example.com", [EmailType.INTERNET])
    assert str(jane.email) == "jane@example.com"


def test_write_and_read_back(jane):
    written = write_vcard(jane)
    assert written.startswith("BEGIN:VCARD\r\nVERSION:3.0\r\n")
    assert written.endswith("END:VCARD\r\n")
    again = read_vcard(written)
    assert again.formatted_name == jane.formatted_name
    assert again.name == jane.name
    assert again.addresses == jane.addresses
    assert again.telephones == jane.telephones
    assert [t.types for t in again.telephones] == [t.types for t in jane.telephones]
    assert again.emails == jane.emails
    assert again.birthday == jane.birthday
    assert again.url == jane.url
    assert again.notes == jane.notes
    assert again.content_lines == jane.content_lines


def test_combine_notes(jane):
    written = write_vcard(jane, single_value_names=("NOTE",))
    assert written.count("NOTE:") == 1
    again = read_vcard(written)
    assert again.notes == ["This is just a test.\nIsso é só um exemplo.\n--\nThis is another note."]


def test_structured_address():
    vcard = read_vcard(crlf("BEGIN:VCARD", "ADR;TYPE=home,postal:;;123 Oak St;Springfield;IL;62701;USA", "END:VCARD"))
    address = vcard.address
    assert address.street_address == "123 Oak St"
    assert address.locality == "Springfield"
    assert address.region == "IL"
    assert address.postal_code == "62701"
    assert address.country == "USA"
    assert set(address.types) == {AddressType.HOME, AddressType.POSTAL}


def test_address_without_types_gets_defaults():
    (_, line, _) = read_content_lines(crlf("BEGIN:VCARD", "ADR:;;1 Main St;;;;", "END:VCARD"))
    assert line.value.types == []
    assert line.value.effective_types == [AddressType.INTL, AddressType.POSTAL, AddressType.PARCEL, AddressType.WORK]


def test_extended_types_are_ignored():
    vcard = read_vcard(crlf("BEGIN:VCARD", "TEL;TYPE=X-IPHONE,cell:+1 555 0100", "END:VCARD"))
    assert vcard.telephones[0].types == [TelephoneType.CELL]


@pytest.mark.parametrize(
    "line",
    [
        "TEL:call me",
        "ADR;TYPE=castle:;;1 Main St;;;;",
        "EMAIL;TYPE=carrier-pigeon:jane@example.com",
        "BDAY:someday",
        "TZ:+5",
        "GEO:1.5",
        "PHOTO;ENCODING=b:abc",
    ],
)
def test_invalid_vcard_values(line):
    with pytest.raises(ValueTypeError):
        read_vcard(crlf("BEGIN:VCARD", line, "END:VCARD"))


def test_organization():
    first, second = read_vcards(get_test_file("two_cards.vcf"))
    assert first.formatted_name == "First Person"
    assert first.notes == ["One", "Two"]
    assert second.organization_name == "Example Corp"
    assert second.organization_units == ["Research", "Parsers"]
    assert second.telephones == [Telephone("+15550100000")]
    assert "ORG:Example Corp;Research;Parsers\r\n" in write_vcard(second)


def test_write_vcards():
    vcards = read_vcards(get_test_file("two_cards.vcf"))
    written = write_vcards(vcards, single_value_names=("NOTE",))
    assert written.count("BEGIN:VCARD") == 2
    assert [vcard.notes for vcard in read_vcards(written)] == [["One\n--\nTwo"], []]


def test_binary_photo():
    text = crlf("BEGIN:VCARD", "PHOTO;ENCODING=b;TYPE=GIF:R0lGODlhAQABAIAAAP///wAAACwAAAAAAQABAAACAkQBADs=", "END:VCARD")
    vcard = read_vcard(text)
    (photo,) = vcard.content_lines
    assert isinstance(photo.value, bytes)
    assert photo.value.startswith(b"GIF89a")
    assert write_vcard(vcard) == crlf(
        "BEGIN:VCARD",
        "VERSION:3.0",
        "PHOTO;ENCODING=b;TYPE=GIF:R0lGODlhAQABAIAAAP///wAAACwAAAAAAQABAAACAkQBADs=",
        "END:VCARD",
    )


def test_photo_uri():
    vcard = read_vcard(crlf("BEGIN:VCARD", "PHOTO;VALUE=uri:http://example.com/me.gif", "END:VCARD"))
    assert vcard.content_lines[0].value == "http://example.com/me.gif"


def test_agent():
    text = crlf(
        "BEGIN:VCARD",
        "FN:Boss",
        "AGENT:BEGIN:VCARD\\nFN:Susan Thomas\\nTEL:+1-919-555-1234\\nEND:VCARD\\n",
        "END:VCARD",
    )
    vcard = read_vcard(text)
    (agent_line,) = vcard.content_lines
    agent = agent_line.value
    assert isinstance(agent, VCard)
    assert agent.formatted_name == "Susan Thomas"
    assert agent.telephones == [Telephone("+19195551234")]

    again = read_vcard(write_vcard(vcard))
    assert again.content_lines[0].value.formatted_name == "Susan Thomas"


def test_agent_must_be_a_vcard():
    with pytest.raises(DirectoryError):
        read_vcard(crlf("BEGIN:VCARD", "AGENT:NAME:nobody\\n", "END:VCARD"))


def test_utc_offset_timezone():
    vcard = read_vcard(crlf("BEGIN:VCARD", "TZ:-05:00", "END:VCARD"))
    assert vcard.timezone.utcoffset(None) == dt.timedelta(hours=-5)
    assert "TZ:-05:00\r\n" in write_vcard(vcard)


def test_named_timezone():
    vcard = read_vcard(crlf("BEGIN:VCARD", "TZ;VALUE=text:Europe/Lisbon", "END:VCARD"))
    assert vcard.timezone is pytz.timezone("Europe/Lisbon")
    assert "TZ;VALUE=text:Europe/Lisbon\r\n" in write_vcard(vcard)


def test_unknown_timezone_stays_a_content_line():
    vcard = read_vcard(crlf("BEGIN:VCARD", "TZ;VALUE=text:Nowhere/Special", "END:VCARD"))
    assert vcard.timezone is None
    assert vcard.content_lines[0].value == "Nowhere/Special"


@pytest.mark.parametrize("text, offset", [("+01:30", "+01:30"), ("-0800", "-08:00"), ("+00:00", "+00:00")])
def test_utc_offset_format(text, offset):
    assert format_utc_offset(parse_utc_offset(text).utcoffset(None)) == offset


def test_geo():
    vcard = read_vcard(crlf("BEGIN:VCARD", "GEO:37.386013;-122.082932", "END:VCARD"))
    assert vcard.geo == (37.386013, -122.082932)
    assert "GEO:37.386013;-122.082932\r\n" in write_vcard(vcard)


def test_label():
    vcard = read_vcard(
        crlf("BEGIN:VCARD", "LABEL;TYPE=dom,home;LANGUAGE=en:Mr. John Q. Public\\n123 Main St", "END:VCARD")
    )
    (label,) = vcard.labels
    assert isinstance(label, Label)
    assert label == "Mr. John Q. Public\n123 Main St"
    assert label.address_types == [AddressType.DOM, AddressType.HOME]
    assert label.locale == "en"


def test_name_with_several_values():
    vcard = read_vcard(crlf("BEGIN:VCARD", "N:Stevenson;John;Philip,Paul;Dr.;Jr.,M.D.,A.C.P.", "END:VCARD"))
    name = vcard.name
    assert name.additional == ["Philip", "Paul"]
    assert name.suffixes == ["Jr.", "M.D.", "A.C.P."]
    assert str(name) == "Dr. John Philip Paul Stevenson Jr. M.D. A.C.P."
    assert "N:Stevenson;John;Philip,Paul;Dr.;Jr.,M.D.,A.C.P.\r\n" in write_vcard(vcard)


def test_birthday_date_time():
    vcard = read_vcard(crlf("BEGIN:VCARD", "BDAY:1953-10-15T23:10:00Z", "END:VCARD"))
    assert vcard.birthday == dt.datetime(1953, 10, 15, 23, 10, tzinfo=dt.timezone.utc)
    assert "BDAY:1953-10-15T23:10:00Z\r\n" in write_vcard(vcard)


def test_repeated_single_values_stay_content_lines():
    vcard = read_vcard(crlf("BEGIN:VCARD", "FN:One", "FN:Two", "END:VCARD"))
    assert vcard.formatted_name == "One"
    assert vcard.content_lines == [ContentLine("FN", "Two", profile="VCARD")]


def test_not_a_vcard():
    with pytest.raises(DirectoryError):
        read_vcard(crlf("NAME:a directory", "X-A:1"))


def test_build_vcard():
    vcard = VCard()
    vcard.formatted_name = LocaledText("João Silva", "pt")
    vcard.name = Name("Silva", "João", locale="pt")
    vcard.addresses.append(Address(street="Rua Direita 1", locality="Lisboa", types=[AddressType.HOME]))
    vcard.telephones.append(Telephone("+351 21 000 0000", [TelephoneType.CELL]))
    vcard.emails.append(Email("joao@example.com", [EmailType.INTERNET, EmailType.PREF]))
    assert write_vcard(vcard) == crlf(
        "BEGIN:VCARD",
        "VERSION:3.0",
        "FN;LANGUAGE=pt:João Silva",
        "N;LANGUAGE=pt:Silva;João;;;",
        "ADR;TYPE=HOME:;;Rua Direita 1;Lisboa;;;",
        "TEL;TYPE=CELL:+351210000000",
        "EMAIL;TYPE=INTERNET,PREF:joao@example.com",
        "END:VCARD",
    )


def test_telephone():
    assert Telephone("+1 (555) 010-0000") == Telephone("+15550100000")
    assert Telephone("555 0100").canonical == "5550100"
    with pytest.raises(ValueError):
        Telephone("not a number")


class ReversingSerializer(ValueSerializer):
    def serialize_value(self, profile, group, name, params, value, value_type, writer):
        writer.write(str(value)[::-1])
        return True


def test_agent_written_with_own_registry():
    registry = Registry()
    profile = VCardProfile(registry)
    registry.register_profile("VCARD", profile)
    for value_type in VCardProfile.value_codec_types:
        registry.register_value_factory(value_type, profile)
        registry.register_value_serializer(value_type, profile)
    registry.register_value_serializer("x-reversed", ReversingSerializer())

    agent = VCard()
    agent.formatted_name = LocaledText("Susan Thomas")
    agent.content_lines.append(ContentLine("X-CODE", "abc", [("VALUE", "x-reversed")]))
    boss = VCard()
    boss.formatted_name = LocaledText("Boss")
    boss.content_lines.append(ContentLine("AGENT", agent))

    again = read_vcard(write_vcard(boss, registry=registry))
    (code,) = again.content_lines[0].value.content_lines
    assert code.value == "cba"


def test_read_vcards_without_vcard_profile():
    with pytest.raises(DirectoryError):
        read_vcards(crlf("BEGIN:VCARD", "FN:x", "END:VCARD"), Registry())


def test_lines_between_vcards_are_skipped():
    vcards = read_vcards(
        crlf(
            "X-STRAY:1",
            "BEGIN:VCARD",
            "FN:a",
            "END:VCARD",
            "NOTE;VALUE=text:between",
            "BEGIN:VCARD",
            "FN:b",
            "END:VCARD",
        )
    )
    assert [vcard.formatted_name for vcard in vcards] == ["a", "b"]
    assert all(vcard.content_lines == [] and vcard.notes == [] for vcard in vcards)
