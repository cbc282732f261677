"""Definitions and profile for vCard 3.0"""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum

import pytz
from dateutil import tz
from dateutil.parser import isoparse

from . import base
from .base import ContentLine, Directory, LocaledText
from .exceptions import DirectoryError, ValueTypeError
from .helper import Delimiter, backslash_escape, byte_decoder, byte_encoder, get_buffer, logger, to_list
from .processor import DirectoryProcessor
from .profile import (
    ISO_PARSER,
    Profile,
    ValueFactory,
    ValueSerializer,
    format_date_time,
    parse_text_values,
    read_value_text,
)
from .registry import default_registry, register_profile, register_value_factory, register_value_serializer
from .serializer import write_content_lines

VCARD_PROFILE_NAME = "VCARD"
VCARD_VERSION = "3.0"

# ------------------------------------ Names -----------------------------------
FN_TYPE = "FN"
N_TYPE = "N"
NICKNAME_TYPE = "NICKNAME"
PHOTO_TYPE = "PHOTO"
BDAY_TYPE = "BDAY"
ADR_TYPE = "ADR"
LABEL_TYPE = "LABEL"
TEL_TYPE = "TEL"
EMAIL_TYPE = "EMAIL"
MAILER_TYPE = "MAILER"
TZ_TYPE = "TZ"
GEO_TYPE = "GEO"
TITLE_TYPE = "TITLE"
ROLE_TYPE = "ROLE"
LOGO_TYPE = "LOGO"
AGENT_TYPE = "AGENT"
ORG_TYPE = "ORG"
CATEGORIES_TYPE = "CATEGORIES"
NOTE_TYPE = "NOTE"
PRODID_TYPE = "PRODID"
REV_TYPE = "REV"
SORT_STRING_TYPE = "SORT-STRING"
SOUND_TYPE = "SOUND"
UID_TYPE = "UID"
URL_TYPE = "URL"
VERSION_TYPE = "VERSION"
CLASS_TYPE = "CLASS"
KEY_TYPE = "KEY"

BINARY_VALUE_TYPE = "binary"
VCARD_VALUE_TYPE = "vcard"
PHONE_NUMBER_VALUE_TYPE = "phone-number"
UTC_OFFSET_VALUE_TYPE = "utc-offset"

VALUE_TYPES = {
    # handled by type name
    N_TYPE: None,
    BDAY_TYPE: None,
    ADR_TYPE: None,
    GEO_TYPE: None,
    ORG_TYPE: None,
    FN_TYPE: base.TEXT_VALUE_TYPE,
    NICKNAME_TYPE: base.TEXT_VALUE_TYPE,
    LABEL_TYPE: base.TEXT_VALUE_TYPE,
    EMAIL_TYPE: base.TEXT_VALUE_TYPE,
    MAILER_TYPE: base.TEXT_VALUE_TYPE,
    TITLE_TYPE: base.TEXT_VALUE_TYPE,
    ROLE_TYPE: base.TEXT_VALUE_TYPE,
    CATEGORIES_TYPE: base.TEXT_VALUE_TYPE,
    NOTE_TYPE: base.TEXT_VALUE_TYPE,
    PRODID_TYPE: base.TEXT_VALUE_TYPE,
    SORT_STRING_TYPE: base.TEXT_VALUE_TYPE,
    UID_TYPE: base.TEXT_VALUE_TYPE,
    VERSION_TYPE: base.TEXT_VALUE_TYPE,
    CLASS_TYPE: base.TEXT_VALUE_TYPE,
    PHOTO_TYPE: BINARY_VALUE_TYPE,
    LOGO_TYPE: BINARY_VALUE_TYPE,
    SOUND_TYPE: BINARY_VALUE_TYPE,
    KEY_TYPE: BINARY_VALUE_TYPE,
    TEL_TYPE: PHONE_NUMBER_VALUE_TYPE,
    TZ_TYPE: UTC_OFFSET_VALUE_TYPE,
    AGENT_TYPE: VCARD_VALUE_TYPE,
    REV_TYPE: base.DATE_TIME_VALUE_TYPE,
    URL_TYPE: base.URI_VALUE_TYPE,
}

UTC_OFFSET = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
TELEPHONE_NUMBER = re.compile(r"^\+?[0-9 ().\-]*[0-9][0-9 ().\-]*$")


# ------------------------------------ Types -----------------------------------
class AddressType(Enum):
    DOM = "DOM"
    INTL = "INTL"
    POSTAL = "POSTAL"
    PARCEL = "PARCEL"
    HOME = "HOME"
    WORK = "WORK"
    PREF = "PREF"


class TelephoneType(Enum):
    HOME = "HOME"
    MSG = "MSG"
    WORK = "WORK"
    PREF = "PREF"
    VOICE = "VOICE"
    FAX = "FAX"
    CELL = "CELL"
    VIDEO = "VIDEO"
    PAGER = "PAGER"
    BBS = "BBS"
    MODEM = "MODEM"
    CAR = "CAR"
    ISDN = "ISDN"
    PCS = "PCS"


class EmailType(Enum):
    INTERNET = "INTERNET"
    X400 = "X400"
    PREF = "PREF"


DEFAULT_ADDRESS_TYPES = (AddressType.INTL, AddressType.POSTAL, AddressType.PARCEL, AddressType.WORK)
DEFAULT_TELEPHONE_TYPES = (TelephoneType.VOICE,)
DEFAULT_EMAIL_TYPES = (EmailType.INTERNET,)


def parse_types(type_class, params, line_number=None) -> list:
    """
    Return the members of type_class named by the TYPE parameters, in
    declaration order.

    Some producers, Nokia phones among them, give the types as bare
    parameter names (TEL;CELL;VOICE:...); those are used when there is no
    TYPE parameter. Unknown X- types are ignored.
    """
    names = base.get_param_values(params, base.TYPE_PARAM)
    if not names:
        names = base.get_param_names_by_value(params, None)
    found = set()
    for value in names:
        for name in value.split(Delimiter.PARAM_VALUE):
            name = name.strip().upper()
            if not name:
                continue
            try:
                found.add(type_class(name))
            except ValueError as e:
                if name.startswith("X-"):
                    logger.info(f"Ignoring extended {type_class.__name__} {name}")
                    continue
                raise ValueTypeError(f"Unrecognized {type_class.__name__}: {name}", line_number) from e
    return [member for member in type_class if member in found]


def add_type_params(line: ContentLine, types):
    for member in types:
        base.add_param(line.params, base.TYPE_PARAM, member.value)


# ------------------------------ Structured text -------------------------------
def split_structured_text(text: str, line_number=None) -> list[list[str]]:
    """Split a structured value into fields on ';' and each field into values on ','."""
    fields = []
    for field in base.split_text_values(text, Delimiter.STRUCTURED):
        values = [base.decode_text_value(value, line_number) for value in base.split_text_values(field)]
        fields.append([value for value in values if value])
    return fields


def join_structured_text(fields) -> str:
    return Delimiter.STRUCTURED.join(
        Delimiter.VALUE.join(backslash_escape(value) for value in to_list(field) if value) for field in fields
    )


def _field(fields, index) -> list[str]:
    return fields[index] if index < len(fields) else []


def _single(fields, index):
    values = _field(fields, index)
    return values[0] if values else None


# ------------------------ vCard structs ---------------------------------------
class Name:
    def __init__(self, family=(), given=(), additional=(), prefixes=(), suffixes=(), locale=None):
        """
        Each name part can be a string or a list of strings.
        """
        self.family = to_list(family)
        self.given = to_list(given)
        self.additional = to_list(additional)
        self.prefixes = to_list(prefixes)
        self.suffixes = to_list(suffixes)
        self.locale = locale

    @property
    def family_name(self):
        return self.family[-1] if self.family else None

    @property
    def given_name(self):
        return self.given[0] if self.given else None

    def fields(self) -> list[list[str]]:
        return [self.family, self.given, self.additional, self.prefixes, self.suffixes]

    def __str__(self):
        eng_order = (self.prefixes, self.given, self.additional, self.family, self.suffixes)
        return " ".join(" ".join(part) for part in eng_order if part)

    def __repr__(self):
        return f"<Name: {self!s}>"

    def __eq__(self, other):
        try:
            return self.fields() == other.fields()
        except AttributeError:
            return False


class Address:
    """
    A delivery address.

    The post office box, locality, region, postal code and country are single
    values or None; extended and street addresses are lists.
    """

    def __init__(
        self,
        box=None,
        extended=(),
        street=(),
        locality=None,
        region=None,
        postal_code=None,
        country=None,
        types=None,
        locale=None,
    ):
        self.box = box or None
        self.extended = to_list(extended)
        self.street = to_list(street)
        self.locality = locality or None
        self.region = region or None
        self.postal_code = postal_code or None
        self.country = country or None
        self.types = list(types or [])
        self.locale = locale

    @property
    def street_address(self):
        return "\n".join(self.street) if self.street else None

    @property
    def extended_address(self):
        return "\n".join(self.extended) if self.extended else None

    @property
    def effective_types(self) -> list:
        """The address types, or the vCard defaults if none were given."""
        return self.types or list(DEFAULT_ADDRESS_TYPES)

    def fields(self) -> list:
        return [
            self.box or "",
            self.extended,
            self.street,
            self.locality or "",
            self.region or "",
            self.postal_code or "",
            self.country or "",
        ]

    def __str__(self):
        lines = [line for line in (self.box, self.extended_address, self.street_address) if line]
        one_line = " ".join(part for part in (self.locality, self.region, self.postal_code) if part)
        if one_line:
            lines.append(one_line)
        if self.country:
            lines.append(self.country)
        return "\n".join(lines)

    def __repr__(self):
        return f"<Address: {self!s}>"

    def __eq__(self, other):
        try:
            return self.fields() == other.fields() and self.types == other.types
        except AttributeError:
            return False


class Telephone:
    def __init__(self, number: str, types=None):
        number = number.strip()
        if not TELEPHONE_NUMBER.match(number):
            raise ValueError(f"Invalid telephone number {number!r}")
        self.number = number
        self.types = list(types or [])

    @property
    def canonical(self) -> str:
        digits = "".join(char for char in self.number if char.isdigit())
        return f"+{digits}" if self.number.startswith("+") else digits

    def __str__(self):
        return self.canonical

    def __repr__(self):
        return f"<Telephone: {self.canonical} {[t.value for t in self.types]}>"

    def __eq__(self, other):
        try:
            return self.canonical == other.canonical
        except AttributeError:
            return False

    def __hash__(self):
        return hash(self.canonical)


class Email:
    def __init__(self, address: str, types=None, locale=None):
        self.address = address
        self.types = list(types or [])
        self.locale = locale

    def __str__(self):
        return self.address

    def __repr__(self):
        return f"<Email: {self.address} {[t.value for t in self.types]}>"

    def __eq__(self, other):
        try:
            return self.address == other.address and self.types == other.types
        except AttributeError:
            return False


class Label(LocaledText):
    """Formatted delivery address text, with the types of the address it labels."""

    def __new__(cls, text="", address_types=None, locale=None):
        self = super().__new__(cls, text, locale)
        self.address_types = list(address_types or [])
        return self

    def __reduce__(self):
        return (self.__class__, (self.text, self.address_types, self.locale))


class VCard(Directory):
    """
    A vCard: the lines of a VCARD block the profile understands, as attributes.

    Lines that were not promoted to an attribute, including repeated
    single-valued ones, remain in content_lines.
    """

    def __init__(self, display_name=None, content_lines=None):
        super().__init__(display_name, content_lines)
        self.formatted_name = None
        self.name = None
        self.nicknames = []
        self.birthday = None
        self.addresses = []
        self.labels = []
        self.telephones = []
        self.emails = []
        self.timezone = None
        self.geo = None
        self.organization_name = None
        self.organization_units = []
        self.title = None
        self.role = None
        self.categories = []
        self.notes = []
        self.url = None
        self.version = None

    @property
    def address(self):
        return self.addresses[0] if self.addresses else None

    @property
    def email(self):
        return self.emails[0] if self.emails else None

    def get_telephone(self, number):
        """Return the telephone with the same canonical number, or None."""
        if not isinstance(number, Telephone):
            number = Telephone(number)
        for telephone in self.telephones:
            if telephone == number:
                return telephone
        return None

    def __repr__(self):
        return f"<VCard| {self.formatted_name or self.display_name!r}>"


# ------------------------------- Profile --------------------------------------
class VCardProfile(Profile, ValueFactory, ValueSerializer):
    """
    The vCard profile of RFC 2426.

    Besides the value types it registers, the profile creates and writes
    N, ADR, ORG, BDAY, GEO and LABEL values by type name.
    """

    name = VCARD_PROFILE_NAME
    is_value_factory = True
    is_value_serializer = True

    value_codec_types = (PHONE_NUMBER_VALUE_TYPE, BINARY_VALUE_TYPE, VCARD_VALUE_TYPE, UTC_OFFSET_VALUE_TYPE)

    def __init__(self, registry=None):
        super().__init__()
        self.registry = registry
        for name, value_type in VALUE_TYPES.items():
            self.register_value_type(name, value_type)

    # ---------------------------------- Values --------------------------------
    def create_values(self, profile, group, name, params, value_type, reader):
        value_type = (value_type or "").lower()
        key = name.upper()
        line_number = reader.line_number
        locale = base.get_language_param_value(params)

        if value_type == PHONE_NUMBER_VALUE_TYPE:
            types = parse_types(TelephoneType, params, line_number)
            try:
                return [Telephone(read_value_text(reader), types)]
            except ValueError as e:
                raise ValueTypeError(str(e), line_number) from e
        if value_type == BINARY_VALUE_TYPE and base.is_base64_encoded(params):
            try:
                return [byte_decoder(read_value_text(reader))]
            except ValueError as e:
                raise ValueTypeError(f"Invalid base64 data in {name}: {e}", line_number) from e
        if value_type == VCARD_VALUE_TYPE:
            text = base.decode_text_value(read_value_text(reader), line_number)
            processor = DirectoryProcessor(self.registry, allow_bare_lf=True)
            return [as_vcard(processor.process_directory(text), line_number)]
        if value_type == UTC_OFFSET_VALUE_TYPE:
            return [parse_utc_offset(read_value_text(reader), line_number)]

        if key == N_TYPE:
            fields = split_structured_text(read_value_text(reader), line_number)
            return [Name(*(_field(fields, index) for index in range(5)), locale=locale)]
        if key == BDAY_TYPE:
            return [parse_birthday(read_value_text(reader), line_number)]
        if key == ADR_TYPE:
            types = parse_types(AddressType, params, line_number)
            fields = split_structured_text(read_value_text(reader), line_number)
            return [
                Address(
                    box=_single(fields, 0),
                    extended=_field(fields, 1),
                    street=_field(fields, 2),
                    locality=_single(fields, 3),
                    region=_single(fields, 4),
                    postal_code=_single(fields, 5),
                    country=_single(fields, 6),
                    types=types,
                    locale=locale,
                )
            ]
        if key == LABEL_TYPE:
            types = parse_types(AddressType, params, line_number)
            return [Label(text, types, text.locale) for text in parse_text_values(reader, params)]
        if key == ORG_TYPE:
            fields = split_structured_text(read_value_text(reader), line_number)
            return [[LocaledText(value, locale) for field in fields for value in field]]
        if key == GEO_TYPE:
            return [parse_geo(read_value_text(reader), line_number)]
        return None

    def serialize_value(self, profile, group, name, params, value, value_type, writer) -> bool:
        value_type = (value_type or "").lower()
        key = name.upper()

        if value_type == PHONE_NUMBER_VALUE_TYPE and isinstance(value, Telephone):
            writer.write(value.canonical)
        elif value_type == BINARY_VALUE_TYPE and isinstance(value, bytes):
            writer.write(byte_encoder(value).decode("ascii"))
        elif value_type == VCARD_VALUE_TYPE and isinstance(value, VCard):
            writer.write(base.encode_text_value(write_vcard(value, registry=self.registry)))
        elif value_type == UTC_OFFSET_VALUE_TYPE and isinstance(value, dt.tzinfo) and value.utcoffset(None) is not None:
            writer.write(format_utc_offset(value.utcoffset(None)))
        elif key == N_TYPE and isinstance(value, Name):
            writer.write(join_structured_text(value.fields()))
        elif key == ADR_TYPE and isinstance(value, Address):
            writer.write(join_structured_text(value.fields()))
        elif key == ORG_TYPE and isinstance(value, (list, tuple)):
            writer.write(join_structured_text([str(part)] for part in value))
        elif key == BDAY_TYPE and isinstance(value, dt.date):
            writer.write(format_date_time(value))
        elif key == GEO_TYPE and isinstance(value, tuple):
            writer.write(Delimiter.STRUCTURED.join(str(coordinate) for coordinate in value))
        else:
            return False
        return True

    # -------------------------------- Directory -------------------------------
    def create_directory(self, content_lines) -> VCard:
        """Promote the lines of a vCard to VCard attributes."""
        vcard = VCard()
        for line in content_lines:
            key = line.name.upper()
            value = line.value
            if key in (base.BEGIN_TYPE, base.END_TYPE):
                continue
            if key == base.NAME_TYPE and vcard.display_name is None:
                vcard.display_name = value
            elif key == FN_TYPE and vcard.formatted_name is None:
                vcard.formatted_name = value
            elif key == N_TYPE and isinstance(value, Name) and vcard.name is None:
                vcard.name = value
            elif key == NICKNAME_TYPE:
                vcard.nicknames.append(value)
            elif key == BDAY_TYPE and isinstance(value, dt.date) and vcard.birthday is None:
                vcard.birthday = value
            elif key == ADR_TYPE and isinstance(value, Address):
                vcard.addresses.append(value)
            elif key == LABEL_TYPE and isinstance(value, Label):
                vcard.labels.append(value)
            elif key == TEL_TYPE and isinstance(value, Telephone):
                vcard.telephones.append(value)
            elif key == EMAIL_TYPE and isinstance(value, str):
                types = parse_types(EmailType, line.params, line.line_number)
                vcard.emails.append(Email(str(value), types, getattr(value, "locale", None)))
            elif key == TZ_TYPE and vcard.timezone is None:
                vcard.timezone = self.get_timezone(value)
                if vcard.timezone is None:
                    vcard.content_lines.append(line)
            elif key == GEO_TYPE and isinstance(value, tuple) and vcard.geo is None:
                vcard.geo = value
            elif key == ORG_TYPE and isinstance(value, list) and value and vcard.organization_name is None:
                vcard.organization_name = value[0]
                vcard.organization_units = value[1:]
            elif key == TITLE_TYPE and vcard.title is None:
                vcard.title = value
            elif key == ROLE_TYPE and vcard.role is None:
                vcard.role = value
            elif key == CATEGORIES_TYPE:
                vcard.categories.append(value)
            elif key == NOTE_TYPE:
                vcard.notes.append(value)
            elif key == URL_TYPE and vcard.url is None:
                vcard.url = value
            elif key == VERSION_TYPE and vcard.version is None:
                vcard.version = str(value)
            else:
                vcard.content_lines.append(line)
        logger.debug(f"Created {vcard!r}")
        return vcard

    @staticmethod
    def get_timezone(value):
        """A utc-offset value as is, or the pytz zone named by a text value; None if the zone is unknown."""
        if isinstance(value, dt.tzinfo):
            return value
        try:
            return pytz.timezone(str(value))
        except pytz.UnknownTimeZoneError:
            logger.info(f"Unknown time zone {value!r}, keeping it as a content line")
            return None

    @staticmethod
    def create_content_line(name, value, locale=None, params=None) -> ContentLine:
        line = ContentLine(name, value, params, profile=VCARD_PROFILE_NAME)
        if locale is not None:
            base.add_param(line.params, base.LANGUAGE_PARAM, locale)
        return line

    def create_content_lines(self, vcard: VCard) -> list[ContentLine]:
        """The content lines of a vCard, from BEGIN:VCARD to END:VCARD. The version is always 3.0."""
        line = self.create_content_line
        lines = [line(base.BEGIN_TYPE, LocaledText(VCARD_PROFILE_NAME))]
        lines.append(line(VERSION_TYPE, LocaledText(VCARD_VERSION)))
        if vcard.display_name is not None:
            lines.append(line(base.NAME_TYPE, vcard.display_name, _locale(vcard.display_name)))
        if vcard.formatted_name is not None:
            lines.append(line(FN_TYPE, vcard.formatted_name, _locale(vcard.formatted_name)))
        if vcard.name is not None:
            lines.append(line(N_TYPE, vcard.name, vcard.name.locale))
        for nickname in vcard.nicknames:
            lines.append(line(NICKNAME_TYPE, nickname, _locale(nickname)))
        if vcard.birthday is not None:
            lines.append(line(BDAY_TYPE, vcard.birthday))
        for address in vcard.addresses:
            adr = line(ADR_TYPE, address, address.locale)
            add_type_params(adr, address.types)
            lines.append(adr)
        for label in vcard.labels:
            label_line = line(LABEL_TYPE, label, _locale(label))
            add_type_params(label_line, label.address_types)
            lines.append(label_line)
        for telephone in vcard.telephones:
            tel = line(TEL_TYPE, telephone)
            add_type_params(tel, telephone.types)
            lines.append(tel)
        for email in vcard.emails:
            email_line = line(EMAIL_TYPE, LocaledText(email.address, email.locale), email.locale)
            add_type_params(email_line, email.types)
            lines.append(email_line)
        if vcard.timezone is not None:
            zone = getattr(vcard.timezone, "zone", None)
            if zone is not None:
                lines.append(line(TZ_TYPE, LocaledText(zone), params=[(base.VALUE_PARAM, base.TEXT_VALUE_TYPE)]))
            else:
                lines.append(line(TZ_TYPE, vcard.timezone))
        if vcard.geo is not None:
            lines.append(line(GEO_TYPE, vcard.geo))
        org = ([vcard.organization_name] if vcard.organization_name is not None else []) + vcard.organization_units
        if org:
            lines.append(line(ORG_TYPE, org, _locale(org[0])))
        if vcard.title is not None:
            lines.append(line(TITLE_TYPE, vcard.title, _locale(vcard.title)))
        if vcard.role is not None:
            lines.append(line(ROLE_TYPE, vcard.role, _locale(vcard.role)))
        for category in vcard.categories:
            lines.append(line(CATEGORIES_TYPE, category, _locale(category)))
        for note in vcard.notes:
            lines.append(line(NOTE_TYPE, note, _locale(note)))
        if vcard.url is not None:
            lines.append(line(URL_TYPE, vcard.url))
        lines.extend(vcard.content_lines)
        lines.append(line(base.END_TYPE, LocaledText(VCARD_PROFILE_NAME)))
        return lines


def _locale(text):
    return getattr(text, "locale", None)


# ------------------------------ Value parsing ---------------------------------
def parse_birthday(text: str, line_number=None):
    """A date, or a date-time as some producers write."""
    text = text.strip()
    try:
        return ISO_PARSER.parse_isodate(text)
    except ValueError:
        pass
    try:
        return isoparse(text)
    except ValueError as e:
        raise ValueTypeError(f"Invalid birthday {text!r}: {e}", line_number) from e


def parse_utc_offset(text: str, line_number=None) -> tz.tzoffset:
    match = UTC_OFFSET.match(text.strip())
    if not match:
        raise ValueTypeError(f"Invalid UTC offset {text!r}.", line_number)
    sign, hours, minutes = match.groups()
    seconds = int(hours) * 3600 + int(minutes) * 60
    return tz.tzoffset(None, -seconds if sign == "-" else seconds)


def format_utc_offset(offset: dt.timedelta) -> str:
    seconds = int(offset.total_seconds())
    sign = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(seconds), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


def parse_geo(text: str, line_number=None) -> tuple[float, float]:
    parts = text.split(Delimiter.STRUCTURED)
    if len(parts) != 2:
        raise ValueTypeError(f"GEO needs a latitude and a longitude, got {text!r}.", line_number)
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as e:
        raise ValueTypeError(f"Invalid GEO {text!r}: {e}", line_number) from e


def as_vcard(directory, line_number=None) -> VCard:
    if not isinstance(directory, VCard):
        raise DirectoryError("The directory is not a vCard.", line_number)
    return directory


# ------------------------------- Reading/writing ------------------------------
def read_vcard(stream, registry=None, **kwargs) -> VCard:
    """Read one vCard from a string, UTF-8 bytes or a stream."""
    return as_vcard(DirectoryProcessor(registry, **kwargs).process_directory(stream))


def read_vcards(stream, registry=None, **kwargs) -> list[VCard]:
    """Read every top-level VCARD block of a stream."""
    processor = DirectoryProcessor(registry, **kwargs)
    profile = processor.registry.get_profile(VCARD_PROFILE_NAME)
    if profile is None:
        raise DirectoryError(f"No {VCARD_PROFILE_NAME} profile is registered.")
    vcards, block, depth = [], [], 0
    for line in processor.process_content_lines(stream):
        key = line.name.upper()
        if depth == 0 and key != base.BEGIN_TYPE:
            logger.info(f"Skipping {line.name} outside of any vCard")
            continue
        block.append(line)
        if key == base.BEGIN_TYPE:
            depth += 1
        elif key == base.END_TYPE:
            depth -= 1
            if depth == 0:
                vcards.append(as_vcard(profile.create_directory(block), line.line_number))
                block = []
    return vcards


def write_vcard(vcard: VCard, buf=None, single_value_names=(), registry=None):
    """Write a vCard to buf, or return it as a string if buf is None."""
    return write_content_lines(
        vcard_profile.create_content_lines(vcard), buf, registry, single_value_names=single_value_names
    )


def write_vcards(vcards, buf=None, single_value_names=(), registry=None):
    """Write vCards one after the other; single values are combined within each vCard."""
    outbuf = buf or get_buffer()
    for vcard in vcards:
        write_vcard(vcard, outbuf, single_value_names, registry)
    return buf or outbuf.getvalue()


# ------------------------ Registration ----------------------------------------
vcard_profile = VCardProfile(default_registry)
register_profile(VCARD_PROFILE_NAME, vcard_profile)
for _value_type in VCardProfile.value_codec_types:
    register_value_factory(_value_type, vcard_profile)
    register_value_serializer(_value_type, vcard_profile)
