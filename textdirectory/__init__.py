"""
textdirectory: reading and writing text/directory (RFC 2425) and vCard 3.0 (RFC 2426) data.
"""

from .base import ContentLine, Directory, LocaledText
from .exceptions import (
    DirectoryError,
    ParseEOFError,
    ParseError,
    SerializeError,
    StructureError,
    UnexpectedDataError,
    ValueTypeError,
)
from .processor import DirectoryProcessor, read_content_lines, read_directory
from .profile import PredefinedProfile, Profile, ValueFactory, ValueSerializer
from .registry import Registry, default_registry, register_profile, register_value_factory, register_value_serializer
from .serializer import DirectorySerializer, write_content_lines
from .vcard import VCard, read_vcard, read_vcards, write_vcard, write_vcards

VERSION = "0.1.0"
