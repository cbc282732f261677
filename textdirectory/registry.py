"""Registries of profiles, value factories and value serializers, and the value type resolution shared by parsing and serializing."""

from __future__ import annotations

from . import base
from .helper import logger
from .profile import PredefinedProfile, read_value_text


class Registry:
    """
    Profiles keyed by profile name, and value factories and serializers keyed
    by value type. Keys are case-insensitive.

    The predefined profile is registered as the factory and serializer of the
    value types it knows.
    """

    def __init__(self, predefined_profile=None):
        self.predefined_profile = predefined_profile or PredefinedProfile()
        self.profiles = {}
        self.value_factories = {}
        self.value_serializers = {}
        for value_type in self.predefined_profile.value_codec_types:
            self.register_value_factory(value_type, self.predefined_profile)
            self.register_value_serializer(value_type, self.predefined_profile)

    # --------------------------------- Registering ----------------------------
    def register_profile(self, name, profile):
        self.profiles[name.lower()] = profile

    def get_profile(self, name):
        """Return the profile registered for name; None selects the predefined profile."""
        if name is None:
            return self.predefined_profile
        return self.profiles.get(name.lower())

    def register_value_factory(self, value_type, factory):
        self.value_factories[value_type.lower()] = factory

    def get_value_factory(self, value_type):
        return None if value_type is None else self.value_factories.get(value_type.lower())

    def register_value_serializer(self, value_type, serializer):
        self.value_serializers[value_type.lower()] = serializer

    def get_value_serializer(self, value_type):
        return None if value_type is None else self.value_serializers.get(value_type.lower())

    # --------------------------------- Resolving ------------------------------
    def resolve_value_type(self, profile_name, group, name, params):
        """
        Return the profile registered for profile_name (or None) and the value
        type of the line.

        The value type comes from the VALUE parameter, else from the line's
        profile, else from the predefined profile if that was not already the
        one asked.
        """
        profile = self.get_profile(profile_name)
        value_type = base.get_param_value(params, base.VALUE_PARAM)
        if value_type is None and profile is not None:
            value_type = profile.get_value_type(profile_name, group, name, params)
        if value_type is None and profile is not self.predefined_profile:
            value_type = self.predefined_profile.get_value_type(profile_name, group, name, params)
        return profile, value_type

    def create_values(self, profile_name, group, name, params, reader) -> list:
        """
        Read the value of a line from reader.

        The line's profile is asked first if it creates values, then the
        factory registered for the value type; otherwise the raw text is
        returned as a single string.
        """
        profile, value_type = self.resolve_value_type(profile_name, group, name, params)
        values = None
        if profile is not None and profile.is_value_factory:
            values = profile.create_values(profile_name, group, name, params, value_type, reader)
        if values is None:
            factory = self.get_value_factory(value_type)
            if factory is not None and factory is not profile:
                values = factory.create_values(profile_name, group, name, params, value_type, reader)
        if values is None:
            logger.debug(f"No value factory for {name} ({value_type}), keeping raw text")
            values = [read_value_text(reader)]
        return values

    def serialize_value(self, profile_name, group, name, params, value, writer):
        """Write a value the same way create_values reads it, falling back to str(value)."""
        profile, value_type = self.resolve_value_type(profile_name, group, name, params)
        if profile is not None and profile.is_value_serializer:
            if profile.serialize_value(profile_name, group, name, params, value, value_type, writer):
                return
        serializer = self.get_value_serializer(value_type)
        if serializer is not None and serializer is not profile:
            if serializer.serialize_value(profile_name, group, name, params, value, value_type, writer):
                return
        writer.write(str(value))


# ------------------------------ Default registry ------------------------------
default_registry = Registry()


def register_profile(name, profile):
    """Register a profile with the registry used by default."""
    default_registry.register_profile(name, profile)


def register_value_factory(value_type, factory):
    default_registry.register_value_factory(value_type, factory)


def register_value_serializer(value_type, serializer):
    default_registry.register_value_serializer(value_type, serializer)


def get_profile(name):
    return default_registry.get_profile(name)
