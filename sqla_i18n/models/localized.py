# File: sqla_i18n/models/localized.py
# Localized fields live on base instances as plain (non-mapped) attributes.
# Writes are kept as pending per language until the next flush routes them to the translation table.

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import flag_dirty

VALUES_KEY = "_i18n_values"
PENDING_KEY = "_i18n_pending"
LANGUAGE_KEY = "_i18n_language_id"


def localized_values(instance) -> dict:
    return instance.__dict__.setdefault(VALUES_KEY, {})


def pending_values(instance) -> dict:
    """language_id -> {field: value} waiting for the next flush."""
    return instance.__dict__.setdefault(PENDING_KEY, {})


def pop_pending(instance) -> dict:
    return instance.__dict__.pop(PENDING_KEY, None) or {}


def creation_language(instance):
    return instance.__dict__.get(LANGUAGE_KEY)


def project(instance, values: dict):
    """Copy values onto the instance without marking them for persistence."""
    localized_values(instance).update(values)


def mark_pending(instance, language_id, values: dict):
    pending_values(instance).setdefault(language_id, {}).update(values)
    localized_values(instance).update(values)
    state = inspect(instance)
    if state.has_identity:
        # No mapped column changed; force the instance through the next flush
        flag_dirty(instance)


class LocalizedAttribute:
    """Data descriptor for one localized field of a base model."""

    def __init__(self, registry, column):
        self.registry = registry
        self.column = column
        self.key = None

    def __set_name__(self, owner, name):
        self.key = name

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return localized_values(instance).get(self.key)

    def __set__(self, instance, value):
        language_id = creation_language(instance)
        if language_id is None:
            language_id = self.registry.default_language
        mark_pending(instance, language_id, {self.key: value})


def make_constructor(localized_fields):
    """
    __init__ for base models: accepts mapped attributes, localized fields
    and the `language_id` creation option.
    """

    def __init__(self, **kwargs):
        language_id = kwargs.pop("language_id", None)
        if language_id is not None:
            self.__dict__[LANGUAGE_KEY] = language_id
        cls = type(self)
        for key, value in kwargs.items():
            if key not in localized_fields and not hasattr(cls, key):
                raise TypeError(f"{key!r} is an invalid keyword argument for {cls.__name__}")
            setattr(self, key, value)

    return __init__
