# File: sqla_i18n/registry.py
# SQLAlchemyI18n: language configuration plus the registry of base models and their
# generated <BaseName>_i18n translation models.
#
# Usage:
#   i18n = SQLAlchemyI18n(Base, languages=["FR", "EN", "ES"], default_language="FR").init(SessionLocal)
#   Product = i18n.define("Product", {"__tablename__": "products", "id": Column(Integer, primary_key=True),
#                                     "label": Column(String), "reference": Column(String)},
#                         localized=["label"])

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import Session, relationship

from . import config
from .exceptions import I18nArgumentError, I18nConfigError
from .hooks import install_model_hooks, install_reload_listener
from .instance_methods import make_getter, make_setter, make_updater
from .models import Base, LocalizedAttribute, build_translation_model, make_constructor
from .scopes import (
    add_i18n_scope,
    default_scope_lazy,
    inject_i18n_scope,
    localized_criteria,
    resolve_scope,
)
from .utils import get_language_array_type

log = logging.getLogger(__name__)


def get_i18n_name(model_name: str) -> str:
    """Translation model name for a base model name."""
    return f"{model_name}{config.I18N_SUFFIX}"


def _language_column_type(languages):
    if get_language_array_type(languages) == "INTEGER":
        return Integer()
    return String(config.LANGUAGE_ID_LENGTH)


def _as_column(value) -> Optional[Column]:
    if isinstance(value, Column):
        return value
    # mapped_column() wraps its Column
    column = getattr(value, "column", None)
    if isinstance(column, Column):
        return column
    return None


def _default(value, fallback):
    return fallback if value is None else value


@dataclass
class I18nAssociation:
    """Link between a base model and its translation model."""
    base_name: str
    translation_name: str
    localized_fields: Tuple[str, ...]
    translation_model: Any
    parent_key: str
    relationship_key: str
    base_model: Any = None
    scopes: Dict[str, Callable] = field(default_factory=dict)


class SQLAlchemyI18n:
    """
    Per-row translation storage for SQLAlchemy declarative models.

    base: declarative base generated models attach to (sqla_i18n.models.Base by default)
    languages: non-empty list of allowed language ids (strings or numbers)
    default_language: member of languages, used when no language is given
    default_language_fallback: get_i18n falls back to the default language row
    i18n_default_scope: eager-load translations on every lookup
    add_i18n_scope: register the named "i18n" scope
    inject_i18n_scope: append the translation loader to user scopes
    primary_key: base attribute used as parent key (single primary key column by default)
    """

    get_i18n_name = staticmethod(get_i18n_name)

    def __init__(
        self,
        base=None,
        languages=None,
        default_language=None,
        default_language_fallback=None,
        i18n_default_scope=None,
        add_i18n_scope=None,
        inject_i18n_scope=None,
        primary_key=None,
    ):
        if not (languages and isinstance(languages, (list, tuple))):
            raise I18nConfigError("Languages list is mandatory and can not be empty.")
        self.languages = list(languages)
        if default_language is not None and not self.is_valid_language(default_language):
            raise I18nConfigError("Default language is invalid.")
        self.default_language = default_language

        self.base = base if base is not None else Base
        self.primary_key = primary_key
        self.default_language_fallback = _default(default_language_fallback, config.DEFAULT_LANGUAGE_FALLBACK)
        self.i18n_default_scope = _default(i18n_default_scope, config.I18N_DEFAULT_SCOPE)
        self.add_i18n_scope = _default(add_i18n_scope, config.ADD_I18N_SCOPE)
        self.inject_i18n_scope = _default(inject_i18n_scope, config.INJECT_I18N_SCOPE)
        self.language_type = _language_column_type(self.languages)

        self.i18n_models: Dict[str, I18nAssociation] = {}
        self.model_scopes: Dict[str, Dict[str, Callable]] = {}

    # ------------------ Languages ------------------

    def is_valid_language(self, language) -> bool:
        return language in self.languages

    def resolve_language(self, language):
        """`language`, or the default when empty. Raises I18nArgumentError when none or not allowed."""
        if language is None or language == "":
            language = self.default_language
        if language is None:
            raise I18nArgumentError("No language given.")
        if not self.is_valid_language(language):
            raise I18nArgumentError(f"Language {language!r} is not in the languages list.")
        return language

    # ------------------ Registry ------------------

    def get_i18n_model(self, model_name: str) -> Optional[I18nAssociation]:
        """Association for a base model name, None when the model has no translations."""
        return self.i18n_models.get(model_name)

    def _parent_key(self, name, attributes):
        if self.primary_key is not None:
            column = _as_column(attributes.get(self.primary_key))
            if column is None or not column.primary_key:
                raise I18nConfigError(f"Primary key '{self.primary_key}' is not a primary key column of {name}.")
            return self.primary_key, column

        keys = [key for key, value in attributes.items()
                if _as_column(value) is not None and _as_column(value).primary_key]
        if len(keys) != 1:
            raise I18nConfigError(f"{name} needs exactly one primary key column, found {len(keys)}.")
        return keys[0], _as_column(attributes[keys[0]])

    def create_i18n_model(self, name, attributes, localized, base_model_name) -> I18nAssociation:
        """Define the translation model `name` for the localized columns of `base_model_name`."""
        table_name = attributes.get("__tablename__")
        if not table_name:
            raise I18nConfigError(f"{base_model_name} needs a __tablename__.")

        localized_columns = {}
        for field_name in localized:
            column = _as_column(attributes.get(field_name))
            if column is None:
                raise I18nConfigError(f"Localized field '{field_name}' is not a column of {base_model_name}.")
            localized_columns[field_name] = column

        parent_key, parent_column = self._parent_key(base_model_name, attributes)
        target = f"{table_name}.{parent_column.name or parent_key}"
        translation_model = build_translation_model(
            self.base,
            name,
            f"{table_name}{config.I18N_SUFFIX}",
            (target, parent_column.type),
            localized_columns,
            self.language_type,
        )
        return I18nAssociation(
            base_name=base_model_name,
            translation_name=name,
            localized_fields=tuple(localized_columns),
            translation_model=translation_model,
            parent_key=parent_key,
            relationship_key=name,
        )

    # ------------------ Scopes ------------------

    def set_default_scope(self, association) -> str:
        return default_scope_lazy(self.i18n_default_scope)

    def _build_scopes(self, scopes, association):
        if association is None:
            return scopes
        if self.inject_i18n_scope:
            inject_i18n_scope(scopes, association)
        if self.add_i18n_scope:
            add_i18n_scope(scopes, association)
        return scopes

    def scope(self, model, name, *args, **kwargs) -> list:
        """Loader options of the named scope of `model`. KeyError for an unknown scope."""
        return resolve_scope(self.model_scopes.get(model.__name__, {}), name, *args, **kwargs)

    def apply_scope(self, statement, model, name, *args, **kwargs):
        return statement.options(*self.scope(model, name, *args, **kwargs))

    def localized_filter(self, model, language=None, **criteria):
        """WHERE expression on localized values, e.g. select(Product).where(i18n.localized_filter(Product, label="x"))."""
        association = self.get_i18n_model(model.__name__)
        if association is None:
            raise I18nArgumentError(f"{model.__name__} has no localized fields.")
        for key in criteria:
            if key not in association.localized_fields:
                raise I18nArgumentError(f"'{key}' is not a localized field of {model.__name__}.")
        return localized_criteria(association, language, **criteria)

    # ------------------ Models ------------------

    def set_instance_methods(self, model, association):
        model.get_i18n = make_getter(self, association)
        model.set_i18n = make_setter(self, association)
        model.update_i18n = make_updater(self, association)

    def define(self, name, attributes, localized=(), scopes=None, bases=()):
        """
        Define declarative model `name` from `attributes` (a class namespace).
        Fields listed in `localized` are stored in a generated translation model.
        """
        if name in self.i18n_models:
            raise I18nConfigError(f"{name} is already defined.")
        localized = list(dict.fromkeys(localized or ()))
        scope_map = dict(scopes or {})
        class_bases = tuple(bases) + (self.base,)

        if not localized:
            model = type(self.base)(name, class_bases, dict(attributes))
            self.model_scopes[name] = scope_map
            log.debug(f"[I18N] {name} has no localized fields")
            return model

        association = self.create_i18n_model(get_i18n_name(name), attributes, localized, name)

        class_attributes = {key: value for key, value in attributes.items() if key not in localized}
        for field_name in localized:
            class_attributes[field_name] = LocalizedAttribute(self, _as_column(attributes[field_name]))
        class_attributes.setdefault("__init__", make_constructor(association.localized_fields))
        class_attributes[association.relationship_key] = relationship(
            association.translation_model,
            lazy=self.set_default_scope(association),
            order_by=association.translation_model.id,
            passive_deletes="all",
        )

        model = type(self.base)(name, class_bases, class_attributes)
        association.base_model = model
        association.scopes = self._build_scopes(scope_map, association)
        self.model_scopes[name] = association.scopes
        self.set_instance_methods(model, association)
        install_model_hooks(self, model)
        self.i18n_models[name] = association

        log.info(f"[I18N] Defined {name} with {association.translation_name} ({', '.join(association.localized_fields)})")
        return model

    def init(self, session_factory=None):
        """
        Install the post-flush translation reload on `session_factory`
        (a sessionmaker, Session subclass or session; the Session class when omitted).
        """
        target = session_factory if session_factory is not None else Session
        install_reload_listener(target)
        log.info(f"[I18N] Initialized with languages {self.languages}, default {self.default_language!r}")
        return self
