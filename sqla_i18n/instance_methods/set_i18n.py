import logging
from sqlalchemy import inspect
from sqlalchemy.orm import object_session
from sqlalchemy.orm.exc import DetachedInstanceError

from ..exceptions import I18nArgumentError
from ..hooks.storage import parent_id_of, upsert
from ..models.localized import creation_language, mark_pending

log = logging.getLogger(__name__)


def _is_unset(value) -> bool:
    return value is None or value == ""


def make_setter(registry, association):

    def set_i18n(self, lang, property_name, value):
        """
        Upsert one localized property for `lang` (default language when empty).
        Returns True when the translation row was created, False when updated.
        The in-memory instance is not refreshed.
        """
        if _is_unset(lang) and registry.default_language is None:
            raise I18nArgumentError("No language given.")
        if not property_name:
            raise I18nArgumentError("Property name to update is missing.")
        if property_name not in association.localized_fields:
            raise I18nArgumentError(f"'{property_name}' is not a localized field of {association.base_name}.")
        language_id = registry.resolve_language(lang)

        session = object_session(self)
        if session is None:
            raise DetachedInstanceError(f"{association.base_name} instance is not bound to a Session.")
        if inspect(self).pending:
            session.flush()

        parent_id = parent_id_of(self, association)
        table = association.translation_model.__table__
        created = upsert(session.connection(), table, parent_id, language_id, {property_name: value})
        log.info(f"[I18N] set_i18n {association.base_name} {parent_id} {language_id}.{property_name} created={created}")
        return created

    return set_i18n


def make_updater(registry, association):
    localized_fields = association.localized_fields

    def update_i18n(self, values: dict, language_id=None):
        """
        Set attributes; localized ones are written to the `language_id` translation
        on the next flush, the others to the base row.
        """
        if language_id is None:
            language_id = creation_language(self)
        language_id = registry.resolve_language(language_id)

        localized = {}
        for key, value in values.items():
            if key in localized_fields:
                localized[key] = value
            else:
                setattr(self, key, value)
        if localized:
            mark_pending(self, language_id, localized)
        return self

    return update_i18n
