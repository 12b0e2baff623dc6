import logging
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import I18nError
from ..models.localized import creation_language, pending_values, pop_pending
from .storage import insert_if_missing, parent_id_of, schedule_reload, upsert

log = logging.getLogger(__name__)


def after_create(registry):
    """
    after_insert handler: find-or-create the translation row for the creation language.

    The write runs on the flush connection, inside the same transaction as the base
    INSERT. A failure re-raises the original error and the flush rollback removes the
    base row with it.
    """

    def handler(mapper, connection, target):
        association = registry.get_i18n_model(mapper.class_.__name__)
        if association is None:
            return

        table = association.translation_model.__table__
        parent_id = parent_id_of(target, association)
        pending = dict(pending_values(target))

        try:
            language_id = registry.resolve_language(creation_language(target))
            current = pending.pop(language_id, {})
            payload = {field: current.get(field) for field in association.localized_fields}
            payload["language_id"] = language_id
            payload["parent_id"] = parent_id

            # An existing row for this key is kept as found
            created = insert_if_missing(connection, table, payload)

            for other_language, values in pending.items():
                upsert(connection, table, parent_id, registry.resolve_language(other_language), values)
        except (SQLAlchemyError, I18nError) as e:
            log.error(
                f"[I18N HOOK] Translation write failed for {association.base_name} {parent_id}, "
                f"base row will not be kept: {e}"
            )
            raise

        pop_pending(target)
        log.debug(f"[I18N HOOK] {association.translation_name} {parent_id}/{language_id} created={created}")
        schedule_reload(target, association)

    return handler
