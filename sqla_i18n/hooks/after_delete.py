import logging

from .storage import delete_translations, parent_id_of

log = logging.getLogger(__name__)


def after_delete(registry):
    """after_delete handler: remove every translation row of the deleted parent."""

    def handler(mapper, connection, target):
        association = registry.get_i18n_model(mapper.class_.__name__)
        if association is None:
            return

        parent_id = parent_id_of(target, association)
        count = delete_translations(connection, association.translation_model.__table__, parent_id)
        log.debug(f"[I18N HOOK] Deleted {count} {association.translation_name} rows for {parent_id}")

    return handler
