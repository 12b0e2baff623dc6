import logging

from ..models.localized import pending_values, pop_pending
from .storage import parent_id_of, schedule_reload, upsert

log = logging.getLogger(__name__)


def after_update(registry):
    """after_update handler: upsert localized values written since the last flush, per language."""

    def handler(mapper, connection, target):
        association = registry.get_i18n_model(mapper.class_.__name__)
        if association is None:
            return

        pending = pending_values(target)
        if not pending:
            return

        table = association.translation_model.__table__
        parent_id = parent_id_of(target, association)
        for language, values in list(pending.items()):
            language_id = registry.resolve_language(language)
            created = upsert(connection, table, parent_id, language_id, values)
            log.debug(f"[I18N HOOK] {association.translation_name} {parent_id}/{language_id} created={created}")

        pop_pending(target)
        schedule_reload(target, association)

    return handler
