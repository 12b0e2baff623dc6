# File: sqla_i18n/hooks/storage.py
# Translation row writes shared by the mapper hooks and set_i18n. Both hand in a
# Connection (the flush connection, or session.connection()).
# Inserts on a (parent_id, language_id) key go through INSERT ... ON CONFLICT, never a prior SELECT.

import logging
from sqlalchemy import delete, inspect, literal_column, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import object_session
from sqlalchemy.orm.attributes import set_committed_value

from ..exceptions import I18nConfigError

log = logging.getLogger(__name__)

RELOAD_KEY = "_i18n_reload"
CONFLICT_KEY = ["parent_id", "language_id"]

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def parent_id_of(instance, association):
    """Parent key value. Persistent instances answer from their identity, so expired ones are not loaded."""
    state = inspect(instance)
    if state.identity is not None:
        mapper = state.mapper
        for column, value in zip(mapper.primary_key, state.identity):
            if mapper.get_property_by_column(column).key == association.parent_key:
                return value
    return getattr(instance, association.parent_key)


def _insert_for(connection):
    dialect_name = connection.dialect.name
    insert = _DIALECT_INSERTS.get(dialect_name)
    if insert is None:
        raise I18nConfigError(f"Translation upserts are not supported on {dialect_name}.")
    return insert


def insert_if_missing(connection, table, row: dict) -> bool:
    """INSERT ... ON CONFLICT DO NOTHING on (parent_id, language_id). True when the row was created."""
    stmt = (
        _insert_for(connection)(table)
        .values(**row)
        .on_conflict_do_nothing(index_elements=CONFLICT_KEY)
        .returning(table.c.id)
    )
    return connection.execute(stmt).first() is not None


def upsert(connection, table, parent_id, language_id, values: dict) -> bool:
    """Insert or update one translation row atomically. True when created."""
    row = dict(values, parent_id=parent_id, language_id=language_id)
    if connection.dialect.name == "postgresql" and values:
        # xmax is 0 only for a freshly inserted tuple
        stmt = (
            postgresql.insert(table)
            .values(**row)
            .on_conflict_do_update(index_elements=CONFLICT_KEY, set_=values)
            .returning(literal_column("xmax = 0"))
        )
        return bool(connection.execute(stmt).scalar())

    if insert_if_missing(connection, table, row):
        return True
    if values:
        connection.execute(
            update(table)
            .where(table.c.parent_id == parent_id, table.c.language_id == language_id)
            .values(**values)
        )
    return False


def delete_translations(connection, table, parent_id) -> int:
    result = connection.execute(delete(table).where(table.c.parent_id == parent_id))
    return result.rowcount


def schedule_reload(instance, association):
    """Queue the instance so its translation collection is reloaded once the flush completes."""
    session = object_session(instance)
    if session is None:
        return
    session.info.setdefault(RELOAD_KEY, []).append((instance, association))


def discard_reload(session, previous_transaction):
    """after_soft_rollback listener: drop reloads queued by a flush that did not complete."""
    session.info.pop(RELOAD_KEY, None)


def reload_translations(session, flush_context):
    """after_flush_postexec listener: refresh translation collections touched by the hooks."""
    scheduled = session.info.pop(RELOAD_KEY, None)
    if not scheduled:
        return
    for instance, association in scheduled:
        if not inspect(instance).persistent:
            continue
        model = association.translation_model
        parent_id = parent_id_of(instance, association)
        stmt = (
            select(model)
            .where(model.parent_id == parent_id)
            .order_by(model.id)
            .execution_options(populate_existing=True, autoflush=False)
        )
        rows = session.execute(stmt).scalars().all()
        set_committed_value(instance, association.relationship_key, rows)
        log.debug(f"[I18N HOOK] Reloaded {len(rows)} translation rows for {association.base_name} {parent_id}")
