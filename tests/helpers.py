from contextlib import contextmanager

from sqlalchemy import Column, Integer, String, event, func, select

LANGUAGES = ["FR", "EN", "ES"]
DEFAULT_LANGUAGE = "FR"


def define_test_model(i18n, name="TestModel", localized=("label",), **kwargs):
    return i18n.define(
        name,
        {
            "__tablename__": "test_models",
            "id": Column(Integer, primary_key=True, autoincrement=True),
            "label": Column(String(255)),
            "description": Column(String(255)),
            "reference": Column(String(255)),
        },
        localized=list(localized),
        **kwargs,
    )


def translation_rows(session, model, parent_id=None):
    """Translation table rows as mappings, read straight from the database."""
    table = model.__mapper__.relationships[f"{model.__name__}_i18n"].mapper.local_table
    stmt = select(table).order_by(table.c.id)
    if parent_id is not None:
        stmt = stmt.where(table.c.parent_id == parent_id)
    return session.execute(stmt).mappings().all()


def count_rows(session, model):
    return session.execute(select(func.count()).select_from(model)).scalar()


def reload(session_factory, model, ident):
    """Load `ident` in a new session; eager-loaded state stays usable after close."""
    with session_factory() as other:
        return other.get(model, ident)


@contextmanager
def recorded_statements(engine):
    """Collect the SQL text of every statement sent to `engine`."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", record)


@contextmanager
def competing_insert(engine, table_name, row_sql):
    """
    Run `row_sql` on the same cursor just before the first INSERT into `table_name`,
    as another writer committing the same key between our read and our write would.
    """
    fired = []

    def insert_first(conn, cursor, statement, parameters, context, executemany):
        if not fired and statement.startswith(f"INSERT INTO {table_name}"):
            fired.append(statement)
            cursor.execute(row_sql)

    event.listen(engine, "before_cursor_execute", insert_first)
    try:
        yield fired
    finally:
        event.remove(engine, "before_cursor_execute", insert_first)
