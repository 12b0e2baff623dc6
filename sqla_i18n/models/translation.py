# File: sqla_i18n/models/translation.py
# Synthesizes the <BaseName>_i18n translation model from a base model's localized columns.
# One row per (parent, language); id is synthetic, no timestamp columns.

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from ..exceptions import I18nConfigError

RESERVED_COLUMNS = ("id", "parent_id", "language_id")


def build_translation_model(base, name, table_name, parent_column, localized_columns, language_type):
    """
    Define and return the translation model class.

    base: declarative base shared with the parent model
    name: translation class name (<BaseName>_i18n)
    table_name: translation table name
    parent_column: "<table>.<column>" the parent_id foreign key points to, with its column type
    localized_columns: ordered {field name: Column} taken from the parent definition
    language_type: SQLAlchemy type of language_id
    """
    if not localized_columns:
        raise I18nConfigError("Could not create i18n model without attributes.")

    target, parent_type = parent_column
    attributes = {
        "__tablename__": table_name,
        "__table_args__": (
            UniqueConstraint("parent_id", "language_id", name=f"uq_{table_name}_parent_language"),
        ),
        "id": Column(Integer, primary_key=True, autoincrement=True),
        "parent_id": Column(parent_type, ForeignKey(target, ondelete="CASCADE"), nullable=False, index=True),
        "language_id": Column(language_type, nullable=False),
    }
    for field, column in localized_columns.items():
        if field in RESERVED_COLUMNS:
            raise I18nConfigError(f"Localized field '{field}' collides with a translation column.")
        attributes[field] = Column(column.type, nullable=True)

    attributes["__repr__"] = _translation_repr
    return type(base)(name, (base,), attributes)


def _translation_repr(self):
    # __dict__ so repr never triggers a load
    values = self.__dict__
    return f"<{type(self).__name__}(parent_id={values.get('parent_id')}, language_id={values.get('language_id')!r})>"
