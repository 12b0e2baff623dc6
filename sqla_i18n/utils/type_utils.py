# File: sqla_i18n/utils/type_utils.py
# Small helpers shared by the registry and scope builders.

from numbers import Number


def to_array(value):
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def get_language_array_type(languages) -> str:
    """
    Column type name for language ids.
    "INTEGER" when every language is a number, "STRING" otherwise (mixed lists included).
    """
    for language in languages:
        if not _is_number(language):
            return "STRING"
    return "INTEGER"
