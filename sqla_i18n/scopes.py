# File: sqla_i18n/scopes.py
# Named scopes are lists of loader options applied to a select() with .options().
# The translation loader leaves id and parent_id unloaded.

from sqlalchemy import and_
from sqlalchemy.orm import selectinload

from .utils import to_array


def default_scope_lazy(enabled: bool) -> str:
    """Relationship loading strategy: eager "selectin" when the default scope is on."""
    return "selectin" if enabled else "select"


def i18n_loader(association, language=None):
    model = association.translation_model
    relationship_attr = getattr(association.base_model, association.relationship_key)
    if language is not None:
        relationship_attr = relationship_attr.and_(model.language_id == language)
    columns = [model.language_id] + [getattr(model, field) for field in association.localized_fields]
    return selectinload(relationship_attr).load_only(*columns)


def add_i18n_scope(scopes: dict, association):
    def i18n(language=None):
        return [i18n_loader(association, language)]

    scopes["i18n"] = i18n
    return scopes


def _injected(scope, association):
    def scoped(*args, **kwargs):
        options = to_array(scope(*args, **kwargs) if callable(scope) else scope)
        return list(options) + [i18n_loader(association)]

    return scoped


def inject_i18n_scope(scopes: dict, association):
    for name in list(scopes):
        scopes[name] = _injected(scopes[name], association)
    return scopes


def resolve_scope(scopes: dict, name, *args, **kwargs) -> list:
    scope = scopes[name]
    return list(to_array(scope(*args, **kwargs) if callable(scope) else scope))


def localized_criteria(association, language=None, **criteria):
    """Expression matching base rows having a translation row with the given localized values."""
    model = association.translation_model
    clauses = [getattr(model, field) == value for field, value in criteria.items()]
    if language is not None:
        clauses.append(model.language_id == language)
    relationship_attr = getattr(association.base_model, association.relationship_key)
    if not clauses:
        return relationship_attr.any()
    return relationship_attr.any(and_(*clauses))
