"""
sqla_i18n: per-row, per-language translation tables for SQLAlchemy models.
"""
from .exceptions import I18nError, I18nConfigError, I18nArgumentError
from .models import Base, make_base
from .registry import SQLAlchemyI18n, I18nAssociation, get_i18n_name
from .services import build_engine, session_scope

__all__ = [
    'SQLAlchemyI18n', 'I18nAssociation', 'get_i18n_name',
    'I18nError', 'I18nConfigError', 'I18nArgumentError',
    'Base', 'make_base', 'build_engine', 'session_scope'
]
