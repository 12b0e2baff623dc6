# Services package initialization
from .db_utils import build_engine, session_scope

__all__ = ['build_engine', 'session_scope']
