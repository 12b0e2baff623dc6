from .base import Base, make_base
from .localized import LocalizedAttribute, make_constructor
from .translation import build_translation_model, RESERVED_COLUMNS

__all__ = [
    'Base', 'make_base', 'LocalizedAttribute', 'make_constructor',
    'build_translation_model', 'RESERVED_COLUMNS'
]
