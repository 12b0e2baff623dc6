from .get_i18n import make_getter, loaded_translations
from .set_i18n import make_setter, make_updater

__all__ = ['make_getter', 'make_setter', 'make_updater', 'loaded_translations']
