from .type_utils import to_array, get_language_array_type

__all__ = ['to_array', 'get_language_array_type']
