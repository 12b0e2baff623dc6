class I18nError(Exception):
    """Base class for sqla_i18n errors."""


class I18nConfigError(I18nError, ValueError):
    """Invalid plugin or model configuration, raised at setup time."""


class I18nArgumentError(I18nError, ValueError):
    """Invalid language or property passed to a translation write."""
