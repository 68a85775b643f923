"""Exceptions raised by termwidgets."""


class ConfigurationError(ValueError):
    """Raised when a widget is constructed with invalid parameters."""
