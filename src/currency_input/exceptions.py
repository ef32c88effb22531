"""Exceptions raised by the currency input engine."""


class CurrencyInputError(Exception):
    """Base exception for all currency input errors."""

    pass


class ConfigurationError(CurrencyInputError, ValueError):
    """Raised when an option set cannot be turned into a usable configuration.

    Only raised while building a configuration, never per keystroke.
    """

    pass
