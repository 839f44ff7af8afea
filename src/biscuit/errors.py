"""Biscuit exception hierarchy.

Parsing and verification never raise for malformed input; these types
cover misconfiguration and the one fatal case, failing to sign.
"""


class BiscuitError(Exception):
    """Base for all biscuit-specific errors."""


class ConfigurationError(BiscuitError):
    """Raised when a storage is built from an invalid configuration.

    Typically raised by ``CookieStorage.__init__``.
    """


class SigningError(BiscuitError):
    """Raised when a signature cannot be produced.

    Verification folds every failure into ``False``; signing has no safe
    fallback, so the underlying cause is chained onto this error.
    """
