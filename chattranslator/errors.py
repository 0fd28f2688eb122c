from __future__ import annotations


class TranslationError(Exception):
    """Base class for every failure raised by a translation backend."""


class AuthenticationError(TranslationError):
    """Missing, rejected or unusable credentials."""


class APIError(TranslationError):
    """The service answered, but not with a usable translation payload."""
