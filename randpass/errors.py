"""
randpass.errors
Exception hierarchy shared by the generator, the CLI and the API.
"""


class PasswordGenerationError(Exception):
    """Base class for every error raised while generating passwords."""


class ValidationError(PasswordGenerationError, ValueError):
    """Options can never produce a password (raised before any randomness is drawn)."""


class RandomSourceError(PasswordGenerationError):
    """The secure random source could not supply bytes."""


class RetryLimitError(PasswordGenerationError):
    """Strict mode gave up after the configured number of attempts."""
