"""
randpass
Random password generation from a configurable character pool.
"""

from .errors import PasswordGenerationError, RandomSourceError, RetryLimitError, ValidationError
from .generator import GenerationOptions, PasswordGenerator, generate, generate_multiple

__all__ = [
    "GenerationOptions",
    "PasswordGenerator",
    "generate",
    "generate_multiple",
    "PasswordGenerationError",
    "ValidationError",
    "RandomSourceError",
    "RetryLimitError",
]

__version__ = "1.0.0"
