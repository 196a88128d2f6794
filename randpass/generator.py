"""
randpass.generator
Secure password generator built on an unbiased sampler over os-level random bytes.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Optional

from .entropy import RandomByteSource, UnbiasedSampler
from .errors import PasswordGenerationError, RandomSourceError, RetryLimitError, ValidationError
from .pool import build_pool, enabled_classes, missing_classes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOptions:
    length: int = 10
    lowercase: bool = True
    uppercase: bool = True
    numbers: bool = False
    symbols: bool = False
    exclude: str = ""
    exclude_similar_characters: bool = False
    strict: bool = False
    # replaces the default symbol set when symbols are enabled
    symbols_string: Optional[str] = None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PasswordGenerator:
    """
    Generate passwords according to GenerationOptions.

    The generator owns its random buffer, so an instance must not be shared
    between threads without external locking.

    :param source: byte source to draw from (default: a fresh RandomByteSource)
    :param max_attempts: cap on strict-mode draws; None retries until satisfied
    """

    def __init__(self, source: Optional[RandomByteSource] = None,
                 max_attempts: Optional[int] = None):
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be > 0")
        self.sampler = UnbiasedSampler(source)
        self.max_attempts = max_attempts

    def _validate(self, options: GenerationOptions) -> None:
        if not _is_int(options.length) or options.length < 1:
            raise ValidationError("length must be > 0")
        if options.strict:
            required = len(enabled_classes(options))
            if required > options.length:
                raise ValidationError("length must correlate with strict guidelines")

    def _draw(self, pool: str, length: int) -> str:
        return "".join(pool[self.sampler.next_index(len(pool))] for _ in range(length))

    def generate(self, options: GenerationOptions) -> str:
        """Generate one password. Nothing is drawn if the options are invalid."""
        self._validate(options)
        pool = build_pool(options)
        classes = enabled_classes(options) if options.strict else []

        for cls in classes:
            if not any(ch in pool for ch in cls.charset):
                raise ValidationError(
                    f"strict mode cannot be satisfied: no {cls.name} characters left in the pool")

        attempts = 0
        try:
            while True:
                attempts += 1
                password = self._draw(pool, options.length)
                missing = missing_classes(password, classes)
                if not missing:
                    return password
                logger.debug("strict check failed on attempt %d (missing: %s)",
                             attempts, ", ".join(missing))
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise RetryLimitError(
                        f"strict mode not satisfied after {attempts} attempts")
        except RandomSourceError as e:
            raise RandomSourceError("failed to generate password") from e

    def generate_multiple(self, count: int, options: GenerationOptions) -> List[str]:
        """Generate `count` passwords. The first failure aborts the whole batch."""
        if not _is_int(count) or count < 0:
            raise ValidationError("count must be a non-negative integer")
        passwords = []
        for i in range(count):
            try:
                passwords.append(self.generate(options))
            except PasswordGenerationError as e:
                raise type(e)(f"failed to generate password #{i + 1}: {e}") from e
            logger.debug("generated password %d of %d", i + 1, count)
        return passwords


def _resolve(options: Optional[GenerationOptions], overrides) -> GenerationOptions:
    if options is None:
        return GenerationOptions(**overrides)
    if overrides:
        return dataclasses.replace(options, **overrides)
    return options


def generate(options: Optional[GenerationOptions] = None, **overrides) -> str:
    """
    Generate a cryptographically secure password.

    Either pass GenerationOptions or individual fields as keyword arguments;
    keywords given together with `options` override its fields.
    """
    return PasswordGenerator().generate(_resolve(options, overrides))


def generate_multiple(count: int, options: Optional[GenerationOptions] = None,
                      **overrides) -> List[str]:
    return PasswordGenerator().generate_multiple(count, _resolve(options, overrides))
