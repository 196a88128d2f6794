"""
randpass.pool
Character classes, pool construction and class-presence checks.
"""

import string
from typing import TYPE_CHECKING, Iterable, List, NamedTuple

from .errors import ValidationError

if TYPE_CHECKING:
    from .generator import GenerationOptions

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
NUMBERS = string.digits
DEFAULT_SYMBOLS = "!@#$%^&*()+_-=}{[]|:;\"/?.><,`~"

# exact membership, not a similarity heuristic
SIMILAR_CHARACTERS = frozenset("ilLI|`oO0")


class CharacterClass(NamedTuple):
    name: str
    charset: str


def symbol_charset(options: "GenerationOptions") -> str:
    return options.symbols_string or DEFAULT_SYMBOLS


def enabled_classes(options: "GenerationOptions") -> List[CharacterClass]:
    """Enabled classes in pool order: lowercase, uppercase, numbers, symbols."""
    classes = []
    if options.lowercase:
        classes.append(CharacterClass("lowercase", LOWERCASE))
    if options.uppercase:
        classes.append(CharacterClass("uppercase", UPPERCASE))
    if options.numbers:
        classes.append(CharacterClass("numbers", NUMBERS))
    if options.symbols:
        classes.append(CharacterClass("symbols", symbol_charset(options)))
    return classes


def build_pool(options: "GenerationOptions") -> str:
    """
    Build the candidate characters for one generation call.

    Duplicates are kept on purpose: a custom symbol string overlapping a
    built-in class makes the shared characters more likely to be drawn.
    Raises ValidationError when nothing is left to draw from.
    """
    classes = enabled_classes(options)
    if not classes:
        raise ValidationError("no character classes selected")

    pool = "".join(c.charset for c in classes)
    if options.exclude_similar_characters:
        pool = "".join(ch for ch in pool if ch not in SIMILAR_CHARACTERS)
    if options.exclude:
        excluded = set(options.exclude)
        pool = "".join(ch for ch in pool if ch not in excluded)

    if not pool:
        raise ValidationError("character pool is empty after exclusions")
    return pool


def missing_classes(password: str, classes: Iterable[CharacterClass]) -> List[str]:
    """Names of the classes with no character present in `password`."""
    present = set(password)
    return [c.name for c in classes if present.isdisjoint(c.charset)]
