import pytest

from randpass.errors import ValidationError
from randpass.generator import GenerationOptions
from randpass.pool import (
    DEFAULT_SYMBOLS,
    LOWERCASE,
    NUMBERS,
    SIMILAR_CHARACTERS,
    UPPERCASE,
    CharacterClass,
    build_pool,
    enabled_classes,
    missing_classes,
)

ALL = dict(lowercase=True, uppercase=True, numbers=True, symbols=True)


def test_pool_order():
    pool = build_pool(GenerationOptions(**ALL))
    assert pool == LOWERCASE + UPPERCASE + NUMBERS + DEFAULT_SYMBOLS


def test_default_symbols():
    assert DEFAULT_SYMBOLS == '!@#$%^&*()+_-=}{[]|:;"/?.><,`~'
    assert len(DEFAULT_SYMBOLS) == 30


def test_similar_set_is_exact():
    assert SIMILAR_CHARACTERS == {"i", "l", "L", "I", "|", "`", "o", "O", "0"}
    pool = build_pool(GenerationOptions(exclude_similar_characters=True, **ALL))
    assert not SIMILAR_CHARACTERS & set(pool)
    # look-alikes outside the fixed set stay
    assert "1" in pool
    assert "j" in pool
    assert len(pool) == 92 - 9


def test_exclude_string():
    pool = build_pool(GenerationOptions(lowercase=True, uppercase=False, exclude="abcxyz"))
    assert pool == "defghijklmnopqrstuvw"


def test_custom_symbols_replace_default():
    pool = build_pool(GenerationOptions(lowercase=False, uppercase=False,
                                        symbols=True, symbols_string="+-"))
    assert pool == "+-"


def test_custom_symbols_ignored_when_symbols_disabled():
    pool = build_pool(GenerationOptions(lowercase=False, uppercase=False,
                                        numbers=True, symbols_string="+-"))
    assert pool == NUMBERS


def test_duplicates_are_kept():
    pool = build_pool(GenerationOptions(lowercase=True, uppercase=False,
                                        symbols=True, symbols_string="ab"))
    assert pool.count("a") == 2
    assert pool.count("b") == 2
    assert len(pool) == 28


def test_no_classes_selected():
    with pytest.raises(ValidationError, match="no character classes selected"):
        build_pool(GenerationOptions(lowercase=False, uppercase=False))


def test_everything_excluded():
    with pytest.raises(ValidationError):
        build_pool(GenerationOptions(lowercase=False, uppercase=False, numbers=True,
                                     exclude=NUMBERS))


def test_enabled_classes():
    classes = enabled_classes(GenerationOptions(lowercase=False, uppercase=True, numbers=True,
                                                symbols=True, symbols_string="#"))
    assert classes == [
        CharacterClass("uppercase", UPPERCASE),
        CharacterClass("numbers", NUMBERS),
        CharacterClass("symbols", "#"),
    ]


def test_missing_classes():
    classes = enabled_classes(GenerationOptions(**ALL))
    assert missing_classes("aB3!", classes) == []
    assert missing_classes("aB3", classes) == ["symbols"]
    assert missing_classes("", classes) == ["lowercase", "uppercase", "numbers", "symbols"]
