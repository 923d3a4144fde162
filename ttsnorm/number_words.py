"""
Integer-to-words helpers shared by the currency and number rules.

Wraps ``num2words`` so every caller gets the same British-style reading
("one hundred and one") without the thousands commas num2words inserts
("one thousand, two hundred" becomes "one thousand two hundred").
"""

from __future__ import annotations

import num2words

from ttsnorm.config import DIGIT_WORDS, NUM2WORDS_LANGUAGE

# Errors num2words raises for values it cannot spell
CONVERSION_ERRORS = (OverflowError, ValueError, NotImplementedError, TypeError)


def _num2words(value: int, **kwargs: str) -> str:
    if value < 0:
        raise ValueError(f"Only non-negative integers can be spelled, got {value}")
    words = str(num2words.num2words(value, lang=NUM2WORDS_LANGUAGE, **kwargs))
    return " ".join(words.replace(",", " ").split())


def cardinal_words(value: int) -> str:
    """
    Spell a non-negative integer as English cardinal words.

    Args:
        value: Integer to spell

    Returns:
        Cardinal words

    Raises:
        ValueError: If value is negative
        OverflowError: If value is too large for num2words

    Examples:
        >>> cardinal_words(101)
        'one hundred and one'
        >>> cardinal_words(1234)
        'one thousand two hundred and thirty-four'
    """
    return _num2words(value)


def ordinal_words(value: int) -> str:
    """
    Spell a non-negative integer as English ordinal words.

    Examples:
        >>> ordinal_words(21)
        'twenty-first'
    """
    return _num2words(value, to="ordinal")


def spell_digits(digits: str) -> list[str]:
    """Spell each ASCII digit of ``digits`` on its own ("05" -> ["zero", "five"])."""
    words = []
    for char in digits:
        if char not in "0123456789":
            raise ValueError(f"Not an ASCII digit: {char!r}")
        words.append(DIGIT_WORDS[ord(char) - ord("0")])
    return words
