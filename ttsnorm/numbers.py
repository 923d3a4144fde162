"""
Number normalization.

Converts standalone numbers into words in three passes:

1. **Ordinals**: ``21st`` → "twenty-first"
2. **Version-like numbers**: ``1.2.3`` → "one point two point three"
3. **Cardinals and decimals**: ``123.456`` →
   "one hundred and twenty-three point four five six"

Each pass only sees digits the earlier passes left behind, so a version
string is never read as a decimal. Numbers glued to letters, digits or
hyphens ("Item-123", "1stPlace") are left alone.
"""

from __future__ import annotations

import logging

import regex

from ttsnorm.config import NUMBER_PRIORITY, REGEX_TIMEOUT
from ttsnorm.number_words import CONVERSION_ERRORS, cardinal_words, ordinal_words, spell_digits
from ttsnorm.rule import TOKEN_AFTER, TOKEN_BEFORE, Rule, compile_pattern

logger = logging.getLogger(__name__)

ORDINAL_PATTERN = compile_pattern(
    "ordinal",
    rf"{TOKEN_BEFORE}(?P<number>[0-9]+)(?:st|nd|rd|th){TOKEN_AFTER}",
    regex.IGNORECASE,
)

# Three or more dot-separated groups, e.g. version numbers
MULTI_DOT_PATTERN = compile_pattern(
    "multi-dot number",
    rf"{TOKEN_BEFORE}(?P<number>[0-9]+(?:\.[0-9]+){{2,}}){TOKEN_AFTER}",
)

CARDINAL_DECIMAL_PATTERN = compile_pattern(
    "cardinal/decimal number",
    rf"{TOKEN_BEFORE}(?P<integer>[0-9]+)(?:\.(?P<fraction>[0-9]+))?{TOKEN_AFTER}",
)


def _expand_ordinal(match: regex.Match) -> str:
    try:
        return f" {ordinal_words(int(match.group('number')))} "
    except CONVERSION_ERRORS as e:
        logger.warning(f"Could not spell ordinal '{match.group(0)}': {e}")
        return match.group(0)


def _expand_multi_dot(match: regex.Match) -> str:
    groups = [" ".join(spell_digits(group)) for group in match.group("number").split(".")]
    return f" {' point '.join(groups)} "


def _expand_cardinal_decimal(match: regex.Match) -> str:
    try:
        words = cardinal_words(int(match.group("integer")))
        fraction = match.group("fraction")
        if fraction:
            words = " ".join([words, "point", *spell_digits(fraction)])
    except CONVERSION_ERRORS as e:
        logger.warning(f"Could not spell number '{match.group(0)}': {e}")
        return match.group(0)
    return f" {words} "


class NumberNormalizationRule(Rule):
    """
    Normalize standalone ordinals, version-like numbers, cardinals and decimals.

    Examples:
        >>> NumberNormalizationRule().apply("1st")
        ' first '
        >>> NumberNormalizationRule().apply("Version 1.2.3")
        'Version  one point two point three '
    """

    name = "number"
    priority = NUMBER_PRIORITY

    _passes = (
        (ORDINAL_PATTERN, _expand_ordinal),
        (MULTI_DOT_PATTERN, _expand_multi_dot),
        (CARDINAL_DECIMAL_PATTERN, _expand_cardinal_decimal),
    )

    def __init__(self, timeout: float = REGEX_TIMEOUT):
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        return self._run_passes(text, self._passes, self.timeout)
