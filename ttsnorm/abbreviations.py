"""
Abbreviation normalization for chat, gaming and streaming slang.

Expands whole tokens such as ``gg`` or ``afk`` to full words. Matching
is case-insensitive and longest-first, so ``ggwp`` is never read as
``gg`` followed by ``wp``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import regex

from ttsnorm.config import ABBREVIATION_PRIORITY, DEFAULT_ABBREVIATIONS, REGEX_TIMEOUT
from ttsnorm.exceptions import InvalidAbbreviationMapError
from ttsnorm.rule import (
    NEVER_MATCH,
    TOKEN_AFTER,
    TOKEN_BEFORE,
    Rule,
    alternation,
    compile_pattern,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AbbreviationRuleOptions:
    """Options for :class:`AbbreviationNormalizationRule`.

    Attributes:
        custom_abbreviations: Extra or overriding entries (keys are case-insensitive)
        replace_defaults: Use only ``custom_abbreviations`` and drop the built-in map
    """

    custom_abbreviations: Mapping[str, str] | None = None
    replace_defaults: bool = False


def _validated(mapping: object) -> dict[str, str]:
    """Lower-case the keys of a caller map, rejecting anything malformed."""
    if not isinstance(mapping, Mapping):
        raise InvalidAbbreviationMapError(f"expected a mapping, got {type(mapping).__name__}")

    result: dict[str, str] = {}
    for key, value in mapping.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidAbbreviationMapError(f"keys must be non-empty strings, got {key!r}")
        if not isinstance(value, str):
            raise InvalidAbbreviationMapError(
                f"expansion for '{key}' must be a string, got {type(value).__name__}"
            )
        result[key.strip().lower()] = value
    return result


def build_abbreviation_map(options: AbbreviationRuleOptions | None = None) -> dict[str, str]:
    """
    Resolve the effective abbreviation map.

    Custom entries are merged over the defaults (custom wins per key),
    or replace them entirely when ``replace_defaults`` is set.

    Raises:
        InvalidAbbreviationMapError: If the custom map is malformed
    """
    options = options or AbbreviationRuleOptions()
    custom = (
        _validated(options.custom_abbreviations)
        if options.custom_abbreviations is not None
        else {}
    )
    if options.replace_defaults:
        return custom

    merged = {key.lower(): value for key, value in DEFAULT_ABBREVIATIONS.items()}
    merged.update(custom)
    return merged


class AbbreviationNormalizationRule(Rule):
    """
    Expand known abbreviations to their spoken form.

    Args:
        options: Custom map and merge/replace behaviour
        timeout: Seconds allowed for the regex pass

    Raises:
        InvalidAbbreviationMapError: If the custom map is malformed
        PatternBuildError: If the matcher cannot be compiled

    Examples:
        >>> AbbreviationNormalizationRule().apply("gg afk")
        ' good game   away from keyboard '
        >>> AbbreviationNormalizationRule().apply("lollipop")
        'lollipop'
    """

    name = "abbreviation"
    priority = ABBREVIATION_PRIORITY

    def __init__(
        self,
        options: AbbreviationRuleOptions | None = None,
        timeout: float = REGEX_TIMEOUT,
    ):
        self.abbreviations: Mapping[str, str] = MappingProxyType(build_abbreviation_map(options))
        self.timeout = timeout

        if self.abbreviations:
            self._pattern = compile_pattern(
                "abbreviation",
                rf"{TOKEN_BEFORE}(?:{alternation(self.abbreviations)}){TOKEN_AFTER}",
                regex.IGNORECASE,
            )
        else:
            logger.debug("Abbreviation map is empty; rule will not change any text")
            self._pattern = NEVER_MATCH

    def _apply(self, text: str) -> str:
        if not self.abbreviations:
            return text
        return self._run_passes(text, [(self._pattern, self._expand)], self.timeout)

    def _expand(self, match: regex.Match) -> str:
        expansion = self.abbreviations.get(match.group(0).lower())
        if expansion is None:
            return match.group(0)
        return f" {expansion} "
