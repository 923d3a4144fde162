"""
Base class and shared matching helpers for normalization rules.

A rule is a named text transform with a default priority. Rules are
built once and then shared read-only between callers, so ``apply`` must
never mutate the rule.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

import regex

from ttsnorm.config import REGEX_TIMEOUT
from ttsnorm.exceptions import NullInputError, PatternBuildError

logger = logging.getLogger(__name__)

# Lookarounds shared by the token rules.
# Letters or digits on either side mean the token is glued to a word.
ALNUM_BEFORE = r"(?<![\p{L}\p{N}])"
ALNUM_AFTER = r"(?![\p{L}\p{N}])"
# Numbers and abbreviations also refuse hyphenated neighbours ("Item-123")
TOKEN_BEFORE = r"(?<![\p{L}\p{N}-])"
TOKEN_AFTER = r"(?![\p{L}\p{N}-])"

# Pattern that never matches, used when a rule has nothing to look for
NEVER_MATCH = regex.compile(r"(?!)")

Replacement = Callable[..., str]


def compile_pattern(name: str, pattern: str, flags: int = 0) -> regex.Pattern:
    """Compile a pattern, turning regex errors into a configuration error."""
    try:
        return regex.compile(pattern, flags)
    except (regex.error, TypeError, ValueError) as e:
        raise PatternBuildError(name, e) from e


def alternation(items: Iterable[str]) -> str:
    """Escape ``items`` and join them longest first, so prefixes never shadow longer entries."""
    unique = set(items)
    ordered = sorted(unique, key=lambda item: (-len(item), item))
    return "|".join(regex.escape(item) for item in ordered)


class Rule(ABC):
    """
    A single normalization step.

    Subclasses set ``name`` and ``priority`` and implement ``_apply``.
    ``apply`` enforces the input contract: ``None`` is rejected and an
    empty string is returned unchanged.
    """

    name: str = "rule"
    priority: int = 0

    def apply(self, text: str) -> str:
        """
        Apply the rule to ``text``.

        Raises:
            NullInputError: If text is None
        """
        if text is None:
            raise NullInputError(self.name)
        if not text:
            return text
        return self._apply(text)

    @abstractmethod
    def _apply(self, text: str) -> str:
        """Transform non-empty text."""

    def _run_passes(
        self,
        text: str,
        passes: Sequence[tuple[regex.Pattern, Replacement | str]],
        timeout: float = REGEX_TIMEOUT,
    ) -> str:
        """
        Run substitution passes in order.

        Each pass sees the output of the previous one. If a pass times
        out, the text produced by the passes that completed is returned.
        """
        current = text
        for pattern, replacement in passes:
            try:
                current = pattern.sub(replacement, current, timeout=timeout)
            except TimeoutError:
                logger.warning(
                    f"Regex timeout in rule '{self.name}' after {timeout}s; "
                    "keeping text processed so far"
                )
                break
        return current

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"
