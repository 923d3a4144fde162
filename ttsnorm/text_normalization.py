"""
Single-pass substitution rules.

These rules have no parsing to speak of; each one is a regex (or
translation table) applied once over the message:

- Basic sanitization (line breaks, control characters, fancy punctuation)
- URL replacement (placeholder, spoken domain, removal or custom text)
- Emoji names (✨ → "sparkles")
- Excessive punctuation ("!!!" → "!")
- Letter repetition ("soooo" → "soo")
- Whitespace clean-up (runs last)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
from urllib.parse import urlsplit

import regex

from ttsnorm.config import (
    ALLOWED_URL_SCHEMES,
    BASIC_SANITIZATION_PRIORITY,
    DEFAULT_URL_PLACEHOLDER,
    EMOJI_PRIORITY,
    EXCESSIVE_PUNCTUATION_PRIORITY,
    FANCY_CHAR_MAP,
    LETTER_REPETITION_PRIORITY,
    REGEX_TIMEOUT,
    URL_PRIORITY,
    WHITESPACE_PRIORITY,
)
from ttsnorm.emoji_names import EmojiTable, get_default_table
from ttsnorm.exceptions import InvalidURLStrategyError
from ttsnorm.rule import Rule, compile_pattern

logger = logging.getLogger(__name__)


# Basic sanitization

# C0 controls except tab and LF, DEL, C1 controls, zero-width
# space/non-joiner/joiner and the byte order mark
CONTROL_CHARS_PATTERN = compile_pattern(
    "control characters",
    r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F\u200B-\u200D\uFEFF]",
)

_FANCY_CHAR_TABLE = str.maketrans(FANCY_CHAR_MAP)


class BasicSanitizationRule(Rule):
    """
    Essential clean-up that runs before everything else.

    Normalizes line breaks to ``\\n``, strips problematic control and
    zero-width characters, and replaces curly quotes, guillemets,
    ellipses and dashes with ASCII equivalents.
    """

    name = "basic_sanitization"
    priority = BASIC_SANITIZATION_PRIORITY

    def __init__(self, timeout: float = REGEX_TIMEOUT):
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = self._run_passes(text, [(CONTROL_CHARS_PATTERN, "")], self.timeout)
        return text.translate(_FANCY_CHAR_TABLE)


# URL normalization

# Potential URLs starting with http(s):// or www., not glued to a word or
# an email address, ending on a letter, digit or slash.
URL_PATTERN = compile_pattern(
    "url",
    r"(?<![\p{L}\p{N}@])"
    r"(?:https?://|www\.)"
    r'[^\s<>"()]+'
    r"(?<=[\p{L}\p{N}/])"
    r'(?=[\s<>"().,!?;:]|$)',
    regex.IGNORECASE,
)


class URLReplacementStrategy(Enum):
    """Strategy for replacing URLs in text for natural speech synthesis.

    Attributes:
        GENERIC: Replace URLs with a placeholder (default: " link ")
        DOMAIN: Extract and speak the domain name (e.g., "example dot com")
        REMOVE: Remove URLs entirely from text
        CUSTOM: Use a custom string or callback function for replacement
    """

    GENERIC = "generic"
    DOMAIN = "domain"
    REMOVE = "remove"
    CUSTOM = "custom"


def is_web_url(candidate: str) -> bool:
    """
    Check that a potential URL really is an absolute http(s) URL.

    ``www.`` candidates are checked as if they had an ``http://`` prefix.
    """
    if candidate.lower().startswith("www."):
        candidate = f"http://{candidate}"
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
    except ValueError:
        return False
    return parts.scheme.lower() in ALLOWED_URL_SCHEMES and bool(hostname)


def _extract_domain(url: str) -> str:
    """
    Extract readable domain from URL for speech synthesis.

    Examples:
        >>> _extract_domain("https://www.example.com/path")
        'example dot com'
        >>> _extract_domain("http://github.com:8080/repo")
        'github dot com'
    """
    domain = re.sub(r"^https?://", "", url, flags=re.IGNORECASE)
    domain = re.sub(r"^www\.", "", domain, flags=re.IGNORECASE)
    domain = re.split(r"[/?#]", domain)[0]
    domain = domain.split("@")[-1].split(":")[0]
    return " dot ".join(part for part in domain.split(".") if part)


@dataclass(frozen=True)
class UrlRuleOptions:
    """Options for :class:`UrlNormalizationRule`.

    Attributes:
        placeholder: Replacement used by the GENERIC strategy. Include padding
            spaces if the placeholder should stand apart from nearby words.
        strategy: How URLs are replaced
        custom_replacement: String or ``url -> str`` callable for CUSTOM
    """

    placeholder: str = DEFAULT_URL_PLACEHOLDER
    strategy: Union[str, URLReplacementStrategy] = URLReplacementStrategy.GENERIC
    custom_replacement: Optional[Union[str, Callable[[str], str]]] = None


def _resolve_strategy(options: UrlRuleOptions) -> URLReplacementStrategy:
    strategy = options.strategy
    if isinstance(strategy, str):
        try:
            strategy = URLReplacementStrategy(strategy.lower())
        except ValueError as e:
            valid = ", ".join([s.value for s in URLReplacementStrategy])
            raise InvalidURLStrategyError(strategy, f"must be one of: {valid}") from e
    elif not isinstance(strategy, URLReplacementStrategy):
        raise InvalidURLStrategyError(strategy, "must be a URLReplacementStrategy or string")

    if strategy == URLReplacementStrategy.CUSTOM:
        replacement = options.custom_replacement
        if replacement is None:
            raise InvalidURLStrategyError(strategy.value, "CUSTOM strategy requires custom_replacement")
        if not (callable(replacement) or isinstance(replacement, str)):
            raise InvalidURLStrategyError(
                strategy.value,
                f"custom_replacement must be str or callable, got {type(replacement).__name__}",
            )
    return strategy


class UrlNormalizationRule(Rule):
    """
    Replace http(s) and www. URLs so they are not read out character by character.

    Candidates are found with a broad regex and then validated with
    ``urllib.parse``; anything that is not an absolute http(s) URL is
    left as written.

    Raises:
        InvalidURLStrategyError: If the strategy is unknown, or CUSTOM is
            used without a usable replacement

    Examples:
        >>> UrlNormalizationRule().apply("Go to www.example.com now")
        'Go to  link  now'
    """

    name = "url"
    priority = URL_PRIORITY

    def __init__(self, options: UrlRuleOptions | None = None, timeout: float = REGEX_TIMEOUT):
        self.options = options or UrlRuleOptions()
        self.strategy = _resolve_strategy(self.options)
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        return self._run_passes(text, [(URL_PATTERN, self._replace)], self.timeout)

    def _replace(self, match: regex.Match) -> str:
        url = match.group(0)
        if not is_web_url(url):
            return url

        if self.strategy == URLReplacementStrategy.GENERIC:
            return self.options.placeholder
        if self.strategy == URLReplacementStrategy.DOMAIN:
            return f" {_extract_domain(url)} "
        if self.strategy == URLReplacementStrategy.REMOVE:
            return ""

        replacement = self.options.custom_replacement
        if callable(replacement):
            return str(replacement(url))
        return str(replacement)


# Emoji normalization


@dataclass(frozen=True)
class EmojiRuleOptions:
    """Options for :class:`EmojiNormalizationRule`.

    Attributes:
        prefix: Word(s) spoken before the emoji name, e.g. "the"
        suffix: Word(s) spoken after the emoji name, e.g. "emoji"
    """

    prefix: Optional[str] = None
    suffix: Optional[str] = None


class EmojiNormalizationRule(Rule):
    """
    Replace emoji with their names.

    Args:
        options: Optional prefix/suffix around each name
        table: Emoji lookup; defaults to the table built from the ``emoji`` package

    Examples:
        >>> EmojiNormalizationRule().apply("nice ✨")
        'nice  sparkles '
        >>> EmojiNormalizationRule(EmojiRuleOptions("the", "emoji")).apply("✨")
        ' the sparkles emoji '
    """

    name = "emoji"
    priority = EMOJI_PRIORITY

    def __init__(
        self,
        options: EmojiRuleOptions | None = None,
        table: EmojiTable | None = None,
        timeout: float = REGEX_TIMEOUT,
    ):
        self.options = options or EmojiRuleOptions()
        self.table = table if table is not None else get_default_table()
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        # Every emoji sequence contains at least one non-ASCII code point
        if text.isascii() or not len(self.table):
            return text
        return self._run_passes(text, [(self.table.pattern, self._replace)], self.timeout)

    def _replace(self, match: regex.Match) -> str:
        name = self.table.lookup(match.group(0))
        if name is None:
            return match.group(0)
        words = [part for part in (self.options.prefix, name, self.options.suffix) if part]
        return f" {' '.join(w.strip() for w in words)} "


# Excessive punctuation and letter repetition

EXCESSIVE_PUNCTUATION_PATTERN = compile_pattern("excessive punctuation", r"([!?.])\1+")

LETTER_REPETITION_PATTERN = compile_pattern(
    "letter repetition", r"([a-zA-Z])\1{2,}", regex.IGNORECASE
)


class ExcessivePunctuationRule(Rule):
    """Reduce runs of the same ``!``, ``?`` or ``.`` to a single mark."""

    name = "excessive_punctuation"
    priority = EXCESSIVE_PUNCTUATION_PRIORITY

    def __init__(self, timeout: float = REGEX_TIMEOUT):
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        return self._run_passes(text, [(EXCESSIVE_PUNCTUATION_PATTERN, r"\1")], self.timeout)


class LetterRepetitionRule(Rule):
    """Reduce three or more repeats of a letter to two ("soooo" → "soo")."""

    name = "letter_repetition"
    priority = LETTER_REPETITION_PRIORITY

    def __init__(self, timeout: float = REGEX_TIMEOUT):
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        return self._run_passes(text, [(LETTER_REPETITION_PATTERN, r"\1\1")], self.timeout)


# Whitespace normalization

MULTIPLE_WHITESPACE_PATTERN = compile_pattern("multiple whitespace", r"\s{2,}")
SPACE_BEFORE_PUNCTUATION_PATTERN = compile_pattern("space before punctuation", r"\s+([.,!?;:])")
SPACE_AFTER_PUNCTUATION_PATTERN = compile_pattern("space after punctuation", r"([.,!?;:])(?!\s|$)")


class WhitespaceNormalizationRule(Rule):
    """
    Tidy spacing. Meant to run last, after rules that pad their output.

    Trims the ends, collapses runs of whitespace, removes spaces before
    ``.,!?;:`` and makes sure one space follows them.
    """

    name = "whitespace"
    priority = WHITESPACE_PRIORITY

    def __init__(self, timeout: float = REGEX_TIMEOUT):
        self.timeout = timeout

    def _apply(self, text: str) -> str:
        text = text.strip()
        if not text:
            return text
        return self._run_passes(
            text,
            [
                (MULTIPLE_WHITESPACE_PATTERN, " "),
                (SPACE_BEFORE_PUNCTUATION_PATTERN, r"\1"),
                (SPACE_AFTER_PUNCTUATION_PATTERN, r"\1 "),
            ],
            self.timeout,
        )
