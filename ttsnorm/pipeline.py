"""
Rule pipeline for text normalization.

A :class:`Pipeline` owns an ordered, immutable tuple of rules. Order is
resolved once at construction from each registration's effective
priority (the override if given, else the rule's own priority); rules
with equal priority keep their registration order.

Normalizing a message threads the text through every rule in turn. A
rule that fails is logged and skipped for that message; the remaining
rules still run. Rules keep running when the text becomes empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Optional, Union

from ttsnorm.abbreviations import AbbreviationNormalizationRule, AbbreviationRuleOptions
from ttsnorm.currency import CurrencyNormalizationRule, CurrencyRegistry
from ttsnorm.emoji_names import EmojiTable
from ttsnorm.exceptions import (
    InvalidInputTypeError,
    InvalidRuleError,
    RuleApplicationError,
)
from ttsnorm.numbers import NumberNormalizationRule
from ttsnorm.rule import Rule
from ttsnorm.text_normalization import (
    BasicSanitizationRule,
    EmojiNormalizationRule,
    EmojiRuleOptions,
    ExcessivePunctuationRule,
    LetterRepetitionRule,
    UrlNormalizationRule,
    UrlRuleOptions,
    WhitespaceNormalizationRule,
)
from ttsnorm.utils import LazyValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleRegistration:
    """A rule plus an optional override of its priority."""

    rule: Rule
    priority_override: Optional[int] = None

    def __post_init__(self):
        if not callable(getattr(self.rule, "apply", None)):
            raise InvalidRuleError(self.rule, "missing an apply(text) method")
        priority = self.effective_priority
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise InvalidRuleError(self.rule, f"priority must be an integer, got {priority!r}")

    @property
    def effective_priority(self) -> int:
        if self.priority_override is not None:
            return self.priority_override
        return getattr(self.rule, "priority", None)


@dataclass(frozen=True)
class NormalizationResult:
    """Outcome of one pipeline run.

    Attributes:
        text: The normalized text
        failed_rules: Names of rules whose effect was skipped, in run order
    """

    text: str
    failed_rules: tuple[str, ...] = ()


def _rule_name(rule: Rule) -> str:
    return getattr(rule, "name", type(rule).__name__)


class Pipeline:
    """
    Apply an ordered set of rules to messages.

    Args:
        registrations: Rules, or :class:`RuleRegistration` objects when a
            priority override is needed

    Raises:
        InvalidRuleError: If a registration is not a usable rule

    Examples:
        >>> pipeline = Pipeline([NumberNormalizationRule(), WhitespaceNormalizationRule()])
        >>> pipeline.normalize("Get the 1st item")
        'Get the first item'
    """

    def __init__(self, registrations: Iterable[Union[Rule, RuleRegistration]]):
        resolved = [
            item if isinstance(item, RuleRegistration) else RuleRegistration(item)
            for item in registrations
        ]
        # sorted() is stable: equal priorities keep registration order
        ordered = sorted(resolved, key=lambda registration: registration.effective_priority)
        self._rules: tuple[Rule, ...] = tuple(registration.rule for registration in ordered)
        self._priorities: tuple[int, ...] = tuple(r.effective_priority for r in ordered)
        logger.debug(
            "Pipeline order: "
            + ", ".join(f"{_rule_name(rule)}({p})" for rule, p in zip(self._rules, self._priorities))
        )

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def ordered_priorities(self) -> tuple[tuple[str, int], ...]:
        """``(rule name, effective priority)`` pairs in run order."""
        return tuple(zip((_rule_name(rule) for rule in self._rules), self._priorities))

    def __len__(self) -> int:
        return len(self._rules)

    def run(self, text: Optional[str]) -> NormalizationResult:
        """
        Normalize ``text`` and report which rules failed.

        Raises:
            InvalidInputTypeError: If text is neither a string nor None
        """
        if text is None:
            return NormalizationResult("")
        if not isinstance(text, str):
            raise InvalidInputTypeError(text)
        if not text.strip():
            return NormalizationResult("")

        current = text
        failed: list[str] = []
        for rule in self._rules:
            name = _rule_name(rule)
            try:
                result = rule.apply(current)
                if not isinstance(result, str):
                    raise RuleApplicationError(
                        name, f"returned {type(result).__name__} instead of str"
                    )
            except RuleApplicationError as e:
                logger.warning(f"Skipping rule '{name}': {e}")
                failed.append(name)
                continue
            except Exception as e:
                logger.exception(f"Unexpected error in rule '{name}', skipping it: {e}")
                failed.append(name)
                continue
            current = result

        return NormalizationResult(current, tuple(failed))

    def normalize(self, text: Optional[str]) -> str:
        """
        Normalize ``text`` for speech synthesis.

        ``None`` and whitespace-only input give an empty string without
        running any rule.

        Raises:
            InvalidInputTypeError: If text is neither a string nor None
        """
        return self.run(text).text

    def __repr__(self) -> str:
        return f"Pipeline({', '.join(_rule_name(rule) for rule in self._rules)})"


class PipelineBuilder:
    """
    Fluent registration of rules.

    Every ``add_*`` method accepts ``priority`` to override the rule's
    default priority.

    Usage::

        pipeline = (
            PipelineBuilder()
            .add_currency()
            .add_numbers()
            .add_whitespace(priority=50)
            .build()
        )
    """

    def __init__(self):
        self._registrations: list[RuleRegistration] = []

    def add_rule(self, rule: Rule, priority: Optional[int] = None) -> PipelineBuilder:
        self._registrations.append(RuleRegistration(rule, priority))
        return self

    def add_basic_sanitization(self, priority: Optional[int] = None) -> PipelineBuilder:
        return self.add_rule(BasicSanitizationRule(), priority)

    def add_url(
        self, options: Optional[UrlRuleOptions] = None, priority: Optional[int] = None
    ) -> PipelineBuilder:
        return self.add_rule(UrlNormalizationRule(options), priority)

    def add_emoji(
        self,
        options: Optional[EmojiRuleOptions] = None,
        table: Optional[EmojiTable] = None,
        priority: Optional[int] = None,
    ) -> PipelineBuilder:
        return self.add_rule(EmojiNormalizationRule(options, table), priority)

    def add_currency(
        self, registry: Optional[CurrencyRegistry] = None, priority: Optional[int] = None
    ) -> PipelineBuilder:
        return self.add_rule(CurrencyNormalizationRule(registry), priority)

    def add_abbreviations(
        self,
        options: Optional[AbbreviationRuleOptions] = None,
        priority: Optional[int] = None,
    ) -> PipelineBuilder:
        return self.add_rule(AbbreviationNormalizationRule(options), priority)

    def add_numbers(self, priority: Optional[int] = None) -> PipelineBuilder:
        return self.add_rule(NumberNormalizationRule(), priority)

    def add_excessive_punctuation(self, priority: Optional[int] = None) -> PipelineBuilder:
        return self.add_rule(ExcessivePunctuationRule(), priority)

    def add_letter_repetition(self, priority: Optional[int] = None) -> PipelineBuilder:
        return self.add_rule(LetterRepetitionRule(), priority)

    def add_whitespace(self, priority: Optional[int] = None) -> PipelineBuilder:
        return self.add_rule(WhitespaceNormalizationRule(), priority)

    @property
    def registrations(self) -> tuple[RuleRegistration, ...]:
        return tuple(self._registrations)

    def build(self) -> Pipeline:
        return Pipeline(self._registrations)


DEFAULT_RULE_NAMES: tuple[str, ...] = (
    "basic_sanitization",
    "url",
    "emoji",
    "currency",
    "abbreviation",
    "number",
    "excessive_punctuation",
    "letter_repetition",
    "whitespace",
)


def build_default_pipeline(
    url_options: Optional[UrlRuleOptions] = None,
    emoji_options: Optional[EmojiRuleOptions] = None,
    abbreviation_options: Optional[AbbreviationRuleOptions] = None,
    priority_overrides: Optional[Mapping[str, int]] = None,
    exclude: Iterable[str] = (),
) -> Pipeline:
    """
    Build a pipeline with every built-in rule.

    Args:
        url_options: URL placeholder/strategy
        emoji_options: Emoji prefix/suffix
        abbreviation_options: Custom abbreviations and merge behaviour
        priority_overrides: Rule name -> priority
        exclude: Names of rules to leave out

    Raises:
        InvalidRuleError: If an override or exclusion names an unknown rule
        ConfigurationError: If any rule rejects its options
    """
    overrides = dict(priority_overrides or {})
    excluded = set(exclude)
    unknown = (set(overrides) | excluded) - set(DEFAULT_RULE_NAMES)
    if unknown:
        raise InvalidRuleError(
            sorted(unknown), f"unknown rule name(s); expected one of {', '.join(DEFAULT_RULE_NAMES)}"
        )

    adders = {
        "basic_sanitization": lambda b, p: b.add_basic_sanitization(p),
        "url": lambda b, p: b.add_url(url_options, priority=p),
        "emoji": lambda b, p: b.add_emoji(emoji_options, priority=p),
        "currency": lambda b, p: b.add_currency(priority=p),
        "abbreviation": lambda b, p: b.add_abbreviations(abbreviation_options, priority=p),
        "number": lambda b, p: b.add_numbers(p),
        "excessive_punctuation": lambda b, p: b.add_excessive_punctuation(p),
        "letter_repetition": lambda b, p: b.add_letter_repetition(p),
        "whitespace": lambda b, p: b.add_whitespace(p),
    }

    builder = PipelineBuilder()
    for name in DEFAULT_RULE_NAMES:
        if name not in excluded:
            adders[name](builder, overrides.get(name))
    return builder.build()


_DEFAULT_PIPELINE: LazyValue[Pipeline] = LazyValue(build_default_pipeline)


def normalize_text_for_speech(text: Optional[str]) -> str:
    """
    Normalize text for natural speech synthesis with the default rules.

    This is the main entry point. The default pipeline is built on first
    use and shared afterwards.

    Examples:
        >>> normalize_text_for_speech("gg!!! that was $1.50 lol")
        'good game! that was one dollar fifty cents laughing out loud'
    """
    return _DEFAULT_PIPELINE.get().normalize(text)
