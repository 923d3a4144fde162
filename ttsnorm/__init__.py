"""
ttsnorm - Chat text normalization for speech synthesis

Rewrites informal chat messages (emoji, currency amounts, slang,
numbers, URLs, stretched letters and punctuation) into text a TTS
engine can read aloud naturally.
"""

__version__ = "0.1.0"

from ttsnorm.abbreviations import AbbreviationNormalizationRule, AbbreviationRuleOptions
from ttsnorm.currency import CurrencyNormalizationRule, CurrencyRegistry
from ttsnorm.numbers import NumberNormalizationRule
from ttsnorm.pipeline import (
    NormalizationResult,
    Pipeline,
    PipelineBuilder,
    RuleRegistration,
    build_default_pipeline,
    normalize_text_for_speech,
)
from ttsnorm.rule import Rule
from ttsnorm.text_normalization import (
    BasicSanitizationRule,
    EmojiNormalizationRule,
    EmojiRuleOptions,
    ExcessivePunctuationRule,
    LetterRepetitionRule,
    URLReplacementStrategy,
    UrlNormalizationRule,
    UrlRuleOptions,
    WhitespaceNormalizationRule,
)

__all__ = [
    "AbbreviationNormalizationRule",
    "AbbreviationRuleOptions",
    "BasicSanitizationRule",
    "CurrencyNormalizationRule",
    "CurrencyRegistry",
    "EmojiNormalizationRule",
    "EmojiRuleOptions",
    "ExcessivePunctuationRule",
    "LetterRepetitionRule",
    "NormalizationResult",
    "NumberNormalizationRule",
    "Pipeline",
    "PipelineBuilder",
    "Rule",
    "RuleRegistration",
    "URLReplacementStrategy",
    "UrlNormalizationRule",
    "UrlRuleOptions",
    "WhitespaceNormalizationRule",
    "__version__",
    "build_default_pipeline",
    "normalize_text_for_speech",
]
