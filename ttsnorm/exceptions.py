"""
Custom exceptions for ttsnorm.

Contract violations are raised straight to the caller. Rule application
failures are recoverable and get swallowed (and logged) by the pipeline.
Configuration errors are raised while building rules or pipelines, before
any text is normalized.
"""


class TTSNormError(Exception):
    """Base exception for all ttsnorm errors."""

    pass


# Contract violations
class ContractViolationError(TTSNormError):
    """Base exception for misuse of the rule or pipeline API."""

    pass


class NullInputError(ContractViolationError):
    """Raised when a rule receives None instead of a string."""

    def __init__(self, rule_name: str):
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}' received None; pass an empty string instead")


class InvalidInputTypeError(ContractViolationError):
    """Raised when the pipeline receives something other than a string."""

    def __init__(self, value: object):
        self.value_type = type(value).__name__
        super().__init__(f"Expected str or None, got {self.value_type}")


# Recoverable failures
class RuleApplicationError(TTSNormError):
    """Raised by a rule that could not transform a message.

    The pipeline catches this, keeps the text from before the rule and
    continues with the next rule.
    """

    def __init__(self, rule_name: str, reason: str, original_error: Exception | None = None):
        self.rule_name = rule_name
        self.reason = reason
        self.original_error = original_error
        message = f"Rule '{rule_name}' failed: {reason}"
        if original_error:
            message += f" - {original_error}"
        super().__init__(message)


# Configuration errors
class ConfigurationError(TTSNormError):
    """Base exception for invalid rule or pipeline configuration."""

    pass


class InvalidAbbreviationMapError(ConfigurationError):
    """Raised when a custom abbreviation map is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid abbreviation map: {reason}")


class PatternBuildError(ConfigurationError):
    """Raised when a matcher pattern cannot be compiled."""

    def __init__(self, pattern_name: str, original_error: Exception | None = None):
        self.pattern_name = pattern_name
        self.original_error = original_error
        message = f"Failed to build {pattern_name} pattern"
        if original_error:
            message += f" - {original_error}"
        super().__init__(message)


class EmptyCurrencyTableError(ConfigurationError):
    """Raised when no currency symbol or code survives the registry build."""

    def __init__(self):
        super().__init__(
            "No currency symbols or codes available.\n"
            "Check that the locale data contains ISO codes listed in CURRENCY_NAMES."
        )


class InvalidRuleError(ConfigurationError):
    """Raised when something registered with a pipeline is not a usable rule."""

    def __init__(self, rule: object, reason: str):
        self.rule = rule
        self.reason = reason
        super().__init__(f"Invalid rule {rule!r}: {reason}")


class InvalidURLStrategyError(ConfigurationError, ValueError):
    """Raised when the URL replacement strategy is unknown or incomplete."""

    def __init__(self, strategy: object, reason: str):
        self.strategy = strategy
        self.reason = reason
        super().__init__(f"Invalid URL strategy '{strategy}': {reason}")
