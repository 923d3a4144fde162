"""
Tests for the rule pipeline.
"""

import pytest

from ttsnorm.exceptions import InvalidInputTypeError, InvalidRuleError, RuleApplicationError
from ttsnorm.pipeline import (
    DEFAULT_RULE_NAMES,
    NormalizationResult,
    Pipeline,
    PipelineBuilder,
    RuleRegistration,
    build_default_pipeline,
    normalize_text_for_speech,
)
from ttsnorm.rule import Rule
from ttsnorm.text_normalization import EmojiRuleOptions, UrlRuleOptions


class RecordingRule(Rule):
    """Appends its name to the text and to a shared call log."""

    def __init__(self, name, priority, calls):
        self.name = name
        self.priority = priority
        self.calls = calls

    def _apply(self, text):
        self.calls.append(self.name)
        return f"{text}<{self.name}>"


class FailingRule(Rule):
    name = "failing"
    priority = 100

    def __init__(self, error):
        self.error = error

    def _apply(self, text):
        raise self.error


class DuckRule:
    """Rule-like object that does not inherit from Rule."""

    def __init__(self, name, priority, func):
        self.name = name
        self.priority = priority
        self.func = func
        self.inputs = []

    def apply(self, text):
        self.inputs.append(text)
        return self.func(text)


class TestRuleRegistration:
    """Tests for registration validation."""

    def test_effective_priority_defaults_to_rule(self):
        """Test that the rule priority is used without an override."""
        rule = RecordingRule("a", 300, [])
        assert RuleRegistration(rule).effective_priority == 300

    def test_override(self):
        """Test that an override replaces the rule priority."""
        rule = RecordingRule("a", 300, [])
        assert RuleRegistration(rule, 5).effective_priority == 5

    def test_object_without_apply_raises(self):
        """Test that objects without apply are rejected."""
        with pytest.raises(InvalidRuleError):
            RuleRegistration(object(), 10)

    @pytest.mark.parametrize("priority", ["high", 1.5, True])
    def test_non_integer_priority_raises(self, priority):
        """Test that non-integer priorities are rejected."""
        rule = RecordingRule("a", 1, [])
        with pytest.raises(InvalidRuleError):
            RuleRegistration(rule, priority)


class TestPipelineOrdering:
    """Tests for rule execution order."""

    def test_runs_in_priority_order(self):
        """Test that lower priorities run first."""
        calls = []
        pipeline = Pipeline(
            [RecordingRule("late", 200, calls), RecordingRule("early", 100, calls)]
        )

        assert pipeline.normalize("x") == "x<early><late>"
        assert calls == ["early", "late"]

    def test_ties_keep_registration_order(self):
        """Test that equal priorities keep registration order."""
        calls = []
        pipeline = Pipeline(
            [
                RecordingRule("first", 100, calls),
                RecordingRule("second", 100, calls),
                RecordingRule("third", 100, calls),
            ]
        )
        pipeline.normalize("x")
        assert calls == ["first", "second", "third"]

    def test_priority_override_reorders(self):
        """Test that an override moves a rule earlier."""
        calls = []
        pipeline = Pipeline(
            [
                RecordingRule("a", 100, calls),
                RuleRegistration(RecordingRule("b", 500, calls), priority_override=50),
            ]
        )
        pipeline.normalize("x")
        assert calls == ["b", "a"]
        assert pipeline.ordered_priorities == (("b", 50), ("a", 100))

    def test_rules_are_immutable_tuple(self):
        """Test that rules are exposed as a tuple."""
        pipeline = Pipeline([RecordingRule("a", 1, [])])
        assert isinstance(pipeline.rules, tuple)
        assert len(pipeline) == 1


class TestPipelineInput:
    """Tests for input handling."""

    def test_none_returns_empty(self):
        """Test that None returns an empty string without running rules."""
        calls = []
        pipeline = Pipeline([RecordingRule("a", 1, calls)])
        assert pipeline.normalize(None) == ""
        assert calls == []

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_returns_empty(self, text):
        """Test that blank input returns an empty string without running rules."""
        calls = []
        pipeline = Pipeline([RecordingRule("a", 1, calls)])
        assert pipeline.normalize(text) == ""
        assert calls == []

    def test_non_string_raises(self):
        """Test that non-string input raises."""
        pipeline = Pipeline([])
        with pytest.raises(InvalidInputTypeError):
            pipeline.normalize(42)

    def test_empty_pipeline_returns_input(self):
        """Test that a pipeline without rules returns its input."""
        assert Pipeline([]).normalize("hello") == "hello"


class TestPipelineFailures:
    """Tests for fail-soft rule execution."""

    def test_unexpected_error_skipped(self):
        """Test that an unexpected error is logged and skipped."""
        calls = []
        pipeline = Pipeline(
            [FailingRule(RuntimeError("boom")), RecordingRule("after", 200, calls)]
        )

        result = pipeline.run("x")

        assert result == NormalizationResult("x<after>", ("failing",))
        assert calls == ["after"]

    def test_rule_application_error_skipped(self):
        """Test that a RuleApplicationError is logged and skipped."""
        pipeline = Pipeline(
            [
                FailingRule(RuleApplicationError("failing", "bad input")),
                RecordingRule("after", 200, []),
            ]
        )
        result = pipeline.run("x")
        assert result.text == "x<after>"
        assert result.failed_rules == ("failing",)

    def test_non_string_result_skipped(self):
        """Test that a rule returning a non-string is skipped."""
        pipeline = Pipeline([DuckRule("broken", 1, lambda text: None)])
        result = pipeline.run("keep me")
        assert result.text == "keep me"
        assert result.failed_rules == ("broken",)

    def test_continues_after_text_becomes_empty(self):
        """Test that later rules still run on empty text."""
        eraser = DuckRule("eraser", 1, lambda text: "")
        filler = DuckRule("filler", 2, lambda text: text + "filled")
        pipeline = Pipeline([eraser, filler])

        assert pipeline.normalize("abc") == "filled"
        assert filler.inputs == [""]


class TestPipelineBuilder:
    """Tests for fluent pipeline construction."""

    def test_builder_registers_rules(self):
        """Test that builder methods register rules."""
        builder = PipelineBuilder().add_numbers().add_whitespace()
        pipeline = builder.build()

        assert [rule.name for rule in pipeline.rules] == ["number", "whitespace"]
        assert len(builder.registrations) == 2

    def test_whitespace_before_emoji(self, emoji_table):
        """Test that an override moves whitespace ahead of the emoji rule."""
        pipeline = (
            PipelineBuilder()
            .add_whitespace(priority=50)
            .add_emoji(table=emoji_table)
            .build()
        )
        assert pipeline.normalize("  Hello   ✨  world  ") == "Hello  sparkles  world"

    def test_numbers_and_whitespace(self):
        """Test that whitespace clean-up tidies number padding."""
        pipeline = PipelineBuilder().add_numbers().add_whitespace().build()
        assert pipeline.normalize("Get the 1st item") == "Get the first item"


class TestDefaultPipeline:
    """Tests for the default rule set."""

    def test_contains_every_rule_in_order(self):
        """Test that the default pipeline has every rule in priority order."""
        pipeline = build_default_pipeline()
        assert tuple(rule.name for rule in pipeline.rules) == DEFAULT_RULE_NAMES

    def test_exclude(self):
        """Test leaving rules out of the default pipeline."""
        pipeline = build_default_pipeline(exclude=["emoji", "number"])
        names = [rule.name for rule in pipeline.rules]
        assert "emoji" not in names
        assert "number" not in names

    def test_unknown_rule_name_raises(self):
        """Test that overriding an unknown rule raises."""
        with pytest.raises(InvalidRuleError):
            build_default_pipeline(priority_overrides={"nope": 1})

    def test_full_message(self):
        """Test every default rule on one message."""
        pipeline = build_default_pipeline(
            url_options=UrlRuleOptions(placeholder="[URL]"),
            emoji_options=EmojiRuleOptions(prefix="the", suffix="emoji"),
        )
        text = (
            "  ‘Test’ 1st..  soooo   cool ✨!! LOL go to "
            "https://example.com/page?q=1 Cost: $12.50 USD??? "
        )

        assert pipeline.normalize(text) == (
            "'Test' first. soo cool the sparkles emoji! laughing out loud "
            "go to [URL] Cost: twelve dollars fifty cents?"
        )

    def test_chat_message(self):
        """Test the default entry point on a chat message."""
        assert normalize_text_for_speech("gg!!! that was $1.50 lol") == (
            "good game! that was one dollar fifty cents laughing out loud"
        )

    def test_entry_point_blank(self):
        """Test the default entry point on None and blank input."""
        assert normalize_text_for_speech(None) == ""
        assert normalize_text_for_speech("   ") == ""
