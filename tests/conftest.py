"""
Shared fixtures for ttsnorm tests.
"""

import pytest

from ttsnorm.currency import CurrencyRegistry
from ttsnorm.emoji_names import EmojiTable

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
MAN = "\U0001F468"
SPARKLES = "\u2728"


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def emoji_table():
    """Small emoji table including a ZWJ family and its first member."""
    return EmojiTable(
        {
            SPARKLES: "sparkles",
            FAMILY: "family man woman girl",
            MAN: "man",
        }
    )


@pytest.fixture
def currency_names():
    """Spoken names for a handful of currencies."""
    return {
        "USD": ("dollar", "dollars", "cent", "cents"),
        "CAD": ("Canadian dollar", "Canadian dollars", "cent", "cents"),
        "EUR": ("euro", "euros", "cent", "cents"),
        "SEK": ("krona", "kronor", "öre", "öre"),
    }


@pytest.fixture
def currency_registry(currency_names):
    """Registry with $ (USD), € (EUR) and the letter-only SEK."""
    return CurrencyRegistry(
        currency_names,
        [("USD", "$"), ("EUR", "€"), ("SEK", "kr"), ("XYZ", "¤")],
    )
