"""
Tests for number_words module.
"""

import pytest

from ttsnorm.number_words import cardinal_words, ordinal_words, spell_digits


class TestCardinalWords:
    """Tests for cardinal spelling."""

    def test_small_numbers(self):
        """Test single and two-digit numbers."""
        assert cardinal_words(0) == "zero"
        assert cardinal_words(7) == "seven"
        assert cardinal_words(42) == "forty-two"

    def test_hundreds_use_and(self):
        """Test British-style reading of hundreds."""
        assert cardinal_words(101) == "one hundred and one"

    def test_thousands_have_no_commas(self):
        """Test that num2words grouping commas are removed."""
        result = cardinal_words(1234)
        assert "," not in result
        assert result == "one thousand two hundred and thirty-four"

    def test_negative_raises(self):
        """Test that negative numbers are rejected."""
        with pytest.raises(ValueError):
            cardinal_words(-5)


class TestOrdinalWords:
    """Tests for ordinal spelling."""

    def test_simple_ordinals(self):
        """Test first, second and third."""
        assert ordinal_words(1) == "first"
        assert ordinal_words(2) == "second"
        assert ordinal_words(3) == "third"

    def test_compound_ordinals(self):
        """Test hyphenated and hundreds ordinals."""
        assert ordinal_words(21) == "twenty-first"
        assert ordinal_words(103) == "one hundred and third"


class TestSpellDigits:
    """Tests for digit-by-digit spelling."""

    def test_keeps_leading_zeros(self):
        """Test that leading zeros are spelled."""
        assert spell_digits("05") == ["zero", "five"]

    def test_empty_string(self):
        """Test that no digits gives no words."""
        assert spell_digits("") == []

    def test_non_ascii_digit_raises(self):
        """Test that other scripts' digits are rejected."""
        with pytest.raises(ValueError):
            spell_digits("٣")
