"""
Unit tests for player name matching.

Tests the normalization and word-subset matching used to pair Sleeper
players with scraped draft picks.
"""

import pytest

from services.name_matcher import name_tokens, names_match, normalize_name


class TestNormalizeName:
    """Tests for name normalization."""

    def test_lowercase(self):
        assert normalize_name("Cooper KUPP") == "cooper kupp"

    def test_trailing_whitespace_trimmed(self):
        assert normalize_name("Cooper Kupp \t\n") == "cooper kupp"

    def test_leading_whitespace_kept(self):
        assert normalize_name("  Cooper Kupp") == "  cooper kupp"

    def test_non_breaking_space_removed(self):
        assert normalize_name("Cooper\u00a0Kupp") == "cooperkupp"

    def test_non_ascii_letters_untouched(self):
        assert normalize_name("JOSÉ") == "josÉ"
        assert normalize_name("Amon-Ra St. Brown") == "amon-ra st. brown"

    def test_nbsp_byte_inside_a_letter_drops_the_letter(self):
        assert normalize_name("Z\u00e0") == "z"
        assert names_match("Z\u00e0", "Z")

    def test_empty_string(self):
        assert normalize_name("") == ""
        assert normalize_name("   ") == ""

    @pytest.mark.parametrize("raw", [
        "Cooper Kupp",
        "  Travis Etienne Jr.  ",
        "Jo\u00a0\u00a0Smith\u00a0",
        "Ja'Marr Chase\u00a0 ",
        "Zoë à",
        "",
    ])
    def test_idempotent(self, raw):
        once = normalize_name(raw)
        assert normalize_name(once) == once


class TestNamesMatch:
    """Tests for the identity matcher."""

    @pytest.mark.parametrize("name", ["Cooper Kupp", "A.J. Brown", "", "Zoë"])
    def test_name_matches_itself(self, name):
        assert names_match(name, name)

    def test_case_and_whitespace_insensitive(self):
        assert names_match("Cooper Kupp", "cooper  kupp")

    def test_subset_across_word_counts(self):
        assert names_match("A.J. Brown", "Brown")

    def test_suffix_variant(self):
        assert names_match("Kenneth Walker III", "kenneth walker")
        assert names_match("Travis Etienne", "Travis Etienne Jr.")

    def test_same_word_count_different_word_rejected(self):
        assert not names_match("A.J. Brown", "A.J. Green")

    def test_reordered_names_rejected(self):
        """Equal word counts must match word for word."""
        assert not names_match("Smith John", "John Smith")

    def test_missing_word_rejected(self):
        assert not names_match("Mike Williams", "Mike Evans Jr.")

    def test_empty_names_match(self):
        assert names_match("", "  ")


def test_name_tokens_split_on_whitespace():
    assert name_tokens("amon-ra  st. brown") == ["amon-ra", "st.", "brown"]
