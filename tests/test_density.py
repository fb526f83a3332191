"""Tests for keyword density analysis."""

import math

import pytest

from product_seo_engine.density import (
    compute_density,
    count_words,
    strip_tags,
    target_occurrences,
)


class TestComputeDensity:
    """Tests for compute_density."""

    def test_basic_density(self):
        result = compute_density("<p>Desk lamp is a great desk lamp.</p>", "desk lamp")

        assert result.count == 2
        assert result.word_count == 7
        assert result.density_percent == pytest.approx(2 / 7 * 100)

    def test_case_insensitive(self):
        result = compute_density("DESK LAMP desk lamp Desk Lamp", "Desk Lamp")

        assert result.count == 3

    @pytest.mark.parametrize("keyword", ["C++ Adapter", "Model (2024)", "v1.0 [beta]", "a*b?", "$9.99+"])
    def test_regex_metacharacters_do_not_crash(self, keyword: str):
        """Test that keywords are matched literally."""
        result = compute_density(f"<p>Buy the {keyword} today. {keyword} ships free.</p>", keyword)

        assert result.count == 2

    def test_metacharacters_match_literally(self):
        """Test that '.' in a keyword does not match any character."""
        result = compute_density("v1x0 and v1.0", "v1.0")

        assert result.count == 1

    def test_zero_words(self):
        """Test that empty text reports density 0, not NaN."""
        for text in ("", None, "<div><span></span></div>", "   "):
            result = compute_density(text, "desk lamp")
            assert result.word_count == 0
            assert result.density_percent == 0.0
            assert not math.isnan(result.density_percent)

    def test_empty_keyword(self):
        result = compute_density("<p>some words here</p>", "")

        assert result.count == 0
        assert result.density_percent == 0.0

    def test_tags_are_not_words(self):
        """Test that markup and attributes are stripped before counting."""
        html_text = '<a href="https://example.com/desk-lamp" class="desk lamp">Desk lamp</a>'
        result = compute_density(html_text, "desk lamp")

        assert result.word_count == 2
        assert result.count == 1


class TestHelpers:
    """Tests for text helpers."""

    def test_strip_tags_keeps_word_boundaries(self):
        assert strip_tags("<p>one</p><p>two</p>").split() == ["one", "two"]

    def test_adjacent_blocks_count_as_separate_words(self):
        assert count_words(strip_tags("<p>alpha</p><p>beta</p>")) == 2

    def test_count_words(self):
        assert count_words("one  two\nthree\t four") == 4
        assert count_words("") == 0

    def test_target_occurrences(self):
        assert target_occurrences(1000, 1.0, 2.0) == (10, 20)

    def test_target_occurrences_minimum_one(self):
        assert target_occurrences(0, 1.0, 2.0) == (1, 1)
