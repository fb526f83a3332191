"""Tests for keyword extraction and permalink building."""

import re

import pytest

from product_seo_engine.keywords import (
    GENERIC_KEYWORD_POOL,
    build_focus_keywords,
    clean_keyword,
    create_optimal_permalink,
    extract_primary_keyword,
    generate_secondary_keywords,
    get_short_keyword,
    slugify,
    truncate_permalink,
)


SLUG_PATTERN = re.compile(r"^[a-z0-9-]*$")


class TestExtractPrimaryKeyword:
    """Tests for primary keyword extraction."""

    def test_takes_first_four_tokens(self):
        """Test that at most four leading tokens are kept."""
        assert extract_primary_keyword("UltraSound Pro Wireless Earbuds X200") == (
            "UltraSound Pro Wireless Earbuds"
        )

    def test_stops_at_stop_word_after_two_tokens(self):
        """Test that a stop word ends the phrase once two tokens are collected."""
        assert extract_primary_keyword("Desk Lamp with USB Charger") == "Desk Lamp"
        assert extract_primary_keyword("Yoga Mat | Non Slip") == "Yoga Mat"

    def test_leading_stop_word_is_kept(self):
        """Test that stop words before the second token do not end the phrase."""
        assert extract_primary_keyword("The Best Lamp") == "The Best Lamp"
        assert extract_primary_keyword("Lamp with cord") == "Lamp with cord"

    def test_short_name(self):
        """Test a one-token name."""
        assert extract_primary_keyword("Headphones") == "Headphones"

    def test_empty_name(self):
        """Test that empty or None names give an empty keyword."""
        assert extract_primary_keyword("") == ""
        assert extract_primary_keyword(None) == ""

    @pytest.mark.parametrize("name", [
        "UltraSound Pro Wireless Earbuds X200",
        "a",
        "- - - -",
        "with and for in",
        "C++ Adapter Cable (2024 Edition) Black",
        "   spaced    out    product   name   ",
    ])
    def test_non_empty_and_bounded(self, name: str):
        """Test that non-empty names give 1-4 tokens."""
        keyword = extract_primary_keyword(name)
        assert keyword
        assert 1 <= len(keyword.split()) <= 4


class TestShortKeyword:
    """Tests for the short keyword used in repaired text."""

    def test_first_three_tokens(self):
        assert get_short_keyword("UltraSound Pro Wireless Earbuds") == "UltraSound Pro Wireless"

    def test_shorter_keyword_unchanged(self):
        assert get_short_keyword("Desk Lamp") == "Desk Lamp"
        assert get_short_keyword("") == ""


class TestSecondaryKeywords:
    """Tests for secondary keyword generation."""

    def test_audio_theme(self):
        """Test brand keyword followed by audio-themed keywords."""
        keywords = generate_secondary_keywords("UltraSound Pro Wireless Earbuds X200", "Audio")

        assert keywords == [
            "UltraSound products",
            "wireless audio",
            "premium sound quality",
            "bluetooth earbuds",
        ]

    def test_electronics_theme(self):
        keywords = generate_secondary_keywords("Smart Plug Mini", "Electronics")

        assert keywords[0] == "Smart products"
        assert "consumer electronics" in keywords

    def test_generic_theme_padded_from_pool(self):
        """Test that short brands are skipped and the pool fills the gap."""
        keywords = generate_secondary_keywords("TV Stand", "Furniture")

        assert "premium quality products" in keywords
        assert "best value deals" in keywords
        assert len(keywords) == 4
        assert all(k in GENERIC_KEYWORD_POOL for k in keywords[2:])

    @pytest.mark.parametrize("name,categories", [
        ("UltraSound Pro Wireless Earbuds X200", "Audio, Electronics"),
        ("", ""),
        ("TV", ""),
        ("best price online", ""),
        ("Kettle, Steel", "Kitchen"),
        ("Premium Quality Products", ""),
    ])
    def test_exactly_four_unique(self, name: str, categories: str):
        """Test cardinality and uniqueness for any input."""
        keywords = generate_secondary_keywords(name, categories)

        assert len(keywords) == 4
        assert len({k.lower() for k in keywords}) == 4
        assert all(k for k in keywords)

    def test_never_repeats_primary(self):
        """Test that the primary keyword is not returned as a secondary one."""
        keywords = generate_secondary_keywords("best price online", "")

        assert "best price online" not in [k.lower() for k in keywords]

    def test_deterministic(self):
        """Test that the same name always gets the same keywords."""
        first = generate_secondary_keywords("Ceramic Coffee Mug", "Kitchen")
        second = generate_secondary_keywords("Ceramic Coffee Mug", "Kitchen")

        assert first == second

    def test_keywords_contain_no_commas(self):
        keywords = generate_secondary_keywords("Kettle, Steel", "Kitchen")

        assert all("," not in k for k in keywords)


class TestFocusKeywords:
    """Tests for the joined focus keyword string."""

    def test_five_entries(self):
        focus = build_focus_keywords("UltraSound Pro Wireless Earbuds X200", "Audio")

        entries = focus.split(", ")
        assert len(entries) == 5
        assert entries[0] == "UltraSound Pro Wireless Earbuds"

    def test_empty_name_uses_default_keyword(self):
        focus = build_focus_keywords("")

        assert focus.split(", ")[0] == "Product"
        assert len(focus.split(", ")) == 5

    def test_clean_keyword(self):
        assert clean_keyword("Kettle, Steel") == "Kettle Steel"


class TestPermalink:
    """Tests for permalink creation."""

    def test_basic_permalink(self):
        assert create_optimal_permalink("UltraSound Pro Wireless Earbuds") == (
            "ultrasound-pro-wireless-earbuds"
        )

    def test_strips_non_alphanumeric_per_token(self):
        assert create_optimal_permalink("C++ Adapter") == "c-adapter"

    def test_stops_before_overflowing_token(self):
        """Test that whole tokens are appended only while within 45 chars."""
        permalink = create_optimal_permalink(
            "Supercalifragilisticexpialidocious Extraordinary Accessory Bundle"
        )

        assert permalink == "supercalifragilisticexpialidocious"

    def test_single_overlong_token_falls_back_to_slug(self):
        permalink = create_optimal_permalink("a" * 60)

        assert permalink == "a" * 45

    def test_no_usable_characters(self):
        assert create_optimal_permalink("!!! ???") == "product"
        assert create_optimal_permalink("") == "product"

    @pytest.mark.parametrize("keyword", [
        "UltraSound Pro Wireless Earbuds",
        "---",
        "-leading and trailing-",
        "Über Größe Jacke",
        "x" * 100,
        "one two three four five six seven eight nine ten eleven",
        "Model (2024) | Edition",
    ])
    def test_permalink_invariants(self, keyword: str):
        """Test length bound, charset and hyphen placement."""
        permalink = create_optimal_permalink(keyword)

        assert 0 < len(permalink) <= 45
        assert SLUG_PATTERN.match(permalink)
        assert not permalink.startswith("-")
        assert not permalink.endswith("-")


class TestSlugify:
    """Tests for the generic slug helper."""

    def test_slugify(self):
        assert slugify("Hello, World!  Foo") == "hello-world-foo"

    def test_slugify_trims_to_max_length(self):
        slug = slugify("word " * 20, max_length=12)

        assert len(slug) <= 12
        assert not slug.endswith("-")

    def test_truncate_permalink_strips_hyphens(self):
        """Test that a literal override is bounded and loses dangling hyphens."""
        value = truncate_permalink("word-" * 10)

        assert len(value) <= 45
        assert not value.endswith("-")
        assert value.startswith("word-word")

    def test_truncate_short_permalink_unchanged(self):
        assert truncate_permalink("custom-slug") == "custom-slug"
