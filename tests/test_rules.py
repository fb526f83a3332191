"""Tests for link analysis and the compliance rule table."""

import pytest

from product_seo_engine.config import ComplianceConfig
from product_seo_engine.links import (
    count_external_follow_links,
    count_internal_category_links,
    has_h1,
    is_internal_category_link,
)
from product_seo_engine.models import ComplianceRule, RuleKind, Severity
from product_seo_engine.rules import build_rule_set, check_rule


STORE = "https://shop.example.com"


class TestInternalLinks:
    """Tests for internal category link detection."""

    def test_counts_store_and_relative_links(self):
        html_text = (
            '<a href="https://shop.example.com/product-category/audio">Audio</a>'
            '<a href="/product-category/sale">Sale</a>'
            '<a href="https://other.com/product-category/x">Other</a>'
            '<a href="https://shop.example.com/about">About</a>'
        )

        assert count_internal_category_links(html_text, STORE) == 2

    def test_any_host_without_store_url(self):
        html_text = '<a href="https://other.com/product-category/x">Other</a>'

        assert count_internal_category_links(html_text) == 1

    def test_www_prefix_ignored(self):
        assert is_internal_category_link(
            "https://shop.example.com/product-category/a", "https://www.shop.example.com"
        )

    def test_empty_html(self):
        assert count_internal_category_links("", STORE) == 0


class TestExternalFollowLinks:
    """Tests for external follow link detection."""

    def test_only_qualifying_anchors_counted(self):
        html_text = (
            '<a href="https://a.com" target="_blank">A</a>'
            '<a href="https://b.com" target="_blank" rel="nofollow noopener">B</a>'
            '<a href="https://c.com">C</a>'
            '<a href="https://shop.example.com/x" target="_blank">Store</a>'
            '<a href="/relative" target="_blank">Relative</a>'
            '<a href="http://d.com" target="_blank" rel="noopener">D</a>'
        )

        assert count_external_follow_links(html_text, STORE) == 2

    def test_nofollow_case_insensitive(self):
        html_text = '<a href="https://a.com" target="_blank" rel="NoFollow">A</a>'

        assert count_external_follow_links(html_text) == 0

    def test_has_h1(self):
        assert has_h1("<h1>Title</h1><p>x</p>")
        assert not has_h1("<h2>Title</h2>")


class TestBuildRuleSet:
    """Tests for the default rule table."""

    def test_two_severities(self):
        rules = build_rule_set()

        hard = {(r.field, r.kind) for r in rules if r.severity == Severity.HARD}
        soft = {(r.field, r.kind) for r in rules if r.severity == Severity.SOFT}

        assert ("permalink", RuleKind.MAX_LENGTH) in hard
        assert ("meta_title", RuleKind.MUST_START_WITH_KEYWORD) in hard
        assert ("long_description", RuleKind.MIN_WORD_COUNT) in soft
        assert ("long_description", RuleKind.DENSITY_BAND) in soft
        assert ("long_description", RuleKind.MIN_INTERNAL_LINKS) in soft
        assert ("long_description", RuleKind.MIN_EXTERNAL_FOLLOW_LINKS) in soft

    def test_bounds_follow_config(self):
        rules = build_rule_set(ComplianceConfig(title_max_length=55))

        title_max = next(
            r for r in rules if r.field == "meta_title" and r.kind == RuleKind.MAX_LENGTH
        )
        assert title_max.bounds == (55,)

    def test_lenient_drops_advisories(self):
        """Test that lenient mode keeps link minimums but drops word count and density."""
        kinds = {r.kind for r in build_rule_set(ComplianceConfig.lenient())}

        assert RuleKind.MIN_WORD_COUNT not in kinds
        assert RuleKind.DENSITY_BAND not in kinds
        assert RuleKind.MIN_INTERNAL_LINKS in kinds
        assert RuleKind.MIN_EXTERNAL_FOLLOW_LINKS in kinds


class TestCheckRule:
    """Tests for single rule evaluation."""

    def test_max_length_measures_plain_text(self):
        rule = ComplianceRule("meta_title", RuleKind.MAX_LENGTH, (10,))

        assert check_rule(rule, "<b>short</b>")
        assert not check_rule(rule, "much longer than ten")

    def test_min_length(self):
        rule = ComplianceRule("meta_title", RuleKind.MIN_LENGTH, (5,))

        assert check_rule(rule, "hello")
        assert not check_rule(rule, "hi")
        assert not check_rule(rule, None)

    def test_must_start_with_keyword(self):
        rule = ComplianceRule("meta_title", RuleKind.MUST_START_WITH_KEYWORD)

        assert check_rule(rule, "Desk Lamp - Best", "desk lamp")
        assert check_rule(rule, "<h1>Desk Lamp</h1> text", "Desk Lamp")
        assert not check_rule(rule, "Best Desk Lamp", "Desk Lamp")
        assert check_rule(rule, "anything", "")

    def test_min_word_count(self):
        rule = ComplianceRule("long_description", RuleKind.MIN_WORD_COUNT, (3,), Severity.SOFT)

        assert check_rule(rule, "<p>one two three</p>")
        assert not check_rule(rule, "<p>one two</p>")

    def test_density_band(self):
        rule = ComplianceRule("long_description", RuleKind.DENSITY_BAND, (1.0, 2.0), Severity.SOFT)
        words = ["filler"] * 98 + ["lamp", "lamp"]

        assert check_rule(rule, " ".join(words), "lamp")
        assert not check_rule(rule, "lamp lamp lamp", "lamp")

    def test_link_rules(self):
        html_text = (
            '<a href="/product-category/a">a</a>'
            '<a href="https://a.com" target="_blank">b</a>'
        )
        internal = ComplianceRule("long_description", RuleKind.MIN_INTERNAL_LINKS, (1,), Severity.SOFT)
        external = ComplianceRule(
            "long_description", RuleKind.MIN_EXTERNAL_FOLLOW_LINKS, (2,), Severity.SOFT
        )

        assert check_rule(internal, html_text, store_url=STORE)
        assert not check_rule(external, html_text, store_url=STORE)

    @pytest.mark.parametrize("kind", list(RuleKind))
    def test_missing_bounds_pass(self, kind: RuleKind):
        """Test that a rule without bounds never fails or raises."""
        rule = ComplianceRule("long_description", kind)

        assert check_rule(rule, "", "") is True


class TestDescribe:
    """Tests for rule descriptions."""

    def test_describe_length(self):
        rule = ComplianceRule("meta_title", RuleKind.MAX_LENGTH, (60,))

        assert rule.describe() == "meta_title: max_length 60"

    def test_describe_density(self):
        rule = ComplianceRule("long_description", RuleKind.DENSITY_BAND, (1.0, 2.0))

        assert rule.describe() == "long_description: keyword density 1.0%-2.0%"
