# -*- coding: utf-8 -*-
"""
Content health scoring for stored products.

Audits products already stored in the storefront against the same field
set the generator produces. Each tracked field is classified as:

- present: has content that meets the quality threshold
- poor: has content that falls short of the threshold
- missing: has no content at all

Per product the checks roll up into an overall status and a 0-100 score;
across a product set they roll up into a summary.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from .config import HealthCheckConfig
from .density import count_words, strip_tags
from .models import (
    CheckStatus,
    FieldCheck,
    HealthCheckResult,
    HealthSummary,
    OverallStatus,
)
from .profiles import PluginProfile, SeoPlugin, extract_meta_value, get_profile

logger = logging.getLogger(__name__)

ProfileSelector = Union[SeoPlugin, str, PluginProfile, None]


@dataclass(frozen=True)
class FieldRule:
    """Quality threshold for one tracked field."""
    name: str
    min_length: Optional[int] = None
    min_words: Optional[int] = None
    required: bool = True


def build_field_rules(config: HealthCheckConfig) -> list[FieldRule]:
    """
    Field rules for the configured tracked fields.

    Args:
        config: Health check configuration.

    Returns:
        Rules in tracked-field order.
    """
    all_rules = {
        "meta_title": FieldRule("meta_title", min_length=config.min_meta_title_length),
        "meta_description": FieldRule(
            "meta_description", min_length=config.min_meta_description_length
        ),
        "short_description": FieldRule(
            "short_description", min_words=config.min_short_description_words
        ),
        "long_description": FieldRule(
            "long_description", min_words=config.min_long_description_words
        ),
        "alt_text": FieldRule("alt_text", min_length=config.min_alt_text_length, required=False),
        "focus_keywords": FieldRule("focus_keywords", required=False),
        "permalink": FieldRule("permalink", required=False),
    }
    return [all_rules[name] for name in config.tracked_fields]


def _label(field_name: str) -> str:
    return field_name.replace("_", " ")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class ContentHealthAnalyzer:
    """
    Scores stored products for SEO content completeness.

    The analyzer is stateless apart from its configuration, so a single
    instance can be shared between threads.
    """

    def __init__(self, config: Optional[HealthCheckConfig] = None):
        self.config = config or HealthCheckConfig()
        self.field_rules = build_field_rules(self.config)

    def analyze(self, product: Mapping[str, Any], plugin: ProfileSelector = None) -> HealthCheckResult:
        """
        Analyze one stored product.

        Args:
            product: WooCommerce-style product mapping.
            plugin: SEO plugin selector deciding which meta keys are read.

        Returns:
            HealthCheckResult with per-field checks, status and score.
        """
        profile = get_profile(plugin)
        checks = [self._check_field(product, rule, profile) for rule in self.field_rules]
        overall = self._overall_status(checks)
        score = self._seo_score(checks)

        result = HealthCheckResult(
            product_id=product.get("id"),
            product_name=_text(product.get("name")),
            overall_status=overall,
            seo_score=score,
            checks=checks,
            last_checked=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            f"Product {result.product_name or result.product_id} analysis complete - "
            f"Status: {overall.value}, Score: {score}%, "
            f"Missing: {', '.join(result.missing_fields) or 'none'}"
        )
        return result

    def analyze_batch(
        self,
        products: Iterable[Mapping[str, Any]],
        plugin: ProfileSelector = None,
        max_workers: Optional[int] = None,
    ) -> list[HealthCheckResult]:
        """
        Analyze many products, preserving input order.

        Args:
            products: Product mappings.
            plugin: SEO plugin selector.
            max_workers: Thread count; None or 1 runs sequentially.

        Returns:
            One result per product.
        """
        products = list(products)
        profile = get_profile(plugin)
        logger.info(
            f"Analyzing {len(products)} products for content health "
            f"with SEO plugin: {profile.name}"
        )
        if max_workers and max_workers > 1 and len(products) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                return list(executor.map(lambda p: self.analyze(p, profile), products))
        return [self.analyze(product, profile) for product in products]

    def summarize(self, results: Iterable[HealthCheckResult]) -> HealthSummary:
        """
        Aggregate results across a product set.

        Args:
            results: Per-product results.

        Returns:
            HealthSummary with status counts and the most commonly
            missing fields, most frequent first.
        """
        results = list(results)
        complete = sum(1 for r in results if r.overall_status == OverallStatus.COMPLETE)
        attention = sum(1 for r in results if r.overall_status == OverallStatus.NEEDS_ATTENTION)
        critical = sum(1 for r in results if r.overall_status == OverallStatus.CRITICAL)

        missing_counts: Counter = Counter()
        for result in results:
            missing_counts.update(result.missing_fields)

        return HealthSummary(
            total=len(results),
            complete=complete,
            needs_attention_one_plus=attention + critical,
            critical=critical,
            common_missing_fields=missing_counts.most_common(self.config.common_missing_top_n),
        )

    def _field_value(self, product: Mapping[str, Any], field_name: str, profile: PluginProfile) -> str:
        """Read the stored value for a logical field."""
        config = self.config

        if field_name == "meta_title":
            value = extract_meta_value(product, profile.keys_for("meta_title"))
            if not value and config.fallback_to_product_name:
                value = _text(product.get("name"))
            return value

        if field_name == "meta_description":
            value = extract_meta_value(product, profile.keys_for("meta_description"))
            if not value and config.fallback_to_short_description:
                value = _text(product.get("short_description"))
            return value

        if field_name == "focus_keywords":
            value = extract_meta_value(product, profile.keys_for("focus_keywords"))
            if not value and config.fallback_to_tags:
                tags = product.get("tags")
                if isinstance(tags, str):
                    names = [t.strip() for t in tags.split(",")]
                elif isinstance(tags, (list, tuple)):
                    names = [_text(t.get("name")) for t in tags if isinstance(t, Mapping)]
                else:
                    names = []
                value = ", ".join(n for n in names if n)
            return value

        if field_name == "short_description":
            return _text(product.get("short_description"))

        if field_name == "long_description":
            return _text(product.get("description")) or _text(product.get("long_description"))

        if field_name == "alt_text":
            images = product.get("images")
            if isinstance(images, (list, tuple)) and images and isinstance(images[0], Mapping):
                alt = _text(images[0].get("alt"))
                if alt:
                    return alt
            return _text(product.get("alt_text"))

        if field_name == "permalink":
            return _text(product.get("slug"))

        return ""

    def _check_field(self, product: Mapping[str, Any], rule: FieldRule, profile: PluginProfile) -> FieldCheck:
        value = self._field_value(product, rule.name, profile)
        clean = " ".join(strip_tags(value).split())
        label = _label(rule.name)

        if not clean:
            reason = f"{label} is required but missing" if rule.required else f"{label} is not set"
            return FieldCheck(field=rule.name, status=CheckStatus.MISSING, reason=reason)

        if rule.min_length and len(clean) < rule.min_length:
            return FieldCheck(
                field=rule.name,
                status=CheckStatus.POOR,
                reason=f"{label} is too short ({len(clean)} chars, minimum {rule.min_length})",
                threshold=rule.min_length,
            )

        if rule.min_words:
            words = count_words(clean)
            if words < rule.min_words:
                return FieldCheck(
                    field=rule.name,
                    status=CheckStatus.POOR,
                    reason=f"{label} has too few words ({words} words, minimum {rule.min_words})",
                    threshold=rule.min_words,
                )

        return FieldCheck(field=rule.name, status=CheckStatus.PRESENT)

    def _overall_status(self, checks: list[FieldCheck]) -> OverallStatus:
        missing = sum(1 for c in checks if c.status == CheckStatus.MISSING)
        poor = sum(1 for c in checks if c.status == CheckStatus.POOR)

        if missing > len(checks) * self.config.critical_missing_ratio:
            return OverallStatus.CRITICAL
        if missing or poor:
            return OverallStatus.NEEDS_ATTENTION
        return OverallStatus.COMPLETE

    def _seo_score(self, checks: list[FieldCheck]) -> int:
        """
        Weighted percentage: present = 1, poor = poor_weight, missing = 0.

        Rounding never collapses a partially filled product onto 0 or a
        not-fully-present product onto 100.
        """
        if not checks:
            return 0
        present = sum(1 for c in checks if c.status == CheckStatus.PRESENT)
        poor = sum(1 for c in checks if c.status == CheckStatus.POOR)
        score = round((present + poor * self.config.poor_weight) / len(checks) * 100)

        if score == 0 and (present or poor):
            return 1
        if score == 100 and present < len(checks):
            return 99
        return score


_default_analyzer = ContentHealthAnalyzer()


def analyze(product: Mapping[str, Any], plugin: ProfileSelector = None) -> HealthCheckResult:
    """Analyze one product with the default configuration."""
    return _default_analyzer.analyze(product, plugin)


def analyze_batch(
    products: Iterable[Mapping[str, Any]],
    plugin: ProfileSelector = None,
    max_workers: Optional[int] = None,
) -> list[HealthCheckResult]:
    """Analyze many products with the default configuration."""
    return _default_analyzer.analyze_batch(products, plugin, max_workers=max_workers)


def summarize(results: Iterable[HealthCheckResult]) -> HealthSummary:
    """Summarize results with the default configuration."""
    return _default_analyzer.summarize(results)
