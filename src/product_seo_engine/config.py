# -*- coding: utf-8 -*-
"""
Centralized configuration for the Product SEO Engine.

Two dataclasses control the engine:

- ComplianceConfig: the bounds and pools used by the compliance
  validator & repairer when it turns generated text into a content record.
- HealthCheckConfig: the quality thresholds and scoring weights used by
  the content health scorer when it audits stored products.
"""

from dataclasses import dataclass, field


# Default store category slugs used when a synthesized long description
# needs internal links and the product has fewer categories than required.
DEFAULT_CATEGORY_SLUGS: tuple[str, ...] = (
    "featured-products",
    "best-sellers",
    "new-arrivals",
)

# (url, anchor text) pairs used for external follow links.
DEFAULT_AUTHORITY_LINKS: tuple[tuple[str, str], ...] = (
    ("https://www.consumerreports.org/", "Consumer Reports buying guides"),
    ("https://en.wikipedia.org/wiki/Product_design", "product design principles"),
)

DEFAULT_POWER_WORDS: tuple[str, ...] = (
    "Ultimate",
    "Best",
    "Top",
    "Premium",
    "Professional",
    "Advanced",
)

# Fields tracked by the health scorer, in reporting order.
HEALTH_TRACKED_FIELDS: tuple[str, ...] = (
    "meta_title",
    "meta_description",
    "short_description",
    "long_description",
    "alt_text",
    "focus_keywords",
    "permalink",
)


@dataclass
class ComplianceConfig:
    """
    Bounds applied by the compliance validator & repairer.

    Attributes:
        title_max_length: Hard ceiling for the meta title.
        title_min_length: Presence floor below which the title is synthesized.
        meta_description_max_length: Hard ceiling for the meta description.
        meta_description_min_length: Presence floor for the meta description.
        short_description_max_length: Hard ceiling for the short description.
        short_description_min_length: Presence floor for the short description.
        long_description_min_length: Presence floor (plain-text characters)
            below which a full HTML skeleton is synthesized.
        permalink_max_length: Hard bound for permalinks, applied both when
            rebuilding from the keyword and to literal overrides.

        Soft advisory targets (reported as warnings, never block repair):
            long_description_target_words: Word-count target (750).
            density_min_percent / density_max_percent: Keyword density band.
            density_ideal_percent: Ideal density, used in warning details.
            warn_on_word_count / warn_on_density: Switches for the two
                advisory warnings.

        Additive link minimums for the long description:
            min_internal_links: Internal category links required.
            min_external_follow_links: External follow links required.

        power_words: Pool used when a title has to be synthesized.
        category_slugs: Padding slugs for synthesized internal links.
        authority_links: (url, anchor) pairs for external follow links.
    """

    # Hard bounds
    title_max_length: int = 60
    title_min_length: int = 10
    meta_description_max_length: int = 155
    meta_description_min_length: int = 20
    short_description_max_length: int = 160
    short_description_min_length: int = 20
    long_description_min_length: int = 100
    permalink_max_length: int = 45

    # Soft targets
    long_description_target_words: int = 750
    density_min_percent: float = 1.0
    density_max_percent: float = 2.0
    density_ideal_percent: float = 1.5
    warn_on_word_count: bool = True
    warn_on_density: bool = True

    # Link minimums (repaired additively)
    min_internal_links: int = 3
    min_external_follow_links: int = 2

    power_words: tuple[str, ...] = DEFAULT_POWER_WORDS
    category_slugs: tuple[str, ...] = DEFAULT_CATEGORY_SLUGS
    authority_links: tuple[tuple[str, str], ...] = DEFAULT_AUTHORITY_LINKS

    def __post_init__(self):
        """Validate configuration values."""
        for name in (
            "title_max_length",
            "meta_description_max_length",
            "short_description_max_length",
            "permalink_max_length",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.title_min_length > self.title_max_length:
            raise ValueError(
                f"title_min_length ({self.title_min_length}) must be <= "
                f"title_max_length ({self.title_max_length})"
            )
        if self.meta_description_min_length > self.meta_description_max_length:
            raise ValueError(
                f"meta_description_min_length ({self.meta_description_min_length}) must be <= "
                f"meta_description_max_length ({self.meta_description_max_length})"
            )
        if self.short_description_min_length > self.short_description_max_length:
            raise ValueError(
                f"short_description_min_length ({self.short_description_min_length}) must be <= "
                f"short_description_max_length ({self.short_description_max_length})"
            )
        if not 0 <= self.density_min_percent <= self.density_max_percent:
            raise ValueError(
                f"density band must satisfy 0 <= min <= max, got "
                f"{self.density_min_percent}-{self.density_max_percent}"
            )
        if self.min_internal_links < 0 or self.min_external_follow_links < 0:
            raise ValueError("link minimums must be >= 0")
        if not self.power_words:
            raise ValueError("power_words must not be empty")
        if len(self.authority_links) < self.min_external_follow_links:
            raise ValueError(
                f"authority_links must provide at least {self.min_external_follow_links} links"
            )

    @classmethod
    def lenient(cls, **overrides) -> "ComplianceConfig":
        """Create config without the word-count and density advisories.

        Link minimums are still repaired additively.

        Args:
            **overrides: Override any config values.

        Returns:
            ComplianceConfig with advisory warnings switched off.
        """
        defaults = {
            "warn_on_word_count": False,
            "warn_on_density": False,
        }
        defaults.update(overrides)
        return cls(**defaults)


@dataclass
class HealthCheckConfig:
    """
    Quality thresholds and scoring weights for the content health scorer.

    Attributes:
        min_meta_title_length: Characters below which a title is "poor".
        min_meta_description_length: Characters below which a meta
            description is "poor".
        min_short_description_words: Words below which a short description
            is "poor".
        min_long_description_words: Words below which a long description
            is "poor".
        min_alt_text_length: Characters below which alt text is "poor".
        poor_weight: Fraction of a field's share of the score that a "poor"
            field earns. Must lie strictly between 0 and 1.
        critical_missing_ratio: A product is critical when more than this
            fraction of checked fields is missing.
        common_missing_top_n: How many fields the batch summary lists.
        tracked_fields: Which record fields are checked, in order.
        fallback_to_product_name: Treat the product name as the SEO title
            when no title meta is stored.
        fallback_to_short_description: Treat the short description as the
            meta description when no description meta is stored.
        fallback_to_tags: Treat product tags as focus keywords when no
            focus keyword meta is stored.
    """

    min_meta_title_length: int = 30
    min_meta_description_length: int = 80
    min_short_description_words: int = 10
    min_long_description_words: int = 100
    min_alt_text_length: int = 5

    poor_weight: float = 0.5
    critical_missing_ratio: float = 0.5
    common_missing_top_n: int = 6

    tracked_fields: tuple[str, ...] = field(default=HEALTH_TRACKED_FIELDS)

    fallback_to_product_name: bool = False
    fallback_to_short_description: bool = True
    fallback_to_tags: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if not 0 < self.poor_weight < 1:
            raise ValueError(
                f"poor_weight must be strictly between 0 and 1, got {self.poor_weight}"
            )
        if not 0 <= self.critical_missing_ratio < 1:
            raise ValueError(
                f"critical_missing_ratio must be in [0, 1), got {self.critical_missing_ratio}"
            )
        if self.common_missing_top_n < 1:
            raise ValueError(
                f"common_missing_top_n must be >= 1, got {self.common_missing_top_n}"
            )
        if not self.tracked_fields:
            raise ValueError("tracked_fields must not be empty")
        unknown = [f for f in self.tracked_fields if f not in HEALTH_TRACKED_FIELDS]
        if unknown:
            raise ValueError(
                f"Unknown tracked fields: {', '.join(unknown)}. "
                f"Expected any of: {', '.join(HEALTH_TRACKED_FIELDS)}"
            )
