"""
Compliance rules as data.

Hard rules describe what the repairer must guarantee (lengths, keyword
prefix, permalink bound). Soft rules describe advisory targets (word count,
keyword density, link minimums) that are only ever reported as warnings.
"""

from typing import Optional

from .config import ComplianceConfig
from .density import compute_density, count_words, strip_tags
from .links import count_external_follow_links, count_internal_category_links
from .models import ComplianceRule, RuleKind, Severity


def build_rule_set(config: Optional[ComplianceConfig] = None) -> list[ComplianceRule]:
    """
    Build the default rule table for a configuration.

    Args:
        config: Compliance configuration. Defaults to ComplianceConfig().

    Returns:
        List of rules, hard rules first.
    """
    if config is None:
        config = ComplianceConfig()

    hard = Severity.HARD
    soft = Severity.SOFT

    rules = [
        ComplianceRule("meta_title", RuleKind.MIN_LENGTH, (config.title_min_length,), hard),
        ComplianceRule("meta_title", RuleKind.MAX_LENGTH, (config.title_max_length,), hard),
        ComplianceRule("meta_title", RuleKind.MUST_START_WITH_KEYWORD, (), hard),
        ComplianceRule("meta_description", RuleKind.MIN_LENGTH, (config.meta_description_min_length,), hard),
        ComplianceRule("meta_description", RuleKind.MAX_LENGTH, (config.meta_description_max_length,), hard),
        ComplianceRule("meta_description", RuleKind.MUST_START_WITH_KEYWORD, (), hard),
        ComplianceRule("long_description", RuleKind.MIN_LENGTH, (config.long_description_min_length,), hard),
        ComplianceRule("short_description", RuleKind.MIN_LENGTH, (config.short_description_min_length,), hard),
        ComplianceRule("short_description", RuleKind.MAX_LENGTH, (config.short_description_max_length,), hard),
        ComplianceRule("short_description", RuleKind.MUST_START_WITH_KEYWORD, (), hard),
        ComplianceRule("permalink", RuleKind.MAX_LENGTH, (config.permalink_max_length,), hard),
        ComplianceRule("alt_text", RuleKind.MIN_LENGTH, (1,), hard),
    ]

    if config.warn_on_word_count:
        rules.append(ComplianceRule(
            "long_description", RuleKind.MIN_WORD_COUNT,
            (config.long_description_target_words,), soft,
        ))
    if config.warn_on_density:
        rules.append(ComplianceRule(
            "long_description", RuleKind.DENSITY_BAND,
            (config.density_min_percent, config.density_max_percent), soft,
        ))
    rules.append(ComplianceRule(
        "long_description", RuleKind.MIN_INTERNAL_LINKS, (config.min_internal_links,), soft,
    ))
    rules.append(ComplianceRule(
        "long_description", RuleKind.MIN_EXTERNAL_FOLLOW_LINKS,
        (config.min_external_follow_links,), soft,
    ))

    return rules


def check_rule(
    rule: ComplianceRule,
    value: str,
    keyword: str = "",
    store_url: str = "",
) -> bool:
    """
    Evaluate a single rule against a field value.

    Lengths are measured on tag-stripped text. A rule whose bounds are
    missing passes. Never raises.

    Args:
        rule: The rule to evaluate.
        value: Field value.
        keyword: Keyword used by prefix and density rules.
        store_url: Store base URL used by link rules.

    Returns:
        True if the value satisfies the rule.
    """
    value = value or ""
    plain = " ".join(strip_tags(value).split())
    kind = rule.kind
    bounds = rule.bounds

    if kind == RuleKind.MUST_START_WITH_KEYWORD:
        if not keyword:
            return True
        return plain.lower().startswith(keyword.strip().lower())

    if kind == RuleKind.DENSITY_BAND:
        if len(bounds) < 2:
            return True
        density = compute_density(value, keyword).density_percent
        return bounds[0] <= density <= bounds[1]

    if not bounds:
        return True
    bound = bounds[0]

    if kind == RuleKind.MAX_LENGTH:
        return len(plain) <= bound
    if kind == RuleKind.MIN_LENGTH:
        return len(plain) >= bound
    if kind == RuleKind.MIN_WORD_COUNT:
        return count_words(plain) >= bound
    if kind == RuleKind.MIN_INTERNAL_LINKS:
        return count_internal_category_links(value, store_url) >= bound
    if kind == RuleKind.MIN_EXTERNAL_FOLLOW_LINKS:
        return count_external_follow_links(value, store_url) >= bound

    return True
