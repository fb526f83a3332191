# -*- coding: utf-8 -*-
"""
Compliance validation and non-destructive repair.

Turns parsed (possibly partial) generator output into a fully populated
ContentRecord. Fields fall into two groups:

- Preserved-with-patches: meta title, meta description, short and long
  descriptions. Existing text is kept; a missing keyword prefix is
  prepended, missing links or headings are appended. Only text under the
  presence floor is replaced by a synthesized fallback.
- Freely regenerated: permalink and focus keywords are always rebuilt
  from the product name, so repairing twice yields the same values.

After repair, the rule table is evaluated. Hard-rule failures that could
not be fixed without discarding content, and every soft-rule failure
(word count, keyword density, link minimums), are reported as warnings.
Nothing here raises on content.
"""

import html
import logging
import random
from typing import Any, Mapping, Optional, Union

from bs4 import BeautifulSoup, Comment, NavigableString

from .config import ComplianceConfig
from .density import TAG_PATTERN, compute_density, count_words, strip_tags, target_occurrences
from .keywords import (
    DEFAULT_PRODUCT_KEYWORD,
    build_focus_keywords,
    create_optimal_permalink,
    extract_primary_keyword,
    get_short_keyword,
    slugify,
    truncate_permalink,
)
from .links import (
    CATEGORY_PATH,
    count_external_follow_links,
    count_internal_category_links,
    has_h1,
)
from .models import (
    ComplianceReport,
    ComplianceRule,
    ContentRecord,
    FieldStatus,
    RuleKind,
    Severity,
)
from .rules import build_rule_set, check_rule

logger = logging.getLogger(__name__)

ALT_TEXT_SUFFIX = "product image showing premium quality features"
DESCRIPTION_CALL_TO_ACTION = "Shop now!"


def _plain(text: str) -> str:
    return " ".join(strip_tags(text).split())


def _starts_with_keyword(text: str, keyword: str) -> bool:
    return _plain(text).lower().startswith(keyword.lower())


def _ellipsize(text: str, limit: int) -> str:
    """Hard-truncate with an ellipsis as the last resort."""
    if len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3].rstrip() + "..."


def _fit(text: str, limit: int) -> str:
    """
    Truncate text to limit characters, preferring a word boundary.

    Args:
        text: Text to shorten.
        limit: Maximum length.

    Returns:
        Shortened text without dangling separators.
    """
    text = text.strip()
    if len(text) <= limit:
        return text
    cut = text[:limit]
    if not text[limit].isspace() and " " in cut:
        cut = cut[: cut.rfind(" ")]
    cut = cut.rstrip(" ,;:-|")
    return cut or text[:limit].rstrip()


def _prepend_keyword(text: str, keyword: str, limit: int) -> str:
    """Prefix '{keyword} - ' to existing text, shortening the original part."""
    prefix = f"{keyword} - "
    room = limit - len(prefix)
    if room <= 0:
        return _ellipsize(keyword, limit)
    if TAG_PATTERN.search(text):
        return _prepend_keyword_markup(text, prefix, limit)
    return prefix + _fit(text, room)


def _prepend_keyword_markup(markup: str, prefix: str, limit: int) -> str:
    """
    Prefix the first text node of an HTML value and trim later text nodes.

    The limit applies to the visible text, measured the way _plain measures
    it. Tags are never cut; elements left without text are dropped.
    """
    soup = BeautifulSoup(markup, "html.parser")
    nodes = [
        node for node in soup.find_all(string=True)
        if not isinstance(node, Comment) and node.strip()
    ]
    if not nodes:
        return prefix + _fit(_plain(markup), limit - len(prefix))

    used = 0
    for index, node in enumerate(nodes):
        visible = " ".join(node.split())
        if index == 0:
            fitted = _fit(visible, limit - len(prefix))
            leading = " " if node[:1].isspace() else ""
            trailing = " " if node[-1:].isspace() and fitted == visible else ""
            node.replace_with(NavigableString(leading + prefix + fitted + trailing))
            used = len(prefix) + len(fitted)
            if fitted != visible:
                for later in nodes[1:]:
                    _drop_text_node(later)
                break
            continue

        room = limit - used - 1
        if len(visible) <= room:
            used += len(visible) + 1
            continue

        fitted = _fit(visible, room) if room > 0 else ""
        if fitted:
            node.replace_with(NavigableString(" " + fitted if node[:1].isspace() else fitted))
            used += len(fitted) + 1
        else:
            _drop_text_node(node)
        for later in nodes[index + 1:]:
            _drop_text_node(later)
        break

    return str(soup)


def _drop_text_node(node: NavigableString) -> None:
    parent = node.parent
    node.extract()
    while parent is not None and parent.name != "[document]" and not parent.get_text(strip=True):
        if parent.find(["img", "br", "hr"]):
            break
        grandparent = parent.parent
        parent.decompose()
        parent = grandparent


def _category_slugs(category_text: str, config: ComplianceConfig, count: int) -> list[str]:
    """Unique category slugs for internal links, padded from config."""
    slugs: list[str] = []
    candidates = [slugify(name) for name in (category_text or "").split(",")]
    candidates += list(config.category_slugs)
    for slug in candidates:
        if slug and slug not in slugs:
            slugs.append(slug)
    if not slugs:
        slugs = ["shop"]
    while len(slugs) < count:
        slugs.append(slugs[len(slugs) % len(set(slugs))])
    return slugs[:count]


def _join_links(anchors: list[str]) -> str:
    if len(anchors) <= 1:
        return "".join(anchors)
    return ", ".join(anchors[:-1]) + " and " + anchors[-1]


def internal_links_paragraph(store_url: str, category_text: str, config: ComplianceConfig) -> str:
    """Fixed sentence carrying the required internal category links."""
    base = (store_url or "").rstrip("/")
    anchors = []
    for slug in _category_slugs(category_text, config, config.min_internal_links):
        label = html.escape(slug.replace("-", " ").title())
        anchors.append(f'<a href="{base}{CATEGORY_PATH}{slug}">{label}</a>')
    return f"<p>Explore more in our {_join_links(anchors)} collections.</p>"


def external_links_paragraph(config: ComplianceConfig) -> str:
    """Fixed sentence carrying the required external follow links."""
    anchors = [
        f'<a href="{url}" target="_blank">{html.escape(label)}</a>'
        for url, label in config.authority_links[: config.min_external_follow_links]
    ]
    return f"<p>For independent research, see {_join_links(anchors)}.</p>"


def build_long_description_skeleton(
    primary_keyword: str,
    short_keyword: str,
    store_url: str,
    category_text: str,
    config: ComplianceConfig,
) -> str:
    """
    Synthesize a complete long description.

    Contains an <h1> with the keyword, feature list, comparison table,
    one answered question, the internal category links and the external
    follow links.
    """
    kw = html.escape(primary_keyword)
    short = html.escape(short_keyword)
    parts = [
        f"<h1>{kw}</h1>",
        f"<p><strong>{kw}</strong> is built for shoppers who expect premium quality, "
        f"dependable performance and real value every day. Every detail of the {short} "
        f"has been chosen to make it a reliable part of your routine.</p>",
        f"<h2>Key Features of the {short}</h2>",
        "<ul>",
        "<li><strong>Premium build:</strong> durable materials that hold up to daily use.</li>",
        "<li><strong>Thoughtful design:</strong> easy to set up and comfortable to use.</li>",
        "<li><strong>Reliable performance:</strong> consistent results you can count on.</li>",
        "<li><strong>Great value:</strong> quality features at a competitive price.</li>",
        "</ul>",
        f"<h2>{short} Comparison</h2>",
        "<table>",
        f"<thead><tr><th>Feature</th><th>{short}</th><th>Standard Alternatives</th></tr></thead>",
        "<tbody>",
        "<tr><td>Build Quality</td><td>Premium materials</td><td>Basic materials</td></tr>",
        "<tr><td>Performance</td><td>Consistent and reliable</td><td>Varies</td></tr>",
        "<tr><td>Value</td><td>Excellent</td><td>Average</td></tr>",
        "</tbody>",
        "</table>",
        f"<h2>Is the {short} Worth It?</h2>",
        f"<p>Yes. The {short} combines quality, performance and value, which makes it "
        f"a smart choice for first-time buyers and upgraders alike.</p>",
        internal_links_paragraph(store_url, category_text, config),
        external_links_paragraph(config),
    ]
    return "\n".join(parts)


def _repair_text_field(
    field_name: str,
    value: str,
    keyword: str,
    floor: int,
    limit: int,
    fallback: str,
    report: ComplianceReport,
) -> str:
    """Shared presence-floor / keyword-prefix policy for free-text fields."""
    text = (value or "").strip()

    if len(_plain(text)) < floor:
        detail = "missing; synthesized from keyword" if not text else (
            f"too short ({len(_plain(text))} chars, minimum {floor}); synthesized from keyword"
        )
        report.record(field_name, FieldStatus.REPAIRED, detail)
        logger.debug(f"{field_name}: {detail}")
        return fallback

    if not _starts_with_keyword(text, keyword):
        repaired = _prepend_keyword(text, keyword, limit)
        report.record(field_name, FieldStatus.REPAIRED, "keyword prepended to existing text")
        logger.debug(f"{field_name}: keyword prepended")
        return repaired

    report.record(field_name, FieldStatus.PASS)
    return value


def _title_fallback(short_keyword: str, limit: int, rng: Any, config: ComplianceConfig) -> str:
    candidate = f"{short_keyword} - {rng.choice(config.power_words)}"
    if len(candidate) > limit:
        candidate = short_keyword
    return _ellipsize(candidate, limit)


def _description_fallback(short_keyword: str, limit: int) -> str:
    body = f"{short_keyword} delivers premium quality, reliable performance and outstanding value."
    text = f"{body} {DESCRIPTION_CALL_TO_ACTION}"
    if len(text) <= limit:
        return text
    room = limit - len(DESCRIPTION_CALL_TO_ACTION) - 1
    if room > 0:
        return f"{_fit(body, room)} {DESCRIPTION_CALL_TO_ACTION}"
    return _ellipsize(short_keyword, limit)


def _short_description_fallback(short_keyword: str, limit: int) -> str:
    text = (
        f"{short_keyword} offers premium quality and reliable performance for everyday use, "
        f"combining thoughtful design with excellent value."
    )
    return _fit(text, limit)


def _repair_long_description(
    value: str,
    primary_keyword: str,
    short_keyword: str,
    store_url: str,
    category_text: str,
    config: ComplianceConfig,
    report: ComplianceReport,
) -> str:
    text = value or ""
    plain = _plain(text)

    if len(plain) < config.long_description_min_length:
        report.record(
            "long_description",
            FieldStatus.REPAIRED,
            "missing; synthesized HTML skeleton" if not plain else (
                f"too short ({len(plain)} chars, minimum "
                f"{config.long_description_min_length}); synthesized HTML skeleton"
            ),
        )
        return build_long_description_skeleton(
            primary_keyword, short_keyword, store_url, category_text, config
        )

    # Additive repairs only; existing markup is never rewritten
    changes = []
    repaired = text.strip()

    if not plain.lower().startswith(primary_keyword.lower()) and not has_h1(repaired):
        repaired = f"<h1>{html.escape(primary_keyword)}</h1>\n{repaired}"
        changes.append("keyword <h1> added")

    internal = count_internal_category_links(repaired, store_url)
    if internal < config.min_internal_links:
        repaired = f"{repaired}\n{internal_links_paragraph(store_url, category_text, config)}"
        changes.append(f"internal links appended ({internal} found)")

    external = count_external_follow_links(repaired, store_url)
    if external < config.min_external_follow_links:
        repaired = f"{repaired}\n{external_links_paragraph(config)}"
        changes.append(f"external follow links appended ({external} found)")

    if not changes:
        report.record("long_description", FieldStatus.PASS)
        return value

    report.record("long_description", FieldStatus.REPAIRED, "; ".join(changes))
    return repaired


def _violation_message(
    rule: ComplianceRule,
    value: str,
    keyword: str,
    store_url: str,
    config: ComplianceConfig,
) -> str:
    plain = _plain(value)
    kind = rule.kind
    bound = rule.bounds[0] if rule.bounds else None

    if kind == RuleKind.MAX_LENGTH:
        return f"exceeds {int(bound)} characters ({len(plain)}); left unchanged to preserve content"
    if kind == RuleKind.MIN_LENGTH:
        return f"shorter than {int(bound)} characters ({len(plain)})"
    if kind == RuleKind.MUST_START_WITH_KEYWORD:
        return f"does not start with keyword '{keyword}'"
    if kind == RuleKind.MIN_WORD_COUNT:
        return f"{count_words(plain)} words, target is {int(bound)}+"
    if kind == RuleKind.DENSITY_BAND:
        density = compute_density(value, keyword)
        low, high = target_occurrences(
            density.word_count, config.density_min_percent, config.density_max_percent
        )
        return (
            f"keyword density {density.density_percent:.2f}% outside "
            f"{rule.bounds[0]}%-{rule.bounds[1]}% (ideal {config.density_ideal_percent}%; "
            f"{density.count} occurrences across {density.word_count} words, "
            f"aim for {low}-{high})"
        )
    if kind == RuleKind.MIN_INTERNAL_LINKS:
        found = count_internal_category_links(value, store_url)
        return f"{found} internal links, minimum {int(bound)}"
    if kind == RuleKind.MIN_EXTERNAL_FOLLOW_LINKS:
        found = count_external_follow_links(value, store_url)
        return f"{found} external follow links, minimum {int(bound)}"
    return rule.describe()


def evaluate_rules(
    record: ContentRecord,
    rules: list[ComplianceRule],
    primary_keyword: str,
    short_keyword: str,
    store_url: str,
    config: ComplianceConfig,
    report: ComplianceReport,
) -> None:
    """
    Evaluate the rule table against a repaired record.

    Failures are attached to the report as warnings; the record itself is
    not touched.
    """
    for rule in rules:
        value = getattr(record, rule.field, "")
        keyword = primary_keyword if rule.kind == RuleKind.DENSITY_BAND else short_keyword
        if check_rule(rule, value, keyword, store_url):
            continue
        message = _violation_message(rule, value, keyword, store_url, config)
        report.flag(rule.field, message)
        if rule.severity == Severity.SOFT:
            logger.warning(f"Advisory target missed - {rule.field}: {message}")
        else:
            logger.warning(f"Unrepaired rule violation - {rule.field}: {message}")


def validate_and_repair_with_report(
    content: Union[ContentRecord, Mapping[str, Any], None],
    product_name: str,
    store_url: str = "",
    *,
    category_text: str = "",
    permalink_override: Optional[str] = None,
    config: Optional[ComplianceConfig] = None,
    rng: Optional[random.Random] = None,
) -> tuple[ContentRecord, ComplianceReport]:
    """
    Repair parsed content into a complete record and report what changed.

    Fields are processed in a fixed order: title, meta description, long
    description, short description, permalink, alt text, focus keywords.

    Args:
        content: Parsed content (record or mapping); missing fields are ''.
        product_name: Product name the keywords are extracted from.
        store_url: Store base URL for internal links.
        category_text: Category names, comma separated.
        permalink_override: Literal permalink that replaces the rebuilt one,
            bounded to the permalink limit.
        config: Compliance configuration.
        rng: Random source for power-word choice.

    Returns:
        Tuple of (repaired record, compliance report).
    """
    if config is None:
        config = ComplianceConfig()
    if rng is None:
        rng = random

    source = content if isinstance(content, ContentRecord) else ContentRecord.from_mapping(content)
    primary = extract_primary_keyword(product_name) or DEFAULT_PRODUCT_KEYWORD
    short = get_short_keyword(primary)
    report = ComplianceReport()
    record = ContentRecord()

    record.meta_title = _repair_text_field(
        "meta_title",
        source.meta_title,
        short,
        config.title_min_length,
        config.title_max_length,
        _title_fallback(short, config.title_max_length, rng, config),
        report,
    )
    record.meta_description = _repair_text_field(
        "meta_description",
        source.meta_description,
        short,
        config.meta_description_min_length,
        config.meta_description_max_length,
        _description_fallback(short, config.meta_description_max_length),
        report,
    )
    record.long_description = _repair_long_description(
        source.long_description, primary, short, store_url, category_text, config, report
    )
    record.short_description = _repair_text_field(
        "short_description",
        source.short_description,
        short,
        config.short_description_min_length,
        config.short_description_max_length,
        _short_description_fallback(short, config.short_description_max_length),
        report,
    )

    # Permalink: rebuilt every time, no preserve branch
    permalink = create_optimal_permalink(primary, config.permalink_max_length)
    permalink_detail = "rebuilt from primary keyword"
    if permalink_override is not None and truncate_permalink(
        permalink_override, config.permalink_max_length
    ):
        permalink = truncate_permalink(permalink_override, config.permalink_max_length)
        permalink_detail = "literal override applied"
    record.permalink = permalink
    if permalink == source.permalink:
        report.record("permalink", FieldStatus.PASS)
    else:
        report.record("permalink", FieldStatus.REPAIRED, permalink_detail)

    alt = source.alt_text
    if not alt.strip() or short.lower() not in alt.lower():
        record.alt_text = f"{short} {ALT_TEXT_SUFFIX}"
        report.record("alt_text", FieldStatus.REPAIRED, "rebuilt around keyword")
    else:
        record.alt_text = alt
        report.record("alt_text", FieldStatus.PASS)

    # Focus keywords: regenerated every time
    record.focus_keywords = build_focus_keywords(product_name or "", category_text)
    if record.focus_keywords == source.focus_keywords:
        report.record("focus_keywords", FieldStatus.PASS)
    else:
        report.record("focus_keywords", FieldStatus.REPAIRED, "regenerated as primary + 4 secondary")

    evaluate_rules(
        record, build_rule_set(config), primary, short, store_url, config, report
    )

    return record, report


def validate_and_repair(
    content: Union[ContentRecord, Mapping[str, Any], None],
    product_name: str,
    store_url: str = "",
    **kwargs,
) -> ContentRecord:
    """
    Repair parsed content into a complete, rule-compliant record.

    See validate_and_repair_with_report for arguments. The report is
    discarded; use the _with_report variant to inspect it.
    """
    record, _ = validate_and_repair_with_report(content, product_name, store_url, **kwargs)
    return record
