"""
Keyword extraction from product metadata.

Derives the keyword set that anchors every compliance rule:
- a primary keyword phrase taken from the leading tokens of the product name
- four secondary keywords drawn from brand and category context
- a permalink slug built from the primary keyword
"""

import re
import zlib

DEFAULT_PERMALINK_MAX_LENGTH = 45
MAX_PRIMARY_TOKENS = 4
MIN_TOKENS_BEFORE_STOP = 2
SHORT_KEYWORD_TOKENS = 3
SECONDARY_KEYWORD_COUNT = 4

# Stands in for the primary keyword when the product has no name
DEFAULT_PRODUCT_KEYWORD = "Product"

# Tokens that end the primary keyword once enough tokens were collected
PRIMARY_STOP_TOKENS = {"with", "and", "for", "in", "the", "a", "an", "-", "|", ","}

# Controlled vocabulary: (trigger substrings, themed keywords)
CATEGORY_THEMES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("audio", "sound", "earbuds", "headphone", "speaker"),
        ("wireless audio", "premium sound quality", "bluetooth earbuds"),
    ),
    (
        ("electronic",),
        ("consumer electronics", "smart gadgets", "tech accessories"),
    ),
)
GENERIC_THEME: tuple[str, ...] = ("premium quality products", "best value deals")

GENERIC_KEYWORD_POOL: tuple[str, ...] = (
    "best price online",
    "top rated products",
    "free shipping deals",
    "high quality materials",
    "customer favorite",
    "durable design",
    "great gift idea",
    "everyday essentials",
)

_NON_SLUG_TOKEN_CHARS = re.compile(r"[^a-z0-9]")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")


def extract_primary_keyword(product_name: str) -> str:
    """
    Extract the primary keyword phrase from a product name.

    Tokens are accumulated left to right, up to four. A stop token ends
    the phrase, but only once at least two tokens were collected.

    Args:
        product_name: The product name.

    Returns:
        The primary keyword, or '' for an empty name.

    Examples:
        >>> extract_primary_keyword("UltraSound Pro Wireless Earbuds X200")
        'UltraSound Pro Wireless Earbuds'
        >>> extract_primary_keyword("Desk Lamp with USB Charger")
        'Desk Lamp'
    """
    tokens = (product_name or "").split()
    accumulated: list[str] = []

    for token in tokens:
        if len(accumulated) >= MAX_PRIMARY_TOKENS:
            break
        if token.lower() in PRIMARY_STOP_TOKENS and len(accumulated) >= MIN_TOKENS_BEFORE_STOP:
            break
        accumulated.append(token)

    if not accumulated:
        accumulated = tokens[:3]

    return " ".join(accumulated)


def get_short_keyword(primary_keyword: str) -> str:
    """Leading three tokens of the primary keyword, used in repaired text."""
    return " ".join((primary_keyword or "").split()[:SHORT_KEYWORD_TOKENS])


def clean_keyword(keyword: str) -> str:
    """Remove list separators so a phrase survives comma-joining."""
    return " ".join(keyword.replace(",", " ").split())


def generate_secondary_keywords(product_name: str, category_text: str = "") -> list[str]:
    """
    Generate exactly four unique secondary keywords.

    Sources, in order:
    1. A brand keyword from the first name token (when longer than 2 chars)
    2. Themed keywords matched against the controlled category vocabulary
    3. Padding from a fixed generic pool, starting at a position derived
       from the product name so different products get different padding

    Args:
        product_name: The product name.
        category_text: Category names (any separator).

    Returns:
        List of exactly four keywords, unique case-insensitively.
    """
    name = product_name or ""
    context = f"{name} {category_text or ''}".lower()
    primary = clean_keyword(extract_primary_keyword(name)).lower()

    keywords: list[str] = []
    seen: set[str] = {primary} if primary else set()

    def _add(candidate: str) -> None:
        candidate = clean_keyword(candidate)
        key = candidate.lower()
        if candidate and key not in seen and len(keywords) < SECONDARY_KEYWORD_COUNT:
            seen.add(key)
            keywords.append(candidate)

    tokens = name.split()
    if tokens and len(clean_keyword(tokens[0])) > 2:
        _add(f"{clean_keyword(tokens[0])} products")

    themed = GENERIC_THEME
    for triggers, theme_keywords in CATEGORY_THEMES:
        if any(trigger in context for trigger in triggers):
            themed = theme_keywords
            break
    for keyword in themed:
        _add(keyword)

    # Deterministic per name; crc32 is stable across interpreter runs
    offset = zlib.crc32(name.lower().encode("utf-8")) % len(GENERIC_KEYWORD_POOL)
    for i in range(len(GENERIC_KEYWORD_POOL)):
        if len(keywords) >= SECONDARY_KEYWORD_COUNT:
            break
        _add(GENERIC_KEYWORD_POOL[(offset + i) % len(GENERIC_KEYWORD_POOL)])

    return keywords


def build_focus_keywords(product_name: str, category_text: str = "") -> str:
    """Primary keyword plus four secondary keywords, joined with ', '."""
    primary = clean_keyword(extract_primary_keyword(product_name)) or DEFAULT_PRODUCT_KEYWORD
    secondary = generate_secondary_keywords(product_name, category_text)
    return ", ".join([primary] + secondary)


def slugify(text: str, max_length: int = DEFAULT_PERMALINK_MAX_LENGTH) -> str:
    """
    Generic URL slug.

    Lower-cases, removes everything except letters, digits, whitespace and
    hyphens, turns whitespace runs into hyphens, trims to max_length and
    strips leading/trailing hyphens.

    Args:
        text: Text to slugify.
        max_length: Maximum slug length.

    Returns:
        The slug (may be empty if text has no usable characters).
    """
    slug = _NON_SLUG_CHARS.sub("", (text or "").lower())
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")[:max_length]
    return slug.rstrip("-")


def create_optimal_permalink(
    primary_keyword: str,
    max_length: int = DEFAULT_PERMALINK_MAX_LENGTH,
) -> str:
    """
    Build a permalink from the primary keyword.

    Whole tokens are appended greedily while the slug stays within
    max_length; the first token that would overflow ends the slug.

    Args:
        primary_keyword: The primary keyword phrase.
        max_length: Maximum permalink length.

    Returns:
        A non-empty slug of [a-z0-9-] with no leading/trailing hyphen.
    """
    parts: list[str] = []
    for token in (primary_keyword or "").lower().split():
        cleaned = _NON_SLUG_TOKEN_CHARS.sub("", token)
        if not cleaned:
            continue
        if len("-".join(parts + [cleaned])) > max_length:
            break
        parts.append(cleaned)

    slug = "-".join(parts)
    if not slug:
        slug = slugify(primary_keyword, max_length)
    return slug or "product"


def truncate_permalink(value: str, max_length: int = DEFAULT_PERMALINK_MAX_LENGTH) -> str:
    """Bound a literal permalink to max_length and strip dangling hyphens."""
    return (value or "").strip()[:max_length].strip("-")
