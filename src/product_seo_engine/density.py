"""
Keyword density analysis for HTML-ish text.

Density = occurrences / words * 100, measured on tag-stripped text.
"""

import re

from .models import DensityResult

TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(html_text: str) -> str:
    """Remove tag-like substrings, leaving whitespace in their place."""
    return TAG_PATTERN.sub(" ", html_text or "")


def count_words(text: str) -> int:
    """
    Count words in text.

    Args:
        text: Text to count words in.

    Returns:
        Number of non-empty whitespace-delimited tokens.
    """
    if not text:
        return 0
    return len(text.split())


def compute_density(html_text: str, keyword: str) -> DensityResult:
    """
    Compute keyword density inside HTML-ish text.

    The keyword is regex-escaped before matching, so phrases such as
    "C++ Adapter" or "Model (2024)" are counted literally.

    Args:
        html_text: Body text, possibly containing tags.
        keyword: Keyword phrase to count.

    Returns:
        DensityResult with count, word count and density percentage.
        Density is 0.0 when the text has no words.
    """
    plain = strip_tags(html_text).lower()
    word_count = count_words(plain)

    phrase = (keyword or "").strip().lower()
    if phrase:
        pattern = re.compile(re.escape(phrase), re.IGNORECASE)
        count = len(pattern.findall(plain))
    else:
        count = 0

    if word_count == 0:
        return DensityResult(count=count, word_count=0, density_percent=0.0)

    return DensityResult(
        count=count,
        word_count=word_count,
        density_percent=count / word_count * 100,
    )


def target_occurrences(
    word_count: int,
    min_percent: float,
    max_percent: float,
) -> tuple[int, int]:
    """
    Occurrence range that keeps density inside a band.

    Args:
        word_count: Body word count.
        min_percent: Lower density bound in percent.
        max_percent: Upper density bound in percent.

    Returns:
        Tuple of (min_count, max_count).
    """
    min_count = max(1, round(word_count * min_percent / 100))
    max_count = max(min_count, int(word_count * max_percent / 100))
    return min_count, max_count
