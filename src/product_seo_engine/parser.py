"""
Section parsing for generated product copy.

The upstream generator emits one text blob with labeled sections:

    LONG DESCRIPTION:
    SHORT DESCRIPTION:
    META TITLE:
    META DESCRIPTION:
    FOCUS KEYWORDS:
    ALT TEXT:
    PERMALINK:

Labels are case-sensitive and followed by a colon. Any section may be
missing or truncated. Each section runs until the next known label or the
end of the text.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Canonical order: (record field, label pattern)
SECTION_LABELS: tuple[tuple[str, str], ...] = (
    ("long_description", r"LONG DESCRIPTION:"),
    ("short_description", r"SHORT DESCRIPTION:"),
    ("meta_title", r"META TITLE:"),
    ("meta_description", r"META DESCRIPTION:"),
    ("focus_keywords", r"FOCUS KEYWORDS:"),
    # The generator has used both spellings
    ("alt_text", r"(?:IMAGE )?ALT TEXT:"),
    ("permalink", r"PERMALINK:"),
)

# Labels the generator may emit that map to no record field. They only
# terminate the preceding section.
AUXILIARY_LABELS: tuple[str, ...] = (
    r"SECONDARY KEYWORDS:",
    r"TAGS:",
)

PARSED_FIELDS: tuple[str, ...] = tuple(name for name, _ in SECTION_LABELS)


def _build_section_patterns() -> dict[str, re.Pattern]:
    all_labels = [label for _, label in SECTION_LABELS] + list(AUXILIARY_LABELS)
    patterns = {}
    for name, label in SECTION_LABELS:
        stops = "|".join(other for other in all_labels if other != label)
        patterns[name] = re.compile(rf"{label}\s*(.*?)(?={stops}|\Z)", re.DOTALL)
    return patterns


_SECTION_PATTERNS = _build_section_patterns()


def parse_sections(raw_text: str) -> dict[str, str]:
    """
    Split a labeled text blob into content fields.

    Args:
        raw_text: Generator output.

    Returns:
        Dict with one entry per parsed field. Missing sections map to ''.
    """
    text = raw_text or ""
    sections: dict[str, str] = {}

    for name, pattern in _SECTION_PATTERNS.items():
        match = pattern.search(text)
        sections[name] = match.group(1).strip() if match else ""

    missing = [name for name, value in sections.items() if not value]
    if missing:
        logger.debug(f"Sections missing from generated text: {', '.join(missing)}")

    return sections
