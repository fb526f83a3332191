"""
End-to-end content record generation.

raw generator text + product descriptor
    -> section parser
    -> seed empty fields from the product's existing meta
    -> compliance validator & repairer
    -> ContentRecord + ComplianceReport
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .config import ComplianceConfig
from .density import compute_density
from .keywords import DEFAULT_PRODUCT_KEYWORD, extract_primary_keyword
from .models import ComplianceReport, ContentRecord, DensityResult, ProductDescriptor
from .parser import parse_sections
from .validator import validate_and_repair_with_report

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of one engine invocation."""
    record: ContentRecord
    report: ComplianceReport
    primary_keyword: str
    density: DensityResult

    def to_dict(self) -> dict:
        return {
            "record": self.record.to_dict(),
            "report": self.report.to_dict(),
            "primary_keyword": self.primary_keyword,
            "density": {
                "count": self.density.count,
                "word_count": self.density.word_count,
                "density_percent": round(self.density.density_percent, 2),
            },
        }


def seed_from_existing_meta(parsed: dict[str, str], existing_meta: dict) -> dict[str, str]:
    """
    Fill fields the generator left empty from the product's stored values.

    Args:
        parsed: Parsed sections keyed by record field.
        existing_meta: Stored values keyed by record field.

    Returns:
        New dict; parsed values always win.
    """
    seeded = dict(parsed)
    for name, value in (existing_meta or {}).items():
        if name in seeded and not seeded[name] and isinstance(value, str) and value.strip():
            seeded[name] = value.strip()
    return seeded


def build_content_record(
    descriptor: ProductDescriptor,
    raw_text: str,
    config: Optional[ComplianceConfig] = None,
    rng: Optional[random.Random] = None,
    permalink_override: Optional[str] = None,
) -> GenerationResult:
    """
    Turn generator output into a complete, compliant content record.

    Args:
        descriptor: Product the content belongs to.
        raw_text: Labeled generator output (may be empty or partial).
        config: Compliance configuration.
        rng: Random source for power-word choice.
        permalink_override: Literal permalink to apply after rebuilding.

    Returns:
        GenerationResult with record, report and body keyword density.
    """
    config = config or ComplianceConfig()
    parsed = parse_sections(raw_text)
    seeded = seed_from_existing_meta(parsed, dict(descriptor.existing_meta))

    record, report = validate_and_repair_with_report(
        seeded,
        descriptor.name,
        descriptor.store_url,
        category_text=descriptor.category_text,
        permalink_override=permalink_override,
        config=config,
        rng=rng,
    )

    primary = extract_primary_keyword(descriptor.name) or DEFAULT_PRODUCT_KEYWORD
    density = compute_density(record.long_description, primary)

    logger.info(
        f"Content record built for '{descriptor.name}': "
        f"{len(report.repaired_fields)} fields repaired, {len(report.warnings)} warnings"
    )
    return GenerationResult(record=record, report=report, primary_keyword=primary, density=density)
