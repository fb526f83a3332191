"""
Product SEO Engine

Turns generated product copy into rule-compliant SEO content and audits
stored products for content health:
- Extracts a primary keyword, secondary keywords and a permalink from the product name
- Parses labeled generator output into content fields
- Repairs fields non-destructively against the compliance rule set
- Scores stored products per SEO plugin convention
"""

__version__ = "1.0.0"
__author__ = "Product SEO Engine Team"

from .config import ComplianceConfig, HealthCheckConfig

from .models import (
    ProductDescriptor,
    ContentRecord,
    ComplianceRule,
    RuleKind,
    Severity,
    FieldStatus,
    FieldOutcome,
    ComplianceReport,
    DensityResult,
    CheckStatus,
    OverallStatus,
    FieldCheck,
    HealthCheckResult,
    HealthSummary,
)

# Keyword extraction
from .keywords import (
    extract_primary_keyword,
    get_short_keyword,
    generate_secondary_keywords,
    build_focus_keywords,
    create_optimal_permalink,
    slugify,
    truncate_permalink,
)

from .parser import parse_sections
from .density import compute_density
from .rules import build_rule_set, check_rule

# Compliance repair
from .validator import (
    validate_and_repair,
    validate_and_repair_with_report,
)

from .engine import GenerationResult, build_content_record

# Plugin profiles
from .profiles import (
    SeoPlugin,
    PluginProfile,
    get_profile,
    build_meta_data,
    extract_meta_value,
)

# Content health
from .health import (
    ContentHealthAnalyzer,
    analyze,
    analyze_batch,
    summarize,
)

from .prompts import DEFAULT_PROMPT_TEMPLATE, render_prompt

__all__ = [
    # Configuration
    "ComplianceConfig",
    "HealthCheckConfig",
    # Models
    "ProductDescriptor",
    "ContentRecord",
    "ComplianceRule",
    "RuleKind",
    "Severity",
    "FieldStatus",
    "FieldOutcome",
    "ComplianceReport",
    "DensityResult",
    "CheckStatus",
    "OverallStatus",
    "FieldCheck",
    "HealthCheckResult",
    "HealthSummary",
    # Keyword extraction
    "extract_primary_keyword",
    "get_short_keyword",
    "generate_secondary_keywords",
    "build_focus_keywords",
    "create_optimal_permalink",
    "slugify",
    "truncate_permalink",
    # Parsing and analysis
    "parse_sections",
    "compute_density",
    "build_rule_set",
    "check_rule",
    # Compliance repair
    "validate_and_repair",
    "validate_and_repair_with_report",
    "GenerationResult",
    "build_content_record",
    # Plugin profiles
    "SeoPlugin",
    "PluginProfile",
    "get_profile",
    "build_meta_data",
    "extract_meta_value",
    # Content health
    "ContentHealthAnalyzer",
    "analyze",
    "analyze_batch",
    "summarize",
    # Prompt
    "DEFAULT_PROMPT_TEMPLATE",
    "render_prompt",
]
