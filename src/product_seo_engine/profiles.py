"""
SEO plugin profiles.

A storefront stores SEO metadata under plugin-specific meta keys. A
profile maps the logical fields (meta_title, meta_description,
focus_keywords) to the physical keys to read, and knows which keys to
write for a repaired content record. Every profile falls back to the
universal keys.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from .models import ContentRecord

logger = logging.getLogger(__name__)


class SeoPlugin(str, Enum):
    """Supported SEO metadata conventions."""
    RANKMATH = "rankmath"
    YOAST = "yoast"
    AIOSEO = "aioseo"
    NONE = "none"


PROFILED_FIELDS: tuple[str, ...] = ("meta_title", "meta_description", "focus_keywords")

UNIVERSAL_KEYS: dict[str, tuple[str, ...]] = {
    "meta_title": ("seo_title", "meta_title", "product_seo_title"),
    "meta_description": ("seo_description", "meta_description", "product_seo_description"),
    "focus_keywords": ("focus_keywords", "seo_keywords", "product_seo_keywords"),
}

PLUGIN_KEYS: dict[SeoPlugin, dict[str, tuple[str, ...]]] = {
    SeoPlugin.RANKMATH: {
        "meta_title": ("rank_math_title",),
        "meta_description": ("rank_math_description",),
        "focus_keywords": ("rank_math_focus_keyword",),
    },
    SeoPlugin.YOAST: {
        "meta_title": ("_yoast_wpseo_title",),
        "meta_description": ("_yoast_wpseo_metadesc",),
        "focus_keywords": (
            "_yoast_wpseo_focuskw",
            "_yoast_wpseo_focuskeywords",
            "_yoast_wpseo_keywords",
        ),
    },
    SeoPlugin.AIOSEO: {
        "meta_title": ("_aioseo_title",),
        "meta_description": ("_aioseo_description",),
        "focus_keywords": ("_aioseo_focus_keyword", "_aioseo_keyphrases"),
    },
    SeoPlugin.NONE: {},
}


@dataclass(frozen=True)
class PluginProfile:
    """Logical-to-physical meta key mapping for one plugin."""
    plugin: SeoPlugin
    field_keys: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def keys_for(self, field_name: str) -> tuple[str, ...]:
        """Plugin keys first, then universal keys, without duplicates."""
        keys = list(self.field_keys.get(field_name, ()))
        for key in UNIVERSAL_KEYS.get(field_name, ()):
            if key not in keys:
                keys.append(key)
        return tuple(keys)

    @property
    def name(self) -> str:
        return self.plugin.value


PROFILES: dict[SeoPlugin, PluginProfile] = {
    plugin: PluginProfile(plugin=plugin, field_keys=keys)
    for plugin, keys in PLUGIN_KEYS.items()
}


def get_profile(plugin: Union[SeoPlugin, str, PluginProfile, None] = None) -> PluginProfile:
    """
    Resolve a plugin selector to a profile.

    Args:
        plugin: A profile, a SeoPlugin, its string value, or None.

    Returns:
        The matching profile. None and unknown names resolve to the
        universal ("none") profile.
    """
    if isinstance(plugin, PluginProfile):
        return plugin
    if plugin is None or plugin == "":
        return PROFILES[SeoPlugin.NONE]
    try:
        return PROFILES[SeoPlugin(str(getattr(plugin, "value", plugin)).lower())]
    except ValueError:
        logger.warning(f"Unknown SEO plugin '{plugin}', using universal meta keys")
        return PROFILES[SeoPlugin.NONE]


def extract_meta_value(product: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    """
    Read the first non-blank value stored under any of the keys.

    The product's meta_data list ({"key", "value"} entries) is searched
    first, then direct product attributes.

    Args:
        product: WooCommerce-style product mapping.
        keys: Candidate meta keys in priority order.

    Returns:
        The trimmed value, or '' if none is set.
    """
    meta_items = product.get("meta_data") or []
    if isinstance(meta_items, list):
        for key in keys:
            for item in meta_items:
                if not isinstance(item, Mapping) or item.get("key") != key:
                    continue
                value = item.get("value")
                if isinstance(value, str) and value.strip():
                    return value.strip()

    for key in keys:
        value = product.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()

    return ""


def build_meta_data(
    record: ContentRecord,
    plugin: Union[SeoPlugin, str, PluginProfile, None] = None,
) -> list[dict[str, str]]:
    """
    Meta entries to store a repaired record under a plugin convention.

    The standard product_seo_* keys are always included, followed by the
    plugin's own keys.

    Args:
        record: Repaired content record.
        plugin: Plugin selector (see get_profile).

    Returns:
        Ordered list of {"key", "value"} dicts.
    """
    profile = get_profile(plugin)
    focus = record.focus_keywords
    keyword_list = record.focus_keyword_list
    primary = keyword_list[0] if keyword_list else ""

    meta: list[dict[str, str]] = [
        {"key": "_wp_page_template", "value": "default"},
        {"key": "product_seo_title", "value": record.meta_title},
        {"key": "product_seo_description", "value": record.meta_description},
        {"key": "product_seo_keywords", "value": focus},
    ]

    def _add(key: str, value: str) -> None:
        meta.append({"key": key, "value": value})

    if profile.plugin == SeoPlugin.RANKMATH:
        _add("rank_math_title", record.meta_title)
        _add("rank_math_description", record.meta_description)
        _add("rank_math_focus_keyword", focus)
        _add("rank_math_pillar_content", "off")
        _add("rank_math_robots", "index,follow")
        for i, keyword in enumerate(keyword_list, start=1):
            _add(f"rank_math_focus_keyword_{i}", keyword)

    elif profile.plugin == SeoPlugin.YOAST:
        _add("_yoast_wpseo_title", record.meta_title)
        _add("_yoast_wpseo_metadesc", record.meta_description)
        _add("_yoast_wpseo_focuskw", primary)
        _add("_yoast_wpseo_meta-robots-noindex", "0")
        _add("_yoast_wpseo_meta-robots-nofollow", "0")
        _add("_yoast_wpseo_opengraph-title", record.meta_title)
        _add("_yoast_wpseo_opengraph-description", record.meta_description)
        _add("_yoast_wpseo_twitter-title", record.meta_title)
        _add("_yoast_wpseo_twitter-description", record.meta_description)
        for i, keyword in enumerate(keyword_list, start=1):
            _add(f"_yoast_wpseo_focuskeyword_{i}", keyword)
        _add("_yoast_wpseo_focuskeywords", focus)
        _add("_yoast_wpseo_keywords", focus)

    elif profile.plugin == SeoPlugin.AIOSEO:
        _add("_aioseo_title", record.meta_title)
        _add("_aioseo_description", record.meta_description)
        _add("_aioseo_focus_keyword", primary)
        if len(keyword_list) > 1:
            _add("_aioseo_keyphrases", focus)

    else:
        _add("seo_title", record.meta_title)
        _add("seo_description", record.meta_description)
        _add("seo_keywords", focus)
        _add("meta_title", record.meta_title)
        _add("meta_description", record.meta_description)
        _add("focus_keywords", focus)

    logger.debug(f"Built {len(meta)} meta entries for plugin '{profile.name}'")
    return meta


def profile_names() -> list[str]:
    return [plugin.value for plugin in SeoPlugin]
