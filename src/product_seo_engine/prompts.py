"""
Generation prompt template.

The template tells the upstream generator which section labels to emit;
they must match the labels parser.parse_sections looks for. This module
only renders text, it does not call any model.
"""

import re
from typing import Any, Mapping

DEFAULT_PROMPT_TEMPLATE = """You are an expert eCommerce SEO product description writer. Write detailed, SEO-optimized product content based on the information below.

Product Information:
Product Name: {{name}}
SKU: {{sku}}
Price: {{price}}
Description: {{description}}
Categories: {{categories}}

Content Requirements:
1. Long Description (750+ words, HTML format):
   - Start with the Primary Focus Keyword and repeat it naturally (1-2% density)
   - Use <strong> tags for important keywords (no Markdown)
   - Include the focus keywords in <h2>/<h3> subheadings
   - Include a product information table and a comparison table
   - Include at least 3 internal links to related product categories
   - Include at least 2 external links to authoritative sites, opened with target="_blank"

2. Short Description (50 words max, plain text):
   - Start with the Primary Focus Keyword

3. SEO Elements:
   - Meta Title: MUST start with the Primary Focus Keyword, under 60 characters, include a power word
   - Meta Description: 140-155 characters, start with the Primary Focus Keyword, end with a call to action
   - Focus Keywords: the primary keyword followed by four secondary keywords, comma separated
   - Alt Text: describe the main product image and include the Primary Focus Keyword
   - Permalink: start with the Primary Focus Keyword, URL friendly, maximum 45 characters

Output MUST include these EXACT section headers:
LONG DESCRIPTION:
SHORT DESCRIPTION:
META TITLE:
META DESCRIPTION:
FOCUS KEYWORDS:
ALT TEXT:
PERMALINK:

Do not include any Markdown formatting like ``` or ** in your output."""

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def _category_names(product: Mapping[str, Any]) -> str:
    categories = product.get("categories") or []
    names = []
    for category in categories:
        if isinstance(category, Mapping):
            names.append(str(category.get("name") or ""))
        else:
            names.append(str(category))
    return ", ".join(n for n in names if n)


def render_prompt(template: str, product: Mapping[str, Any]) -> str:
    """
    Substitute product values into a prompt template.

    Supported placeholders: {{name}}, {{sku}}, {{price}}, {{description}},
    {{categories}}. Unknown placeholders and missing values render as ''.

    Args:
        template: Prompt template.
        product: Product mapping.

    Returns:
        The rendered prompt.
    """
    values = {
        "name": product.get("name") or "",
        "sku": product.get("sku") or "",
        "price": product.get("price") or "",
        "description": product.get("description") or "",
        "categories": _category_names(product),
    }
    return _PLACEHOLDER.sub(lambda m: str(values.get(m.group(1), "")), template or "")
