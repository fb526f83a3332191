"""Tests for the generation prompt template."""

from product_seo_engine.parser import parse_sections
from product_seo_engine.prompts import DEFAULT_PROMPT_TEMPLATE, render_prompt


class TestRenderPrompt:
    """Tests for render_prompt."""

    def test_substitutes_product_values(self):
        product = {
            "name": "Desk Lamp",
            "sku": "DL-100",
            "price": "29.99",
            "description": "Adjustable LED desk lamp.",
            "categories": [{"name": "Lighting"}, {"name": "Home Office"}],
        }
        prompt = render_prompt(DEFAULT_PROMPT_TEMPLATE, product)

        assert "Product Name: Desk Lamp" in prompt
        assert "SKU: DL-100" in prompt
        assert "Price: 29.99" in prompt
        assert "Categories: Lighting, Home Office" in prompt
        assert "{{" not in prompt

    def test_missing_values_render_empty(self):
        prompt = render_prompt("Name: {{name}} / {{unknown}} / {{sku}}", {"name": "Lamp"})

        assert prompt == "Name: Lamp /  / "

    def test_plain_string_categories(self):
        prompt = render_prompt("{{categories}}", {"categories": ["Audio", "Electronics"]})

        assert prompt == "Audio, Electronics"

    def test_template_lists_every_parsed_label(self):
        """Test that the template asks for exactly the labels the parser reads."""
        label_block = DEFAULT_PROMPT_TEMPLATE.split("section headers:")[1]
        sections = parse_sections(label_block)

        for label in (
            "LONG DESCRIPTION:", "SHORT DESCRIPTION:", "META TITLE:", "META DESCRIPTION:",
            "FOCUS KEYWORDS:", "ALT TEXT:", "PERMALINK:",
        ):
            assert label in label_block
        assert set(sections) == {
            "long_description", "short_description", "meta_title", "meta_description",
            "focus_keywords", "alt_text", "permalink",
        }
