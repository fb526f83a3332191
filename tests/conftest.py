"""
Pytest fixtures and configuration for Product SEO Engine tests.
"""

import pytest
from pathlib import Path


PRODUCT_NAME = "UltraSound Pro Wireless Earbuds X200"
STORE_URL = "https://shop.example.com"

SAMPLE_LONG_DESCRIPTION = """<h1>UltraSound Pro Wireless Earbuds</h1>
<p>UltraSound Pro Wireless Earbuds bring studio-grade sound to your daily commute, workouts and calls.
Adaptive noise cancellation keeps distractions out while the transparency mode lets the world back in.</p>
<h2>Battery and Comfort</h2>
<p>Enjoy up to 30 hours of playback with the charging case and three sizes of soft silicone tips.</p>
<p>Browse more <a href="https://shop.example.com/product-category/audio">audio gear</a>,
<a href="https://shop.example.com/product-category/headphones">headphones</a> and
<a href="https://shop.example.com/product-category/accessories">accessories</a>.</p>
<p>Learn about <a href="https://en.wikipedia.org/wiki/Active_noise_control" target="_blank">active noise control</a>
and <a href="https://www.bluetooth.com/learn-about-bluetooth/" target="_blank">Bluetooth audio</a>.</p>"""


@pytest.fixture
def product_name() -> str:
    """Product name used across engine tests."""
    return PRODUCT_NAME


@pytest.fixture
def store_url() -> str:
    """Store base URL used for internal links."""
    return STORE_URL


@pytest.fixture
def sample_long_description() -> str:
    """Long description that already meets every structural rule."""
    return SAMPLE_LONG_DESCRIPTION


@pytest.fixture
def sample_raw_text() -> str:
    """Complete labeled generator output."""
    return f"""LONG DESCRIPTION:
{SAMPLE_LONG_DESCRIPTION}

SHORT DESCRIPTION:
UltraSound Pro Wireless Earbuds with 30-hour battery life and active noise cancellation.

META TITLE:
UltraSound Pro Wireless Earbuds - Premium Sound

META DESCRIPTION:
UltraSound Pro Wireless Earbuds deliver immersive audio, adaptive noise cancellation and all-day comfort. Order yours today!

FOCUS KEYWORDS:
UltraSound Pro Wireless Earbuds, wireless earbuds, noise cancelling earbuds
SECONDARY KEYWORDS: bluetooth headphones, sport earbuds

ALT TEXT:
UltraSound Pro Wireless Earbuds in charging case

PERMALINK:
ultrasound-pro-wireless-earbuds-x200
"""


def _words(count: int) -> str:
    return " ".join(f"word{i}" for i in range(count))


@pytest.fixture
def complete_product() -> dict:
    """Stored RankMath product with every SEO field filled."""
    return {
        "id": 101,
        "name": PRODUCT_NAME,
        "description": f"<p>{_words(150)}</p>",
        "short_description": "Premium wireless earbuds with long battery life and crisp sound for every day.",
        "slug": "ultrasound-pro-wireless-earbuds",
        "images": [{"alt": "UltraSound Pro Wireless Earbuds in case"}],
        "tags": [],
        "meta_data": [
            {"key": "rank_math_title", "value": "UltraSound Pro Wireless Earbuds - Best Price"},
            {"key": "rank_math_description", "value": "UltraSound Pro " + "x" * 285},
            {"key": "rank_math_focus_keyword", "value": "UltraSound Pro Wireless Earbuds, wireless audio"},
        ],
    }


@pytest.fixture
def empty_product() -> dict:
    """Stored product with no SEO content at all."""
    return {"id": 102, "name": "Bare Product"}


@pytest.fixture
def sample_products_csv(tmp_path: Path) -> Path:
    """Create a sample product export CSV file."""
    csv_path = tmp_path / "products.csv"
    long_text = " ".join(["detail"] * 120)
    csv_content = f"""id,name,description,short_description,slug,alt_text,tags,categories,rank_math_title,rank_math_description
201,Desk Lamp with USB Charger,{long_text},A bright adjustable desk lamp with a built in USB charger for phones,desk-lamp,Desk lamp on a desk,"lighting, office",Home Office,Desk Lamp - Bright Adjustable LED Light for Home Office,Desk Lamp with a USB charger and three brightness levels for reading and working late at night.
202,Bare Speaker,,,,,,,,
"""
    csv_path.write_text(csv_content, encoding="utf-8")
    return csv_path


@pytest.fixture
def sample_products_excel(tmp_path: Path) -> Path:
    """Create a sample product export Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "products.xlsx"
    data = {
        "Product Name": ["Desk Lamp", "Floor Lamp"],
        "Product ID": ["301", "302"],
        "Permalink": ["desk-lamp", ""],
        "_yoast_wpseo_title": ["Desk Lamp - Best LED Lamp for Your Office", ""],
    }
    pd.DataFrame(data).to_excel(xlsx_path, index=False)
    return xlsx_path
