"""
Stored product loading from CSV and Excel exports.

Rows are converted into the WooCommerce-shaped product mappings the
content health scorer reads. Columns that do not map to a known product
attribute (e.g. rank_math_title, _yoast_wpseo_metadesc) become meta_data
entries, so plugin-specific exports are scored correctly.
"""

from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from .models import HealthCheckResult


class ProductLoadError(Exception):
    """Raised when product loading fails."""
    pass


# Common column name variations for product exports
NAME_COLUMN_VARIANTS = ["name", "product_name", "title", "product"]
ID_COLUMN_VARIANTS = ["id", "product_id", "post_id"]
DESCRIPTION_COLUMN_VARIANTS = ["description", "long_description", "content"]
SHORT_DESCRIPTION_COLUMN_VARIANTS = ["short_description", "excerpt", "summary"]
SLUG_COLUMN_VARIANTS = ["slug", "permalink", "url_key"]
ALT_TEXT_COLUMN_VARIANTS = ["alt_text", "image_alt", "alt"]
TAGS_COLUMN_VARIANTS = ["tags", "product_tags"]
CATEGORIES_COLUMN_VARIANTS = ["categories", "category", "product_categories"]


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def _cell(row: pd.Series, column: Optional[str]) -> str:
    if column is None:
        return ""
    value = row[column]
    if pd.isna(value):
        return ""
    return str(value).strip()


def _split_names(value: str) -> list[dict[str, str]]:
    return [{"name": part.strip()} for part in value.split(",") if part.strip()]


def _parse_product_dataframe(df: pd.DataFrame) -> list[dict[str, Any]]:
    """
    Parse a DataFrame into product mappings.

    Args:
        df: DataFrame containing product data.

    Returns:
        List of product dicts.

    Raises:
        ProductLoadError: If the file is empty or has no name column.
    """
    if df.empty:
        raise ProductLoadError("Product file is empty")

    name_col = _find_column(df, NAME_COLUMN_VARIANTS)
    if name_col is None:
        raise ProductLoadError(
            f"No product name column found. Expected one of: {', '.join(NAME_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    id_col = _find_column(df, ID_COLUMN_VARIANTS)
    description_col = _find_column(df, DESCRIPTION_COLUMN_VARIANTS)
    short_col = _find_column(df, SHORT_DESCRIPTION_COLUMN_VARIANTS)
    slug_col = _find_column(df, SLUG_COLUMN_VARIANTS)
    alt_col = _find_column(df, ALT_TEXT_COLUMN_VARIANTS)
    tags_col = _find_column(df, TAGS_COLUMN_VARIANTS)
    categories_col = _find_column(df, CATEGORIES_COLUMN_VARIANTS)

    mapped = {
        c for c in (
            name_col, id_col, description_col, short_col, slug_col,
            alt_col, tags_col, categories_col,
        ) if c is not None
    }
    meta_cols = [c for c in df.columns if c not in mapped]

    products: list[dict[str, Any]] = []

    for index, row in df.iterrows():
        name = _cell(row, name_col)
        if not name:
            continue

        product_id: Any = _cell(row, id_col) or index + 1
        if isinstance(product_id, str):
            try:
                product_id = int(float(product_id))
            except ValueError:
                pass

        alt = _cell(row, alt_col)
        products.append({
            "id": product_id,
            "name": name,
            "description": _cell(row, description_col),
            "short_description": _cell(row, short_col),
            "slug": _cell(row, slug_col),
            "images": [{"alt": alt}] if alt else [],
            "tags": _split_names(_cell(row, tags_col)),
            "categories": _split_names(_cell(row, categories_col)),
            "meta_data": [
                {"key": str(col), "value": _cell(row, col)}
                for col in meta_cols
                if _cell(row, col)
            ],
        })

    if not products:
        raise ProductLoadError("No valid products found in file")

    return products


def load_products(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[dict[str, Any]]:
    """
    Load stored products from a CSV or Excel file.

    Automatically detects file type based on extension.

    Args:
        file_path: Path to the product export.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        List of product mappings.

    Raises:
        ProductLoadError: If the file cannot be read or is invalid.
    """
    path = Path(file_path)

    if not path.exists():
        raise ProductLoadError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        try:
            df = pd.read_csv(path, encoding="utf-8", dtype=str)
        except UnicodeDecodeError:
            try:
                df = pd.read_csv(path, encoding="latin-1", dtype=str)
            except Exception as e:
                raise ProductLoadError(f"Failed to read CSV file: {e}")
        except Exception as e:
            raise ProductLoadError(f"Failed to read CSV file: {e}")
    elif suffix in (".xlsx", ".xls"):
        try:
            if sheet_name:
                df = pd.read_excel(path, sheet_name=sheet_name, dtype=str)
            else:
                df = pd.read_excel(path, dtype=str)
        except Exception as e:
            raise ProductLoadError(f"Failed to read Excel file: {e}")
    else:
        raise ProductLoadError(
            f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls"
        )

    return _parse_product_dataframe(df)


def results_to_dataframe(results: list[HealthCheckResult]) -> pd.DataFrame:
    """
    Flatten health results into one row per product.

    Args:
        results: Health check results.

    Returns:
        DataFrame with id, name, status, score, missing/poor fields and
        one status column per checked field.
    """
    rows = []
    for result in results:
        row = {
            "product_id": result.product_id,
            "product_name": result.product_name,
            "overall_status": result.overall_status.value,
            "seo_score": result.seo_score,
            "missing_fields": ", ".join(result.missing_fields),
            "poor_fields": ", ".join(result.poor_fields),
        }
        for check in result.checks:
            row[f"{check.field}_status"] = check.status.value
        rows.append(row)
    return pd.DataFrame(rows)
