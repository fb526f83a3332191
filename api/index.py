"""
FastAPI wrapper for the Product SEO Engine - Vercel Serverless Function.

This module exposes content record generation and content health scoring
as a REST API for deployment on Vercel.
"""

import tempfile
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from product_seo_engine import __version__
from product_seo_engine.config import ComplianceConfig, HealthCheckConfig
from product_seo_engine.engine import build_content_record
from product_seo_engine.health import ContentHealthAnalyzer
from product_seo_engine.models import ProductDescriptor
from product_seo_engine.product_loader import ProductLoadError, load_products
from product_seo_engine.profiles import build_meta_data

app = FastAPI(
    title="Product SEO Engine API",
    description="Rule-compliant product SEO content and content health scoring",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SeoPluginEnum(str, Enum):
    """SEO plugin selection."""
    rankmath = "rankmath"
    yoast = "yoast"
    aioseo = "aioseo"
    none = "none"


class GenerateRequest(BaseModel):
    """Request model for content record generation."""
    product_name: str = Field(..., description="Product name the keywords are extracted from")
    categories: list[str] = Field(default_factory=list, description="Product category names")
    store_url: str = Field("", description="Store base URL for internal category links")
    raw_text: str = Field("", description="Labeled generator output (may be partial or empty)")
    existing_meta: dict[str, str] = Field(
        default_factory=dict,
        description="Stored field values used when the generator left a section empty",
    )
    permalink_override: Optional[str] = Field(None, description="Literal permalink, bounded to 45 chars")
    plugin: Optional[SeoPluginEnum] = Field(None, description="Also return meta entries for this plugin")
    lenient: bool = Field(False, description="Skip word-count and density advisories")


class GenerateResponse(BaseModel):
    """Response model for content record generation."""
    success: bool
    primary_keyword: str
    record: dict[str, str]
    report: dict[str, Any]
    density: dict[str, float]
    meta_data: Optional[list[dict[str, str]]] = None


class ContentHealthRequest(BaseModel):
    """Request model for content health scoring."""
    products: list[dict[str, Any]] = Field(..., description="WooCommerce-style product objects")
    plugin: Optional[SeoPluginEnum] = Field(None, description="SEO plugin whose meta keys are read")
    min_meta_description_length: int = Field(80, description="Characters below which a meta description is poor")
    min_short_description_words: int = Field(10, description="Words below which a short description is poor")


class ContentHealthResponse(BaseModel):
    """Response model for content health scoring."""
    success: bool
    results: list[dict[str, Any]]
    summary: dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _run_content_health(
    products: list[dict[str, Any]],
    plugin: Optional[str],
    min_meta_description_length: int,
    min_short_description_words: int,
) -> ContentHealthResponse:
    try:
        config = HealthCheckConfig(
            min_meta_description_length=min_meta_description_length,
            min_short_description_words=min_short_description_words,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    analyzer = ContentHealthAnalyzer(config)
    results = analyzer.analyze_batch(products, plugin)
    summary = analyzer.summarize(results)
    return ContentHealthResponse(
        success=True,
        results=[r.to_dict() for r in results],
        summary=summary.to_dict(),
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.post("/api/generate", response_model=GenerateResponse)
async def generate_content_record(request: GenerateRequest):
    """
    Build a compliant content record from generator output.

    Parses the labeled text, repairs every field against the compliance
    rules and returns the record with its compliance report.
    """
    descriptor = ProductDescriptor(
        name=request.product_name,
        categories=tuple(request.categories),
        existing_meta=dict(request.existing_meta),
        store_url=request.store_url,
    )
    config = ComplianceConfig.lenient() if request.lenient else ComplianceConfig()
    result = build_content_record(
        descriptor,
        request.raw_text,
        config,
        permalink_override=request.permalink_override,
    )
    payload = result.to_dict()

    return GenerateResponse(
        success=True,
        primary_keyword=result.primary_keyword,
        record=payload["record"],
        report=payload["report"],
        density=payload["density"],
        meta_data=build_meta_data(result.record, request.plugin.value) if request.plugin else None,
    )


@app.post("/api/content-health", response_model=ContentHealthResponse)
async def content_health(request: ContentHealthRequest):
    """
    Score stored products for SEO content completeness.

    Returns one result per product in input order plus a batch summary.
    """
    return _run_content_health(
        request.products,
        request.plugin.value if request.plugin else None,
        request.min_meta_description_length,
        request.min_short_description_words,
    )


@app.post("/api/content-health/file", response_model=ContentHealthResponse)
async def content_health_from_file(
    products_file: UploadFile = File(..., description="Product export (CSV or Excel)"),
    plugin: Optional[SeoPluginEnum] = Form(None),
    min_meta_description_length: int = Form(80),
    min_short_description_words: int = Form(10),
):
    """
    Score products from an uploaded CSV or Excel export.
    """
    suffix = Path(products_file.filename or "").suffix.lower()
    with tempfile.TemporaryDirectory() as tmp_dir:
        upload_path = Path(tmp_dir) / f"products{suffix}"
        upload_path.write_bytes(await products_file.read())
        try:
            products = load_products(upload_path)
        except ProductLoadError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return _run_content_health(
        products,
        plugin.value if plugin else None,
        min_meta_description_length,
        min_short_description_words,
    )


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "Product SEO Engine API",
        "version": __version__,
        "description": "Rule-compliant product SEO content and content health scoring",
        "endpoints": {
            "GET /api/health": "Health check",
            "POST /api/generate": "Build a compliant content record from generator output",
            "POST /api/content-health": "Score products sent as JSON",
            "POST /api/content-health/file": "Score products from an uploaded CSV/Excel export",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }
