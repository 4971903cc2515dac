"""Filet microservice -- FastAPI application.

Endpoints:
    POST   /api/pattern/generate              -- Compose digits into a pattern image
    GET    /api/digit-patterns                -- List every stored digit glyph
    GET    /api/digit-patterns/set/{flag}     -- List the default or custom set
    POST   /api/digit-patterns                -- Add a custom digit glyph
    DELETE /api/digit-patterns/{pattern_id}   -- Remove a digit glyph
    GET    /api/images                        -- List pattern images
    GET    /api/images/search?q=              -- Ranked tag/alt-text search
    GET    /health                            -- Health check

State lives in an in-memory PatternStore; nothing is persisted.
"""

from __future__ import annotations

import logging

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .composer import InvalidInput, clean_digits
from .config import settings
from .gauge import Gauge
from .glyphs import MAX_GLYPH_CELLS
from .grid import GlyphGrid
from .scoring import TaggedItem
from .store import DigitPattern, PatternStore


def configure_logging() -> None:
    """Configure structlog from settings (console or JSON output)."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        ),
    )


configure_logging()

logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Filet crochet pattern generator for digit strings",
    version=settings.VERSION,
)

store = PatternStore()


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class GaugeModel(BaseModel):
    """Crochet gauge, in stitches and rows per inch."""

    stitches_per_inch: float = Field(
        ...,
        gt=0,
        le=20,
        description="Stitches per inch (standard filet gauge is 4)",
        examples=[4.0, 8.0],
    )
    rows_per_inch: float = Field(
        ...,
        gt=0,
        le=20,
        description="Rows per inch (standard filet gauge is 4)",
        examples=[4.0, 8.0],
    )


class GeneratePatternRequest(BaseModel):
    """Request body for /api/pattern/generate."""

    digits: str = Field(
        ...,
        min_length=1,
        description="Digit string; characters other than 0-9 are ignored",
        examples=["2024", "19"],
    )
    pattern_set_id: int | None = Field(
        default=None,
        description="Use the custom glyph set instead of the defaults",
    )
    gauge: GaugeModel | None = Field(
        default=None,
        description="Optional gauge used to scale the pattern",
    )
    cell_size: int | None = Field(
        default=None,
        ge=1,
        le=settings.MAX_CELL_SIZE_PX,
        description="Rendered cell size in pixels",
    )


class ImageModel(BaseModel):
    """A pattern image record."""

    id: int
    url: str = Field(description="SVG data URI")
    alt: str
    tags: list[str]

    @classmethod
    def from_item(cls, item: TaggedItem) -> ImageModel:
        return cls(id=item.id, url=item.url, alt=item.alt_text, tags=list(item.tags))


class GeneratePatternResponse(BaseModel):
    """Response body for /api/pattern/generate."""

    pattern: ImageModel
    digits: str
    width: int = Field(description="Pattern width in cells")
    height: int = Field(description="Pattern height in cells")


class ImageListResponse(BaseModel):
    images: list[ImageModel]
    count: int


class DigitPatternCreateRequest(BaseModel):
    """Request body for POST /api/digit-patterns."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    digit: str = Field(..., pattern=r"^[0-9]$", examples=["7"])
    pattern: list[list[str]] = Field(
        ...,
        min_length=1,
        description="Rows of cells; '█' is a solid block, anything else open mesh",
    )
    width: int = Field(..., ge=1, le=MAX_GLYPH_CELLS)
    height: int = Field(..., ge=1, le=MAX_GLYPH_CELLS)


class DigitPatternModel(BaseModel):
    """A stored digit glyph."""

    id: int
    name: str
    description: str | None
    digit: str
    pattern: list[list[str]]
    width: int
    height: int
    is_default: bool

    @classmethod
    def from_entry(cls, entry: DigitPattern) -> DigitPatternModel:
        return cls(
            id=entry.id,
            name=entry.name,
            description=entry.description,
            digit=entry.digit,
            pattern=entry.grid.to_rows(),
            width=entry.width,
            height=entry.height,
            is_default=entry.is_default,
        )


class DigitPatternResponse(BaseModel):
    pattern: DigitPatternModel


class DigitPatternListResponse(BaseModel):
    patterns: list[DigitPatternModel]


class DeleteResponse(BaseModel):
    success: bool


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/api/pattern/generate",
    response_model=GeneratePatternResponse,
    responses={422: {"description": "No usable digits or invalid gauge"}},
)
async def generate_pattern(request: GeneratePatternRequest) -> GeneratePatternResponse:
    """Compose a digit string into a filet pattern image."""
    if len(clean_digits(request.digits)) > settings.MAX_DIGITS:
        raise HTTPException(
            status_code=422,
            detail=f"Too many digits (max {settings.MAX_DIGITS})",
        )

    gauge = (
        Gauge(
            stitches_per_inch=request.gauge.stitches_per_inch,
            rows_per_inch=request.gauge.rows_per_inch,
        )
        if request.gauge
        else None
    )

    try:
        image, pattern = store.generate_pattern(
            request.digits,
            pattern_set_id=request.pattern_set_id,
            gauge=gauge,
            cell_size=request.cell_size or settings.CELL_SIZE_PX,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("generate_pattern_failed", digits=request.digits, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate pattern")

    return GeneratePatternResponse(
        pattern=ImageModel.from_item(image),
        digits=pattern.source_digits,
        width=pattern.total_width,
        height=pattern.total_height,
    )


@app.get("/api/digit-patterns", response_model=DigitPatternListResponse)
async def list_digit_patterns() -> DigitPatternListResponse:
    """List every stored digit glyph, default and custom."""
    return DigitPatternListResponse(
        patterns=[DigitPatternModel.from_entry(p) for p in store.list_digit_patterns()]
    )


@app.get("/api/digit-patterns/set/{is_default}", response_model=DigitPatternListResponse)
async def list_digit_pattern_set(is_default: str) -> DigitPatternListResponse:
    """List the default set ("true") or the custom set (anything else)."""
    patterns = store.list_digit_patterns_by_set(is_default == "true")
    return DigitPatternListResponse(
        patterns=[DigitPatternModel.from_entry(p) for p in patterns]
    )


@app.post(
    "/api/digit-patterns",
    response_model=DigitPatternResponse,
    responses={422: {"description": "Invalid glyph"}},
)
async def create_digit_pattern(request: DigitPatternCreateRequest) -> DigitPatternResponse:
    """Add a glyph to the custom set."""
    try:
        grid = GlyphGrid.from_rows(request.pattern, width=request.width, height=request.height)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    entry = store.create_digit_pattern(
        name=request.name,
        description=request.description,
        digit=request.digit,
        grid=grid,
        width=request.width,
        height=request.height,
        is_default=False,
    )
    return DigitPatternResponse(pattern=DigitPatternModel.from_entry(entry))


@app.delete(
    "/api/digit-patterns/{pattern_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Pattern not found"}},
)
async def delete_digit_pattern(pattern_id: int) -> DeleteResponse:
    """Remove a stored digit glyph."""
    if not store.delete_digit_pattern(pattern_id):
        raise HTTPException(status_code=404, detail="Pattern not found")
    return DeleteResponse(success=True)


@app.get("/api/images/search", response_model=ImageListResponse)
async def search_images(q: str = "") -> ImageListResponse:
    """Search pattern images by tags and alt text."""
    images = store.search_images(q, limit=settings.SEARCH_PAGE_SIZE)
    return ImageListResponse(
        images=[ImageModel.from_item(i) for i in images],
        count=len(images),
    )


@app.get("/api/images", response_model=ImageListResponse)
async def list_images() -> ImageListResponse:
    """List every pattern image."""
    images = store.list_images()
    return ImageListResponse(
        images=[ImageModel.from_item(i) for i in images],
        count=len(images),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        version=settings.VERSION,
    )


# For running directly: python -m filet.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
