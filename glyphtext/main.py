"""glyphtext service -- FastAPI application.

Endpoints:
    POST /compose       -- Compose text to a PNG image
    POST /compose/svg   -- Compose text to an SVG string
    GET  /health        -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from . import __version__
from .config import HEX_COLOR, ComposerOptions, configure_logging, settings
from .document import ComposedDocument
from .engine import compose_text
from .errors import GlyphTextError
from .renderer import render_png, render_svg

configure_logging()

logger = structlog.get_logger(__name__)

app = FastAPI(
    title="glyphtext",
    description="Compose text into nested pictographic glyphs rendered as vector art",
    version=__version__,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class ComposeRequest(BaseModel):
    """Request body for /compose and /compose/svg."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Text to compose",
        examples=["this is rude."],
    )
    nesting_depth: int = Field(
        default=1,
        ge=0,
        le=6,
        description="Primary glyphs nested inside each anchor glyph",
    )
    use_overrides: bool = Field(
        default=True,
        description="Draw words such as 'the' as a single glyph",
    )
    scale: float = Field(
        default=4.0,
        gt=0,
        le=64,
        description="Output units per glyph unit",
    )
    fill: str = Field(
        default=settings.fill,
        pattern=HEX_COLOR,
        description="Polygon fill color",
    )
    stroke: str | None = Field(
        default=settings.stroke,
        pattern=HEX_COLOR,
        description="Polygon stroke color, or null for none",
    )

    def options(self) -> ComposerOptions:
        return ComposerOptions(
            nesting_depth=self.nesting_depth,
            use_overrides=self.use_overrides,
            scale=self.scale,
        )


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


def _compose(request: ComposeRequest) -> ComposedDocument:
    return compose_text(request.text, options=request.options())


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/compose",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG rendering of the text"},
        422: {"description": "Invalid input or text that cannot be composed"},
    },
)
async def compose_png(request: ComposeRequest) -> Response:
    """Compose text into a PNG image."""
    try:
        document = _compose(request)
        png_bytes = render_png(document, fill=request.fill, stroke=request.stroke)
    except GlyphTextError as e:
        logger.error("compose_failed", error=str(e), text=request.text)
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("compose_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Composition failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/compose/svg",
    response_class=Response,
    responses={
        200: {
            "content": {"image/svg+xml": {}},
            "description": "SVG rendering of the text",
        },
        422: {"description": "Invalid input or text that cannot be composed"},
    },
)
async def compose_svg(request: ComposeRequest) -> Response:
    """Compose text into an SVG image."""
    try:
        document = _compose(request)
        svg_content = render_svg(document, fill=request.fill, stroke=request.stroke)
    except GlyphTextError as e:
        logger.error("compose_failed", error=str(e), text=request.text)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("compose_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Composition failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="glyphtext",
        version=__version__,
    )
