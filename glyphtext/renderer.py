"""SVG and PNG rendering for composed documents.

Each glyph becomes a ``<g>`` element carrying its class name
(``block-glyph t``, ``decal-glyph ditto``, ...) with one ``<polygon>``
per outline. Fill and stroke are applied uniformly to every polygon;
per-glyph styling is left to CSS targeting the class names.
"""

from __future__ import annotations

import structlog

from .document import ComposedDocument

logger = structlog.get_logger(__name__)

DEFAULT_FILL = "#000000"


def _fmt(value: float) -> str:
    """Compact number formatting: 11.0 -> '11', 3.400 -> '3.4'."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _polygon_attrs(fill: str, stroke: str | None, stroke_width: float | None) -> str:
    attrs = [f'fill="{fill}"']
    if stroke is not None:
        attrs.append(f'stroke="{stroke}"')
        attrs.append(f'stroke-width="{_fmt(stroke_width if stroke_width is not None else 1.0)}"')
    return " ".join(attrs)


def render_svg(
    document: ComposedDocument,
    fill: str = DEFAULT_FILL,
    stroke: str | None = None,
    stroke_width: float | None = None,
    background: str | None = None,
) -> str:
    """Render a composed document as an SVG string.

    Args:
        document: Emitted document (already scaled and origin-shifted).
        fill: Fill color for every polygon.
        stroke: Optional stroke color for every polygon.
        stroke_width: Stroke width; defaults to 1 when a stroke is set.
        background: Optional background color drawn behind the glyphs.

    Returns:
        Complete SVG document as a string.
    """
    width = _fmt(document.width)
    height = _fmt(document.height)
    style = _polygon_attrs(fill, stroke, stroke_width)

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}">',
    ]

    if background is not None:
        svg_parts.append(f'  <rect width="{width}" height="{height}" fill="{background}"/>')

    polygon_count = 0
    for shape in document.shapes:
        svg_parts.append(f'  <g class="{shape.class_name}">')
        for polygon in shape.polygons:
            points_str = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in polygon)
            svg_parts.append(f'    <polygon points="{points_str}" {style}/>')
            polygon_count += 1
        svg_parts.append("  </g>")

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug(
        "svg_rendered",
        glyph_count=len(document.shapes),
        polygon_count=polygon_count,
        width=document.width,
        height=document.height,
    )

    return svg_content


def render_png(
    document: ComposedDocument,
    fill: str = DEFAULT_FILL,
    stroke: str | None = None,
    stroke_width: float | None = None,
    background: str | None = "#FFFFFF",
) -> bytes:
    """Render a composed document as a PNG image.

    Generates SVG first, then converts to PNG via CairoSVG at the
    document's own (already scaled) size.

    Raises:
        ValueError: If the document is empty; there is nothing to rasterize.
    """
    if document.is_empty or document.width <= 0 or document.height <= 0:
        raise ValueError("Cannot render an empty document as PNG")

    import cairosvg

    svg = render_svg(document, fill, stroke, stroke_width, background)
    png_bytes = cairosvg.svg2png(bytestring=svg.encode("utf-8"))

    logger.debug(
        "png_rendered",
        width=document.width,
        height=document.height,
        bytes=len(png_bytes),
    )
    return png_bytes
