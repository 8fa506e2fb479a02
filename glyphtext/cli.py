"""Command line entry point: ``glyphtext TEXT``."""

from __future__ import annotations

import re
from pathlib import Path

import click
import structlog

from . import __version__
from .catalog import load_catalog
from .config import HEX_COLOR, ComposerOptions, configure_logging, settings
from .engine import compose_text
from .errors import GlyphTextError
from .grid import linear_positions, rows
from .renderer import render_png, render_svg

logger = structlog.get_logger(__name__)


def _hex_color(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and not re.fullmatch(HEX_COLOR, value):
        raise click.BadParameter(f"{value!r} is not a #RRGGBB color")
    return value


@click.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file. SVG goes to stdout when omitted.",
)
@click.option("--depth", type=click.IntRange(min=0), default=1, show_default=True,
              help="Glyphs nested inside each anchor glyph")
@click.option("--no-overrides", is_flag=True, help="Spell out words like 'the' letter by letter")
@click.option("--scale", type=click.FloatRange(min=0, min_open=True), default=1.0,
              show_default=True, help="Output units per glyph unit")
@click.option("--row-width", type=click.IntRange(min=1), default=None,
              help="Wrap onto a new line every N anchors")
@click.option("--fill", default=None, callback=_hex_color, help="Polygon fill color (#RRGGBB)")
@click.option("--stroke", default=None, callback=_hex_color, help="Polygon stroke color (#RRGGBB)")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Glyph catalog JSON (defaults to the bundled one)")
@click.option("--png", "as_png", is_flag=True, help="Write PNG instead of SVG (needs --output)")
@click.option("--log-level", default=None, help="Log level (debug, info, warning, error)")
@click.version_option(__version__, prog_name="glyphtext")
def cli(
    text: str,
    output: Path | None,
    depth: int,
    no_overrides: bool,
    scale: float,
    row_width: int | None,
    fill: str | None,
    stroke: str | None,
    catalog_path: Path | None,
    as_png: bool,
    log_level: str | None,
) -> None:
    """Compose TEXT into glyphs and write the image."""
    configure_logging(log_level or settings.log_level)

    if as_png and output is None:
        raise click.UsageError("--png needs --output")

    options = ComposerOptions(nesting_depth=depth, use_overrides=not no_overrides, scale=scale)
    position_func = rows(row_width) if row_width else linear_positions
    fill = fill or settings.fill
    stroke = stroke or settings.stroke

    try:
        catalog = load_catalog(catalog_path) if catalog_path else None
        document = compose_text(text, catalog=catalog, options=options, position_func=position_func)
        if as_png:
            payload = render_png(document, fill=fill, stroke=stroke)
        else:
            payload = render_svg(document, fill=fill, stroke=stroke)
    except GlyphTextError as e:
        logger.error("compose_failed", error=str(e))
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(payload)
    elif isinstance(payload, bytes):
        output.write_bytes(payload)
    else:
        output.write_text(payload, encoding="utf-8")


if __name__ == "__main__":
    cli()
