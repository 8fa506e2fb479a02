#!/usr/bin/env python3
"""Basic usage example for glyphtext.

Composes a few sentences into glyph documents and writes them as SVG
and PNG next to this script.

Usage:
    python examples/basic_usage.py
"""

import sys
import os
from pathlib import Path

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from glyphtext.config import ComposerOptions
from glyphtext.engine import GlyphComposer, compose_text
from glyphtext.errors import GlyphTextError
from glyphtext.grid import ChangeDirection, PathPositions, linear_positions, rows
from glyphtext.renderer import render_png, render_svg

OUT_DIR = Path(__file__).parent / "output"


def example_basic_sentence():
    """Compose one sentence and render it both ways."""
    print("=" * 60)
    print("Example 1: Basic Sentence")
    print("=" * 60)

    document = compose_text("this is rude.", options=ComposerOptions(scale=4))
    print(f"  Glyphs:      {len(document.shapes)}")
    print(f"  Size:        {document.width:g} x {document.height:g}")

    svg = render_svg(document)
    (OUT_DIR / "basic.svg").write_text(svg, encoding="utf-8")
    png = render_png(document)
    (OUT_DIR / "basic.png").write_bytes(png)
    print(f"  SVG length:  {len(svg)} chars")
    print(f"  PNG size:    {len(png)} bytes")
    print()


def example_nesting_depth():
    """Compare nesting depths for the same text."""
    print("=" * 60)
    print("Example 2: Nesting Depth")
    print("=" * 60)

    for depth in range(4):
        document = compose_text("strength is", options=ComposerOptions(nesting_depth=depth))
        decals = sum(1 for s in document.shapes if s.class_name.startswith("decal-glyph"))
        print(f"  Depth {depth}: {len(document.shapes):2d} glyphs, {decals} decals")

    print()


def example_layouts():
    """Lay the same text out on a line, in rows, and along a path."""
    print("=" * 60)
    print("Example 3: Layouts")
    print("=" * 60)

    text = "this is rude."
    path = PathPositions().add_action(3, ChangeDirection((0, 2)))
    layouts = {"line": linear_positions, "rows": rows(2), "path": path}

    for name, position_func in layouts.items():
        composer = GlyphComposer(options=ComposerOptions(scale=2), position_func=position_func)
        document = composer.add_sentence(text).compose()
        (OUT_DIR / f"layout_{name}.svg").write_text(
            render_svg(document, fill="#1A365D", background="#FFFFFF"), encoding="utf-8"
        )
        print(f"  {name:5s} {document.width:6g} x {document.height:<6g}")

    print()


def example_errors():
    """Show the errors composition can raise."""
    print("=" * 60)
    print("Example 4: Errors")
    print("=" * 60)

    for text in ["h3llo", "hello world"]:
        try:
            compose_text(text)
        except GlyphTextError as e:
            print(f"  {text!r:15s} {type(e).__name__}: {e}")

    print()


if __name__ == "__main__":
    OUT_DIR.mkdir(exist_ok=True)
    example_basic_sentence()
    example_nesting_depth()
    example_layouts()
    example_errors()
    print("All examples completed successfully.")
