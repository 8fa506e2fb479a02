"""glyphtext -- text to pictographic glyph script.

Each word is drawn as one compound glyph: consonants become block glyphs
nested inside one another, and the remaining letters become small decal
marks stacked around the block on up to four sides. Compound glyphs are
tiled across a grid and rendered as SVG (or PNG via CairoSVG).

Typical use:

    from glyphtext.engine import compose_text
    from glyphtext.renderer import render_svg

    svg = render_svg(compose_text("this is rude."))
"""

__version__ = "0.3.0"
