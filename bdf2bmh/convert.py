"""The whole conversion: scan, select, transform."""

from .scanner import scan, read_bdf
from .extract import extract, DEFAULT_SUBSET
from .transform import TransformOptions, font_cell, transform_table


def convert_text(text, gmin=DEFAULT_SUBSET[0], gmax=DEFAULT_SUBSET[1], options=TransformOptions()):
    header, glyphs = scan(text)
    return header, _convert(header, glyphs, gmin, gmax, options)


def convert(path, gmin=DEFAULT_SUBSET[0], gmax=DEFAULT_SUBSET[1], options=TransformOptions()):
    """Convert a BDF file, returning its FontHeader and the GlyphTable."""
    header, glyphs = read_bdf(path)
    return header, _convert(header, glyphs, gmin, gmax, options)


def _convert(header, glyphs, gmin, gmax, options):
    selected = extract(glyphs, gmin, gmax)
    # a subset keeps the geometry of the whole font
    cell = font_cell(header, glyphs)
    return transform_table(header, selected, options, gmin, gmax, cell)
