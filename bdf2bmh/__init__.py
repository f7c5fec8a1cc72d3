"""BDF to bitmap header converter for 8 pixel wide fonts."""

VERSION = '1.0'

from .errors import ConversionError, MalformedSource, EmptySelection, TransportUnavailable
from .model import FontHeader, RawGlyph, Glyph, GlyphTable
from .scanner import scan, read_bdf
from .extract import extract, parse_subset
from .transform import TransformOptions, transform_glyph, transform_table, decode_glyph
from .serialize import render
from .convert import convert, convert_text
