from dataclasses import dataclass, field

# Glyphs are stored one byte per pixel row
MAX_WIDTH = 8
PAGE_HEIGHT = 8


@dataclass(frozen=True)
class BoundingBox:
    width: int
    height: int
    xoff: int = 0
    yoff: int = 0

    def __str__(self):
        return f"{self.width} {self.height} {self.xoff} {self.yoff}"


@dataclass(frozen=True)
class FontHeader:
    """Font level properties as declared in the BDF file."""
    name: str = ''
    size: tuple = ()
    bbox: BoundingBox = None
    ascent: int = None
    descent: int = None
    chars: int = None
    copyright: str = ''
    comments: tuple = ()


@dataclass(frozen=True)
class RawGlyph:
    """A glyph as scanned: rows are left aligned in 8 bits, MSB is the leftmost pixel."""
    codepoint: int
    bbox: BoundingBox
    rows: tuple
    name: str = ''


@dataclass(frozen=True)
class Glyph:
    codepoint: int
    width: int
    height: int
    data: bytes

    def __len__(self):
        return len(self.data)


@dataclass(frozen=True)
class GlyphTable:
    """Converted glyphs in ascending codepoint order, all sharing one cell size."""
    glyphs: tuple
    width: int
    height: int
    options: object = None
    gmin: int = 0
    gmax: int = 0
    bytes_per_glyph: int = field(default=0)

    def __len__(self):
        return len(self.glyphs)

    def __iter__(self):
        return iter(self.glyphs)

    @property
    def pages(self):
        return -(-self.height // PAGE_HEIGHT)

    @property
    def total_bytes(self):
        return sum(len(glyph) for glyph in self.glyphs)

    def codepoints(self):
        return [glyph.codepoint for glyph in self.glyphs]
