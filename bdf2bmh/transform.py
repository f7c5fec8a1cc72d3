"""
bdf2bmh.transform - re-encode scanned glyphs for a display's memory layout

Every glyph is first placed in the font cell given by FONTBOUNDINGBOX, then
padded, rotated and flipped. The steps are applied in this order:

    ascender   prepend blank rows above the glyph
    height     pad the cell with blank rows to a multiple of 8 (unless native)
    rotate     turn the cell 90 degrees counter-clockwise
    flip       reverse the bit order of each output byte
    droplast   leave off the last byte of each glyph

Ascender padding happens in the unrotated frame, so with rotate it shows up
as blank columns on the left of the rotated cell.
"""

import logging
from dataclasses import dataclass

from .model import BoundingBox, Glyph, GlyphTable, MAX_WIDTH, PAGE_HEIGHT

# bit reversal lookup for flip
REVERSED = bytes(int(f'{i:08b}'[::-1], 2) for i in range(256))


@dataclass(frozen=True)
class TransformOptions:
    native: bool = False
    ascender: int = 0
    rotate: bool = False
    flip: bool = False
    droplast: bool = False

    def __post_init__(self):
        if self.ascender < 0:
            raise ValueError(f"ascender must not be negative, got {self.ascender}")

    def names(self):
        """Active options, in command line spelling."""
        active = [name for name in ('native', 'rotate', 'flip', 'droplast') if getattr(self, name)]
        if self.ascender:
            active.append(f'ascender {self.ascender}')
        return active


class Bitmap:
    """Monochrome pixel grid; each row is an int with the leftmost pixel in the top bit."""

    def __init__(self, width, rows):
        self.width = width
        self.rows = tuple(rows)

    @property
    def height(self):
        return len(self.rows)

    def __eq__(self, other):
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.width == other.width and self.rows == other.rows

    def __repr__(self):
        return f"Bitmap({self.width}, {self.rows!r})"

    @classmethod
    def from_bytes(cls, data, width, height):
        """Decode row-major bytes, each row padded to a byte boundary."""
        stride = -(-width // 8)
        pad = 8 * stride - width
        rows = []
        for y in range(height):
            chunk = data[y * stride:(y + 1) * stride]
            rows.append(int.from_bytes(chunk, 'big') >> pad if chunk else 0)
        return cls(width, rows)

    def pixel(self, x, y):
        return (self.rows[y] >> (self.width - 1 - x)) & 1

    def prepend_rows(self, count):
        return Bitmap(self.width, (0,) * count + self.rows)

    def pad_rows(self, height):
        """Add blank rows at the bottom up to the given height."""
        return Bitmap(self.width, self.rows + (0,) * max(0, height - self.height))

    def rotate_ccw(self):
        # the top-right pixel ends up top-left
        rows = []
        for x in range(self.width - 1, -1, -1):
            row = 0
            for y in range(self.height):
                row = (row << 1) | self.pixel(x, y)
            rows.append(row)
        return Bitmap(self.height, rows)

    def rotate_cw(self):
        rows = []
        for x in range(self.width):
            row = 0
            for y in range(self.height - 1, -1, -1):
                row = (row << 1) | self.pixel(x, y)
            rows.append(row)
        return Bitmap(self.height, rows)

    def encode(self):
        """Row-major bytes, each row left aligned and padded to a byte boundary."""
        stride = -(-self.width // 8)
        pad = 8 * stride - self.width
        return b''.join((row << pad).to_bytes(stride, 'big') for row in self.rows)


def flip_bits(data):
    return bytes(data).translate(REVERSED)


def round_to_page(height):
    return -(-height // PAGE_HEIGHT) * PAGE_HEIGHT


def font_cell(header, glyphs):
    """The font bounding box, or the union of the glyph boxes if the font declares none."""
    if header is not None and header.bbox is not None:
        return header.bbox
    if not glyphs:
        return BoundingBox(0, 0)
    left = min(g.bbox.xoff for g in glyphs)
    bottom = min(g.bbox.yoff for g in glyphs)
    right = max(g.bbox.xoff + g.bbox.width for g in glyphs)
    top = max(g.bbox.yoff + g.bbox.height for g in glyphs)
    return BoundingBox(min(right - left, MAX_WIDTH), top - bottom, left, bottom)


def cell_geometry(cell, options):
    """Width and height in pixels of the converted (unrotated) cell."""
    height = cell.height + options.ascender
    if not options.native:
        height = round_to_page(height)
    return cell.width, height


def place(raw, cell):
    """Position a glyph's rows inside the font cell, clipping what falls outside."""
    top = (cell.height + cell.yoff) - (raw.bbox.height + raw.bbox.yoff)
    left = raw.bbox.xoff - cell.xoff
    rows = [0] * cell.height
    clipped = 0
    for i, row in enumerate(raw.rows):
        y = top + i
        shifted = row >> left if left >= 0 else (row << -left) & 0xFF
        value = shifted >> (8 - cell.width)
        if 0 <= y < cell.height:
            rows[y] = value
            clipped += bin(row).count('1') - bin(value).count('1')
        else:
            clipped += bin(row).count('1')
    if clipped:
        logging.debug('glyph %d: %d pixels outside the font cell clipped', raw.codepoint, clipped)
    return Bitmap(cell.width, rows)


def transform_glyph(raw, cell, options=TransformOptions()):
    bitmap = place(raw, cell).prepend_rows(options.ascender)
    if not options.native:
        bitmap = bitmap.pad_rows(round_to_page(bitmap.height))
    width, height = bitmap.width, bitmap.height
    if options.rotate:
        bitmap = bitmap.rotate_ccw()
    data = bitmap.encode()
    if options.flip:
        data = flip_bits(data)
    if options.droplast:
        data = data[:-1]
    return Glyph(raw.codepoint, width, height, data)


def decode_glyph(glyph, options=TransformOptions()):
    """Undo rotate and flip, returning the unrotated cell; a dropped last byte reads as blank."""
    data = glyph.data
    if options.droplast:
        data += b'\x00'
    if options.flip:
        data = flip_bits(data)
    if options.rotate:
        return Bitmap.from_bytes(data, glyph.height, glyph.width).rotate_cw()
    return Bitmap.from_bytes(data, glyph.width, glyph.height)


def bytes_per_glyph(width, height, options):
    if options.rotate:
        count = width * -(-height // 8)
    else:
        count = height * -(-width // 8)
    return count - 1 if options.droplast and count else count


def transform_table(header, glyphs, options=TransformOptions(), gmin=0, gmax=0, cell=None):
    """Convert the selected glyphs into a GlyphTable sharing one cell."""
    if cell is None:
        cell = font_cell(header, glyphs)
    width, height = cell_geometry(cell, options)
    converted = tuple(transform_glyph(raw, cell, options) for raw in glyphs)
    logging.info('converted %d glyphs to %dx%d cells', len(converted), width, height)
    return GlyphTable(
        converted, width, height, options, gmin, gmax,
        bytes_per_glyph(width, height, options))
