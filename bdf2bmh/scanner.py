"""
bdf2bmh.scanner - read Glyph Bitmap Distribution Format text

Only the keywords needed to place 8 pixel wide glyphs in a cell are kept,
everything else is skipped so that extended BDF files still load.
"""

import re
import logging

from .errors import MalformedSource
from .model import BoundingBox, FontHeader, RawGlyph, MAX_WIDTH

RE_HEXROW = re.compile('[0-9A-Fa-f]+')

# keywords inside a glyph block that carry nothing we use
GLYPH_SKIP = frozenset(('SWIDTH', 'DWIDTH', 'SWIDTH1', 'DWIDTH1', 'VVECTOR', 'ATTRIBUTES', 'COMMENT'))


def read_bdf(path):
    """Read a BDF file and scan it."""
    # BDF is ASCII, latin-1 keeps stray 8-bit comment bytes readable
    with open(path, encoding='latin-1') as f:
        return scan(f.read())


def scan(text):
    """Scan BDF text into a FontHeader and the list of RawGlyph in file order."""
    lines = enumerate(text.splitlines(), 1)
    props = {'comments': []}
    glyphs = []
    started = False
    for lineno, line in lines:
        keyword, _, value = line.strip().partition(' ')
        value = value.strip()
        if not keyword:
            continue
        if keyword == 'STARTFONT':
            started = True
        elif keyword == 'ENDFONT':
            break
        elif not started:
            raise MalformedSource(f"expected STARTFONT, not {keyword}", lineno)
        elif keyword == 'COMMENT':
            props['comments'].append(value)
        elif keyword == 'FONT':
            props['name'] = value
        elif keyword == 'SIZE':
            props['size'] = tuple(_ints(value, 3, lineno, keyword))
        elif keyword == 'FONTBOUNDINGBOX':
            bbox = BoundingBox(*_ints(value, 4, lineno, keyword))
            if bbox.width > MAX_WIDTH:
                raise MalformedSource(
                    f"font bounding box is {bbox.width} pixels wide, "
                    f"only fonts up to {MAX_WIDTH} pixels are supported", lineno)
            props['bbox'] = bbox
        elif keyword == 'FONT_ASCENT':
            props['ascent'] = _ints(value, 1, lineno, keyword)[0]
        elif keyword == 'FONT_DESCENT':
            props['descent'] = _ints(value, 1, lineno, keyword)[0]
        elif keyword == 'COPYRIGHT':
            props['copyright'] = value.strip('"')
        elif keyword == 'CHARS':
            props['chars'] = _ints(value, 1, lineno, keyword)[0]
        elif keyword == 'STARTCHAR':
            glyph = _scan_glyph(lines, value, lineno)
            if glyph is not None:
                glyphs.append(glyph)
        else:
            logging.debug('skipping %s on line %d', keyword, lineno)
    if not started:
        raise MalformedSource("not a BDF file, STARTFONT missing")

    props['comments'] = tuple(props['comments'])
    header = FontHeader(**props)
    logging.info('bdf properties:')
    logging.info('    FONT: %s', header.name)
    logging.info('    FONTBOUNDINGBOX: %s', header.bbox)
    logging.info('    CHARS: %s declared, %d scanned', header.chars, len(glyphs))
    return header, glyphs


def _scan_glyph(lines, name, start):
    """Read one STARTCHAR block, return None for glyphs without a usable code."""
    encoding = None
    has_encoding = False
    bbox = None
    for lineno, line in lines:
        keyword, _, value = line.strip().partition(' ')
        if keyword == 'ENCODING':
            codes = _ints(value, None, lineno, keyword)
            has_encoding = True
            # ENCODING -1 <alt> uses the alternative code if there is one
            if codes[0] >= 0:
                encoding = codes[0]
            elif len(codes) > 1 and codes[1] >= 0:
                encoding = codes[1]
        elif keyword == 'BBX':
            bbox = BoundingBox(*_ints(value, 4, lineno, keyword))
            if bbox.width > MAX_WIDTH:
                raise MalformedSource(
                    f"glyph '{name}' is {bbox.width} pixels wide, "
                    f"only {MAX_WIDTH} pixels are supported", lineno)
        elif keyword == 'BITMAP':
            if not has_encoding:
                raise MalformedSource(f"glyph '{name}' has no ENCODING", start)
            if bbox is None:
                raise MalformedSource(f"glyph '{name}' has no BBX", start)
            rows = _scan_rows(lines, bbox, name, lineno)
            if encoding is None:
                logging.debug("glyph '%s' has no codepoint, skipped", name)
                return None
            return RawGlyph(encoding, bbox, rows, name)
        elif keyword == 'ENDCHAR':
            raise MalformedSource(f"glyph '{name}' has no BITMAP section", lineno)
        elif keyword and keyword not in GLYPH_SKIP:
            logging.debug('skipping %s in glyph %s', keyword, name)
    raise MalformedSource(f"end of file inside glyph '{name}'", start)


def _scan_rows(lines, bbox, name, start):
    rows = []
    for lineno, line in lines:
        line = line.strip()
        if line == 'ENDCHAR':
            if len(rows) < bbox.height:
                raise MalformedSource(
                    f"glyph '{name}' has {len(rows)} bitmap rows, "
                    f"BBX declares {bbox.height}", lineno)
            return tuple(rows)
        if not line:
            continue
        if len(rows) < bbox.height:
            rows.append(_decode_row(line, bbox.width, lineno))
        else:
            logging.warning("glyph '%s': extra bitmap row on line %d ignored", name, lineno)
    raise MalformedSource(f"end of file inside bitmap of glyph '{name}'", start)


def _decode_row(text, width, lineno):
    """Decode one hex row into 8 left aligned bits."""
    if not RE_HEXROW.fullmatch(text):
        raise MalformedSource(f"bitmap row {text!r} is not hexadecimal", lineno)
    value = int(text, 16)
    bits = 4 * len(text)
    if bits > 8:
        value >>= bits - 8
    else:
        value <<= 8 - bits
    # clear the padding past the declared width
    return value & (0xFF << (8 - width)) & 0xFF


def _ints(value, count, lineno, keyword):
    try:
        numbers = [int(v) for v in value.split()]
    except ValueError:
        raise MalformedSource(f"{keyword} expects integers, got {value!r}", lineno) from None
    if not numbers or (count is not None and len(numbers) < count):
        raise MalformedSource(f"{keyword} expects {count or 'an'} integer values, got {value!r}", lineno)
    return numbers[:count] if count else numbers
