import pytest

FONT_NAME = '-Test-Fixed-Medium-R-Normal--8-80-75-75-C-80-ISO10646-1'


def ascii_rows(code, height=8):
    """Deterministic, non-blank test pattern for a codepoint."""
    return [((code * (i + 3)) ^ (i << 4)) & 0xFF or 0x81 for i in range(height)]


def make_bdf(glyphs, bbox=(8, 8, 0, -1), boxes=None, name=FONT_NAME):
    """Build BDF text; glyphs maps codepoint to rows, boxes overrides per-glyph BBX."""
    boxes = boxes or {}
    width, height, xoff, yoff = bbox
    lines = [
        'STARTFONT 2.1',
        'COMMENT test font',
        f'FONT {name}',
        'SIZE 8 75 75',
        f'FONTBOUNDINGBOX {width} {height} {xoff} {yoff}',
        'STARTPROPERTIES 3',
        f'FONT_ASCENT {height + yoff}',
        f'FONT_DESCENT {-yoff}',
        'COPYRIGHT "Public domain"',
        'ENDPROPERTIES',
        f'CHARS {len(glyphs)}',
    ]
    for code, rows in glyphs.items():
        gw, gh, gx, gy = boxes.get(code, bbox)
        lines += [
            f'STARTCHAR U+{code:04X}',
            f'ENCODING {code}',
            'SWIDTH 500 0',
            f'DWIDTH {gw} 0',
            f'BBX {gw} {gh} {gx} {gy}',
            'BITMAP',
        ]
        lines += [f'{row:02X}' for row in rows]
        lines.append('ENDCHAR')
    lines.append('ENDFONT')
    return '\n'.join(lines) + '\n'


@pytest.fixture
def ascii_glyphs():
    return {code: ascii_rows(code) for code in range(32, 127)}


@pytest.fixture
def font_8x8(ascii_glyphs):
    return make_bdf(ascii_glyphs)


@pytest.fixture
def font_8x8_file(tmp_path, font_8x8):
    path = tmp_path / 'test8x8.bdf'
    path.write_text(font_8x8)
    return path


@pytest.fixture
def tall_rows():
    # 9 rows, top and bottom rows set so shifts are visible
    return [0xFF, 0x81, 0x42, 0x24, 0x18, 0x24, 0x42, 0x81, 0xFF]


@pytest.fixture
def font_9px(tall_rows):
    return make_bdf({65: tall_rows, 66: [0x18] * 9}, bbox=(8, 9, 0, -2))
