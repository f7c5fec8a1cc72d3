"""Page through a converted font on the OLED panel."""

import sys

from PIL import Image

from .oled import WIDTH, HEIGHT, PAGES
from .transform import TransformOptions, decode_glyph

QUIT_KEY = 'q'
PROMPT = "Press any key to continue, 'q' to exit"


def glyph_image(glyph, options):
    """Mode '1' image of a converted glyph, usable as a paste mask."""
    bitmap = decode_glyph(glyph, options)
    img = Image.new('1', (max(bitmap.width, 1), max(bitmap.height, 1)), 0)
    pix = img.load()
    for y in range(bitmap.height):
        for x in range(bitmap.width):
            if bitmap.pixel(x, y):
                pix[x, y] = 255
    return img


def draw_text(screen, text, page, cells, cell_width, cell_height, invert=False):
    """Write text centered on a page row using the converted glyphs."""
    x = max((WIDTH - len(text) * cell_width) // 2, 0)
    y = page * 8
    if invert:
        screen.paste(255, (0, y, WIDTH, min(y + cell_height, HEIGHT)))
    for ch in text:
        if x >= WIDTH:
            break
        cell = cells.get(ord(ch))
        if cell is not None:
            screen.paste(0 if invert else 255, (x, y), mask=cell)
        x += cell_width


def wait_key(getch, prompt=None):
    print(PROMPT, file=prompt or sys.stderr)
    return getch() != QUIT_KEY


def preview(table, panel, getch, title='', prompt=None):
    """Show a title screen, then glyph screens one keypress apart; returns screens shown."""
    options = table.options or TransformOptions()
    pages = max(table.pages, 1)
    if pages > PAGES:
        raise ValueError(f"glyphs {table.height} pixels high do not fit on a {HEIGHT} pixel display")
    width = max(table.width, 1)
    cells = {glyph.codepoint: glyph_image(glyph, options) for glyph in table}
    cell_height = pages * 8

    screen = Image.new('1', (WIDTH, HEIGHT), 0)
    draw_text(screen, title, 0, cells, width, cell_height, invert=True)
    draw_text(screen, f"{table.width}x{table.height}", PAGES - pages, cells, width, cell_height)
    panel.show(screen)
    shown = 1
    if not wait_key(getch, prompt):
        return shown

    glyphs = list(table)
    per_row = WIDTH // width
    index = 0
    while index < len(glyphs):
        if shown > 1 and not wait_key(getch, prompt):
            break
        screen = Image.new('1', (WIDTH, HEIGHT), 0)
        for page in range(0, PAGES - pages + 1, pages):
            for column in range(per_row):
                if index >= len(glyphs):
                    break
                screen.paste(255, (column * width, page * 8), mask=cells[glyphs[index].codepoint])
                index += 1
        panel.show(screen)
        shown += 1
    return shown
