"""PNG contact sheet of the converted glyphs, decoded back from the output bytes."""

import logging

from PIL import Image, ImageDraw, ImageFont

from .transform import TransformOptions, decode_glyph

FG_COLOR = (255, 255, 255)
BG_COLOR = (0, 0, 0)
LABEL_COLOR = (255, 255, 0)
GRID_COLOR = (64, 64, 64)
COLUMNS = 16
LABEL_HEIGHT = 12
SPACING = 4


def render_glyph(glyph, options):
    """Draw one converted glyph as an RGB image of its cell."""
    bitmap = decode_glyph(glyph, options)
    img = Image.new("RGB", (max(bitmap.width, 1), max(bitmap.height, 1)), BG_COLOR)
    draw = ImageDraw.Draw(img)
    for y in range(bitmap.height):
        for x in range(bitmap.width):
            if bitmap.pixel(x, y):
                draw.point((x, y), fill=FG_COLOR)
    return img


def build_preview(table, path, scale=3):
    """Save a grid of all glyphs with their codepoints underneath."""
    label_font = ImageFont.load_default()
    options = table.options or TransformOptions()
    cell_width = max(table.width * scale + 2, 24) + SPACING
    cell_height = table.height * scale + 2 + LABEL_HEIGHT + SPACING
    rows = (len(table) + COLUMNS - 1) // COLUMNS
    img = Image.new("RGB", (COLUMNS * cell_width, max(rows, 1) * cell_height), BG_COLOR)
    draw = ImageDraw.Draw(img)

    for i, glyph in enumerate(table):
        glyph_img = render_glyph(glyph, options).resize(
            (max(table.width * scale, 1), max(table.height * scale, 1)), Image.NEAREST)
        x = (i % COLUMNS) * cell_width
        y = (i // COLUMNS) * cell_height
        img.paste(glyph_img, (x + 1, y + 1))
        draw.rectangle([x, y, x + table.width * scale + 1, y + table.height * scale + 1], outline=GRID_COLOR)
        draw.text((x, y + table.height * scale + 3), f"{glyph.codepoint}", font=label_font, fill=LABEL_COLOR)

    img.save(path)
    logging.info('preview saved to %s', path)
    return img
