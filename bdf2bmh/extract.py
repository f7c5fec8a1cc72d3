import logging

from .errors import EmptySelection

DEFAULT_SUBSET = (32, 126)
FULL_RANGE = (0, 0xFFFFFFFF)


def parse_subset(text):
    """Parse 'a-b' (or a single 'a') into an inclusive (min, max) pair."""
    first, sep, last = text.partition('-')
    try:
        gmin = int(first)
        gmax = int(last) if sep else gmin
    except ValueError:
        raise ValueError(f"invalid subset {text!r}, expected <min>-<max>") from None
    if gmin < 0 or gmax < 0:
        raise ValueError(f"invalid subset {text!r}, codepoints are not negative")
    if gmax < gmin:
        gmin, gmax = gmax, gmin
    return gmin, gmax


def extract(glyphs, gmin=DEFAULT_SUBSET[0], gmax=DEFAULT_SUBSET[1]):
    """Select the glyphs with gmin <= codepoint <= gmax, in codepoint order."""
    selected = {}
    for glyph in glyphs:
        if not gmin <= glyph.codepoint <= gmax:
            continue
        if glyph.codepoint in selected:
            logging.warning('duplicate glyph for codepoint %d ignored', glyph.codepoint)
            continue
        selected[glyph.codepoint] = glyph
    if not selected:
        raise EmptySelection(gmin, gmax)
    logging.info('selected %d glyphs in range %d-%d', len(selected), gmin, gmax)
    return tuple(selected[code] for code in sorted(selected))
