"""Render a GlyphTable as C byte tokens."""


def char_label(code):
    """Printable ASCII glyphs get their character in the comment."""
    if 0x20 <= code <= 0x7E:
        ch = chr(code)
        if ch in "\\'":
            ch = '\\' + ch
        return f"{code} '{ch}'"
    return f"{code}"


def pixel_art(byte, ink='@', paper='.'):
    return ''.join(ink if byte & (0x80 >> bit) else paper for bit in range(8))


def comment_text(text):
    """Keep a trailing backslash from splicing the next line into the comment."""
    if text.endswith('\\'):
        return f'"{text}"'
    return text


def header_lines(table, header=None, source=None, header_mode=False, verbose=False):
    """The comment block; verbose adds the converted geometry to it."""
    lines = []
    if not header_mode:
        return lines
    if source:
        lines.append(f"// {comment_text(source)}")
    if header is not None:
        if header.name:
            lines.append(f"// FONT {comment_text(header.name)}")
        if header.size:
            lines.append("// SIZE " + ' '.join(str(v) for v in header.size))
        if header.bbox is not None:
            lines.append(f"// FONTBOUNDINGBOX {header.bbox}")
        if header.ascent is not None:
            lines.append(f"// FONT_ASCENT {header.ascent}")
        if header.descent is not None:
            lines.append(f"// FONT_DESCENT {header.descent}")
        if header.chars is not None:
            lines.append(f"// CHARS {header.chars}")
        if header.copyright:
            lines.append(f"// COPYRIGHT {comment_text(header.copyright)}")
        lines.extend(f"// COMMENT {comment_text(text)}" for text in header.comments)
    if verbose:
        lines.append(
            f"// Converted font size {table.width}x{table.height}, "
            f"{len(table)} glyphs ({table.gmin}-{table.gmax}), "
            f"{table.bytes_per_glyph} bytes per glyph, {table.total_bytes} bytes")
        options = table.options.names() if table.options is not None else []
        lines.append("// Options: " + (' '.join(options) if options else 'none'))
    return lines


def glyph_lines(glyph, line=False):
    if line:
        tokens = ','.join(f"0x{b:02X}" for b in glyph.data)
        return [f"{tokens}, // {char_label(glyph.codepoint)}"]
    lines = [f"// {char_label(glyph.codepoint)}"]
    lines.extend(f"0x{b:02X}, // {pixel_art(b)}" for b in glyph.data)
    return lines


def render(table, header=None, *, source=None, header_mode=False, verbose=False, line=False, name=None):
    """Return the full text output for a converted table."""
    out = header_lines(table, header, source, header_mode, verbose)
    body = []
    for glyph in table:
        body.extend(glyph_lines(glyph, line))
    if name:
        out.append(f"static const uint8_t {name}[{table.total_bytes}] = {{")
        out.extend(f"    {text}" for text in body)
        out.append("};")
    else:
        out.extend(body)
    return '\n'.join(out) + '\n'
