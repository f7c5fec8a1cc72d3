#-------------------------------------------------------------------------
#
#    BDF font to C bitmap header converter for dot based displays
#    Based on bdfe, Copyright (c) 2014 Andrey Chilikin
#    https://github.com/achilikin
#
#    Converts the glyphs of an 8 pixel wide BDF font to byte arrays,
#    optionally rotated and bit reversed for displays that address their
#    memory in vertical pages (SSD1306 and friends), and can preview the
#    result on a 128x64 SSD1306 OLED attached to I2C bus 1.
#
#    Usage:
#        bdf2bmh [options] <bdf file>
#
#    The byte array goes to stdout, everything else to stderr.
#
#-------------------------------------------------------------------------
#
#    BSD License
#
#    Redistribution and use in source and binary forms, with or without
#    modification, are permitted provided that the following conditions
#    are met:
#
#    * Redistributions of source code must retain the above copyright
#      notice, this list of conditions and the following disclaimer.
#
#    * Redistributions in binary form must reproduce the above copyright
#      notice, this list of conditions and the following disclaimer in the
#      documentation and/or other materials provided with the distribution.
#
#    THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
#    "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
#    LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
#    A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
#    HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
#    SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
#    LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
#    DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
#    THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
#    (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
#    OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
#-------------------------------------------------------------------------

import os
import sys
import logging
import argparse

from . import VERSION
from .errors import ConversionError, TransportUnavailable
from .extract import parse_subset, DEFAULT_SUBSET, FULL_RANGE
from .transform import TransformOptions
from .convert import convert
from .serialize import render
from .oled import I2C_BUS, DEFAULT_ADDRESS, open_panel


def subset_arg(text):
    try:
        return parse_subset(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def ascender_arg(text):
    try:
        value = int(text)
    except ValueError:
        value = -1
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid ascender {text!r}, expected a pixel count")
    return value


def i2c_address(text):
    """Hexadecimal slave address; anything outside 01..77 falls back to the default."""
    try:
        value = int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid i2c address {text!r}, expected hexadecimal") from None
    if 0 < value < 0x78:
        return value
    return DEFAULT_ADDRESS


def build_parser():
    # -h is taken by header, help moves to -?
    parser = argparse.ArgumentParser(
        prog='bdf2bmh', add_help=False,
        description='BDF to C bitmap header converter, only 8 pixel wide fonts are supported.')
    parser.add_argument('bdf_file', help='BDF font to convert')
    parser.add_argument('-?', '--help', action='help', help='show this help and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    parser.add_argument('-h', '--header', action='store_true', help='print file header')
    parser.add_argument('-v', '--verbose', action='store_true', help='add extra info to the header')
    parser.add_argument('-l', '--line', action='store_true', help='one line per glyph')
    parser.add_argument('-s', '--subset', type=subset_arg, default=DEFAULT_SUBSET, metavar='A-B',
                        help='subset of glyphs to convert A to B, default 32-126')
    parser.add_argument('-a', '--all', action='store_true', help='convert all glyphs, not just 32-126')
    parser.add_argument('-n', '--native', action='store_true', help='do not adjust font height to 8 pixels')
    parser.add_argument('--ascender', type=ascender_arg, default=0, metavar='H',
                        help='add extra ascender of H pixels per glyph')
    parser.add_argument('-r', '--rotate', action='store_true', help="rotate glyphs' bitmaps CCW")
    parser.add_argument('-f', '--flip', action='store_true', help='reverse bit order (used with rotate)')
    parser.add_argument('--droplast', action='store_true',
                        help='leave off last byte (for fonts where the last byte is always 0x00)')
    parser.add_argument('-N', '--name', metavar='NAME', help='wrap the bytes in a C array called NAME')
    parser.add_argument('-p', '--preview', metavar='PNG', help='save a preview image of the converted glyphs')
    parser.add_argument('-d', '--display', nargs='?', const=DEFAULT_ADDRESS, type=i2c_address, metavar='A',
                        help=f'show converted font on SSD1306 compatible display using I2C bus {I2C_BUS}, '
                             f'hexadecimal address A (default {DEFAULT_ADDRESS:X})')
    parser.add_argument('-u', '--updown', action='store_true', help='display orientation is upside down')
    parser.add_argument('--debug', action='store_true', help='log debugging information')
    return parser


def show_on_display(table, args):
    from .display import preview
    from .terminal import raw_mode, getch

    with open_panel(I2C_BUS, args.display, args.updown) as panel:
        with raw_mode() as stream:
            preview(table, panel, lambda: getch(stream), title=os.path.basename(args.bdf_file))


def main(argv=None):
    args = build_parser().parse_args(argv)
    loglevel = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(stream=sys.stderr, format='%(levelname)s: %(message)s', level=loglevel, force=True)

    gmin, gmax = FULL_RANGE if args.all else args.subset
    options = TransformOptions(
        native=args.native, ascender=args.ascender,
        rotate=args.rotate, flip=args.flip, droplast=args.droplast)

    try:
        header, table = convert(args.bdf_file, gmin, gmax, options)
    except (ConversionError, OSError) as e:
        logging.error("Unable to convert '%s': %s", args.bdf_file, e)
        return -1

    sys.stdout.write(render(
        table, header, source=os.path.basename(args.bdf_file),
        header_mode=args.header, verbose=args.verbose, line=args.line, name=args.name))
    sys.stdout.flush()

    if args.preview:
        from .sheet import build_preview
        build_preview(table, args.preview)

    if args.display is not None:
        try:
            show_on_display(table, args)
        except TransportUnavailable as e:
            logging.error('%s', e)
            return -1
        except ValueError as e:
            logging.error('Unable to preview: %s', e)
            return -1
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
