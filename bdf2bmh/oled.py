"""
bdf2bmh.oled - SSD1306 128x64 OLED on an I2C bus

Frames are Pillow images; each is sent as 8 pages of 128 column bytes,
least significant bit at the top of the page.
"""

import logging
import contextlib

from smbus2 import SMBus

from .errors import TransportUnavailable

I2C_BUS = 1
DEFAULT_ADDRESS = 0x3C
WIDTH = 128
HEIGHT = 64
PAGES = HEIGHT // 8

# control byte prefixes
COMMAND = 0x00
DATA = 0x40
# SMBus block writes carry at most 32 bytes
CHUNK = 32


class SSD1306:

    def __init__(self, bus, address=DEFAULT_ADDRESS, updown=False):
        self.bus = bus
        self.address = address
        self.updown = updown

    def init_sequence(self):
        return [
            0xAE,              # display off
            0xD5, 0x80,        # clock divide
            0xA8, HEIGHT - 1,  # multiplex
            0xD3, 0x00,        # display offset
            0x40,              # start line 0
            0x8D, 0x14,        # charge pump on
            0x20, 0x00,        # horizontal addressing
            0xA0 if self.updown else 0xA1,  # segment remap
            0xC0 if self.updown else 0xC8,  # COM scan direction
            0xDA, 0x12,        # COM pins
            0x81, 0xCF,        # contrast
            0xD9, 0xF1,        # precharge
            0xDB, 0x40,        # VCOMH deselect
            0xA4,              # follow RAM
            0xA6,              # normal, not inverted
            0xAF,              # display on
        ]

    def command(self, *codes):
        self.bus.write_i2c_block_data(self.address, COMMAND, list(codes))

    def data(self, buf):
        for start in range(0, len(buf), CHUNK):
            self.bus.write_i2c_block_data(self.address, DATA, list(buf[start:start + CHUNK]))

    def init(self):
        self.command(*self.init_sequence())
        self.clear()

    def show(self, image):
        """Display a 128x64 image."""
        self.command(0x21, 0, WIDTH - 1, 0x22, 0, PAGES - 1)
        self.data(image_to_pages(image))

    def clear(self):
        self.command(0x21, 0, WIDTH - 1, 0x22, 0, PAGES - 1)
        self.data(bytes(WIDTH * PAGES))


def image_to_pages(image):
    """Pack an image into SSD1306 GDDRAM order."""
    if image.size != (WIDTH, HEIGHT):
        raise ValueError(f"image must be {WIDTH}x{HEIGHT}, got {image.size[0]}x{image.size[1]}")
    pix = image.convert('1').load()
    buf = bytearray(WIDTH * PAGES)
    for page in range(PAGES):
        for x in range(WIDTH):
            byte = 0
            for bit in range(8):
                if pix[x, page * 8 + bit]:
                    byte |= 1 << bit
            buf[page * WIDTH + x] = byte
    return bytes(buf)


@contextlib.contextmanager
def open_panel(bus_index=I2C_BUS, address=DEFAULT_ADDRESS, updown=False):
    """Open the bus and initialize the panel; the bus is closed on exit."""
    try:
        bus = SMBus(bus_index)
    except OSError as e:
        raise TransportUnavailable(bus_index, address, e.strerror or e) from e
    try:
        panel = SSD1306(bus, address, updown)
        try:
            panel.init()
        except OSError as e:
            raise TransportUnavailable(bus_index, address, e.strerror or e) from e
        logging.info('SSD1306 at 0x%02X on i2c bus %d', address, bus_index)
        yield panel
    finally:
        bus.close()
