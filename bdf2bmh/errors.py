"""Exceptions raised by the conversion pipeline and the preview hardware."""


class ConversionError(Exception):
    """Base class for everything that stops a conversion."""


class MalformedSource(ConversionError):
    """BDF content that can not be converted."""

    def __init__(self, message, lineno=None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class EmptySelection(ConversionError):
    """The requested codepoint range matched no glyphs."""

    def __init__(self, gmin, gmax):
        self.gmin = gmin
        self.gmax = gmax
        super().__init__(f"no glyphs in range {gmin}-{gmax}")


class TransportUnavailable(Exception):
    """The I2C bus for the display preview could not be opened."""

    def __init__(self, bus, address, reason=None):
        self.bus = bus
        self.address = address
        message = f"Unable to open i2c bus {bus} (address 0x{address:02X})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
