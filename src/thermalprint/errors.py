"""Exceptions raised by thermalprint."""


class ConversionError(Exception):
    """Exception raised when a print node tree cannot be converted."""

    pass


class ImageDecodeError(ConversionError):
    """Exception raised when an image source cannot be loaded or decoded.

    Images cannot be printed partially, so this error aborts the whole
    conversion.
    """

    pass
