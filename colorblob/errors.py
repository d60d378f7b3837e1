"""Exceptions raised for malformed caller input."""


class ColorBlobError(Exception):
    """Base class for color blob detection errors."""


class InvalidFormat(ColorBlobError, ValueError):
    """A color or frame has the wrong number of channels (or wrong layout)."""


class EmptyFrame(ColorBlobError, ValueError):
    """A frame with a zero dimension was passed for processing."""
