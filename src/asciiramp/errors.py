from pathlib import Path


class AsciiRampError(Exception):
    """Base class for every failure of a single conversion."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ImageNotFoundError(AsciiRampError, FileNotFoundError):
    pass


class UnsupportedFormatError(AsciiRampError, ValueError):
    pass


class DecodeError(AsciiRampError):
    pass


class MissingViewportError(AsciiRampError):
    pass


class InvalidDimensionsError(AsciiRampError, ValueError):
    pass


class ResampleError(AsciiRampError):
    pass


class QuantizeError(AsciiRampError, ValueError):
    pass


class ConfigurationError(AsciiRampError, ValueError):
    pass
