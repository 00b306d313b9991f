import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from PIL import Image

from asciiramp.charsets import get_ramp
from asciiramp.config import Config
from asciiramp.dimensions import resolve_dimensions
from asciiramp.errors import AsciiRampError, DecodeError, ImageNotFoundError, UnsupportedFormatError
from asciiramp.quantize import assemble, quantize_grid
from asciiramp.sampling import resample_grayscale
from asciiramp.terminal import get_viewport_size

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".bmp", ".gif", ".jpeg", ".jpg", ".png", ".tiff"})


def convert(image: Image.Image, config: Config, viewport: tuple[int, int] | None = None) -> str:
    """Render an open image as ASCII art.

    The output has one newline-terminated line per grid row, each line two
    characters per grid column. ``viewport`` is only needed when ``config``
    sizes the output from the terminal.
    """
    width, height = resolve_dimensions(image.size, config.mode, viewport)
    grid = resample_grayscale(image, width, height)
    rows = quantize_grid(grid, get_ramp(config.tier, config.invert))
    return assemble(rows)


def validate_path(path: str | Path) -> Path:
    """Check that a path names an existing file with a supported extension."""
    path = Path(path)
    if not path.is_file():
        raise ImageNotFoundError("File not found", path)
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(f"Unsupported image format {path.suffix or '(none)'!r}", path)
    return path


@contextmanager
def open_image(path: str | Path) -> Iterator[Image.Image]:
    """Open and decode an image, closing it however the caller's block exits."""
    try:
        image = Image.open(path)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode image: {exc}", path) from exc
    try:
        try:
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Cannot decode image: {exc}", path) from exc
        yield image
    finally:
        image.close()


def image_to_ascii(path: str | Path, config: Config, viewport: tuple[int, int] | None = None) -> str:
    """Validate, open and convert one image file.

    When the configuration needs terminal geometry and none is given, the
    size of the terminal attached to stdout is used.
    """
    path = validate_path(path)
    if viewport is None and config.needs_viewport:
        viewport = get_viewport_size()

    with open_image(path) as image:
        logger.debug("Converting %s (%dx%d, %s)", path, image.width, image.height, image.mode)
        try:
            return convert(image, config, viewport)
        except AsciiRampError as exc:
            if exc.path is None:
                exc.path = path
            raise
