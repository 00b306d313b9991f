import logging

from asciiramp.config import DimensionMode, FitViewportHeight, FitViewportWidth, Manual
from asciiramp.errors import InvalidDimensionsError, MissingViewportError

logger = logging.getLogger(__name__)

# Rows left free below the picture for the shell prompt
CHROME_ROWS = 4


def resolve_dimensions(
    image_size: tuple[int, int],
    mode: DimensionMode,
    viewport: tuple[int, int] | None = None,
) -> tuple[int, int]:
    """Compute the (width, height) of the resampled grid.

    Each grid cell is rendered as two characters side by side, because a
    terminal cell is roughly twice as tall as it is wide. Horizontal extents
    given in characters are therefore halved, heights are not.

    ``viewport`` is the terminal's (columns, rows) and is only consulted by
    the automatic modes.
    """
    img_width, img_height = image_size
    if img_width < 1 or img_height < 1:
        raise InvalidDimensionsError(f"Source image has no area: {img_width}x{img_height}")

    if isinstance(mode, Manual):
        if mode.width < 1 or mode.height < 1:
            raise InvalidDimensionsError(f"Width and height must be positive, got {mode.width}x{mode.height}")
        width = max(1, mode.width // 2)
        height = mode.height
    elif isinstance(mode, (FitViewportHeight, FitViewportWidth)):
        if viewport is None:
            raise MissingViewportError("Terminal size is unavailable; give an explicit width and height")
        cols, rows = viewport
        if isinstance(mode, FitViewportHeight):
            # rows * (img_width / img_height), floored without float error
            width = rows * img_width // img_height
            height = max(1, rows - CHROME_ROWS)
        else:
            width = cols // 2 - 1
            # (cols / 2) / (img_width / img_height)
            height = cols * img_height // (2 * img_width)
    else:
        raise TypeError(f"Unknown dimension mode: {mode!r}")

    if width < 1 or height < 1:
        raise InvalidDimensionsError(f"Resolved grid is empty: {width}x{height}")

    logger.debug("Resolved %dx%d image to %dx%d cells via %s", img_width, img_height, width, height, mode)
    return width, height
