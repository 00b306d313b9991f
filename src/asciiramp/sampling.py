import math

import numpy as np
from PIL import Image

from asciiramp.errors import ResampleError

RESAMPLE_FILTER = Image.Resampling.BICUBIC
# Bicubic kernel reaches two source pixels either side when not downscaling
FILTER_RADIUS = 2


def filter_margin(source: int, target: int) -> int:
    """Pixels of mirrored border needed so the filter never reads past the padding."""
    scale = max(source / target, 1.0)
    return math.ceil(FILTER_RADIUS * scale) + 1


def mirror_tile(arr: np.ndarray, margin_x: int, margin_y: int) -> np.ndarray:
    """Extend an (h, w, 3) array by reflecting it across every edge.

    Margins wider than the image keep reflecting, so the source is tiled with
    alternating flipped copies in all directions.
    """
    return np.pad(arr, ((margin_y, margin_y), (margin_x, margin_x), (0, 0)), mode="symmetric")


def to_rgb_array(image: Image.Image) -> np.ndarray:
    """Return an (h, w, 3) uint8 array, scaling high bit-depth modes down to 8 bits.

    Integer modes are taken as 16-bit samples, float mode as 0.0-1.0 intensities.
    """
    if image.mode == "I" or image.mode.startswith("I;16"):
        wide = np.clip(np.asarray(image).astype(np.int64), 0, 65535)
        # round(value / 257)
        grey = ((wide * 2 + 257) // 514).astype(np.uint8)
    elif image.mode == "F":
        grey = np.round(np.clip(np.asarray(image), 0.0, 1.0) * 255).astype(np.uint8)
    else:
        with image.convert("RGB") as rgb:
            return np.asarray(rgb)
    return np.repeat(grey[:, :, np.newaxis], 3, axis=2)


def resample_grayscale(image: Image.Image, width: int, height: int) -> np.ndarray:
    """Resample an image to a (height, width) uint8 grid of average RGB brightness."""
    if width < 1 or height < 1:
        raise ResampleError(f"Cannot resample to an empty grid: {width}x{height}")

    try:
        src = to_rgb_array(image)
        src_height, src_width = src.shape[:2]
        margin_x = filter_margin(src_width, width)
        margin_y = filter_margin(src_height, height)

        with Image.fromarray(mirror_tile(src, margin_x, margin_y)) as tiled:
            box = (margin_x, margin_y, margin_x + src_width, margin_y + src_height)
            with tiled.resize((width, height), RESAMPLE_FILTER, box=box) as resized:
                cells = np.asarray(resized, dtype=np.uint16)
    except (ValueError, OSError, MemoryError) as exc:
        raise ResampleError(f"Resampling to {width}x{height} failed: {exc}") from exc

    # round(sum / 3) with halves rounding up
    total = cells.sum(axis=2)
    return ((total * 2 + 3) // 6).astype(np.uint8)
