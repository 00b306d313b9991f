import numpy as np

from asciiramp.errors import QuantizeError


def quantize_grid(grid: np.ndarray, ramp: str) -> list[str]:
    """Map a grayscale grid to rows of doubled ramp characters.

    Each value falls into one of ``len(ramp)`` equal buckets of the 0-255
    range. Every character is emitted twice so a cell comes out roughly square.
    """
    if not ramp:
        raise QuantizeError("Glyph ramp is empty")
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise QuantizeError(f"Expected a 2-D grid, got shape {grid.shape}")
    if grid.size and (grid.min() < 0 or grid.max() > 255):
        raise QuantizeError("Grid values must lie within 0-255")

    n = len(ramp)
    # floor(value / (256 / n)), kept below n
    indices = np.minimum(grid.astype(np.int64) * n // 256, n - 1)
    pairs = np.array([char * 2 for char in ramp])
    return ["".join(pairs[row]) for row in indices]


def assemble(rows: list[str]) -> str:
    """Join rendered rows into one block, each row newline-terminated."""
    return "".join(f"{row}\n" for row in rows)
