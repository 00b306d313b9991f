import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from asciiramp.config import Config
from asciiramp.converter import SUPPORTED_EXTENSIONS, image_to_ascii
from asciiramp.errors import AsciiRampError, ImageNotFoundError
from asciiramp.terminal import get_viewport_size

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    path: Path
    text: str | None = None
    error: AsciiRampError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def list_images(directory: str | Path) -> list[Path]:
    """Supported image files directly inside a directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ImageNotFoundError("Directory not found", directory)
    images = []
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            logger.debug("Skipping %s: not a supported image", path)
            continue
        images.append(path)
    return images


def _convert_one(path: Path, config: Config, viewport: tuple[int, int] | None) -> BatchItem:
    try:
        return BatchItem(path, text=image_to_ascii(path, config, viewport))
    except AsciiRampError as exc:
        logger.info("Skipping %s", exc)
        return BatchItem(path, error=exc)


def convert_directory(
    directory: str | Path,
    config: Config,
    viewport: tuple[int, int] | None = None,
    jobs: int = 1,
) -> Iterator[BatchItem]:
    """Convert every image in a directory, yielding results in name order.

    A failing file produces an item carrying its error and does not stop the
    rest of the batch. With ``jobs`` above 1 files are converted on a thread
    pool, each with its own image handle.
    """
    paths = list_images(directory)
    if viewport is None and config.needs_viewport:
        viewport = get_viewport_size()

    if jobs <= 1:
        for path in paths:
            yield _convert_one(path, config, viewport)
        return

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        yield from pool.map(lambda path: _convert_one(path, config, viewport), paths)
