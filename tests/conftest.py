import struct
import zlib

import pytest
from PIL import Image


def save_image(path, size=(40, 20), colour=(255, 255, 255)):
    """Write a solid RGB image to disk and return its path."""
    Image.new("RGB", size, colour).save(path)
    return path


def _png_chunk(kind, data):
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def save_oversized_png(path, width=100000, height=100000):
    """Write a well-formed PNG header claiming far more pixels than Pillow will decode."""
    header = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )
    return path

def split_image(width=100, height=10):
    """Black left half, white right half."""
    img = Image.new("L", (width, height), 0)
    pixels = img.load()
    for y in range(height):
        for x in range(width // 2, width):
            pixels[x, y] = 255
    return img


@pytest.fixture
def close_spy(monkeypatch):
    """Record every Image.close call."""
    calls = []
    real_close = Image.Image.close

    def close(self):
        calls.append(self)
        real_close(self)

    monkeypatch.setattr(Image.Image, "close", close)
    return calls
