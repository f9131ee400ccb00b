"""In-memory pixel images with a server-style row layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

__all__ = [
    "ImageType",
    "Image",
    "new_image",
    "ZPIXMAP",
    "LSB_FIRST",
    "MSB_FIRST",
]

ZPIXMAP = 2
LSB_FIRST = 0
MSB_FIRST = 1

_BITMAP_PAD = 32
_ROW_SLACK = 32
_BPP_FOR_DEPTH = {8: 8, 15: 16, 16: 16, 24: 32, 32: 32}


class ImageType(IntEnum):
    """How an image's pixels are kept."""

    XIMAGE = 1
    SHM = 2
    SHM_PIXMAP = 3


@dataclass(eq=False)
class Image:
    """A zero-filled image of ``width`` x ``height`` pixels."""

    width: int
    height: int
    depth: int = 24
    endian: int = LSB_FIRST
    type: ImageType = ImageType.XIMAGE
    format: int = ZPIXMAP
    bpp: int = field(init=False)
    size_line: int = field(init=False)
    data: bytearray = field(init=False, repr=False)
    destroyed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if self.depth not in _BPP_FOR_DEPTH:
            raise ValueError(f"unsupported depth {self.depth}")
        if self.endian not in (LSB_FIRST, MSB_FIRST):
            raise ValueError(f"endian must be 0 or 1, got {self.endian}")
        self.bpp = _BPP_FOR_DEPTH[self.depth]
        padded_bits = -(-self.width * self.bpp // _BITMAP_PAD) * _BITMAP_PAD
        self.size_line = padded_bits // 8
        self.data = bytearray((self.width + _ROW_SLACK) * self.height * 4)

    def __enter__(self) -> Image:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self.destroyed:
            self.destroy()

    def _check_alive(self) -> None:
        if self.destroyed:
            raise ValueError("image has been destroyed")

    def _offset(self, x: int, y: int) -> int:
        self._check_alive()
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * (self.bpp // 8)

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian == MSB_FIRST else "little"

    def data_addr(self) -> tuple[bytearray, int, int, int]:
        """Return the pixel buffer, bits per pixel, bytes per row and endianness."""
        self._check_alive()
        return self.data, self.bpp, self.size_line, self.endian

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping the bits that fit a pixel."""
        offset = self._offset(x, y)
        opp = self.bpp // 8
        value = color & ((1 << self.bpp) - 1)
        self.data[offset:offset + opp] = value.to_bytes(opp, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        offset = self._offset(x, y)
        opp = self.bpp // 8
        return int.from_bytes(self.data[offset:offset + opp], self._byteorder)

    def destroy(self) -> None:
        """Release the pixel buffer; the image cannot be used afterwards."""
        self._check_alive()
        self.data = bytearray()
        self.destroyed = True


def new_image(width: int, height: int, depth: int = 24) -> Image:
    """Create a zero-filled image in the pixel layout of ``depth``."""
    return Image(width, height, depth)