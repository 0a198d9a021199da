"""
Output layer of a decoded document.

Every :py:class:`Layer` spans the whole canvas: its packed-pixel buffer has
exactly ``width * height`` entries, zero wherever the source layer drew
nothing. Within the bounding box of the source layer the rows are stored in
reverse order: the first row of layer data sits on buffer row
``bottom - 1``. :py:meth:`Layer.numpy` undoes this for image output.
"""

import logging
from typing import Optional, Sequence

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class Layer:
    """
    Canvas-sized pixel layer with a hierarchical path name.

    .. py:attribute:: path

        Group names from outermost to innermost, followed by the layer's own
        name.

    .. py:attribute:: pixels

        Flat :py:class:`numpy.ndarray` of ``uint32`` packed pixels,
        ``red | green << 8 | blue << 16 | alpha << 24``, in the row order
        described in the module docstring.

    .. py:attribute:: bbox

        (left, top, right, bottom) of the source layer record, defaulting
        to the whole canvas.
    """

    def __init__(
        self,
        path: Sequence[str],
        width: int,
        height: int,
        pixels: Optional[np.ndarray] = None,
        bbox: Optional[tuple[int, int, int, int]] = None,
    ):
        self._path = list(path)
        self._width = width
        self._height = height
        self._bbox = bbox if bbox is not None else (0, 0, width, height)
        if pixels is None:
            pixels = np.zeros(width * height, dtype=np.uint32)
        elif pixels.shape != (width * height,):
            raise ValueError(
                "Expected %d pixels, got shape %r" % (width * height, pixels.shape)
            )
        self.pixels = pixels

    @property
    def path(self) -> list[str]:
        """Path name segments, outermost group first."""
        return self._path

    @property
    def name(self) -> str:
        """Layer's own name, the last path segment."""
        return self._path[-1] if self._path else ""

    @property
    def width(self) -> int:
        """Width of the canvas."""
        return self._width

    @property
    def height(self) -> int:
        """Height of the canvas."""
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self._width, self._height

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple of the source layer."""
        return self._bbox

    def numpy(self) -> np.ndarray:
        """
        Get the layer as a ``(height, width, 4)`` ``uint8`` array in RGBA
        channel order, top row first.
        """
        channels = self.pixels.astype("<u4").view(np.uint8)
        channels = channels.reshape((self._height, self._width, 4))
        result = np.zeros_like(channels)

        _, top, _, bottom = self._bbox
        rows = np.arange(max(top, 0), min(bottom, self._height))
        # Image row y is stored on buffer row top + bottom - 1 - y. Rows that
        # fell outside the canvas there were never stored and stay empty.
        sources = top + bottom - 1 - rows
        keep = (sources >= 0) & (sources < self._height)
        result[rows[keep]] = channels[sources[keep]]
        return result

    def topil(self) -> Image.Image:
        """
        Get the layer as an RGBA :py:class:`PIL.Image.Image`.
        """
        return Image.fromarray(np.ascontiguousarray(self.numpy()))

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d)" % (
            self.__class__.__name__,
            "/".join(self._path),
            self._width,
            self._height,
        )
