"""
Bounds-checked sequential reader over an immutable byte buffer.

Every structure in :py:mod:`psd_layers.psd` reads through a
:py:class:`ByteCursor`. All multi-byte integers in the format are big-endian,
so every format string passed to :py:meth:`ByteCursor.read_fmt` is implicitly
prefixed with ``>``.

Example::

    from psd_layers.psd.cursor import ByteCursor

    cursor = ByteCursor(b"\\x00\\x01\\x00\\x00\\x00\\x02")
    cursor.read_uint16()  # 1
    cursor.read_uint32()  # 2
"""

import logging
import struct
from typing import Any, Union

from psd_layers.exceptions import TruncatedInput

logger = logging.getLogger(__name__)


def pad(number: int, divisor: int) -> int:
    """Round `number` up to a multiple of `divisor`."""
    if number % divisor:
        number = (number // divisor + 1) * divisor
    return number


class ByteCursor:
    """
    Sequential reader with a single advancing position.

    A read or skip that would move the position past the end of the buffer,
    or backwards, raises :py:class:`~psd_layers.exceptions.TruncatedInput`
    and leaves the position unchanged.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: Union[bytes, bytearray, memoryview], offset: int = 0):
        self._data = data if isinstance(data, bytes) else bytes(data)
        self._pos = 0
        self.seek(offset)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return "%s(pos=%d, size=%d)" % (self.__class__.__name__, self._pos, len(self))

    @property
    def size(self) -> int:
        """Size of the underlying buffer."""
        return len(self._data)

    @property
    def remaining(self) -> int:
        """Number of bytes left to read."""
        return len(self._data) - self._pos

    def tell(self) -> int:
        return self._pos

    def seek(self, position: int) -> int:
        """Move to an absolute position within the buffer."""
        if position < 0 or position > len(self._data):
            raise TruncatedInput(self._pos, position - self._pos, len(self._data))
        self._pos = position
        return position

    def _advance(self, width: int) -> int:
        start = self._pos
        end = start + width
        # A negative width is the wraparound case: the end lands before start.
        if width < 0 or end < start or end > len(self._data):
            raise TruncatedInput(start, width, len(self._data))
        self._pos = end
        return start

    def read(self, width: int) -> bytes:
        """Read exactly `width` bytes."""
        start = self._advance(width)
        return self._data[start : start + width]

    def skip(self, width: int) -> None:
        """Advance by `width` bytes without returning them."""
        self._advance(width)

    def read_fmt(self, fmt: str) -> tuple[Any, ...]:
        """
        Reads data according to the big-endian struct format ``fmt``.
        """
        fmt = ">" + fmt
        start = self._advance(struct.calcsize(fmt))
        return struct.unpack_from(fmt, self._data, start)

    def read_uint8(self) -> int:
        return self._data[self._advance(1)]

    def read_uint16(self) -> int:
        return self.read_fmt("H")[0]

    def read_uint32(self) -> int:
        return self.read_fmt("I")[0]

    def read_int16(self) -> int:
        return self.read_fmt("h")[0]

    def read_int32(self) -> int:
        return self.read_fmt("i")[0]

    def skip_length_block(self, fmt: str = "I") -> int:
        """
        Skip a block of data with a length marker at the beginning.

        :return: length of the skipped block, excluding the marker.
        """
        length = self.read_fmt(fmt)[0]
        self.skip(length)
        return length

    def read_pascal_string(self, encoding: str = "macroman", padding: int = 1) -> str:
        """
        Read a length-prefixed string. The length byte and the string body
        together occupy a multiple of `padding` bytes.
        """
        length = self.read_uint8()
        data = self.read(length)
        # -1 accounts for the length byte
        self.skip(pad(length + 1, padding) - 1 - length)
        return data.decode(encoding, "replace")
