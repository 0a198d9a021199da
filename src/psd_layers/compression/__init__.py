"""
Image compression utilities for PSD channel data.

This subpackage decodes the pixel data of a single layer channel straight
from a :py:class:`~psd_layers.psd.cursor.ByteCursor`. The cursor is left
positioned after the bytes the decoder consumed.

Supported compression methods:

- **RAW** (``Compression.RAW``): Uncompressed raw pixel data
- **RLE** (``Compression.RLE``): Apple PackBits run-length encoding

ZIP compression is not supported and is rejected by the layer parser before
reaching this module.

Key functions:

- :py:func:`decompress`: Decompress pixel data to raw bytes
- :py:func:`encode_rle`: RLE encoding for a single channel, jump table included

Example usage::

    from psd_layers.compression import decompress
    from psd_layers.constants import Compression
    from psd_layers.psd.cursor import ByteCursor

    raw_pixels = decompress(
        ByteCursor(compressed),
        compression=Compression.RLE,
        width=100,
        height=100,
    )
"""

import logging

from psd_layers.compression import rle
from psd_layers.constants import Compression
from psd_layers.psd.cursor import ByteCursor

logger = logging.getLogger(__name__)


def decompress(
    cursor: ByteCursor, compression: Compression, width: int, height: int
) -> bytes:
    """Decompress one channel of 8-bit pixel data.

    :param cursor: cursor positioned right after the compression tag.
    :param compression: compression type,
            see :py:class:`~psd_layers.constants.Compression`.
    :param width: width.
    :param height: height.
    :return: decompressed data bytes, exactly ``width * height`` long.
    """
    length = width * height

    if compression == Compression.RAW:
        result = cursor.read(length)
    elif compression == Compression.RLE:
        result = decode_rle(cursor, width, height)
    else:
        raise ValueError("Unsupported compression: %r" % compression)

    assert len(result) == length, "len=%d, expected=%d" % (len(result), length)
    return result


def decode_rle(cursor: ByteCursor, width: int, height: int) -> bytes:
    # The per-row byte counts are not needed; rows are decoded back to back.
    cursor.skip(2 * height)
    return rle.decode(cursor, width * height)


def encode_rle(data: bytes, width: int, height: int) -> bytes:
    """Encode a channel as a row byte-count table followed by PackBits rows."""
    rows = [rle.encode(data[y * width : (y + 1) * width]) for y in range(height)]
    counts = b"".join(len(row).to_bytes(2, "big") for row in rows)
    return counts + b"".join(rows)
