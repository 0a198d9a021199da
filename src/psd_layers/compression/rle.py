"""
Pure Python RLE (Run-Length Encoding) codec implementation.

PackBits is a simple byte-oriented run-length compression scheme used in PSD
files for channel data compression.

Algorithm overview:

The PackBits algorithm uses a single header byte to indicate:

- Values 0-127: Copy the next (n+1) literal bytes
- Values 129-255: Repeat the next byte (257-n) times
- Value 128: No-op

Encoding example::

    Input:  [A, A, A, B, C, C, C, C]
    Output: [254, A, 0, B, 253, C]
            (repeat A 3x, copy B 1x, repeat C 4x)

Functions:

- :py:func:`decode`: Decompress RLE-encoded data from a cursor
- :py:func:`encode`: Compress raw bytes using RLE encoding
"""

import logging

from psd_layers.psd.cursor import ByteCursor

logger = logging.getLogger(__name__)

MAX_RUN = 128


def decode(cursor: ByteCursor, size: int) -> bytes:
    """decode(cursor, size) -> bytes

    Apple PackBits RLE decoder. Reads runs until `size` bytes are decoded.
    A run crossing that boundary is consumed whole, and the excess output is
    dropped; bytes after the run are left unread.
    """
    result = bytearray()

    while len(result) < size:
        header = cursor.read_uint8()
        if header < 128:
            result += cursor.read(header + 1)
        elif header > 128:
            value = cursor.read_uint8()
            result += bytes((value,)) * (257 - header)

    if len(result) > size:
        logger.debug("RLE run exceeds channel size by %d bytes" % (len(result) - size))
        del result[size:]
    return bytes(result)


def encode(data: bytes) -> bytes:
    """encode(data) -> bytes

    Apple PackBits RLE encoder. Repetitions of three or more bytes become
    repeat runs; everything else is stored in literal runs.
    """
    length = len(data)
    result = bytearray()
    literal_start = i = 0

    def flush_literal(end: int) -> None:
        for start in range(literal_start, end, MAX_RUN):
            chunk = data[start : min(start + MAX_RUN, end)]
            result.append(len(chunk) - 1)
            result.extend(chunk)

    while i < length:
        j = i + 1
        while j < length and j - i < MAX_RUN and data[j] == data[i]:
            j += 1
        if j - i >= 3:
            flush_literal(i)
            result.extend((257 - (j - i), data[i]))
            literal_start = j
        i = j if j - i >= 3 else i + 1

    flush_literal(length)
    return bytes(result)
