"""
Builders for synthetic PSD byte streams.

No binary fixtures are shipped; every test document is assembled here with
:py:mod:`struct`, following the on-disk layout the decoder reads.
"""

import logging
import struct
from typing import Optional, Sequence

from attrs import define, field

from psd_layers.compression import encode_rle
from psd_layers.constants import GROUP_CLOSE_SENTINEL, Compression

logging.basicConfig(level=logging.DEBUG)

#: Flags byte of a drawable layer.
LAYER_FLAGS = 0x08
#: Flags byte of a group or divider pseudo-layer.
GROUP_FLAGS = 0x18


def pascal_string(name: str, padding: int = 4, encoding: str = "macroman") -> bytes:
    data = name.encode(encoding)
    raw = struct.pack(">B", len(data)) + data
    return raw + b"\x00" * (-len(raw) % padding)


def raw_channel(data: bytes) -> bytes:
    """Channel image data with the RAW compression tag."""
    return struct.pack(">H", Compression.RAW) + data


def rle_channel(data: bytes, width: int, height: int) -> bytes:
    """Channel image data with the RLE compression tag and jump table."""
    return struct.pack(">H", Compression.RLE) + encode_rle(data, width, height)


@define
class FakeLayer:
    """One layer record plus its channel image data."""

    name: str
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0)  # top, left, bottom, right
    channels: list[tuple[int, bytes]] = field(factory=list)  # (kind, image data)
    flags: int = LAYER_FLAGS
    signature: bytes = b"8BIM"
    blend_mode: bytes = b"norm"
    mask_data: bytes = b""
    blending_ranges: bytes = b""
    extra: bytes = b""
    lengths: Optional[Sequence[int]] = None

    def record(self, encoding: str = "macroman") -> bytes:
        top, left, bottom, right = self.bbox
        out = struct.pack(">4iH", top, left, bottom, right, len(self.channels))
        lengths = self.lengths or [len(data) for _, data in self.channels]
        for (kind, _), length in zip(self.channels, lengths):
            out += struct.pack(">hI", kind, length)
        out += self.signature + self.blend_mode
        out += struct.pack(">BBBx", 255, 0, self.flags)
        extra_data = (
            struct.pack(">I", len(self.mask_data))
            + self.mask_data
            + struct.pack(">I", len(self.blending_ranges))
            + self.blending_ranges
            + pascal_string(self.name, encoding=encoding)
            + self.extra
        )
        return out + struct.pack(">I", len(extra_data)) + extra_data

    def image_data(self) -> bytes:
        return b"".join(data for _, data in self.channels)


def pixel_layer(
    name: str,
    bbox: tuple[int, int, int, int],
    channels: dict[int, bytes],
    compression: Compression = Compression.RAW,
) -> FakeLayer:
    """Layer whose channels are given as decoded bytes per kind."""
    top, left, bottom, right = bbox
    encoded = []
    for kind, data in channels.items():
        if compression == Compression.RLE:
            encoded.append((kind, rle_channel(data, right - left, bottom - top)))
        else:
            encoded.append((kind, raw_channel(data)))
    return FakeLayer(name, bbox, encoded)


def group_open(name: str) -> FakeLayer:
    return FakeLayer(name, flags=GROUP_FLAGS, channels=_empty_channels())


def group_close() -> FakeLayer:
    return FakeLayer(GROUP_CLOSE_SENTINEL, flags=GROUP_FLAGS, channels=_empty_channels())


def _empty_channels() -> list[tuple[int, bytes]]:
    return [(kind, raw_channel(b"")) for kind in (-1, 0, 1, 2)]


def header(
    width: int,
    height: int,
    channels: int = 3,
    depth: int = 8,
    color_mode: int = 3,
    version: int = 1,
    signature: bytes = b"8BPS",
) -> bytes:
    return signature + struct.pack(
        ">H6xHIIHH", version, channels, height, width, depth, color_mode
    )


def layer_info(layers: Sequence[FakeLayer], layer_count: Optional[int] = None) -> bytes:
    if layer_count is None:
        layer_count = len(layers)
    body = struct.pack(">h", layer_count)
    body += b"".join(layer.record() for layer in layers)
    body += b"".join(layer.image_data() for layer in layers)
    return struct.pack(">I", len(body)) + body


def make_psd(
    width: int,
    height: int,
    layers: Sequence[FakeLayer] = (),
    channels: int = 3,
    layer_count: Optional[int] = None,
    color_mode_data: bytes = b"",
    image_resources: bytes = b"",
    trailer: bytes = b"",
    **kwargs,
) -> bytes:
    """
    Assemble a complete document. `trailer` is appended inside the layer and
    mask section, after the layer info, where the global layer mask info
    would live.
    """
    out = header(width, height, channels=channels, **kwargs)
    out += struct.pack(">I", len(color_mode_data)) + color_mode_data
    out += struct.pack(">I", len(image_resources)) + image_resources
    section = layer_info(layers, layer_count) + trailer if layers else b""
    out += struct.pack(">I", len(section)) + section
    return out


def unpack_pixel(value: int) -> tuple[int, int, int, int]:
    """Split a packed pixel into (red, green, blue, alpha)."""
    return (value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF, value >> 24)
