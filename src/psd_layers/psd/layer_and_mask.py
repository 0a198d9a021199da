"""
Layer and mask data structures.

This module implements the low-level binary structures for PSD layers,
corresponding to the "Layer and Mask Information" section of PSD files.

Key classes:

- :py:class:`LayerAndMaskInformation`: Top-level container for all layer data
- :py:class:`LayerInfo`: Contains layer records and channel image data
- :py:class:`LayerRecords`: List of individual layer records
- :py:class:`LayerRecord`: Single layer metadata (name, bounds, blend mode, etc.)
- :py:class:`ChannelInfo`: Channel metadata within a layer record
- :py:class:`ChannelImageData`: Decoded pixel data for all channels
- :py:class:`ChannelData`: Single channel's decoded pixel data

Layers are stored bottom-most first as a flat list with implicit hierarchy.
Group boundaries are marked by pseudo-layers whose flags carry both the
``PHOTOSHOP_V5_LATER`` and ``PIXEL_DATA_IRRELEVANT`` bits: the layer that
opens a group carries the group name, and the layer that closes it is named
``</Layer group>``. The high-level API (:py:mod:`psd_layers.api`) turns this
into path names.

Each layer record contains:

1. **Metadata**: Rectangle bounds, blend mode, opacity, flags
2. **Channel info**: List of channels (R, G, B, A, masks) with byte lengths
3. **Extra data**: mask data and blending ranges (skipped), the layer name,
   and additional tagged blocks (skipped)

The channel image data section follows all layer records. Each channel is
decoded here, so :py:attr:`ChannelData.data` always holds exactly
``width * height`` bytes of the owning layer.

Example of reading layer metadata::

    from psd_layers.psd import PSD

    with open('file.psd', 'rb') as f:
        psd = PSD.frombytes(f.read())

    layer_info = psd.layer_and_mask_information.layer_info
    for record in layer_info.layer_records:
        print(f"Layer: {record.name}")
        print(f"  Bounds: {record.top}, {record.left}, {record.bottom}, {record.right}")
        print(f"  Channels: {len(record.channel_info)}")
"""

import logging
from typing import Any, Optional, TypeVar

from attrs import define, field

from psd_layers.compression import decompress
from psd_layers.constants import (
    LAYER_SIGNATURE,
    BlendMode,
    Clipping,
    Compression,
    LayerFlag,
)
from psd_layers.exceptions import UnsupportedFormat
from psd_layers.psd.base import BaseElement, ListElement
from psd_layers.psd.cursor import ByteCursor

logger = logging.getLogger(__name__)

T_LayerAndMaskInformation = TypeVar(
    "T_LayerAndMaskInformation", bound="LayerAndMaskInformation"
)
T_LayerInfo = TypeVar("T_LayerInfo", bound="LayerInfo")
T_ChannelInfo = TypeVar("T_ChannelInfo", bound="ChannelInfo")
T_LayerFlags = TypeVar("T_LayerFlags", bound="LayerFlags")
T_LayerRecords = TypeVar("T_LayerRecords", bound="LayerRecords")
T_LayerRecord = TypeVar("T_LayerRecord", bound="LayerRecord")
T_ChannelImageData = TypeVar("T_ChannelImageData", bound="ChannelImageData")
T_ChannelDataList = TypeVar("T_ChannelDataList", bound="ChannelDataList")
T_ChannelData = TypeVar("T_ChannelData", bound="ChannelData")


@define(repr=False)
class LayerAndMaskInformation(BaseElement):
    """
    Layer and mask information section.

    The global layer mask and the global tagged blocks that may follow the
    layer info are not interpreted; the cursor resumes at the section end.

    .. py:attribute:: layer_info

        See :py:class:`.LayerInfo`.
    """

    layer_info: "LayerInfo" = field(factory=lambda: LayerInfo())

    @classmethod
    def read(
        cls: type[T_LayerAndMaskInformation],
        cursor: ByteCursor,
        encoding: str = "macroman",
        **kwargs: Any,
    ) -> T_LayerAndMaskInformation:
        start_pos = cursor.tell()
        length = cursor.read_uint32()
        end_pos = cursor.tell() + length
        logger.debug(
            "reading layer and mask info, len=%d, offset=%d" % (length, start_pos)
        )
        if length == 0:
            return cls()

        self = cls(LayerInfo.read(cursor, encoding))
        if cursor.tell() > end_pos:
            logger.warning(
                "LayerAndMaskInformation is broken: current pos=%d, expected=%d"
                % (cursor.tell(), end_pos)
            )
        elif end_pos <= cursor.size:
            cursor.seek(end_pos)
        else:
            logger.debug(
                "layer and mask info ends past the buffer: end=%d, size=%d"
                % (end_pos, cursor.size)
            )
        return self


@define(repr=False)
class LayerInfo(BaseElement):
    """
    High-level organization of the layer information.

    .. py:attribute:: layer_count

        Layer count. If it is a negative number, its absolute value is the
        number of layers and the first alpha channel contains the transparency
        data for the merged result.

    .. py:attribute:: layer_records

        Information about each layer. See :py:class:`.LayerRecords`.

    .. py:attribute:: channel_image_data

        Channel image data. See :py:class:`.ChannelImageData`.
    """

    layer_count: int = 0
    layer_records: "LayerRecords" = field(factory=lambda: LayerRecords())
    channel_image_data: "ChannelImageData" = field(factory=lambda: ChannelImageData())

    @classmethod
    def read(
        cls: type[T_LayerInfo],
        cursor: ByteCursor,
        encoding: str = "macroman",
        **kwargs: Any,
    ) -> T_LayerInfo:
        length = cursor.read_uint32()
        logger.debug("reading layer info, len=%d" % length)
        if length == 0:
            return cls()

        start_pos = cursor.tell()
        layer_count = cursor.read_int16()
        layer_records = LayerRecords.read(cursor, layer_count, encoding)
        logger.debug("  read layer records, len=%d" % (cursor.tell() - start_pos))
        channel_image_data = ChannelImageData.read(cursor, layer_records)
        if cursor.tell() - start_pos > length:
            logger.debug(
                "  layer info overruns its length: read=%d, expected=%d"
                % (cursor.tell() - start_pos, length)
            )
        return cls(
            layer_count=layer_count,
            layer_records=layer_records,
            channel_image_data=channel_image_data,
        )

    @property
    def has_merged_alpha(self) -> bool:
        """Whether the merged result carries a transparency channel."""
        return self.layer_count < 0


@define(repr=False)
class ChannelInfo(BaseElement):
    """
    Channel information.

    .. py:attribute:: id

        Channel ID: 0 = red, 1 = green, 2 = blue; -1 = transparency mask; -2 =
        user supplied layer mask, -3 real user supplied layer mask (when both
        a user mask and a vector mask are present). See
        :py:class:`~psd_layers.constants.ChannelID`. Kept as a plain integer
        so that unknown kinds survive decoding.

    .. py:attribute:: length

        Length of the corresponding channel data, including the 2-byte
        compression tag.
    """

    id: int = 0
    length: int = 0

    @classmethod
    def read(cls: type[T_ChannelInfo], cursor: ByteCursor, **kwargs: Any) -> T_ChannelInfo:
        values = cursor.read_fmt("hI")
        return cls(id=values[0], length=values[1])


@define(repr=False)
class LayerFlags(BaseElement):
    """
    Layer flags. Only the bits that tell groups apart from drawable layers
    are kept.

    .. py:attribute:: photoshop_v5_later
    .. py:attribute:: pixel_data_irrelevant
    """

    photoshop_v5_later: bool = True
    pixel_data_irrelevant: bool = False

    @classmethod
    def read(cls: type[T_LayerFlags], cursor: ByteCursor, **kwargs: Any) -> T_LayerFlags:
        return cls.from_int(cursor.read_uint8())

    @classmethod
    def from_int(cls: type[T_LayerFlags], flags: int) -> T_LayerFlags:
        return cls(
            bool(flags & LayerFlag.PHOTOSHOP_V5_LATER),
            bool(flags & LayerFlag.PIXEL_DATA_IRRELEVANT),
        )

    @property
    def is_group(self) -> bool:
        """Pixel data irrelevant to the document: a group or divider record."""
        return self.photoshop_v5_later and self.pixel_data_irrelevant


class LayerRecords(ListElement):
    """
    List of layer records. See :py:class:`.LayerRecord`.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_LayerRecords],
        cursor: ByteCursor,
        layer_count: int,
        encoding: str = "macroman",
        **kwargs: Any,
    ) -> T_LayerRecords:
        items = []
        for index in range(abs(layer_count)):
            items.append(LayerRecord.read(cursor, encoding, index=index))
        return cls(items)  # type: ignore[arg-type]


@define(repr=False)
class LayerRecord(BaseElement):
    """
    Layer record.

    .. py:attribute:: top

        Top position.

    .. py:attribute:: left

        Left position.

    .. py:attribute:: bottom

        Bottom position.

    .. py:attribute:: right

        Right position.

    .. py:attribute:: channel_info

        List of :py:class:`.ChannelInfo`.

    .. py:attribute:: signature

        Blend mode signature ``b'8BIM'``.

    .. py:attribute:: blend_mode_key

        Raw 4-byte blend mode key. See :py:attr:`blend_mode`.

    .. py:attribute:: opacity

        Opacity, 0 = transparent, 255 = opaque.

    .. py:attribute:: clipping

        Clipping, 0 = base, 1 = non-base.

    .. py:attribute:: flags

        See :py:class:`.LayerFlags`.

    .. py:attribute:: name

        Layer name.
    """

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0
    channel_info: list[ChannelInfo] = field(factory=list)
    signature: bytes = field(default=LAYER_SIGNATURE, repr=False)
    blend_mode_key: bytes = BlendMode.NORMAL.value
    opacity: int = 255
    clipping: int = Clipping.BASE
    flags: LayerFlags = field(factory=LayerFlags)
    name: str = ""

    @classmethod
    def read(
        cls: type[T_LayerRecord],
        cursor: ByteCursor,
        encoding: str = "macroman",
        index: int = 0,
        **kwargs: Any,
    ) -> T_LayerRecord:
        start_pos = cursor.tell()
        top, left, bottom, right, num_channels = cursor.read_fmt("4iH")
        channel_info = [ChannelInfo.read(cursor) for _ in range(num_channels)]

        signature = cursor.read(4)
        if signature != LAYER_SIGNATURE:
            raise UnsupportedFormat("layer signature", signature, index)
        blend_mode_key, opacity, clipping = cursor.read_fmt("4sBB")
        flags = LayerFlags.read(cursor)
        cursor.skip(1)  # Filler.

        extra_length = cursor.read_uint32()
        extra_end = cursor.tell() + extra_length
        cursor.skip_length_block()  # Layer mask data.
        cursor.skip_length_block()  # Layer blending ranges.
        name = cursor.read_pascal_string(encoding, padding=4)
        # Additional layer information, e.g. adjustments and effects.
        cursor.skip(extra_end - cursor.tell())
        logger.debug("  read layer record, len=%d" % (cursor.tell() - start_pos))

        return cls(
            top=top,
            left=left,
            bottom=bottom,
            right=right,
            channel_info=channel_info,
            signature=signature,
            blend_mode_key=blend_mode_key,
            opacity=opacity,
            clipping=clipping,
            flags=flags,
            name=name,
        )

    @property
    def blend_mode(self) -> Optional[BlendMode]:
        """Blend mode, or `None` for an unknown key."""
        try:
            return BlendMode(self.blend_mode_key)
        except ValueError:
            return None

    @property
    def is_group(self) -> bool:
        """Whether this record is a group or divider pseudo-layer."""
        return self.flags.is_group

    @property
    def width(self) -> int:
        """Width of the layer."""
        return max(self.right - self.left, 0)

    @property
    def height(self) -> int:
        """Height of the layer."""
        return max(self.bottom - self.top, 0)

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple."""
        return self.left, self.top, self.right, self.bottom


class ChannelImageData(ListElement):
    """
    List of channel data list.

    This size of this list corresponds to the size of
    :py:class:`LayerRecords`. Each item corresponds to the channels of each
    layer.

    See :py:class:`.ChannelDataList`.
    """

    @classmethod
    def read(
        cls: type[T_ChannelImageData],
        cursor: ByteCursor,
        layer_records: Optional["LayerRecords"] = None,
        **kwargs: Any,
    ) -> T_ChannelImageData:
        start_pos = cursor.tell()
        items = []
        if layer_records:
            for index, layer in enumerate(layer_records):
                items.append(ChannelDataList.read(cursor, layer, index=index))
        logger.debug("  read channel image data, len=%d" % (cursor.tell() - start_pos))
        return cls(items)  # type: ignore[arg-type]


class ChannelDataList(ListElement):
    """
    List of channel image data, corresponding to each color or alpha.

    See :py:class:`.ChannelData`.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_ChannelDataList],
        cursor: ByteCursor,
        layer: LayerRecord,
        index: int = 0,
        **kwargs: Any,
    ) -> T_ChannelDataList:
        items = []
        for c in layer.channel_info:
            items.append(
                ChannelData.read(
                    cursor, layer.width, layer.height, length=c.length, index=index
                )
            )
        return cls(items)  # type: ignore[arg-type]


@define(repr=False)
class ChannelData(BaseElement):
    """
    Channel data.

    .. py:attribute:: compression

        Compression type. See :py:class:`~psd_layers.constants.Compression`.

    .. py:attribute:: data

        Decoded bytes, exactly the layer's bounding-box area long.
    """

    compression: Compression = Compression.RAW
    data: bytes = b""

    @classmethod
    def read(
        cls: type[T_ChannelData],
        cursor: ByteCursor,
        width: int,
        height: int,
        length: int = 0,
        index: int = 0,
        **kwargs: Any,
    ) -> T_ChannelData:
        start_pos = cursor.tell()
        value = cursor.read_uint16()
        if value not in (Compression.RAW, Compression.RLE):
            raise UnsupportedFormat("compression", value, index)
        compression = Compression(value)
        data = decompress(cursor, compression, width, height)

        if length >= 2:
            end_pos = start_pos + length
            if cursor.tell() > end_pos:
                logger.warning(
                    "Channel data of layer %d overruns its length: read=%d, expected=%d"
                    % (index, cursor.tell() - start_pos, length)
                )
            elif end_pos <= cursor.size:
                cursor.seek(end_pos)
            else:
                logger.debug(
                    "Channel data of layer %d ends past the buffer: end=%d, size=%d"
                    % (index, end_pos, cursor.size)
                )
        return cls(compression=compression, data=data)
