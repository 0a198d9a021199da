"""
Various constants for psd_layers
"""

from enum import Enum, IntEnum

#: File signature of the header section.
SIGNATURE = b"8BPS"

#: Signature that precedes the blend mode key of every layer record.
LAYER_SIGNATURE = b"8BIM"

#: Name of the pseudo-layer that closes a layer group.
GROUP_CLOSE_SENTINEL = "</Layer group>"


class ColorMode(IntEnum):
    """
    Color mode.
    """

    BITMAP = 0
    GRAYSCALE = 1
    INDEXED = 2
    RGB = 3
    CMYK = 4
    MULTICHANNEL = 7
    DUOTONE = 8
    LAB = 9


class ChannelID(IntEnum):
    """
    Channel types.
    """

    CHANNEL_0 = 0  # Red
    CHANNEL_1 = 1  # Green
    CHANNEL_2 = 2  # Blue
    TRANSPARENCY_MASK = -1
    USER_LAYER_MASK = -2
    REAL_USER_LAYER_MASK = -3

    @property
    def shift(self) -> int:
        """Bit position of the channel within a packed pixel."""
        if self == ChannelID.TRANSPARENCY_MASK:
            return 24
        if self >= 0:
            return 8 * self.value
        raise ValueError("%s has no packed pixel slot" % self.name)


#: Channels that contribute to the packed pixel value.
PACKED_CHANNELS = (
    ChannelID.CHANNEL_0,
    ChannelID.CHANNEL_1,
    ChannelID.CHANNEL_2,
    ChannelID.TRANSPARENCY_MASK,
)


class Compression(IntEnum):
    """
    Compression modes.

    Compression. 0 = Raw Data, 1 = RLE compressed, 2 = ZIP without prediction,
    3 = ZIP with prediction. Only the first two are decoded.
    """

    RAW = 0
    RLE = 1
    ZIP = 2
    ZIP_WITH_PREDICTION = 3


class Clipping(IntEnum):
    """Clipping."""

    BASE = 0
    NON_BASE = 1


class LayerFlag(IntEnum):
    """
    Bits of the layer record flags byte.
    """

    TRANSPARENCY_PROTECTED = 1
    HIDDEN = 2
    OBSOLETE = 4
    PHOTOSHOP_V5_LATER = 8
    PIXEL_DATA_IRRELEVANT = 16


class BlendMode(Enum):
    """
    Blend modes.
    """

    PASS_THROUGH = b"pass"
    NORMAL = b"norm"
    DISSOLVE = b"diss"
    DARKEN = b"dark"
    MULTIPLY = b"mul "
    COLOR_BURN = b"idiv"
    LINEAR_BURN = b"lbrn"
    DARKER_COLOR = b"dkCl"
    LIGHTEN = b"lite"
    SCREEN = b"scrn"
    COLOR_DODGE = b"div "
    LINEAR_DODGE = b"lddg"
    LIGHTER_COLOR = b"lgCl"
    OVERLAY = b"over"
    SOFT_LIGHT = b"sLit"
    HARD_LIGHT = b"hLit"
    VIVID_LIGHT = b"vLit"
    LINEAR_LIGHT = b"lLit"
    PIN_LIGHT = b"pLit"
    HARD_MIX = b"hMix"
    DIFFERENCE = b"diff"
    EXCLUSION = b"smud"
    SUBTRACT = b"fsub"
    DIVIDE = b"fdiv"
    HUE = b"hue "
    SATURATION = b"sat "
    COLOR = b"colr"
    LUMINOSITY = b"lum "
