"""
File header structure.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_layers.constants import SIGNATURE, ColorMode
from psd_layers.psd.base import BaseElement
from psd_layers.psd.cursor import ByteCursor
from psd_layers.validators import check, in_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FileHeader")


@define(repr=True)
class FileHeader(BaseElement):
    """
    Header section of the PSD file.

    Only 8-bit RGB documents of version 1 are accepted; any other value fails
    with :py:class:`~psd_layers.exceptions.UnsupportedFormat` naming the
    field.

    Example::

        from psd_layers.psd.header import FileHeader

        header = FileHeader(channels=3, height=359, width=400)

    .. py:attribute:: signature

        Signature: always equal to ``b'8BPS'``.

    .. py:attribute:: version

        Version number. Always 1.

    .. py:attribute:: channels

        The number of channels in the image, including any user-defined alpha
        channel.

    .. py:attribute:: height

        The height of the image in pixels.

    .. py:attribute:: width

        The width of the image in pixels.

    .. py:attribute:: depth

        The number of bits per channel. Always 8.

    .. py:attribute:: color_mode

        The color mode of the file. Always :py:attr:`ColorMode.RGB`.
    """

    signature: bytes = field(default=SIGNATURE, repr=False, validator=in_((SIGNATURE,)))
    version: int = field(default=1, validator=in_((1,)))
    channels: int = 3
    height: int = 64
    width: int = 64
    depth: int = field(default=8, validator=in_((8,)))
    color_mode: int = field(default=ColorMode.RGB, validator=in_((ColorMode.RGB,)))

    @classmethod
    def read(cls: type[T], cursor: ByteCursor, **kwargs: Any) -> T:
        signature = check(cls, "signature", cursor.read(4))
        version = check(cls, "version", cursor.read_uint16())
        cursor.skip(6)  # Reserved.
        channels, height, width = cursor.read_fmt("HII")
        depth = check(cls, "depth", cursor.read_uint16())
        color_mode = check(cls, "color_mode", cursor.read_uint16())
        return cls(
            signature=signature,
            version=version,
            channels=channels,
            height=height,
            width=width,
            depth=depth,
            color_mode=ColorMode(color_mode),
        )
