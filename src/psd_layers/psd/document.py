"""
PSD document structure.

This module provides the top-level :py:class:`PSD` class that represents the
decoded structure of a PSD file. It is the low-level entry point; for the
layer list with path names and composited pixels, use
:py:class:`~psd_layers.api.psd_image.PSDDocument`.

The PSD file format consists of five sections, read in order:

1. **File Header** (:py:class:`~psd_layers.psd.header.FileHeader`):
   signature, version, dimensions, color mode, bit depth
2. **Color Mode Data**: length-prefixed, opaque to this package and skipped
3. **Image Resources**: length-prefixed, opaque to this package and skipped
4. **Layer and Mask Information**
   (:py:class:`~psd_layers.psd.layer_and_mask.LayerAndMaskInformation`):
   layer records and decoded channel data
5. **Image Data**: the merged composite, never read
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_layers.psd.base import BaseElement
from psd_layers.psd.cursor import ByteCursor
from psd_layers.psd.header import FileHeader
from psd_layers.psd.layer_and_mask import LayerAndMaskInformation

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PSD")


@define(repr=False)
class PSD(BaseElement):
    """
    Low-level PSD file structure that follows the `file format`_.

    .. _file format: https://www.adobe.com/devnet-apps/photoshop/fileformatashtml/

    Example::

        from psd_layers.psd import PSD

        with open(input_file, 'rb') as f:
            psd = PSD.frombytes(f.read())

    .. py:attribute:: header

        See :py:class:`.FileHeader`.

    .. py:attribute:: layer_and_mask_information

        See :py:class:`.LayerAndMaskInformation`.
    """

    header: FileHeader = field(factory=FileHeader)
    layer_and_mask_information: LayerAndMaskInformation = field(
        factory=LayerAndMaskInformation
    )

    @classmethod
    def read(
        cls: type[T], cursor: ByteCursor, encoding: str = "macroman", **kwargs: Any
    ) -> T:
        header = FileHeader.read(cursor)
        logger.debug("read %s" % header)
        length = cursor.skip_length_block()
        logger.debug("skipped color mode data, len=%d" % length)
        length = cursor.skip_length_block()
        logger.debug("skipped image resources, len=%d" % length)
        return cls(header, LayerAndMaskInformation.read(cursor, encoding))
