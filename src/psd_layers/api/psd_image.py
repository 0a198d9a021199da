"""
PSD document module.

This module provides the main :py:class:`PSDDocument` class, which is the
primary entry point for users of psd-layers. It decodes a layered RGB
document into its canvas size and a flat, ordered list of
:py:class:`~psd_layers.api.layers.Layer` objects, each named by its full
group path and holding a canvas-sized packed-pixel buffer.

Example usage::

    from psd_layers import PSDDocument

    psd = PSDDocument.open('document.psd')

    print(f"Size: {psd.width}x{psd.height}")
    for layer in psd:
        print("/".join(layer.path))

    psd[0].topil().save('top-layer.png')

Decoding is all-or-nothing: any structural problem raises one of the
:py:class:`~psd_layers.exceptions.PSDError` subclasses. Channels that cannot
be placed in a packed pixel are skipped and listed in
:py:attr:`PSDDocument.warnings`.
"""

import logging
import os
from typing import Any, BinaryIO, Iterator, Optional, Sequence, Union

from psd_layers.api.layers import Layer
from psd_layers.api.tree import build_layers
from psd_layers.composite import composite_layer
from psd_layers.exceptions import DecodeWarning
from psd_layers.psd.document import PSD

logger = logging.getLogger(__name__)


class PSDDocument:
    """
    Decoded layered document.

    The low-level records are only used while the document is built and are
    not kept.

    Example::

        from psd_layers import PSDDocument

        with open('example.psd', 'rb') as f:
            psd = PSDDocument.frombytes(f.read())

        for layer in psd:
            image = layer.topil()
    """

    def __init__(self, data: PSD):
        if not isinstance(data, PSD):
            raise TypeError(f"Expected PSD instance, got {type(data).__name__}")
        self._width = data.header.width
        self._height = data.header.height
        self._channels = data.header.channels
        self._layers: list[Layer] = []
        self._warnings: list[DecodeWarning] = []
        self._init(data)

    @classmethod
    def frombytes(cls, data: bytes, **kwargs: Any) -> "PSDDocument":
        """
        Decode a PSD document held in memory.

        :param data: the whole file content.
        :param encoding: charset encoding of the pascal string layer names,
            default 'macroman'.
        :return: A :py:class:`~psd_layers.api.psd_image.PSDDocument` object.
        """
        return cls(PSD.frombytes(data, **kwargs))

    @classmethod
    def open(
        cls, fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any
    ) -> "PSDDocument":
        """
        Open a PSD document.

        :param fp: filename or file-like object.
        :param encoding: charset encoding of the pascal string layer names,
            default 'macroman'.
        :return: A :py:class:`~psd_layers.api.psd_image.PSDDocument` object.
        """
        if isinstance(fp, (str, bytes, os.PathLike)):
            with open(fp, "rb") as f:
                data = f.read()
        else:
            data = fp.read()
        return cls.frombytes(data, **kwargs)

    @property
    def width(self) -> int:
        """Canvas width."""
        return self._width

    @property
    def height(self) -> int:
        """Canvas height."""
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self._width, self._height

    @property
    def channels(self) -> int:
        """Number of channels declared in the file header."""
        return self._channels

    @property
    def layers(self) -> list[Layer]:
        """Output layers, top-most first."""
        return self._layers

    @property
    def warnings(self) -> list[DecodeWarning]:
        """Non-fatal problems found while decoding."""
        return self._warnings

    def find(self, path: Union[str, Sequence[str]]) -> Optional[Layer]:
        """
        Find the first layer with the given path.

        :param path: list of path segments, or a ``"/"``-joined string.
        :return: :py:class:`~psd_layers.api.layers.Layer` or `None`.
        """
        if isinstance(path, str):
            path = path.split("/")
        path = list(path)
        for layer in self._layers:
            if layer.path == path:
                return layer
        return None

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    def __repr__(self) -> str:
        return "%s(size=%dx%d, layers=%d)" % (
            self.__class__.__name__,
            self._width,
            self._height,
            len(self._layers),
        )

    def _init(self, data: PSD) -> None:
        records = data.layer_and_mask_information.layer_info.layer_records
        channel_image_data = data.layer_and_mask_information.layer_info.channel_image_data
        for index, layer in build_layers(records, self._width, self._height):
            self._warnings.extend(
                composite_layer(
                    layer.pixels,
                    self._width,
                    self._height,
                    records[index],
                    channel_image_data[index],
                    layer_index=index,
                )
            )
            self._layers.append(layer)
        logger.debug(
            "decoded %d layers, %d warnings" % (len(self._layers), len(self._warnings))
        )
