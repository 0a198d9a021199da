"""
psd-layers: Python package for decoding layered Adobe Photoshop PSD files.

This package decodes 8-bit RGB PSD documents into a canvas size and a flat,
ordered list of layers. Each layer is named by its full group path and holds
a canvas-sized buffer of packed pixels.

Basic usage::

    from psd_layers import PSDDocument

    # Open and decode a PSD file
    psd = PSDDocument.open('example.psd')

    # Iterate through layers, top-most first
    for layer in psd:
        print("/".join(layer.path))

    # Export a layer to PNG
    psd[0].topil().save('output.png')

Architecture:

- :py:mod:`psd_layers.psd`: Low-level binary structure parsing
- :py:mod:`psd_layers.api`: High-level user-facing API (primary interface)
- :py:mod:`psd_layers.composite`: Packing of channels into canvas buffers
- :py:mod:`psd_layers.compression`: Channel codecs (raw, RLE)

Failures are raised as :py:class:`~psd_layers.exceptions.PSDError`
subclasses.
"""

from typing import Any

from psd_layers.api.layers import Layer
from psd_layers.api.psd_image import PSDDocument
from psd_layers.exceptions import (
    DecodeWarning,
    InvalidGroupStructure,
    PSDError,
    TruncatedInput,
    UnsupportedFormat,
)
from psd_layers.version import __version__


def decode(data: bytes, **kwargs: Any) -> PSDDocument:
    """Decode a PSD document held in memory. See :py:meth:`PSDDocument.frombytes`."""
    return PSDDocument.frombytes(data, **kwargs)


__all__ = [
    "DecodeWarning",
    "InvalidGroupStructure",
    "Layer",
    "PSDDocument",
    "PSDError",
    "TruncatedInput",
    "UnsupportedFormat",
    "decode",
    "__version__",
]
