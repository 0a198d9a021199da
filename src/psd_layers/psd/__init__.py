"""
Low-level API that translates binary data to Python structure.

All the data structure in this subpackage inherits from one of the object
defined in :py:mod:`psd_layers.psd.base` module.
"""

# Main PSD document class
from .document import PSD as PSD

# Layer and mask structures
from .layer_and_mask import (
    ChannelImageData as ChannelImageData,
    LayerInfo as LayerInfo,
    LayerRecord as LayerRecord,
    LayerRecords as LayerRecords,
)

__all__ = [
    "PSD",
    "LayerInfo",
    "LayerRecord",
    "LayerRecords",
    "ChannelImageData",
]
