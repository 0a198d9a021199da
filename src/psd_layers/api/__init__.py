"""
High-level API for decoded documents.

- :py:class:`~psd_layers.api.psd_image.PSDDocument`: canvas plus output layers
- :py:class:`~psd_layers.api.layers.Layer`: one path-named, canvas-sized layer
- :py:mod:`~psd_layers.api.tree`: group path reconstruction
"""

from .layers import Layer
from .psd_image import PSDDocument

__all__ = ["Layer", "PSDDocument"]
