"""
Composite module for packing layer channels.

This subpackage turns the decoded channels of a layer record into one
canvas-sized buffer of packed pixels. Each channel is shifted into its slot
of a 32-bit value (red 0, green 8, blue 16, alpha 24) and OR-combined, so no
blending between layers takes place.

Channel kinds without a slot (the user masks) are skipped and reported as
:py:class:`~psd_layers.exceptions.DecodeWarning` records.

Key functions:

- :py:func:`composite_layer`: Pack all supported channels of one layer
- :py:func:`composite_channel`: Pack a single channel
"""

from .composite import composite_channel, composite_layer

__all__ = ["composite_channel", "composite_layer"]
