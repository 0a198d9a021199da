"""
Failures and diagnostics raised or collected while decoding.

Fatal problems abort the decode with one of the :py:class:`PSDError`
subclasses below; no partial document is ever returned. Problems that only
affect a single channel are collected as :py:class:`DecodeWarning` records on
the resulting document instead.
"""

from typing import Any, Optional

from attrs import define

#: Warning kind for channels that have no packed pixel slot.
UNSUPPORTED_CHANNEL_KIND = "UnsupportedChannelKind"


class PSDError(Exception):
    """Base class of every decode failure."""


class TruncatedInput(PSDError, EOFError):
    """
    A read or skip would run past the end of the buffer.

    .. py:attribute:: offset

        Cursor position at the failed operation.

    .. py:attribute:: width

        Number of bytes the operation asked for.

    .. py:attribute:: size

        Total size of the buffer.
    """

    def __init__(self, offset: int, width: int, size: int):
        self.offset = offset
        self.width = width
        self.size = size
        super().__init__(
            "Truncated PSD: cannot read %d bytes at offset %d (size=%d)"
            % (width, offset, size)
        )


class UnsupportedFormat(PSDError, ValueError):
    """
    A structural field holds a value this decoder does not handle.

    .. py:attribute:: field

        Name of the offending field, e.g. ``"depth"`` or ``"compression"``.

    .. py:attribute:: value

        The value found in the file.

    .. py:attribute:: layer_index

        Index of the layer record in storage order, or `None` for
        document-level fields.
    """

    def __init__(self, field: str, value: Any, layer_index: Optional[int] = None):
        self.field = field
        self.value = value
        self.layer_index = layer_index
        message = "Unsupported %s: %r" % (field, value)
        if layer_index is not None:
            message += " (layer %d)" % layer_index
        super().__init__(message)


class InvalidGroupStructure(PSDError, ValueError):
    """
    A group-closing marker appeared with no open group.

    .. py:attribute:: layer_index

        Index of the closing marker in storage order.
    """

    def __init__(self, layer_index: int):
        self.layer_index = layer_index
        super().__init__("Unmatched group close marker at layer %d" % layer_index)


@define(frozen=True)
class DecodeWarning:
    """
    Non-fatal problem found during decoding.

    .. py:attribute:: kind

        Warning kind, e.g. :py:data:`UNSUPPORTED_CHANNEL_KIND`.

    .. py:attribute:: message

        Human readable description.

    .. py:attribute:: layer_index

        Index of the layer record in storage order.

    .. py:attribute:: channel_id

        Channel kind that triggered the warning.
    """

    kind: str
    message: str
    layer_index: Optional[int] = None
    channel_id: Optional[int] = None
