"""
Layer tree reconstruction.

Layer records are stored bottom-most first, with groups delimited by
pseudo-layers: the record that opens a group carries the group name and sits
*above* the group's members, and the record named
:py:data:`~psd_layers.constants.GROUP_CLOSE_SENTINEL` sits below them.
Walking the records top-most first therefore meets each opening record before
the members and the closing record after them, so a single pass with a stack
of pending group names is enough to name every drawable layer by its full
path.
"""

import logging
from typing import Iterable, Iterator

from psd_layers.api.layers import Layer
from psd_layers.constants import GROUP_CLOSE_SENTINEL
from psd_layers.exceptions import InvalidGroupStructure
from psd_layers.psd.layer_and_mask import LayerRecord

logger = logging.getLogger(__name__)


class GroupStack:
    """Stack of the names of the currently open groups."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def push(self, name: str) -> None:
        self._names.append(name)

    def pop(self, layer_index: int) -> str:
        if not self._names:
            raise InvalidGroupStructure(layer_index)
        return self._names.pop()

    @property
    def path(self) -> list[str]:
        """Open group names, outermost first."""
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)


def build_layers(
    layer_records: Iterable[LayerRecord], width: int, height: int
) -> list[tuple[int, Layer]]:
    """
    Name the drawable records and allocate their canvas-sized layers.

    :param layer_records: records in storage order, bottom-most first.
    :param width: canvas width.
    :param height: canvas height.
    :return: list of ``(index, layer)`` pairs, top-most layer first, where
        ``index`` is the storage index of the record the layer comes from.
    """
    stack = GroupStack()
    result = []
    for index, record in reversed(list(enumerate(layer_records))):
        if record.is_group:
            if record.name == GROUP_CLOSE_SENTINEL:
                name = stack.pop(index)
                logger.debug("  closed group %r at layer %d" % (name, index))
            else:
                stack.push(record.name)
                logger.debug("  opened group %r at layer %d" % (record.name, index))
            continue

        layer = Layer(stack.path + [record.name], width, height, bbox=record.bbox)
        result.append((index, layer))

    if len(stack):
        logger.debug("%d group(s) left open: %r" % (len(stack), stack.path))
    return result
