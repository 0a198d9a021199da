"""
Base data structures intended for inheritance.

All the data objects in this subpackage inherit from the base classes here.
That means, all the data structures in the :py:mod:`psd_layers.psd`
subpackage implement :py:meth:`~psd_layers.psd.base.BaseElement.read` for
decoding from a :py:class:`~psd_layers.psd.cursor.ByteCursor`.

Objects that inherit from the :py:class:`~psd_layers.psd.base.BaseElement`
typically get attrs_ decoration to have data fields.

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import logging
from typing import Any, Iterator, TypeVar

from attrs import define, field

from psd_layers.psd.cursor import ByteCursor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base element of various PSD file structs. All the data objects in
    :py:mod:`psd_layers.psd` subpackage inherit from this class.

    .. py:classmethod:: read(cls, cursor)

        Read the element from a :py:class:`~psd_layers.psd.cursor.ByteCursor`.

    .. py:classmethod:: frombytes(self, data, *args, **kwargs)

        Read the element from bytes.
    """

    @classmethod
    def read(cls: type[T], cursor: ByteCursor, **kwargs: Any) -> T:
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: bytes, *args: Any, **kwargs: Any) -> T:
        return cls.read(ByteCursor(data), *args, **kwargs)


@define(repr=False)
class ListElement(BaseElement):
    """
    List-like element that has `items` list.
    """

    _items: list = field(factory=list, converter=list)

    def __len__(self) -> int:
        return self._items.__len__()

    def __iter__(self) -> Iterator[Any]:
        return self._items.__iter__()

    def __getitem__(self, key: Any) -> Any:
        return self._items.__getitem__(key)

    def __repr__(self) -> str:
        return self._items.__repr__()
