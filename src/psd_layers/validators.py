"""
Validation functions for attr.
"""

from typing import Any, Container

import attr
from attrs import define, fields_dict

from psd_layers.exceptions import UnsupportedFormat

__all__ = ["in_", "check"]


@define(repr=False, frozen=True, slots=True)
class _InValidator:
    options: Container[Any]

    def __call__(self, inst: Any, attribute: "attr.Attribute[Any]", value: Any) -> None:
        try:
            valid = value in self.options
        except TypeError:
            valid = False

        if not valid:
            raise UnsupportedFormat(attribute.name, value)

    def __repr__(self) -> str:
        return "<in_ validator with options {options!r}>".format(options=self.options)


def in_(options: Container[Any]) -> _InValidator:
    """
    A validator that raises a :exc:`~psd_layers.exceptions.UnsupportedFormat`
    if the initializer is called with a value that does not belong in the
    options provided. The check is performed using ``value in options``.
    """
    return _InValidator(options)


def check(cls: type, name: str, value: Any) -> Any:
    """
    Run the validator of attribute `name` of the attrs class `cls` on `value`
    before the instance exists. Readers use this to fail on a field as soon
    as it is read, in file order.
    """
    attribute = fields_dict(cls)[name]
    if attribute.validator is not None:
        attribute.validator(None, attribute, value)
    return value
