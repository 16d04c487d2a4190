# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node model: entries of a DynamicProperties and value helpers."""

from __future__ import annotations

from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import DynamicProperties

SCALAR_TYPES = (str, bool, int, float)


class NodeKind(Enum):
    """Kind of a value stored in the tree."""

    SCALAR = 'scalar'
    OBJECT = 'object'
    ARRAY = 'array'


def kind_of(value: Any) -> NodeKind | None:
    """Return the NodeKind of a value, or None if it cannot be stored."""
    from .store import DynamicList, DynamicProperties

    if isinstance(value, DynamicProperties):
        return NodeKind.OBJECT
    if isinstance(value, DynamicList):
        return NodeKind.ARRAY
    if isinstance(value, SCALAR_TYPES):
        return NodeKind.SCALAR
    return None


def scalar_equal(old: Any, new: Any) -> bool:
    """True if two values are the same scalar of the same type.

    Containers never compare equal here, so assigning a container is
    always a change. ``1``, ``1.0`` and ``True`` are different values.
    """
    if not isinstance(old, SCALAR_TYPES):
        return False
    return type(old) is type(new) and old == new


def deep_equal(left: Any, right: Any) -> bool:
    """Value equality of two trees, order-sensitive.

    Scalars compare with scalar_equal, objects must have the same keys in
    the same order, arrays the same elements in the same order. Plain
    dicts and lists are compared the same way.
    """
    from .store import DynamicList, DynamicProperties

    if isinstance(left, (DynamicProperties, dict)):
        if not isinstance(right, (DynamicProperties, dict)):
            return False
        left_items = list(left.items())
        right_items = list(right.items())
        if [k for k, _ in left_items] != [k for k, _ in right_items]:
            return False
        return all(
            deep_equal(lv, rv)
            for (_, lv), (_, rv) in zip(left_items, right_items)
        )
    if isinstance(left, (DynamicList, list, tuple)):
        if not isinstance(right, (DynamicList, list, tuple)):
            return False
        if len(left) != len(right):
            return False
        return all(deep_equal(lv, rv) for lv, rv in zip(left, right))
    return scalar_equal(left, right)


class PropertyNode:
    """An entry of a DynamicProperties.

    Each node has:
    - label: The key of the entry within its parent
    - value: A scalar, a DynamicProperties or a DynamicList
    - parent: The DynamicProperties holding this entry

    Example:
        >>> node = PropertyNode('name', 'Alice')
        >>> node.label
        'name'
        >>> node.kind
        <NodeKind.SCALAR: 'scalar'>
    """

    __slots__ = ('label', 'value', 'parent')

    def __init__(
        self,
        label: str,
        value: Any = None,
        parent: DynamicProperties | None = None,
    ) -> None:
        """Initialize a PropertyNode.

        Args:
            label: The key of the entry.
            value: The entry's value.
            parent: The DynamicProperties containing this entry.
        """
        self.label = label
        self.value = value
        self.parent = parent

    def __repr__(self) -> str:
        kind = self.kind
        if kind is NodeKind.OBJECT:
            value_repr = f"DynamicProperties({len(self.value)})"
        elif kind is NodeKind.ARRAY:
            value_repr = f"DynamicList({len(self.value)})"
        else:
            value_repr = repr(self.value)
        return f"PropertyNode({self.label!r}, value={value_repr})"

    @property
    def kind(self) -> NodeKind | None:
        """The NodeKind of the value."""
        return kind_of(self.value)

    @property
    def is_branch(self) -> bool:
        """True if the value is a container (object or array)."""
        return self.kind in (NodeKind.OBJECT, NodeKind.ARRAY)

    @property
    def is_leaf(self) -> bool:
        """True if the value is a scalar."""
        return self.kind is NodeKind.SCALAR

    @property
    def _(self) -> DynamicProperties:
        """Return parent DynamicProperties for navigation/chaining."""
        if self.parent is None:
            raise ValueError("Node has no parent")
        return self.parent
