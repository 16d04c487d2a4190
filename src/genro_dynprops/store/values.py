# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Value adoption: turning assigned values into tree nodes.

Every value entering a DynamicProperties or a DynamicList passes through
adopt(), which converts plain dicts and lists into containers, enforces
single ownership and refuses cycles.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

from ..node import SCALAR_TYPES
from ..options import JsonOptions

if TYPE_CHECKING:
    from .core import DynamicProperties
    from .sequence import DynamicList

    Container = DynamicProperties | DynamicList


def is_container(value: Any) -> bool:
    """True if value is a DynamicProperties or a DynamicList."""
    from .core import DynamicProperties
    from .sequence import DynamicList

    return isinstance(value, (DynamicProperties, DynamicList))


def _is_self_or_ancestor(candidate: Any, node: Container) -> bool:
    current: Any = node
    while current is not None:
        if current is candidate:
            return True
        current = current._owner
    return False


def adopt(owner: Container, value: Any, options: JsonOptions) -> Any:
    """Prepare a value for storage inside owner.

    Args:
        owner: The container that will hold the value.
        value: A scalar, a container, or plain dict/list data.
        options: Options used when converting plain data.

    Returns:
        The value to store. Plain data is converted, a container owned
        elsewhere is deep-copied, a free container is taken over.

    Raises:
        ValueError: If value is owner itself or one of its ancestors.
        TypeError: If value cannot be stored.
    """
    from .core import DynamicProperties
    from .sequence import DynamicList

    if isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, (DynamicProperties, DynamicList)):
        if _is_self_or_ancestor(value, owner):
            raise ValueError("Cannot store a container inside its own subtree")
        if value._owner is not None:
            value = value.copy()
        value._owner = owner
        return value
    if isinstance(value, Mapping):
        converted: Any = DynamicProperties(value, options=options)
    elif isinstance(value, (list, tuple)):
        converted = DynamicList(value, options=options)
    else:
        raise TypeError(
            f"Cannot store a value of type {type(value).__name__}"
        )
    converted._owner = owner
    return converted


def release(value: Any) -> None:
    """Detach a removed value from its owner."""
    if is_container(value):
        value._owner = None


class OwnedMixin:
    """Navigation for containers through their ``_owner`` link."""

    __slots__ = ()

    _owner: Any

    @property
    def parent(self) -> Container | None:
        """The container holding this node, or None if detached/root."""
        return self._owner

    @property
    def root(self) -> Container:
        """Get the root container of this hierarchy."""
        current: Any = self
        while current._owner is not None:
            current = current._owner
        return current

    @property
    def depth(self) -> int:
        """Get the depth of this node in the hierarchy (root=0)."""
        depth = 0
        current = self._owner
        while current is not None:
            depth += 1
            current = current._owner
        return depth
