# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DynamicList - The observable Array node of a document tree."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableSequence
from typing import Any, Iterable, Iterator, TYPE_CHECKING

from ..node import deep_equal, scalar_equal
from ..options import DEFAULT_OPTIONS, JsonOptions, ParseMode
from .subscription import CLEAR, DELETE, INSERT, UPDATE, SubscriptionMixin
from .values import OwnedMixin, adopt, is_container, release

if TYPE_CHECKING:
    from .core import DynamicProperties

logger = logging.getLogger(__name__)


class DynamicList(OwnedMixin, SubscriptionMixin, MutableSequence):
    """An observable list of tree values.

    Mutations raise ``item[<index>]`` followed by ``document``; clear()
    raises ``item`` followed by ``document``. None cannot be stored:
    absence has no place in a sequence.

    With ParseMode.STRICT_OBJECTS, only objects are kept when converting
    source data and only objects are accepted by later mutations.

    Example:
        >>> items = DynamicList([{'n': 1}, {'n': 2}])
        >>> items[1].get('n')
        2
        >>> items.get(5) is None
        True
    """

    __slots__ = ('_items', '_owner', '_options', '_subscribers')

    def __init__(
        self,
        source: Iterable[Any] | None = None,
        options: JsonOptions | None = None,
    ) -> None:
        """Initialize a DynamicList.

        Args:
            source: Optional list, tuple or DynamicList (deep copied).
                None elements are skipped.
            options: Conversion options kept for the list's lifetime.
        """
        self._items: list[Any] = []
        self._owner: DynamicProperties | DynamicList | None = None
        self._options = options if options is not None else DEFAULT_OPTIONS
        self._subscribers = {}

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: Iterable[Any]) -> None:
        if not isinstance(source, (DynamicList, list, tuple)):
            raise TypeError(
                f"source must be a list, tuple or DynamicList, not {type(source).__name__}"
            )
        for position, item in enumerate(source):
            if item is None:
                continue
            if self._strict and not _is_object(item):
                logger.debug(
                    "Dropping non-object array element at %d (%s)",
                    position, type(item).__name__,
                )
                continue
            self._items.append(adopt(self, item, self._options))

    @property
    def _strict(self) -> bool:
        return self._options.mode is ParseMode.STRICT_OBJECTS

    def _check_element(self, value: Any) -> None:
        if value is None:
            raise TypeError("DynamicList cannot store None")
        if self._strict and not _is_object(value):
            raise TypeError(
                f"Only objects can be stored in strict mode, not {type(value).__name__}"
            )

    def _position(self, index: int) -> int:
        """Normalize an existing element index, raising IndexError."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"indices must be integers, not {type(index).__name__}")
        size = len(self._items)
        position = index + size if index < 0 else index
        if position < 0 or position >= size:
            raise IndexError("DynamicList index out of range")
        return position

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"DynamicList({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index: int | slice) -> Any:
        """Element at index; a slice returns a plain list of the elements."""
        if isinstance(index, slice):
            return self._items[index]
        return self._items[self._position(index)]

    def __setitem__(self, index: int, value: Any) -> None:
        """Replace an element. An equal scalar is a no-op.

        A container this list already holds is moved, not copied, so
        swaps and reverse() keep element identity.
        """
        if isinstance(index, slice):
            raise TypeError("DynamicList does not support slice assignment")
        position = self._position(index)
        self._check_element(value)
        old_value = self._items[position]
        if old_value is value or scalar_equal(old_value, value):
            return
        if is_container(value) and value._owner is self:
            new_value = value
        else:
            new_value = adopt(self, value, self._options)
        self._items[position] = new_value
        if not any(item is old_value for item in self._items):
            release(old_value)
        self._emit_change(position, UPDATE, old_value, new_value)

    def __delitem__(self, index: int) -> None:
        if isinstance(index, slice):
            raise TypeError("DynamicList does not support slice deletion")
        position = self._position(index)
        old_value = self._items.pop(position)
        if not any(item is old_value for item in self._items):
            release(old_value)
        self._emit_change(position, DELETE, old_value, None)

    # ==================== Core API ====================

    def insert(self, index: int, value: Any) -> None:
        """Insert value before index (list.insert semantics)."""
        self._check_element(value)
        size = len(self._items)
        if index < 0:
            index = max(0, size + index)
        position = min(index, size)
        new_value = adopt(self, value, self._options)
        self._items.insert(position, new_value)
        self._emit_change(position, INSERT, None, new_value)

    def get(self, index: int, default: Any = None) -> Any:
        """Element at index, or default if out of range. Never raises."""
        try:
            return self._items[self._position(index)]
        except (IndexError, TypeError):
            return default

    def clear(self) -> None:
        """Remove all elements, raising one notification if not empty."""
        if not self._items:
            return
        removed = self._items
        self._items = []
        for value in removed:
            release(value)
        self._emit_change(None, CLEAR)

    # ==================== Conversion ====================

    @property
    def options(self) -> JsonOptions:
        """Conversion options of this list."""
        return self._options

    def as_list(self) -> list[Any]:
        """Convert to a plain list of plain values."""
        from ..serializer import to_plain
        return to_plain(self)

    def copy(self) -> DynamicList:
        """Return a detached deep copy with the same options."""
        return DynamicList(self, options=self._options)

    def equals(self, other: Any) -> bool:
        """Deep value equality, element order included."""
        return deep_equal(self, other)


def _is_object(value: Any) -> bool:
    from .core import DynamicProperties

    return isinstance(value, (DynamicProperties, Mapping))
