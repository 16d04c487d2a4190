# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DynamicProperties - An observable, ordered key/value node.

This module provides the DynamicProperties class, the Object node of a
document tree built from JSON. Values are scalars (str, int, float, bool),
nested DynamicProperties or DynamicList instances.

Key Features:
    - **Ordered storage**: Keys keep insertion order, for deterministic JSON
    - **Explicit absence**: Setting None removes the key, nothing stores null
    - **Change suppression**: Re-setting an equal scalar notifies nobody
    - **Path navigation**: Dotted/indexed paths ('a.b[2].c'), positional '#N'
    - **Reactive subscriptions**: ``item[<key>]`` and ``document`` events
    - **Dynamic access**: ``props.dynamic.name`` on top of get/set

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - Array index: 'items[2].name'
    - Positional: '#0' (first key), '#-1' (last key)

Example:
    Basic usage::

        props = DynamicProperties('{"count": 0, "person": {"name": "Ann"}}')
        props.subscribe(lambda event: print(event.name))

        props.set('count', 1)          # item[count], document
        props['person.name'] = 'Bob'   # events raised by the nested node
        print(props.to_json())
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator, TYPE_CHECKING

from ..node import PropertyNode, deep_equal, scalar_equal
from ..options import DEFAULT_OPTIONS, JsonOptions
from .subscription import CLEAR, DELETE, INSERT, UPDATE, SubscriptionMixin
from .values import OwnedMixin, adopt, release

if TYPE_CHECKING:
    from ..dynamic import DynamicAccessor
    from ..paths import PathResolution
    from .sequence import DynamicList

_UNSET = object()


class StoreView:
    """Lazy, restartable view over the keys, values or items of a store.

    Each iteration reads the live store, so a view obtained once reflects
    later changes.
    """

    __slots__ = ('_store', '_what')

    def __init__(self, store: DynamicProperties, what: str) -> None:
        self._store = store
        self._what = what

    def __iter__(self) -> Iterator[Any]:
        if self._what == 'keys':
            return self._store.iter_keys()
        if self._what == 'values':
            return self._store.iter_values()
        return self._store.iter_items()

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"{self._what}({list(self)!r})"


class DynamicProperties(OwnedMixin, SubscriptionMixin):
    """An observable, ordered mapping from string keys to tree values.

    DynamicProperties provides:
    - get(key) / set(key, value) / has(key) / remove(key) / clear()
    - get_path(path) / set_path(path, value) / store[path]: path access
    - keys() / values() / items(): lazy views in insertion order
    - to_json() / from_json(text): JSON round trip
    - subscribe(callback): synchronous change notification

    Attributes:
        parent: The container holding this node, or None for a root.

    Example:
        >>> props = DynamicProperties({'a': 1, 'b': {'c': 2}})
        >>> props['b.c']
        2
        >>> props.set('a', 1)  # equal value, no change
        False
    """

    __slots__ = ('_nodes', '_owner', '_options', '_subscribers')

    def __init__(
        self,
        source: Mapping | DynamicProperties | str | None = None,
        options: JsonOptions | None = None,
    ) -> None:
        """Initialize a DynamicProperties.

        Args:
            source: Optional initial data. Can be:
                - dict (or any Mapping): keys must be strings, empty keys
                  and None values are skipped, nested dicts/lists become nodes
                - DynamicProperties: deep copy of another store
                - str: a JSON text, parsed like from_json()
            options: Conversion options kept for the store's lifetime.
                Defaults to DEFAULT_OPTIONS.

        Example:
            >>> DynamicProperties({'a': 1, 'b': {'c': 2}})
            >>> DynamicProperties('{"a": 1}')
            >>> DynamicProperties(other_props)  # copy
        """
        self._nodes: dict[str, PropertyNode] = {}
        self._owner: DynamicProperties | DynamicList | None = None
        self._options = options if options is not None else DEFAULT_OPTIONS
        self._subscribers = {}

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: Mapping | DynamicProperties | str) -> None:
        """Load initial data without raising notifications.

        Raises:
            TypeError: If source or one of its keys has an unsupported type.
        """
        if isinstance(source, str):
            from ..ingest import load_json
            load_json(self, source)
            return
        if isinstance(source, DynamicProperties):
            pairs: Iterator[tuple[Any, Any]] = source.iter_items()
        elif isinstance(source, Mapping):
            pairs = iter(source.items())
        else:
            raise TypeError(
                f"source must be a mapping, DynamicProperties or JSON text, "
                f"not {type(source).__name__}"
            )
        for key, value in pairs:
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            if not key or value is None:
                continue
            self._nodes[key] = PropertyNode(
                key, adopt(self, value, self._options), parent=self
            )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing the keys."""
        return f"DynamicProperties({list(self._nodes.keys())})"

    def __len__(self) -> int:
        """Return the number of keys in this node."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        """Iterate over keys in insertion order."""
        return self.iter_keys()

    def __contains__(self, key: object) -> bool:
        """Check if a key exists at this level."""
        return isinstance(key, str) and bool(key) and key in self._nodes

    def __getitem__(self, path: str) -> Any:
        """Get the value at a key or path, None if absent.

        Example:
            >>> props['person.name']
            >>> props['countries[0].name']
        """
        return self.get_path(path)

    def __setitem__(self, path: str, value: Any) -> None:
        """Set the value at a key or path (None removes it)."""
        self.set_path(path, value)

    def __delitem__(self, path: str) -> None:
        """Remove the value at a key or path, if present."""
        self.delete_path(path)

    # ==================== Core API ====================

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value of a key at this level.

        Args:
            key: The key. Empty or non-string keys read as absent.
            default: Returned if the key is absent.

        Returns:
            The stored value or default. Never raises.
        """
        if not key or not isinstance(key, str):
            return default
        node = self._nodes.get(key)
        if node is None:
            return default
        return node.value

    def set(self, key: str, value: Any) -> bool:
        """Set the value of a key at this level.

        - None removes the key (notifies only if it existed)
        - an equal scalar of the same type is a no-op
        - the very container already stored is a no-op
        - anything else inserts or overwrites and notifies

        Args:
            key: The key. Empty or non-string keys are ignored.
            value: Scalar, container, plain dict/list, or None.

        Returns:
            True if the store changed.

        Raises:
            TypeError: If the value type cannot be stored.
            ValueError: If the value is this node or one of its ancestors.
        """
        if not key or not isinstance(key, str):
            return False
        if value is None:
            return self.remove(key)

        node = self._nodes.get(key)
        if node is not None:
            if node.value is value or scalar_equal(node.value, value):
                return False

        new_value = adopt(self, value, self._options)

        if node is None:
            self._nodes[key] = PropertyNode(key, new_value, parent=self)
            self._emit_change(key, INSERT, None, new_value)
            return True

        old_value = node.value
        node.value = new_value
        release(old_value)
        self._emit_change(key, UPDATE, old_value, new_value)
        return True

    def has(self, key: str) -> bool:
        """True if key exists at this level."""
        return key in self

    def remove(self, key: str) -> bool:
        """Remove a key at this level.

        Returns:
            True if the key existed (and a notification was raised).
        """
        if not key or not isinstance(key, str):
            return False
        node = self._nodes.pop(key, None)
        if node is None:
            return False
        node.parent = None
        release(node.value)
        self._emit_change(key, DELETE, node.value, None)
        return True

    def clear(self) -> None:
        """Remove all keys.

        Raises a single ``item`` event and a single ``document`` event if
        the store was not empty; nothing otherwise.
        """
        if not self._nodes:
            return
        removed = list(self._nodes.values())
        self._nodes.clear()
        for node in removed:
            node.parent = None
            release(node.value)
        self._emit_change(None, CLEAR)

    def update(self, other: Mapping | DynamicProperties) -> None:
        """Set every key of other on this store, in order.

        Each changed key raises its own notifications; None values
        remove keys.
        """
        if isinstance(other, DynamicProperties):
            pairs: Iterator[tuple[str, Any]] = other.iter_items()
        elif isinstance(other, Mapping):
            pairs = iter(other.items())
        else:
            raise TypeError(
                f"other must be a mapping or DynamicProperties, not {type(other).__name__}"
            )
        for key, value in list(pairs):
            self.set(key, value)

    def get_node(self, key: str) -> PropertyNode | None:
        """Return the PropertyNode of a key at this level, or None."""
        if not isinstance(key, str):
            return None
        return self._nodes.get(key)

    def _get_node_by_position(self, index: int) -> PropertyNode | None:
        """Get node by positional index (negative allowed), or None."""
        if index < 0:
            index = len(self._nodes) + index
        if index < 0 or index >= len(self._nodes):
            return None
        for position, node in enumerate(self._nodes.values()):
            if position == index:
                return node
        return None

    # ==================== Path API ====================

    def resolve(self, path: str) -> PathResolution:
        """Resolve a dotted/indexed path, best effort. See paths.resolve()."""
        from ..paths import resolve
        return resolve(self, path)

    def get_path(self, path: str, default: Any = None) -> Any:
        """Get the value at a dotted/indexed path, or default if absent."""
        resolution = self.resolve(path)
        if not resolution.found:
            return default
        return resolution.value

    def set_path(self, path: str, value: Any) -> bool:
        """Set the value at a path, creating intermediate objects.

        Returns:
            True if the value was written (and changed something).
        """
        from ..paths import assign
        return assign(self, path, value)

    def delete_path(self, path: str) -> bool:
        """Remove the value at a path. Returns True if it existed."""
        from ..paths import discard
        return discard(self, path)

    # ==================== Iteration ====================

    def iter_keys(self) -> Iterator[str]:
        """Yield keys in insertion order."""
        for node in self._nodes.values():
            yield node.label

    def iter_values(self) -> Iterator[Any]:
        """Yield values in insertion order."""
        for node in self._nodes.values():
            yield node.value

    def iter_items(self) -> Iterator[tuple[str, Any]]:
        """Yield (key, value) pairs in insertion order."""
        for node in self._nodes.values():
            yield node.label, node.value

    def iter_nodes(self) -> Iterator[PropertyNode]:
        """Yield nodes in insertion order."""
        yield from self._nodes.values()

    def keys(self) -> StoreView:
        """Return a lazy, restartable view of the keys."""
        return StoreView(self, 'keys')

    def values(self) -> StoreView:
        """Return a lazy, restartable view of the values."""
        return StoreView(self, 'values')

    def items(self) -> StoreView:
        """Return a lazy, restartable view of (key, value) pairs."""
        return StoreView(self, 'items')

    def nodes(self) -> list[PropertyNode]:
        """Return list of nodes in insertion order."""
        return list(self._nodes.values())

    # ==================== Walk ====================

    def walk(
        self,
        callback: Callable[[str, Any], Any] | None = None,
        _prefix: str = "",
    ) -> Iterator[tuple[str, Any]] | None:
        """Walk the tree depth-first, optionally calling a callback.

        Paths use the resolver syntax: object keys joined by '.', array
        elements as '[i]'.

        Args:
            callback: Optional function called with (path, value).
                      If provided, walk returns None.
            _prefix: Internal use for path building.

        Yields:
            Tuples of (path, value) if no callback provided.

        Example:
            >>> for path, value in props.walk():
            ...     print(path, value)
        """
        if callback is not None:
            for path, value in _walk_gen(self, _prefix):
                callback(path, value)
            return None
        return _walk_gen(self, _prefix)

    # ==================== State ====================

    @property
    def is_empty(self) -> bool:
        """True if no key is stored."""
        return not self._nodes

    @property
    def options(self) -> JsonOptions:
        """Conversion options of this store."""
        return self._options

    @property
    def dynamic(self) -> DynamicAccessor:
        """Attribute-style access: ``props.dynamic.name = 'x'``."""
        from ..dynamic import DynamicAccessor
        return DynamicAccessor(self)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to plain nested dicts and lists."""
        from ..serializer import to_plain
        return to_plain(self)

    def copy(self) -> DynamicProperties:
        """Return a detached deep copy with the same options."""
        return DynamicProperties(self, options=self._options)

    def equals(self, other: Any) -> bool:
        """Deep value equality, key order included."""
        return deep_equal(self, other)

    def to_json(self, indent: Any = _UNSET) -> str:
        """Serialize to JSON text.

        Args:
            indent: Indentation; defaults to the store options.
        """
        from ..serializer import serialize
        if indent is _UNSET:
            indent = self._options.indent
        return serialize(self, indent=indent, ensure_ascii=self._options.ensure_ascii)

    def from_json(self, text: str) -> None:
        """Replace the content with a JSON text.

        The store is cleared first. A non-object or empty document leaves
        it empty; a malformed one raises ParseError after clearing.
        """
        from ..ingest import load_json
        load_json(self, text)

    @property
    def json(self) -> str:
        """The JSON text of the store. Assigning replaces the content."""
        return self.to_json()

    @json.setter
    def json(self, text: str) -> None:
        self.from_json(text)


def _walk_gen(container: Any, prefix: str) -> Iterator[tuple[str, Any]]:
    from .sequence import DynamicList

    if isinstance(container, DynamicList):
        entries: Iterator[tuple[str, Any]] = (
            (f"{prefix}[{index}]", value) for index, value in enumerate(container)
        )
    else:
        entries = (
            (f"{prefix}.{label}" if prefix else label, value)
            for label, value in container.iter_items()
        )
    for path, value in entries:
        yield path, value
        if isinstance(value, (DynamicProperties, DynamicList)):
            yield from _walk_gen(value, path)
