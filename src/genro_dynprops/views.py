# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Derived views over a document tree.

JsonView re-raises every change in a tree as a single ``json`` event, so
a consumer can display the serialized document and refresh it when it
changes. PathView exposes the object a path points at as a keyed view.

Both views are plain subscribers: they hold no copy of the data and read
the tree on demand.

Example:
    >>> props = parse('{"count": 0, "person": {"name": "Ann"}}')
    >>> view = JsonView(props)
    >>> view.subscribe(lambda event: print(event.name, event.root_origin.key))
    >>> props.set_path('person.name', 'Bob')
    json name
"""

from __future__ import annotations

import logging
from typing import Any

from .store import ChangeEvent, DynamicList, DynamicProperties, SubscriptionMixin
from .store.subscription import CLEAR, DELETE, DOCUMENT, INSERT, ITEM, UPDATE

logger = logging.getLogger(__name__)

JSON = 'json'

Container = DynamicProperties | DynamicList


def _children(container: Container) -> list[Container]:
    values = container.iter_values() if isinstance(container, DynamicProperties) else container
    return [value for value in values if isinstance(value, (DynamicProperties, DynamicList))]


class JsonView(SubscriptionMixin):
    """Serialized view of a tree, notifying once per change anywhere in it.

    At construction the view attaches a listener to every object and array
    of the tree: the attachment is a snapshot. Containers inserted later
    are not watched unless ``live`` is True, or until rewire() is called.

    Args:
        store: The root of the tree.
        live: Attach containers inserted after construction and detach
            the ones removed.
    """

    __slots__ = ('store', 'live', '_attached', '_subscribers')

    def __init__(self, store: DynamicProperties, live: bool = False) -> None:
        self.store = store
        self.live = live
        self._attached: dict[int, tuple[Container, str]] = {}
        self._subscribers = {}
        self._attach(store)

    def __repr__(self) -> str:
        return f"JsonView(watching={self.watching}, live={self.live})"

    @property
    def json(self) -> str:
        """The current JSON text of the tree, serialized on every read."""
        return self.store.to_json()

    @property
    def watching(self) -> int:
        """Number of containers the view listens to."""
        return len(self._attached)

    def is_watching(self, container: Container) -> bool:
        """True if the view listens to container."""
        return id(container) in self._attached

    def _attach(self, container: Container) -> None:
        if id(container) in self._attached:
            return
        subscriber_id = container.subscribe(self._on_change)
        self._attached[id(container)] = (container, subscriber_id)
        for child in _children(container):
            self._attach(child)

    def _detach(self, container: Container) -> None:
        entry = self._attached.pop(id(container), None)
        if entry is None:
            return
        container.unsubscribe(entry[1])
        for child in _children(container):
            self._detach(child)

    def _on_change(self, event: ChangeEvent) -> None:
        if event.name != DOCUMENT:
            return
        if self.live:
            old = event.old
            if event.kind in (UPDATE, DELETE) and isinstance(old, (DynamicProperties, DynamicList)):
                # a container moved within a list keeps its parent
                if old.parent is None:
                    self._detach(old)
            if event.kind in (INSERT, UPDATE) and isinstance(event.new, (DynamicProperties, DynamicList)):
                self._attach(event.new)
            if event.kind == CLEAR:
                self._prune()
        self._emit(JSON, event.key, event.kind, event.old, event.new, origin=event)

    def _prune(self) -> None:
        """Detach containers no longer reachable from the root."""
        reachable = set()
        pending: list[Container] = [self.store]
        while pending:
            container = pending.pop()
            reachable.add(id(container))
            pending.extend(_children(container))
        for key in [key for key in self._attached if key not in reachable]:
            container, subscriber_id = self._attached.pop(key)
            container.unsubscribe(subscriber_id)

    def rewire(self) -> None:
        """Detach everything and attach to the tree as it is now."""
        self.close()
        self._attach(self.store)
        logger.debug("JsonView rewired to %d containers", len(self._attached))

    def close(self) -> None:
        """Detach from every container."""
        for container, subscriber_id in self._attached.values():
            container.unsubscribe(subscriber_id)
        self._attached.clear()


class PathView(SubscriptionMixin):
    """Keyed view over the object a path resolves to.

    The path is resolved once, at construction, best effort: if it does
    not reach an object, the view targets the deepest object reached.
    ``view[key]`` reads and writes the target; the target's entry events
    are re-raised by the view.

    Attributes:
        path: The path given at construction.
        target: The object the view reads and writes.

    Example:
        >>> person = PathView(props, 'Nested.Person')
        >>> person['Name']
        'Ann'
        >>> person['Name'] = 'Bob'
        >>> props['Nested.Person.Name']
        'Bob'
    """

    __slots__ = ('path', 'target', '_subscriber_id', '_subscribers')

    def __init__(self, root: DynamicProperties, path: str) -> None:
        self.path = path
        resolution = root.resolve(path)
        if resolution.found and isinstance(resolution.value, DynamicProperties):
            self.target = resolution.value
        else:
            self.target = resolution.target
        self._subscribers = {}
        self._subscriber_id: str | None = self.target.subscribe(self._on_change)

    def __repr__(self) -> str:
        return f"PathView({self.path!r})"

    def __getitem__(self, key: str) -> Any:
        if not key:
            return None
        return self.target.get_path(key)

    def __setitem__(self, key: str, value: Any) -> None:
        if not key:
            return
        self.target.set_path(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self.target

    def _on_change(self, event: ChangeEvent) -> None:
        if event.name == DOCUMENT:
            return
        if event.name == ITEM or event.name.startswith(f"{ITEM}["):
            self._emit(event.name, event.key, event.kind, event.old, event.new, origin=event)

    def close(self) -> None:
        """Stop listening to the target."""
        if self._subscriber_id is not None:
            self.target.unsubscribe(self._subscriber_id)
            self._subscriber_id = None
