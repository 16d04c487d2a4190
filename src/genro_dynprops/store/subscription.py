# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Subscription and notification primitives.

Every observable object (DynamicProperties, DynamicList, the derived views
and the bindings) mixes in SubscriptionMixin. Notifications are delivered
synchronously: all callbacks for one mutation have run when the mutating
call returns.

Event names:
    - ``item[<key>]``: the entry ``key`` (or index) was inserted, updated
      or deleted
    - ``item``: every entry changed at once (clear)
    - ``document``: the serialized form of the node may have changed
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable

DOCUMENT = 'document'
ITEM = 'item'

INSERT = 'insert'
UPDATE = 'update'
DELETE = 'delete'
CLEAR = 'clear'

_subscriber_ids = itertools.count(1)


def item_event_name(key: Any) -> str:
    """Return the event name for a single entry: ``item[<key>]``."""
    return f"{ITEM}[{key}]"


@dataclass(frozen=True)
class ChangeEvent:
    """A change notification.

    Attributes:
        source: The object that raised the event.
        name: Event name (``item[<key>]``, ``item``, ``document``, or a
            property name for views and bindings).
        key: The entry key (str for objects, int for arrays), if any.
        kind: 'insert', 'update', 'delete' or 'clear', if known.
        old: Previous value, if any.
        new: New value, if any.
        origin: The event this one re-raises, for derived views.
    """

    source: Any
    name: str
    key: Any = None
    kind: str | None = None
    old: Any = None
    new: Any = None
    origin: ChangeEvent | None = None

    @property
    def root_origin(self) -> ChangeEvent:
        """Follow origin links back to the mutation that started it."""
        event = self
        while event.origin is not None:
            event = event.origin
        return event


SubscriberCallback = Callable[[ChangeEvent], Any]


class SubscriptionMixin:
    """Adds subscribe/unsubscribe and synchronous dispatch.

    Classes using the mixin must create ``self._subscribers`` (a dict)
    in their ``__init__``.
    """

    __slots__ = ()

    _subscribers: dict[str, SubscriberCallback]

    def subscribe(
        self,
        callback: SubscriberCallback,
        subscriber_id: str | None = None,
    ) -> str:
        """Register a callback for every event raised by this object.

        Args:
            callback: Called with a ChangeEvent.
            subscriber_id: Optional id. Subscribing again with the same id
                replaces the previous callback.

        Returns:
            The subscriber id, to be passed to unsubscribe().
        """
        if subscriber_id is None:
            subscriber_id = f"sub_{next(_subscriber_ids)}"
        self._subscribers[subscriber_id] = callback
        return subscriber_id

    def unsubscribe(self, subscriber_id: str) -> bool:
        """Remove a subscriber. Returns True if it was registered."""
        return self._subscribers.pop(subscriber_id, None) is not None

    @property
    def subscribers(self) -> list[str]:
        """Ids of the registered subscribers, in subscription order."""
        return list(self._subscribers)

    def _notify(self, event: ChangeEvent) -> None:
        """Deliver an event to every subscriber, in subscription order."""
        for callback in list(self._subscribers.values()):
            callback(event)

    def _emit(
        self,
        name: str,
        key: Any = None,
        kind: str | None = None,
        old: Any = None,
        new: Any = None,
        origin: ChangeEvent | None = None,
    ) -> None:
        """Build and deliver a ChangeEvent raised by this object."""
        if not self._subscribers:
            return
        self._notify(ChangeEvent(self, name, key, kind, old, new, origin))

    def _emit_change(
        self,
        key: Any,
        kind: str,
        old: Any = None,
        new: Any = None,
    ) -> None:
        """Raise the entry event followed by the document event."""
        name = ITEM if kind == CLEAR else item_event_name(key)
        self._emit(name, key, kind, old, new)
        self._emit(DOCUMENT, key, kind, old, new)
