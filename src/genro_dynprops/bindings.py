# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Bindings between one key of a store and an editable representation.

A binding keeps two views of the same datum in step: the value stored
under ``key`` and a presentation form (text, date and time parts). Writes
on either side reach the other one; a ReentrancyGuard keeps the binding
from reacting to the store events its own writes cause.

This module provides three bindings:
- TextBinding: ``text`` <-> stored string, empty text means absence
- NumericBinding: ``text`` <-> stored number, unparsable text means absence
- DateTimeBinding: ``value`` (datetime) <-> stored ISO text, plus
  ``date_part`` and ``time_part``

Bindings raise their own events (``value``, ``text``, ``time_part``)
with the store event that caused them as ``origin``.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Callable

from .guard import ReentrancyGuard
from .numbers import parse_number_text
from .store import ChangeEvent, DynamicProperties, SubscriptionMixin
from .store.subscription import ITEM, item_event_name

VALUE = 'value'
TEXT = 'text'
TIME_PART = 'time_part'


def format_number(value: Any) -> str:
    """Text of a stored number: '' for absence, str() otherwise."""
    if value is None:
        return ""
    return str(value)


class Binding(SubscriptionMixin):
    """Base class for all bindings.

    A binding listens to ``item[<key>]`` (and ``item``, for clear) on the
    store and raises a ``value`` event when the datum changes, from
    whichever side.

    Attributes:
        store: The store holding the datum.
        key: The key of the datum.
    """

    __slots__ = (
        'store', 'key', '_guard', '_event_name', '_subscriber_id', '_subscribers',
    )

    def __init__(self, store: DynamicProperties, key: str) -> None:
        self.store = store
        self.key = key
        self._guard = ReentrancyGuard()
        self._subscribers = {}
        self._event_name = item_event_name(key)
        self._subscriber_id: str | None = store.subscribe(self._on_store_change)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"

    @property
    def value(self) -> Any:
        """The stored value, None if absent."""
        return self.store.get(self.key)

    @value.setter
    def value(self, value: Any) -> None:
        self._write(value)

    def _write(self, value: Any) -> bool:
        """Store value and raise the binding events if it changed."""
        with self._guard.hold():
            changed = self.store.set(self.key, value)
            if changed:
                self._changed(None)
        return changed

    def _on_store_change(self, event: ChangeEvent) -> None:
        if event.name != self._event_name and event.name != ITEM:
            return
        if self._guard.active:
            return
        with self._guard.hold():
            self._changed(event)

    def _changed(self, origin: ChangeEvent | None) -> None:
        """Raise the events of a datum change. Runs under the guard."""
        self._emit(VALUE, self.key, new=self.value, origin=origin)

    def close(self) -> None:
        """Stop listening to the store."""
        if self._subscriber_id is not None:
            self.store.unsubscribe(self._subscriber_id)
            self._subscriber_id = None


class TextBinding(Binding):
    """Binds a string key to an editable text.

    Example:
        >>> binding = TextBinding(props, 'Hello')
        >>> binding.text = 'Hi'
        >>> props.get('Hello')
        'Hi'
        >>> binding.text = ''
        >>> props.has('Hello')
        False
    """

    __slots__ = ()

    @property
    def text(self) -> str:
        """Text of the stored value, '' if absent."""
        value = self.value
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @text.setter
    def text(self, text: str | None) -> None:
        self._write(text or None)

    def _changed(self, origin: ChangeEvent | None) -> None:
        super()._changed(origin)
        self._emit(TEXT, self.key, new=self.text, origin=origin)


class NumericBinding(Binding):
    """Binds a numeric key to an editable text.

    Text is parsed as a 32-bit integer first, then as a float. Empty or
    unparsable text stores absence but is kept as typed, so the editor
    does not lose the user's input.

    Example:
        >>> binding = NumericBinding(props, 'Count')
        >>> binding.text = '42'
        >>> props.get('Count')
        42
        >>> binding.text = '4.5'
        >>> props.get('Count')
        4.5
    """

    __slots__ = ('_text',)

    def __init__(self, store: DynamicProperties, key: str) -> None:
        super().__init__(store, key)
        self._text = format_number(self.value)

    @property
    def text(self) -> str:
        """The text as last typed or as formatted from the stored value."""
        return self._text

    @text.setter
    def text(self, text: str | None) -> None:
        text = text or ""
        if text == self._text:
            return
        self._text = text
        with self._guard.hold():
            changed = self.store.set(self.key, parse_number_text(text))
            self._emit(TEXT, self.key, new=text)
            if changed:
                self._emit(VALUE, self.key, new=self.value)

    def _changed(self, origin: ChangeEvent | None) -> None:
        self._text = format_number(self.value)
        super()._changed(origin)
        self._emit(TEXT, self.key, new=self._text, origin=origin)


class DateTimeBinding(Binding):
    """Binds a key holding ISO-8601 text to a datetime split in two parts.

    ``value`` is the full datetime (None if absent or not a valid ISO
    text), ``date_part`` its date and ``time_part`` its time of day.
    Every change, from any side, raises exactly one ``value`` event and
    one ``time_part`` event.

    Args:
        store: The store holding the datum.
        key: The key of the datum.
        today: Returns the date used when a time is set without a value.

    Example:
        >>> binding = DateTimeBinding(props, 'When', today=lambda: date(2024, 1, 2))
        >>> binding.time_part = time(9, 30)
        >>> props.get('When')
        '2024-01-02T09:30:00'
    """

    __slots__ = ('_today',)

    def __init__(
        self,
        store: DynamicProperties,
        key: str,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(store, key)
        self._today = today

    @property
    def value(self) -> datetime | None:
        """The stored datetime, None if absent or unreadable."""
        raw = self.store.get(self.key)
        if not isinstance(raw, str):
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None

    @value.setter
    def value(self, value: datetime | None) -> None:
        if value is not None and not isinstance(value, datetime):
            raise TypeError(f"value must be a datetime, not {type(value).__name__}")
        self._write(value.isoformat() if value is not None else None)

    @property
    def date_part(self) -> date | None:
        """Date of the value, None if absent."""
        value = self.value
        return value.date() if value is not None else None

    @date_part.setter
    def date_part(self, day: date | None) -> None:
        """Keep the time of day, change the date. None clears the value."""
        if day is None:
            self.value = None
            return
        self.value = datetime.combine(day, self.time_part)

    @property
    def time_part(self) -> time:
        """Time of day of the value, midnight if absent."""
        value = self.value
        return value.time() if value is not None else time(0)

    @time_part.setter
    def time_part(self, moment: time) -> None:
        """Keep the date (today if there is no value), change the time."""
        value = self.value
        day = value.date() if value is not None else self._today()
        self.value = datetime.combine(day, moment)

    def _changed(self, origin: ChangeEvent | None) -> None:
        super()._changed(origin)
        self._emit(TIME_PART, self.key, new=self.time_part, origin=origin)
