# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON ingestion: turning JSON text into a DynamicProperties tree.

The ingestion is best effort: a valid document whose top-level value is
not an object yields an empty store, nulls become absent keys, numbers no
float can hold are dropped. Only a malformed text raises ParseError.

Example:
    >>> props = parse('{"count": 42, "tags": ["a", null, "b"]}')
    >>> props['count']
    42
    >>> list(props['tags'])
    ['a', 'b']
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .exceptions import ParseError
from .numbers import decode_number
from .options import JsonOptions
from .store import DynamicList, DynamicProperties

logger = logging.getLogger(__name__)

_DROPPED = object()
_TOO_DEEP = "Malformed JSON: nesting too deep"


def _decode(text: str | bytes, options: JsonOptions) -> Any:
    """Decode JSON text into plain data, applying numeric narrowing.

    Raises:
        ParseError: If the text is not valid JSON or is nested too deeply.
        TypeError: If text is not str or bytes.
    """
    _check_text(text)

    def parse_number(literal: str) -> Any:
        value = decode_number(literal, exact_integers=options.exact_integers)
        if value is None:
            logger.warning("Dropping unrepresentable number %.40s", literal)
            return _DROPPED
        return value

    def parse_constant(name: str) -> Any:
        raise ParseError(f"Malformed JSON: {name} is not a valid JSON value")

    try:
        data = json.loads(
            text,
            parse_int=parse_number,
            parse_float=parse_number,
            parse_constant=parse_constant,
        )
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Malformed JSON: {e.msg}", lineno=e.lineno, colno=e.colno, pos=e.pos
        ) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Malformed JSON: {e.reason}", pos=e.start) from e
    except RecursionError as e:
        raise ParseError(_TOO_DEEP) from e
    try:
        return _strip_dropped(data)
    except RecursionError as e:
        raise ParseError(_TOO_DEEP) from e


def _check_text(text: Any) -> None:
    if not isinstance(text, (str, bytes, bytearray)):
        raise TypeError(f"JSON text must be str or bytes, not {type(text).__name__}")


def _strip_dropped(value: Any) -> Any:
    """Remove values marked as dropped from decoded data."""
    if isinstance(value, dict):
        return {
            key: _strip_dropped(item)
            for key, item in value.items()
            if item is not _DROPPED
        }
    if isinstance(value, list):
        return [_strip_dropped(item) for item in value if item is not _DROPPED]
    return value


def _fill(store: DynamicProperties, data: Any) -> None:
    """Set the members of a decoded top-level object on store."""
    if not isinstance(data, dict):
        logger.debug(
            "Top-level JSON value is %s, not an object: store left empty",
            type(data).__name__,
        )
        return
    try:
        for key, value in data.items():
            if not key or value is None:
                continue
            store.set(key, value)
    except RecursionError as e:
        store.clear()
        raise ParseError(_TOO_DEEP) from e


def parse(text: str | bytes, options: JsonOptions | None = None) -> DynamicProperties:
    """Parse a JSON text into a new DynamicProperties.

    Args:
        text: The JSON document.
        options: Conversion options, kept by the returned store.

    Returns:
        The root store. Empty if the top-level value is not an object.

    Raises:
        ParseError: If the text is not valid JSON (empty text included)
            or is nested too deeply.

    Example:
        >>> parse('[1, 2, 3]').is_empty
        True
    """
    store = DynamicProperties(options=options)
    _fill(store, _decode(text, store.options))
    return store


def load_json(store: DynamicProperties, text: str | bytes) -> None:
    """Replace the content of store with a JSON text.

    The store is cleared first (one notification if it was not empty),
    then each top-level member is set, notifying as usual. Empty or
    blank text leaves the store empty.

    Raises:
        ParseError: If the text is malformed or nested too deeply. The
            store stays empty.
        TypeError: If text is not str or bytes. The store is untouched.
    """
    _check_text(text)
    store.clear()
    if not text or not text.strip():
        return
    _fill(store, _decode(text, store.options))


def build_value(value: Any, options: JsonOptions | None = None) -> Any:
    """Convert plain Python data into a detached tree value.

    dicts become DynamicProperties, lists and tuples DynamicList, scalars
    are returned unchanged, None stays None (absence).

    Raises:
        TypeError: If value (or a nested value) cannot be stored.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return DynamicProperties(value, options=options)
    if isinstance(value, (list, tuple)):
        return DynamicList(value, options=options)
    raise TypeError(f"Cannot store a value of type {type(value).__name__}")
