# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path resolution over DynamicProperties trees.

Path Syntax:
    - Dotted paths: 'nested.person.name'
    - Array index: 'countries[1].name', nested arrays 'matrix[0][2]'
    - Positional: '#0' (first key of an object), '#-1' (last key)
    - Empty segments are skipped: 'a..b' is 'a.b'

Resolution is best effort: it never raises. It stops at the deepest
object it can reach when a key is absent, a value is not an object, an
index is out of range or an indexed element is not an object. That
deepest object is the resolution target: the node used to read, write
and subscribe.

Example:
    >>> props = DynamicProperties({'a': {'b': {'c': 1}}})
    >>> resolve(props, 'a.b.c').value
    1
    >>> res = resolve(props, 'a.x.c')
    >>> res.found, res.target is props['a']
    (False, True)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from .node import scalar_equal
from .store import DynamicList, DynamicProperties

logger = logging.getLogger(__name__)

_INDEXED = re.compile(r'^(?P<name>[^\[\]]+)(?P<indexes>(?:\[\d+\])+)$')
_INDEX = re.compile(r'\[(\d+)\]')
_POSITIONAL = re.compile(r'^#(-?\d+)$')


@dataclass(frozen=True)
class PathSegment:
    """One dot-separated segment of a path.

    Attributes:
        name: The key, or the raw '#N' text for positional segments.
        indexes: Array indexes applied after the key lookup.
        position: N for a positional '#N' segment, else None.
    """

    name: str
    indexes: tuple[int, ...] = ()
    position: int | None = None

    def __str__(self) -> str:
        return self.name + ''.join(f"[{index}]" for index in self.indexes)


@dataclass(frozen=True)
class PathResolution:
    """Outcome of resolve().

    Attributes:
        target: Deepest object reached; read, write and subscribe here.
        key: Key of the last segment, if resolution reached it.
        value: Value at the full path, None unless found.
        found: True if every segment resolved.
        remaining: Segments that could not be resolved.
    """

    target: DynamicProperties
    key: str | None
    value: Any
    found: bool
    remaining: tuple[PathSegment, ...] = ()


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Split a path into segments.

    Args:
        path: Path string. Non-string paths yield no segments.

    Returns:
        Tuple of PathSegment, empty segments skipped.

    Example:
        >>> [str(s) for s in parse_path('items[1]..name')]
        ['items[1]', 'name']
    """
    if not isinstance(path, str):
        return ()
    segments = []
    for part in path.split('.'):
        if not part:
            continue
        name = part
        indexes: tuple[int, ...] = ()
        match = _INDEXED.match(part)
        if match:
            name = match.group('name')
            indexes = tuple(int(i) for i in _INDEX.findall(match.group('indexes')))
        positional = _POSITIONAL.match(name)
        position = int(positional.group(1)) if positional else None
        segments.append(PathSegment(name, indexes, position))
    return tuple(segments)


def _key_of(container: DynamicProperties, segment: PathSegment) -> str | None:
    """Return the key a segment addresses in container, or None."""
    if segment.position is None:
        return segment.name
    node = container._get_node_by_position(segment.position)
    return node.label if node is not None else None


def _lookup(
    container: DynamicProperties,
    segment: PathSegment,
    indexes: tuple[int, ...] | None = None,
) -> tuple[bool, Any]:
    """Look a segment up in container.

    Args:
        container: The object to read from.
        segment: The segment.
        indexes: Indexes to apply instead of segment.indexes.

    Returns:
        Tuple of (found, value).
    """
    key = _key_of(container, segment)
    if key is None:
        return False, None
    node = container.get_node(key)
    if node is None:
        return False, None
    value = node.value
    for index in segment.indexes if indexes is None else indexes:
        if not isinstance(value, DynamicList):
            return False, None
        value = value.get(index)
        if value is None:
            return False, None
    return True, value


def _navigate(
    root: DynamicProperties, segments: tuple[PathSegment, ...]
) -> tuple[DynamicProperties, int]:
    """Descend through segments while they resolve to objects.

    Returns:
        Tuple of (deepest object reached, number of segments consumed).
    """
    target = root
    for consumed, segment in enumerate(segments):
        found, value = _lookup(target, segment)
        if not found or not isinstance(value, DynamicProperties):
            return target, consumed
        target = value
    return target, len(segments)


def resolve(root: DynamicProperties, path: str) -> PathResolution:
    """Resolve a path against root, best effort.

    Every segment but the last must reach an object; the last one is
    read from the object reached.

    Args:
        root: The store to start from.
        path: Dotted/indexed path. An empty path targets root and
            finds nothing.

    Returns:
        A PathResolution. Never raises.

    Example:
        >>> props = DynamicProperties({'items': [{'n': 1}, {'n': 2}]})
        >>> resolve(props, 'items[1].n').value
        2
        >>> resolve(props, 'items[5].n').found
        False
    """
    segments = parse_path(path)
    if not segments:
        return PathResolution(root, None, None, False)

    target, consumed = _navigate(root, segments[:-1])
    if consumed < len(segments) - 1:
        logger.debug(
            "Path %r stops at segment %r", path, str(segments[consumed])
        )
        return PathResolution(target, None, None, False, segments[consumed:])

    last = segments[-1]
    found, value = _lookup(target, last)
    key = _key_of(target, last)
    if not found:
        return PathResolution(target, key, None, False, (last,))
    return PathResolution(target, key, value, True)


def _descend_for_write(
    container: DynamicProperties, segment: PathSegment
) -> DynamicProperties | None:
    """Step into segment, creating an object for a missing or scalar key.

    Indexed segments and arrays are never synthesized.
    """
    if segment.indexes:
        found, value = _lookup(container, segment)
        if found and isinstance(value, DynamicProperties):
            return value
        return None
    key = _key_of(container, segment)
    if key is None:
        return None
    current = container.get(key)
    if isinstance(current, DynamicProperties):
        return current
    if isinstance(current, DynamicList):
        return None
    created = DynamicProperties(options=container.options)
    container.set(key, created)
    return created


def _last_list(
    container: DynamicProperties, segment: PathSegment
) -> tuple[DynamicList | None, int]:
    """Return the list addressed by an indexed segment and its last index."""
    found, value = _lookup(container, segment, segment.indexes[:-1])
    if not found or not isinstance(value, DynamicList):
        return None, -1
    return value, segment.indexes[-1]


def assign(root: DynamicProperties, path: str, value: Any) -> bool:
    """Write value at path.

    Missing or scalar intermediate keys are replaced by new empty
    objects. Array elements are never created: an out-of-range index
    makes the write a no-op. None removes the addressed key or element.

    Returns:
        True if something changed.
    """
    segments = parse_path(path)
    if not segments:
        return False

    target = root
    for segment in segments[:-1]:
        next_target = _descend_for_write(target, segment)
        if next_target is None:
            logger.debug("Cannot write %r: segment %r is not an object", path, str(segment))
            return False
        target = next_target

    last = segments[-1]
    if not last.indexes:
        key = _key_of(target, last)
        if key is None:
            return False
        return target.set(key, value)

    items, index = _last_list(target, last)
    if items is None or index >= len(items):
        logger.debug("Cannot write %r: no element %r", path, str(last))
        return False
    if value is None:
        del items[index]
        return True
    old_value = items[index]
    if old_value is value or scalar_equal(old_value, value):
        return False
    items[index] = value
    return True


def discard(root: DynamicProperties, path: str) -> bool:
    """Remove the key or array element at path.

    Returns:
        True if it existed.
    """
    segments = parse_path(path)
    if not segments:
        return False

    target, consumed = _navigate(root, segments[:-1])
    if consumed < len(segments) - 1:
        return False

    last = segments[-1]
    if not last.indexes:
        key = _key_of(target, last)
        return key is not None and target.remove(key)

    items, index = _last_list(target, last)
    if items is None or index >= len(items):
        return False
    del items[index]
    return True
