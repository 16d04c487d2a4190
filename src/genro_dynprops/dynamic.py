# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Attribute-style access to DynamicProperties.

DynamicAccessor forwards attribute reads and writes to the explicit
get()/set()/remove() API of the wrapped store. It holds no state of its
own: it is a shim, the store stays the single source of truth.

Example:
    >>> props = parse(page_json)
    >>> d = props.dynamic
    >>> d.Count += 1
    >>> d.Nested.Person.Name += '!'
    >>> d.Countries[0].Name
    'USA'
    >>> d.Missing is None
    True
"""

from __future__ import annotations

from typing import Any, Iterator

from .store import DynamicList, DynamicProperties


def _wrap(value: Any) -> Any:
    if isinstance(value, (DynamicProperties, DynamicList)):
        return DynamicAccessor(value)
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, DynamicAccessor):
        return object.__getattribute__(value, '_target')
    return value


class DynamicAccessor:
    """Attribute proxy over a DynamicProperties or a DynamicList.

    Over a DynamicProperties:
    - ``accessor.name`` reads ``get('name')``; unknown names read None
    - ``accessor.name = value`` calls ``set('name', value)``
    - ``del accessor.name`` calls ``remove('name')``

    Over a DynamicList, ``accessor[i]`` reads and writes elements.
    Containers read through the proxy come back wrapped, so chains work.
    Names starting with '_' are never forwarded.
    """

    __slots__ = ('_target',)

    def __init__(self, target: DynamicProperties | DynamicList) -> None:
        object.__setattr__(self, '_target', target)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        target = object.__getattribute__(self, '_target')
        if not isinstance(target, DynamicProperties):
            return None
        return _wrap(target.get(name))

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_'):
            raise AttributeError(f"Cannot set private attribute '{name}'")
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicProperties):
            target.set(name, _unwrap(value))

    def __delattr__(self, name: str) -> None:
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicProperties):
            target.remove(name)

    def __getitem__(self, key: Any) -> Any:
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicList):
            return _wrap(target.get(key))
        return _wrap(target.get_path(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicList):
            target[key] = _unwrap(value)
        else:
            target.set_path(key, _unwrap(value))

    def __iter__(self) -> Iterator[Any]:
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicList):
            return (_wrap(value) for value in target)
        return iter(target)

    def __len__(self) -> int:
        return len(object.__getattribute__(self, '_target'))

    def __dir__(self) -> list[str]:
        target = object.__getattribute__(self, '_target')
        if isinstance(target, DynamicProperties):
            return list(target.keys())
        return []

    def __repr__(self) -> str:
        return f"DynamicAccessor({object.__getattribute__(self, '_target')!r})"

    def __eq__(self, other: object) -> bool:
        return object.__getattribute__(self, '_target') is _unwrap(other)

    def __hash__(self) -> int:
        return id(object.__getattribute__(self, '_target'))
