# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON rendering of document trees, the inverse of ingest.parse()."""

from __future__ import annotations

import json
from typing import Any

from .exceptions import SerializationError
from .store import DynamicList, DynamicProperties


def to_plain(node: Any) -> Any:
    """Convert a tree value to plain dicts, lists and scalars.

    Key and element order follow the tree. The result shares nothing with
    the tree.
    """
    if isinstance(node, DynamicProperties):
        return {label: to_plain(value) for label, value in node.iter_items()}
    if isinstance(node, DynamicList):
        return [to_plain(value) for value in node]
    return node


def serialize(
    node: Any,
    indent: int | None = 2,
    ensure_ascii: bool = False,
) -> str:
    """Render a tree value as JSON text.

    Output is deterministic: keys in insertion order, floats in their
    shortest round-tripping form (``0.1`` stays ``0.1``, ``1.0`` stays
    ``1.0``).

    Args:
        node: A DynamicProperties, a DynamicList or a scalar.
        indent: Spaces per level, None for a single line.
        ensure_ascii: Escape non-ASCII characters.

    Raises:
        SerializationError: If the tree holds NaN or an infinity.
    """
    try:
        return json.dumps(
            to_plain(node),
            indent=indent,
            ensure_ascii=ensure_ascii,
            allow_nan=False,
        )
    except ValueError as e:
        raise SerializationError(f"Cannot serialize: {e}") from e
