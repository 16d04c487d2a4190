# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Numeric narrowing for JSON number literals.

A literal is decoded as the first type that accepts it, tried in a fixed
order: 32-bit integer, 64-bit integer, 32-bit float, 64-bit float.

Python has a single int and a single float type, so the width is kept as
a NumberKind next to the decoded value: INT32/INT64 literals become int,
FLOAT32/FLOAT64 literals become float.

Integer literals outside the 64-bit range fall through to the float kinds
and lose precision (``12345678901234567890123`` decodes to
``1.2345678901234568e+22``). Pass ``exact_integers=True`` to keep them as
exact ints with kind BIGINT instead.

Example:
    >>> classify_number('42')
    <NumberKind.INT32: 'int32'>
    >>> decode_number('1e400') is None
    True
"""

from __future__ import annotations

import math
import re
from enum import Enum

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
FLOAT32_MAX = 3.4028234663852886e+38

_INT_LITERAL = re.compile(r'^-?\d+$', re.ASCII)
_FLOAT_TEXT = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$', re.ASCII)
_INT_TEXT = re.compile(r'^[+-]?\d+$', re.ASCII)


class NumberKind(Enum):
    """Width chosen for a decoded number literal."""

    INT32 = 'int32'
    INT64 = 'int64'
    BIGINT = 'bigint'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'

    @property
    def is_integer(self) -> bool:
        """True for the kinds decoded as int."""
        return self in (NumberKind.INT32, NumberKind.INT64, NumberKind.BIGINT)


def _float_kind(value: float) -> NumberKind | None:
    if not math.isfinite(value):
        return None
    if abs(value) <= FLOAT32_MAX:
        return NumberKind.FLOAT32
    return NumberKind.FLOAT64


def _narrow(literal: str, exact_integers: bool) -> tuple[NumberKind | None, int | float | None]:
    """Return (kind, value) for a JSON number literal."""
    if _INT_LITERAL.match(literal):
        number = int(literal)
        if INT32_MIN <= number <= INT32_MAX:
            return NumberKind.INT32, number
        if INT64_MIN <= number <= INT64_MAX:
            return NumberKind.INT64, number
        if exact_integers:
            return NumberKind.BIGINT, number
    try:
        value = float(literal)
    except (ValueError, OverflowError):
        return None, None
    kind = _float_kind(value)
    if kind is None:
        return None, None
    return kind, value


def classify_number(literal: str, exact_integers: bool = False) -> NumberKind | None:
    """Return the kind a JSON number literal narrows to.

    Args:
        literal: The number exactly as written in the JSON text.
        exact_integers: Classify out-of-range integers as BIGINT.

    Returns:
        The NumberKind, or None if no kind can represent the literal
        (e.g. ``1e400``, which overflows a 64-bit float).
    """
    return _narrow(literal, exact_integers)[0]


def decode_number(literal: str, exact_integers: bool = False) -> int | float | None:
    """Decode a JSON number literal following the narrowing order.

    Args:
        literal: The number exactly as written in the JSON text.
        exact_integers: Keep out-of-range integers as exact ints.

    Returns:
        An int or a float, or None if the literal cannot be represented.
    """
    return _narrow(literal, exact_integers)[1]


def parse_number_text(text: str | None) -> int | float | None:
    """Parse user-typed text into a number.

    Tries a 32-bit integer first, then a finite float. Surrounding
    whitespace is ignored. Anything else (empty text, words, 'nan',
    'inf', digit separators) yields None.
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    if _INT_TEXT.match(text):
        number = int(text)
        if INT32_MIN <= number <= INT32_MAX:
            return number
    if not _FLOAT_TEXT.match(text):
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
