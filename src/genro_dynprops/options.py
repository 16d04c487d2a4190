# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Options shared by the JSON ingestor, the store and the serializer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class ParseMode(Enum):
    """How JSON arrays are converted.

    GENERAL keeps every element kind (scalars, objects, nested arrays).
    STRICT_OBJECTS keeps only object elements, producing lists of
    homogeneous mapped sub-objects.
    """

    GENERAL = 'general'
    STRICT_OBJECTS = 'strict_objects'


@dataclass(frozen=True)
class JsonOptions:
    """Conversion settings carried by a store for its whole lifetime.

    Attributes:
        mode: Array conversion mode, see ParseMode.
        indent: Indentation used by the serializer (None for compact output).
        exact_integers: Keep integer literals outside the 64-bit range as
            exact ints instead of falling through to float.
        ensure_ascii: Escape non-ASCII characters when serializing.
    """

    mode: ParseMode = ParseMode.GENERAL
    indent: int | None = 2
    exact_integers: bool = False
    ensure_ascii: bool = False

    def replace(self, **changes: Any) -> JsonOptions:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


DEFAULT_OPTIONS = JsonOptions()
