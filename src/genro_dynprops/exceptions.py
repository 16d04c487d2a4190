# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DynProps exceptions."""

from __future__ import annotations


class DynPropsError(Exception):
    """Base exception for DynProps errors."""

    pass


class ParseError(DynPropsError, ValueError):
    """Raised when a JSON text is malformed.

    Attributes:
        lineno: Line of the error (1-based), or None if unknown.
        colno: Column of the error (1-based), or None if unknown.
        pos: Character offset of the error, or None if unknown.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        colno: int | None = None,
        pos: int | None = None,
    ) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


class SerializationError(DynPropsError, ValueError):
    """Raised when a tree holds a value JSON cannot express."""

    pass
