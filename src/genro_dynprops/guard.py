# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ReentrancyGuard - Breaks feedback loops between mirrored properties.

Two-way synchronizations (text <-> value, date <-> time) re-enter
themselves: updating side A notifies a handler that updates side B, which
notifies a handler that updates side A... The guard is a per-instance
counter: the synchronization body runs only when the counter is zero.

Example:
    >>> guard = ReentrancyGuard()
    >>> def sync():
    ...     guard.run(sync)   # nested call is skipped
    >>> guard.run(sync)
    True
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator


class ReentrancyGuard:
    """Per-instance reentrancy counter.

    Attributes:
        depth: Number of active holds.
    """

    __slots__ = ('depth',)

    def __init__(self) -> None:
        self.depth = 0

    def __repr__(self) -> str:
        return f"ReentrancyGuard(depth={self.depth})"

    @property
    def active(self) -> bool:
        """True while a synchronization body is running."""
        return self.depth > 0

    @contextmanager
    def hold(self) -> Iterator[ReentrancyGuard]:
        """Mark a synchronization body as running, even if one already is."""
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1

    def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Run fn under the guard unless the guard is already active.

        Returns:
            True if fn ran.
        """
        if self.active:
            return False
        with self.hold():
            fn(*args, **kwargs)
        return True
