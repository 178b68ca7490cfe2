# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Column id generators.

An id factory is any callable taking no arguments and returning a new
string id. ColumnTree calls it once per inserted column and skips values
already present in the tree.
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

IdFactory = Callable[[], str]


class TimestampIdGenerator:
    """Millisecond timestamp ids that never repeat.

    Ids look like ``'1718031234567'``. When two ids are requested within
    the same millisecond, the second one is the previous value plus one.

    Example:
        >>> gen = TimestampIdGenerator(clock=lambda: 1.0)
        >>> gen(), gen()
        ('1000', '1001')
    """

    __slots__ = ('_clock', '_last')

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """Initialize the generator.

        Args:
            clock: Function returning the current time in seconds.
                Defaults to time.time.
        """
        self._clock = clock or time.time
        self._last = 0

    def __call__(self) -> str:
        value = int(self._clock() * 1000)
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return str(value)


class CounterIdGenerator:
    """Sequential ids with a prefix: ``col-1``, ``col-2``, ...

    Example:
        >>> gen = CounterIdGenerator()
        >>> gen(), gen()
        ('col-1', 'col-2')
    """

    __slots__ = ('prefix', '_next')

    def __init__(self, prefix: str = 'col', start: int = 1) -> None:
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = self._next
        self._next += 1
        return f"{self.prefix}-{value}"


def uuid_id() -> str:
    """Return a random UUID4 hex id."""
    return uuid.uuid4().hex
