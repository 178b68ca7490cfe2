# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Sibling-group sorting for ColumnTree."""

from __future__ import annotations

import locale
from enum import Enum
from typing import Any, Callable

from ..node import ColumnNode

CollationKey = Callable[[str], Any]


def locale_collation(name: str = '') -> CollationKey:
    """Select the collation locale and return its sort key.

    Python starts with the C collation, where titles compare by code
    point. This sets LC_COLLATE for the process and returns
    locale.strxfrm, which from then on compares titles under that
    locale (pinyin order for zh_CN, case-insensitive first for en_US).

    Args:
        name: Locale name such as 'zh_CN.UTF-8'. The empty string selects
            the locale of the environment (LC_ALL, LC_COLLATE, LANG).

    Returns:
        locale.strxfrm, usable as ColumnTree collation_key.

    Raises:
        locale.Error: If the locale is not installed.
    """
    locale.setlocale(locale.LC_COLLATE, name)
    return locale.strxfrm


class SortDirection(str, Enum):
    """Direction of the title sort. Toggles ASCEND <-> DESCEND."""

    ASCEND = 'ascend'
    DESCEND = 'descend'

    @property
    def label(self) -> str:
        """Display label of the direction."""
        return '升序' if self is SortDirection.ASCEND else '降序'

    def toggled(self) -> SortDirection:
        """Return the opposite direction."""
        if self is SortDirection.ASCEND:
            return SortDirection.DESCEND
        return SortDirection.ASCEND


def sort_siblings(
    nodes: tuple[ColumnNode, ...],
    direction: SortDirection,
    key: CollationKey,
) -> tuple[ColumnNode, ...]:
    """Sort each sibling group by title, recursively.

    The group ``nodes`` is sorted, and so is every children tuple below it,
    each on its own: nodes never move to a different parent. Titles that
    are None sort as ''. Equal titles keep their relative order in both
    directions.

    Args:
        nodes: One sibling group.
        direction: ASCEND or DESCEND.
        key: Collation key applied to titles (e.g. locale.strxfrm).

    Returns:
        A new tuple of new nodes. Absent children stay None.
    """
    resorted = [
        node if node.children is None
        else node.replace(children=sort_siblings(node.children, direction, key))
        for node in nodes
    ]
    resorted.sort(
        key=lambda node: key(node.title or ''),
        reverse=direction is SortDirection.DESCEND,
    )
    return tuple(resorted)
