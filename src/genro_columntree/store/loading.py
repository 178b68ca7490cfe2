# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading a ColumnTree from plain records.

Records use the row shape produced by ColumnTree.as_list()::

    {'id': 'name', 'parentId': '-1', 'level': 0, 'title': '名称',
     'type': 'FIXED', 'children': None}

``parentId`` and ``level`` are optional: they follow from where the record
sits. When present they must agree with that position. Child columns
always load with children None.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..exceptions import DuplicateIdError, InvalidStructureError
from ..node import ROOT_PARENT_ID, ColumnKind, ColumnNode
from .core import ColumnTree


def _build_node(
    record: Mapping[str, Any],
    parent_id: str,
    level: int,
    seen: set[str],
) -> ColumnNode:
    if 'id' not in record:
        raise InvalidStructureError(f"Column record without id: {dict(record)!r}")
    node_id = str(record['id'])
    if node_id in seen:
        raise DuplicateIdError(node_id)
    seen.add(node_id)

    if record.get('parentId', parent_id) != parent_id:
        raise InvalidStructureError(
            f"Column '{node_id}' has parentId {record['parentId']!r}, "
            f"expected {parent_id!r}"
        )
    if record.get('level', level) != level:
        raise InvalidStructureError(
            f"Column '{node_id}' has level {record['level']!r}, expected {level}"
        )

    try:
        kind = ColumnKind(record.get('type', ColumnKind.CUSTOMIZE))
    except ValueError:
        raise InvalidStructureError(
            f"Column '{node_id}' has unknown type {record.get('type')!r}"
        ) from None
    if kind is ColumnKind.FIXED and level > 0:
        raise InvalidStructureError(f"FIXED column '{node_id}' cannot be a child")

    raw_children = record.get('children')
    children = None
    if level > 0:
        # an empty list on a child column loads as None
        if raw_children:
            raise InvalidStructureError(
                f"Column '{node_id}' is a child and cannot have children"
            )
    elif raw_children is not None:
        children = tuple(
            _build_node(child, node_id, level + 1, seen) for child in raw_children
        )

    return ColumnNode(
        node_id,
        parent_id=parent_id,
        level=level,
        title=record.get('title'),
        kind=kind,
        children=children,
    )


def load_from_list(records: Iterable[Mapping[str, Any]], **tree_options: Any) -> ColumnTree:
    """Build a ColumnTree from a list of root records.

    Args:
        records: Root records, each optionally holding ``children`` records.
        **tree_options: Passed to ColumnTree (id_factory, collation_key,
            protect_fixed).

    Returns:
        The loaded ColumnTree.

    Raises:
        DuplicateIdError: If an id appears more than once.
        InvalidStructureError: If a record is misplaced, nested too deep,
            has an unknown type, or is a FIXED child.

    Example:
        >>> tree = load_from_list([{'id': 'a', 'title': 'A', 'type': 'REMARK'}])
        >>> tree.get_node('a').level
        0
    """
    seen: set[str] = set()
    roots = tuple(_build_node(record, ROOT_PARENT_ID, 0, seen) for record in records)
    return ColumnTree(roots, **tree_options)


def dump_to_list(tree: ColumnTree) -> list[dict[str, Any]]:
    """Export a ColumnTree as records accepted by load_from_list()."""
    return tree.as_list()
