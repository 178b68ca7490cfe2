# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ColumnTree node classes."""

from __future__ import annotations

from enum import Enum
from typing import Any

ROOT_PARENT_ID = '-1'
"""Parent id carried by root columns."""

_UNSET: Any = object()


class ColumnKind(str, Enum):
    """The type of a column.

    FIXED columns are system defaults: they are seeded as roots and can
    never be deleted, retyped, or given children.
    """

    CUSTOMIZE = 'CUSTOMIZE'
    FIXED = 'FIXED'
    REMARK = 'REMARK'
    USER_FILL = 'USER_FILL'

    @property
    def label(self) -> str:
        """Display label of the kind."""
        return _KIND_LABELS[self]

    @classmethod
    def selectable(cls) -> tuple[ColumnKind, ...]:
        """Kinds a user may assign to a column."""
        return (cls.CUSTOMIZE, cls.REMARK, cls.USER_FILL)


_KIND_LABELS = {
    ColumnKind.CUSTOMIZE: '自定义逻辑',
    ColumnKind.FIXED: '系统默认',
    ColumnKind.REMARK: '备注列',
    ColumnKind.USER_FILL: '用户填列',
}


class ColumnNode:
    """A column in a ColumnTree.

    Each node has:
    - id: Unique across the whole tree, never changes
    - parent_id: Id of the owning root, or ROOT_PARENT_ID for roots
    - level: 0 for roots, 1 for children
    - title: Display label (may be None while under construction)
    - kind: The ColumnKind
    - children: Tuple of child nodes, or None when the node has none

    An absent children tuple (None) and an empty one are different states:
    a node only gets a tuple when a child is added to it.

    Nodes are treated as values. ColumnTree never changes a node in place;
    use replace() to derive a modified copy.

    Example:
        >>> node = ColumnNode('c1', title='Price', kind=ColumnKind.REMARK)
        >>> node.is_root
        True
        >>> node.replace(title='Cost').title
        'Cost'
    """

    __slots__ = ('id', 'parent_id', 'level', 'title', 'kind', 'children')

    def __init__(
        self,
        id: str,
        parent_id: str = ROOT_PARENT_ID,
        level: int = 0,
        title: str | None = None,
        kind: ColumnKind | str = ColumnKind.CUSTOMIZE,
        children: tuple[ColumnNode, ...] | list[ColumnNode] | None = None,
    ) -> None:
        """Initialize a ColumnNode.

        Args:
            id: The column id.
            parent_id: Id of the parent column, ROOT_PARENT_ID for roots.
            level: Depth of the column (0 or 1).
            title: Optional display label.
            kind: A ColumnKind or its string value.
            children: Optional sequence of child nodes, stored as a tuple.
        """
        self.id = id
        self.parent_id = parent_id
        self.level = level
        self.title = title
        self.kind = ColumnKind(kind)
        self.children = tuple(children) if children is not None else None

    def __repr__(self) -> str:
        children_repr = (
            'None' if self.children is None else f"[{len(self.children)}]"
        )
        return (
            f"ColumnNode({self.id!r}, title={self.title!r}, "
            f"kind={self.kind.value}, level={self.level}, "
            f"children={children_repr})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnNode):
            return NotImplemented
        return (
            self.id == other.id
            and self.parent_id == other.parent_id
            and self.level == other.level
            and self.title == other.title
            and self.kind == other.kind
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_root(self) -> bool:
        """True if this node sits in the top-level sequence."""
        return self.parent_id == ROOT_PARENT_ID

    @property
    def is_fixed(self) -> bool:
        """True if this node is a protected system column."""
        return self.kind is ColumnKind.FIXED

    @property
    def has_children(self) -> bool:
        """True if this node holds at least one child."""
        return bool(self.children)

    def replace(
        self,
        *,
        title: str | None = _UNSET,
        kind: ColumnKind | str = _UNSET,
        children: tuple[ColumnNode, ...] | list[ColumnNode] | None = _UNSET,
    ) -> ColumnNode:
        """Return a copy of this node with the given fields changed.

        id, parent_id and level cannot be changed: they are fixed when the
        node is created.
        """
        return ColumnNode(
            self.id,
            parent_id=self.parent_id,
            level=self.level,
            title=self.title if title is _UNSET else title,
            kind=self.kind if kind is _UNSET else kind,
            children=self.children if children is _UNSET else children,
        )

    def as_dict(self) -> dict[str, Any]:
        """Export the node (and its children) as a plain record.

        The record uses the row shape consumed by the presentation layer:
        ``id``, ``parentId``, ``level``, ``title``, ``type``, ``children``.
        """
        return {
            'id': self.id,
            'parentId': self.parent_id,
            'level': self.level,
            'title': self.title,
            'type': self.kind.value,
            'children': (
                [child.as_dict() for child in self.children]
                if self.children is not None
                else None
            ),
        }
