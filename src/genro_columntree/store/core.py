# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ColumnTree - An immutable two-level hierarchy of table columns.

This module provides the ColumnTree class, the store behind the column
editor. A ColumnTree is an ordered tuple of root columns; each root may hold
an ordered tuple of child columns, and children hold nothing further.

Every mutating operation returns a new ColumnTree and leaves the receiver
untouched. Nodes on the path to a change are copied; every other node is
shared with the previous tree.

Operations:
    - insert_root(fields): append a new root column
    - insert_child(parent_id, fields): append a child to a root column
    - update(node_id, fields): change title/kind of any column
    - delete(node_id): remove a column and its children
    - sort(direction) / toggle_sort(direction): sort each sibling group

Protected columns:
    FIXED columns cannot be deleted, retyped, or given children. These
    requests return the tree unchanged rather than raising; the editing
    session is where they are refused with an error. A tree built with
    protect_fixed=False applies them and relies on the session alone.

Example:
    Basic usage::

        tree = ColumnTree.default()
        tree = tree.insert_root(ColumnFields('Supplier', 'USER_FILL'))
        supplier = tree.roots[-1]
        tree = tree.insert_child(supplier.id, ColumnFields('Brand', 'CUSTOMIZE'))
        child = tree.get_node(supplier.id).children[0]
        tree = tree.update(child.id, ColumnFields('Maker'))
        tree, direction = tree.toggle_sort(SortDirection.ASCEND)
"""

from __future__ import annotations

import locale
import logging
from typing import Any, Iterator

from ..exceptions import ColumnNotFoundError, ColumnTreeError
from ..forms import ColumnFields
from ..ids import IdFactory, TimestampIdGenerator
from ..node import ROOT_PARENT_ID, ColumnKind, ColumnNode
from .sorting import CollationKey, SortDirection, sort_siblings

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = (
    ('code', '编号'),
    ('name', '名称'),
    ('remark', '工料概要说明'),
)

MAX_ID_ATTEMPTS = 100


class ColumnTree:
    """An immutable ordered hierarchy of columns.

    Attributes:
        roots: Tuple of root ColumnNode, in display order.
        id_factory: Callable producing fresh ids for inserted columns.
        collation_key: Key function applied to titles when sorting.
        protect_fixed: Whether the store itself guards FIXED columns.

    These three settings are handed on to every tree derived
    from this one.

    Example:
        >>> tree = ColumnTree(id_factory=CounterIdGenerator())
        >>> tree = tree.insert_root(ColumnFields('Price', 'REMARK'))
        >>> [node.id for node in tree]
        ['col-1']
    """

    __slots__ = ('_roots', 'id_factory', 'collation_key', 'protect_fixed')

    def __init__(
        self,
        roots: tuple[ColumnNode, ...] | list[ColumnNode] = (),
        id_factory: IdFactory | None = None,
        collation_key: CollationKey | None = None,
        protect_fixed: bool = True,
    ) -> None:
        """Initialize a ColumnTree.

        Args:
            roots: Root nodes. Trusted to satisfy the tree invariants; use
                load_from_list() to build a tree from untrusted records.
            id_factory: Id generator for new columns. Defaults to a
                TimestampIdGenerator.
            collation_key: Title sort key. Defaults to locale.strxfrm,
                which follows the process LC_COLLATE: code-point order
                until a collation locale is selected, e.g. with
                locale_collation('zh_CN.UTF-8').
            protect_fixed: If True (default), delete, insert_child and
                retyping leave FIXED columns alone. If False the store
                applies them unconditionally and protection is left to
                the caller (see ColumnSession).
        """
        self._roots = tuple(roots)
        self.id_factory = id_factory or TimestampIdGenerator()
        self.collation_key = collation_key or locale.strxfrm
        self.protect_fixed = protect_fixed

    @classmethod
    def default(
        cls,
        id_factory: IdFactory | None = None,
        collation_key: CollationKey | None = None,
        protect_fixed: bool = True,
    ) -> ColumnTree:
        """Return the initial tree with the three FIXED system columns."""
        roots = tuple(
            ColumnNode(node_id, title=title, kind=ColumnKind.FIXED)
            for node_id, title in DEFAULT_COLUMNS
        )
        return cls(
            roots,
            id_factory=id_factory,
            collation_key=collation_key,
            protect_fixed=protect_fixed,
        )

    def _derive(self, roots: tuple[ColumnNode, ...]) -> ColumnTree:
        return ColumnTree(
            roots,
            id_factory=self.id_factory,
            collation_key=self.collation_key,
            protect_fixed=self.protect_fixed,
        )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"ColumnTree({[node.id for node in self._roots]})"

    def __len__(self) -> int:
        """Return the number of root columns."""
        return len(self._roots)

    def __iter__(self) -> Iterator[ColumnNode]:
        """Iterate over root columns in order."""
        return iter(self._roots)

    def __contains__(self, node_id: object) -> bool:
        """Check if a column id exists at any level."""
        return self.get(node_id) is not None  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnTree):
            return NotImplemented
        return self._roots == other._roots

    __hash__ = None  # type: ignore[assignment]

    # ==================== Access ====================

    @property
    def roots(self) -> tuple[ColumnNode, ...]:
        """Root columns in order."""
        return self._roots

    def get(self, node_id: str, default: Any = None) -> ColumnNode | Any:
        """Return the column with the given id, or default."""
        for root in self._roots:
            if root.id == node_id:
                return root
            for child in root.children or ():
                if child.id == node_id:
                    return child
        return default

    def get_node(self, node_id: str) -> ColumnNode:
        """Return the column with the given id.

        Raises:
            ColumnNotFoundError: If no column has this id.
        """
        node = self.get(node_id)
        if node is None:
            raise ColumnNotFoundError(node_id)
        return node

    def walk(self) -> Iterator[ColumnNode]:
        """Yield every column depth-first: each root, then its children."""
        for root in self._roots:
            yield root
            yield from root.children or ()

    def ids(self) -> list[str]:
        """Return all column ids in walk order."""
        return [node.id for node in self.walk()]

    def as_list(self) -> list[dict[str, Any]]:
        """Export the tree as a list of nested records."""
        return [root.as_dict() for root in self._roots]

    # ==================== Mutations ====================

    def _new_id(self) -> str:
        existing = set(self.ids())
        for _ in range(MAX_ID_ATTEMPTS):
            node_id = self.id_factory()
            if node_id not in existing:
                return node_id
        raise ColumnTreeError(
            f"id_factory returned only ids already in use after {MAX_ID_ATTEMPTS} attempts"
        )

    def insert_root(self, fields: ColumnFields) -> ColumnTree:
        """Append a new root column.

        The new column gets a fresh id, level 0, ROOT_PARENT_ID as parent
        and no children tuple. It is the last element of the new tree's
        roots. FIXED columns are only seeded, so fields asking for a FIXED
        root return the tree unchanged.

        Raises:
            ColumnTreeError: If id_factory keeps returning ids in use.
        """
        if fields.kind is ColumnKind.FIXED:
            logger.debug("Refused new FIXED root column")
            return self
        node = ColumnNode(
            self._new_id(),
            parent_id=ROOT_PARENT_ID,
            level=0,
            title=fields.title,
            kind=fields.kind or ColumnKind.CUSTOMIZE,
        )
        logger.debug("Inserted root column %s", node.id)
        return self._derive(self._roots + (node,))

    def insert_child(self, parent_id: str, fields: ColumnFields) -> ColumnTree:
        """Append a new child column to the root with id parent_id.

        Only roots can hold children. The tree is returned unchanged when
        parent_id is not a root, when that root is FIXED, or when the
        fields ask for a FIXED child.
        """
        kind = fields.kind or ColumnKind.CUSTOMIZE
        if kind is ColumnKind.FIXED:
            logger.debug("Refused FIXED child under %s", parent_id)
            return self

        for index, root in enumerate(self._roots):
            if root.id != parent_id:
                continue
            if root.is_fixed and self.protect_fixed:
                logger.debug("Refused child under protected column %s", parent_id)
                return self
            child = ColumnNode(
                self._new_id(),
                parent_id=root.id,
                level=1,
                title=fields.title,
                kind=kind,
            )
            parent = root.replace(children=(root.children or ()) + (child,))
            logger.debug("Inserted child column %s under %s", child.id, parent_id)
            return self._derive(
                self._roots[:index] + (parent,) + self._roots[index + 1:]
            )

        logger.debug("No root column %s to insert a child into", parent_id)
        return self

    def update(self, node_id: str, fields: ColumnFields) -> ColumnTree:
        """Change the title and kind of the column with id node_id.

        fields.kind None keeps the current kind, and a FIXED column stays
        FIXED unless protect_fixed is off. No column is ever turned FIXED. id, parent_id, level and children
        are never changed. An unknown node_id returns the same tree: updating
        a column that is not there is not an error.
        """

        def _apply(node: ColumnNode) -> ColumnNode:
            kind = node.kind
            if fields.kind is ColumnKind.FIXED and not node.is_fixed:
                logger.debug("Refused to make column %s FIXED", node.id)
            elif fields.kind is not None and not (node.is_fixed and self.protect_fixed):
                kind = fields.kind
            return node.replace(title=fields.title, kind=kind)

        def _update(nodes: tuple[ColumnNode, ...]) -> tuple[ColumnNode, ...] | None:
            for index, node in enumerate(nodes):
                if node.id == node_id:
                    replaced = _apply(node)
                elif node.children is not None:
                    children = _update(node.children)
                    if children is None:
                        continue
                    replaced = node.replace(children=children)
                else:
                    continue
                return nodes[:index] + (replaced,) + nodes[index + 1:]
            return None

        roots = _update(self._roots)
        if roots is None:
            logger.debug("No column %s to update", node_id)
            return self
        return self._derive(roots)

    def delete(self, node_id: str) -> ColumnTree:
        """Remove the column with id node_id and all of its children.

        Remaining siblings keep their order. When the last child of a root
        is removed the root keeps an empty children tuple. FIXED columns
        and unknown ids leave the tree unchanged.
        """

        def _delete(nodes: tuple[ColumnNode, ...]) -> tuple[ColumnNode, ...] | None:
            for index, node in enumerate(nodes):
                if node.id == node_id:
                    if node.is_fixed and self.protect_fixed:
                        logger.debug("Refused to delete protected column %s", node_id)
                        return None
                    return nodes[:index] + nodes[index + 1:]
                if node.children is not None:
                    children = _delete(node.children)
                    if children is not None:
                        replaced = node.replace(children=children)
                        return nodes[:index] + (replaced,) + nodes[index + 1:]
            return None

        roots = _delete(self._roots)
        if roots is None:
            return self
        logger.debug("Deleted column %s", node_id)
        return self._derive(roots)

    def sort(self, direction: SortDirection | str) -> ColumnTree:
        """Return a tree with every sibling group sorted by title.

        Roots are sorted among themselves and each children tuple on its
        own. The sort is stable in both directions.
        """
        direction = SortDirection(direction)
        return self._derive(sort_siblings(self._roots, direction, self.collation_key))

    def toggle_sort(
        self, direction: SortDirection | str
    ) -> tuple[ColumnTree, SortDirection]:
        """Sort in direction and return the direction for the next toggle.

        Returns:
            Tuple of (sorted_tree, next_direction).
        """
        direction = SortDirection(direction)
        return self.sort(direction), direction.toggled()
