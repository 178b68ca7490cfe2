# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ColumnSession - Editing state around a ColumnTree.

A ColumnSession is owned by the presentation layer for the lifetime of one
editor. It holds the current tree, the sort direction and the state of the
create/edit dialog, and turns user intents into ColumnTree operations:

- new_root() / new_child(id) / edit(id) open the dialog
- submit(title, kind) validates the form and applies it
- cancel() closes the dialog
- delete(id) and toggle_sort() act directly

After each intent the caller redraws from ``session.tree`` (or rows()).

Protected columns:
    Adding a child to, deleting, or retyping a FIXED column is an action
    the presentation layer should not offer; can_add_child(), can_delete()
    and can_retype() tell it which. If such an intent arrives anyway it
    raises ProtectedColumnError, or is ignored when the session was built
    with raise_on_protected=False.

Example:
    >>> session = ColumnSession()
    >>> session.new_root()
    >>> tree = session.submit('Brand', 'CUSTOMIZE')
    >>> session.toggle_sort()
    '排序方式已切换为 降序'
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import ChildNestingError, ColumnTreeError, ProtectedColumnError
from .forms import validate_fields
from .ids import IdFactory
from .node import ColumnKind, ColumnNode
from .store import ColumnTree, SortDirection
from .store.sorting import CollationKey

logger = logging.getLogger(__name__)

SORT_NOTICE = '排序方式已切换为 {label}'


class ColumnSession:
    """Editing session over a ColumnTree.

    Attributes:
        tree: The current ColumnTree. Replaced (never modified) by intents.
        sort_direction: Direction the next toggle_sort() applies.
        dialog_open: True while the create/edit dialog is shown.
        editing: The column being edited, or None when creating.
        parent_id: Root id a new child goes under, or None for a new root.
        raise_on_protected: If True (default), refused intents raise
            ProtectedColumnError (FIXED columns) or ChildNestingError
            (children of a child column). If False they are ignored.
    """

    def __init__(
        self,
        tree: ColumnTree | None = None,
        id_factory: IdFactory | None = None,
        collation_key: CollationKey | None = None,
        raise_on_protected: bool = True,
    ) -> None:
        """Initialize a ColumnSession.

        Args:
            tree: Starting tree. Defaults to ColumnTree.default() built
                with id_factory and collation_key.
            id_factory: Id generator for the default tree.
            collation_key: Title sort key for the default tree.
            raise_on_protected: See class docstring.
        """
        if tree is None:
            tree = ColumnTree.default(id_factory=id_factory, collation_key=collation_key)
        self.tree = tree
        self.sort_direction = SortDirection.ASCEND
        self.dialog_open = False
        self.editing: ColumnNode | None = None
        self.parent_id: str | None = None
        self.raise_on_protected = raise_on_protected

    def __repr__(self) -> str:
        return (
            f"ColumnSession({self.tree!r}, sort={self.sort_direction.value}, "
            f"dialog_open={self.dialog_open})"
        )

    # ==================== Action availability ====================

    def can_add_child(self, node_id: str) -> bool:
        """True if a child may be added under node_id."""
        node = self.tree.get(node_id)
        return node is not None and node.level == 0 and not node.is_fixed

    def can_delete(self, node_id: str) -> bool:
        """True if node_id may be deleted."""
        node = self.tree.get(node_id)
        return node is not None and not node.is_fixed

    def can_retype(self, node_id: str) -> bool:
        """True if the kind of node_id may be changed."""
        return self.can_delete(node_id)

    def _refuse(self, error: ColumnTreeError) -> bool:
        if self.raise_on_protected:
            raise error
        logger.debug("Ignored refused intent: %s", error)
        return False

    # ==================== Dialog ====================

    @property
    def dialog_title(self) -> str:
        """Title of the dialog for the current mode."""
        return '编辑' if self.editing is not None else '新建'

    @property
    def shows_kind_field(self) -> bool:
        """False when editing a FIXED column: its kind is not editable."""
        return self.editing is None or not self.editing.is_fixed

    def new_root(self) -> None:
        """Open the dialog to create a root column."""
        self.editing = None
        self.parent_id = None
        self.dialog_open = True

    def new_child(self, node_id: str) -> bool:
        """Open the dialog to create a child of node_id.

        Raises:
            ColumnNotFoundError: If node_id is not in the tree.
            ChildNestingError: If node_id is a child column and
                raise_on_protected is set.
            ProtectedColumnError: If node_id is FIXED and
                raise_on_protected is set.
        """
        node = self.tree.get_node(node_id)
        if node.level > 0:
            return self._refuse(ChildNestingError(node_id))
        if node.is_fixed:
            return self._refuse(ProtectedColumnError(node_id, 'add a child to'))
        self.editing = None
        self.parent_id = node_id
        self.dialog_open = True
        return True

    def edit(self, node_id: str) -> dict[str, Any]:
        """Open the dialog to edit node_id.

        Returns:
            Initial form values: ``title`` and ``type``.

        Raises:
            ColumnNotFoundError: If node_id is not in the tree.
        """
        node = self.tree.get_node(node_id)
        self.editing = node
        self.parent_id = None
        self.dialog_open = True
        return {'title': node.title, 'type': node.kind.value}

    def submit(self, title: str | None, kind: ColumnKind | str | None = None) -> ColumnTree:
        """Validate the form and apply it to the tree.

        The dialog mode decides the operation: update when editing, insert
        a child when a parent was chosen, insert a root otherwise. On
        success the dialog closes.

        Returns:
            The new tree (also stored in ``self.tree``).

        Raises:
            ColumnTreeError: If no dialog is open.
            ColumnValidationError: If the fields are invalid. The dialog
                stays open.
        """
        if not self.dialog_open:
            raise ColumnTreeError("No create/edit dialog is open")
        fields = validate_fields(title, kind, editing=self.editing)

        previous = self.tree
        if self.editing is not None:
            self.tree = previous.update(self.editing.id, fields)
            action = f"Updated column {self.editing.id}"
        elif self.parent_id is not None:
            self.tree = previous.insert_child(self.parent_id, fields)
            action = f"Added child column under {self.parent_id}"
        else:
            self.tree = previous.insert_root(fields)
            action = f"Added root column {self.tree.roots[-1].id}"

        if self.tree is previous:
            logger.warning("Column form submitted but the tree did not change")
        else:
            logger.info(action)

        self.cancel()
        return self.tree

    def cancel(self) -> None:
        """Close the dialog without touching the tree."""
        self.dialog_open = False
        self.editing = None
        self.parent_id = None

    # ==================== Direct intents ====================

    def delete(self, node_id: str) -> bool:
        """Delete node_id and its children.

        Returns:
            True if the column was deleted, False if it was not there or
            was protected and raise_on_protected is off.

        Raises:
            ProtectedColumnError: If node_id is FIXED and
                raise_on_protected is set.
        """
        node = self.tree.get(node_id)
        if node is None:
            return False
        if node.is_fixed:
            return self._refuse(ProtectedColumnError(node_id, 'delete'))
        self.tree = self.tree.delete(node_id)
        logger.info("Deleted column %s", node_id)
        return True

    @property
    def sort_label(self) -> str:
        """Label for the sort toggle control."""
        return self.sort_direction.label

    def toggle_sort(self) -> str:
        """Sort the tree in the current direction and flip it.

        Returns:
            Confirmation notice naming the direction now in effect.
        """
        self.tree, self.sort_direction = self.tree.toggle_sort(self.sort_direction)
        notice = SORT_NOTICE.format(label=self.sort_direction.label)
        logger.info(notice)
        return notice

    def rows(self) -> list[dict[str, Any]]:
        """Records for rendering, each with a ``typeLabel`` display string."""

        def _decorate(record: dict[str, Any]) -> dict[str, Any]:
            record['typeLabel'] = ColumnKind(record['type']).label
            if record['children'] is not None:
                record['children'] = [_decorate(child) for child in record['children']]
            return record

        return [_decorate(record) for record in self.tree.as_list()]
