# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ColumnTree exceptions."""

from __future__ import annotations


class ColumnTreeError(Exception):
    """Base exception for ColumnTree errors."""

    pass


class ColumnValidationError(ColumnTreeError):
    """Raised when submitted form fields are invalid.

    Attributes:
        errors: Mapping of field name to the message shown next to the field.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = ', '.join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(f"Invalid fields ({detail})")


class ProtectedColumnError(ColumnTreeError):
    """Raised when an action is requested on a FIXED column."""

    def __init__(self, node_id: str, action: str) -> None:
        self.node_id = node_id
        self.action = action
        super().__init__(f"Cannot {action} protected column '{node_id}'")


class ColumnNotFoundError(ColumnTreeError, KeyError):
    """Raised by strict lookups when a column id is not in the tree."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Column '{node_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class InvalidStructureError(ColumnTreeError):
    """Raised when loaded records do not form a valid two-level tree."""

    pass


class DuplicateIdError(InvalidStructureError):
    """Raised when the same column id appears twice."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Duplicate column id '{node_id}'")


class ChildNestingError(ColumnTreeError):
    """Raised when a child is requested under a column that is itself a child."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Column '{node_id}' is a child column and cannot hold children")
