# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-ColumnTree - Editable two-level hierarchy of table columns.

A lightweight, zero-dependency library holding the column schema of a
table: root columns that may hold child columns, edited through pure
insert, update, delete and sort operations.
"""

__version__ = "0.1.0"

from .exceptions import (
    ColumnNotFoundError,
    ColumnTreeError,
    ChildNestingError,
    ColumnValidationError,
    DuplicateIdError,
    InvalidStructureError,
    ProtectedColumnError,
)
from .forms import ColumnFields, validate_fields
from .ids import CounterIdGenerator, TimestampIdGenerator, uuid_id
from .node import ROOT_PARENT_ID, ColumnKind, ColumnNode
from .session import ColumnSession
from .store import (
    ColumnTree,
    SortDirection,
    dump_to_list,
    load_from_list,
    locale_collation,
)

__all__ = [
    # Core classes
    "ColumnTree",
    "ColumnNode",
    "ColumnKind",
    "ColumnSession",
    "SortDirection",
    "ROOT_PARENT_ID",
    # Fields
    "ColumnFields",
    "validate_fields",
    # Ids
    "CounterIdGenerator",
    "TimestampIdGenerator",
    "uuid_id",
    # Loading
    "load_from_list",
    "dump_to_list",
    # Sorting
    "locale_collation",
    # Exceptions
    "ColumnTreeError",
    "ColumnValidationError",
    "ProtectedColumnError",
    "ChildNestingError",
    "ColumnNotFoundError",
    "InvalidStructureError",
    "DuplicateIdError",
]
