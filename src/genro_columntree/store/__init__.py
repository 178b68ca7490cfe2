# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ColumnTree package - The column hierarchy store.

The package is organized into:
- core: ColumnTree, the immutable tree with insert/update/delete/sort
- sorting: SortDirection and the per-sibling-group sort
- loading: Building a tree from plain records and exporting it back

Example:
    >>> from genro_columntree import ColumnTree, ColumnFields
    >>> tree = ColumnTree.default()
    >>> tree = tree.insert_root(ColumnFields('Unit', 'USER_FILL'))
    >>> len(tree)
    4
"""

from .core import DEFAULT_COLUMNS, ColumnTree
from .loading import dump_to_list, load_from_list
from .sorting import SortDirection, locale_collation

__all__ = [
    "ColumnTree",
    "DEFAULT_COLUMNS",
    "SortDirection",
    "dump_to_list",
    "load_from_list",
    "locale_collation",
]
