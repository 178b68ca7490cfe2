# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Validation of the column form.

The form collects a title and, unless a FIXED column is being edited, a
column kind. validate_fields() turns the raw input into a ColumnFields
record or raises ColumnValidationError with one message per bad field.
"""

from __future__ import annotations

from typing import Any

from .exceptions import ColumnValidationError
from .node import ColumnKind, ColumnNode

TITLE_REQUIRED = '请输入名称'
KIND_REQUIRED = '请选择列类型'


class ColumnFields:
    """Validated field values for creating or editing a column.

    Attributes:
        title: The column title.
        kind: The column kind, or None to keep the current kind on edit.
    """

    __slots__ = ('title', 'kind')

    def __init__(self, title: str | None, kind: ColumnKind | str | None = None) -> None:
        self.title = title
        self.kind = ColumnKind(kind) if kind is not None else None

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind is not None else None
        return f"ColumnFields(title={self.title!r}, kind={kind!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnFields):
            return NotImplemented
        return self.title == other.title and self.kind == other.kind

    __hash__ = None  # type: ignore[assignment]


def _coerce_kind(kind: Any) -> ColumnKind | None:
    if kind is None or kind == '':
        return None
    try:
        return ColumnKind(kind)
    except ValueError:
        return None


def validate_fields(
    title: str | None,
    kind: ColumnKind | str | None = None,
    editing: ColumnNode | None = None,
) -> ColumnFields:
    """Validate raw form input.

    Args:
        title: Submitted title. Required, must not be blank.
        kind: Submitted kind, as ColumnKind or its string value. Required
            and must be a selectable kind, except when editing a FIXED
            column: then the kind field is not shown and is ignored.
        editing: The column being edited, or None when creating one.

    Returns:
        The validated ColumnFields.

    Raises:
        ColumnValidationError: With ``errors`` keyed by ``'title'`` and/or
            ``'type'``.
    """
    errors: dict[str, str] = {}
    if title is None or not str(title).strip():
        errors['title'] = TITLE_REQUIRED

    fixed_edit = editing is not None and editing.is_fixed
    resolved = None
    if not fixed_edit:
        resolved = _coerce_kind(kind)
        if resolved is None or resolved not in ColumnKind.selectable():
            errors['type'] = KIND_REQUIRED

    if errors:
        raise ColumnValidationError(errors)
    return ColumnFields(title, resolved)
