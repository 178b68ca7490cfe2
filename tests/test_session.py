# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for ColumnSession."""

import logging

import pytest

from genro_columntree import (
    ChildNestingError,
    ColumnKind,
    ColumnNotFoundError,
    ColumnSession,
    ColumnTreeError,
    ColumnValidationError,
    CounterIdGenerator,
    ProtectedColumnError,
    SortDirection,
)


def make_session(**options):
    options.setdefault('id_factory', CounterIdGenerator())
    options.setdefault('collation_key', str)
    return ColumnSession(**options)


def add_root(session, title='supplier', kind='USER_FILL'):
    session.new_root()
    session.submit(title, kind)
    return session.tree.roots[-1]


class TestSessionBasic:
    """Tests for session defaults and action availability."""

    def test_defaults(self):
        """Test a new session starts on the seeded tree."""
        session = make_session()
        assert session.tree.ids() == ['code', 'name', 'remark']
        assert session.sort_direction is SortDirection.ASCEND
        assert session.sort_label == '升序'
        assert session.dialog_open is False
        assert session.editing is None
        assert session.parent_id is None

    def test_given_tree(self):
        """Test a session can start from an existing tree."""
        first = make_session()
        add_root(first)
        second = ColumnSession(first.tree)
        assert second.tree is first.tree

    def test_fixed_actions_disabled(self):
        """Test FIXED columns cannot get children, be deleted or retyped."""
        session = make_session()
        for node_id in ('code', 'name', 'remark'):
            assert session.can_add_child(node_id) is False
            assert session.can_delete(node_id) is False
            assert session.can_retype(node_id) is False

    def test_regular_actions_enabled(self):
        """Test user columns allow every action."""
        session = make_session()
        root = add_root(session)
        assert session.can_add_child(root.id) is True
        assert session.can_delete(root.id) is True
        assert session.can_retype(root.id) is True

    def test_child_cannot_hold_children(self):
        """Test level 1 columns cannot get children."""
        session = make_session()
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'CUSTOMIZE')
        child = session.tree.get_node(root.id).children[0]
        assert session.can_add_child(child.id) is False
        assert session.can_delete(child.id) is True

    def test_unknown_actions_disabled(self):
        """Test unknown ids allow nothing."""
        session = make_session()
        assert session.can_add_child('missing') is False
        assert session.can_delete('missing') is False


class TestSessionDialog:
    """Tests for the create/edit dialog flow."""

    def test_new_root(self):
        """Test creating a root column."""
        session = make_session()
        session.new_root()
        assert session.dialog_open is True
        assert session.dialog_title == '新建'
        assert session.shows_kind_field is True
        tree = session.submit('supplier', 'USER_FILL')
        assert tree is session.tree
        node = tree.roots[-1]
        assert node.id == 'col-1'
        assert node.title == 'supplier'
        assert node.kind is ColumnKind.USER_FILL
        assert session.dialog_open is False

    def test_new_child(self):
        """Test creating a child column."""
        session = make_session()
        root = add_root(session)
        assert session.new_child(root.id) is True
        assert session.parent_id == root.id
        session.submit('brand', 'CUSTOMIZE')
        children = session.tree.get_node(root.id).children
        assert [c.title for c in children] == ['brand']
        assert children[0].level == 1
        assert session.parent_id is None

    def test_new_child_of_fixed_raises(self):
        """Test a child of a FIXED column is refused."""
        session = make_session()
        with pytest.raises(ProtectedColumnError) as exc:
            session.new_child('name')
        assert exc.value.node_id == 'name'
        assert session.dialog_open is False

    def test_new_child_of_fixed_ignored(self):
        """Test refusal without raising."""
        session = make_session(raise_on_protected=False)
        assert session.new_child('name') is False
        assert session.dialog_open is False

    def test_new_child_of_child_raises_nesting_error(self):
        """Test a child column is refused as a parent without calling it protected."""
        session = make_session()
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'CUSTOMIZE')
        child = session.tree.get_node(root.id).children[0]
        with pytest.raises(ChildNestingError, match='child column') as exc:
            session.new_child(child.id)
        assert not isinstance(exc.value, ProtectedColumnError)
        assert exc.value.node_id == child.id
        assert session.dialog_open is False

    def test_new_child_of_child_ignored(self):
        """Test nesting refusal without raising."""
        session = make_session(raise_on_protected=False)
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'CUSTOMIZE')
        child = session.tree.get_node(root.id).children[0]
        assert session.new_child(child.id) is False

    def test_submit_child_after_parent_deleted(self, caplog):
        """Test a child submit whose parent vanished changes nothing and says so."""
        session = make_session()
        root = add_root(session)
        session.new_child(root.id)
        session.delete(root.id)
        tree = session.tree
        with caplog.at_level(logging.INFO, logger='genro_columntree.session'):
            session.submit('brand', 'CUSTOMIZE')
        assert session.tree is tree
        assert session.dialog_open is False
        messages = [r.getMessage() for r in caplog.records]
        assert not any(m.startswith('Added child column') for m in messages)
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_new_child_unknown_raises(self):
        """Test opening a child dialog for a missing column."""
        with pytest.raises(ColumnNotFoundError):
            make_session().new_child('missing')

    def test_edit_regular(self):
        """Test editing title and kind of a user column."""
        session = make_session()
        root = add_root(session)
        values = session.edit(root.id)
        assert values == {'title': 'supplier', 'type': 'USER_FILL'}
        assert session.dialog_title == '编辑'
        assert session.shows_kind_field is True
        session.submit('vendor', 'REMARK')
        node = session.tree.get_node(root.id)
        assert node.title == 'vendor'
        assert node.kind is ColumnKind.REMARK
        assert node.id == root.id

    def test_edit_fixed(self):
        """Test a FIXED column is renamed without a kind."""
        session = make_session()
        values = session.edit('code')
        assert values == {'title': '编号', 'type': 'FIXED'}
        assert session.shows_kind_field is False
        session.submit('Serial')
        node = session.tree.get_node('code')
        assert node.title == 'Serial'
        assert node.kind is ColumnKind.FIXED

    def test_edit_fixed_ignores_kind(self):
        """Test a kind submitted for a FIXED column is dropped."""
        session = make_session()
        session.edit('code')
        session.submit('Serial', 'REMARK')
        assert session.tree.get_node('code').kind is ColumnKind.FIXED

    def test_edit_unknown_raises(self):
        """Test editing a missing column."""
        with pytest.raises(ColumnNotFoundError):
            make_session().edit('missing')

    def test_invalid_submit_keeps_dialog(self):
        """Test validation errors leave the dialog open and the tree alone."""
        session = make_session()
        tree = session.tree
        session.new_root()
        with pytest.raises(ColumnValidationError) as exc:
            session.submit('', None)
        assert exc.value.errors == {'title': '请输入名称', 'type': '请选择列类型'}
        assert session.dialog_open is True
        assert session.tree is tree

    def test_submit_without_dialog(self):
        """Test submit needs an open dialog."""
        with pytest.raises(ColumnTreeError, match='No create/edit dialog'):
            make_session().submit('a', 'REMARK')

    def test_cancel(self):
        """Test cancel closes the dialog and keeps the tree."""
        session = make_session()
        tree = session.tree
        session.edit('code')
        session.cancel()
        assert session.dialog_open is False
        assert session.editing is None
        assert session.tree is tree

    def test_previous_tree_not_changed(self):
        """Test intents replace the tree, never modify it."""
        session = make_session()
        before = session.tree
        snapshot = before.as_list()
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'CUSTOMIZE')
        session.delete(root.id)
        assert before.as_list() == snapshot


class TestSessionDelete:
    """Tests for ColumnSession.delete()."""

    def test_delete_regular(self):
        """Test deleting a user column and its children."""
        session = make_session()
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'CUSTOMIZE')
        assert session.delete(root.id) is True
        assert session.tree.ids() == ['code', 'name', 'remark']

    def test_delete_fixed_raises(self):
        """Test deleting a FIXED column is refused."""
        session = make_session()
        with pytest.raises(ProtectedColumnError) as exc:
            session.delete('code')
        assert exc.value.action == 'delete'
        assert 'code' in session.tree

    def test_delete_fixed_ignored(self):
        """Test refusal without raising."""
        session = make_session(raise_on_protected=False)
        assert session.delete('code') is False
        assert 'code' in session.tree

    def test_delete_unknown(self):
        """Test deleting a missing column is a no-op."""
        session = make_session()
        tree = session.tree
        assert session.delete('missing') is False
        assert session.tree is tree


class TestSessionSort:
    """Tests for ColumnSession.toggle_sort() and rows()."""

    def test_toggle_sort(self):
        """Test notices and direction across two toggles."""
        session = make_session()
        for title in ('pear', 'apple'):
            add_root(session, title)
        notice = session.toggle_sort()
        assert notice == '排序方式已切换为 降序'
        assert session.sort_direction is SortDirection.DESCEND
        assert session.sort_label == '降序'
        titles = [n.title for n in session.tree]
        assert titles == sorted(titles)

        notice = session.toggle_sort()
        assert notice == '排序方式已切换为 升序'
        assert session.sort_direction is SortDirection.ASCEND
        assert [n.title for n in session.tree] == sorted(titles, reverse=True)

    def test_rows(self):
        """Test rendered rows carry type labels at both levels."""
        session = make_session()
        root = add_root(session)
        session.new_child(root.id)
        session.submit('brand', 'REMARK')
        rows = session.rows()
        assert [r['typeLabel'] for r in rows] == ['系统默认'] * 3 + ['用户填列']
        assert rows[0]['children'] is None
        assert rows[3]['children'][0]['typeLabel'] == '备注列'
        assert rows[3]['children'][0]['parentId'] == root.id
