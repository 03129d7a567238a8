"""Unit tests for the SelectionNode class."""

from syncselect.selection_tree.selection_node import SelectionNode
from syncselect.selection_tree.selection_state import SelectionState


def test_selection_node_initialization():
    """Test basic initialization of SelectionNode."""
    node = SelectionNode("Photos", absolute_path="/Photos")
    assert node.name == "Photos"
    assert node.absolute_path == "/Photos"
    assert node.state == SelectionState.INCLUDED
    assert node.is_dir
    assert not node.children_fetched
    assert node.parent is None

    file_node = SelectionNode("notes.txt", absolute_path="/notes.txt", is_dir=False, state=SelectionState.EXCLUDED)
    assert not file_node.is_dir
    assert file_node.state == SelectionState.EXCLUDED


def test_selection_node_parent_child():
    """Test parent-child relationships keep insertion order."""
    root = SelectionNode("root", absolute_path="/")
    b = SelectionNode("b", parent=root, absolute_path="/b")
    a = SelectionNode("a", parent=root, absolute_path="/a")
    grandchild = SelectionNode("x", parent=a, absolute_path="/a/x")

    assert root.children == (b, a)
    assert grandchild.parent is a
    assert grandchild.root is root
    assert b.is_leaf


def test_set_state_reports_change():
    node = SelectionNode("a", absolute_path="/a")
    assert node._set_state(SelectionState.EXCLUDED) is True
    assert node.state == SelectionState.EXCLUDED
    assert node._set_state(SelectionState.EXCLUDED) is False


def test_selection_state_values():
    assert SelectionState("included") is SelectionState.INCLUDED
    assert SelectionState("excluded") is SelectionState.EXCLUDED
    assert SelectionState.PARTIALLY_INCLUDED.value == "partially_included"
    assert SelectionState.INCLUDED == "included"
