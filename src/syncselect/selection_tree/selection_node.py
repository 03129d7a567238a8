"""Node representation for remote folders in the selection tree."""

from typing import Any, Optional

from anytree import Node

from syncselect.selection_tree.selection_state import SelectionState


class SelectionNode(Node):  # type: ignore
    """Node class representing one path segment of the remote folder tree.

    Extends anytree.Node with the selection state of the subtree it roots and the
    bookkeeping needed for lazy listing. Inherits tree traversal from anytree.Node;
    ``parent`` is the non-owning back-reference used for upward propagation.

    The state is read-only from the outside. It is assigned when the node is
    created and afterwards changed only by the selection engine, which keeps
    every ancestor consistent with its children.

    Attributes:
        name (str): The path segment, used as display label.
        parent (Optional[SelectionNode]): The parent node in the tree.
        absolute_path (str): Normalized remote path denoted by this node.
        is_dir (bool): True if the listing entry denoted a directory.
        children_fetched (bool): True once a listing of this node has been inserted.
        children (tuple[SelectionNode]): Child nodes in first-insertion order (inherited).

    Example:
        >>> root = SelectionNode("Documents", absolute_path="/Documents")
        >>> child = SelectionNode("a", parent=root, absolute_path="/Documents/a")
        >>> child.state
        <SelectionState.INCLUDED: 'included'>
        >>> child.parent is root
        True
    """

    def __init__(
        self,
        name: str,
        parent: Optional["SelectionNode"] = None,
        absolute_path: str = "",
        state: SelectionState = SelectionState.INCLUDED,
        is_dir: bool = True,
        **kwargs: Any,
    ) -> None:
        """Initialize a SelectionNode.

        Args:
            name: The path segment this node stands for.
            parent: The parent node. Defaults to None.
            absolute_path: The normalized remote path of this node.
            state: The initial selection state. Defaults to INCLUDED.
            is_dir: Whether this node represents a directory. Defaults to True.
            **kwargs: Additional arguments passed to anytree.Node.
        """
        super().__init__(name, parent, **kwargs)
        self.absolute_path = absolute_path
        self.is_dir = is_dir
        self.children_fetched = False
        self._state = state

    @property
    def state(self) -> SelectionState:
        """The current selection state of this node."""
        return self._state

    def _set_state(self, state: SelectionState) -> bool:
        """Assign a new state, returning True if it differs from the previous one."""
        if self._state == state:
            return False
        self._state = state
        return True
