"""Observer hooks for changes to the selection tree."""

from typing import TYPE_CHECKING

from syncselect.selection_tree.selection_state import SelectionState

if TYPE_CHECKING:
    from syncselect.selection_tree.selection_node import SelectionNode


class SelectionObserver:
    """Receives notifications about changes to a selection tree.

    A presentation layer subclasses this and overrides the hooks it cares about,
    instead of the tree reaching into widget objects. All hooks default to doing
    nothing and are called synchronously, after the change has been applied.

    Example:
        >>> class Recorder(SelectionObserver):
        ...     def __init__(self):
        ...         self.events = []
        ...     def state_changed(self, node, previous):
        ...         self.events.append((node.name, previous.value, node.state.value))
        >>> recorder = Recorder()
        >>> recorder.events
        []
    """

    def node_inserted(self, node: "SelectionNode") -> None:
        """Called after a node has been created and attached to the tree."""

    def state_changed(self, node: "SelectionNode", previous: SelectionState) -> None:
        """Called after the state of an existing node has changed."""

    def children_fetched(self, node: "SelectionNode") -> None:
        """Called after a listing of ``node`` has been inserted."""

    def tree_cleared(self) -> None:
        """Called after the whole tree has been discarded."""
