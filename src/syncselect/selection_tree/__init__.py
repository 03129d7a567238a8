"""Tri-state selection tree for lazily listed remote folders.

This package provides the node type, the selection states, the observer hooks,
and the path-indexed tree store that listings are inserted into.
"""

from .selection_node import SelectionNode
from .selection_observer import SelectionObserver
from .selection_state import SelectionState
from .selection_tree import SelectionTree

__all__ = [
    "SelectionNode",
    "SelectionObserver",
    "SelectionState",
    "SelectionTree",
]
