"""Selection state enum for nodes of the selection tree."""

from enum import Enum


class SelectionState(str, Enum):
    """Synchronization state of a node and the subtree beneath it.

    Values:
        INCLUDED: The node and its whole subtree are synchronized
        EXCLUDED: The node and its whole subtree, fetched or not, are excluded
        PARTIALLY_INCLUDED: Some part of the subtree is excluded; never set directly by a user
    """

    INCLUDED = "included"
    EXCLUDED = "excluded"
    PARTIALLY_INCLUDED = "partially_included"
