"""Tri-state selection engine.

This module provides the SelectionEngine class, which owns every state change of a
SelectionTree. It seeds the state of nodes created by listings, propagates user
toggles down to descendants and up to ancestors, and derives the minimal exclusion
list from the tree, falling back to the prior exclusion list for regions that were
never listed.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from anytree import PreOrderIter

from syncselect.paths import is_descendant, is_same_or_descendant, normalize_path
from syncselect.selection_tree.selection_node import SelectionNode
from syncselect.selection_tree.selection_state import SelectionState
from syncselect.selection_tree.selection_tree import SelectionTree

logger = logging.getLogger(__name__)


def coerce_toggle_state(state: Union[str, SelectionState]) -> SelectionState:
    """Convert a user-settable state, given as enum or string value, to a SelectionState.

    Example:
        >>> coerce_toggle_state("excluded")
        <SelectionState.EXCLUDED: 'excluded'>

    Raises:
        ValueError: If the state is unknown or PARTIALLY_INCLUDED.
    """
    if isinstance(state, str) and not isinstance(state, SelectionState):
        try:
            state = SelectionState(state.lower())
        except ValueError:
            raise ValueError(f"Invalid selection state: {state}. Must be one of: 'included', 'excluded'")
    if not isinstance(state, SelectionState):
        raise ValueError(f"Invalid selection state: {state!r}. Must be one of: 'included', 'excluded'")
    if state == SelectionState.PARTIALLY_INCLUDED:
        raise ValueError("PARTIALLY_INCLUDED is derived from children and cannot be set directly")
    return state


def derive_parent_state(children: Sequence[SelectionNode]) -> SelectionState:
    """Fold the states of a node's children into the state the node must have.

    Example:
        >>> a = SelectionNode("a", state=SelectionState.EXCLUDED)
        >>> b = SelectionNode("b", state=SelectionState.INCLUDED)
        >>> derive_parent_state([a, b])
        <SelectionState.PARTIALLY_INCLUDED: 'partially_included'>
    """
    states = {child.state for child in children}
    if len(states) == 1:
        return states.pop()
    return SelectionState.PARTIALLY_INCLUDED


class SelectionEngine:
    """Seeds, propagates, and reads out the selection state of a SelectionTree.

    The engine is the only writer of node states. New nodes get their state through
    ``seed_initial_state`` while a listing is inserted; existing nodes change only
    through ``toggle``. Keeping these two entry points apart means insertion never
    triggers toggle propagation, so a freshly listed excluded child cannot push a
    partially included parent into EXCLUDED.

    The prior exclusion list is the exclusion list in effect before this editing
    session. It is never modified: it seeds new nodes and stands in for any subtree
    that was never listed.

    Attributes:
        tree (SelectionTree): The tree whose states this engine manages.
        prior_exclusions (Tuple[str, ...]): Normalized prior exclusion paths, deduplicated.

    Example:
        >>> tree = SelectionTree("/Documents")
        >>> engine = SelectionEngine(tree, ["/Documents/a/"])
        >>> _ = engine.insert_listing("/Documents", ["/Documents/a/", "/Documents/b/", "/Documents/c/"])
        >>> [child.state.value for child in tree.root.children]
        ['excluded', 'included', 'included']
        >>> tree.root.state.value
        'partially_included'
        >>> _ = engine.toggle(tree.get_node("/Documents/b"), "excluded")
        >>> _ = engine.toggle(tree.get_node("/Documents/c"), "excluded")
        >>> engine.derive_exclusions()
        ['/Documents']
    """

    def __init__(self, tree: SelectionTree, prior_exclusions: Iterable[str] = ()) -> None:
        """Initialize the engine.

        Args:
            tree: The selection tree to manage.
            prior_exclusions: Exclusion paths in effect before this session. Empty
                entries are ignored and duplicates collapse to their first occurrence.
        """
        self.tree = tree
        normalized: List[str] = []
        for path in prior_exclusions:
            path = normalize_path(path)
            if path and path not in normalized:
                normalized.append(path)
        self.prior_exclusions: Tuple[str, ...] = tuple(normalized)

    def seed_initial_state(self, parent_state: Optional[SelectionState], absolute_path: str) -> SelectionState:
        """Compute the state of a node at the moment it is created.

        A child of an included or excluded parent inherits the parent's state. A
        child of a partially included parent, or the root (``parent_state`` None),
        is looked up in the prior exclusion list: an entry naming the node or one
        of its ancestors excludes it, an entry strictly beneath it makes it
        partially included, and otherwise it is included.

        Args:
            parent_state: The state of the new node's parent, or None for the root.
            absolute_path: The remote path of the new node.

        Returns:
            The initial state for the node.
        """
        if parent_state == SelectionState.INCLUDED:
            return SelectionState.INCLUDED
        if parent_state == SelectionState.EXCLUDED:
            return SelectionState.EXCLUDED

        state = SelectionState.INCLUDED
        for excluded in self.prior_exclusions:
            if is_same_or_descendant(absolute_path, excluded):
                return SelectionState.EXCLUDED
            if is_descendant(excluded, absolute_path):
                state = SelectionState.PARTIALLY_INCLUDED
        return state

    def insert_listing(self, parent_path: str, entries: Iterable[str]) -> List[SelectionNode]:
        """Insert a listing into the tree, seeding new nodes from the prior exclusions.

        Returns:
            The nodes created by this insertion.
        """
        return self.tree.insert_listing(parent_path, entries, seed=self.seed_initial_state)

    def toggle(self, node: SelectionNode, new_state: Union[str, SelectionState]) -> List[SelectionNode]:
        """Apply a user toggle to ``node`` and propagate it through the tree.

        The node and all of its descendants take ``new_state``. Then each ancestor in
        turn is recomputed from its children: all included makes it INCLUDED, all
        excluded makes it EXCLUDED, anything else PARTIALLY_INCLUDED. Ascent stops at
        the first ancestor that already holds its recomputed state, because every
        ancestor above it was consistent before the toggle and sees no change.

        An ancestor that was never listed only knows some of its children, so it
        keeps its state while they all agree with it and becomes PARTIALLY_INCLUDED
        otherwise; it is never folded to INCLUDED or EXCLUDED from a partial view.

        Args:
            node: The node the user toggled.
            new_state: INCLUDED or EXCLUDED, as enum or string value.

        Returns:
            Every node whose state changed, descendants first, then ancestors bottom-up.

        Raises:
            ValueError: If ``new_state`` is not a state a user can set.
        """
        state = coerce_toggle_state(new_state)
        changed: List[SelectionNode] = []

        for descendant in PreOrderIter(node):
            self._assign(descendant, state, changed)

        parent = node.parent
        while parent is not None:
            derived = self._fold(parent)
            if derived == parent.state:
                break
            self._assign(parent, derived, changed)
            parent = parent.parent

        logger.debug("Toggled %s to %s: %d nodes changed", node.absolute_path, state.value, len(changed))
        return changed

    def _fold(self, parent: SelectionNode) -> SelectionState:
        if parent.children_fetched:
            return derive_parent_state(parent.children)
        # Children created by deeper listings are only part of an unlisted node
        if all(child.state == parent.state for child in parent.children):
            return parent.state
        return SelectionState.PARTIALLY_INCLUDED

    def _assign(self, node: SelectionNode, state: SelectionState, changed: List[SelectionNode]) -> None:
        previous = node.state
        if node._set_state(state):
            changed.append(node)
            self.tree.notify_state_changed(node, previous)

    def derive_exclusions(self, node: Optional[SelectionNode] = None) -> List[str]:
        """Derive the minimal exclusion list for the subtree rooted at ``node``.

        An excluded node contributes its own path and nothing beneath it; an included
        node contributes nothing. A partially included node contributes what its
        children contribute if it was listed and has children. If it was never
        listed, or its listing was empty, the prior exclusions beneath it are
        carried forward unchanged; children that deeper listings materialized are
        still walked, and carried-forward entries covered by them are dropped.

        Args:
            node: Root of the subtree to read. Defaults to the tree's root.

        Returns:
            Exclusion paths in traversal order. No entry lies beneath another.
        """
        if node is None:
            node = self.tree.root
            if node is None:
                return []
        return list(self._iter_exclusions(node))

    def _iter_exclusions(self, node: SelectionNode) -> Iterator[str]:
        if node.state == SelectionState.INCLUDED:
            return
        if node.state == SelectionState.EXCLUDED:
            yield node.absolute_path
            return

        for child in node.children:
            yield from self._iter_exclusions(child)
        if node.children_fetched and node.children:
            return

        # Never listed, or listed empty: carry forward what was excluded before, outside the known children
        carried = [
            excluded
            for excluded in self.prior_exclusions
            if is_descendant(excluded, node.absolute_path)
            and not any(is_same_or_descendant(excluded, child.absolute_path) for child in node.children)
        ]
        for excluded in carried:
            if not any(is_descendant(excluded, other) for other in carried):
                yield excluded
