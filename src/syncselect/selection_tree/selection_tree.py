"""Path-indexed tree store for lazily listed remote folders.

This module provides the SelectionTree class, which materializes a partial view of a
remote directory hierarchy as listings arrive and keeps every node reachable by its
absolute path.
"""

import logging
import posixpath
from collections import Counter
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from anytree import PreOrderIter

from syncselect.exceptions import NodeNotFoundError
from syncselect.paths import is_directory_entry, join_path, normalize_path, relative_segments
from syncselect.selection_tree.selection_node import SelectionNode
from syncselect.selection_tree.selection_observer import SelectionObserver
from syncselect.selection_tree.selection_state import SelectionState

logger = logging.getLogger(__name__)

# Computes the initial state of a new node from its parent's state (None for the root) and its path
SeedFunction = Callable[[Optional[SelectionState], str], SelectionState]

_STATE_MARKERS = {
    SelectionState.INCLUDED: "[x]",
    SelectionState.EXCLUDED: "[ ]",
    SelectionState.PARTIALLY_INCLUDED: "[~]",
}


def inherit_parent_state(parent_state: Optional[SelectionState], absolute_path: str) -> SelectionState:
    """Seed a new node with its parent's state, or INCLUDED when the parent is partial."""
    if parent_state is None or parent_state == SelectionState.PARTIALLY_INCLUDED:
        return SelectionState.INCLUDED
    return parent_state


class SelectionTree:
    """A lazily populated tree of remote folders, indexed by absolute path.

    The tree starts empty. Its root is created when the first listing for the root
    path is inserted; every further node is created by inserting a listing that
    contains it. Nodes are never removed individually: ``clear`` discards the whole
    tree so it can be rebuilt from scratch.

    Insertion assigns each new node its initial state through a seed function and
    never propagates state to other nodes. Changing the state of existing nodes is
    the job of the selection engine.

    Attributes:
        root_path (str): Normalized remote path of the subscribed folder.
        root_label (str): Display name of the root node.

    Example:
        >>> tree = SelectionTree("/Documents", "My Documents")
        >>> _ = tree.insert_listing("/Documents", ["/Documents/", "/Documents/a/", "/Documents/b/"])
        >>> [child.name for child in tree.root.children]
        ['a', 'b']
        >>> tree.root.children_fetched
        True
        >>> print(tree.get_tree_representation())
        [x] My Documents/
        ├── [x] a/ ...
        └── [x] b/ ...
    """

    def __init__(self, root_path: str, root_label: Optional[str] = None) -> None:
        """Initialize an empty SelectionTree.

        Args:
            root_path: Remote path of the subscribed folder.
            root_label: Display name of the root. Defaults to the last segment of root_path.
        """
        self.root_path = normalize_path(root_path)
        self.root_label = root_label or posixpath.basename(self.root_path) or self.root_path
        self._root: Optional[SelectionNode] = None
        self._index: Dict[str, SelectionNode] = {}
        self._observers: List[SelectionObserver] = []

    @property
    def root(self) -> Optional[SelectionNode]:
        """The root node, or None until the first root listing has been inserted."""
        return self._root

    @property
    def node_count(self) -> int:
        """Number of nodes currently in the tree, root included."""
        return len(self._index)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._index

    def subscribe(self, observer: SelectionObserver) -> None:
        """Register an observer for change notifications."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: SelectionObserver) -> None:
        """Remove a previously registered observer. Unknown observers are ignored."""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify_state_changed(self, node: SelectionNode, previous: SelectionState) -> None:
        """Tell observers that ``node`` moved away from ``previous``."""
        for observer in list(self._observers):
            observer.state_changed(node, previous)

    def create_root(self, seed: SeedFunction = inherit_parent_state) -> SelectionNode:
        """Create the root node if it does not exist yet and return it.

        Args:
            seed: Computes the root's initial state; it receives None as parent state.

        Returns:
            The root node.
        """
        if self._root is None:
            self._root = SelectionNode(self.root_label, absolute_path=self.root_path, state=seed(None, self.root_path))
            self._index[self.root_path] = self._root
            for observer in list(self._observers):
                observer.node_inserted(self._root)
        return self._root

    def find(self, path: str) -> Optional[SelectionNode]:
        """Return the node for ``path``, or None if it has not been listed."""
        return self._index.get(normalize_path(path))

    def get_node(self, path: str) -> SelectionNode:
        """Return the node for ``path``.

        Raises:
            NodeNotFoundError: If no node exists for the path.
        """
        node = self.find(path)
        if node is None:
            raise NodeNotFoundError(normalize_path(path))
        return node

    def insert_listing(
        self, parent_path: str, entries: Iterable[str], seed: SeedFunction = inherit_parent_state
    ) -> List[SelectionNode]:
        """Insert a listing of entries beneath an existing node.

        Each entry is an absolute remote path below ``parent_path``; a trailing slash
        marks a directory. Intermediate segments are created as needed and existing
        nodes with the same name are reused, so inserting the same listing again
        leaves the tree unchanged. Only newly created nodes are seeded.

        Entries naming the parent itself are skipped. Entries outside the parent are
        discarded and logged. The parent is marked as fetched even if the listing is
        empty.

        Args:
            parent_path: Path of the listed node. The root is created if the tree is
                empty and this is the root path.
            entries: Listing entries as absolute remote paths.
            seed: Computes the initial state of each new node from its parent's state.

        Returns:
            The nodes created by this insertion, in creation order.

        Raises:
            NodeNotFoundError: If ``parent_path`` does not name a node of the tree.
        """
        parent_path = normalize_path(parent_path)
        if self._root is None and parent_path == self.root_path:
            self.create_root(seed)
        parent = self.get_node(parent_path)

        listing = list(entries)
        created: List[SelectionNode] = []
        for entry in listing:
            segments = relative_segments(entry, parent_path)
            if segments is None:
                logger.warning("Discarding listing entry %r: not beneath %s", entry, parent_path)
                continue

            node = parent
            for position, segment in enumerate(segments):
                child_path = join_path(node.absolute_path, segment)
                child = self._index.get(child_path)
                if child is None:
                    # Only the last segment carries the entry's own directory marker
                    is_dir = position < len(segments) - 1 or is_directory_entry(entry)
                    child = SelectionNode(
                        segment,
                        parent=node,
                        absolute_path=child_path,
                        state=seed(node.state, child_path),
                        is_dir=is_dir,
                    )
                    self._index[child_path] = child
                    created.append(child)
                    for observer in list(self._observers):
                        observer.node_inserted(child)
                node = child

        parent.children_fetched = True
        for observer in list(self._observers):
            observer.children_fetched(parent)
        logger.debug("Inserted listing for %s: %d entries, %d new nodes", parent_path, len(listing), len(created))
        return created

    def iter_nodes(self) -> Iterator[SelectionNode]:
        """Iterate over all nodes in pre-order, children in insertion order."""
        if self._root is not None:
            yield from PreOrderIter(self._root)

    def count_states(self) -> Dict[SelectionState, int]:
        """Count the nodes in each selection state.

        Example:
            >>> tree = SelectionTree("/")
            >>> _ = tree.insert_listing("/", ["/a/", "/b/"])
            >>> tree.count_states()[SelectionState.INCLUDED]
            3
        """
        counts: Dict[SelectionState, int] = Counter(node.state for node in self.iter_nodes())
        return {state: counts.get(state, 0) for state in SelectionState}

    def clear(self) -> None:
        """Discard every node so the tree can be rebuilt from a fresh root listing."""
        self._root = None
        self._index.clear()
        for observer in list(self._observers):
            observer.tree_cleared()

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a checkbox-marked representation of the tree one line at a time.

        Included nodes are marked ``[x]``, excluded ones ``[ ]`` and partially
        included ones ``[~]``. Directories whose contents were never listed end in
        ``...``. Children appear in insertion order.

        Yields:
            Lines of the tree representation, including the connecting lines.
        """
        if self._root is None:
            return

        def write_node(
            node: SelectionNode, prefix: str = "", is_last: bool = True, is_root: bool = False
        ) -> Iterator[str]:
            label = f"{_STATE_MARKERS[node.state]} {node.name}"
            if node.is_dir:
                label += "/"
                if not node.children_fetched and not node.children:
                    label += " ..."

            if is_root:
                yield label
            else:
                connector = "└── " if is_last else "├── "
                yield f"{prefix}{connector}{label}"

            children = node.children
            for i, child in enumerate(children):
                is_last_child = i == len(children) - 1
                if is_root:
                    new_prefix = ""
                else:
                    new_prefix = prefix + ("    " if is_last else "│   ")
                yield from write_node(child, new_prefix, is_last_child)

        yield from write_node(self._root, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete checkbox-marked representation of the tree as a string."""
        return "\n".join(self.stream_tree_representation())
