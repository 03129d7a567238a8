"""Selective sync editing session.

This module provides the SelectiveSyncSession class, the UI-agnostic command surface
of the selection engine. A session owns one selection tree for the lifetime of an
editing dialog: it requests listings as nodes are expanded, inserts the listings as
they arrive, applies user toggles, and derives and persists the exclusion list on
commit.

All events, both user commands and listing responses, are processed one at a time
on a single thread. Listing responses may arrive in any order and more than once;
insertion is idempotent, so a duplicate response merges without effect.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Union

from syncselect.exceptions import NodeNotFoundError, SessionClosedError
from syncselect.exclusion_store.base_store import BaseExclusionStore
from syncselect.paths import is_directory_entry, normalize_path, strip_prefix
from syncselect.selection_engine import SelectionEngine
from syncselect.selection_tree.selection_node import SelectionNode
from syncselect.selection_tree.selection_observer import SelectionObserver
from syncselect.selection_tree.selection_state import SelectionState
from syncselect.selection_tree.selection_tree import SelectionTree
from syncselect.transports.base_transport import BaseListingTransport

logger = logging.getLogger(__name__)

NodeRef = Union[str, SelectionNode]


class SelectiveSyncSession:
    """One editing session over the selective sync state of a remote folder.

    The session starts with an empty tree. ``start`` requests the root listing; the
    root and its children appear when that listing arrives. ``expand`` requests the
    listing of a further node. ``toggle`` changes what is excluded, ``commit``
    returns (and, with a store, persists) the resulting exclusion list, and
    ``cancel`` discards everything. After commit or cancel the session is closed and
    listing responses that still arrive are ignored.

    A failed listing leaves the node unfetched; expanding it again retries.

    Attributes:
        tree (SelectionTree): The tree of listed folders.
        engine (SelectionEngine): The engine managing the tree's states.
        transport (BaseListingTransport): Where listings are requested from.
        store (Optional[BaseExclusionStore]): Where commit persists the exclusion list.
        server_prefix (str): Server base path stripped from every listing entry.
        include_files (bool): Whether non-directory entries become nodes.

    Example:
        >>> from syncselect.transports.static_transport import StaticListingTransport
        >>> transport = StaticListingTransport({
        ...     "/Documents": ["/Documents/", "/Documents/a/", "/Documents/b/"],
        ...     "/Documents/a": ["/Documents/a/", "/Documents/a/x/", "/Documents/a/y/"],
        ... })
        >>> session = SelectiveSyncSession("/Documents", "Documents", ["/Documents/a/y"], transport=transport)
        >>> session.start()
        >>> session.tree.get_node("/Documents/a").state.value
        'partially_included'
        >>> session.expand("/Documents/a")
        >>> _ = session.toggle("/Documents/b", "excluded")
        >>> session.commit()
        ['/Documents/a/y', '/Documents/b']
    """

    def __init__(
        self,
        root_path: str,
        root_label: Optional[str] = None,
        prior_exclusions: Iterable[str] = (),
        *,
        transport: BaseListingTransport,
        store: Optional[BaseExclusionStore] = None,
        server_prefix: str = "",
        include_files: bool = False,
    ) -> None:
        """Initialize a session.

        Args:
            root_path: Remote path of the subscribed folder.
            root_label: Display name of the root. Defaults to the last segment of root_path.
            prior_exclusions: The exclusion list in effect before this session.
            transport: The directory listing transport.
            store: Optional store that commit() saves the exclusion list to.
            server_prefix: Server base path (e.g. "/remote.php/webdav") to strip from
                listing entries. Defaults to none.
            include_files: Insert non-directory entries as nodes. Defaults to False,
                since only folders can be excluded from synchronization.
        """
        self.tree = SelectionTree(root_path, root_label)
        self.engine = SelectionEngine(self.tree, prior_exclusions)
        self.transport = transport
        self.store = store
        self.server_prefix = server_prefix
        self.include_files = include_files
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the session has been committed or cancelled."""
        return self._closed

    @property
    def prior_exclusions(self) -> Sequence[str]:
        """The normalized exclusion list this session started from."""
        return self.engine.prior_exclusions

    def subscribe(self, observer: SelectionObserver) -> None:
        """Register an observer for tree change notifications."""
        self.tree.subscribe(observer)

    def unsubscribe(self, observer: SelectionObserver) -> None:
        """Remove a registered observer."""
        self.tree.unsubscribe(observer)

    def start(self) -> None:
        """Request the root listing.

        Raises:
            SessionClosedError: If the session was committed or cancelled.
        """
        self._ensure_open()
        self._request(self.tree.root_path)

    def refresh(self) -> None:
        """Discard the whole tree and request the root listing again.

        Toggles made so far are lost; new nodes are seeded from the prior exclusions.

        Raises:
            SessionClosedError: If the session was committed or cancelled.
        """
        self._ensure_open()
        self.tree.clear()
        self._request(self.tree.root_path)

    def expand(self, node: NodeRef) -> None:
        """Request the listing of a node, e.g. because the user expanded it.

        Every call issues a request, so expanding again retries a failed listing.
        Expanding a file node does nothing.

        Raises:
            NodeNotFoundError: If the path is not in the tree.
            SessionClosedError: If the session was committed or cancelled.
        """
        self._ensure_open()
        target = self._resolve(node)
        if not target.is_dir:
            logger.debug("Not expanding %s: not a directory", target.absolute_path)
            return
        self._request(target.absolute_path)

    def toggle(self, node: NodeRef, state: Union[str, SelectionState]) -> List[SelectionNode]:
        """Set a node and its subtree to INCLUDED or EXCLUDED.

        Returns:
            Every node whose state changed.

        Raises:
            NodeNotFoundError: If the path is not in the tree.
            SessionClosedError: If the session was committed or cancelled.
            ValueError: If the state is not INCLUDED or EXCLUDED.
        """
        self._ensure_open()
        return self.engine.toggle(self._resolve(node), state)

    def preview_exclusions(self) -> List[str]:
        """Derive the exclusion list the session would commit now, without closing it."""
        self._ensure_open()
        return self.engine.derive_exclusions()

    def commit(self) -> List[str]:
        """Derive the exclusion list, save it to the store if one is set, and close the session.

        Returns:
            The derived exclusion list.

        Raises:
            SessionClosedError: If the session was already committed or cancelled.
            ExclusionStoreError: If the store cannot be written; the session stays open.
        """
        self._ensure_open()
        exclusions = self.engine.derive_exclusions()
        if self.store is not None:
            self.store.save(exclusions)
        self._closed = True
        logger.debug("Committed %d exclusions for %s", len(exclusions), self.tree.root_path)
        return exclusions

    def cancel(self) -> None:
        """Discard the tree and all toggles and close the session without saving."""
        if self._closed:
            return
        self._closed = True
        self.tree.clear()

    def listing_received(self, path: str, entries: Sequence[str]) -> None:
        """Insert a listing that arrived from the transport.

        Responses for a closed session, or for a path that is not in the tree (for
        example one requested before a refresh), are ignored.
        """
        if self._closed:
            logger.debug("Ignoring listing for %s: session closed", path)
            return

        path = normalize_path(strip_prefix(path, self.server_prefix))
        if path != self.tree.root_path and path not in self.tree:
            logger.debug("Ignoring listing for %s: not in tree", path)
            return

        stripped = [strip_prefix(entry, self.server_prefix) for entry in entries]
        if not self.include_files:
            stripped = [entry for entry in stripped if is_directory_entry(entry)]
        self.engine.insert_listing(path, stripped)

    def listing_failed(self, path: str, error: Exception) -> None:
        """Record a failed listing. The node stays unfetched until it is expanded again."""
        logger.warning("Could not list %s: %s", path, error)

    def _request(self, path: str) -> None:
        logger.debug("Requesting listing of %s", path)
        self.transport.request_listing(path, self.listing_received, self.listing_failed)

    def _resolve(self, node: NodeRef) -> SelectionNode:
        if isinstance(node, SelectionNode):
            if self.tree.find(node.absolute_path) is not node:
                raise NodeNotFoundError(node.absolute_path)
            return node
        return self.tree.get_node(node)

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError()
