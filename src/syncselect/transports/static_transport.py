"""In-memory listing transport with optional deferred delivery."""

from typing import Dict, List, Mapping, Sequence, Tuple

from syncselect.exceptions import ListingError
from syncselect.paths import normalize_path
from syncselect.transports.base_transport import BaseListingTransport
from syncselect.types import ErrorCallback, ListingCallback

_PendingRequest = Tuple[str, ListingCallback, ErrorCallback]


class StaticListingTransport(BaseListingTransport):
    """Serves listings from a fixed mapping of remote path to entries.

    Useful for previews, tests, and replaying recorded server listings. Requests for
    paths missing from the mapping fail with a ListingError.

    With ``deferred=True`` requests are queued instead of answered, and answered in
    request order by ``deliver_pending``. This reproduces the asynchronous behavior
    of a network transport, including duplicate responses when a path is requested
    twice before the first answer arrives.

    Attributes:
        requests (List[str]): Every requested path, in request order.

    Example:
        >>> transport = StaticListingTransport({"/": ["/a/", "/b/"]}, deferred=True)
        >>> received = []
        >>> transport.request_listing("/", lambda path, entries: received.append(entries), None)
        >>> received
        []
        >>> transport.deliver_pending()
        1
        >>> received
        [['/a/', '/b/']]
    """

    def __init__(self, listings: Mapping[str, Sequence[str]], *, deferred: bool = False) -> None:
        """Initialize the transport.

        Args:
            listings: Entries to report for each remote path. Keys are normalized.
            deferred: Queue requests until deliver_pending() is called. Defaults to False.
        """
        self._listings: Dict[str, List[str]] = {
            normalize_path(path): list(entries) for path, entries in listings.items()
        }
        self.deferred = deferred
        self.requests: List[str] = []
        self._pending: List[_PendingRequest] = []

    def set_listing(self, path: str, entries: Sequence[str]) -> None:
        """Add or replace the listing reported for ``path``."""
        self._listings[normalize_path(path)] = list(entries)

    def remove_listing(self, path: str) -> None:
        """Make later requests for ``path`` fail. Unknown paths are ignored."""
        self._listings.pop(normalize_path(path), None)

    @property
    def pending_count(self) -> int:
        """Number of requests waiting for deliver_pending()."""
        return len(self._pending)

    def request_listing(self, path: str, on_listing: ListingCallback, on_error: ErrorCallback) -> None:
        """Answer the request now, or queue it when the transport is deferred."""
        self.requests.append(path)
        if self.deferred:
            self._pending.append((path, on_listing, on_error))
        else:
            self._answer(path, on_listing, on_error)

    def deliver_pending(self) -> int:
        """Answer every queued request in request order.

        Requests issued by the callbacks themselves are queued for the next call.

        Returns:
            The number of requests answered.
        """
        pending, self._pending = self._pending, []
        for path, on_listing, on_error in pending:
            self._answer(path, on_listing, on_error)
        return len(pending)

    def _answer(self, path: str, on_listing: ListingCallback, on_error: ErrorCallback) -> None:
        entries = self._listings.get(normalize_path(path))
        if entries is None:
            on_error(path, ListingError(path, "no such collection"))
        else:
            on_listing(path, list(entries))
