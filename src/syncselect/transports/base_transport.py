from abc import ABC, abstractmethod

from syncselect.types import ErrorCallback, ListingCallback


class BaseListingTransport(ABC):
    """
    Abstract base class defining the interface for remote directory listing.

    A transport answers listing requests for remote paths. Requests are fire and
    forget: the transport reports the outcome later by calling exactly one of the
    two callbacks, either synchronously from within ``request_listing`` or at any
    later point on the thread that processes session events. Concurrent requests for
    the same path are not deduplicated and each may be answered.

    Listing entries are absolute remote paths. A trailing slash marks a directory.
    The listing may include the requested collection itself, as a WebDAV PROPFIND
    with depth 1 does; consumers skip that entry.

    Example:
        >>> class OneLevelTransport(BaseListingTransport):
        ...     def request_listing(self, path, on_listing, on_error):
        ...         on_listing(path, [path.rstrip("/") + "/docs/"])
        >>> received = []
        >>> OneLevelTransport().request_listing("/", lambda p, e: received.extend(e), None)
        >>> received
        ['/docs/']
    """

    @abstractmethod
    def request_listing(self, path: str, on_listing: ListingCallback, on_error: ErrorCallback) -> None:
        """
        Request the listing of a remote directory.

        Args:
            path (str): The remote path to list.
            on_listing: Called with ``path`` and the sequence of entries beneath it.
                An empty sequence is a valid listing.
            on_error: Called with ``path`` and the exception describing the failure,
                usually a ListingError.
        """
        pass
