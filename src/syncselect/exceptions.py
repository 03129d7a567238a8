class ListingError(Exception):
    """
    Exception raised when a directory listing for a remote path cannot be obtained.

    Listing transports deliver this exception to their error callback instead of a
    listing. A failed listing is a recoverable, local condition: the node keeps its
    ``children_fetched`` flag unset and a later expansion retries the request.

    Attributes:
        path (str): The remote path whose listing failed.
        reason (str): Human-readable description of the failure.

    Example:
        >>> error = ListingError("/Photos", "connection reset")
        >>> str(error)
        'Listing failed for /Photos: connection reset'
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception with the failing path and a reason.

        Args:
            path (str): The remote path whose listing failed.
            reason (str): Description of what went wrong.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Listing failed for {path}: {reason}")


class NodeNotFoundError(KeyError):
    """
    Exception raised when a path does not name a node of the selection tree.

    Nodes only exist once a listing that contains them has been inserted, so this
    usually means the path was never listed or the tree has been reset since.

    Attributes:
        path (str): The path that was looked up.

    Example:
        >>> error = NodeNotFoundError("/Photos/2019")
        >>> str(error)
        'No node for path: /Photos/2019'
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(path)

    def __str__(self) -> str:
        return f"No node for path: {self.path}"


class SessionClosedError(RuntimeError):
    """
    Exception raised when a command is issued to a session that was committed or cancelled.

    Example:
        >>> str(SessionClosedError())
        'Selective sync session is closed'
    """

    def __init__(self, message: str = "Selective sync session is closed") -> None:
        super().__init__(message)


class ExclusionStoreError(Exception):
    """
    Exception raised when an exclusion list cannot be read from or written to its store.

    Attributes:
        location (str): The file or resource backing the store.

    Example:
        >>> error = ExclusionStoreError("/tmp/blacklist.txt", "permission denied")
        >>> str(error)
        'Exclusion store /tmp/blacklist.txt: permission denied'
    """

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        super().__init__(f"Exclusion store {location}: {reason}")
