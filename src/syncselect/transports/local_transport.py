"""Listing transport that serves a local directory as the remote tree."""

import logging
import os
from pathlib import Path
from typing import List

from syncselect.exceptions import ListingError
from syncselect.paths import join_path, normalize_path, relative_segments
from syncselect.transports.base_transport import BaseListingTransport
from syncselect.types import ErrorCallback, ListingCallback, PathType

logger = logging.getLogger(__name__)


class LocalDirectoryTransport(BaseListingTransport):
    """Answers listing requests from a local directory mirroring the remote folder.

    The local ``base_directory`` stands for the remote path ``remote_root``; a request
    for ``remote_root + "/docs"`` lists ``base_directory / "docs"``. Each listing
    starts with the requested collection itself, followed by its entries sorted by
    name, with a trailing slash on directories. Requests are answered synchronously.

    Permission errors and vanished directories are reported through the error
    callback as ListingError, never raised.

    Attributes:
        base_directory (Path): The local directory serving as the remote root.
        remote_root (str): The normalized remote path that base_directory stands for.

    Example:
        >>> transport = LocalDirectoryTransport(".", remote_root="/Shared")  # doctest: +SKIP
        >>> transport.request_listing("/Shared", print_listing, print_error)  # doctest: +SKIP
        /Shared ['/Shared/', '/Shared/docs/', '/Shared/notes.txt']
    """

    def __init__(self, base_directory: PathType, remote_root: str = "/") -> None:
        """Initialize the transport.

        Args:
            base_directory: Local directory to serve. Can be any path-like object.
            remote_root: Remote path the directory stands for. Defaults to "/".

        Raises:
            FileNotFoundError: If base_directory doesn't exist.
            NotADirectoryError: If base_directory isn't a directory.
        """
        self.base_directory = Path(base_directory)
        if not self.base_directory.exists():
            raise FileNotFoundError(f"Base directory does not exist: {self.base_directory}")
        if not self.base_directory.is_dir():
            raise NotADirectoryError(f"Base directory is not a directory: {self.base_directory}")
        self.remote_root = normalize_path(remote_root)

    def request_listing(self, path: str, on_listing: ListingCallback, on_error: ErrorCallback) -> None:
        """List the local counterpart of ``path`` and report the result."""
        remote_path = normalize_path(path)
        segments = relative_segments(remote_path, self.remote_root)
        if segments is None:
            on_error(path, ListingError(path, f"outside of remote root {self.remote_root}"))
            return

        local_path = self.base_directory.joinpath(*segments)
        logger.debug("Listing %s from %s", remote_path, local_path)
        try:
            names = sorted(os.listdir(local_path))
        except OSError as e:
            on_error(path, ListingError(path, e.strerror or str(e)))
            return

        entries: List[str] = [self._as_directory(remote_path)]
        for name in names:
            entry = join_path(remote_path, name)
            try:
                if (local_path / name).is_dir():
                    entry = self._as_directory(entry)
            except OSError as e:
                # If we can't stat it, list it as a plain file
                logger.debug("Could not stat %s: %s", local_path / name, e)
            entries.append(entry)
        on_listing(path, entries)

    @staticmethod
    def _as_directory(path: str) -> str:
        return path if path.endswith("/") else path + "/"
