"""Selective synchronization of remote folder trees.

This package provides a tri-state selection engine for choosing which subtrees of
a lazily listed remote folder hierarchy are excluded from synchronization, and
for deriving the minimal exclusion list that results.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("syncselect")
except PackageNotFoundError:
    __version__ = "unknown"
