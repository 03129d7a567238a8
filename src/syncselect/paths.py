"""Helpers for remote paths.

Remote paths are POSIX-style strings. A trailing slash on a listing entry marks a
directory; everywhere else paths are kept in normalized form, without repeated or
trailing slashes. Ancestry is decided segment by segment, so ``/a`` is an ancestor
of ``/a/b`` but not of ``/ab``.
"""

from typing import List, Optional


def split_segments(path: str) -> List[str]:
    """Split a path into its non-empty segments.

    Example:
        >>> split_segments("/Photos//2019/")
        ['Photos', '2019']
    """
    return [segment for segment in path.split("/") if segment and segment != "."]


def normalize_path(path: str) -> str:
    """Return the normalized form of a remote path.

    Repeated slashes and ``.`` segments are dropped, as is the trailing slash. The
    filesystem root stays ``/`` and relative paths stay relative.

    Example:
        >>> normalize_path("/Photos//2019/")
        '/Photos/2019'
        >>> normalize_path("//")
        '/'
        >>> normalize_path("docs/")
        'docs'
    """
    joined = "/".join(split_segments(path))
    if path.startswith("/"):
        return "/" + joined
    return joined


def join_path(parent: str, name: str) -> str:
    """Append a single segment to a normalized path.

    Example:
        >>> join_path("/", "Photos")
        '/Photos'
        >>> join_path("/Photos", "2019")
        '/Photos/2019'
        >>> join_path("", "docs")
        'docs'
    """
    if not parent:
        return name
    if parent.endswith("/"):
        return parent + name
    return f"{parent}/{name}"


def relative_segments(path: str, ancestor: str) -> Optional[List[str]]:
    """Return the segments of ``path`` below ``ancestor``.

    Returns an empty list when both name the same location and ``None`` when
    ``path`` does not lie beneath ``ancestor``.

    Example:
        >>> relative_segments("/Photos/2019/summer/", "/Photos")
        ['2019', 'summer']
        >>> relative_segments("/Photos", "/Photos/")
        []
        >>> relative_segments("/Photography", "/Photos") is None
        True
    """
    path = normalize_path(path)
    ancestor = normalize_path(ancestor)
    if path.startswith("/") != ancestor.startswith("/"):
        return None
    path_segments = split_segments(path)
    ancestor_segments = split_segments(ancestor)
    if path_segments[: len(ancestor_segments)] != ancestor_segments:
        return None
    return path_segments[len(ancestor_segments) :]


def is_descendant(path: str, ancestor: str) -> bool:
    """Check whether ``path`` lies strictly beneath ``ancestor``.

    Example:
        >>> is_descendant("/a/b", "/a")
        True
        >>> is_descendant("/a", "/a")
        False
        >>> is_descendant("/ab", "/a")
        False
    """
    segments = relative_segments(path, ancestor)
    return bool(segments)


def is_same_or_descendant(path: str, ancestor: str) -> bool:
    """Check whether ``path`` is ``ancestor`` itself or lies beneath it."""
    return relative_segments(path, ancestor) is not None


def is_directory_entry(entry: str) -> bool:
    """Check whether a listing entry denotes a directory (trailing slash)."""
    return entry.endswith("/")


def strip_prefix(entry: str, prefix: str) -> str:
    """Remove a server base path from a listing entry.

    Servers such as WebDAV report entries with their full URL path, e.g.
    ``/remote.php/webdav/Photos/``. The trailing directory slash is preserved.
    Entries outside ``prefix`` are returned unchanged.

    Example:
        >>> strip_prefix("/remote.php/webdav/Photos/", "/remote.php/webdav")
        '/Photos/'
        >>> strip_prefix("/remote.php/webdav/", "/remote.php/webdav/")
        '/'
        >>> strip_prefix("/elsewhere/x", "/remote.php/webdav")
        '/elsewhere/x'
    """
    prefix = normalize_path(prefix)
    if not prefix or prefix == "/":
        return entry
    segments = relative_segments(entry, prefix)
    if segments is None:
        return entry
    stripped = "/" + "/".join(segments)
    if is_directory_entry(entry) and stripped != "/":
        stripped += "/"
    return stripped
