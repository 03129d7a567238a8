"""Command-line interface for syncselect.

This module provides the command-line front end of the selective sync engine. It
serves a local directory as the remote folder, lists it to the requested depth,
applies the exclusions and inclusions given on the command line in order, prints
the resulting tree, and writes the derived exclusion list.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error

Example:
    # Show the first level of a folder
    $ syncselect /srv/mirror

    # Exclude a folder, keep one of its subfolders, save the list
    $ syncselect -x /Photos -i /Photos/best -o blacklist.txt /srv/mirror
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from syncselect.cli.argparser import ToggleList, create_parser, validate_args
from syncselect.exceptions import NodeNotFoundError
from syncselect.exclusion_store.base_store import BaseExclusionStore
from syncselect.exclusion_store.ini_store import IniExclusionStore
from syncselect.exclusion_store.text_store import TextExclusionStore
from syncselect.paths import join_path, normalize_path, relative_segments
from syncselect.selection_tree.selection_node import SelectionNode
from syncselect.session import SelectiveSyncSession
from syncselect.transports.local_transport import LocalDirectoryTransport


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level if verbose and WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def create_store(file: Path, file_format: str, section: str) -> BaseExclusionStore:
    """Create the exclusion store for a -b/--blacklist or -o/--output file."""
    if file_format == "ini":
        return IniExclusionStore(file, section)
    return TextExclusionStore(file)


def resolve_remote_path(path: str, remote_root: str) -> str:
    """Resolve a command-line path against the remote root.

    Example:
        >>> resolve_remote_path("Photos/raw", "/Shared")
        '/Shared/Photos/raw'
        >>> resolve_remote_path("/Shared/Photos", "/Shared")
        '/Shared/Photos'
    """
    if path.startswith("/"):
        return normalize_path(path)
    return normalize_path(join_path(normalize_path(remote_root), path))


def expand_to_depth(session: SelectiveSyncSession, depth: Optional[int]) -> None:
    """List the tree level by level until ``depth`` levels below the root are listed.

    Args:
        session: A started session whose transport answers synchronously.
        depth: Number of levels to list below the root, or None for the whole tree.
    """
    root = session.tree.root
    frontier: List[SelectionNode] = [root] if root is not None else []
    level = 1
    while frontier and (depth is None or level < depth):
        next_frontier: List[SelectionNode] = []
        for node in frontier:
            for child in node.children:
                if child.is_dir and not child.children_fetched:
                    session.expand(child)
                next_frontier.append(child)
        frontier = next_frontier
        level += 1


def reveal_path(session: SelectiveSyncSession, path: str) -> SelectionNode:
    """Expand every ancestor of ``path`` that has not been listed yet and return its node.

    Raises:
        NodeNotFoundError: If the path is outside the remote root or does not exist.
    """
    root_path = session.tree.root_path
    segments = relative_segments(path, root_path)
    if segments is None:
        raise NodeNotFoundError(path)

    current = root_path
    for segment in segments:
        node = session.tree.find(current)
        if node is None:
            raise NodeNotFoundError(current)
        if not node.children_fetched:
            session.expand(node)
        current = join_path(current, segment)
    return session.tree.get_node(current)


def main() -> None:
    """Main entry point for the syncselect command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
    """
    toggles: ToggleList = []
    parser = create_parser(toggles)
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        validate_args(args)

        label = args.label or args.directory.resolve().name
        section = args.section or label

        prior: List[str] = []
        if args.blacklist is not None:
            loaded = create_store(args.blacklist, args.format, section).load()
            prior = [resolve_remote_path(path, args.remote_root) for path in loaded]

        output_store = create_store(args.output, args.format, section) if args.output else None

        session = SelectiveSyncSession(
            args.remote_root,
            label,
            prior,
            transport=LocalDirectoryTransport(args.directory, remote_root=args.remote_root),
            store=output_store,
            include_files=args.include_files,
        )
        session.start()
        if session.tree.root is None:
            raise RuntimeError(f"Could not list {args.directory}")

        expand_to_depth(session, None if args.expand_all else args.depth)

        for path, state in toggles:
            node = reveal_path(session, resolve_remote_path(path, args.remote_root))
            session.toggle(node, state)

        if not args.no_tree:
            for line in session.tree.stream_tree_representation():
                print(line)

        exclusions = session.commit()
        if output_store is None:
            if not args.no_tree:
                print()
            for path in exclusions:
                print(path)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
