"""Command-line argument parsing for syncselect.

This module defines the command-line interface for syncselect,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from syncselect import __version__
from syncselect.selection_tree.selection_state import SelectionState

# Toggles in command-line order: (remote path, state to set)
ToggleList = List[Tuple[str, SelectionState]]


def create_toggle_action(toggles: ToggleList) -> Type[argparse.Action]:
    """Create a custom action class that records toggles in command-line order.

    Exclusions and inclusions interact (including a folder inside an excluded one
    only partially re-includes the parent), so they must be applied in exactly the
    order they were given. A single shared list preserves that order across both
    options.

    Args:
        toggles: The list to append (path, state) pairs to during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ToggleAction(argparse.Action):
        """Action to record a toggle as the argument is processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-x", "--exclude"):
                state = SelectionState.EXCLUDED
            else:  # -i/--include
                state = SelectionState.INCLUDED
            toggles.append((str(values), state))

            # Also keep per-option lists on the namespace
            current = getattr(namespace, self.dest, None)
            if current is None:
                current = []
                setattr(namespace, self.dest, current)
            current.append(values)

    return ToggleAction


def create_parser(toggles: ToggleList) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        toggles: The list that -x/--exclude and -i/--include append to during parsing.

    Returns:
        An ArgumentParser instance configured with syncselect's options.
    """
    description = """
    syncselect: Choose which folders of a synchronized tree are excluded from sync.

    The directory given on the command line is served as the remote folder. Its tree
    is listed lazily, starting from the root, and shown with a checkbox per folder:

      [x]  included in synchronization
      [ ]  excluded, together with everything beneath it
      [~]  partially included: something beneath it is excluded

    Folders that were never listed end in "...". Their exclusions are carried over
    unchanged from the prior exclusion list (-b/--blacklist).

    The resulting exclusion list is minimal: an excluded folder is listed once,
    never together with folders beneath it.
    """

    epilog = """
    Examples:
      # Show the first level of a folder
      syncselect /srv/mirror

      # Expand three levels, or everything
      syncselect -d 3 /srv/mirror
      syncselect -a /srv/mirror

      # Start from an existing exclusion list and exclude two more folders
      syncselect -b blacklist.txt -x /Photos/raw -x /Videos /srv/mirror

      # Exclude a folder but keep one subfolder
      syncselect -x /Photos -i /Photos/best /srv/mirror

      # Serve the directory as remote path /Shared and write the result to a file
      syncselect -r /Shared -x /Shared/tmp -o blacklist.txt /srv/mirror

      # Keep the list in a folder section of an INI config file
      syncselect -f ini --section Shared -b folders.cfg -o folders.cfg /srv/mirror

      # Display version information and exit
      syncselect -V
    """

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"syncselect {__version__}", help="Show the version and exit"
    )

    ToggleAction = create_toggle_action(toggles)

    parser.add_argument(
        "directory",
        type=Path,
        help="Local directory served as the remote folder.",
    )
    parser.add_argument(
        "-r",
        "--remote-root",
        metavar="PATH",
        default="/",
        help="Remote path the directory stands for (default: /).",
    )
    parser.add_argument(
        "-l",
        "--label",
        help="Display name of the root folder (default: the directory name).",
    )
    parser.add_argument(
        "-b",
        "--blacklist",
        type=Path,
        metavar="FILE",
        help="Prior exclusion list to start from, in the format given by -f/--format.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        metavar="PATH",
        action=ToggleAction,
        help=(
            "Exclude a folder and everything beneath it. Relative paths are taken relative "
            "to the remote root. Can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-i",
        "--include",
        metavar="PATH",
        action=ToggleAction,
        help=(
            "Include a folder and everything beneath it. Can be specified multiple times; "
            "toggles are applied in the order they appear, mixed with -x/--exclude."
        ),
    )
    depth_group = parser.add_mutually_exclusive_group()
    depth_group.add_argument(
        "-d",
        "--depth",
        type=int,
        default=1,
        help="Number of folder levels to list below the root (default: 1).",
    )
    depth_group.add_argument(
        "-a",
        "--expand-all",
        action="store_true",
        help="List the whole tree.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Write the exclusion list to FILE instead of stdout.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "ini"],
        default="text",
        help="Format of -b/--blacklist and -o/--output files (default: text, one path per line).",
    )
    parser.add_argument(
        "--section",
        metavar="NAME",
        help="INI section holding the folder's exclusion list (default: the root label).",
    )
    parser.add_argument(
        "-T",
        "--no-tree",
        action="store_true",
        help="Do not print the folder tree.",
    )
    parser.add_argument(
        "-F",
        "--include-files",
        action="store_true",
        help="Show files as well as folders.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log listing activity to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.depth < 1:
        raise ValueError("--depth must be at least 1")

    if args.section is not None and args.format != "ini":
        raise ValueError("--section requires -f/--format ini")

    if not args.remote_root.startswith("/"):
        raise ValueError("--remote-root must be an absolute path")
