"""Unit tests for the argument parser module in syncselect CLI."""

import argparse
from pathlib import Path

import pytest

from syncselect.cli.argparser import create_parser, create_toggle_action, validate_args
from syncselect.selection_tree.selection_state import SelectionState


def test_create_toggle_action():
    """Test creation of ToggleAction class."""
    ToggleAction = create_toggle_action([])
    assert issubclass(ToggleAction, argparse.Action)

    action = ToggleAction(option_strings=["-x", "--exclude"], dest="exclude", help="test help")
    assert action.option_strings == ["-x", "--exclude"]
    assert action.dest == "exclude"
    assert action.help == "test help"


def test_toggle_action_records_state():
    """Test that each option string maps to the right state."""
    toggles = []
    ToggleAction = create_toggle_action(toggles)
    exclude = ToggleAction(option_strings=["-x", "--exclude"], dest="exclude")
    include = ToggleAction(option_strings=["-i", "--include"], dest="include")
    namespace = argparse.Namespace()

    exclude(None, namespace, "/Photos", "--exclude")
    include(None, namespace, "/Photos/best", "-i")
    exclude(None, namespace, None, "-x")

    assert toggles == [("/Photos", SelectionState.EXCLUDED), ("/Photos/best", SelectionState.INCLUDED)]
    assert namespace.exclude == ["/Photos"]
    assert namespace.include == ["/Photos/best"]


def test_parser_defaults():
    """Test parsing with only the required directory."""
    args = create_parser([]).parse_args(["/srv/mirror"])
    assert args.directory == Path("/srv/mirror")
    assert args.remote_root == "/"
    assert args.label is None
    assert args.blacklist is None
    assert args.exclude is None
    assert args.include is None
    assert args.depth == 1
    assert not args.expand_all
    assert args.output is None
    assert args.format == "text"
    assert args.section is None
    assert not args.no_tree
    assert not args.include_files
    assert not args.verbose


def test_parser_preserves_toggle_order():
    """Test that mixed -x and -i options are recorded in command-line order."""
    toggles = []
    parser = create_parser(toggles)
    args = parser.parse_args(["-x", "/a", "-i", "/a/b", "--exclude", "/c", "--include", "/a/b/d", "/srv"])

    assert toggles == [
        ("/a", SelectionState.EXCLUDED),
        ("/a/b", SelectionState.INCLUDED),
        ("/c", SelectionState.EXCLUDED),
        ("/a/b/d", SelectionState.INCLUDED),
    ]
    assert args.exclude == ["/a", "/c"]
    assert args.include == ["/a/b", "/a/b/d"]


def test_parser_all_options():
    """Test parsing every option."""
    args = create_parser([]).parse_args(
        [
            "-r",
            "/Shared",
            "-l",
            "Shared",
            "-b",
            "prior.cfg",
            "-d",
            "3",
            "-o",
            "out.cfg",
            "-f",
            "ini",
            "--section",
            "Shared",
            "-T",
            "-F",
            "-v",
            "/srv/mirror",
        ]
    )
    assert args.remote_root == "/Shared"
    assert args.label == "Shared"
    assert args.blacklist == Path("prior.cfg")
    assert args.depth == 3
    assert args.output == Path("out.cfg")
    assert args.format == "ini"
    assert args.section == "Shared"
    assert args.no_tree
    assert args.include_files
    assert args.verbose


def test_depth_and_expand_all_are_exclusive(capsys):
    """Test that -d and -a cannot be combined."""
    with pytest.raises(SystemExit) as excinfo:
        create_parser([]).parse_args(["-d", "2", "-a", "/srv"])
    assert excinfo.value.code == 2
    assert "not allowed with argument" in capsys.readouterr().err


def test_invalid_format(capsys):
    with pytest.raises(SystemExit):
        create_parser([]).parse_args(["-f", "json", "/srv"])
    assert "invalid choice" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        create_parser([]).parse_args(["-V"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("syncselect ")


@pytest.mark.parametrize(
    "argv,message",
    [
        (["-d", "0", "/srv"], "--depth must be at least 1"),
        (["--section", "Docs", "/srv"], "--section requires -f/--format ini"),
        (["-r", "Shared", "/srv"], "--remote-root must be an absolute path"),
    ],
)
def test_validate_args_rejects(argv, message):
    args = create_parser([]).parse_args(argv)
    with pytest.raises(ValueError, match=message):
        validate_args(args)


def test_validate_args_accepts_valid():
    args = create_parser([]).parse_args(["-f", "ini", "--section", "Docs", "-d", "2", "-r", "/Docs", "/srv"])
    validate_args(args)
