"""Integration tests for the command-line interface.

This integration test suite runs syncselect as a separate process and covers:
- Tree output at a given depth
- Ordered exclusions and inclusions
- Prior exclusion lists in text and INI format
- Output file verification
- Symlinked directories
- Error exit codes
- Version information
"""

import os
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

# Skip all tests in this module unless --run-cli-tests is given
# This prevents these slow tests from running during normal test runs
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


@pytest.fixture
def temp_mirror():
    """Create a temporary directory standing in for a synchronized folder."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base_dir = Path(tmpdir) / "Documents"

        for folder in (
            "Projects/alpha",
            "Projects/beta/build",
            "Projects/beta/src",
            "Photos/2019",
            "Photos/2020",
            "Archive",
        ):
            (base_dir / folder).mkdir(parents=True)

        (base_dir / "Projects" / "alpha" / "notes.md").write_text("# Notes\n")
        (base_dir / "Photos" / "2019" / "beach.jpg").write_bytes(b"jpeg")
        (base_dir / "todo.txt").write_text("nothing\n")

        yield base_dir


def run_cli(args, cwd=None, timeout=10):
    """Run the syncselect CLI with the given arguments.

    Args:
        args: List of CLI arguments
        cwd: Working directory
        timeout: Maximum time to wait for command to complete

    Returns:
        CompletedProcess object with stdout/stderr as text
    """
    cmd = [sys.executable, "-m", "syncselect.cli"] + args
    return subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=cwd, timeout=timeout)


def test_cli_default_depth(temp_mirror):
    result = run_cli([str(temp_mirror)])

    assert result.returncode == 0
    assert result.stdout.splitlines() == [
        "[x] Documents/",
        "├── [x] Archive/ ...",
        "├── [x] Photos/ ...",
        "└── [x] Projects/ ...",
        "",
    ]


def test_cli_ordered_toggles(temp_mirror):
    result = run_cli(["-a", "-x", "/Projects", "-i", "/Projects/beta", "-x", "/Projects/beta/build", str(temp_mirror)])

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert "└── [~] Projects/" in lines
    assert "    ├── [ ] alpha/" in lines
    assert "    └── [~] beta/" in lines
    assert "        ├── [ ] build/" in lines
    assert "        └── [x] src/" in lines
    assert lines[-2:] == ["/Projects/alpha", "/Projects/beta/build"]


def test_cli_no_tree_with_files(temp_mirror):
    result = run_cli(["-T", "-F", "-x", "todo.txt", str(temp_mirror)])

    assert result.returncode == 0
    assert result.stdout == "/todo.txt\n"


def test_cli_prior_list_for_unlisted_folders(temp_mirror, tmp_path):
    prior = tmp_path / "blacklist.txt"
    prior.write_text("# previous selection\n/Photos/2019\n/Projects/beta/build/\n")

    result = run_cli(["-T", "-b", str(prior), "-x", "/Archive", str(temp_mirror)])

    assert result.returncode == 0
    assert result.stdout.splitlines() == ["/Archive", "/Photos/2019", "/Projects/beta/build"]


def test_cli_reincluding_everything_clears_list(temp_mirror, tmp_path):
    prior = tmp_path / "blacklist.txt"
    prior.write_text("/Photos/2019\n")

    result = run_cli(["-T", "-b", str(prior), "-o", str(prior), "-i", "/", str(temp_mirror)])

    assert result.returncode == 0
    assert result.stdout == ""
    assert prior.read_text() == ""


def test_cli_ini_output(temp_mirror, tmp_path):
    config = tmp_path / "folders.cfg"
    config.write_text("[Docs]\nlocalPath = /home/user/Documents\n")

    result = run_cli(
        [
            "-T",
            "-f",
            "ini",
            "--section",
            "Docs",
            "-o",
            str(config),
            "-r",
            "/Documents",
            "-x",
            "Photos",
            str(temp_mirror),
        ]
    )

    assert result.returncode == 0
    content = config.read_text()
    assert "localPath = /home/user/Documents" in content
    assert "/Documents/Photos" in content


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlinks not supported")
def test_cli_symlinked_directory(temp_mirror):
    try:
        os.symlink(temp_mirror / "Photos", temp_mirror / "Pictures")
    except OSError:
        pytest.skip("Symlinks could not be created")

    result = run_cli(["-d", "2", "-x", "/Pictures/2020", str(temp_mirror)])

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert "├── [~] Pictures/" in lines
    assert lines[-1] == "/Pictures/2020"


def test_cli_unknown_path(temp_mirror):
    result = run_cli(["-x", "/Missing/folder", str(temp_mirror)])

    assert result.returncode == 1
    assert "Error: No node for path: /Missing" in result.stderr


def test_cli_missing_directory(tmp_path):
    result = run_cli([str(tmp_path / "absent")])

    assert result.returncode == 1
    assert "Error:" in result.stderr


def test_cli_invalid_option_combination(temp_mirror):
    result = run_cli(["-d", "2", "-a", str(temp_mirror)])
    assert result.returncode == 2


def test_cli_verbose_logs_to_stderr(temp_mirror):
    result = run_cli(["-v", "-T", str(temp_mirror)])

    assert result.returncode == 0
    assert "DEBUG: syncselect" in result.stderr
    assert "Requesting listing of /" in result.stderr


def test_cli_version():
    result = run_cli(["--version"])

    assert result.returncode == 0
    assert result.stdout.startswith("syncselect ")
