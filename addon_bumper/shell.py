"""Shell and git utilities.

Provides a thin wrapper around subprocess for git, plus the output
formatting helpers shared by every command.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def git(*args: str, cwd: str | Path | None = None) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
               Passed as a list, so values containing spaces are safe.
        cwd: Directory to run in. None uses the process working directory.

    Returns:
        Stripped stdout from the git command.

    Raises:
        subprocess.CalledProcessError: On non-zero exit.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a non-fatal warning to stderr. The run carries on."""
    print(f"WARNING: {msg}", file=sys.stderr)


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors: an unreadable addons directory or bump
    arguments that cannot be resolved before touching any file.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
