"""Reading and rewriting the version line of .toc files.

A .toc file is plain text; the only line we care about looks like::

    ## Version: 1.4.2

Everything else is left byte-for-byte intact, including CRLF line endings,
so rewritten files produce one-line diffs.
"""

from __future__ import annotations

import re

TOC_SUFFIX = ".toc"

# [^\r\n] so a CRLF file does not leak "\r" into the captured value.
VERSION_PATTERN = re.compile(r"^## Version: ([^\r\n]+)", re.MULTILINE)


def extract_version(content: str) -> str | None:
    """Return the value of the first ``## Version:`` line, or None."""
    match = VERSION_PATTERN.search(content)
    return match.group(1) if match else None


def replace_version(content: str, new_version: str) -> str:
    """Replace the first ``## Version:`` line's value with ``new_version``.

    Returns the content unchanged when no version line exists.
    """
    return VERSION_PATTERN.sub(
        lambda _m: f"## Version: {new_version}", content, count=1
    )


def read_toc(path: str) -> str:
    """Read a .toc file without translating line endings."""
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def write_toc(path: str, content: str) -> None:
    """Write a .toc file without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def display_path(path: str, root: str | None) -> str:
    """Strip the addons directory prefix from ``path`` for printing."""
    if root:
        prefix = root.rstrip("/\\")
        rest = path[len(prefix) :]
        if path.startswith(prefix) and rest[:1] in ("/", "\\"):
            return rest[1:]
    return path
