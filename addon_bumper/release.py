"""Recording a bump in git: commit → tag → push.

Tags are named after the bare version (``2.0.0``, no ``v`` prefix) because
addon release automation keys off that name. When bumping a single addon the
git commands run inside that addon's directory, which is usually its own
repository.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from .shell import git


def default_message(version: str, addon: str | None = None) -> str:
    if addon:
        return f"Bump {addon} version to {version}"
    return f"Bump version to {version}"


def format_message(template: str | None, version: str, addon: str | None) -> str:
    """Render a commit message template.

    ``{addon}`` and ``{version}`` are substituted. No template means the
    default message.
    """
    if not template:
        return default_message(version, addon)
    return template.format(addon=addon or "", version=version)


def record_release(
    version: str,
    *,
    message: str | None = None,
    addon: str | None = None,
    cwd: str | Path | None = None,
    dry_run: bool = False,
) -> bool:
    """Commit pending changes, tag the version, and push both.

    Each step only runs if the previous one succeeded. A failure stops the
    sequence and is reported once; a commit or tag that already happened is
    left in place.

    Args:
        version: Version to tag.
        message: Commit message. Defaults to "Bump <addon> version to <version>".
        addon: Addon being released, used for the default message.
        cwd: Directory to run git in. None uses the current directory.
        dry_run: Print each intended action instead of running it.

    Returns:
        True if every step succeeded (or was only reported), False otherwise.
    """
    message = message or default_message(version, addon)

    if dry_run:
        print(f"  Would commit pending changes with message: {message}")
        print(f"  Would create tag: {version}")
        print("  Would push changes and tag to origin")
        return True

    try:
        status = git("status", "--porcelain", cwd=cwd)
        if status:
            print("  Committing changes...")
            git("add", ".", cwd=cwd)
            git("commit", "-m", message, cwd=cwd)

        print(f"  Creating tag: {version}")
        git("tag", version, cwd=cwd)

        print("  Pushing changes and tag...")
        git("push", "origin", "HEAD", version, cwd=cwd)
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        print(f"  ✗ Git operations failed: {' '.join(exc.cmd)}: {detail}")
        return False
    except OSError as exc:
        print(f"  ✗ Git operations failed: {exc}")
        return False

    print(f"  ✓ Tagged and pushed {version}")
    return True
