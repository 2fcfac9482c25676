"""Writing a new version into .toc files."""

from __future__ import annotations

from collections.abc import Iterable

from .models import FileUpdate, TocFile
from .toc import display_path, replace_version, write_toc


def rewrite(file: TocFile, new_version: str) -> str:
    """Return ``file``'s content with its version line set to ``new_version``."""
    return replace_version(file.content, new_version)


def apply_version(
    files: Iterable[TocFile],
    new_version: str,
    *,
    dry_run: bool = False,
    display_root: str | None = None,
) -> list[FileUpdate]:
    """Rewrite each file's version line, one file at a time.

    A failed write is recorded and printed; the remaining files are still
    attempted. Files already written stay written.

    Args:
        files: Files to update.
        new_version: Version to write.
        dry_run: Only report what would change. Nothing is opened for writing.
        display_root: Prefix stripped from paths in the printed report.

    Returns:
        One FileUpdate per input file, in order.
    """
    outcomes: list[FileUpdate] = []
    for f in files:
        shown = display_path(f.path, display_root)
        update = FileUpdate(path=f.path, old=f.version, new=new_version)

        if dry_run:
            print(f"  Would update {shown}: {f.version} → {new_version}")
            outcomes.append(update)
            continue

        try:
            write_toc(f.path, rewrite(f, new_version))
        except OSError as exc:
            print(f"  ✗ Failed to update {shown}: {exc}")
            outcomes.append(update.model_copy(update={"error": str(exc)}))
            continue

        print(f"  ✓ Updated {shown}: {f.version} → {new_version}")
        outcomes.append(update.model_copy(update={"written": True}))

    return outcomes

