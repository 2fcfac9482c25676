"""Discovery of .toc files under the whitelisted addon directories."""

from __future__ import annotations

import os

from .models import Catalog, Config, TocFile
from .shell import fatal, warn
from .toc import TOC_SUFFIX, extract_version, read_toc


def _list_dir(path: str) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def load_catalog(config: Config, *, verbose: bool = False) -> Catalog:
    """Scan the addons directory and load every whitelisted .toc file.

    Only immediate subdirectories whose name is on the whitelist are read;
    anything else is excluded before its files are even listed. A whitelisted
    name with no directory on disk contributes nothing and is not reported.

    Unreadable addon directories, unreadable files and files without a
    ``## Version:`` line are skipped with a warning. An unreadable addons
    directory is fatal.

    Returns:
        Catalog of the files found, in (addon, file name) order.
    """
    root = config.addons_directory
    whitelist = set(config.whitelisted_addons)

    try:
        entries = _list_dir(root)
    except OSError as exc:
        fatal(f"Error reading addons directory {root}: {exc}")

    all_dirs = [e.name for e in entries if e.is_dir()]
    addon_dirs = [name for name in all_dirs if name in whitelist]
    excluded = len(all_dirs) - len(addon_dirs)

    if verbose:
        print(f"  Whitelisted addons: {', '.join(addon_dirs) or '<none>'}")
        if excluded:
            print(f"  Found {excluded} excluded addons (not shown)")

    files: list[TocFile] = []
    for addon in addon_dirs:
        addon_path = os.path.join(root, addon)
        try:
            toc_names = [
                e.name
                for e in _list_dir(addon_path)
                if e.is_file() and e.name.endswith(TOC_SUFFIX)
            ]
        except OSError as exc:
            warn(f"Could not read directory {addon_path}: {exc}")
            continue

        if verbose:
            print(f"  Found .toc files in {addon}: {', '.join(toc_names)}")

        for toc_name in toc_names:
            file_path = os.path.join(addon_path, toc_name)
            try:
                content = read_toc(file_path)
            except (OSError, UnicodeDecodeError) as exc:
                warn(f"Could not read {file_path}: {exc}")
                continue

            version = extract_version(content)
            if version is None:
                warn(f"No version found in {file_path}")
                continue
            files.append(
                TocFile(
                    path=file_path, content=content, version=version, addon_name=addon
                )
            )

    return Catalog(files=files)
