"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from addon_bumper.models import Config, TocFile


def write_toc(
    root: Path, addon: str, name: str, version: str, newline: str = "\n"
) -> Path:
    """Write a small but realistic .toc file and return its path."""
    lines = [
        "## Interface: 110002",
        f"## Title: {addon}",
        "## Author: someone",
        f"## Version: {version}",
        "",
        "core.lua",
        "",
    ]
    addon_dir = root / addon
    addon_dir.mkdir(parents=True, exist_ok=True)
    path = addon_dir / name
    path.write_bytes(newline.join(lines).encode("utf-8"))
    return path


def make_toc_file(version: str, addon: str = "Alpha", path: str | None = None) -> TocFile:
    """Build an in-memory TocFile without touching the disk."""
    return TocFile(
        path=path or f"./addons/{addon}/{addon}.toc",
        content=f"## Title: {addon}\n## Version: {version}\n",
        version=version,
        addon_name=addon,
    )


@pytest.fixture
def addons_dir(tmp_path: Path) -> Path:
    """Addons tree: Alpha (two files), Beta, and a non-whitelisted Gamma."""
    root = tmp_path / "addons"
    write_toc(root, "Alpha", "Alpha.toc", "1.0.0")
    write_toc(root, "Alpha", "Alpha_Vanilla.toc", "1.0.0")
    write_toc(root, "Beta", "Beta.toc", "2.1.0")
    write_toc(root, "Gamma", "Gamma.toc", "0.1.0")
    return root


@pytest.fixture
def config(addons_dir: Path) -> Config:
    return Config(whitelisted_addons=["Alpha", "Beta"], addons_directory=str(addons_dir))


@pytest.fixture
def config_file(tmp_path: Path, addons_dir: Path) -> Path:
    """A config.json pointing at the addons tree."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {"whitelistedAddons": ["Alpha", "Beta"], "addonsDirectory": str(addons_dir)}
        )
    )
    return path
