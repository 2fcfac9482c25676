"""Data models for addon-bumper.

These Pydantic models represent the core data structures passed between the
config loader, the .toc catalog, the version calculator and the release steps.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BumpKind = Literal["major", "minor", "patch"]

DEFAULT_ADDONS_DIRECTORY = "./addons"


class Config(BaseModel):
    """User configuration, loaded once per invocation.

    Attributes:
        whitelisted_addons: Addon directory names that may be scanned and
            bumped. Order is kept and duplicates are not removed.
        addons_directory: Directory holding one subdirectory per addon.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    whitelisted_addons: list[str] = Field(
        default_factory=list, alias="whitelistedAddons"
    )
    addons_directory: str = Field(
        default=DEFAULT_ADDONS_DIRECTORY, alias="addonsDirectory"
    )


class TocFile(BaseModel):
    """A single .toc metadata file discovered under a whitelisted addon.

    Attributes:
        path: Location of the file, built from the configured addons directory.
        content: Full text as read at scan time, line endings untouched.
        version: Value of the ``## Version:`` line.
        addon_name: Name of the addon directory that owns the file.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    version: str
    addon_name: str


class Catalog(BaseModel):
    """Every .toc file found in one scan, in scan order."""

    model_config = ConfigDict(frozen=True)

    files: list[TocFile] = Field(default_factory=list)

    def for_addon(self, name: str) -> list[TocFile]:
        return [f for f in self.files if f.addon_name == name]

    def addon_names(self) -> list[str]:
        """Distinct addon names in the order they were first scanned."""
        return list(dict.fromkeys(f.addon_name for f in self.files))

    def groups(self) -> dict[str, list[TocFile]]:
        grouped: dict[str, list[TocFile]] = {}
        for f in self.files:
            grouped.setdefault(f.addon_name, []).append(f)
        return grouped


class BumpRequest(BaseModel):
    """One ``bump`` invocation as parsed from the command line.

    Attributes:
        version: Explicit target version. When None the next version is
            computed from ``kind``.
        kind: Which component to increment when computing the version.
        addon: Addon to bump. None means every addon in the catalog.
        unified: With no explicit version, compute one next version from the
            highest version across all addons and write it to every addon.
        dry_run: Report what would happen without writing or running git.
        message: Commit message template; ``{addon}`` and ``{version}`` are
            substituted per addon.
        verbose: Extra scan diagnostics.
    """

    version: str | None = None
    kind: BumpKind = "patch"
    addon: str | None = None
    unified: bool = False
    dry_run: bool = False
    message: str | None = None
    verbose: bool = False


class VersionBump(BaseModel):
    """Records a version change for an addon.

    Attributes:
        old: The highest version found before bumping.
        new: The version being written.
    """

    old: str
    new: str


class FileUpdate(BaseModel):
    """Outcome of rewriting one .toc file.

    ``written`` is False for dry runs and for failed writes; ``error`` is only
    set for the latter.
    """

    path: str
    old: str
    new: str
    written: bool = False
    error: str | None = None
