"""Command implementations: show → list → bump (rewrite → commit → tag → push).

Loading is kept apart from acting. ``load_config`` and ``load_catalog``
produce immutable values up front; ``Bumper`` only works on what it is given
and never touches the disk in its constructor. ``load_bumper`` and
``run_bump`` at the bottom wire the two halves together for the CLI.
"""

from __future__ import annotations

from pathlib import Path

from .catalog import load_catalog
from .config import load_config
from .models import BumpKind, BumpRequest, Catalog, Config, TocFile, VersionBump
from .mutator import apply_version
from .release import format_message, record_release
from .shell import fatal, step, warn
from .toc import display_path
from .versions import OnComputed, next_version


def report_next_version(addon: str | None) -> OnComputed:
    """Build the callback that announces a computed version."""

    def _report(result: VersionBump, kind: BumpKind) -> None:
        suffix = f" for {addon}" if addon else ""
        print(f"  Current highest version{suffix}: {result.old}")
        print(f"  Next version{suffix} will be: {result.new} ({kind} bump)")

    return _report


class Bumper:
    """Runs the user-facing commands against one loaded catalog."""

    def __init__(self, config: Config, catalog: Catalog) -> None:
        self.config = config
        self.catalog = catalog

    def _display(self, path: str) -> str:
        return display_path(path, self.config.addons_directory)

    # ── read-only commands ───────────────────────────────────────────────

    def show_versions(self, addon: str | None = None) -> None:
        """Print every file's version, grouped by addon.

        Addons whose files disagree get a warning; nothing is corrected.
        """
        step("Current versions across .toc files")

        files = self.catalog.for_addon(addon) if addon else self.catalog.files
        if not files:
            if addon:
                print(f"  No .toc files found for addon: {addon}")
            else:
                print("  No .toc files found in any addon directories")
            return

        for name, group in Catalog(files=files).groups().items():
            print(f"\n{name}:")
            for f in group:
                print(f"  {self._display(f.path)}: {f.version}")
            versions = list(dict.fromkeys(f.version for f in group))
            if len(versions) > 1:
                warn(f"Inconsistent versions in {name}: {', '.join(versions)}")
            else:
                print(f"  ✓ All files have consistent version: {versions[0]}")

    def list_addons(self) -> None:
        step("Available addons")
        for name, group in self.catalog.groups().items():
            print(f"  {name} ({len(group)} .toc files)")

    def show_whitelist(self) -> None:
        step("Whitelisted addons")
        for name in self.config.whitelisted_addons:
            print(f"  {name}")
        print(f"\nTotal: {len(self.config.whitelisted_addons)} addons whitelisted")

    def show_config(self) -> None:
        step("Current configuration")
        print(f"  Addons directory: {self.config.addons_directory}")
        print(f"  Whitelisted addons: {len(self.config.whitelisted_addons)}")
        for name in self.config.whitelisted_addons:
            print(f"    {name}")

    # ── bumping ──────────────────────────────────────────────────────────

    def compute_next(
        self, addon: str | None = None, kind: BumpKind = "patch"
    ) -> VersionBump | None:
        """Next version for one addon, or across every file when addon is None."""
        files = self.catalog.for_addon(addon) if addon else self.catalog.files
        return next_version(files, kind, on_computed=report_next_version(addon))

    def plan(self, request: BumpRequest) -> dict[str, tuple[list[TocFile], str]]:
        """Resolve a request into addon → (files, version to write).

        Each addon's version is computed exactly once here and reused for
        both the rewrite and the tag. A unified request computes a single
        version from the highest one across all addons instead. Exits before anything is written when
        the requested addon has no .toc files.
        """
        if request.addon is not None:
            files = self.catalog.for_addon(request.addon)
            if not files:
                fatal(f"No .toc files found for addon: {request.addon}")
            groups = {request.addon: files}
        else:
            groups = self.catalog.groups()

        version = request.version
        if version is None and request.unified and request.addon is None:
            bumped = self.compute_next(None, request.kind)
            if bumped is None:
                warn("Could not determine current version to increment")
                return {}
            version = bumped.new

        planned: dict[str, tuple[list[TocFile], str]] = {}
        for name, files in groups.items():
            if version is not None:
                planned[name] = (files, version)
                continue
            bumped = next_version(
                files, request.kind, on_computed=report_next_version(name)
            )
            if bumped is None:
                warn(f"Could not determine current version for {name}")
                continue
            planned[name] = (files, bumped.new)
        return planned

    def bump(self, request: BumpRequest) -> bool:
        """Rewrite and tag each addon in the request independently.

        Returns:
            False if any file write or git sequence failed. Failures are
            reported but never stop the other addons.
        """
        planned = self.plan(request)
        if not planned:
            print("  Nothing to bump")
            return True

        if request.dry_run:
            step("DRY RUN - no files will be modified and no git commands run")

        ok = True
        for name, (files, version) in planned.items():
            step(f"Bumping {name} to version {version}")
            outcomes = apply_version(
                files,
                version,
                dry_run=request.dry_run,
                display_root=self.config.addons_directory,
            )
            if any(o.error for o in outcomes):
                ok = False

            message = format_message(request.message, version, name)
            addon_dir = Path(self.config.addons_directory) / name
            if not record_release(
                version,
                message=message,
                addon=name,
                cwd=addon_dir,
                dry_run=request.dry_run,
            ):
                ok = False

        return ok


def load_bumper(config_path: str | None = None, *, verbose: bool = False) -> Bumper:
    """Load config and catalog, then build a Bumper around them."""
    config = load_config(config_path, verbose=verbose)
    catalog = load_catalog(config, verbose=verbose)
    return Bumper(config, catalog)


def run_bump(request: BumpRequest, *, config_path: str | None = None) -> bool:
    bumper = load_bumper(config_path, verbose=request.verbose)
    ok = bumper.bump(request)
    if ok:
        print(f"\n{'=' * 60}\nDone!\n{'=' * 60}")
    else:
        print(f"\n{'=' * 60}\nDone with errors, see above.\n{'=' * 60}")
    return ok
