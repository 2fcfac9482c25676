"""CLI entry point for addon-bumper."""

from __future__ import annotations

import argparse
import re
import sys
from importlib.metadata import version as pkg_version

from .config import load_config
from .models import BumpRequest, Catalog
from .pipeline import Bumper, load_bumper, run_bump
from .release import format_message
from .shell import fatal
from .versions import is_valid_version

__version__ = pkg_version("addon-bumper")

# Dotted numbers are meant as versions, even when not MAJOR.MINOR.PATCH.
VERSION_LIKE_RE = re.compile(r"^\d+(\.\d+)*$")

EXAMPLES = """\
examples:
  addon-bumper show
  addon-bumper list
  addon-bumper bump 1.2.3 YourAddonName
  addon-bumper bump 1.2.3
  addon-bumper bump --dry
  addon-bumper bump all --major --dry
  addon-bumper bump YourAddonName --minor
  addon-bumper bump YourAddonName --verbose
"""


def parse_bump_targets(targets: list[str]) -> tuple[str | None, str | None]:
    """Split bump positionals into (explicit version, addon).

    Accepts a version, an addon name or ``all``, in either order. Exits when
    the combination cannot be resolved, before any file is read for writing.

    Returns:
        (version or None, addon or None). An addon of None means all addons.
    """
    version: str | None = None
    addon: str | None = None
    want_all = False

    for token in targets:
        if is_valid_version(token):
            if version is not None:
                fatal(f"More than one version given: {version}, {token}")
            version = token
        elif VERSION_LIKE_RE.match(token):
            fatal(f"Invalid version '{token}', expected MAJOR.MINOR.PATCH")
        elif token == "all":
            want_all = True
        else:
            if addon is not None:
                fatal(f"More than one addon given: {addon}, {token}")
            addon = token

    if want_all and addon is not None:
        fatal(f"Use either 'all' or an addon name, not both ({addon})")
    if version is None and addon is None and not want_all:
        fatal(
            "No addon specified. Use 'all' to bump all addons or specify an addon name.\n"
            "  addon-bumper bump all --major\n"
            "  addon-bumper bump YourAddonName --major"
        )
    return version, addon


def cmd_show(args: argparse.Namespace) -> None:
    """Show current versions of all addons, or of one."""
    load_bumper(args.config, verbose=args.verbose).show_versions(args.addon)


def cmd_list(args: argparse.Namespace) -> None:
    """List addons that have .toc files."""
    load_bumper(args.config, verbose=args.verbose).list_addons()


def cmd_whitelist(args: argparse.Namespace) -> None:
    """Show whitelisted addons."""
    config = load_config(args.config, verbose=args.verbose)
    Bumper(config, Catalog()).show_whitelist()


def cmd_config(args: argparse.Namespace) -> None:
    """Show the loaded configuration."""
    config = load_config(args.config, verbose=args.verbose)
    Bumper(config, Catalog()).show_config()


def cmd_bump(args: argparse.Namespace) -> None:
    """Bump to an explicit version or to the next major/minor/patch."""
    # A bare "bump" moves every addon to one version past the highest found.
    unified = not args.targets and args.kind is None
    if unified:
        version, addon = None, None
    else:
        version, addon = parse_bump_targets(args.targets)

    if args.message:
        try:
            format_message(args.message, "0.0.0", "addon")
        except (AttributeError, KeyError, IndexError, ValueError) as exc:
            fatal(f"Invalid commit message template {args.message!r}: {exc}")

    request = BumpRequest(
        version=version,
        kind=args.kind or "patch",
        addon=addon,
        unified=unified,
        dry_run=args.dry,
        message=args.message,
        verbose=args.verbose,
    )
    run_bump(request, config_path=args.config)


def _add_common_options(
    parser: argparse.ArgumentParser, *, on_subcommand: bool = False
) -> None:
    # On subcommands the options default to SUPPRESS so a value given before
    # the subcommand name is not reset by the subparser.
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if on_subcommand else False,
        help="Show extra diagnostics while loading config and scanning addons.",
    )
    parser.add_argument(
        "--config",
        default=argparse.SUPPRESS if on_subcommand else None,
        help="Config file (default: config.json or config.toml in the cwd).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addon-bumper",
        description="Keep addon .toc versions in sync, then commit, tag and push.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_common_options(parser)
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Show current versions of all addons.")
    show_parser.add_argument("addon", nargs="?", help="Only show this addon.")
    show_parser.set_defaults(func=cmd_show)
    _add_common_options(show_parser, on_subcommand=True)

    list_parser = subparsers.add_parser("list", help="List available addons.")
    list_parser.set_defaults(func=cmd_list)
    _add_common_options(list_parser, on_subcommand=True)

    whitelist_parser = subparsers.add_parser("whitelist", help="Show whitelisted addons.")
    whitelist_parser.set_defaults(func=cmd_whitelist)
    _add_common_options(whitelist_parser, on_subcommand=True)

    config_parser = subparsers.add_parser("config", help="Show current configuration.")
    config_parser.set_defaults(func=cmd_config)
    _add_common_options(config_parser, on_subcommand=True)

    bump_parser = subparsers.add_parser(
        "bump",
        help="Bump to a version, or to the next major/minor/patch.",
    )
    bump_parser.add_argument(
        "targets",
        nargs="*",
        metavar="VERSION|ADDON|all",
        help="Explicit version and/or addon name, or 'all'.",
    )
    kind = bump_parser.add_mutually_exclusive_group()
    kind.add_argument(
        "--major", dest="kind", action="store_const", const="major",
        help="Bump the major version.",
    )
    kind.add_argument(
        "--minor", dest="kind", action="store_const", const="minor",
        help="Bump the minor version.",
    )
    kind.add_argument(
        "--patch", dest="kind", action="store_const", const="patch",
        help="Bump the patch version (default).",
    )
    bump_parser.add_argument(
        "--dry", action="store_true", help="Dry run: report only, change nothing."
    )
    bump_parser.add_argument(
        "-m",
        "--message",
        default=None,
        help="Commit message template; {addon} and {version} are substituted.",
    )
    _add_common_options(bump_parser, on_subcommand=True)
    bump_parser.set_defaults(func=cmd_bump, kind=None)

    return parser


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args_list = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not args_list:
        parser.print_help()
        return

    # Flags may sit anywhere, so positionals that argparse could not place
    # (e.g. "bump --major Foo") are folded back into the bump targets.
    args, extras = parser.parse_known_args(args_list)
    if extras:
        if args.command != "bump" or any(e.startswith("-") for e in extras):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        args.targets = [*args.targets, *extras]

    args.func(args)
