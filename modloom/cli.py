"""modloom command-line interface.

Usage::

    modloom setup --name MyAddon --type addon -p ./my-addon
    modloom create-module --name core -p ./my-addon
    modloom generate -p ./my-addon --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from modloom import __version__
from modloom.config import ConfigError, GenerationOptions, ProjectType
from modloom.generator import GenerationError, InitGenerator
from modloom.scaffold import ScaffoldError, create_module, setup_project
from modloom.utils import console, is_valid_name, print_error

_FATAL_ERRORS = (ConfigError, GenerationError, ScaffoldError)


# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------


def _existing_directory(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"Could not find directory at path '{path.resolve()}'")
    return path


def _name(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("Name cannot be empty or whitespace")
    if not is_valid_name(value):
        raise argparse.ArgumentTypeError("Name must be alphanumerical only.")
    return value


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_global_options(parser: argparse.ArgumentParser, *, suppress: bool) -> None:
    """Add ``--path`` and ``--verbose``.

    Subcommands get copies with suppressed defaults so the options work both
    before and after the subcommand name.
    """
    parser.add_argument(
        "--path", "-p",
        type=_existing_directory,
        default=argparse.SUPPRESS if suppress else Path.cwd(),
        help="Root directory of the project (default: current working directory)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Print the modules, files and realms being handled",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``modloom`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="modloom",
        description=(
            "Generates the initialization scripts for a Garry's Mod addon/gamemode, "
            "using a module-based approach."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modloom setup --name MyAddon --type addon\n"
            "  modloom create-module --name core\n"
            "  modloom generate --verbose\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_options(parser, suppress=False)

    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, suppress=True)

    subparsers = parser.add_subparsers(dest="command", required=True)

    setup = subparsers.add_parser(
        "setup",
        parents=[common],
        help="Set up the modloom configuration file and modules folder for a project",
    )
    setup.add_argument(
        "--name", "-n",
        required=True,
        type=_name,
        help="Name of the project, used when generating file names",
    )
    setup.add_argument(
        "--type", "-t",
        required=True,
        choices=[t.value for t in ProjectType],
        help="Type of project to generate statements for",
    )

    generate = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate the initialization scripts for a project",
    )
    generate.add_argument(
        "--sorted",
        action="store_true",
        help=(
            "Order undeclared modules and scripts lexically instead of by file-system order "
            "(also enabled by MODLOOM_SORTED=1)"
        ),
    )

    create = subparsers.add_parser(
        "create-module",
        parents=[common],
        help="Create a new module with the given name for the project",
    )
    create.add_argument(
        "--name", "-n",
        required=True,
        type=_name,
        help="Name of the module to create",
    )

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


async def run_command(args: argparse.Namespace) -> None:
    """Execute the parsed subcommand."""
    if args.command == "setup":
        await setup_project(args.name, args.path, args.type)
    elif args.command == "generate":
        env = GenerationOptions.from_env()
        options = GenerationOptions(
            verbose=args.verbose or env.verbose,
            sort_paths=args.sorted or env.sort_paths,
        )
        await InitGenerator(args.path, options=options).generate()
    elif args.command == "create-module":
        await create_module(args.path, args.name)
    else:
        raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``modloom`` and ``python -m modloom``."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return

    args = parser.parse_args(argv)
    console.print()

    try:
        asyncio.run(run_command(args))
    except _FATAL_ERRORS as exc:
        if args.verbose:
            console.print_exception()
        print_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Cancelled.")
        sys.exit(130)


if __name__ == "__main__":
    main()
