"""Entry point for the shellkit package.

This module provides the command-line entry point for every shellkit command.
Run with: python -m shellkit
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from shellkit.aliases import (
    alias_usage,
    find_reminders,
    load_alias_file,
    load_git_aliases,
    print_reminders,
    render_zsh_hook,
)
from shellkit.config import execution_context, get_context, parse_arguments
from shellkit.config.settings import YSU_HARDCORE_EXIT_CODE, default_log_file
from shellkit.exceptions import CollectionError, ShellkitError
from shellkit.gpg import (
    choose_keyserver,
    current_keyserver,
    export_line,
    gpgks,
    gpgverify,
    interactive_keygen,
    list_keys,
)
from shellkit.library import (
    find_empty_dirs,
    find_extra_files,
    find_videos,
    find_videos_without_sheet,
    flatten_videos,
    prevloop,
    remove_empty_dirs,
    remove_extra_files,
)
from shellkit.process import killproc
from shellkit.ui import console


def setup_logging(debug: bool = False) -> None:
    """
    Configure loguru logging.

    Args:
        debug: If True, show debug-level logging on the terminal.
    """
    logger.remove()
    level = "DEBUG" if debug else "WARNING"
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    logger.add(
        str(default_log_file()),
        rotation="10 MB",
        retention="7 days",
        level="DEBUG",
    )


def run_killproc(args: argparse.Namespace) -> int:
    report = killproc(args.tokens)
    return 0 if report.success else 1


def run_gpgverify(args: argparse.Namespace) -> int:
    return gpgverify(args.args)


def run_gpgks(args: argparse.Namespace) -> int:
    """Select keyservers, then print the active one as requested."""
    if args.choose:
        choose_keyserver()
    elif args.tokens or not (args.current or args.export):
        gpgks(args.tokens)

    if args.current:
        console.print_plain(current_keyserver())
    if args.export:
        console.print_plain(export_line(current_keyserver()))
    return 0


def run_gpgkeys(args: argparse.Namespace) -> int:
    return list_keys(
        secret=args.secret,
        long_ids=args.long_ids,
        identity=args.identity,
        both=args.both,
    )


def run_gpgkeygen(args: argparse.Namespace) -> int:
    return interactive_keygen()


def run_prevloop(args: argparse.Namespace) -> int:
    prevloop(args.paths, wait=args.wait)
    return 0


def _print_paths(paths: Sequence[Path]) -> None:
    console.print_list(str(path) for path in paths)


def run_vids(args: argparse.Namespace) -> int:
    """Run one of the collection maintenance helpers on a directory."""
    directory = Path(args.directory).expanduser()
    if not directory.is_dir():
        raise CollectionError(f"Not a directory: {directory}", exit_code=1)

    dry_run = get_context().dry_run
    finders: Dict[str, Callable[[Path], List[Path]]] = {
        "find": find_videos,
        "find-recursive": lambda path: find_videos(path, recursive=True),
        "nosheet": find_videos_without_sheet,
        "extras": find_extra_files,
        "empty": find_empty_dirs,
    }

    if args.action in finders:
        _print_paths(finders[args.action](directory))
    elif args.action == "flatten":
        moved = flatten_videos(directory, dry_run=dry_run)
        logger.info(f"Flattened {len(moved)} videos into {directory}")
    elif args.action == "rm-empty":
        remove_empty_dirs(directory, dry_run=dry_run)
    elif args.action == "rm-extra":
        remove_extra_files(directory, dry_run=dry_run)
    return 0


def run_alias_check(args: argparse.Namespace) -> int:
    """Print alias suggestions; the hardcore status asks the hook to stop the command."""
    result = find_reminders(
        typed=args.typed,
        expanded=args.expanded or args.typed,
        aliases=load_alias_file(args.aliases),
        global_aliases=load_alias_file(args.global_aliases),
        git_aliases=load_git_aliases,
    )
    print_reminders(result)
    return YSU_HARDCORE_EXIT_CODE if result.blocked else 0


def run_alias_usage(args: argparse.Namespace) -> int:
    aliases = load_alias_file(args.aliases)
    if not aliases:
        console.print_warning("No aliases given; pass --aliases <(alias)")
        return 1

    for usage in alias_usage(aliases, histfile=args.histfile, limit=args.limit):
        console.print_plain(str(usage))
    return 0


def run_alias_hook(args: argparse.Namespace) -> int:
    console.print_plain(render_zsh_hook(args.hook_command, YSU_HARDCORE_EXIT_CODE))
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "killproc": run_killproc,
    "gpgverify": run_gpgverify,
    "gpgks": run_gpgks,
    "gpgkeys": run_gpgkeys,
    "gpgkeygen": run_gpgkeygen,
    "prevloop": run_prevloop,
    "vids": run_vids,
    "alias-check": run_alias_check,
    "alias-usage": run_alias_usage,
    "alias-hook": run_alias_hook,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for shellkit.

    Args:
        argv: Arguments without the program name (None for sys.argv).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    namespace = parse_arguments(argv)

    setup_logging(namespace.debug)

    if namespace.dry_run:
        console.print_warning("SIMULATION MODE: no file will be moved or deleted")

    with execution_context(dry_run=namespace.dry_run, debug=namespace.debug):
        logger.debug(f"Running {namespace.command}")
        try:
            return COMMANDS[namespace.command](namespace)
        except ShellkitError as e:
            logger.debug(f"{namespace.command} failed: {e}")
            code = e.exit_code if isinstance(e, CollectionError) else None
            console.print_error(str(e), code)
            return e.exit_code
        except KeyboardInterrupt:
            console.print_warning("Interrupted")
            return 130


if __name__ == "__main__":
    sys.exit(main())
