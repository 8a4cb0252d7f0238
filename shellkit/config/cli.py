"""Command-line interface argument parsing."""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from shellkit.config.settings import KEYSERVERS

# Subcommands whose positional arguments may start with a dash
# (`killproc firefox -HUP,QUIT`), mapped to the options they still accept.
FREE_FORM_COMMANDS: Dict[str, Tuple[str, ...]] = {
    "killproc": (),
    "gpgks": ("--choose", "--current", "--export"),
}

HELP_FLAGS = ("-h", "--help")

VIDS_ACTIONS: Tuple[str, ...] = (
    "find",
    "find-recursive",
    "nosheet",
    "extras",
    "empty",
    "flatten",
    "rm-empty",
    "rm-extra",
)


def protect_free_form_args(argv: Sequence[str]) -> List[str]:
    """
    Insert `--` after a free-form subcommand so argparse keeps its tokens.

    killproc and gpgks read arguments such as `-HUP,QUIT` or `-l` in order;
    argparse would otherwise take them for unknown options. Options the
    subcommand does define are moved in front of the `--`.

    Args:
        argv: Arguments without the program name.

    Returns:
        New argument list, unchanged for other subcommands or help requests.
    """
    argv = list(argv)
    for index, token in enumerate(argv):
        if token.startswith("-"):
            continue

        options = FREE_FORM_COMMANDS.get(token)
        if options is None:
            return argv

        rest = argv[index + 1:]
        if "--" in rest or any(arg in HELP_FLAGS for arg in rest):
            return argv

        flags = [arg for arg in rest if arg in options]
        free = [arg for arg in rest if arg not in options]
        return argv[:index + 1] + flags + ["--"] + free
    return argv


def _add_process_commands(subparsers) -> None:
    killproc = subparsers.add_parser(
        'killproc',
        help='kill every process with a given name',
        description="""
        Send signals (KILL, TERM, HUP, QUIT by default) to every process named
        PROCESS_NAME until none is left. A number restricts to a UID, an
        upper-case list such as HUP,TERM replaces the signals and a dash list
        such as -KILL,-HUP drops signals from them. Arguments are read in order.
        """
    )
    killproc.add_argument(
        'tokens',
        nargs='*',
        metavar='ARG',
        help='PROCESS_NAME [UID] [SIGNALS | -EXCLUDED]'
    )


def _add_gpg_commands(subparsers) -> None:
    verify = subparsers.add_parser(
        'gpgverify',
        help='verify a file against its detached signature',
        description="""
        Verify FILE with SIGNATURE (default FILE.sig, or FILE with the
        .sig suffix removed when only a signature is given).
        A keyserver URL may be given as the first argument.
        """
    )
    verify.add_argument(
        'args',
        nargs='*',
        metavar='ARG',
        help='[KEYSERVER_URL] FILE [SIGNATURE]'
    )

    keyservers = subparsers.add_parser(
        'gpgks',
        help='list or select the GPG keyserver',
        description=f"""
        Without arguments list the {len(KEYSERVERS)} known keyservers.
        l/list numbered list, a/all plain list, q/quiet select silently,
        a number selects that keyserver.
        """
    )
    keyservers.add_argument('tokens', nargs='*', metavar='ARG', help='list | all | quiet | NUMBER...')
    keyservers.add_argument('--choose', action='store_true', help='interactive keyserver menu')
    keyservers.add_argument('--current', action='store_true', help='print the active keyserver')
    keyservers.add_argument(
        '--export',
        action='store_true',
        help="print an export line for eval, e.g. eval \"$(shellkit gpgks --export)\""
    )

    keys = subparsers.add_parser('gpgkeys', help='list GPG keys')
    keys.add_argument('identity', nargs='?', help='key identity (default: $GPG_IDENTITY)')
    keys.add_argument('--secret', action='store_true', help='list secret keys')
    keys.add_argument('--long', action='store_true', dest='long_ids', help='long key ids')
    keys.add_argument('--both', action='store_true', help='list public then secret keys')

    subparsers.add_parser('gpgkeygen', help='generate a key from a name and email')


def _add_library_commands(subparsers) -> None:
    prevloop = subparsers.add_parser(
        'prevloop',
        help='sort a video collection through a picture preview loop',
        description="""
        Scan each collection directory for videos with a .jpg preview sheet
        and show them in random order with yad. Each button files the video
        into a rated sub-directory, opens it with mpv or deletes it.
        """
    )
    prevloop.add_argument('paths', nargs='*', metavar='DIR', help='collection root directories')
    prevloop.add_argument(
        '--no-wait',
        action='store_false',
        dest='wait',
        help="start the loop without waiting for Enter"
    )

    vids = subparsers.add_parser('vids', help='video collection maintenance helpers')
    vids.add_argument('action', choices=VIDS_ACTIONS, help='helper to run')
    vids.add_argument('directory', nargs='?', default='.', help='directory (default: current)')


def _add_alias_commands(subparsers) -> None:
    check = subparsers.add_parser(
        'alias-check',
        help='suggest aliases for a command line (used by the zsh hook)'
    )
    check.add_argument('--aliases', type=Path, help='file with `alias` output')
    check.add_argument('--global-aliases', type=Path, help='file with `alias -g` output')
    check.add_argument('typed', help='command line as typed')
    check.add_argument('expanded', nargs='?', help='command line after alias expansion')

    usage = subparsers.add_parser('alias-usage', help='count alias usage in the history file')
    usage.add_argument('--aliases', type=Path, help='file with `alias` output')
    usage.add_argument('--histfile', type=Path, help='history file (default: $HISTFILE)')
    usage.add_argument('--limit', type=int, help='only read the last LIMIT lines')

    hook = subparsers.add_parser('alias-hook', help='print the zsh alias reminder hook')
    hook.add_argument(
        '--command',
        dest='hook_command',
        default='shellkit',
        help='how the hook invokes shellkit (default: shellkit)'
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='shellkit',
        description="""
        Terminal shortcuts: process killing, GPG helpers, video collection
        sorting and shell alias reminders.
        """
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help="simulation mode - no file modifications"
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="enable debug mode"
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    _add_process_commands(subparsers)
    _add_gpg_commands(subparsers)
    _add_library_commands(subparsers)
    _add_alias_commands(subparsers)

    return parser


def parse_arguments(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    if args is None:
        args = sys.argv[1:]
    parser = create_parser()
    return parser.parse_args(protect_free_form_args(args))
