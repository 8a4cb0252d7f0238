"""GPG helpers: signature verification, keyservers, key listing and generation."""

from shellkit.gpg.keyservers import (
    KeyserverRequest,
    parse_keyserver_arguments,
    current_keyserver,
    get_saved_keyserver,
    save_keyserver,
    gpgks,
    choose_keyserver,
    export_line,
)
from shellkit.gpg.verify import (
    VerifyTarget,
    split_keyserver,
    resolve_targets,
    build_verify_command,
    prepare_target,
    gpgverify,
)
from shellkit.gpg.keys import build_list_command, list_keys
from shellkit.gpg.keygen import validate_input, interactive_keygen

__all__ = [
    "KeyserverRequest",
    "parse_keyserver_arguments",
    "current_keyserver",
    "get_saved_keyserver",
    "save_keyserver",
    "gpgks",
    "choose_keyserver",
    "export_line",
    "VerifyTarget",
    "split_keyserver",
    "resolve_targets",
    "build_verify_command",
    "prepare_target",
    "gpgverify",
    "build_list_command",
    "list_keys",
    "validate_input",
    "interactive_keygen",
]
