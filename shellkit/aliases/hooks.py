"""zsh hook installing the alias reminder in an interactive shell."""

from shellkit.config.settings import YSU_HARDCORE_EXIT_CODE

ZSH_HOOK_TEMPLATE = r"""# shellkit alias reminder; load with: eval "$({command} alias-hook)"
_shellkit_ysu_preexec() {{
    local output ret
    output="$(FORCE_COLOR=1 {command} alias-check \
        --aliases <(alias) --global-aliases <(alias -g) -- "$1" "$2" 2>&1)"
    ret=$?
    if [[ "${{YSU_MESSAGE_POSITION:-before}}" = "after" ]]; then
        _SHELLKIT_YSU_BUFFER+="$output"
    elif [[ -n "$output" ]]; then
        printf '%s\n' "$output" >&2
    fi
    if (( ret == {hardcore_status} )); then
        kill -s INT $$
    fi
}}

_shellkit_ysu_precmd() {{
    if [[ -n "$_SHELLKIT_YSU_BUFFER" ]]; then
        printf '%s\n' "$_SHELLKIT_YSU_BUFFER" >&2
        _SHELLKIT_YSU_BUFFER=""
    fi
}}

disable_you_should_use() {{
    add-zsh-hook -D preexec _shellkit_ysu_preexec
    add-zsh-hook -D precmd _shellkit_ysu_precmd
}}

enable_you_should_use() {{
    disable_you_should_use
    add-zsh-hook preexec _shellkit_ysu_preexec
    add-zsh-hook precmd _shellkit_ysu_precmd
}}

autoload -Uz add-zsh-hook
enable_you_should_use
"""


def render_zsh_hook(command: str = "shellkit", hardcore_status: int = YSU_HARDCORE_EXIT_CODE) -> str:
    """
    zsh code defining enable/disable functions for the reminder hooks.

    Args:
        command: How to invoke shellkit from the shell.
        hardcore_status: Exit status of alias-check that interrupts the command.
    """
    return ZSH_HOOK_TEMPLATE.format(command=command, hardcore_status=hardcore_status)
