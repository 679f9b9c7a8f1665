import os
from textwrap import dedent

from rich.markup import escape

from cfswitch.tools.cli import print_info

from . import app

HOOKS = {
    "fish": """
        # ~/.config/fish/config.fish
        function cfs
            cf-switch $argv | source
        end
        """,
}

DEFAULT_HOOK = """
    # ~/.bashrc or ~/.zshrc
    cfs() { eval "$(cf-switch "$@")"; }
    """


def detect_shell() -> str:
    return os.environ.get("SHELL", "").rsplit("/", 1)[-1] or "bash"


def get_hook(shell: str) -> str:
    return dedent(HOOKS.get(shell, DEFAULT_HOOK)).strip()


@app.command()
def hook() -> None:
    """
    Print a shell function that wraps cf-switch and loads the credentials into the current shell.
    """

    print_info("Add this to your shell config:\n")
    print_info(escape(get_hook(detect_shell())))
