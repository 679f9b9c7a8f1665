from typing import Any
from typer import Typer


def new_typer(**kwargs: Any) -> Typer:
    kwargs.setdefault("no_args_is_help", True)
    return Typer(pretty_exceptions_enable=False, **kwargs)
