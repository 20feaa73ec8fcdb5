"""Operator confirmation gate."""

import sys
from collections.abc import Callable
from typing import TextIO

from massive_pvc.utils.errors import ConsoleError

PROMPT = "-> Press Return key to continue."

Confirm = Callable[[], None]


def press_return_to_continue(stream: TextIO | None = None) -> None:
    """Block until one line is read from ``stream`` (stdin by default).

    End of input counts as confirmation. A failing read raises ConsoleError.
    """
    stream = stream if stream is not None else sys.stdin
    print(PROMPT, end="", flush=True)
    try:
        stream.readline()
    except (OSError, ValueError) as e:
        raise ConsoleError(f"Failed to read confirmation from stdin: {e}") from e
    print()


def no_confirm() -> None:
    """Gate used when running without prompts."""
