"""Named sub-commands and dispatch between them."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, TextIO


@dataclass(frozen=True)
class Applet:
    """A sub-command: its name and the function run with its arguments."""

    name: str
    main: Callable[[List[str]], int]


def usage(selfname: str, entries: Iterable[Applet], stream: Optional[TextIO] = None) -> None:
    """Print the list of available sub-commands."""
    out = sys.stdout if stream is None else stream
    names = "|".join(entry.name for entry in entries)
    print(f"Usage: {selfname} <{names}>", file=out)


def dispatch(argv: Sequence[str], entries: Iterable[Applet], stream: Optional[TextIO] = None) -> int:
    """Run the sub-command named by argv[1] with argv[1:]; return its exit status."""
    out = sys.stdout if stream is None else stream
    entries = list(entries)
    selfname = argv[0] if argv else ""

    if len(argv) < 2:
        usage(selfname, entries, out)
        return -1

    command = argv[1]
    entry = next((e for e in entries if e.name == command), None)
    if entry is not None:
        return entry.main(list(argv[1:]))

    print(f"Unknown command: {command}", file=out)
    usage(selfname, entries, out)
    return -1