"""The command-line entry point and its top-level commands."""

from __future__ import annotations

import os
import sys
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence

from . import chip, notification, profile
from .applet import Applet, dispatch
from .backend import Euicc, EuiccError
from .context import DEFAULT_APDU_DRIVER, DEFAULT_HTTP_DRIVER, Session
from .jprint import emit_success

VERSION = "v0.0.0-unknown"

# APDU driver name -> factory taking the HTTP driver name.
_DRIVERS: Dict[str, Callable[[str], Euicc]] = {}


def version(session: Session, argv: Sequence[str]) -> int:
    """Report the program version."""
    emit_success(VERSION, session.stream)
    return 0


def root_applets(session: Session) -> List[Applet]:
    """The top-level commands."""
    return [
        chip.applet(session),
        profile.applet(session),
        notification.applet(session),
        Applet("version", partial(version, session)),
    ]


def run(argv: Sequence[str], session: Session) -> int:
    """Run the command named in argv and close the eUICC afterwards."""
    try:
        return dispatch(argv, root_applets(session), session.stream)
    finally:
        session.fini_euicc()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Pick the drivers named by LPAC_APDU and LPAC_HTTP and run the command."""
    args = list(sys.argv if argv is None else argv)
    apdu_driver = os.environ.get("LPAC_APDU", DEFAULT_APDU_DRIVER)
    http_driver = os.environ.get("LPAC_HTTP", DEFAULT_HTTP_DRIVER)

    factory = _DRIVERS.get(apdu_driver)
    if factory is None:
        print(f"unknown APDU driver: {apdu_driver}", file=sys.stderr)
        return -1
    try:
        euicc = factory(http_driver)
    except EuiccError:
        print(f"cannot start drivers: {apdu_driver}, {http_driver}", file=sys.stderr)
        return -1

    return run(args, Session(euicc))