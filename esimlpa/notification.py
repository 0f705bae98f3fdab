"""The ``notification`` commands: list, send and remove pending notifications."""

from __future__ import annotations

import getopt
import re
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .applet import Applet, dispatch
from .backend import EuiccError, NotificationMetadata
from .context import InitError, Session
from .jprint import emit_error, emit_progress, emit_success
from .tostr import profile_management_operation_str

_ULONG_MAX = 2**64 - 1
_UINT32_MODULUS = 2**32
_UNSIGNED_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")


def parse_seq_numbers(args: Iterable[str]) -> List[int]:
    """Read sequence numbers from command-line words.

    Each word is read as an unsigned decimal with optional leading sign.
    Words that read as zero or overflow are skipped, words without digits
    count as 0, and values wrap to 32 bits.
    """
    numbers: List[int] = []
    for arg in args:
        match = _UNSIGNED_PREFIX.match(arg)
        if match is None:
            numbers.append(0)
            continue
        sign, digits = match.groups()
        value = int(digits)
        if value == 0 or value > _ULONG_MAX:
            continue
        if sign == "-":
            value = _ULONG_MAX + 1 - value
        numbers.append(value % _UINT32_MODULUS)
    return numbers


def _notification_to_dict(notification: NotificationMetadata) -> Dict[str, Any]:
    return {
        "seqNumber": notification.seq_number,
        "profileManagementOperation": profile_management_operation_str(
            notification.profile_management_operation
        ),
        "notificationAddress": notification.notification_address,
        "iccid": notification.iccid,
    }


def list_notifications(session: Session, argv: Sequence[str]) -> int:
    """Report the notifications waiting on the eUICC."""
    try:
        notifications = session.euicc.list_notifications()
    except EuiccError:
        emit_error("es10b_list_notification", None, session.stream)
        return -1
    emit_success([_notification_to_dict(n) for n in notifications], session.stream)
    return 0


def _remove_single(session: Session, seq_number: int) -> bool:
    emit_progress("es10b_remove_notification_from_list", str(seq_number), session.stream)
    try:
        session.euicc.remove_notification(seq_number)
    except EuiccError as exc:
        reason = "seqNumber not found" if exc.code == 1 else "unknown"
        emit_error("es10b_remove_notification_from_list", reason, session.stream)
        return False
    return True


def _process_single(session: Session, seq_number: int, autoremove: bool) -> bool:
    euicc = session.euicc
    label = str(seq_number)

    emit_progress("es10b_retrieve_notifications_list", label, session.stream)
    try:
        notification = euicc.retrieve_notification(seq_number)
    except EuiccError:
        emit_error("es10b_retrieve_notifications_list", None, session.stream)
        return False

    euicc.server_address = notification.notification_address

    emit_progress("es9p_handle_notification", label, session.stream)
    try:
        euicc.handle_notification(notification.b64_pending_notification)
    except EuiccError:
        emit_error("es9p_handle_notification", None, session.stream)
        return False

    if not autoremove:
        return True
    return _remove_single(session, seq_number)


def _run_batch(
    session: Session,
    every: bool,
    words: Sequence[str],
    action: Callable[[int], bool],
) -> int:
    if every:
        emit_progress("es10b_list_notification", None, session.stream)
        try:
            notifications = session.euicc.list_notifications()
        except EuiccError:
            emit_error("es10b_list_notification", None, session.stream)
            return -1
        seq_numbers = [n.seq_number for n in notifications]
    else:
        seq_numbers = parse_seq_numbers(words)

    if not all(action(seq) for seq in seq_numbers):
        return -1
    emit_success(None, session.stream)
    return 0


def _print_usage(prog: str, lines: Sequence[str], session: Session) -> None:
    print(f"Usage: {prog} [OPTIONS] [seqNumber_0] [seqNumber_1]...", file=session.stream)
    for line in lines:
        print(line, file=session.stream)


def _parse_options(argv: Sequence[str], optstring: str) -> Optional[tuple]:
    try:
        return getopt.gnu_getopt(list(argv[1:]), optstring)
    except getopt.GetoptError:
        return None


def process(session: Session, argv: Sequence[str]) -> int:
    """Send notifications to their servers, optionally removing them afterwards."""
    prog = argv[0] if argv else "process"
    help_lines = ["\t -a All notifications", "\t -r Automatically remove processed notifications"]

    parsed = _parse_options(argv, "arh?")
    if parsed is None:
        _print_usage(prog, help_lines, session)
        return -1
    opts, words = parsed

    every = False
    autoremove = False
    for name, _ in opts:
        if name == "-a":
            every = True
        elif name == "-r":
            autoremove = True
        else:
            _print_usage(prog, help_lines, session)
            return -1

    return _run_batch(session, every, words, lambda seq: _process_single(session, seq, autoremove))


def remove(session: Session, argv: Sequence[str]) -> int:
    """Remove notifications from the eUICC without sending them."""
    prog = argv[0] if argv else "remove"
    help_lines = ["\t -a All notifications"]

    parsed = _parse_options(argv, "ah?")
    if parsed is None:
        _print_usage(prog, help_lines, session)
        return -1
    opts, words = parsed

    every = False
    for name, _ in opts:
        if name == "-a":
            every = True
        else:
            _print_usage(prog, help_lines, session)
            return -1

    return _run_batch(session, every, words, lambda seq: _remove_single(session, seq))


def applet(session: Session) -> Applet:
    """The ``notification`` command, which opens the eUICC and runs one of its sub-commands."""
    entries = [
        Applet("list", partial(list_notifications, session)),
        Applet("process", partial(process, session)),
        Applet("remove", partial(remove, session)),
    ]

    def main(argv: List[str]) -> int:
        try:
            session.init_euicc()
        except InitError as exc:
            emit_error(exc.function_name, exc.detail, session.stream)
            return -1
        return dispatch(argv, entries, session.stream)

    return Applet("notification", main)