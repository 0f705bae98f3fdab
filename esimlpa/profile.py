"""The ``profile`` commands: list, enable, disable, rename, delete, download and discover profiles."""

from __future__ import annotations

import re
from functools import partial
from typing import Any, Dict, List, Mapping, Sequence

from .applet import Applet, dispatch
from .backend import EuiccError, ProfileInfo
from .context import InitError, Session
from .download import discovery, download
from .jprint import emit_error, emit_success
from .tostr import icon_type_str, profile_class_str, profile_state_str

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")

_INTERNAL_ERROR = "internal error, maybe illegal iccid/aid coding"

_ENABLE_REASONS: Mapping[int, str] = {
    1: "iccid or aid not found",
    2: "profile not in disabled state",
    3: "disallowed by policy",
    4: "wrong profile reenabling",
    -1: _INTERNAL_ERROR,
}

_DISABLE_REASONS: Mapping[int, str] = {
    1: "iccid or aid not found",
    2: "profile not in enabled state",
    3: "disallowed by policy",
    -1: _INTERNAL_ERROR,
}

_DELETE_REASONS: Mapping[int, str] = {
    1: "iccid or aid not found",
    2: "profile not in disabled state",
    3: "disallowed by policy",
    -1: _INTERNAL_ERROR,
}

_NICKNAME_REASONS: Mapping[int, str] = {
    1: "iccid not found",
}


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _prog(argv: Sequence[str], default: str) -> str:
    return argv[0] if argv else default


def _report_failure(session: Session, function_name: str, reasons: Mapping[int, str], exc: EuiccError) -> int:
    emit_error(function_name, reasons.get(exc.code, "unknown"), session.stream)
    return -1


def profile_to_dict(profile: ProfileInfo) -> Dict[str, Any]:
    """The JSON form of an installed profile."""
    return {
        "iccid": profile.iccid,
        "isdpAid": profile.isdp_aid,
        "profileState": profile_state_str(profile.profile_state),
        "profileNickname": profile.profile_nickname,
        "serviceProviderName": profile.service_provider_name,
        "profileName": profile.profile_name,
        "iconType": icon_type_str(profile.icon_type),
        "icon": profile.icon,
        "profileClass": profile_class_str(profile.profile_class),
    }


def list_profiles(session: Session, argv: Sequence[str]) -> int:
    """Report the profiles installed on the eUICC."""
    try:
        profiles = session.euicc.get_profiles_info()
    except EuiccError:
        emit_error("es10c_get_profiles_info", None, session.stream)
        return -1
    emit_success([profile_to_dict(p) for p in profiles], session.stream)
    return 0


def _switch_usage(session: Session, prog: str) -> None:
    print(f"Usage: {prog} [iccid/aid] [refreshflag]", file=session.stream)
    print("\t[refreshflag]: optional", file=session.stream)


def enable(session: Session, argv: Sequence[str]) -> int:
    """Enable a profile given by ICCID or ISD-P AID, with an optional refresh flag."""
    if len(argv) < 2:
        _switch_usage(session, _prog(argv, "enable"))
        return -1
    refresh = _leading_int(argv[2]) if len(argv) > 2 else 0
    try:
        session.euicc.enable_profile(argv[1], refresh)
    except EuiccError as exc:
        return _report_failure(session, "es10c_enable_profile", _ENABLE_REASONS, exc)
    emit_success(None, session.stream)
    return 0


def disable(session: Session, argv: Sequence[str]) -> int:
    """Disable a profile given by ICCID or ISD-P AID, with an optional refresh flag."""
    if len(argv) < 2:
        _switch_usage(session, _prog(argv, "disable"))
        return -1
    refresh = _leading_int(argv[2]) if len(argv) > 2 else 0
    try:
        session.euicc.disable_profile(argv[1], refresh)
    except EuiccError as exc:
        return _report_failure(session, "es10c_disable_profile", _DISABLE_REASONS, exc)
    emit_success(None, session.stream)
    return 0


def nickname(session: Session, argv: Sequence[str]) -> int:
    """Set a profile's nickname; a missing name clears it."""
    if len(argv) < 2:
        print(f"Usage: {_prog(argv, 'nickname')} [iccid] [new_name]", file=session.stream)
        print("\t[new_name]: optional", file=session.stream)
        return -1
    new_name = argv[2] if len(argv) > 2 else ""
    try:
        session.euicc.set_nickname(argv[1], new_name)
    except EuiccError as exc:
        return _report_failure(session, "es10c_set_nickname", _NICKNAME_REASONS, exc)
    emit_success(None, session.stream)
    return 0


def delete(session: Session, argv: Sequence[str]) -> int:
    """Delete a profile given by ICCID or ISD-P AID."""
    if len(argv) < 2:
        print(f"Usage: {_prog(argv, 'delete')} [iccid/aid]", file=session.stream)
        return -1
    try:
        session.euicc.delete_profile(argv[1])
    except EuiccError as exc:
        return _report_failure(session, "es10c_delete_profile", _DELETE_REASONS, exc)
    emit_success(None, session.stream)
    return 0


def applet(session: Session) -> Applet:
    """The ``profile`` command, which opens the eUICC and runs one of its sub-commands."""
    entries = [
        Applet("list", partial(list_profiles, session)),
        Applet("enable", partial(enable, session)),
        Applet("disable", partial(disable, session)),
        Applet("nickname", partial(nickname, session)),
        Applet("delete", partial(delete, session)),
        Applet("download", partial(download, session)),
        Applet("discovery", partial(discovery, session)),
    ]

    def main(argv: List[str]) -> int:
        try:
            session.init_euicc()
        except InitError as exc:
            emit_error(exc.function_name, exc.detail, session.stream)
            return -1
        return dispatch(argv, entries, session.stream)

    return Applet("profile", main)