"""Profile download from an SM-DP+ and SM-DP+ discovery through an SM-DS."""

from __future__ import annotations

import contextlib
import getopt
import signal
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO, Tuple, TypeVar

from .backend import EuiccError, LoadResult, ProfileMetadata
from .context import Session
from .jprint import emit_error, emit_progress, emit_progress_obj, emit_success
from .tostr import bpp_command_id_str, error_reason_str, icon_type_str, profile_class_str

LPA_SCHEME = "LPA:"
DEFAULT_SMDS = "lpa.ds.gsma.com"

_DOWNLOAD_OPTIONS = "s:m:i:c:a:ph?"
_DISCOVERY_OPTIONS = "s:i:h?"
_HELP_OPTIONS = ("-h", "-?")

_T = TypeVar("_T")


@dataclass(frozen=True)
class ActivationCode:
    """The fields of an activation code (``1$<SM-DP+>$<matching id>$<OID>$<flag>``)."""

    smdp: Optional[str] = None
    matching_id: Optional[str] = None
    oid: Optional[str] = None
    confirmation_code_required: bool = False


class ActivationCodeError(Exception):
    """An activation code was rejected; ``function_name`` and ``detail`` say why."""

    def __init__(self, function_name: str, detail: Optional[str]):
        super().__init__(f"{function_name}: {detail}")
        self.function_name = function_name
        self.detail = detail


class _Failure(Exception):
    def __init__(self, function_name: Optional[str], detail: Optional[str]):
        super().__init__(function_name)
        self.function_name = function_name
        self.detail = detail


class _CancelFlag:
    """Turns SIGINT into a request to cancel at the next checkpoint."""

    def __init__(self) -> None:
        self.cancelled = False
        self._previous: Any = None
        self._installed = False

    def _handle(self, signum: int, frame: Any) -> None:
        self.cancelled = True

    def install(self) -> None:
        try:
            self._previous = signal.signal(signal.SIGINT, self._handle)
        except ValueError:
            return  # signals can only be handled in the main thread
        self._installed = True

    def restore(self) -> None:
        if self._installed:
            previous = self._previous if self._previous is not None else signal.SIG_DFL
            signal.signal(signal.SIGINT, previous)
            self._installed = False

    def check(self) -> None:
        if self.cancelled:
            raise _Failure(None, None)


def _matches_one(token: str) -> bool:
    # A field counts as "1" when it is a prefix of "1", the empty field included.
    return "1".startswith(token)


def parse_activation_code(text: str) -> ActivationCode:
    """Split an activation code into its fields; raise ActivationCodeError if its format is not 1."""
    if text.startswith(LPA_SCHEME):
        text = text[len(LPA_SCHEME):]
    fields = text.split("$")
    if not _matches_one(fields[0]):
        raise ActivationCodeError("activation_code", "invalid")

    def field_at(index: int) -> Optional[str]:
        return fields[index] if len(fields) > index else None

    flag = field_at(4)
    return ActivationCode(
        smdp=field_at(1),
        matching_id=field_at(2),
        oid=field_at(3),
        confirmation_code_required=flag is not None and _matches_one(flag),
    )


def metadata_to_dict(metadata: ProfileMetadata) -> Dict[str, Any]:
    """The JSON form of the metadata of a profile offered for download."""
    return {
        "iccid": metadata.iccid,
        "serviceProviderName": metadata.service_provider_name,
        "profileName": metadata.profile_name,
        "iconType": icon_type_str(metadata.icon_type),
        "icon": metadata.icon,
        "profileClass": profile_class_str(metadata.profile_class),
    }


def _getopt(argv: Sequence[str], optstring: str) -> Optional[List[Tuple[str, str]]]:
    try:
        opts, _ = getopt.gnu_getopt(list(argv[1:]), optstring)
    except getopt.GetoptError:
        return None
    return opts


def _step(
    stream: Optional[TextIO],
    name: str,
    detail: Optional[str],
    action: Callable[[], _T],
    with_message: bool = False,
) -> _T:
    emit_progress(name, detail, stream)
    try:
        return action()
    except EuiccError as exc:
        raise _Failure(name, exc.message if with_message else None) from exc


def _download_usage(prog: str, stream: Optional[TextIO]) -> None:
    lines = [
        f"Usage: {prog} [OPTIONS]",
        "\t -s SM-DP+ Domain",
        "\t -m Matching ID",
        "\t -i IMEI",
        "\t -c Confirmation Code (Password)",
        "\t -a Activation Code (e.g: 'LPA:***')",
        "\t -p Interactive preview profile",
        "\t -h This help info",
    ]
    print("\n".join(lines), file=stream)


def download(session: Session, argv: Sequence[str]) -> int:
    """Download and install a profile; return 0 on success and -1 on failure."""
    stream = session.stream
    euicc = session.euicc
    prog = argv[0] if argv else "download"

    opts = _getopt(argv, _DOWNLOAD_OPTIONS)
    if opts is None or any(name in _HELP_OPTIONS for name, _ in opts):
        _download_usage(prog, stream)
        return -1

    smdp: Optional[str] = None
    matching_id: Optional[str] = None
    imei: Optional[str] = None
    confirmation_code: Optional[str] = None
    activation_code: Optional[str] = None
    interactive_preview = False

    for name, value in opts:
        if name == "-s":
            smdp = value
        elif name == "-m":
            matching_id = value
        elif name == "-i":
            imei = value
        elif name == "-c":
            confirmation_code = value
        elif name == "-a":
            activation_code = value[len(LPA_SCHEME):] if value.startswith(LPA_SCHEME) else value
        elif name == "-p":
            interactive_preview = True

    flag = _CancelFlag()

    def step(name: str, action: Callable[[], _T], with_message: bool = False) -> _T:
        flag.check()
        return _step(stream, name, smdp, action, with_message)

    try:
        if activation_code is not None:
            try:
                code = parse_activation_code(activation_code)
            except ActivationCodeError as exc:
                raise _Failure(exc.function_name, exc.detail) from exc
            if code.smdp is not None:
                smdp = code.smdp
            if code.matching_id is not None:
                matching_id = code.matching_id
            if code.confirmation_code_required and confirmation_code is None:
                raise _Failure("confirmation_code", "required")

        if smdp is None:
            emit_progress("es10a_get_euicc_configured_addresses", None, stream)
            try:
                smdp = euicc.get_configured_addresses().default_dp_address
            except EuiccError as exc:
                raise _Failure("es10a_get_euicc_configured_addresses", None) from exc

        if not smdp:
            raise _Failure("smdp", "empty")

        flag.install()
        euicc.server_address = smdp

        step("es10b_get_euicc_challenge_and_info", euicc.get_euicc_challenge_and_info)
        step("es9p_initiate_authentication", euicc.initiate_authentication, True)
        step("es10b_authenticate_server", lambda: euicc.authenticate_server(matching_id, imei))
        b64_metadata = step("es9p_authenticate_client", euicc.authenticate_client, True)

        if b64_metadata is not None:
            flag.check()
            try:
                metadata = euicc.parse_profile_metadata(b64_metadata)
            except EuiccError as exc:
                raise _Failure("es8p_meatadata_parse", None) from exc
            emit_progress_obj("es8p_meatadata_parse", metadata_to_dict(metadata), stream)

            if interactive_preview:
                emit_progress("preview", "y/n", stream)
                if sys.stdin.read(1) not in ("y", "Y"):
                    flag.cancelled = True

        step("es10b_prepare_download", lambda: euicc.prepare_download(confirmation_code))
        step("es9p_get_bound_profile_package", euicc.get_bound_profile_package, True)

        flag.check()
        emit_progress("es10b_load_bound_profile_package", smdp, stream)
        try:
            euicc.load_bound_profile_package()
        except EuiccError as exc:
            result = exc.result if exc.result is not None else LoadResult()
            detail = f"{bpp_command_id_str(result.bpp_command_id)},{error_reason_str(result.error_reason)}"
            raise _Failure("es10b_load_bound_profile_package", detail) from exc

        emit_success(None, stream)
        return 0
    except _Failure as failure:
        emit_progress("es10b_cancel_session", smdp, stream)
        with contextlib.suppress(EuiccError):
            euicc.cancel_session()
        emit_progress("es9p_cancel_session", smdp, stream)
        with contextlib.suppress(EuiccError):
            euicc.cancel_server_session()
        if flag.cancelled:
            emit_error("cancelled", None, stream)
        else:
            emit_error(failure.function_name, failure.detail, stream)
        return -1
    finally:
        flag.restore()
        euicc.http_cleanup()


def _discovery_usage(prog: str, stream: Optional[TextIO]) -> None:
    lines = [
        f"Usage: {prog} [OPTIONS]",
        "\t -s SM-DS Domain",
        "\t -i IMEI",
        "\t -h This help info",
    ]
    print("\n".join(lines), file=stream)


def discovery(session: Session, argv: Sequence[str]) -> int:
    """Ask an SM-DS which SM-DP+ servers hold profiles for this eUICC."""
    stream = session.stream
    euicc = session.euicc
    prog = argv[0] if argv else "discovery"

    opts = _getopt(argv, _DISCOVERY_OPTIONS)
    if opts is None:
        _discovery_usage(prog, stream)
        return -1

    smds: Optional[str] = None
    imei: Optional[str] = None
    # Options are read in pairs: only the first of each pair takes effect.
    for name, value in opts[::2]:
        if name == "-s":
            smds = value
        elif name == "-i":
            imei = value
        elif name in _HELP_OPTIONS:
            _discovery_usage(prog, stream)
            return -1

    if smds is None:
        smds = DEFAULT_SMDS

    euicc.server_address = smds
    try:
        _step(stream, "es10b_get_euicc_challenge_and_info", smds, euicc.get_euicc_challenge_and_info)
        _step(stream, "es9p_initiate_authentication", smds, euicc.initiate_authentication, True)
        _step(stream, "es10b_authenticate_server", smds, lambda: euicc.authenticate_server(None, imei))
        smdp_list = _step(stream, "es11_authenticate_client", smds, euicc.authenticate_client_smds)
    except _Failure as failure:
        emit_error(failure.function_name, failure.detail, stream)
        return -1
    finally:
        euicc.http_cleanup()

    emit_success(list(smdp_list), stream)
    return 0