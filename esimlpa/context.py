"""Session state shared by the commands: settings from the environment and the open eUICC."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

from .backend import Euicc, EuiccError

ISD_R_AID_MAX_LENGTH = 16
ES10X_MSS_MIN_VALUE = 6
ES10X_MSS_MAX_VALUE = 255

DEFAULT_APDU_DRIVER = "pcsc"
DEFAULT_HTTP_DRIVER = "curl"

_HEX_PAIRS = re.compile(r"(?:[0-9A-Fa-f]{2})+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InitError(Exception):
    """Opening the eUICC failed; ``function_name`` and ``detail`` describe how."""

    def __init__(self, detail: Optional[str] = None, function_name: str = "euicc_init"):
        super().__init__(detail if detail is not None else function_name)
        self.function_name = function_name
        self.detail = detail


@dataclass(frozen=True)
class Settings:
    """Driver names and eUICC options taken from the environment."""

    apdu_driver: str = DEFAULT_APDU_DRIVER
    http_driver: str = DEFAULT_HTTP_DRIVER
    aid: Optional[bytes] = None
    es10x_mss: int = 0


def parse_custom_aid(text: str) -> bytes:
    """Decode a hexadecimal ISD-R AID of 1 to 16 bytes."""
    if not _HEX_PAIRS.fullmatch(text) or len(text) // 2 > ISD_R_AID_MAX_LENGTH:
        raise InitError("invalid custom ISD-R AID given")
    return bytes.fromhex(text)


def parse_custom_mss(text: str) -> int:
    """Read a decimal ES10x maximum segment size, leading digits only."""
    match = _LEADING_INT.match(text)
    value = int(match.group(1)) if match else 0
    if not ES10X_MSS_MIN_VALUE <= value <= ES10X_MSS_MAX_VALUE:
        raise InitError(
            f"invalid custom ES10x MSS given (must be between "
            f"{ES10X_MSS_MIN_VALUE} and {ES10X_MSS_MAX_VALUE})"
        )
    return value


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from LPAC_* environment variables."""
    env = os.environ if environ is None else environ

    aid_text = env.get("LPAC_CUSTOM_ISD_R_AID")
    mss_text = env.get("LPAC_CUSTOM_ES10X_MSS")

    return Settings(
        apdu_driver=env.get("LPAC_APDU", DEFAULT_APDU_DRIVER),
        http_driver=env.get("LPAC_HTTP", DEFAULT_HTTP_DRIVER),
        aid=None if aid_text is None else parse_custom_aid(aid_text),
        es10x_mss=0 if mss_text is None else parse_custom_mss(mss_text),
    )


class Session:
    """An eUICC, the environment it is configured from and the stream records go to."""

    def __init__(
        self,
        euicc: Euicc,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.euicc = euicc
        self.environ = environ
        self.stream = stream
        self.settings: Optional[Settings] = None
        self._inited = False

    @property
    def inited(self) -> bool:
        return self._inited

    def init_euicc(self) -> None:
        """Read the settings and open the eUICC; raise InitError on failure."""
        settings = settings_from_env(self.environ)
        try:
            self.euicc.open(settings.aid, settings.es10x_mss)
        except EuiccError as exc:
            raise InitError() from exc
        self.settings = settings
        self._inited = True

    def fini_euicc(self) -> None:
        """Close the eUICC if it was opened."""
        if not self._inited:
            return
        self.euicc.close()
        self._inited = False

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.fini_euicc()