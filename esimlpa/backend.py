"""The eUICC interface the commands work against, and the records it returns."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import List, Optional

from .tostr import (
    BppCommandId,
    ErrorReason,
    IconType,
    ProfileClass,
    ProfileManagementOperation,
    ProfileState,
)


@dataclass
class LoadResult:
    """Where and why loading a bound profile package failed."""

    bpp_command_id: BppCommandId = BppCommandId.UNDEFINED
    error_reason: ErrorReason = ErrorReason.UNDEFINED


class EuiccError(Exception):
    """An eUICC or server operation failed.

    ``code`` is the operation's result code (1, 2, ... carry per-operation
    meaning, -1 is an internal error), ``message`` any status text the server
    gave and ``result`` the load result of a failed profile installation.
    """

    def __init__(self, code: int = -1, message: Optional[str] = None, result: Optional[LoadResult] = None):
        super().__init__(message if message is not None else f"operation failed with code {code}")
        self.code = code
        self.message = message
        self.result = result


@dataclass
class ConfiguredAddresses:
    """SM-DP+ and SM-DS addresses stored on the eUICC."""

    default_dp_address: Optional[str] = None
    root_ds_address: Optional[str] = None


@dataclass
class ExtCardResource:
    """Resource figures reported by the card."""

    installed_application: int = 0
    free_non_volatile_memory: int = 0
    free_volatile_memory: int = 0


@dataclass
class CertificationDataObject:
    """Certification details of the eUICC."""

    platform_label: Optional[str] = None
    discovery_base_url: Optional[str] = None


@dataclass
class EuiccInfo2:
    """Extended eUICC information."""

    profile_version: Optional[str] = None
    svn: Optional[str] = None
    euicc_firmware_ver: Optional[str] = None
    ext_card_resource: ExtCardResource = field(default_factory=ExtCardResource)
    uicc_capability: Optional[List[str]] = None
    ts102241_version: Optional[str] = None
    globalplatform_version: Optional[str] = None
    rsp_capability: Optional[List[str]] = None
    euicc_ci_pkid_list_for_verification: Optional[List[str]] = None
    euicc_ci_pkid_list_for_signing: Optional[List[str]] = None
    euicc_category: Optional[str] = None
    forbidden_profile_policy_rules: Optional[List[str]] = None
    pp_version: Optional[str] = None
    sas_acreditation_number: Optional[str] = None
    certification_data_object: CertificationDataObject = field(default_factory=CertificationDataObject)


@dataclass
class OperatorId:
    """An operator allowed by a rules authorisation table entry."""

    plmn: Optional[str] = None
    gid1: Optional[str] = None
    gid2: Optional[str] = None


@dataclass
class RatEntry:
    """One entry of the rules authorisation table."""

    ppr_ids: Optional[List[str]] = None
    allowed_operators: Optional[List[OperatorId]] = None
    ppr_flags: Optional[List[str]] = None


@dataclass
class ProfileInfo:
    """An installed profile."""

    iccid: Optional[str] = None
    isdp_aid: Optional[str] = None
    profile_state: ProfileState = ProfileState.NULL
    profile_nickname: Optional[str] = None
    service_provider_name: Optional[str] = None
    profile_name: Optional[str] = None
    icon_type: IconType = IconType.NULL
    icon: Optional[str] = None
    profile_class: ProfileClass = ProfileClass.NULL


@dataclass
class NotificationMetadata:
    """A notification waiting on the eUICC."""

    seq_number: int = 0
    profile_management_operation: ProfileManagementOperation = ProfileManagementOperation.NULL
    notification_address: Optional[str] = None
    iccid: Optional[str] = None


@dataclass
class PendingNotification:
    """A notification ready to be sent to its server."""

    notification_address: Optional[str] = None
    b64_pending_notification: Optional[str] = None


@dataclass
class ProfileMetadata:
    """Metadata of a profile offered for download."""

    iccid: Optional[str] = None
    service_provider_name: Optional[str] = None
    profile_name: Optional[str] = None
    icon_type: IconType = IconType.NULL
    icon: Optional[str] = None
    profile_class: ProfileClass = ProfileClass.NULL


class Euicc(abc.ABC):
    """An eUICC together with the HTTP link to remote servers.

    Every operation raises :class:`EuiccError` on failure. ``server_address``
    is the SM-DP+, SM-DS or notification server that server operations talk to.
    """

    def __init__(self) -> None:
        self.server_address: Optional[str] = None

    # Session with the card.
    @abc.abstractmethod
    def open(self, aid: Optional[bytes], es10x_mss: int) -> None:
        """Select the ISD-R (a custom AID if given); an MSS of 0 means the default."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the card."""

    # Card information.
    @abc.abstractmethod
    def get_eid(self) -> str:
        """Return the EID."""

    @abc.abstractmethod
    def get_configured_addresses(self) -> ConfiguredAddresses:
        """Return the configured SM-DP+ and SM-DS addresses."""

    @abc.abstractmethod
    def get_rat(self) -> List[RatEntry]:
        """Return the rules authorisation table."""

    @abc.abstractmethod
    def get_euiccinfo2(self) -> EuiccInfo2:
        """Return extended eUICC information."""

    @abc.abstractmethod
    def set_default_dp_address(self, address: str) -> None:
        """Store a new default SM-DP+ address."""

    @abc.abstractmethod
    def memory_reset(self) -> None:
        """Erase every profile; code 1 means there was nothing to delete."""

    # Notifications.
    @abc.abstractmethod
    def list_notifications(self) -> List[NotificationMetadata]:
        """Return the pending notifications."""

    @abc.abstractmethod
    def retrieve_notification(self, seq_number: int) -> PendingNotification:
        """Return the signed notification with this sequence number."""

    @abc.abstractmethod
    def handle_notification(self, b64_pending_notification: str) -> None:
        """Send a notification to ``server_address``."""

    @abc.abstractmethod
    def remove_notification(self, seq_number: int) -> None:
        """Remove a notification; code 1 means it was not found."""

    # Profiles.
    @abc.abstractmethod
    def get_profiles_info(self) -> List[ProfileInfo]:
        """Return the installed profiles."""

    @abc.abstractmethod
    def enable_profile(self, identifier: str, refresh: int) -> None:
        """Enable a profile given by ICCID or ISD-P AID."""

    @abc.abstractmethod
    def disable_profile(self, identifier: str, refresh: int) -> None:
        """Disable a profile given by ICCID or ISD-P AID."""

    @abc.abstractmethod
    def set_nickname(self, iccid: str, nickname: str) -> None:
        """Set a profile's nickname."""

    @abc.abstractmethod
    def delete_profile(self, identifier: str) -> None:
        """Delete a profile given by ICCID or ISD-P AID."""

    # Download and discovery.
    @abc.abstractmethod
    def get_euicc_challenge_and_info(self) -> None:
        """Fetch the challenge and info that start mutual authentication."""

    @abc.abstractmethod
    def initiate_authentication(self) -> None:
        """Start authentication with the server."""

    @abc.abstractmethod
    def authenticate_server(self, matching_id: Optional[str], imei: Optional[str]) -> None:
        """Let the eUICC authenticate the server."""

    @abc.abstractmethod
    def authenticate_client(self) -> Optional[str]:
        """Authenticate with the SM-DP+; return the base64 profile metadata, if any."""

    @abc.abstractmethod
    def authenticate_client_smds(self) -> List[str]:
        """Authenticate with the SM-DS; return the SM-DP+ addresses it lists."""

    @abc.abstractmethod
    def parse_profile_metadata(self, b64_metadata: str) -> ProfileMetadata:
        """Decode base64 profile metadata."""

    @abc.abstractmethod
    def prepare_download(self, confirmation_code: Optional[str]) -> None:
        """Prepare the eUICC for the download."""

    @abc.abstractmethod
    def get_bound_profile_package(self) -> None:
        """Fetch the bound profile package from the server."""

    @abc.abstractmethod
    def load_bound_profile_package(self) -> None:
        """Install the fetched package; failures carry a :class:`LoadResult`."""

    @abc.abstractmethod
    def cancel_session(self) -> None:
        """Cancel the eUICC side of the session because the end user rejected it."""

    @abc.abstractmethod
    def cancel_server_session(self) -> None:
        """Cancel the session on the server."""

    def http_cleanup(self) -> None:
        """Forget the server of the current session."""
        self.server_address = None