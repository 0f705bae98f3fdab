"""eUICC enumerations and their textual names as shown to users."""

from __future__ import annotations

import enum
from typing import Mapping, Optional, Type, TypeVar, Union

NO_STR_AVAILABLE = "(no_str_available)"


class ProfileState(enum.IntEnum):
    """State of an installed profile."""

    NULL = -1
    UNDEFINED = -2
    DISABLED = 0
    ENABLED = 1


class ProfileClass(enum.IntEnum):
    """Class of an installed profile."""

    NULL = -1
    UNDEFINED = -2
    TEST = 0
    PROVISIONING = 1
    OPERATIONAL = 2


class IconType(enum.IntEnum):
    """Encoding of a profile icon."""

    NULL = -1
    UNDEFINED = -2
    JPEG = 0
    PNG = 1


class ProfileManagementOperation(enum.IntEnum):
    """Operation a notification reports."""

    NULL = -1
    UNDEFINED = -2
    INSTALL = 0
    ENABLE = 1
    DISABLE = 2
    DELETE = 3


class BppCommandId(enum.IntEnum):
    """Bound profile package command that was running when loading failed."""

    UNDEFINED = -1
    INITIALISE_SECURE_CHANNEL = 0
    CONFIGURE_ISDP = 1
    STORE_METADATA = 2
    STORE_METADATA2 = 3
    REPLACE_SESSION_KEYS = 4
    LOAD_PROFILE_ELEMENTS = 5


class ErrorReason(enum.IntEnum):
    """Reason a bound profile package failed to load."""

    UNDEFINED = -1
    INCORRECT_INPUT_VALUES = 1
    INVALID_SIGNATURE = 2
    INVALID_TRANSACTION_ID = 3
    UNSUPPORTED_CRT_VALUES = 4
    UNSUPPORTED_REMOTE_OPERATION_TYPE = 5
    UNSUPPORTED_PROFILE_CLASS = 6
    SCP03T_STRUCTURE_ERROR = 7
    SCP03T_SECURITY_ERROR = 8
    INSTALL_FAILED_DUE_TO_ICCID_ALREADY_EXISTS_ON_EUICC = 9
    INSTALL_FAILED_DUE_TO_INSUFFICIENT_MEMORY_FOR_PROFILE = 10
    INSTALL_FAILED_DUE_TO_INTERRUPTION = 11
    INSTALL_FAILED_DUE_TO_PE_PROCESSING_ERROR = 12
    INSTALL_FAILED_DUE_TO_ICCID_MISMATCH = 13
    TEST_PROFILE_INSTALL_FAILED_DUE_TO_INVALID_NAA_KEY = 14
    PPR_NOT_ALLOWED = 15
    INSTALL_FAILED_DUE_TO_UNKNOWN_ERROR = 127


_E = TypeVar("_E", bound=enum.IntEnum)

_PROFILE_STATE_NAMES = {
    ProfileState.NULL: None,
    ProfileState.DISABLED: "disabled",
    ProfileState.ENABLED: "enabled",
    ProfileState.UNDEFINED: "unknown",
}

_PROFILE_CLASS_NAMES = {
    ProfileClass.NULL: None,
    ProfileClass.TEST: "test",
    ProfileClass.PROVISIONING: "provisioning",
    ProfileClass.OPERATIONAL: "operational",
    ProfileClass.UNDEFINED: "unknown",
}

_ICON_TYPE_NAMES = {
    IconType.NULL: None,
    IconType.JPEG: "jpeg",
    IconType.PNG: "png",
    IconType.UNDEFINED: "unknown",
}

_OPERATION_NAMES = {
    ProfileManagementOperation.NULL: None,
    ProfileManagementOperation.INSTALL: "install",
    ProfileManagementOperation.ENABLE: "enable",
    ProfileManagementOperation.DISABLE: "disable",
    ProfileManagementOperation.DELETE: "delete",
    ProfileManagementOperation.UNDEFINED: "unknown",
}

_BPP_COMMAND_NAMES = {
    BppCommandId.INITIALISE_SECURE_CHANNEL: "initialise_secure_channel",
    BppCommandId.CONFIGURE_ISDP: "configure_isdp",
    BppCommandId.STORE_METADATA: "store_metadata",
    BppCommandId.STORE_METADATA2: "store_metadata2",
    BppCommandId.REPLACE_SESSION_KEYS: "replace_session_keys",
    BppCommandId.LOAD_PROFILE_ELEMENTS: "load_profile_elements",
    BppCommandId.UNDEFINED: "unknown",
}

_ERROR_REASON_NAMES = {
    member: member.name.lower() for member in ErrorReason if member is not ErrorReason.UNDEFINED
}
_ERROR_REASON_NAMES[ErrorReason.UNDEFINED] = "unknown"


def _name_of(
    enum_cls: Type[_E], names: Mapping[_E, Optional[str]], value: Union[_E, int, None]
) -> Optional[str]:
    if value is None:
        member = enum_cls.__members__.get("NULL")
        if member is None:
            return NO_STR_AVAILABLE
    else:
        try:
            member = enum_cls(value)
        except ValueError:
            return NO_STR_AVAILABLE
    return names.get(member, NO_STR_AVAILABLE)


def profile_state_str(value: Union[ProfileState, int, None]) -> Optional[str]:
    """Name of a profile state; None when the state is absent."""
    return _name_of(ProfileState, _PROFILE_STATE_NAMES, value)


def profile_class_str(value: Union[ProfileClass, int, None]) -> Optional[str]:
    """Name of a profile class; None when the class is absent."""
    return _name_of(ProfileClass, _PROFILE_CLASS_NAMES, value)


def icon_type_str(value: Union[IconType, int, None]) -> Optional[str]:
    """Name of an icon type; None when there is no icon."""
    return _name_of(IconType, _ICON_TYPE_NAMES, value)


def profile_management_operation_str(
    value: Union[ProfileManagementOperation, int, None]
) -> Optional[str]:
    """Name of a profile management operation; None when absent."""
    return _name_of(ProfileManagementOperation, _OPERATION_NAMES, value)


def bpp_command_id_str(value: Union[BppCommandId, int, None]) -> Optional[str]:
    """Name of a bound profile package command."""
    return _name_of(BppCommandId, _BPP_COMMAND_NAMES, value)


def error_reason_str(value: Union[ErrorReason, int, None]) -> Optional[str]:
    """Name of a profile loading error reason."""
    return _name_of(ErrorReason, _ERROR_REASON_NAMES, value)