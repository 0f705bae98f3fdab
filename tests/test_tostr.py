import pytest

from esimlpa.tostr import (
    NO_STR_AVAILABLE,
    BppCommandId,
    ErrorReason,
    IconType,
    ProfileClass,
    ProfileManagementOperation,
    ProfileState,
    bpp_command_id_str,
    error_reason_str,
    icon_type_str,
    profile_class_str,
    profile_management_operation_str,
    profile_state_str,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (ProfileState.NULL, None),
        (ProfileState.DISABLED, "disabled"),
        (ProfileState.ENABLED, "enabled"),
        (ProfileState.UNDEFINED, "unknown"),
    ],
)
def test_profile_state(value, expected):
    assert profile_state_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (ProfileClass.NULL, None),
        (ProfileClass.TEST, "test"),
        (ProfileClass.PROVISIONING, "provisioning"),
        (ProfileClass.OPERATIONAL, "operational"),
        (ProfileClass.UNDEFINED, "unknown"),
    ],
)
def test_profile_class(value, expected):
    assert profile_class_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (IconType.NULL, None),
        (IconType.JPEG, "jpeg"),
        (IconType.PNG, "png"),
        (IconType.UNDEFINED, "unknown"),
    ],
)
def test_icon_type(value, expected):
    assert icon_type_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (ProfileManagementOperation.NULL, None),
        (ProfileManagementOperation.INSTALL, "install"),
        (ProfileManagementOperation.ENABLE, "enable"),
        (ProfileManagementOperation.DISABLE, "disable"),
        (ProfileManagementOperation.DELETE, "delete"),
        (ProfileManagementOperation.UNDEFINED, "unknown"),
    ],
)
def test_profile_management_operation(value, expected):
    assert profile_management_operation_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (BppCommandId.INITIALISE_SECURE_CHANNEL, "initialise_secure_channel"),
        (BppCommandId.CONFIGURE_ISDP, "configure_isdp"),
        (BppCommandId.STORE_METADATA, "store_metadata"),
        (BppCommandId.STORE_METADATA2, "store_metadata2"),
        (BppCommandId.REPLACE_SESSION_KEYS, "replace_session_keys"),
        (BppCommandId.LOAD_PROFILE_ELEMENTS, "load_profile_elements"),
        (BppCommandId.UNDEFINED, "unknown"),
    ],
)
def test_bpp_command_id(value, expected):
    assert bpp_command_id_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (ErrorReason.INCORRECT_INPUT_VALUES, "incorrect_input_values"),
        (ErrorReason.SCP03T_SECURITY_ERROR, "scp03t_security_error"),
        (
            ErrorReason.INSTALL_FAILED_DUE_TO_ICCID_ALREADY_EXISTS_ON_EUICC,
            "install_failed_due_to_iccid_already_exists_on_euicc",
        ),
        (
            ErrorReason.TEST_PROFILE_INSTALL_FAILED_DUE_TO_INVALID_NAA_KEY,
            "test_profile_install_failed_due_to_invalid_naa_key",
        ),
        (ErrorReason.PPR_NOT_ALLOWED, "ppr_not_allowed"),
        (ErrorReason.INSTALL_FAILED_DUE_TO_UNKNOWN_ERROR, "install_failed_due_to_unknown_error"),
        (ErrorReason.UNDEFINED, "unknown"),
    ],
)
def test_error_reason(value, expected):
    assert error_reason_str(value) == expected


def test_every_error_reason_has_a_name():
    names = [error_reason_str(member) for member in ErrorReason]
    assert NO_STR_AVAILABLE not in names
    assert len(set(names)) == len(names)


def test_unknown_integer_has_no_name():
    assert profile_state_str(12345) == NO_STR_AVAILABLE
    assert error_reason_str(12345) == NO_STR_AVAILABLE


def test_integer_value_is_accepted():
    assert icon_type_str(int(IconType.PNG)) == "png"


def test_none_is_null_where_null_exists():
    assert profile_class_str(None) is None
    assert bpp_command_id_str(None) == NO_STR_AVAILABLE