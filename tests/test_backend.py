import pytest

from esimlpa.backend import (
    CertificationDataObject,
    ConfiguredAddresses,
    Euicc,
    EuiccError,
    EuiccInfo2,
    ExtCardResource,
    LoadResult,
    NotificationMetadata,
    OperatorId,
    PendingNotification,
    ProfileInfo,
    ProfileMetadata,
    RatEntry,
)
from esimlpa.tostr import (
    BppCommandId,
    ErrorReason,
    IconType,
    ProfileClass,
    ProfileManagementOperation,
    ProfileState,
)


def _complete_fake():
    methods = {name: (lambda self, *args: None) for name in Euicc.__abstractmethods__}
    return type("FakeEuicc", (Euicc,), methods)


def test_euicc_error_carries_code_and_message():
    err = EuiccError(2, "status text")
    assert err.code == 2
    assert err.message == "status text"
    assert err.result is None
    assert str(err) == "status text"


def test_euicc_error_defaults():
    err = EuiccError()
    assert err.code == -1
    assert err.message is None
    with pytest.raises(EuiccError) as info:
        raise err
    assert info.value.code == -1


def test_euicc_error_carries_load_result():
    result = LoadResult(BppCommandId.STORE_METADATA, ErrorReason.PPR_NOT_ALLOWED)
    err = EuiccError(result=result)
    assert err.result.bpp_command_id is BppCommandId.STORE_METADATA
    assert err.result.error_reason is ErrorReason.PPR_NOT_ALLOWED


def test_load_result_defaults_undefined():
    result = LoadResult()
    assert result.bpp_command_id is BppCommandId.UNDEFINED
    assert result.error_reason is ErrorReason.UNDEFINED


def test_euiccinfo2_defaults_are_independent():
    first, second = EuiccInfo2(), EuiccInfo2()
    first.ext_card_resource.free_volatile_memory = 10
    assert second.ext_card_resource == ExtCardResource()
    assert first.certification_data_object == CertificationDataObject()
    assert first.uicc_capability is None


def test_profile_info_defaults_are_null():
    info = ProfileInfo()
    assert info.profile_state is ProfileState.NULL
    assert info.icon_type is IconType.NULL
    assert info.profile_class is ProfileClass.NULL


def test_notification_defaults():
    note = NotificationMetadata()
    assert note.seq_number == 0
    assert note.profile_management_operation is ProfileManagementOperation.NULL
    assert PendingNotification() == PendingNotification(None, None)


def test_records_compare_by_value():
    assert ConfiguredAddresses("smdp.example.com") == ConfiguredAddresses(default_dp_address="smdp.example.com")
    rat = RatEntry(ppr_ids=["ppr1"], allowed_operators=[OperatorId("00101")])
    assert rat.allowed_operators[0].plmn == "00101"
    assert ProfileMetadata(iccid="1") != ProfileMetadata(iccid="2")


def test_euicc_is_abstract():
    with pytest.raises(TypeError):
        Euicc()


def test_partial_backend_cannot_be_instantiated():
    class Partial(Euicc):
        def get_eid(self):
            return "eid"

    with pytest.raises(TypeError) as base_info:
        Euicc()
    with pytest.raises(TypeError) as partial_info:
        Partial()
    assert "get_eid" in str(base_info.value)
    assert "get_eid" not in str(partial_info.value)
    assert "close" in str(partial_info.value)


def test_abstract_surface_covers_commands():
    expected = {"open", "close", "get_eid", "list_notifications", "load_bound_profile_package", "cancel_session"}
    with pytest.raises(TypeError) as info:
        Euicc()
    message = str(info.value)
    for name in expected:
        assert name in message
    assert "http_cleanup" not in message


def test_http_cleanup_forgets_server():
    card = _complete_fake()()
    assert card.server_address is None
    card.server_address = "smdp.example.com"
    assert Euicc.http_cleanup(card) is None
    assert card.server_address is None