import pytest

from esimlpa.backend import Euicc, EuiccError
from esimlpa.context import (
    InitError,
    Session,
    Settings,
    parse_custom_aid,
    parse_custom_mss,
    settings_from_env,
)


class FakeEuicc(Euicc):
    def __init__(self, fail_open=False):
        super().__init__()
        self.fail_open = fail_open
        self.opened_with = None
        self.close_count = 0

    def open(self, aid, es10x_mss):
        if self.fail_open:
            raise EuiccError(-1)
        self.opened_with = (aid, es10x_mss)

    def close(self):
        self.close_count += 1

    def _unavailable(self, *args):
        raise EuiccError(-1)

    get_eid = _unavailable
    get_configured_addresses = _unavailable
    get_rat = _unavailable
    get_euiccinfo2 = _unavailable
    set_default_dp_address = _unavailable
    memory_reset = _unavailable
    list_notifications = _unavailable
    retrieve_notification = _unavailable
    handle_notification = _unavailable
    remove_notification = _unavailable
    get_profiles_info = _unavailable
    enable_profile = _unavailable
    disable_profile = _unavailable
    set_nickname = _unavailable
    delete_profile = _unavailable
    get_euicc_challenge_and_info = _unavailable
    initiate_authentication = _unavailable
    authenticate_server = _unavailable
    authenticate_client = _unavailable
    authenticate_client_smds = _unavailable
    parse_profile_metadata = _unavailable
    prepare_download = _unavailable
    get_bound_profile_package = _unavailable
    load_bound_profile_package = _unavailable
    cancel_session = _unavailable
    cancel_server_session = _unavailable


AID_HEX = "A0000005591010FFFFFFFF8900000100"


def test_parse_custom_aid_round_trip():
    assert parse_custom_aid(AID_HEX).hex().upper() == AID_HEX


@pytest.mark.parametrize("text", ["", "ABC", "zz", "00" * 17, "A0 00"])
def test_parse_custom_aid_rejects(text):
    with pytest.raises(InitError) as info:
        parse_custom_aid(text)
    assert info.value.detail == "invalid custom ISD-R AID given"
    assert info.value.function_name == "euicc_init"


def test_parse_custom_aid_accepts_sixteen_bytes():
    assert len(parse_custom_aid("00" * 16)) == 16


@pytest.mark.parametrize("text,expected", [("6", 6), ("255", 255), ("  120", 120), ("42xyz", 42)])
def test_parse_custom_mss_accepts(text, expected):
    assert parse_custom_mss(text) == expected


@pytest.mark.parametrize("text", ["5", "256", "abc", "", "-10"])
def test_parse_custom_mss_rejects(text):
    with pytest.raises(InitError) as info:
        parse_custom_mss(text)
    assert info.value.detail == "invalid custom ES10x MSS given (must be between 6 and 255)"


def test_settings_defaults():
    assert settings_from_env({}) == Settings("pcsc", "curl", None, 0)


def test_settings_from_env_values():
    settings = settings_from_env(
        {
            "LPAC_APDU": "stdio",
            "LPAC_HTTP": "stdio",
            "LPAC_CUSTOM_ISD_R_AID": AID_HEX,
            "LPAC_CUSTOM_ES10X_MSS": "60",
        }
    )
    assert settings.apdu_driver == "stdio"
    assert settings.http_driver == "stdio"
    assert settings.aid == bytes.fromhex(AID_HEX)
    assert settings.es10x_mss == 60


def test_init_euicc_opens_with_settings():
    euicc = FakeEuicc()
    session = Session(euicc, environ={"LPAC_CUSTOM_ES10X_MSS": "100"})
    session.init_euicc()
    assert euicc.opened_with == (None, 100)
    assert session.inited is True
    assert session.settings.es10x_mss == 100


def test_init_euicc_invalid_env_raises():
    euicc = FakeEuicc()
    session = Session(euicc, environ={"LPAC_CUSTOM_ISD_R_AID": "xyz"})
    with pytest.raises(InitError):
        session.init_euicc()
    assert euicc.opened_with is None
    assert session.inited is False


def test_init_euicc_open_failure():
    session = Session(FakeEuicc(fail_open=True), environ={})
    with pytest.raises(InitError) as info:
        session.init_euicc()
    assert info.value.detail is None
    assert info.value.function_name == "euicc_init"


def test_fini_without_init_does_nothing():
    euicc = FakeEuicc()
    Session(euicc, environ={}).fini_euicc()
    assert euicc.close_count == 0


def test_fini_closes_once():
    euicc = FakeEuicc()
    with Session(euicc, environ={}) as session:
        session.init_euicc()
        session.fini_euicc()
    assert euicc.close_count == 1
    assert session.inited is False