"""The ``chip`` commands: card information, default SM-DP+ address and memory reset."""

from __future__ import annotations

from functools import partial
from typing import Any, Dict, List, Optional, Sequence

from .applet import Applet, dispatch
from .backend import ConfiguredAddresses, EuiccError, EuiccInfo2, RatEntry
from .context import InitError, Session
from .jprint import emit_error, emit_success


def _addresses_to_dict(addresses: ConfiguredAddresses) -> Dict[str, Any]:
    return {
        "defaultDpAddress": addresses.default_dp_address,
        "rootDsAddress": addresses.root_ds_address,
    }


def _euiccinfo2_to_dict(info2: EuiccInfo2) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "profileVersion": info2.profile_version,
        "svn": info2.svn,
        "euiccFirmwareVer": info2.euicc_firmware_ver,
        "extCardResource": {
            "installedApplication": info2.ext_card_resource.installed_application,
            "freeNonVolatileMemory": info2.ext_card_resource.free_non_volatile_memory,
            "freeVolatileMemory": info2.ext_card_resource.free_volatile_memory,
        },
    }
    if info2.uicc_capability is not None:
        result["uiccCapability"] = list(info2.uicc_capability)
    result["ts102241Version"] = info2.ts102241_version
    result["globalplatformVersion"] = info2.globalplatform_version
    if info2.rsp_capability is not None:
        result["rspCapability"] = list(info2.rsp_capability)
    if info2.euicc_ci_pkid_list_for_verification is not None:
        result["euiccCiPKIdListForVerification"] = list(info2.euicc_ci_pkid_list_for_verification)
    if info2.euicc_ci_pkid_list_for_signing is not None:
        result["euiccCiPKIdListForSigning"] = list(info2.euicc_ci_pkid_list_for_signing)
    result["euiccCategory"] = info2.euicc_category
    if info2.forbidden_profile_policy_rules is not None:
        result["forbiddenProfilePolicyRules"] = list(info2.forbidden_profile_policy_rules)
    result["ppVersion"] = info2.pp_version
    result["sasAcreditationNumber"] = info2.sas_acreditation_number
    result["certificationDataObject"] = {
        "platformLabel": info2.certification_data_object.platform_label,
        "discoveryBaseURL": info2.certification_data_object.discovery_base_url,
    }
    return result


def _rat_entry_to_dict(entry: RatEntry) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    if entry.ppr_ids is not None:
        result["pprIds"] = list(entry.ppr_ids)
    if entry.allowed_operators:
        result["allowedOperators"] = [
            {"plmn": op.plmn, "gid1": op.gid1, "gid2": op.gid2} for op in entry.allowed_operators
        ]
    if entry.ppr_flags is not None:
        result["pprFlags"] = list(entry.ppr_flags)
    return result


def build_info(
    eid: Optional[str],
    addresses: Optional[ConfiguredAddresses],
    euiccinfo2: Optional[EuiccInfo2],
    rat_list: Optional[List[RatEntry]],
) -> Dict[str, Any]:
    """Assemble the ``chip info`` result; parts that could not be read are left out."""
    data: Dict[str, Any] = {"eidValue": eid}
    if addresses is not None:
        data["EuiccConfiguredAddresses"] = _addresses_to_dict(addresses)
    if euiccinfo2 is not None:
        data["EUICCInfo2"] = _euiccinfo2_to_dict(euiccinfo2)
    if rat_list is not None:
        data["rulesAuthorisationTable"] = [_rat_entry_to_dict(entry) for entry in rat_list]
    return data


def info(session: Session, argv: Sequence[str]) -> int:
    """Report the EID, configured addresses, extended info and rules authorisation table."""
    euicc = session.euicc
    try:
        eid = euicc.get_eid()
    except EuiccError:
        emit_error("es10c_get_eid", None, session.stream)
        return -1

    try:
        addresses: Optional[ConfiguredAddresses] = euicc.get_configured_addresses()
    except EuiccError:
        addresses = None

    try:
        rat_list: Optional[List[RatEntry]] = euicc.get_rat()
    except EuiccError:
        rat_list = None

    try:
        euiccinfo2: Optional[EuiccInfo2] = euicc.get_euiccinfo2()
    except EuiccError:
        euiccinfo2 = None

    emit_success(build_info(eid, addresses, euiccinfo2, rat_list), session.stream)
    return 0


def set_default_smdp(session: Session, argv: Sequence[str]) -> int:
    """Store a new default SM-DP+ address."""
    if len(argv) < 2:
        print(f"Usage: {argv[0] if argv else 'defaultsmdp'} <smdp>", file=session.stream)
        return -1

    try:
        session.euicc.set_default_dp_address(argv[1])
    except EuiccError:
        emit_error("es10a_set_default_dp_address", None, session.stream)
        return -1

    emit_success(None, session.stream)
    return 0


def purge(session: Session, argv: Sequence[str]) -> int:
    """Erase the eUICC after the caller confirms with ``yes``."""
    if len(argv) < 2:
        print(f"Usage: {argv[0] if argv else 'purge'} [yes|other]", file=session.stream)
        print("\t\tConfirm purge eUICC, all data will lost!", file=session.stream)
        return -1

    if argv[1] != "yes":
        print("Purge canceled", file=session.stream)
        return -1

    try:
        session.euicc.memory_reset()
    except EuiccError as exc:
        reason = "nothing to delete" if exc.code == 1 else "unknown"
        emit_error("es10c_euicc_memory_reset", reason, session.stream)
        return -1

    emit_success(None, session.stream)
    return 0


def applet(session: Session) -> Applet:
    """The ``chip`` command, which opens the eUICC and runs one of its sub-commands."""
    entries = [
        Applet("info", partial(info, session)),
        Applet("defaultsmdp", partial(set_default_smdp, session)),
        Applet("purge", partial(purge, session)),
    ]

    def main(argv: List[str]) -> int:
        try:
            session.init_euicc()
        except InitError as exc:
            emit_error(exc.function_name, exc.detail, session.stream)
            return -1
        return dispatch(argv, entries, session.stream)

    return Applet("chip", main)