import re
from dataclasses import dataclass
from typing import Any, Optional

from wpa_supplicant_dbus.lib.eap.domain import EapMethod
from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import (
    bare,
    coerce_enum_list,
    coerce_optional_enum,
    joined,
    quoted,
)

from .domain import (
    DEFAULT_PRIORITY,
    AuthAlg,
    EapolFlag,
    GroupCipher,
    KeyManagement,
    Mode,
    PairwiseCipher,
    Proto,
    ScanSSID,
)

BSSID_PATTERN = re.compile(r"^[0-9a-fA-F]{2}(:[0-9a-fA-F]{2}){5}$")
HEX_PSK_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class Network:
    """One network={...} block of a wpa_supplicant configuration"""

    key_mgmt: tuple[KeyManagement, ...]
    eap: tuple[EapMethod, ...]
    ssid: str = ""
    scan_ssid: Optional[ScanSSID] = None
    bssid: str = ""
    priority: int = DEFAULT_PRIORITY
    mode: Optional[Mode] = None
    proto: tuple[Proto, ...] = ()
    auth_alg: tuple[AuthAlg, ...] = ()
    pairwise: tuple[PairwiseCipher, ...] = ()
    group: tuple[GroupCipher, ...] = ()
    psk: str = ""
    eapol_flags: Optional[EapolFlag] = None

    @property
    def eap_names(self) -> list[str]:
        return [method.protocol_name for method in self.eap]

    def render(self) -> str:
        lines = ["network={\n"]
        if self.ssid:
            lines.append(quoted("ssid", self.ssid))
        if self.scan_ssid is not None:
            lines.append(bare("scan_ssid", self.scan_ssid))
        if self.bssid:
            lines.append(bare("bssid", self.bssid))
        if self.priority != DEFAULT_PRIORITY:
            lines.append(bare("priority", self.priority))
        if self.mode is not None:
            lines.append(bare("mode", self.mode))
        if self.proto:
            lines.append(joined("proto", self.proto))
        if self.key_mgmt:
            lines.append(joined("key_mgmt", self.key_mgmt))
        if self.auth_alg:
            lines.append(joined("auth_alg", self.auth_alg))
        if self.pairwise:
            lines.append(joined("pairwise", self.pairwise))
        if self.group:
            lines.append(joined("group", self.group))
        if self.psk:
            # 64 hex digits are a raw key and must not be quoted
            if HEX_PSK_PATTERN.match(self.psk):
                lines.append(bare("psk", self.psk))
            else:
                lines.append(quoted("psk", self.psk))
        if self.eapol_flags is not None:
            lines.append(bare("eapol_flags", self.eapol_flags))
        if self.eap:
            lines.append(f"  eap={' '.join(self.eap_names)}\n")
            for method in self.eap:
                lines.append(method.render())
        lines.append("}\n")
        return "".join(lines)


class NetworkBuilder:
    def __init__(self):
        self.ssid = ""
        self.scan_ssid: Any = None
        self.bssid = ""
        self.priority: Any = DEFAULT_PRIORITY
        self.mode: Any = None
        self.proto: tuple = ()
        self.key_mgmt: tuple = ()
        self.auth_alg: tuple = ()
        self.pairwise: tuple = ()
        self.group: tuple = ()
        self.psk = ""
        self.eapol_flags: Any = None
        self.eap_methods: tuple = ()

    def with_ssid(self, ssid: str) -> "NetworkBuilder":
        """Network name as announced by the access point."""
        self.ssid = ssid
        return self

    def with_scan_ssid(self, scan_ssid: Any) -> "NetworkBuilder":
        """
        Scan technique; 0 (default) or 1. Access points that cloak themselves by
        not broadcasting their SSID require technique 1 (directed Probe Requests),
        which can make scanning take longer to complete.
        """
        self.scan_ssid = scan_ssid
        return self

    def with_bssid(self, bssid: str) -> "NetworkBuilder":
        """Network BSSID, typically the MAC address of the access point."""
        self.bssid = bssid
        return self

    def with_priority(self, priority: int) -> "NetworkBuilder":
        """
        Priority when selecting among multiple networks; a higher value is more
        desirable. Networks default to priority 0.
        """
        self.priority = priority
        return self

    def with_mode(self, mode: Any) -> "NetworkBuilder":
        """
        IEEE 802.11 operation mode; 0 (infrastructure, default) or 1 (IBSS).
        IBSS can only be used with key_mgmt NONE.
        """
        self.mode = mode
        return self

    def with_proto(self, *proto: Any) -> "NetworkBuilder":
        """Acceptable protocols: WPA and/or RSN (WPA2). Daemon default is "WPA RSN"."""
        self.proto = tuple(proto)
        return self

    def with_key_management(self, *key_mgmt: Any) -> "NetworkBuilder":
        """
        Acceptable key management protocols: WPA-PSK, WPA-EAP, IEEE8021X, NONE.
        Daemon default is "WPA-PSK WPA-EAP".
        """
        self.key_mgmt = tuple(key_mgmt)
        return self

    def with_auth_alg(self, *auth_alg: Any) -> "NetworkBuilder":
        """Allowed 802.11 authentication algorithms: OPEN, SHARED, LEAP."""
        self.auth_alg = tuple(auth_alg)
        return self

    def with_pairwise(self, *pairwise: Any) -> "NetworkBuilder":
        """Acceptable pairwise (unicast) ciphers: CCMP, TKIP, NONE."""
        self.pairwise = tuple(pairwise)
        return self

    def with_group(self, *group: Any) -> "NetworkBuilder":
        """Acceptable group (multicast) ciphers: CCMP, TKIP, WEP104, WEP40."""
        self.group = tuple(group)
        return self

    def with_psk(self, psk: str) -> "NetworkBuilder":
        """WPA pre-shared key: 64 hex digits or an 8-63 character passphrase."""
        self.psk = psk
        return self

    def with_eapol_flag(self, flag: Any) -> "NetworkBuilder":
        """
        Dynamic WEP key usage for non-WPA mode, as a bit field. Bit 0 (1) forces
        dynamic unicast keys, bit 1 (2) dynamic broadcast keys.
        """
        self.eapol_flags = flag
        return self

    def with_eap_methods(self, *eap_methods: EapMethod) -> "NetworkBuilder":
        self.eap_methods = tuple(eap_methods)
        return self

    def build(self) -> Network:
        if not self.ssid and KeyManagement.IEEE8021X not in self.key_mgmt:
            raise ConfigValidationError(
                "ssid",
                "no ssid specified and no IEEE8021X key mgmt. specify at least one",
            )

        scan_ssid = coerce_optional_enum(ScanSSID, self.scan_ssid, "scan_ssid")
        mode = coerce_optional_enum(Mode, self.mode, "mode")
        proto = coerce_enum_list(Proto, self.proto, "proto")
        key_mgmt = coerce_enum_list(KeyManagement, self.key_mgmt, "key_mgmt")
        auth_alg = coerce_enum_list(AuthAlg, self.auth_alg, "auth_alg")
        pairwise = coerce_enum_list(PairwiseCipher, self.pairwise, "pairwise")
        group = coerce_enum_list(GroupCipher, self.group, "group")
        eapol_flags = coerce_optional_enum(EapolFlag, self.eapol_flags, "eapol_flags")

        if (
            isinstance(self.priority, bool)
            or not isinstance(self.priority, int)
            or self.priority < 0
        ):
            raise ConfigValidationError("priority")
        if self.bssid and not BSSID_PATTERN.match(self.bssid):
            raise ConfigValidationError("bssid")
        if self.psk and not (
            HEX_PSK_PATTERN.match(self.psk) or 8 <= len(self.psk) <= 63
        ):
            raise ConfigValidationError("psk")

        if len(self.eap_methods) == 0:
            raise ConfigValidationError(
                "eap", "at least one eap method must be specified"
            )
        for method in self.eap_methods:
            if not isinstance(method, EapMethod):
                raise ConfigValidationError("eap")

        return Network(
            key_mgmt=key_mgmt,
            eap=self.eap_methods,
            ssid=self.ssid,
            scan_ssid=scan_ssid,
            bssid=self.bssid,
            priority=self.priority,
            mode=mode,
            proto=proto,
            auth_alg=auth_alg,
            pairwise=pairwise,
            group=group,
            psk=self.psk,
            eapol_flags=eapol_flags,
        )
