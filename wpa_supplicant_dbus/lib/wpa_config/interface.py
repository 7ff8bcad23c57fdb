from dataclasses import dataclass
from typing import Any

from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import coerce_enum

from .domain import (
    DEFAULT_AP_SCAN,
    DEFAULT_CTRL_INTERFACE,
    DEFAULT_CTRL_INTERFACE_GROUP,
    DEFAULT_EAPOL_VERSION,
    DEFAULT_FAST_REAUTH,
    ApScan,
    EapolVersion,
    FastReauth,
)
from .network import Network


@dataclass(frozen=True)
class WpaInterface:
    """The full wpa_supplicant configuration for one network interface"""

    networks: tuple[Network, ...]
    ctrl_interface: str = DEFAULT_CTRL_INTERFACE
    ctrl_interface_group: str = DEFAULT_CTRL_INTERFACE_GROUP
    eapol_version: EapolVersion = DEFAULT_EAPOL_VERSION
    ap_scan: ApScan = DEFAULT_AP_SCAN
    fast_reauth: FastReauth = DEFAULT_FAST_REAUTH

    def render(self) -> str:
        """
        Renders the configuration file text. Directives equal to the daemon's
        built-in default are left out.
        """
        lines = [f"ctrl_interface={self.ctrl_interface}\n"]
        if self.ctrl_interface_group != DEFAULT_CTRL_INTERFACE_GROUP:
            lines.append(f"ctrl_interface_group={self.ctrl_interface_group}\n")
        if self.eapol_version != DEFAULT_EAPOL_VERSION:
            lines.append(f"eapol_version={self.eapol_version.value}\n")
        if self.ap_scan != DEFAULT_AP_SCAN:
            lines.append(f"ap_scan={self.ap_scan.value}\n")
        if self.fast_reauth != DEFAULT_FAST_REAUTH:
            lines.append(f"fast_reauth={self.fast_reauth.value}\n")
        for network in self.networks:
            lines.append(network.render())
        return "".join(lines)


class WpaInterfaceBuilder:
    def __init__(self):
        self.ctrl_interface = DEFAULT_CTRL_INTERFACE
        self.ctrl_interface_group = DEFAULT_CTRL_INTERFACE_GROUP
        self.eapol_version: Any = DEFAULT_EAPOL_VERSION
        self.ap_scan: Any = DEFAULT_AP_SCAN
        self.fast_reauth: Any = DEFAULT_FAST_REAUTH
        self.networks: tuple = ()

    def with_ctrl_interface(self, ctrl_interface: str) -> "WpaInterfaceBuilder":
        self.ctrl_interface = ctrl_interface
        return self

    def with_ctrl_interface_group(self, group: str) -> "WpaInterfaceBuilder":
        self.ctrl_interface_group = group
        return self

    def with_eapol_version(self, version: Any) -> "WpaInterfaceBuilder":
        self.eapol_version = version
        return self

    def with_ap_scan(self, ap_scan: Any) -> "WpaInterfaceBuilder":
        self.ap_scan = ap_scan
        return self

    def with_fast_reauth(self, fast_reauth: Any) -> "WpaInterfaceBuilder":
        self.fast_reauth = fast_reauth
        return self

    def with_networks(self, *networks: Network) -> "WpaInterfaceBuilder":
        self.networks = tuple(networks)
        return self

    def build(self) -> WpaInterface:
        if not self.ctrl_interface:
            raise ConfigValidationError("ctrl_interface")
        if self.ctrl_interface_group is None:
            raise ConfigValidationError("ctrl_interface_group")
        eapol_version = coerce_enum(EapolVersion, self.eapol_version, "eapol_version")
        ap_scan = coerce_enum(ApScan, self.ap_scan, "ap_scan")
        fast_reauth = coerce_enum(FastReauth, self.fast_reauth, "fast_reauth")
        if len(self.networks) == 0:
            raise ConfigValidationError(
                "network",
                "no networks configured. at least one network must be provided",
            )
        for network in self.networks:
            if not isinstance(network, Network):
                raise ConfigValidationError("network")

        return WpaInterface(
            networks=self.networks,
            ctrl_interface=self.ctrl_interface,
            ctrl_interface_group=self.ctrl_interface_group,
            eapol_version=eapol_version,
            ap_scan=ap_scan,
            fast_reauth=fast_reauth,
        )
