"""
wpa_supplicant configuration model

Builders validate every field against wpa_supplicant's legal values and
produce frozen values whose render() gives the configuration file text.

Usage:
    from wpa_supplicant_dbus.lib.wpa_config import (
        ApScan, KeyManagement, NetworkBuilder, WpaInterfaceBuilder,
    )

    network = (
        NetworkBuilder()
        .with_key_management(KeyManagement.IEEE8021X)
        .with_eap_methods(peap)
        .build()
    )
    config = (
        WpaInterfaceBuilder()
        .with_ctrl_interface("/run/wpa_supplicant")
        .with_ap_scan(ApScan.OFF)
        .with_networks(network)
        .build()
    )
    text = config.render()
"""

from .domain import (
    ApScan,
    AuthAlg,
    Driver,
    EapolFlag,
    EapolVersion,
    FastReauth,
    GroupCipher,
    KeyManagement,
    Mode,
    PairwiseCipher,
    Proto,
    ScanSSID,
)
from .interface import WpaInterface, WpaInterfaceBuilder
from .network import Network, NetworkBuilder

__all__ = [
    "ApScan",
    "AuthAlg",
    "Driver",
    "EapolFlag",
    "EapolVersion",
    "FastReauth",
    "GroupCipher",
    "KeyManagement",
    "Mode",
    "Network",
    "NetworkBuilder",
    "PairwiseCipher",
    "Proto",
    "ScanSSID",
    "WpaInterface",
    "WpaInterfaceBuilder",
]
