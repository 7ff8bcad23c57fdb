"""
wpa_supplicant interface lifecycle over D-Bus

Usage:
    from wpa_supplicant_dbus.lib.wifi_control import WpaSupplicantDbus

    async with await WpaSupplicantDbus.connect() as wpa:
        path = await wpa.create_interface("eth0", "", "wired", config)
        async for event in wpa.state_changes(path):
            print(event.state)
"""

from .domain import DaemonProperties, LifecycleState, Messages
from .wpa_supplicant_dbus import (
    CreatedInterface,
    WpaSupplicantDbus,
    unwrap_properties,
    unwrap_variant,
)

__all__ = [
    "CreatedInterface",
    "DaemonProperties",
    "LifecycleState",
    "Messages",
    "WpaSupplicantDbus",
    "unwrap_properties",
    "unwrap_variant",
]
