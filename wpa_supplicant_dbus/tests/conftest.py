"""
Pytest configuration and shared fixtures for wpa-supplicant-dbus tests
"""
import asyncio
import logging
from typing import Callable, Optional

import pytest
from jeepney import (
    DBusAddress,
    HeaderFields,
    Message,
    new_error,
    new_method_return,
    new_signal,
)
from jeepney.io.common import FilterHandle, MessageFilters

from wpa_supplicant_dbus.constants import (
    WPA_ERROR_INTERFACE_EXISTS,
    WPA_ERROR_INTERFACE_UNKNOWN,
    WPA_INTERFACE_IFACE,
    WPA_OBJECT_PATH,
)
from wpa_supplicant_dbus.lib.eap.peap import PeapBuilder
from wpa_supplicant_dbus.lib.eap.domain import InnerAuth
from wpa_supplicant_dbus.lib.logging_utils import setup_logging
from wpa_supplicant_dbus.lib.wifi_control.wpa_supplicant_dbus import WpaSupplicantDbus
from wpa_supplicant_dbus.lib.wpa_config.domain import ApScan, KeyManagement
from wpa_supplicant_dbus.lib.wpa_config.interface import WpaInterfaceBuilder
from wpa_supplicant_dbus.lib.wpa_config.network import NetworkBuilder


class FakeWpaSupplicant:
    """
    In-memory stand-in for a jeepney DBusRouter connected to wpa_supplicant.

    Answers the daemon's method calls the way wpa_supplicant does and lets a
    test push PropertiesChanged signals through the same filter machinery the
    real router uses.
    """

    def __init__(self):
        self.calls: list[Message] = []
        self.interfaces: dict[str, str] = {}
        self.states: dict[str, str] = {}
        self.match_rules: list[str] = []
        self.properties: dict[str, tuple] = {
            "Capabilities": ("as", ["ap", "ibss-rsn", "pmksa-cache", "mesh"]),
            "DebugLevel": ("s", "info"),
            "DebugTimeStamp": ("b", False),
            "DebugShowKeys": ("b", False),
            "EapMethods": ("as", ["MD5", "TLS", "MSCHAPV2", "PEAP", "TTLS", "GTC", "FAST"]),
            "WFDIEs": ("ay", b""),
        }
        self.failing_properties: set[str] = set()
        # Per-member reply overrides, e.g. to return a malformed reply
        self.overrides: dict[str, Callable[[Message], Message]] = {}
        self._filters = MessageFilters()
        self._next_id = 0

    def filter(self, rule, *, queue: Optional[asyncio.Queue] = None, bufsize=1):
        return FilterHandle(self._filters, rule, queue or asyncio.Queue(bufsize))

    @property
    def open_filters(self) -> int:
        return len(self._filters.filters)

    def calls_to(self, member: str) -> list[Message]:
        return [m for m in self.calls if m.header.fields.get(HeaderFields.member) == member]

    async def send_and_get_reply(self, message: Message) -> Message:
        self.calls.append(message)
        member = message.header.fields[HeaderFields.member]
        handler = self.overrides.get(member) or getattr(self, f"_handle_{member}")
        return handler(message)

    def _handle_CreateInterface(self, message: Message) -> Message:
        args = message.body[0]
        name = args["Ifname"][1]
        if name in self.interfaces:
            return new_error(
                message, WPA_ERROR_INTERFACE_EXISTS, "s", (f"{name} already managed",)
            )
        path = f"{WPA_OBJECT_PATH}/Interfaces/{self._next_id}"
        self._next_id += 1
        self.interfaces[name] = path
        self.states[path] = "disconnected"
        return new_method_return(message, "o", (path,))

    def _handle_RemoveInterface(self, message: Message) -> Message:
        path = message.body[0]
        for name, known_path in list(self.interfaces.items()):
            if known_path == path:
                del self.interfaces[name]
                del self.states[path]
                return new_method_return(message)
        return new_error(message, WPA_ERROR_INTERFACE_UNKNOWN, "s", ("unknown interface",))

    def _handle_GetInterface(self, message: Message) -> Message:
        name = message.body[0]
        if name not in self.interfaces:
            return new_error(message, WPA_ERROR_INTERFACE_UNKNOWN, "s", ("unknown interface",))
        return new_method_return(message, "o", (self.interfaces[name],))

    def _handle_Get(self, message: Message) -> Message:
        interface, name = message.body
        if interface == WPA_INTERFACE_IFACE:
            path = message.header.fields[HeaderFields.path]
            if path not in self.states:
                return new_error(
                    message, "org.freedesktop.DBus.Error.UnknownObject", "s", (path,)
                )
            return new_method_return(message, "v", (("s", self.states[path]),))
        if name in self.failing_properties:
            return new_error(
                message, "org.freedesktop.DBus.Error.Failed", "s", (f"{name} unavailable",)
            )
        return new_method_return(message, "v", (self.properties[name],))

    def _handle_AddMatch(self, message: Message) -> Message:
        self.match_rules.append(message.body[0])
        return new_method_return(message)

    def _handle_RemoveMatch(self, message: Message) -> Message:
        self.match_rules.remove(message.body[0])
        return new_method_return(message)

    def emit_properties_changed(self, object_path: str, changes: dict[str, tuple]):
        """Delivers a PropertiesChanged signal, dropping it on full queues like the real router."""
        if "State" in changes and object_path in self.states:
            self.states[object_path] = changes["State"][1]
        signal = new_signal(
            DBusAddress(object_path, interface=WPA_INTERFACE_IFACE),
            "PropertiesChanged",
            "a{sv}",
            (changes,),
        )
        for handle in list(self._filters.matches(signal)):
            try:
                handle.queue.put_nowait(signal)
            except asyncio.QueueFull:
                pass

    def emit_state(self, object_path: str, state: str):
        self.emit_properties_changed(object_path, {"State": ("s", state)})


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Setup logging for tests with appropriate levels"""
    setup_logging(level=logging.INFO)


@pytest.fixture
def fake_wpa() -> FakeWpaSupplicant:
    return FakeWpaSupplicant()


@pytest.fixture
def wpa(fake_wpa) -> WpaSupplicantDbus:
    return WpaSupplicantDbus(fake_wpa)


@pytest.fixture
def storage_dir(tmp_path):
    path = tmp_path / "wpa_supplicant"
    path.mkdir()
    return path


@pytest.fixture
def peap_interface():
    """The reference wired PEAP configuration"""
    peap = (
        PeapBuilder()
        .with_identity("user_name")
        .with_password("user_password")
        .with_inner_auth(InnerAuth.MSCHAPV2)
        .build()
    )
    network = (
        NetworkBuilder()
        .with_key_management(KeyManagement.IEEE8021X)
        .with_eap_methods(peap)
        .build()
    )
    return (
        WpaInterfaceBuilder()
        .with_ctrl_interface("/run/wpa_supplicant")
        .with_ap_scan(ApScan.OFF)
        .with_networks(network)
        .build()
    )
