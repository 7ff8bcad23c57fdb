from wpa_supplicant_dbus.__version__ import __version__
from wpa_supplicant_dbus.lib.eap import (
    InnerAuth,
    Md5Builder,
    PeapBuilder,
    PeapVersion,
    TlsBuilder,
    TtlsBuilder,
    default_registry,
)
from wpa_supplicant_dbus.lib.wifi_control import Messages, WpaSupplicantDbus
from wpa_supplicant_dbus.lib.wpa_config import NetworkBuilder, WpaInterfaceBuilder
from wpa_supplicant_dbus.models.errors import (
    ConfigValidationError,
    ConfigWriteError,
    InterfaceExistsError,
    InterfaceNotFoundError,
    WpaProtocolError,
    WpaSupplicantDbusError,
)
