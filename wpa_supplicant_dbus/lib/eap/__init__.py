"""
EAP methods usable inside a wpa_supplicant network block.

Each method has a builder that validates its fields before producing an
immutable value, and a render() producing the method's own config lines.

Usage:
    from wpa_supplicant_dbus.lib.eap import InnerAuth, PeapBuilder

    peap = (
        PeapBuilder()
        .with_identity("user_name")
        .with_password("user_password")
        .with_inner_auth(InnerAuth.MSCHAPV2)
        .build()
    )
"""

from .domain import EapBuilder, EapMethod, EapMethodDescriptor, InnerAuth, PeapVersion
from .md5 import Md5Builder, Md5Method
from .peap import PeapBuilder, PeapMethod
from .registry import EapRegistry, default_registry
from .tls import TlsBuilder, TlsMethod
from .ttls import TtlsBuilder, TtlsMethod

__all__ = [
    "EapBuilder",
    "EapMethod",
    "EapMethodDescriptor",
    "EapRegistry",
    "InnerAuth",
    "Md5Builder",
    "Md5Method",
    "PeapBuilder",
    "PeapMethod",
    "PeapVersion",
    "TlsBuilder",
    "TlsMethod",
    "TtlsBuilder",
    "TtlsMethod",
    "default_registry",
]
