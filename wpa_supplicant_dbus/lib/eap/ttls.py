from dataclasses import dataclass
from typing import Any

from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import coerce_enum, quoted

from .domain import EapBuilder, EapMethod, EapMethodDescriptor, InnerAuth
from .registry import EapRegistry

ALLOWED_INNER_AUTH = (
    InnerAuth.PAP,
    InnerAuth.MSCHAP,
    InnerAuth.MSCHAPV2,
    InnerAuth.CHAP,
    InnerAuth.MD5,
    InnerAuth.GTC,
)
# Only valid inside TTLS as tunneled EAP, which wpa_supplicant spells autheap=
TUNNELED_EAP_INNER_AUTH = (InnerAuth.MD5, InnerAuth.GTC)


@dataclass(frozen=True)
class TtlsMethod(EapMethod):
    """EAP-TTLS: tunneled EAP or PAP/CHAP/MSCHAP/MSCHAPV2 authentication"""

    identity: str
    password: str
    inner_auth: InnerAuth
    anonymous_identity: str = ""
    ca_cert: str = ""

    protocol_name = "TTLS"

    @property
    def phase2(self) -> str:
        key = "autheap" if self.inner_auth in TUNNELED_EAP_INNER_AUTH else "auth"
        return f"{key}={self.inner_auth.value}"

    def render(self) -> str:
        lines = []
        if self.anonymous_identity:
            lines.append(quoted("anonymous_identity", self.anonymous_identity))
        if self.identity:
            lines.append(quoted("identity", self.identity))
        if self.ca_cert:
            lines.append(quoted("ca_cert", self.ca_cert))
        if self.password:
            lines.append(quoted("password", self.password))
        if self.inner_auth:
            lines.append(quoted("phase2", self.phase2))
        return "".join(lines)


class TtlsBuilder(EapBuilder):
    def __init__(self):
        self.anonymous_identity = ""
        self.identity = ""
        self.ca_cert = ""
        self.password = ""
        self.inner_auth: Any = None

    def with_anonymous_identity(self, anonymous_identity: str) -> "TtlsBuilder":
        self.anonymous_identity = anonymous_identity
        return self

    def with_identity(self, identity: str) -> "TtlsBuilder":
        self.identity = identity
        return self

    def with_ca_cert_path(self, ca_cert_path: str) -> "TtlsBuilder":
        self.ca_cert = ca_cert_path
        return self

    def with_password(self, password: str) -> "TtlsBuilder":
        self.password = password
        return self

    def with_inner_auth(self, inner_auth: Any) -> "TtlsBuilder":
        self.inner_auth = inner_auth
        return self

    def build(self) -> TtlsMethod:
        if not self.identity:
            raise ConfigValidationError("identity", "invalid identity")
        if not self.password:
            raise ConfigValidationError("password", "invalid password")
        if not self.inner_auth:
            raise ConfigValidationError("phase2", "invalid inner auth (empty)")
        inner_auth = coerce_enum(InnerAuth, self.inner_auth, "phase2")
        if inner_auth not in ALLOWED_INNER_AUTH:
            raise ConfigValidationError("phase2", "invalid inner auth (wrong value)")

        return TtlsMethod(
            identity=self.identity,
            password=self.password,
            inner_auth=inner_auth,
            anonymous_identity=self.anonymous_identity,
            ca_cert=self.ca_cert,
        )


def register(registry: EapRegistry) -> None:
    registry.register(
        TtlsMethod.protocol_name,
        EapMethodDescriptor(TtlsMethod.protocol_name, TtlsMethod, TtlsBuilder),
    )
