from dataclasses import dataclass
from typing import Any, Optional

from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import coerce_enum, coerce_optional_enum, quoted

from .domain import EapBuilder, EapMethod, EapMethodDescriptor, InnerAuth, PeapVersion
from .registry import EapRegistry

ALLOWED_INNER_AUTH = (InnerAuth.MSCHAPV2, InnerAuth.MD5, InnerAuth.GTC)


@dataclass(frozen=True)
class PeapMethod(EapMethod):
    """EAP-PEAP: tunneled EAP authentication"""

    identity: str
    password: str
    inner_auth: InnerAuth
    anonymous_identity: str = ""
    peap_version: Optional[PeapVersion] = None
    ca_cert: str = ""

    protocol_name = "PEAP"

    def render(self) -> str:
        lines = []
        if self.anonymous_identity:
            lines.append(quoted("anonymous_identity", self.anonymous_identity))
        if self.identity:
            lines.append(quoted("identity", self.identity))
        if self.password:
            lines.append(quoted("password", self.password))
        if self.peap_version is not None:
            lines.append(quoted("phase1", f"peapver={self.peap_version.value}"))
        if self.ca_cert:
            lines.append(quoted("ca_cert", self.ca_cert))
        if self.inner_auth:
            lines.append(quoted("phase2", f"auth={self.inner_auth.value}"))
        return "".join(lines)


class PeapBuilder(EapBuilder):
    def __init__(self):
        self.anonymous_identity = ""
        self.identity = ""
        self.password = ""
        self.peap_version: Any = None
        self.ca_cert = ""
        self.inner_auth: Any = None

    def with_anonymous_identity(self, anonymous_identity: str) -> "PeapBuilder":
        self.anonymous_identity = anonymous_identity
        return self

    def with_identity(self, identity: str) -> "PeapBuilder":
        self.identity = identity
        return self

    def with_password(self, password: str) -> "PeapBuilder":
        self.password = password
        return self

    def with_peap_version(self, peap_version: Any) -> "PeapBuilder":
        self.peap_version = peap_version
        return self

    def with_ca_cert_path(self, ca_cert_path: str) -> "PeapBuilder":
        self.ca_cert = ca_cert_path
        return self

    def with_inner_auth(self, inner_auth: Any) -> "PeapBuilder":
        self.inner_auth = inner_auth
        return self

    def build(self) -> PeapMethod:
        if not self.identity:
            raise ConfigValidationError("identity", "invalid identity")
        if not self.password:
            raise ConfigValidationError("password", "invalid password")
        if not self.inner_auth:
            raise ConfigValidationError("phase2", "invalid inner auth (empty)")
        peap_version = coerce_optional_enum(PeapVersion, self.peap_version, "phase1")
        inner_auth = coerce_enum(InnerAuth, self.inner_auth, "phase2")
        if inner_auth not in ALLOWED_INNER_AUTH:
            raise ConfigValidationError("phase2", "invalid inner auth (wrong value)")

        return PeapMethod(
            identity=self.identity,
            password=self.password,
            inner_auth=inner_auth,
            anonymous_identity=self.anonymous_identity,
            peap_version=peap_version,
            ca_cert=self.ca_cert,
        )


def register(registry: EapRegistry) -> None:
    registry.register(
        PeapMethod.protocol_name,
        EapMethodDescriptor(PeapMethod.protocol_name, PeapMethod, PeapBuilder),
    )
