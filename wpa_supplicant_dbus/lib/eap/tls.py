from dataclasses import dataclass

from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import quoted

from .domain import EapBuilder, EapMethod, EapMethodDescriptor
from .registry import EapRegistry


@dataclass(frozen=True)
class TlsMethod(EapMethod):
    """EAP-TLS: client and server certificate authentication"""

    identity: str
    client_cert: str
    private_key: str
    ca_cert: str = ""
    private_key_passwd: str = ""

    protocol_name = "TLS"

    def render(self) -> str:
        lines = []
        if self.identity:
            lines.append(quoted("identity", self.identity))
        if self.ca_cert:
            lines.append(quoted("ca_cert", self.ca_cert))
        if self.client_cert:
            lines.append(quoted("client_cert", self.client_cert))
        if self.private_key:
            lines.append(quoted("private_key", self.private_key))
        if self.private_key_passwd:
            lines.append(quoted("private_key_passwd", self.private_key_passwd))
        return "".join(lines)


class TlsBuilder(EapBuilder):
    def __init__(self):
        self.identity = ""
        self.ca_cert = ""
        self.client_cert = ""
        self.private_key = ""
        self.private_key_passwd = ""

    def with_identity(self, identity: str) -> "TlsBuilder":
        self.identity = identity
        return self

    def with_ca_cert_path(self, ca_cert_path: str) -> "TlsBuilder":
        self.ca_cert = ca_cert_path
        return self

    def with_client_cert_path(self, client_cert_path: str) -> "TlsBuilder":
        self.client_cert = client_cert_path
        return self

    def with_private_key_path(self, private_key_path: str) -> "TlsBuilder":
        self.private_key = private_key_path
        return self

    def with_private_key_password(self, password: str) -> "TlsBuilder":
        self.private_key_passwd = password
        return self

    def validate(self) -> None:
        if not self.identity:
            raise ConfigValidationError("identity", "invalid identity")
        if not self.client_cert:
            raise ConfigValidationError("client_cert", "invalid client_cert")
        if not self.private_key:
            raise ConfigValidationError("private_key", "invalid private_key")

    def build(self) -> TlsMethod:
        self.validate()
        return TlsMethod(
            identity=self.identity,
            client_cert=self.client_cert,
            private_key=self.private_key,
            ca_cert=self.ca_cert,
            private_key_passwd=self.private_key_passwd,
        )


def register(registry: EapRegistry) -> None:
    registry.register(
        TlsMethod.protocol_name,
        EapMethodDescriptor(TlsMethod.protocol_name, TlsMethod, TlsBuilder),
    )
