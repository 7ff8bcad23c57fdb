from dataclasses import dataclass

from wpa_supplicant_dbus.models.errors import ConfigValidationError
from wpa_supplicant_dbus.utils import quoted

from .domain import EapBuilder, EapMethod, EapMethodDescriptor
from .registry import EapRegistry


@dataclass(frozen=True)
class Md5Method(EapMethod):
    username: str
    password: str

    protocol_name = "MD5"

    def render(self) -> str:
        # wpa_supplicant has no username key; the user name goes in identity.
        return quoted("identity", self.username) + quoted("password", self.password)


class Md5Builder(EapBuilder):
    def __init__(self):
        self.username = ""
        self.password = ""

    def with_username(self, username: str) -> "Md5Builder":
        self.username = username
        return self

    def with_password(self, password: str) -> "Md5Builder":
        self.password = password
        return self

    def build(self) -> Md5Method:
        if not self.username:
            raise ConfigValidationError("username", "invalid username")
        if not self.password:
            raise ConfigValidationError("password", "invalid password")
        return Md5Method(username=self.username, password=self.password)


def register(registry: EapRegistry) -> None:
    registry.register(
        Md5Method.protocol_name,
        EapMethodDescriptor(Md5Method.protocol_name, Md5Method, Md5Builder),
    )
