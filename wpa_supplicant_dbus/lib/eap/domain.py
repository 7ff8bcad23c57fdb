from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum


class InnerAuth(str, Enum):
    """Phase 2 (tunneled) authentication methods"""

    PAP = "PAP"
    MSCHAP = "MSCHAP"
    MSCHAPV2 = "MSCHAPV2"
    CHAP = "CHAP"
    MD5 = "MD5"
    GTC = "GTC"


class PeapVersion(IntEnum):
    V0 = 0
    V1 = 1


class EapMethod(ABC):
    """A single EAP method inside a network block."""

    protocol_name: str = ""

    @abstractmethod
    def render(self) -> str:
        """Returns the method's own field lines, two-space indented."""


class EapBuilder(ABC):
    @abstractmethod
    def build(self) -> EapMethod:
        pass


@dataclass(frozen=True)
class EapMethodDescriptor:
    name: str
    method_cls: type[EapMethod]
    builder_cls: type[EapBuilder]

    def new_builder(self) -> EapBuilder:
        return self.builder_cls()
