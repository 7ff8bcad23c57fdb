import typing as t
from enum import Enum

from pydantic import BaseModel, Field


class LifecycleState(str, Enum):
    REQUESTED = "requested"
    CREATED = "created"
    REMOVED = "removed"


class Messages:

    class WpaSupplicantEvent(BaseModel):
        interface: str = Field()
        object_path: str = Field()
        details: dict[str, t.Any] = Field(default_factory=dict)

    class WpaSupplicantStateChanged(WpaSupplicantEvent):
        state: str = Field()

    class InterfaceCreated(WpaSupplicantEvent):
        config_path: str = Field()

    class InterfaceRemoved(WpaSupplicantEvent):
        # False when the daemon had already dropped the interface
        confirmed: bool = Field(default=True)


class DaemonProperties(BaseModel):
    """Daemon-wide properties of fi.w1.wpa_supplicant1, as last read."""

    Capabilities: list[str] = Field(default_factory=list)
    DebugLevel: t.Optional[str] = Field(default=None)
    DebugTimeStamp: t.Optional[bool] = Field(default=None)
    DebugShowKeys: t.Optional[bool] = Field(default=None)
    EapMethods: list[str] = Field(default_factory=list)
    WFDIEs: bytes = Field(default=b"")

    # EapMethods filtered down to the methods this library can build
    supported_eap_methods: list[str] = Field(default_factory=list)
