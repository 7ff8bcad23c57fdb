from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from wpa_supplicant_dbus.constants import DEFAULT_CONFIG_STORAGE_DIR
from wpa_supplicant_dbus.lib.wpa_config.domain import Driver


class CliGeneral(BaseModel):
    interface_name: str = Field(default="eth0")
    bridge_name: str = Field(default="")
    driver: Driver = Field(default=Driver.WIRED)
    ctrl_interface: str = Field(default="/run/wpa_supplicant")
    config_storage_dir: str = Field(default=DEFAULT_CONFIG_STORAGE_DIR)

    @field_validator("bridge_name", mode="before")
    def empty_to_str(cls, v):  # noqa: N805
        if v is None:
            return ""
        return v


class CliTLS(BaseModel):
    identity: Optional[str] = Field(default="")
    ca_cert: Optional[str] = Field(default="")
    client_cert: Optional[str] = Field(default="")
    private_key: Optional[str] = Field(default="")
    private_key_passwd: Optional[str] = Field(default="")

    @field_validator(
        "identity",
        "ca_cert",
        "client_cert",
        "private_key",
        "private_key_passwd",
        mode="before",
    )
    def empty_to_str(cls, v):  # noqa: N805
        if v is None:
            return ""
        return v


class CliConfig(BaseModel):
    General: CliGeneral = Field(default_factory=CliGeneral)
    TLS: CliTLS = Field(default_factory=CliTLS)
