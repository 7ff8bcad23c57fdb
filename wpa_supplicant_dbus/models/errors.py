from typing import Optional, Union
from os import PathLike


class WpaSupplicantDbusError(Exception):
    pass


class ConfigValidationError(WpaSupplicantDbusError, ValueError):
    """Raised by the builders when a field is missing or outside its legal set."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"invalid value for {field}"
        super().__init__(self.message)


class ConfigWriteError(WpaSupplicantDbusError):
    def __init__(self, path: Union[str, PathLike], error_msg: str):
        self.path = path
        self.error_msg = error_msg
        super().__init__(f"Unable to write config to {path}: {error_msg}")


class WpaProtocolError(WpaSupplicantDbusError):
    """A D-Bus call failed or returned something other than what was expected."""

    def __init__(self, message: str, dbus_error_name: Optional[str] = None):
        self.dbus_error_name = dbus_error_name
        super().__init__(message)


class InterfaceExistsError(WpaProtocolError):
    pass


class InterfaceNotFoundError(WpaProtocolError):
    pass
