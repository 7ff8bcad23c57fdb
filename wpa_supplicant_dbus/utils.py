from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

from wpa_supplicant_dbus.models.errors import ConfigValidationError

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value: Any, field: str) -> E:
    """
    Converts a raw value (or an existing member) into a member of enum_cls.
    :param enum_cls: The enum holding the legal values for the field
    :param value: The value handed to a builder setter
    :param field: Config key used in the error if the value is not legal
    :return: The matching enum member
    """
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass, but True/False are never legal config values
    if isinstance(value, bool):
        raise ConfigValidationError(field)
    try:
        return enum_cls(value)
    except ValueError:
        raise ConfigValidationError(field) from None


def coerce_optional_enum(enum_cls: type[E], value: Any, field: str) -> Optional[E]:
    if value is None:
        return None
    return coerce_enum(enum_cls, value, field)


def coerce_enum_list(enum_cls: type[E], values: Iterable[Any], field: str) -> tuple[E, ...]:
    return tuple(coerce_enum(enum_cls, value, field) for value in values)


def quoted(key: str, value: Any, indent: str = "  ") -> str:
    return f'{indent}{key}="{value}"\n'


def bare(key: str, value: Any, indent: str = "  ") -> str:
    if isinstance(value, Enum):
        value = value.value
    return f"{indent}{key}={value}\n"


def joined(key: str, values: Iterable[Enum], indent: str = "  ") -> str:
    return f"{indent}{key}={' '.join(str(v.value) for v in values)}\n"
