import asyncio
import contextlib
import enum
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, AsyncIterator, Optional, Union

from jeepney import (
    DBusAddress,
    HeaderFields,
    MatchRule,
    Message,
    MessageType,
    Properties,
    new_method_call,
)
from jeepney.bus_messages import message_bus
from jeepney.io.asyncio import DBusRouter, open_dbus_connection
from jeepney.io.common import FilterHandle, RouterClosed
from jeepney.low_level import Array, DictEntry, Struct, Variant, parse_signature
from pydantic import ValidationError
from pyee.asyncio import AsyncIOEventEmitter

from wpa_supplicant_dbus.constants import (
    DEFAULT_CONFIG_STORAGE_DIR,
    WPA_ERROR_INTERFACE_EXISTS,
    WPA_ERROR_INTERFACE_UNKNOWN,
    WPA_INTERFACE_IFACE,
    WPA_OBJECT_PATH,
    WPA_SERVICE,
)
from wpa_supplicant_dbus.lib.configuration.config_writer import write_interface_config
from wpa_supplicant_dbus.lib.eap.registry import EapRegistry, default_registry
from wpa_supplicant_dbus.lib.wifi_control.domain import (
    DaemonProperties,
    LifecycleState,
    Messages,
)
from wpa_supplicant_dbus.lib.wpa_config.domain import Driver
from wpa_supplicant_dbus.lib.wpa_config.interface import WpaInterface
from wpa_supplicant_dbus.models.errors import (
    ConfigValidationError,
    InterfaceExistsError,
    InterfaceNotFoundError,
    WpaProtocolError,
)
from wpa_supplicant_dbus.utils import coerce_enum

DBUS_ERROR_UNKNOWN_OBJECT = "org.freedesktop.DBus.Error.UnknownObject"

DAEMON_PROPERTIES = (
    "Capabilities",
    "DebugLevel",
    "DebugTimeStamp",
    "DebugShowKeys",
    "EapMethods",
    "WFDIEs",
)

DEFAULT_EVENT_QUEUE_SIZE = 64
DEFAULT_SIGNAL_QUEUE_SIZE = 64


def unwrap_variant(variant: tuple[str, Any]) -> Any:
    """
    Returns the plain value of a decoded D-Bus variant.

    jeepney decodes a variant as a (signature, value) pair. The signature
    decides where nested variants sit, so only those are unwrapped and a
    struct such as ("ab", "x") is left alone.
    """
    signature, value = variant
    return _strip_variants(parse_signature(list(signature)), value)


def unwrap_properties(properties: dict[str, tuple[str, Any]]) -> dict[str, Any]:
    """Unwraps the values of an a{sv} property dict."""
    return {name: unwrap_variant(value) for name, value in properties.items()}


def _strip_variants(dbus_type, value: Any) -> Any:
    if isinstance(dbus_type, Variant):
        return unwrap_variant(value)
    if isinstance(dbus_type, Array):
        element = dbus_type.elt_type
        if isinstance(element, DictEntry):
            return {k: _strip_variants(element.fields[1], v) for k, v in value.items()}
        if isinstance(value, list):
            return [_strip_variants(element, v) for v in value]
        # ay arrives as bytes
        return value
    if isinstance(dbus_type, Struct):
        return tuple(_strip_variants(f, v) for f, v in zip(dbus_type.fields, value))
    return value


@dataclass
class CreatedInterface:
    object_path: str
    name: str
    config: WpaInterface
    config_path: str
    events: asyncio.Queue
    state: LifecycleState = LifecycleState.REQUESTED
    last_state: Optional[str] = None
    match_rule: Optional[MatchRule] = None
    signals: Optional[FilterHandle] = None
    forwarder: Optional[asyncio.Task] = field(default=None, repr=False)


class WpaSupplicantDbus:
    """
    Manages wpa_supplicant interfaces over D-Bus.

    Interfaces created through this object are tracked until they are removed
    or reported gone, and their State property changes are republished both
    through state_changes() and on the `ee` event emitter.
    """

    class Events(enum.Enum):
        STATE_CHANGED = "state_changed"
        INTERFACE_CREATED = "interface_created"
        INTERFACE_REMOVED = "interface_removed"

    def __init__(
        self,
        router: DBusRouter,
        registry: Optional[EapRegistry] = None,
        event_queue_size: int = DEFAULT_EVENT_QUEUE_SIZE,
        signal_queue_size: int = DEFAULT_SIGNAL_QUEUE_SIZE,
        connection=None,
    ):
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"Initializing {__name__}")

        if event_queue_size < 1:
            raise ValueError("event_queue_size must be at least 1")
        if signal_queue_size < 1:
            raise ValueError("signal_queue_size must be at least 1")

        self.router = router
        self.registry = registry if registry is not None else default_registry()
        self.event_queue_size = event_queue_size
        self.signal_queue_size = signal_queue_size
        self._connection = connection

        self.ee = AsyncIOEventEmitter()
        self.properties = DaemonProperties()

        self._daemon = DBusAddress(
            WPA_OBJECT_PATH, bus_name=WPA_SERVICE, interface=WPA_SERVICE
        )
        self._interfaces: dict[str, CreatedInterface] = {}
        self._closed = False

    @classmethod
    async def connect(cls, bus: str = "SYSTEM", **kwargs) -> "WpaSupplicantDbus":
        """Opens a bus connection and a router on it, owned by the returned object."""
        connection = await open_dbus_connection(bus)
        router = DBusRouter(connection)
        return cls(router, connection=connection, **kwargs)

    async def close(self):
        if self._closed:
            return
        self._closed = True
        for record in list(self._interfaces.values()):
            await self._teardown(record, confirmed=False, unsubscribe=False)

        if self._connection is not None:
            # Only tear down a router this object opened itself
            await self.router.__aexit__(None, None, None)
            await self._connection.close()
        self.logger.info("D-Bus bridge closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    @property
    def interfaces(self) -> dict[str, CreatedInterface]:
        return dict(self._interfaces)

    def _interface_address(self, object_path: str) -> DBusAddress:
        return DBusAddress(
            object_path, bus_name=WPA_SERVICE, interface=WPA_INTERFACE_IFACE
        )

    async def _call(
        self,
        message: Message,
        expected_signature: Optional[str] = None,
        errors: Optional[dict[str, type]] = None,
    ) -> tuple:
        """
        Sends a method call and returns the reply body.

        Error replies are raised as WpaProtocolError, or as the subclass given
        for that error name in `errors`. A reply whose signature differs from
        `expected_signature` is also a WpaProtocolError.
        """
        member = message.header.fields.get(HeaderFields.member)
        reply = await self.router.send_and_get_reply(message)

        if reply.header.message_type == MessageType.error:
            error_name = reply.header.fields.get(HeaderFields.error_name)
            detail = reply.body[0] if reply.body else ""
            error_cls = (errors or {}).get(error_name, WpaProtocolError)
            raise error_cls(
                f"{member} failed: [{error_name}] {detail}",
                dbus_error_name=error_name,
            )

        signature = reply.header.fields.get(HeaderFields.signature, "")
        if expected_signature is not None and signature != expected_signature:
            raise WpaProtocolError(
                f"{member} returned signature '{signature}', expected '{expected_signature}'"
            )
        return reply.body

    async def create_interface(
        self,
        if_name: str,
        bridge_name: str,
        driver: Union[Driver, str],
        config: WpaInterface,
        storage_dir: Union[str, PathLike] = DEFAULT_CONFIG_STORAGE_DIR,
    ) -> str:
        """
        Writes the rendered config and asks wpa_supplicant to manage the interface.
        @param if_name: System interface name, e.g. "eth0"
        @param bridge_name: Bridge the interface belongs to, or ""
        @param driver: wpa_supplicant driver backend
        @param config: Validated interface configuration
        @param storage_dir: Directory the config file is written into
        @return: D-Bus object path of the new interface
        """
        if self._closed:
            raise WpaProtocolError("D-Bus bridge is closed")
        if not if_name:
            raise ConfigValidationError("Ifname", "invalid interface name")
        if not isinstance(config, WpaInterface):
            raise ConfigValidationError("config", "invalid interface configuration")
        driver = coerce_enum(Driver, driver, "driver")

        config_path = write_interface_config(
            storage_dir, if_name, driver, config.render()
        )
        self.logger.info(f"Creating interface {if_name} with {config_path}")

        args: dict[str, tuple[str, str]] = {
            "Ifname": ("s", if_name),
            "Driver": ("s", driver.value),
            "ConfigFile": ("s", config_path),
        }
        if bridge_name:
            args["BridgeIfname"] = ("s", bridge_name)

        body = await self._call(
            new_method_call(self._daemon, "CreateInterface", "a{sv}", (args,)),
            expected_signature="o",
            errors={WPA_ERROR_INTERFACE_EXISTS: InterfaceExistsError},
        )
        object_path = body[0]

        record = CreatedInterface(
            object_path=object_path,
            name=if_name,
            config=config,
            config_path=config_path,
            events=asyncio.Queue(maxsize=self.event_queue_size),
        )
        try:
            await self._subscribe(record)
        except (WpaProtocolError, RouterClosed) as e:
            self.logger.error(
                f"Unable to subscribe to {object_path}, removing it again: {e}"
            )
            if record.signals is not None:
                record.signals.close()
            with contextlib.suppress(WpaProtocolError, RouterClosed):
                await self._call(
                    new_method_call(
                        self._daemon, "RemoveInterface", "o", (object_path,)
                    )
                )
            raise

        record.state = LifecycleState.CREATED
        record.forwarder = asyncio.create_task(self._forward_state_changes(record))
        self._interfaces[object_path] = record
        self.logger.info(f"Interface {if_name} created at {object_path}")

        self._emit(
            self.Events.INTERFACE_CREATED,
            Messages.InterfaceCreated(
                interface=if_name, object_path=object_path, config_path=config_path
            ),
        )
        return object_path

    def _emit(self, event: "WpaSupplicantDbus.Events", message):
        # Listener failures are logged; the lifecycle operation already happened
        try:
            self.ee.emit(event.value, message)
        except Exception:
            self.logger.exception(f"Listener for {event.value} failed")

    async def _subscribe(self, record: CreatedInterface):
        rule = MatchRule(
            type="signal",
            interface=WPA_INTERFACE_IFACE,
            member="PropertiesChanged",
            path=record.object_path,
        )
        # Filter first so nothing the bus delivers after AddMatch is missed
        record.signals = self.router.filter(rule, bufsize=self.signal_queue_size)
        await self._call(message_bus.AddMatch(rule))
        record.match_rule = rule

    async def _forward_state_changes(self, record: CreatedInterface):
        queue = record.signals.queue
        while True:
            signal = await queue.get()
            if not signal.body or not isinstance(signal.body[0], dict):
                continue
            changes = unwrap_properties(signal.body[0])
            self.logger.debug(f"{record.name}: properties changed: {changes}")
            if "State" not in changes:
                continue

            try:
                event = Messages.WpaSupplicantStateChanged(
                    interface=record.name,
                    object_path=record.object_path,
                    state=changes["State"],
                    details=changes,
                )
            except ValidationError as e:
                self.logger.warning(
                    f"{record.name}: ignoring malformed State {changes['State']!r}: {e}"
                )
                continue

            record.last_state = event.state
            self._publish(record, event)
            self._emit(self.Events.STATE_CHANGED, event)

    def _publish(self, record: CreatedInterface, event):
        if record.events.full():
            dropped = record.events.get_nowait()
            self.logger.warning(
                f"Event queue for {record.name} is full, dropped {dropped!r}"
            )
        record.events.put_nowait(event)

    async def _teardown(
        self, record: CreatedInterface, confirmed: bool, unsubscribe: bool = True
    ):
        self._interfaces.pop(record.object_path, None)

        if record.forwarder is not None:
            record.forwarder.cancel()
            try:
                await record.forwarder
            except asyncio.CancelledError:
                pass
            except Exception:
                self.logger.exception(
                    f"State forwarding for {record.name} had stopped with an error"
                )
        if record.signals is not None:
            record.signals.close()
        if unsubscribe and record.match_rule is not None:
            try:
                await self._call(message_bus.RemoveMatch(record.match_rule))
            except (WpaProtocolError, RouterClosed) as e:
                self.logger.warning(
                    f"Unable to remove signal match for {record.object_path}: {e}"
                )

        record.state = LifecycleState.REMOVED
        # Ends any state_changes() iteration on this interface
        self._publish(record, None)
        self.logger.info(f"Interface {record.name} at {record.object_path} removed")
        self._emit(
            self.Events.INTERFACE_REMOVED,
            Messages.InterfaceRemoved(
                interface=record.name,
                object_path=record.object_path,
                confirmed=confirmed,
            ),
        )

    async def remove_interface(self, object_path: str):
        """
        Removes an interface from wpa_supplicant and stops its notifications.

        Raises InterfaceNotFoundError when the daemon does not know the path,
        including a second removal of the same interface.
        """
        record = self._interfaces.get(object_path)
        try:
            await self._call(
                new_method_call(self._daemon, "RemoveInterface", "o", (object_path,)),
                errors={WPA_ERROR_INTERFACE_UNKNOWN: InterfaceNotFoundError},
            )
        except InterfaceNotFoundError:
            # Gone on the daemon side; nothing left to track locally either
            if record is not None:
                await self._teardown(record, confirmed=False)
            raise
        if record is not None:
            await self._teardown(record, confirmed=True)

    async def expect_disconnect(self, object_path: str):
        """
        Tears down an interface that is expected to go away, e.g. because its
        link is being unplugged. Local state is always dropped; an interface
        the daemon already forgot is not an error.
        """
        record = self._interfaces.get(object_path)
        confirmed = False
        try:
            await self._call(
                new_method_call(self._daemon, "RemoveInterface", "o", (object_path,)),
                errors={WPA_ERROR_INTERFACE_UNKNOWN: InterfaceNotFoundError},
            )
            confirmed = True
        except InterfaceNotFoundError:
            self.logger.debug(f"{object_path} was already gone")
        finally:
            if record is not None:
                await self._teardown(record, confirmed=confirmed)

    async def get_interface(self, if_name: str) -> str:
        body = await self._call(
            new_method_call(self._daemon, "GetInterface", "s", (if_name,)),
            expected_signature="o",
            errors={WPA_ERROR_INTERFACE_UNKNOWN: InterfaceNotFoundError},
        )
        return body[0]

    async def get_interface_state(self, object_path: str) -> str:
        body = await self._call(
            Properties(self._interface_address(object_path)).get("State"),
            expected_signature="v",
            errors={DBUS_ERROR_UNKNOWN_OBJECT: InterfaceNotFoundError},
        )
        state = unwrap_variant(body[0])
        if not isinstance(state, str):
            raise WpaProtocolError(f"State of {object_path} is not a string: {state!r}")
        return state

    async def read_all_properties(self) -> dict[str, Exception]:
        """
        Reads every daemon property, one call each.

        A failing property does not stop the others. Failures are logged and
        returned keyed by property name; an empty dict means every read
        succeeded. self.properties is refreshed from whatever was read.
        """
        values: dict[str, Any] = {}
        failures: dict[str, Exception] = {}
        for name in DAEMON_PROPERTIES:
            try:
                body = await self._call(
                    Properties(self._daemon).get(name), expected_signature="v"
                )
                values[name] = self._check_property(name, unwrap_variant(body[0]))
            except WpaProtocolError as e:
                self.logger.warning(f"Unable to read daemon property {name}: {e}")
                failures[name] = e

        merged = self.properties.model_dump()
        merged.update(values)
        merged["supported_eap_methods"] = self.registry.intersect(
            merged.get("EapMethods") or []
        )
        self.properties = DaemonProperties(**merged)
        self.logger.debug(f"Daemon properties: {self.properties}")
        return failures

    @staticmethod
    def _check_property(name: str, value: Any) -> Any:
        """Validates one daemon property against its DaemonProperties field."""
        try:
            checked = DaemonProperties.model_validate({name: value})
        except ValidationError as e:
            raise WpaProtocolError(
                f"{name} has unexpected value {value!r}: {e.errors()[0]['msg']}"
            ) from e
        return getattr(checked, name)

    def state_changes(
        self, object_path: str
    ) -> AsyncIterator[Messages.WpaSupplicantStateChanged]:
        """
        Yields state changes of one interface in the order the daemon sent
        them, ending once the interface is removed. Use one consumer per
        interface; `ee` is there for fan-out.
        """
        record = self._interfaces.get(object_path)
        if record is None:
            raise InterfaceNotFoundError(f"No interface created at {object_path}")
        return self._drain(record.events)

    @staticmethod
    async def _drain(queue: asyncio.Queue):
        while True:
            event = await queue.get()
            if event is None:
                return
            yield event
