import logging
import threading
from typing import Iterable, Optional

from .domain import EapMethodDescriptor


class EapRegistry:
    """
    Table of the EAP methods this process knows how to build, keyed by the
    protocol name wpa_supplicant advertises in its EapMethods property.

    Registries are constructed explicitly and handed to whoever negotiates
    capabilities; use default_registry() for one holding the built-in methods.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._providers: dict[str, EapMethodDescriptor] = {}

    def register(self, name: str, descriptor: EapMethodDescriptor) -> None:
        with self._lock:
            if name in self._providers:
                self.logger.debug(f"Replacing EAP provider for {name}")
            self._providers[name] = descriptor

    def lookup(self, name: str) -> Optional[EapMethodDescriptor]:
        with self._lock:
            return self._providers.get(name)

    def intersect(self, names: Iterable[str]) -> list[str]:
        """
        Filters a list of method names down to the ones registered here.
        @param names: Names as advertised by the daemon
        @return: The registered names, in the order they were given
        """
        with self._lock:
            return [name for name in names if name in self._providers]

    def names(self) -> list[str]:
        with self._lock:
            return list(self._providers)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)


def default_registry() -> EapRegistry:
    # Imported here so each method module can import the registry type.
    from . import md5, peap, tls, ttls

    registry = EapRegistry()
    for module in (tls, peap, ttls, md5):
        module.register(registry)
    return registry
