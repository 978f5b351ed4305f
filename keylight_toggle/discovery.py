"""
mDNS discovery of Elgato lights
Browses for the _elg._tcp service with zeroconf and returns resolved addresses
"""

import time
import queue
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from zeroconf import IPVersion, ServiceBrowser, ServiceStateChange, Zeroconf

from .config import DEFAULT_ROUND_INTERVAL, SERVICE_TYPE, Settings
from .exceptions import DiscoverySessionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceAnnounced:
    """A matching service exists but is not resolved yet"""
    name: str


@dataclass(frozen=True)
class ServiceResolved:
    """A service was resolved to one or more addresses"""
    name: str
    addresses: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SearchRoundComplete:
    """The browser finished one enumeration pass"""


class ZeroconfEventSource:
    """
    Event stream for one zeroconf browse session

    The zeroconf browser runs on its own thread; its callbacks are turned
    into discovery events and handed over through a queue. When no event
    arrives for ``round_interval`` seconds and no resolution is in flight
    the search round is considered complete.
    """

    def __init__(self, service_type: str = SERVICE_TYPE,
                 round_interval: float = DEFAULT_ROUND_INTERVAL,
                 resolve_timeout_ms: int = 3000):
        self.service_type = service_type
        self.round_interval = round_interval
        self.resolve_timeout_ms = resolve_timeout_ms
        self.zeroconf = None
        self.browser = None
        self._events = queue.Queue()
        self._pending = 0
        self._pending_lock = threading.Lock()

    def open(self):
        """Open the multicast socket and start browsing"""
        try:
            self.zeroconf = Zeroconf(ip_version=IPVersion.V4Only)
        except OSError as e:
            raise DiscoverySessionError(f"Failed to open mDNS session: {e}") from e

        try:
            self.browser = ServiceBrowser(
                self.zeroconf,
                self.service_type,
                handlers=[self._on_service_state_change]
            )
        except Exception as e:
            self.zeroconf.close()
            self.zeroconf = None
            raise DiscoverySessionError(
                f"Failed to browse for {self.service_type}: {e}"
            ) from e
        logger.debug(f"Browsing for {self.service_type}")

    def close(self):
        """Stop browsing and release the socket"""
        if self.browser:
            self.browser.cancel()
            self.browser = None
        if self.zeroconf:
            self.zeroconf.close()
            self.zeroconf = None

    def __enter__(self) -> "ZeroconfEventSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _on_service_state_change(self, zeroconf: Zeroconf, service_type: str,
                                 name: str, state_change: ServiceStateChange):
        """Handle browser callbacks (called on the zeroconf thread)"""
        if state_change is not ServiceStateChange.Added:
            return

        # Counted before the announcement so a round never ends mid-resolution
        with self._pending_lock:
            self._pending += 1
        try:
            self._events.put(ServiceAnnounced(name))

            info = zeroconf.get_service_info(service_type, name, timeout=self.resolve_timeout_ms)
            if info is None:
                logger.debug(f"Could not resolve {name}")
                return

            addresses = tuple(info.parsed_addresses(IPVersion.V4Only))
            self._events.put(ServiceResolved(name, addresses))
        finally:
            with self._pending_lock:
                self._pending -= 1

    @property
    def pending_resolutions(self) -> int:
        with self._pending_lock:
            return self._pending

    def __iter__(self):
        while True:
            try:
                event = self._events.get(timeout=self.round_interval)
            except queue.Empty:
                if self.pending_resolutions:
                    continue
                event = SearchRoundComplete()
            yield event


def collect_addresses(events: Iterable[object], timeout: Optional[float] = None,
                      clock: Callable[[], float] = time.monotonic) -> List[str]:
    """
    Consume discovery events until the search is over

    Stops on a round-complete event seen after at least one announcement.
    A round-complete that arrives before anything was announced does not
    end the search. Without a timeout this can wait forever.

    Args:
        events: Iterable of discovery events
        timeout: Optional bound in seconds; addresses found so far are returned
        clock: Monotonic clock used for the timeout

    Returns:
        Resolved IPv4 addresses in resolution order, without duplicates
    """
    addresses = []
    announced = False
    deadline = clock() + timeout if timeout is not None else None

    for event in events:
        if isinstance(event, ServiceAnnounced):
            announced = True
        elif isinstance(event, ServiceResolved):
            # Resolver order is arbitrary but stable for one resolution
            address = event.addresses[0] if event.addresses else None
            if address is None:
                logger.debug(f"{event.name} resolved without an IPv4 address")
            elif address in addresses:
                logger.debug(f"{event.name} at {address} already discovered")
            else:
                logger.info(f"Found Elgato light {event.name} at {address}")
                addresses.append(address)
        elif isinstance(event, SearchRoundComplete):
            if announced:
                break
        else:
            logger.debug(f"Ignoring discovery event {event!r}")

        if deadline is not None and clock() >= deadline:
            logger.warning(f"Discovery timed out after {timeout}s with {len(addresses)} device(s)")
            break

    return addresses


class KeylightDiscovery:
    """Finds Elgato lights on the local network"""

    def __init__(self, source_factory: Optional[Callable[[str], ZeroconfEventSource]] = None,
                 round_interval: float = DEFAULT_ROUND_INTERVAL,
                 timeout: Optional[float] = None):
        """
        Initialize discovery

        Args:
            source_factory: Callable returning a context-managed event source
                for a service type (zeroconf by default)
            round_interval: Quiet period treated as a finished search round
            timeout: Optional overall bound in seconds, unbounded if None
        """
        self.source_factory = source_factory or self._zeroconf_source
        self.round_interval = round_interval
        self.timeout = timeout

    def _zeroconf_source(self, service_type: str) -> ZeroconfEventSource:
        return ZeroconfEventSource(service_type, round_interval=self.round_interval)

    def discover(self, service_type: str = SERVICE_TYPE) -> List[str]:
        """
        Browse for a service type and return resolved addresses

        Raises:
            DiscoverySessionError: If the discovery session cannot be opened
        """
        logger.info(f"Searching for {service_type} services...")
        with self.source_factory(service_type) as events:
            addresses = collect_addresses(events, timeout=self.timeout)
        logger.info(f"Discovery finished, {len(addresses)} device(s) found")
        return addresses


def discover_devices(service_type: Optional[str] = None,
                     settings: Optional[Settings] = None) -> List[str]:
    """Discover Elgato lights using runtime settings"""
    settings = settings or Settings()
    discovery = KeylightDiscovery(
        round_interval=settings.round_interval,
        timeout=settings.discovery_timeout
    )
    return discovery.discover(service_type or settings.service_type)
