"""
keylight-toggle

Discover Elgato lights over mDNS and toggle their power over HTTP.
"""

from .device_client import DeviceStateClient, device_url
from .discovery import (
    KeylightDiscovery,
    SearchRoundComplete,
    ServiceAnnounced,
    ServiceResolved,
    ZeroconfEventSource,
    discover_devices,
)
from .exceptions import (
    DeviceReadError,
    DiscoverySessionError,
    EmptyLightsError,
    KeylightError,
)
from .models import DeviceState, LightSettings, Power
from .orchestrator import ToggleResult, run
from .transform import toggle, toggle_power

__version__ = "0.1.0"

__all__ = [
    "DeviceState",
    "DeviceStateClient",
    "DeviceReadError",
    "DiscoverySessionError",
    "EmptyLightsError",
    "KeylightDiscovery",
    "KeylightError",
    "LightSettings",
    "Power",
    "SearchRoundComplete",
    "ServiceAnnounced",
    "ServiceResolved",
    "ToggleResult",
    "ZeroconfEventSource",
    "device_url",
    "discover_devices",
    "run",
    "toggle",
    "toggle_power",
]
