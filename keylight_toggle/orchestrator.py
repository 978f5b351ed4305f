"""
Discovery to write-back pipeline
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .device_client import DeviceStateClient
from .models import DeviceState
from .transform import toggle

logger = logging.getLogger(__name__)


@dataclass
class ToggleResult:
    """Outcome for one device"""
    address: str
    state: DeviceState
    written: bool


def run(service_type: str, discover: Callable[[str], List[str]],
        client: DeviceStateClient) -> List[ToggleResult]:
    """
    Toggle every discovered light

    Devices are handled one after another: all reads, then all toggles,
    then all writes. Each state stays paired with the address it was read
    from. A failed read aborts the whole run; a failed write only affects
    that device.

    Args:
        service_type: mDNS service type to browse for
        discover: Callable returning resolved addresses for a service type
        client: Client used to read and write device state

    Returns:
        One result per device, in discovery order
    """
    addresses = discover(service_type)
    if not addresses:
        logger.info("No devices found, nothing to do")
        return []

    devices: List[Tuple[str, DeviceState]] = []
    for address in addresses:
        state = client.read_state(address)
        logger.debug(f"Current state of {address}: {state.to_wire()}")
        devices.append((address, state))

    toggled = [(address, toggle(state)) for address, state in devices]
    for address, state in toggled:
        logger.info(f"Lights at {address} toggled: {state.lights[0].power.name}")

    results = []
    for address, state in toggled:
        written = client.write_state(address, state)
        results.append(ToggleResult(address=address, state=state, written=written))

    return results
