"""
HTTP client for the Elgato lights API

Reads are strict: any failure aborts the run. Writes are best effort:
the response is never inspected and send errors are only logged.
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_PORT
from .exceptions import DeviceReadError
from .models import DeviceState

logger = logging.getLogger(__name__)


def device_url(address: str, port: int = DEFAULT_PORT) -> str:
    """Build the lights endpoint URL for a device"""
    return f"http://{address}:{port}/elgato/lights"


class DeviceStateClient:
    """Reads and writes the full light state of Elgato devices"""

    def __init__(self, port: int = DEFAULT_PORT, timeout: float = DEFAULT_HTTP_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.port = port
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self) -> "DeviceStateClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def read_state(self, address: str) -> DeviceState:
        """
        Fetch the current state of a device

        Args:
            address: Device IPv4 address

        Returns:
            Decoded device state

        Raises:
            DeviceReadError: On network errors, non-2xx status or a malformed body
        """
        url = device_url(address, self.port)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            state = DeviceState.from_wire(response.json())
        except requests.exceptions.JSONDecodeError as e:
            # Subclass of RequestException, must be caught first
            raise DeviceReadError(address, url, f"invalid JSON: {e}") from e
        except requests.exceptions.RequestException as e:
            raise DeviceReadError(address, url, str(e)) from e
        except ValidationError as e:
            raise DeviceReadError(address, url, f"unexpected response body: {e}") from e

        logger.debug(f"State of {address}: {state!r}")
        return state

    def write_state(self, address: str, state: DeviceState) -> bool:
        """
        Send a full state to a device, best effort

        Args:
            address: Device IPv4 address
            state: Complete state to write

        Returns:
            True if the request was sent, False if sending failed
        """
        url = device_url(address, self.port)
        try:
            self.session.put(url, json=state.to_wire(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Failed to write light state to {address}: {e}")
            return False
        return True
