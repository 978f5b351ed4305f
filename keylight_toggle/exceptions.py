"""
Exception hierarchy for keylight-toggle
"""

from typing import Optional


class KeylightError(Exception):
    """Base class for all keylight-toggle errors"""


class DiscoverySessionError(KeylightError):
    """Raised when the mDNS discovery session cannot be opened"""


class DeviceReadError(KeylightError):
    """Raised when the state of a device cannot be fetched or decoded"""

    def __init__(self, address: str, url: Optional[str] = None, reason: str = ""):
        self.address = address
        self.url = url
        self.reason = reason
        message = f"Failed to read light state from {address}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EmptyLightsError(KeylightError, IndexError):
    """Raised when a device state has no lights to toggle"""
