"""
Shared pytest fixtures for keylight-toggle tests
"""

import pytest
from unittest.mock import Mock

import requests

from keylight_toggle.models import DeviceState


class FakeEventSource:
    """In-memory stand-in for a zeroconf browse session"""

    def __init__(self, events):
        self.events = list(events)
        self.opened = False
        self.closed = False
        self.consumed = 0

    def __enter__(self):
        self.opened = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def __iter__(self):
        for event in self.events:
            self.consumed += 1
            yield event


@pytest.fixture
def wire_state():
    """Sample GET /elgato/lights body"""
    return {
        "numberOfLights": 1,
        "lights": [
            {"on": 1, "brightness": 50, "temperature": 200}
        ]
    }


@pytest.fixture
def multi_light_wire_state():
    """Sample body of a device with two lights"""
    return {
        "numberOfLights": 2,
        "lights": [
            {"on": 0, "brightness": 10, "temperature": 143},
            {"on": 1, "brightness": 90, "temperature": 344}
        ]
    }


@pytest.fixture
def device_state(wire_state):
    return DeviceState.from_wire(wire_state)


@pytest.fixture
def make_response():
    """Factory for mocked requests responses"""
    def _make(payload=None, status_code=200):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = payload
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Error"
            )
        else:
            response.raise_for_status.return_value = None
        return response
    return _make


@pytest.fixture
def mock_session():
    """Mocked requests.Session"""
    return Mock(spec=requests.Session)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove keylight variables from the environment"""
    for name in ("LOG_LEVEL", "KEYLIGHT_SERVICE_TYPE", "KEYLIGHT_PORT",
                 "KEYLIGHT_HTTP_TIMEOUT", "KEYLIGHT_ROUND_INTERVAL",
                 "KEYLIGHT_DISCOVERY_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def event_source():
    """Factory building a FakeEventSource from a list of events"""
    return FakeEventSource
