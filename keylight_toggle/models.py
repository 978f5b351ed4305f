"""
Wire models for the Elgato lights HTTP API

The device expects the complete object on every PUT, so unknown fields
returned by a GET are kept and sent back untouched.
"""

from enum import IntEnum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Power(IntEnum):
    """Power state, encoded on the wire as 0/1"""
    OFF = 0
    ON = 1


class LightSettings(BaseModel):
    """State of a single light"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    power: Power = Field(..., alias="on")
    brightness: int
    color_temperature: int = Field(..., alias="temperature")


class DeviceState(BaseModel):
    """Full state object of one device"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    light_count: int = Field(..., alias="numberOfLights")
    lights: List[LightSettings]

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "DeviceState":
        """
        Build a device state from a decoded JSON body

        Args:
            payload: Decoded JSON object as returned by GET /elgato/lights

        Returns:
            Parsed device state

        Raises:
            pydantic.ValidationError: If the payload does not match the API shape
        """
        return cls.model_validate(payload)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the JSON object expected by PUT /elgato/lights"""
        return self.model_dump(mode="json", by_alias=True)
