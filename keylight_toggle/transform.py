"""
State transforms applied between read and write
"""

from .exceptions import EmptyLightsError
from .models import DeviceState, Power


def toggle_power(power: Power) -> Power:
    return Power.OFF if power == Power.ON else Power.ON


def toggle(state: DeviceState) -> DeviceState:
    """
    Flip the power of the first light

    Only light 0 is touched; brightness, temperature and any other lights
    are carried over as they are. The input state is not modified.

    Args:
        state: Device state as read from the device

    Returns:
        New state with light 0 powered the other way

    Raises:
        EmptyLightsError: If the state has no lights
    """
    if not state.lights:
        raise EmptyLightsError("Device state has no lights to toggle")

    toggled = state.model_copy(deep=True)
    first = toggled.lights[0]
    first.power = toggle_power(first.power)
    return toggled
