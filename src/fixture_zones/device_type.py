"""Device type tokens and the default fixture classifier."""

from enum import StrEnum


class DeviceType(StrEnum):
    """Display tokens of the device types the site map knows about."""

    FIXTURE_16FT_POWER_ENTRY = "fixture-16ft-power-entry"
    FIXTURE_12FT_POWER_ENTRY = "fixture-12ft-power-entry"
    FIXTURE_8FT_POWER_ENTRY = "fixture-8ft-power-entry"
    FIXTURE_16FT_FOLLOWER = "fixture-16ft-follower"
    FIXTURE_12FT_FOLLOWER = "fixture-12ft-follower"
    FIXTURE_8FT_FOLLOWER = "fixture-8ft-follower"
    MOTION_SENSOR = "motion"
    LIGHT_SENSOR = "light-sensor"

    @property
    def is_fixture(self) -> bool:
        return is_fixture_type(self)


def is_fixture_type(device_type) -> bool:
    """
    True for lighting fixture types.

    Accepts store tokens (FIXTURE_*), display tokens (fixture-*) and the bare
    legacy "fixture" label. Unknown strings are classified by prefix, so new
    fixture variants need no registration here.
    """
    if not isinstance(device_type, str):
        return False
    return (
        device_type.startswith("FIXTURE_")
        or device_type.startswith("fixture-")
        or device_type.lower() == "fixture"
    )
