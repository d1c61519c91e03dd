"""Grid layout and orientation alignment for devices inside a zone."""

from math import ceil, sqrt
from .config import ARRANGE_PADDING
from .device_type import is_fixture_type
from .geometry import Bounds
from .records import Device, DeviceUpdate, Zone

HORIZONTAL = 0
VERTICAL = 90


def grid_shape(n: int) -> tuple[int, int]:
    """(cols, rows) of the near-square grid holding n items."""
    if n <= 0:
        return (0, 0)
    cols = ceil(sqrt(n))
    rows = ceil(n / cols)
    return (cols, rows)


def grid_positions(n: int, bounds: Bounds) -> list[tuple[float, float]]:
    """
    Positions of n grid cells spread evenly inside `bounds`.

    Cells sit one spacing step in from every edge, so nothing lands on the
    boundary itself. Row-major order, starting at (min_x, min_y).
    """
    cols, rows = grid_shape(n)
    if n == 0:
        return []
    spacing_x = bounds.width / (cols + 1)
    spacing_y = bounds.height / (rows + 1)
    positions = []
    for idx in range(n):
        col = idx % cols
        row = idx // cols
        x = bounds.min_x + spacing_x * (col + 1)
        y = bounds.min_y + spacing_y * (row + 1)
        positions.append(bounds.clamp_point(x, y))
    return positions


def arrange_devices_in_zone(devices, zone, padding: float = ARRANGE_PADDING) -> list[DeviceUpdate]:
    """
    Lay devices out on a grid inside a zone's bounding box.

    The zone's bounding box is shrunk by `padding` on every side and the
    devices are placed on a ceil(sqrt(n))-column grid inside it, in input
    order. Each update carries the new x, y and the zone's name as the
    device's zone label. Callers should apply the whole list together since
    every position is computed against the same bounds.

    Returns an empty list when the zone has no polygon or when the padded
    area has no positive width or height.
    """
    zone = Zone.from_any(zone)
    bounds = Bounds.from_polygon(zone.polygon)
    if bounds is None:
        return []
    placement = bounds.shrink(padding)
    if placement.is_degenerate:
        return []

    devices = [Device.from_any(d) for d in devices]
    positions = grid_positions(len(devices), placement)
    return [
        DeviceUpdate(device.id, {"x": x, "y": y, "zone": zone.name})
        for device, (x, y) in zip(devices, positions)
    ]


def orientation_bucket(orientation: float | None) -> int:
    """Snap an orientation to HORIZONTAL (within 45 degrees of 0) or VERTICAL."""
    normalized = (orientation or 0) % 360
    if normalized <= 45 or normalized >= 315:
        return HORIZONTAL
    return VERTICAL


def calculate_alignment_updates(devices, is_fixture=is_fixture_type) -> list[DeviceUpdate]:
    """
    Flip every fixture to one shared orientation.

    Fixtures vote HORIZONTAL or VERTICAL by their current orientation. When
    horizontal fixtures are at least as many as vertical ones, all turn
    VERTICAL; otherwise all turn HORIZONTAL. Every fixture gets an update,
    including those already at the target. Devices that `is_fixture`
    rejects are left out.
    """
    fixtures = [d for d in (Device.from_any(d) for d in devices) if is_fixture(d.type)]
    if not fixtures:
        return []

    buckets = [orientation_bucket(d.orientation) for d in fixtures]
    horizontal = buckets.count(HORIZONTAL)
    vertical = buckets.count(VERTICAL)
    target = VERTICAL if horizontal >= vertical else HORIZONTAL

    return [DeviceUpdate(d.id, {"orientation": target}) for d in fixtures]


def rotate_fixture(device, is_fixture=is_fixture_type, step: float = 90) -> DeviceUpdate | None:
    """Quarter-turn a single fixture; None for devices that are not fixtures."""
    device = Device.from_any(device)
    if not is_fixture(device.type):
        return None
    return DeviceUpdate(device.id, {"orientation": ((device.orientation or 0) + step) % 360})
