"""Device to zone lookup by point-in-polygon membership."""

from .geometry import Polygon2D
from .records import Device, ZoneDraft


def _polygon_of(zone) -> Polygon2D:
    polygon = zone.polygon if isinstance(zone, ZoneDraft) else zone.get("polygon")
    return Polygon2D.from_any(polygon)


def find_zone_for_device(device, zones):
    """
    Return the first zone whose polygon contains the device, or None.

    Zones are scanned in the order given and the first match wins, so a
    device inside several overlapping zones resolves to whichever comes first.
    Callers that reorder zones change the answer for such devices. Devices
    without a position never match.

    `zones` may hold Zone or ZoneDraft records or plain mappings with a
    "polygon" key; the matching element is returned as is.
    """
    device = Device.from_any(device)
    if not device.is_positioned:
        return None
    for zone in zones:
        if _polygon_of(zone).contains_point(device.x, device.y):
            return zone
    return None


def devices_in_zone(zone, devices) -> list[Device]:
    """Positioned devices inside a single zone, in input order."""
    devices = [Device.from_any(d) for d in devices]
    positioned = [d for d in devices if d.is_positioned]
    if not positioned:
        return []
    points = [(d.x, d.y) for d in positioned]
    mask = _polygon_of(zone).contains_points(points)
    return [d for d, inside in zip(positioned, mask) if inside]
