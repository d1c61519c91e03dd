"""Keep cached zone membership and device zone labels consistent with positions."""

import datetime
from dataclasses import replace
from .records import Device, DeviceUpdate, Zone, ZoneDraft
from .zone_lookup import devices_in_zone, find_zone_for_device


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def sync_zone_device_ids(devices, zones, now: datetime.datetime | None = None) -> list[ZoneDraft]:
    """
    Recompute every zone's device_ids from current device positions.

    Each zone is evaluated on its own, so a device inside overlapping
    polygons is listed by all of them (unlike find_zone_for_device, which
    picks one). Unpositioned devices are listed by none.

    Returns the zones in input order. Zones whose membership is unchanged
    are returned as the same objects; changed zones are new records with
    `updated_at` set to `now`. ZoneDraft records stay drafts and have no
    timestamp to bump. Plain mappings come back as Zone records. Running it
    again without moving devices changes nothing.
    """
    devices = [Device.from_any(d) for d in devices]
    now = now or _utcnow()
    synced = []
    for zone in zones:
        if not isinstance(zone, ZoneDraft):
            zone = Zone.from_dict(zone)
        device_ids = tuple(d.id for d in devices_in_zone(zone, devices))
        if device_ids != zone.device_ids:
            if isinstance(zone, Zone):
                zone = zone.with_(device_ids=device_ids, updated_at=now)
            else:
                zone = replace(zone, device_ids=device_ids)
        synced.append(zone)
    return synced


def zone_label_updates(devices, zones) -> list[DeviceUpdate]:
    """
    Updates that bring each device's legacy zone label in line with geometry.

    The label is the name of the first zone containing the device, or None
    when no zone does. Devices whose label already matches, and devices
    without a position, are skipped.
    """
    zones = [Zone.from_any(z) for z in zones]
    updates = []
    for device in (Device.from_any(d) for d in devices):
        if not device.is_positioned:
            continue
        match = find_zone_for_device(device, zones)
        name = match.name if match is not None else None
        if device.zone != name:
            updates.append(DeviceUpdate(device.id, {"zone": name}))
    return updates
