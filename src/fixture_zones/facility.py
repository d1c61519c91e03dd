import datetime
from .arrangement import arrange_devices_in_zone, calculate_alignment_updates, rotate_fixture
from .clustering import detect_zones_from_devices
from .config import EngineConfig
from .device_type import is_fixture_type
from .registry import DeviceRegistry, ZoneRegistry
from .reporting import zone_summary_frame
from .sync import sync_zone_device_ids, zone_label_updates
from .zone_lookup import find_zone_for_device


class Facility:
    """
    Devices and zones of one site, with the zone workflows run against them.

    Every workflow reads a snapshot of the stores, computes a full batch of
    updates, and applies the batch in one step. Zone membership is re-synced
    after anything that moves devices.
    """

    def __init__(
        self,
        devices=None,
        zones=None,
        config: EngineConfig | None = None,
        is_fixture=is_fixture_type,
        on_collision: str = "increment",  # error | increment | overwrite
    ):
        self.config = config or EngineConfig()
        self.is_fixture = is_fixture
        self.devices = DeviceRegistry(on_collision=on_collision)
        self.zones = ZoneRegistry(on_collision=on_collision)
        for device in devices or []:
            self.devices.add(device)
        for zone in zones or []:
            self.zones.add(zone)

    def __repr__(self):
        return f"Facility(devices={len(self.devices)}, zones={len(self.zones)})"

    def add_device(self, device) -> str:
        return self.devices.add(device)

    def _devices(self, device_ids=None):
        if device_ids is None:
            return list(self.devices.values())
        return [self.devices.require(i) for i in device_ids]

    def _apply(self, updates):
        if updates:
            self.devices.apply_updates(updates)
        return updates

    def sync(self, now: datetime.datetime | None = None):
        """Refresh every zone's device_ids from current positions."""
        synced = sync_zone_device_ids(self.devices.values(), self.zones.values(), now=now)
        self.zones.replace_all(synced)
        return synced

    def relabel(self):
        """Point each device's legacy zone label at the first zone containing it."""
        return self._apply(zone_label_updates(self.devices.values(), self.zones.values()))

    def auto_detect_zones(self, now: datetime.datetime | None = None):
        """
        Replace every zone with zones clustered from current device
        positions, label the members, then sync.
        """
        cfg = self.config
        drafts = detect_zones_from_devices(
            self.devices.values(),
            radius=cfg.cluster_radius,
            max_zones=cfg.max_zones,
            padding=cfg.zone_padding,
            palette=cfg.palette,
            default_label=cfg.default_label,
        )
        self.zones.clear()
        created = [self.zones.create(draft, now=now) for draft in drafts]
        self.relabel()
        self.sync(now=now)
        return [self.zones[z.id] for z in created]

    def arrange(self, zone_id: str, device_ids=None, now: datetime.datetime | None = None):
        """Grid-arrange devices (default: the zone's current members) inside a zone."""
        zone = self.zones.require(zone_id)
        if device_ids is None:
            # cached members may name devices deleted since the last sync
            device_ids = [i for i in zone.device_ids if i in self.devices]
        updates = arrange_devices_in_zone(
            self._devices(device_ids), zone, padding=self.config.arrange_padding
        )
        self._apply(updates)
        if updates:
            self.sync(now=now)
        return updates

    def align(self, device_ids=None):
        """Turn the selected fixtures (default: all) to one shared orientation."""
        return self._apply(calculate_alignment_updates(self._devices(device_ids), self.is_fixture))

    def rotate(self, device_id: str):
        update = rotate_fixture(self.devices.require(device_id), self.is_fixture)
        return self._apply([update] if update is not None else [])

    def move_device(self, device_id: str, x: float, y: float, now: datetime.datetime | None = None):
        """Drag-end: move one device, fix its zone label and resync membership."""
        self.devices.require(device_id)
        self.devices.apply_updates([{"deviceId": device_id, "updates": {"x": x, "y": y}}])
        self._apply(zone_label_updates([self.devices[device_id]], self.zones.values()))
        self.sync(now=now)
        return self.devices[device_id]

    def zone_for(self, device_id: str):
        """First zone containing the device, in zone creation order."""
        return find_zone_for_device(self.devices.require(device_id), self.zones.values())

    def summary(self):
        return zone_summary_frame(self.zones.values(), self.devices.values(), self.is_fixture)
