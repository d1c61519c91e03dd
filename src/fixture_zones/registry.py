import datetime
from enum import Enum
from dataclasses import dataclass, field, replace
from collections.abc import MutableMapping, Iterator
from typing import Generic, TypeVar, Dict
from .records import Device, DeviceUpdate, Zone, ZoneDraft


class OnCollision(str, Enum):
    ERROR = "error"
    OVERWRITE = "overwrite"
    INCREMENT = "increment"


T = TypeVar("T")


@dataclass
class Registry(Generic[T], MutableMapping[str, T]):
    """A thin wrapper around dict[str, T] with consistent ID/collision behavior."""

    base_id = "item"
    expected_type: type | None = None
    on_collision: str = "increment"  # "error" | "overwrite" | "increment"
    _items: Dict[str, T] = field(default_factory=dict)

    # ---- MutableMapping protocol ----
    def __getitem__(self, key: str) -> T:
        return self._items[key]

    def __setitem__(self, key: str, value: T) -> None:
        self._items[key] = self._validate(value)

    def __delitem__(self, key: str) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def require(self, key: str):
        try:
            return self._items[key]
        except KeyError as e:
            raise KeyError(
                f"Unknown id: {key!r}. Available: {list(self._items.keys())}"
            ) from e

    def remove(self, key: str):
        try:
            return self._items.pop(key)
        except KeyError as e:
            raise KeyError(f"Cannot remove {key!r}; not found.") from e

    def clear(self) -> None:
        self._items.clear()

    def _unique_id(self, base: str) -> str:
        if base not in self._items:
            return base
        prefix = base + "-"
        max_suffix = 1  # 1 corresponds to plain `base` being present
        for key in self.keys():
            if key.startswith(prefix):
                rest = key[len(prefix) :]
                if rest.isdigit():
                    max_suffix = max(max_suffix, int(rest))
        return f"{base}-{max_suffix + 1}"

    def _validate(self, obj: T) -> T:
        if self.expected_type and not isinstance(obj, self.expected_type):
            raise TypeError(f"Must be {self.expected_type.__name__}, not {type(obj).__name__}")
        return obj

    def _resolve_key(self, key: str, on_collision=None) -> str:
        policy = OnCollision(on_collision or self.on_collision)
        if key in self._items:
            if policy is OnCollision.ERROR:
                raise KeyError(f"ID {key!r} already exists.")
            if policy is OnCollision.INCREMENT:
                key = self._unique_id(key)
            # OVERWRITE keeps key as-is
        return key


@dataclass
class DeviceRegistry(Registry[Device]):
    base_id = "device"
    expected_type: type | None = Device

    def add(self, device, on_collision=None) -> str:
        """Store a device under its own id (or a generated one). Returns the key."""
        device = self._validate(Device.from_any(device))
        key = self._resolve_key(device.id or self.base_id, on_collision)
        if key != device.id:
            device = replace(device, id=key)
        self._items[key] = device
        return key

    def apply_updates(self, updates) -> list[Device]:
        """
        Apply a batch of DeviceUpdate records all at once.

        Every target id and update key is checked before anything is written:
        a batch naming an unknown device raises KeyError and leaves the store
        untouched. Returns the updated devices in batch order.
        """
        updates = [u if isinstance(u, DeviceUpdate) else DeviceUpdate.from_dict(u) for u in updates]
        missing = [u.device_id for u in updates if u.device_id not in self._items]
        if missing:
            raise KeyError(f"Unknown device ids {missing}; no updates applied.")

        staged = dict(self._items)
        for u in updates:
            staged[u.device_id] = staged[u.device_id].with_updates(u.updates)
        self._items = staged
        return [staged[u.device_id] for u in updates]


@dataclass
class ZoneRegistry(Registry[Zone]):
    base_id = "zone"
    expected_type: type | None = Zone
    _counter: int = 0

    def _next_id(self) -> str:
        self._counter += 1
        key = f"{self.base_id}-{self._counter}"
        while key in self._items:
            self._counter += 1
            key = f"{self.base_id}-{self._counter}"
        return key

    def create(self, draft: ZoneDraft, now: datetime.datetime | None = None) -> Zone:
        """Persist a draft, assigning its id and creation timestamps."""
        now = now or datetime.datetime.now(datetime.timezone.utc)
        zone = Zone.from_draft(draft, zone_id=self._next_id(), now=now)
        self._items[zone.id] = zone
        return zone

    def add(self, zone, on_collision=None) -> str:
        """Store an existing zone record, keyed by its id."""
        zone = self._validate(Zone.from_any(zone))
        key = self._resolve_key(zone.id or self._next_id(), on_collision)
        if key != zone.id:
            zone = zone.with_(id=key)
        self._items[key] = zone
        return key

    def edit(self, zone_id: str, now: datetime.datetime | None = None, **changes) -> Zone:
        """Edit zone fields, bumping updated_at."""
        zone = self.require(zone_id)
        now = now or datetime.datetime.now(datetime.timezone.utc)
        zone = zone.with_(**changes, updated_at=now)
        self._items[zone_id] = zone
        return zone

    def replace_all(self, zones) -> None:
        """Swap in new versions of stored zones, e.g. after a membership sync."""
        zones = [self._validate(z) for z in zones]
        unknown = [z.id for z in zones if z.id not in self._items]
        if unknown:
            raise KeyError(f"Unknown zone ids {unknown}; no zones replaced.")
        for zone in zones:
            self._items[zone.id] = zone


__all__ = [
    "OnCollision",
    "Registry",
    "DeviceRegistry",
    "ZoneRegistry",
]
