"""Plain records exchanged with the device and zone stores."""

import datetime
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from .geometry import Polygon2D

UPDATE_KEYS = ("x", "y", "zone", "orientation")


def _parse_time(value):
    if value is None or isinstance(value, datetime.datetime):
        return value
    return datetime.datetime.fromisoformat(str(value))


def _format_time(value):
    return None if value is None else value.isoformat()


@dataclass(frozen=True, slots=True)
class Device:
    """
    Position-relevant view of a device.

    A device with either coordinate missing is unpositioned and takes no part
    in any geometric operation.

    Attributes:
        id: store identifier
        type: device type token, see DeviceType
        x, y: normalized map position, fractions of the map extent
        orientation: rotation in degrees
        location: free-text location such as "Grocery - Aisle 4"
        zone: legacy free-text zone label maintained alongside zone membership
    """

    id: str
    type: str = ""
    x: float | None = None
    y: float | None = None
    orientation: float | None = None
    location: str | None = None
    zone: str | None = None

    @property
    def is_positioned(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def position(self) -> tuple[float, float] | None:
        return (self.x, self.y) if self.is_positioned else None

    def with_updates(self, updates: Mapping) -> "Device":
        return replace(self, **dict(updates))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": str(self.type),
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation,
            "location": self.location,
            "zone": self.zone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Device":
        keys = ("type", "x", "y", "orientation", "location", "zone")
        return cls(id=data.get("id", ""), **{k: data[k] for k in keys if k in data})

    @classmethod
    def from_any(cls, arg) -> "Device":
        return arg if isinstance(arg, cls) else cls.from_dict(arg)


@dataclass(frozen=True, slots=True)
class DeviceUpdate:
    """A batched change to one device, applied by the device store."""

    device_id: str
    updates: Mapping = field(default_factory=dict)

    def __post_init__(self):
        bad = [k for k in self.updates if k not in UPDATE_KEYS]
        if bad:
            raise ValueError(f"Invalid update keys {bad}. Valid keys are {list(UPDATE_KEYS)}")
        object.__setattr__(self, "updates", MappingProxyType(dict(self.updates)))

    def to_dict(self) -> dict:
        return {"deviceId": self.device_id, "updates": dict(self.updates)}

    @classmethod
    def from_dict(cls, data: dict) -> "DeviceUpdate":
        return cls(device_id=data["deviceId"], updates=data.get("updates", {}))


@dataclass(frozen=True)
class ZoneDraft:
    """A zone not yet given an id or timestamps by the zone store."""

    name: str
    color: str
    polygon: Polygon2D = field(default_factory=Polygon2D)
    device_ids: tuple[str, ...] = ()
    description: str | None = None

    def __post_init__(self):
        self._coerce_fields()
        if not self.polygon.is_empty and not self.polygon.is_valid:
            msg = (
                f"Zone {self.name!r} has a polygon with {self.polygon.n_vertices} "
                "vertices and cannot contain any point"
            )
            warnings.warn(msg, stacklevel=3)

    def _coerce_fields(self):
        object.__setattr__(self, "polygon", Polygon2D.from_any(self.polygon))
        object.__setattr__(self, "device_ids", tuple(self.device_ids))

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "deviceIds": list(self.device_ids),
        }
        data.update(self.polygon.to_dict())
        return data


@dataclass(frozen=True)
class Zone(ZoneDraft):
    """
    A persisted zone.

    `device_ids` is a cache of the devices whose position lies inside
    `polygon`; point-in-polygon against the current device positions is
    always authoritative, see fixture_zones.sync.
    """

    id: str = ""
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    def _coerce_fields(self):
        super()._coerce_fields()
        object.__setattr__(self, "created_at", _parse_time(self.created_at))
        object.__setattr__(self, "updated_at", _parse_time(self.updated_at))

    @classmethod
    def from_draft(cls, draft: ZoneDraft, zone_id: str, now: datetime.datetime) -> "Zone":
        return cls(
            name=draft.name,
            color=draft.color,
            polygon=draft.polygon,
            device_ids=draft.device_ids,
            description=draft.description,
            id=zone_id,
            created_at=now,
            updated_at=now,
        )

    def with_(self, **changes) -> "Zone":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = {"id": self.id}
        data.update(super().to_dict())
        data["createdAt"] = _format_time(self.created_at)
        data["updatedAt"] = _format_time(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Zone":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            color=data.get("color", ""),
            description=data.get("description"),
            polygon=Polygon2D.from_any(data.get("polygon")),
            device_ids=data.get("deviceIds", ()),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    @classmethod
    def from_any(cls, arg) -> "Zone":
        """Accept a Zone, a ZoneDraft (no id or timestamps yet) or a store dict."""
        if isinstance(arg, cls):
            return arg
        if isinstance(arg, ZoneDraft):
            return cls(**{f.name: getattr(arg, f.name) for f in fields(ZoneDraft)})
        return cls.from_dict(arg)
