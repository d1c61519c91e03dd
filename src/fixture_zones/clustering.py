"""Automatic zone detection by spatial clustering of positioned devices."""

import warnings
from collections import Counter
from dataclasses import dataclass, field
import numpy as np
from .config import (
    DEFAULT_CLUSTER_RADIUS,
    DEFAULT_LABEL,
    MAX_ZONES,
    ZONE_COLORS,
    ZONE_PADDING,
)
from .geometry import Bounds
from .records import Device, ZoneDraft


@dataclass
class DeviceCluster:
    """Devices grouped during a single detection pass, never persisted."""

    devices: list[Device] = field(default_factory=list)
    bounds: Bounds | None = None

    @classmethod
    def from_devices(cls, devices) -> "DeviceCluster":
        cluster = cls(devices=list(devices))
        cluster.recompute_bounds()
        return cluster

    def recompute_bounds(self):
        self.bounds = Bounds.from_points((d.x, d.y) for d in self.devices)

    @property
    def min_x(self) -> float:
        return self.bounds.min_x

    @property
    def max_x(self) -> float:
        return self.bounds.max_x

    @property
    def min_y(self) -> float:
        return self.bounds.min_y

    @property
    def max_y(self) -> float:
        return self.bounds.max_y

    @property
    def center(self) -> tuple[float, float]:
        return self.bounds.center

    def __len__(self):
        return len(self.devices)


def spatial_clustering(devices, radius: float = DEFAULT_CLUSTER_RADIUS) -> list[DeviceCluster]:
    """
    Seed-based proximity clustering.

    Devices are visited in input order. Each unclaimed device seeds a new
    cluster and claims every other unclaimed device strictly closer than
    `radius` to the seed. Membership therefore depends on input order, and
    the same order always gives the same clusters. Unpositioned devices
    are skipped.
    """
    positioned = [d for d in devices if d.is_positioned]
    if not positioned:
        return []

    xy = np.array([(d.x, d.y) for d in positioned], dtype=float)
    claimed = np.zeros(len(positioned), dtype=bool)
    clusters = []
    for seed in range(len(positioned)):
        if claimed[seed]:
            continue
        claimed[seed] = True
        dist = np.hypot(xy[:, 0] - xy[seed, 0], xy[:, 1] - xy[seed, 1])
        members = np.flatnonzero(~claimed & (dist < radius))
        claimed[members] = True
        group = [positioned[seed]] + [positioned[i] for i in members]
        clusters.append(DeviceCluster.from_devices(group))
    return clusters


def cap_clusters(clusters: list[DeviceCluster], max_zones: int = MAX_ZONES) -> list[DeviceCluster]:
    """
    Limit the cluster count to `max_zones`.

    Clusters are ranked by size (largest first, stable for equal sizes). The
    top `max_zones` are kept and overflow cluster i is merged whole into kept
    cluster i % max_zones, after which every kept cluster's bounds are
    recomputed.
    """
    if max_zones < 1:
        raise ValueError(f"max_zones must be at least 1, got {max_zones}")
    if len(clusters) <= max_zones:
        return list(clusters)

    ranked = sorted(clusters, key=len, reverse=True)
    keep, overflow = ranked[:max_zones], ranked[max_zones:]
    for i, cluster in enumerate(overflow):
        keep[i % max_zones].devices.extend(cluster.devices)
    for cluster in keep:
        cluster.recompute_bounds()

    msg = f"Found {len(clusters)} device clusters; merged into {max_zones} zones"
    warnings.warn(msg, stacklevel=3)
    return keep


def location_label(location: str | None, default: str = DEFAULT_LABEL) -> str | None:
    """Department part of a free-text location ("Grocery - Aisle 4" -> "Grocery")."""
    if not location:
        return None
    parts = location.split(" - ")
    first = parts[0] or (parts[1] if len(parts) > 1 else "")
    return first or default


def most_common_label(labels, default: str = DEFAULT_LABEL) -> str:
    """Most frequent label; ties go to the label seen first."""
    counts = Counter(labels)
    if not counts:
        return default
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0]


def cluster_label(cluster: DeviceCluster, default: str = DEFAULT_LABEL) -> str:
    labels = (location_label(d.location, default) for d in cluster.devices)
    return most_common_label([lbl for lbl in labels if lbl], default)


def detect_zones_from_devices(
    devices,
    radius: float = DEFAULT_CLUSTER_RADIUS,
    max_zones: int = MAX_ZONES,
    padding: float = ZONE_PADDING,
    palette=ZONE_COLORS,
    default_label: str = DEFAULT_LABEL,
) -> list[ZoneDraft]:
    """
    Group positioned devices into at most `max_zones` zone drafts.

    Each draft's polygon is the members' bounding rectangle grown by
    `padding` and clamped to the unit square, as a closed 5-point ring.
    Drafts are named "Zone {n} - {label}" after the most common location
    label among members and take palette colors by index. The zone store
    assigns ids and timestamps.

    Returns an empty list when no device has a position.
    """
    devices = [Device.from_any(d) for d in devices]
    clusters = spatial_clustering(devices, radius=radius)
    clusters = cap_clusters(clusters, max_zones=max_zones)

    drafts = []
    for index, cluster in enumerate(clusters):
        label = cluster_label(cluster, default_label)
        polygon = cluster.bounds.expand(padding).clamp(0.0, 1.0).to_polygon(closed=True)
        drafts.append(
            ZoneDraft(
                name=f"Zone {index + 1} - {label}",
                color=palette[index % len(palette)],
                description=f"{len(cluster)} devices in {label}",
                polygon=polygon,
                device_ids=tuple(d.id for d in cluster.devices),
            )
        )
    return drafts
