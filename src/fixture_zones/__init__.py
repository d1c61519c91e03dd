from .geometry import Polygon2D, Bounds, point_in_polygon
from .device_type import DeviceType, is_fixture_type
from .records import Device, DeviceUpdate, Zone, ZoneDraft
from .config import EngineConfig, ZONE_COLORS, MAX_ZONES, DEFAULT_CLUSTER_RADIUS
from .zone_lookup import find_zone_for_device, devices_in_zone
from .clustering import DeviceCluster, spatial_clustering, detect_zones_from_devices
from .arrangement import (
    arrange_devices_in_zone,
    calculate_alignment_updates,
    orientation_bucket,
    rotate_fixture,
)
from .sync import sync_zone_device_ids, zone_label_updates
from .registry import DeviceRegistry, ZoneRegistry
from .facility import Facility
from .reporting import zone_summary_rows, zone_summary_frame, rows_to_bytes
from ._version import __version__

__all__ = [
    "Polygon2D",
    "Bounds",
    "point_in_polygon",
    "DeviceType",
    "is_fixture_type",
    "Device",
    "DeviceUpdate",
    "Zone",
    "ZoneDraft",
    "EngineConfig",
    "ZONE_COLORS",
    "MAX_ZONES",
    "DEFAULT_CLUSTER_RADIUS",
    "find_zone_for_device",
    "devices_in_zone",
    "DeviceCluster",
    "spatial_clustering",
    "detect_zones_from_devices",
    "arrange_devices_in_zone",
    "calculate_alignment_updates",
    "orientation_bucket",
    "rotate_fixture",
    "sync_zone_device_ids",
    "zone_label_updates",
    "DeviceRegistry",
    "ZoneRegistry",
    "Facility",
    "zone_summary_rows",
    "zone_summary_frame",
    "rows_to_bytes",
]

__version__ = __version__
