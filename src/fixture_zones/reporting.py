"""Tabular zone summaries for export."""

import csv
import io
import pandas as pd
from .device_type import is_fixture_type
from .geometry import Bounds
from .records import Device, Zone

SUMMARY_COLUMNS = [
    "Zone ID",
    "Name",
    "Color",
    "Devices",
    "Fixtures",
    "Min X",
    "Min Y",
    "Max X",
    "Max Y",
]


def _zone_row(zone, device_map, is_fixture, precision):
    members = [device_map[i] for i in zone.device_ids if i in device_map]
    fixtures = sum(1 for d in members if is_fixture(d.type))
    bounds = Bounds.from_polygon(zone.polygon)
    if bounds is None:
        extent = [None] * 4
    else:
        extent = [
            round(v, precision) for v in (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y)
        ]
    return [zone.id, zone.name, zone.color, len(zone.device_ids), fixtures, *extent]


def zone_summary_rows(zones, devices, is_fixture=is_fixture_type, precision: int = 3) -> list:
    """Header row plus one row per zone, in zone order."""
    device_map = {d.id: d for d in (Device.from_any(d) for d in devices)}
    rows = [list(SUMMARY_COLUMNS)]
    for zone in zones:
        rows.append(_zone_row(Zone.from_any(zone), device_map, is_fixture, precision))
    return rows


def zone_summary_frame(zones, devices, is_fixture=is_fixture_type, precision: int = 3) -> pd.DataFrame:
    rows = zone_summary_rows(zones, devices, is_fixture, precision)
    return pd.DataFrame(rows[1:], columns=rows[0])


def rows_to_bytes(rows, encoding="utf-8"):
    """Convert a list of rows into CSV bytes."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerows(rows)
    return output.getvalue().encode(encoding)
