"""Tests for first-match zone lookup and per-zone membership."""

import warnings
from fixture_zones import Device, Polygon2D, Zone, ZoneDraft
from fixture_zones.clustering import detect_zones_from_devices
from fixture_zones.zone_lookup import devices_in_zone, find_zone_for_device


class TestFindZoneForDevice:
    def test_device_resolves_to_containing_zone(self, zone_a, zone_b):
        zones = [zone_a, zone_b]
        assert find_zone_for_device(Device("d", x=5, y=5), zones) is zone_a
        assert find_zone_for_device(Device("d", x=25, y=5), zones) is zone_b

    def test_device_between_zones_is_none(self, zone_a, zone_b):
        assert find_zone_for_device(Device("d", x=15, y=5), [zone_a, zone_b]) is None

    def test_missing_coordinate_is_none(self, zone_a, zone_b):
        assert find_zone_for_device(Device("d", x=5), [zone_a, zone_b]) is None
        assert find_zone_for_device(Device("d", y=5), [zone_a, zone_b]) is None
        assert find_zone_for_device({"x": 5}, [zone_a, zone_b]) is None

    def test_no_zones(self):
        assert find_zone_for_device(Device("d", x=0.5, y=0.5), []) is None

    def test_first_match_wins_on_overlap(self, zone_a):
        inner = Zone(id="inner", name="Inner", color="#000000", polygon=Polygon2D.rectangle(2, 2, 8, 8))
        device = Device("d", x=5, y=5)
        assert find_zone_for_device(device, [zone_a, inner]) is zone_a
        assert find_zone_for_device(device, [inner, zone_a]) is inner

    def test_plain_mappings(self):
        zones = [
            {"id": "A", "polygon": [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 10, "y": 10}, {"x": 0, "y": 10}]},
        ]
        assert find_zone_for_device({"x": 5, "y": 5}, zones) is zones[0]

    def test_zone_drafts(self, floor_devices):
        drafts = detect_zones_from_devices(floor_devices)
        match = find_zone_for_device(floor_devices[0], drafts)
        assert isinstance(match, ZoneDraft)
        assert "d1" in match.device_ids

    def test_degenerate_mapping_zones_stay_silent(self):
        zones = [{"id": "s", "polygon": [(0, 0), (1, 1)]}]
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            for _ in range(3):
                assert find_zone_for_device({"x": 0.5, "y": 0.5}, zones) is None


class TestDevicesInZone:
    def test_members_in_input_order(self, left_half, floor_devices):
        members = devices_in_zone(left_half, floor_devices)
        assert [d.id for d in members] == ["d1", "d2"]

    def test_unpositioned_devices_excluded(self, unit_zone, floor_devices):
        members = devices_in_zone(unit_zone, floor_devices)
        assert "d6" not in [d.id for d in members]
        assert len(members) == 5

    def test_empty_inputs(self, unit_zone):
        assert devices_in_zone(unit_zone, []) == []
        assert devices_in_zone(Zone(name="none", color="#fff"), [Device("d", x=0.5, y=0.5)]) == []

    def test_zone_draft(self, floor_devices):
        draft = ZoneDraft(name="Left", color="#22c55e", polygon=Polygon2D.rectangle(0, 0, 0.5, 1))
        assert [d.id for d in devices_in_zone(draft, floor_devices)] == ["d1", "d2"]
