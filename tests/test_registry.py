"""Tests for the in-memory device and zone stores."""

import pytest
from fixture_zones import Device, DeviceUpdate, Zone, ZoneDraft
from fixture_zones.registry import DeviceRegistry, ZoneRegistry


@pytest.fixture
def store(floor_devices):
    reg = DeviceRegistry()
    for d in floor_devices:
        reg.add(d)
    return reg


class TestDeviceRegistry:
    def test_add_keys_by_device_id(self, store):
        assert list(store) == ["d1", "d2", "d3", "d4", "d5", "d6"]
        assert store["d3"].type == "FIXTURE_12FT_FOLLOWER"

    def test_collision_increment(self, store):
        key = store.add(Device("d1", x=0.9, y=0.9))
        assert key == "d1-2"
        assert store[key].id == "d1-2"

    def test_collision_error(self):
        reg = DeviceRegistry(on_collision="error")
        reg.add(Device("a"))
        with pytest.raises(KeyError):
            reg.add(Device("a"))

    def test_collision_overwrite(self):
        reg = DeviceRegistry(on_collision="overwrite")
        reg.add(Device("a", x=0.1))
        reg.add(Device("a", x=0.2))
        assert len(reg) == 1 and reg["a"].x == 0.2

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            DeviceRegistry()["a"] = "not a device"

    def test_apply_updates(self, store):
        changed = store.apply_updates(
            [DeviceUpdate("d1", {"x": 0.5, "y": 0.5}), {"deviceId": "d2", "updates": {"orientation": 0}}]
        )
        assert [d.id for d in changed] == ["d1", "d2"]
        assert store["d1"].position == (0.5, 0.5)
        assert store["d2"].orientation == 0

    def test_apply_updates_is_atomic(self, store):
        before = dict(store)
        with pytest.raises(KeyError, match="no updates applied"):
            store.apply_updates([DeviceUpdate("d1", {"x": 0.9}), DeviceUpdate("ghost", {"x": 0.1})])
        assert dict(store) == before

    def test_bad_update_key_rejected_before_write(self, store):
        with pytest.raises(ValueError):
            store.apply_updates([{"deviceId": "d1", "updates": {"x": 0.9}}, {"deviceId": "d2", "updates": {"name": "x"}}])
        assert store["d1"].x == 0.2

    def test_require_and_remove(self, store):
        with pytest.raises(KeyError, match="Unknown id"):
            store.require("nope")
        store.remove("d6")
        assert "d6" not in store
        with pytest.raises(KeyError):
            store.remove("d6")


class TestZoneRegistry:
    def test_create_assigns_identity(self, t0):
        reg = ZoneRegistry()
        draft = ZoneDraft(name="Zone 1 - Deli", color="#fff", polygon=[(0, 0), (1, 0), (1, 1)])
        first = reg.create(draft, now=t0)
        second = reg.create(draft, now=t0)
        assert (first.id, second.id) == ("zone-1", "zone-2")
        assert first.created_at == first.updated_at == t0
        assert list(reg) == ["zone-1", "zone-2"]

    def test_create_skips_taken_ids(self, t0):
        reg = ZoneRegistry()
        reg.add(Zone(id="zone-1", name="Existing", color="#fff"))
        zone = reg.create(ZoneDraft(name="New", color="#000"), now=t0)
        assert zone.id == "zone-2"

    def test_edit_bumps_updated_at(self, zone_a, t1):
        reg = ZoneRegistry()
        reg.add(zone_a)
        edited = reg.edit("A", now=t1, name="Fresh Produce")
        assert edited.name == "Fresh Produce"
        assert edited.updated_at == t1
        assert edited.created_at == zone_a.created_at

    def test_replace_all(self, zone_a, zone_b):
        reg = ZoneRegistry()
        reg.add(zone_a)
        reg.add(zone_b)
        reg.replace_all([zone_a.with_(device_ids=("x",))])
        assert reg["A"].device_ids == ("x",)
        assert reg["B"] is zone_b

    def test_replace_all_unknown(self, zone_a):
        with pytest.raises(KeyError):
            ZoneRegistry().replace_all([zone_a])
