"""Shared pytest fixtures for fixture_zones test suite."""

import datetime
import pytest
from fixture_zones import Device, Polygon2D, Zone


# ============== Warning Filters ==============
# Cap merges are expected in the many-cluster scenarios

def pytest_configure(config):
    """Configure pytest warning filters for expected warnings."""
    config.addinivalue_line(
        "filterwarnings",
        "ignore:Found .* device clusters; merged into .* zones:UserWarning",
    )


# ============== Time Fixtures ==============

@pytest.fixture
def t0():
    return datetime.datetime(2024, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def t1(t0):
    return t0 + datetime.timedelta(hours=1)


# ============== Polygon Fixtures ==============

@pytest.fixture
def unit_square():
    """The whole normalized map."""
    return Polygon2D(vertices=[(0, 0), (1, 0), (1, 1), (0, 1)])


@pytest.fixture
def l_shape():
    """An L-shaped outline with the upper-right quadrant cut away."""
    return Polygon2D(vertices=[(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)])


# ============== Zone Fixtures ==============

@pytest.fixture
def zone_a(t0):
    return Zone(
        id="A",
        name="Produce",
        color="#4c7dff",
        polygon=[(0, 0), (10, 0), (10, 10), (0, 10)],
        created_at=t0,
        updated_at=t0,
    )


@pytest.fixture
def zone_b(t0):
    return Zone(
        id="B",
        name="Bakery",
        color="#f97316",
        polygon=[(20, 0), (30, 0), (30, 10), (20, 10)],
        created_at=t0,
        updated_at=t0,
    )


@pytest.fixture
def left_half(t0):
    return Zone(
        id="left",
        name="Left",
        color="#22c55e",
        polygon=Polygon2D.rectangle(0, 0, 0.5, 1),
        created_at=t0,
        updated_at=t0,
    )


@pytest.fixture
def right_half(t0):
    return Zone(
        id="right",
        name="Right",
        color="#eab308",
        polygon=Polygon2D.rectangle(0.5, 0, 1, 1),
        created_at=t0,
        updated_at=t0,
    )


@pytest.fixture
def unit_zone(unit_square):
    return Zone(id="all", name="Sales Floor", color="#8b5cf6", polygon=unit_square)


# ============== Device Fixtures ==============

@pytest.fixture
def floor_devices():
    """Six devices: four fixtures and a sensor spread over two halves, one unpositioned."""
    return [
        Device("d1", "fixture-16ft-power-entry", 0.2, 0.2, 0, "Grocery - Aisle 1"),
        Device("d2", "fixture-8ft-follower", 0.3, 0.7, 90, "Grocery - Aisle 2"),
        Device("d3", "FIXTURE_12FT_FOLLOWER", 0.7, 0.3, 0, "Apparel - Rack 3"),
        Device("d4", "motion", 0.8, 0.8, None, "Apparel - Entrance"),
        Device("d5", "fixture-12ft-power-entry", 0.6, 0.6, 180, "Apparel"),
        Device("d6", "light-sensor", None, None, None, "Back Room"),
    ]
