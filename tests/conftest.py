"""Pytest configuration and fixtures."""
import json
import logging

import pytest

from hyflo_localization.hierarchy.hierarchy_index import HierarchyIndex
from hyflo_localization.models import State, District, Locality, Coordinate


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attached to captured streams during a test."""
    yield
    package_logger = logging.getLogger("hyflo_localization")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def states():
    """Two states; Alger has no English designation."""
    return [
        State(id=16, code="ALG", designation_fr="Alger", designation_ar="الجزائر"),
        State(id=31, code="ORN", designation_fr="Oran", designation_en="Oran Province"),
    ]


@pytest.fixture
def districts():
    """Districts of Alger and Oran, plus one pointing to a missing state."""
    return [
        District(id=1, code="BAB", designation_fr="Bab El Oued", state_id=16),
        District(id=2, code="HUS", designation_fr="Hussein Dey", state_id=16),
        District(id=3, code="ARZ", designation_fr="Arzew", state_id=31),
        District(id=9, code="GHO", designation_fr="Fantôme", state_id=99),
    ]


@pytest.fixture
def localities():
    """Localities, including two whose chain is broken."""
    return [
        Locality(id=100, code="BEO", designation_fr="Bologhine", district_id=1),
        Locality(id=101, code="RAI", designation_fr="Raïs Hamidou", district_id=1),
        Locality(id=300, code="BET", designation_fr="Bethioua", district_id=3),
        Locality(id=900, code="ORP", designation_fr="Orpheline", district_id=9),
        Locality(id=901, code="LOS", designation_fr="Perdue", district_id=77),
    ]


@pytest.fixture
def index(states, districts, localities):
    """Hierarchy index over the sample records."""
    return HierarchyIndex(states=states, districts=districts, localities=localities)


@pytest.fixture
def route_coordinates():
    """Three valid waypoints of infrastructure 5, given out of order."""
    return [
        Coordinate(sequence=3, latitude=0.0, longitude=2.0, infrastructure_id=5),
        Coordinate(sequence=1, latitude=0.0, longitude=0.0, infrastructure_id=5),
        Coordinate(sequence=2, latitude=0.0, longitude=1.0, infrastructure_id=5),
    ]


@pytest.fixture
def snapshot_dir(tmp_path):
    """Snapshot directory mixing a JSON page envelope, a plain JSON list and a CSV."""
    (tmp_path / "states.json").write_text(json.dumps({
        "content": [
            {"id": 16, "code": "ALG", "designationFr": "Alger", "designationEn": "Algiers"},
            {"id": 31, "code": "ORN", "designationFr": "Oran"},
        ],
        "totalElements": 2,
    }), encoding="utf-8")
    (tmp_path / "districts.json").write_text(json.dumps([
        {"id": 1, "code": "BAB", "designationFr": "Bab El Oued", "stateId": 16},
        {"id": 3, "code": "ARZ", "designationFr": "Arzew", "state": {"id": 31}},
    ]), encoding="utf-8")
    (tmp_path / "localities.csv").write_text(
        "id,code,designationFr,designationAr,districtId\n"
        "100,01,Bologhine,,1\n"
        "300,02,Bethioua,بطيوة,3\n",
        encoding="utf-8"
    )
    return tmp_path
