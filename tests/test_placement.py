import pytest

from urbansim.citygen.dataclass import Placement, PlacementKind
from urbansim.citygen.placement import (PlacementManager, map_to_layout_index,
                                        map_to_layout_space)
from urbansim.utils.exceptions import RangeError, ValidationError


def test_add_at_occupied_coordinate_replaces():
    manager = PlacementManager(grid_size=8)
    manager.add_placement(Placement('a', 'hospital', 2, 3))
    manager.add_placement(Placement('b', 'school', 2, 3))

    at_coordinate = [p for p in manager.placements if p.coordinate == (2, 3)]
    assert len(at_coordinate) == 1
    assert at_coordinate[0].kind == PlacementKind.SCHOOL
    assert len(manager) == 1


def test_replacement_keeps_insertion_order():
    manager = PlacementManager()
    manager.add_placement(Placement('a', 'road', 0, 0))
    manager.add_placement(Placement('b', 'airport', 5, 5))
    manager.add_placement(Placement('c', 'hospital', 0, 0))
    assert [p.id for p in manager.placements] == ['c', 'b']


def test_remove_and_clear():
    manager = PlacementManager()
    manager.add_placement(Placement('a', 'road', 1, 1))
    manager.add_placement(Placement('b', 'school', 4, 6))

    manager.remove_at(1, 1)
    assert manager.placement_at(1, 1) is None
    manager.remove_at(1, 1)
    assert len(manager) == 1

    manager.clear()
    assert manager.placements == ()


@pytest.mark.parametrize('px, py', [(8, 0), (0, 8), (-1, 3), (3, -1), (100, 100)])
def test_out_of_range_is_rejected(px, py):
    manager = PlacementManager(grid_size=8)
    with pytest.raises(RangeError):
        manager.add_placement(Placement('x', 'hospital', px, py))
    with pytest.raises(RangeError):
        manager.remove_at(px, py)
    assert len(manager) == 0


def test_toggle_places_then_clears():
    manager = PlacementManager()
    placed = manager.toggle_at(3, 4, PlacementKind.AIRPORT)
    assert placed.id == 'airport-3-4'
    assert manager.placement_at(3, 4) == placed

    assert manager.toggle_at(3, 4, 'school') is None
    assert len(manager) == 0


def test_grid_corner_mapping():
    assert map_to_layout_index(0, 20, 8) == 0
    assert map_to_layout_index(7, 20, 8) == 19
    assert map_to_layout_space(Placement('a', 'road', 0, 0), 20, 8).to_tuple() == (-40.0, -40.0)
    assert map_to_layout_space(Placement('b', 'road', 7, 7), 20, 8).to_tuple() == (36.0, 36.0)


def test_mapping_rounds_halves_up():
    # 1 / 2 * 5 = 2.5
    assert map_to_layout_index(1, 6, 3) == 3
    assert map_to_layout_index(0, 20, 1) == 0


def test_mapping_rejects_out_of_range():
    with pytest.raises(RangeError):
        map_to_layout_space(Placement('a', 'road', 9, 0), 20, 8)


def test_placement_from_project_entry():
    placement = Placement.from_dict({'type': 'hospital', 'x': 2, 'y': 3})
    assert placement.id == 'hospital-2-3'
    assert placement.kind == PlacementKind.HOSPITAL
    assert placement.to_dict() == {'id': 'hospital-2-3', 'type': 'hospital', 'x': 2, 'y': 3}


@pytest.mark.parametrize('entry', [
    {'type': 'mall', 'x': 1, 'y': 1},
    {'x': 1, 'y': 1},
    {'type': 'road', 'x': 1.5, 'y': 1},
    {'type': 'road', 'x': '1', 'y': 1},
    {'type': 'road', 'y': 1},
    ['road', 1, 1],
    {'type': 'road', 'x': float('nan'), 'y': 1},
    {'type': 'school', 'x': 2, 'y': float('inf')},
])
def test_malformed_project_entry(entry):
    with pytest.raises(ValidationError):
        Placement.from_dict(entry)
