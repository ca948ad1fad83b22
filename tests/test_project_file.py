import json

import pytest

from urbansim.citygen.dataclass import Climate, Placement, Terrain
from urbansim.planning import PlanningState
from urbansim.utils.exceptions import ProjectFileError


@pytest.fixture
def state(config):
    return PlanningState(config)


def test_export_document_shape(state):
    state.add_placement(Placement('school-1-2', 'school', 1, 2))
    data = state.export_project()

    assert set(data) == {'version', 'savedAt', 'cityData', 'viewLayers', 'placements'}
    assert data['version'] == 1
    assert data['cityData']['size'] == 20
    assert data['cityData']['terrain'] == 'flat'
    assert data['placements'] == [{'id': 'school-1-2', 'type': 'school', 'x': 1, 'y': 2}]
    json.dumps(data)


def test_save_and_load_round_trip(config, state, tmp_path):
    state.update_city_data(size=24, terrain='mountainous', climate='arid', environmentalRisk=60)
    state.add_placement(Placement('a', 'airport', 0, 7))
    state.add_placement(Placement('b', 'road', 3, 3))
    state.toggle_layer('utilities')
    path = tmp_path / 'projects' / 'city.json'
    state.save_project(str(path))

    restored = PlanningState(config)
    counts = restored.load_project(str(path))

    assert counts == {'city_fields': 8, 'placements': 2, 'view_layers': 4}
    assert restored.city_data == state.city_data
    assert restored.placements == state.placements
    assert restored.view_layers['utilities'] is True
    assert restored.layout.cells == state.layout.cells
    assert restored.traffic.spacing.arterial_step == 7


def test_partial_document_applies_valid_subset(state):
    state.add_placement(Placement('old', 'road', 5, 5))
    counts = state.apply_project({
        'cityData': {'size': 30, 'terrain': 'lava', 'climate': 'tropical', 'bogus': 1},
        'placements': [
            {'type': 'hospital', 'x': 1, 'y': 2},
            {'type': 'mall', 'x': 0, 'y': 0},
            {'type': 'school', 'x': 20, 'y': 1},
            'junk',
        ],
    })

    assert counts == {'city_fields': 2, 'placements': 1, 'view_layers': 0}
    assert state.city_data.size == 30
    assert state.city_data.climate == Climate.TROPICAL
    assert state.city_data.terrain == Terrain.FLAT
    assert [p.id for p in state.placements] == ['hospital-1-2']
    # Missing viewLayers leaves the toggles alone.
    assert state.view_layers['zoning'] is True


def test_non_finite_and_huge_coordinates_are_skipped(state):
    counts = state.apply_project({'placements': [
        {'type': 'road', 'x': float('nan'), 'y': 1},
        {'type': 'school', 'x': 1, 'y': float('inf')},
        {'type': 'airport', 'x': 10 ** 400, 'y': 0},
        {'type': 'hospital', 'x': 3, 'y': 4},
    ]})

    assert counts['placements'] == 1
    assert [p.id for p in state.placements] == ['hospital-3-4']


def test_out_of_range_city_data_is_clamped(state):
    state.apply_project({'cityData': {'environmentalRisk': 500, 'populationDensity': -3}})
    assert state.city_data.environmental_risk == 100
    assert state.city_data.population_density == 1000


def test_malformed_sections_are_ignored(state):
    state.add_placement(Placement('keep', 'road', 2, 2))
    counts = state.apply_project({'cityData': 'big', 'placements': {'x': 1}, 'viewLayers': {'zoning': 'no', 'x': True}})

    assert counts == {'city_fields': 0, 'placements': 0, 'view_layers': 0}
    assert [p.id for p in state.placements] == ['keep']
    assert state.view_layers['zoning'] is True


@pytest.mark.parametrize('document', [None, [], 'project', 42])
def test_non_object_document_is_ignored(state, document):
    assert state.apply_project(document) == {'city_fields': 0, 'placements': 0, 'view_layers': 0}


def test_unreadable_files_raise(state, tmp_path):
    with pytest.raises(ProjectFileError):
        state.load_project(str(tmp_path / 'missing.json'))

    broken = tmp_path / 'broken.json'
    broken.write_text('{"version": 1,')
    with pytest.raises(ProjectFileError):
        state.load_project(str(broken))


def test_non_utf8_file_raises(state, tmp_path):
    garbled = tmp_path / 'garbled.json'
    garbled.write_bytes(b'\xff\xfe\x00garbage')
    with pytest.raises(ProjectFileError):
        state.load_project(str(garbled))
