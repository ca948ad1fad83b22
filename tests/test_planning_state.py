import asyncio

import pytest

from urbansim.citygen.dataclass import (CityParameters, Placement,
                                        RouteOrientation, Terrain)
from urbansim.planning import PlanningState
from urbansim.utils.exceptions import RangeError, ValidationError


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def state(config):
    return PlanningState(config, seed=5)


def test_initial_state(state):
    assert state.city_data == CityParameters()
    assert len(state.layout) == 400
    assert state.view_layers == {'zoning': True, 'infrastructure': True, 'greenspace': False, 'utilities': False}
    assert len(state.traffic.vehicles) == 16
    assert not state.is_generating


def test_parameter_change_replaces_layout_and_routes(state):
    old_layout = state.layout
    state.update_city_data(terrain='hilly')

    assert state.city_data.terrain == Terrain.HILLY
    assert state.layout is not old_layout
    assert state.layout.spacing == state.traffic.spacing
    # Arterials every 6 cells: -40, -16, 8, 32.
    rows = [r.axis_value for r in state.traffic.routes if r.orientation == RouteOrientation.HORIZONTAL]
    assert rows == [-40.0, -16.0, 8.0, 32.0]


def test_parameter_edits_are_clamped(state):
    state.update_city_data(environmentalRisk=400, size=0)
    assert state.city_data.environmental_risk == 100
    assert state.city_data.size == 1
    with pytest.raises(ValidationError):
        state.update_city_data(climate='polar')


def test_generation_nudges_density_and_risk(state):
    params = asyncio.run(state.generate_city_async(delay=0))
    assert params.population_density == pytest.approx(2750)
    assert params.environmental_risk == pytest.approx(22.5)
    assert state.city_data == params
    assert not state.is_generating


def test_generation_respects_caps(config):
    state = PlanningState(config, CityParameters(population_density=48000, environmental_risk=0))
    params = asyncio.run(state.generate_city_async(delay=0))
    assert params.population_density == 50000
    assert params.environmental_risk == 0


def test_stale_generation_is_ignored(state):
    async def run():
        first = asyncio.ensure_future(state.generate_city_async(delay=0.05))
        second = asyncio.ensure_future(state.generate_city_async(delay=0.01))
        return await asyncio.gather(first, second)

    first, second = asyncio.run(run())
    assert first is None
    assert second is not None
    # Only the newest request was applied.
    assert state.city_data.population_density == pytest.approx(2750)
    assert not state.is_generating


def test_generation_flag_and_cancel(state):
    async def run():
        task = asyncio.ensure_future(state.generate_city_async(delay=0.05))
        await asyncio.sleep(0)
        assert state.is_generating
        state.cancel_generation()
        return await task

    assert asyncio.run(run()) is None
    assert state.city_data.population_density == 2500
    assert not state.is_generating


def test_population_drift(state):
    assert state.drift_population(FixedRandom(0.9)) == pytest.approx(400)
    assert state.city_data.population == pytest.approx(250400)

    # |growth| of 50 is below the threshold.
    assert state.drift_population(FixedRandom(0.55)) == 0.0
    assert state.city_data.population == pytest.approx(250400)


def test_population_drift_respects_floor_and_generation(config):
    state = PlanningState(config, CityParameters(population=50000))
    state.drift_population(FixedRandom(0.0))
    assert state.city_data.population == 50000

    state.is_generating = True
    assert state.drift_population(FixedRandom(0.9)) == 0.0


def test_view_layers(state):
    assert state.toggle_layer('greenspace') is True
    assert state.toggle_layer('greenspace') is False
    with pytest.raises(ValidationError):
        state.toggle_layer('satellite')


def test_placements_survive_regeneration(state):
    state.add_placement(Placement('h', 'hospital', 7, 7))
    state.update_city_data(size=40)
    assert len(state.placements) == 1
    assert state.placement_world_position(state.placements[0]).to_tuple() == (76.0, 76.0)

    with pytest.raises(RangeError):
        state.add_placement(Placement('x', 'school', 8, 1))
    state.remove_placement_at(7, 7)
    assert state.placements == ()


def test_tick_advances_traffic(state):
    before = [v.progress for v in state.traffic.vehicles]
    state.tick()
    after = [v.progress for v in state.traffic.vehicles]
    assert after != before
    assert all(0 <= p < 1 for p in after)


def test_derived_views(state):
    network = state.utility_network()
    metrics = state.metrics()
    assert metrics.total_cells == 400
    assert len(network.substations) == -(-len(state.layout.buildings) // 10)
    assert state.report_lines()[0] == 'UrbanSim - City Report'
