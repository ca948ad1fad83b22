import random

import pytest

from urbansim.agent.vehicle import Vehicle
from urbansim.citygen.dataclass import (CellKind, CityParameters, RoadSpacing,
                                        Route, RouteOrientation)
from urbansim.citygen.layout import LayoutSynthesizer
from urbansim.traffic.controller import TrafficController
from urbansim.traffic.manager import advance_vehicles, pick_next_route
from urbansim.traffic.route import bounds_for_layout, build_routes
from urbansim.utils.vector import Vector


def horizontal(z, route_id=None):
    return Route(route_id or f'h-{z}', Vector(-40, z), Vector(40, z))


def vertical(x, route_id=None):
    return Route(route_id or f'v-{x}', Vector(x, -40), Vector(x, 40))


def test_route_orientation_is_derived():
    assert horizontal(12).orientation == RouteOrientation.HORIZONTAL
    assert horizontal(12).axis_value == 12
    assert vertical(-8).orientation == RouteOrientation.VERTICAL
    assert Route('d', Vector(0, 0), Vector(4, 4)).orientation == RouteOrientation.DIAGONAL


def test_routes_for_default_layout(config):
    spacing = RoadSpacing(5)
    bounds = bounds_for_layout(20, spacing)
    routes = build_routes(bounds, spacing.world_spacing, config)

    assert (bounds.min_x, bounds.max_x) == (-40.0, 36.0)
    assert [r.id for r in routes] == ['h--40', 'v--40', 'h--20', 'v--20', 'h-0', 'v-0', 'h-20', 'v-20', 'd1', 'd2']
    # Orientation alternates until the corner connectors.
    orientations = [r.orientation for r in routes[:-2]]
    assert orientations[0::2] == [RouteOrientation.HORIZONTAL] * 4
    assert orientations[1::2] == [RouteOrientation.VERTICAL] * 4
    for route in routes:
        assert bounds.contains(route.start) and bounds.contains(route.end)
    assert routes[-1].length == pytest.approx(16 * 2 ** 0.5)


@pytest.mark.parametrize('terrain', ['flat', 'hilly', 'mountainous'])
def test_arterial_routes_only_cross_road_cells(config, terrain):
    params = CityParameters(size=25, terrain=terrain)
    synthesizer = LayoutSynthesizer(config)
    spacing = synthesizer.spacing_for(params)
    layout = synthesizer.synthesize(params, spacing)
    routes = build_routes(bounds_for_layout(params.size, spacing), spacing.world_spacing, config)

    for route in routes:
        if route.orientation == RouteOrientation.DIAGONAL:
            continue
        index = round(route.axis_value / spacing.cell_spacing + params.size / 2)
        for other in range(params.size):
            if route.orientation == RouteOrientation.HORIZONTAL:
                cell = layout.cell_at(other, index)
            else:
                cell = layout.cell_at(index, other)
            assert cell.kind == CellKind.ROAD


def test_single_cell_layout_has_no_routes(config):
    spacing = RoadSpacing(5)
    assert build_routes(bounds_for_layout(1, spacing), spacing.world_spacing, config) == []


def test_progress_wraps_with_remainder():
    route = horizontal(12)
    vehicle = Vehicle(route, progress=0.7, speed=0.6, color='#ef4444', vehicle_id=0)

    advance_vehicles([vehicle], [route])
    assert vehicle.progress == pytest.approx(0.3)
    advance_vehicles([vehicle], [route])
    assert vehicle.progress == pytest.approx(0.9)
    assert 0 <= vehicle.progress < 1


def test_progress_stays_in_unit_interval():
    routes = [horizontal(0), horizontal(20), vertical(0)]
    rng = random.Random(7)
    vehicles = [Vehicle(routes[i % 3], rng.random(), rng.uniform(0.05, 0.9), '#fff', vehicle_id=i) for i in range(6)]
    for _ in range(200):
        advance_vehicles(vehicles, routes, dt=rng.uniform(0.1, 3.0), rng=rng)
        assert all(0 <= v.progress < 1 for v in vehicles)


def test_position_snaps_to_route_axis():
    route = horizontal(12)
    vehicle = Vehicle(route, progress=0.0, speed=0.0137, color='#fff', vehicle_id=0)
    for _ in range(150):
        advance_vehicles([vehicle], [route], dt=0.93)
        assert vehicle.position.z == 12

    column = vertical(-20)
    vehicle.route = column
    advance_vehicles([vehicle], [column])
    assert vehicle.position.x == -20


def test_heading_follows_route_direction():
    vehicle = Vehicle(vertical(0), progress=0.5, speed=0.01, color='#fff', vehicle_id=0)
    assert vehicle.heading.to_tuple() == (0.0, 1.0)
    assert vehicle.yaw == 90.0
    assert vehicle.position.to_tuple() == (0.0, 0.0)


def test_empty_route_set_is_a_noop():
    vehicle = Vehicle(horizontal(0), progress=0.25, speed=0.5, color='#fff', vehicle_id=0)
    assert advance_vehicles([vehicle], []) == [vehicle]
    assert vehicle.progress == 0.25


def test_non_positive_dt_is_a_noop():
    route = horizontal(0)
    vehicle = Vehicle(route, progress=0.25, speed=0.5, color='#fff', vehicle_id=0)
    advance_vehicles([vehicle], [route], dt=0)
    assert vehicle.progress == 0.25


def test_dt_scales_progress():
    route = horizontal(0)
    vehicle = Vehicle(route, progress=0.1, speed=0.1, color='#fff', vehicle_id=0)
    advance_vehicles([vehicle], [route], dt=2.5)
    assert vehicle.progress == pytest.approx(0.35)


def test_next_route_prefers_same_orientation():
    rows = [horizontal(0), horizontal(20)]
    routes = rows + [vertical(0), Route('d1', Vector(0, 0), Vector(4, 4))]
    rng = random.Random(3)
    for _ in range(50):
        assert pick_next_route(rows[0], routes, rng).orientation == RouteOrientation.HORIZONTAL


def test_next_route_falls_back_to_any_route():
    columns = [vertical(0), vertical(20)]
    assert pick_next_route(horizontal(0), columns, random.Random(1)) in columns


def test_vehicle_validation_and_ids():
    with pytest.raises(ValueError):
        Vehicle(horizontal(0), progress=0.0, speed=0, color='#fff')
    assert Vehicle(horizontal(0), progress=1.5, speed=0.1, color='#fff').progress == 0.5
    assert Vehicle(horizontal(0), progress=0.0, speed=0.1, color='#fff').id == 1


def test_controller_ticks_and_pauses(config):
    controller = TrafficController(config, 20, RoadSpacing(5), num_vehicles=8, seed=1)
    assert len(controller.vehicles) == 8
    before = [v.progress for v in controller.vehicles]

    controller.pause()
    controller.tick()
    assert [v.progress for v in controller.vehicles] == before
    assert not controller.is_animating

    controller.resume()
    controller.tick()
    assert [v.progress for v in controller.vehicles] != before


def test_controller_rebuild_swaps_route_set(config):
    controller = TrafficController(config, 20, RoadSpacing(5), seed=1)
    controller.tick()
    controller.rebuild(20, RoadSpacing(6))

    route_ids = {r.id for r in controller.routes}
    assert 'h--16' in route_ids
    for vehicle in controller.vehicles:
        assert any(vehicle.route is route for route in controller.vehicle_manager.routes)
    for _ in range(100):
        controller.tick()
        assert all(v.route.id in route_ids for v in controller.vehicles)


def test_controller_on_single_cell_layout(config):
    controller = TrafficController(config, 1, RoadSpacing(5), num_vehicles=3)
    assert controller.routes == []
    controller.tick()
    assert all(v.route is None for v in controller.vehicles)


def test_snapshot_reports_road_height(config):
    controller = TrafficController(config, 10, RoadSpacing(5), num_vehicles=2)
    snapshot = controller.snapshot()
    assert len(snapshot['vehicles']) == 2
    assert snapshot['vehicles'][0]['height'] == 0.5
    assert snapshot['routes'][0]['orientation'] == 'horizontal'
