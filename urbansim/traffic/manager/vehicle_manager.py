"""Vehicle management module for the traffic overlay.

This module creates the vehicle population and advances it along the arterial
routes. Stepping is a plain function of ``(vehicles, routes, dt)`` so it can
be driven by a render loop or by a test with synthetic ticks.
"""
import random
from typing import List, Sequence

from urbansim.agent.vehicle import Vehicle
from urbansim.citygen.dataclass import Route
from urbansim.config import Config
from urbansim.utils.logger import Logger


def pick_next_route(current: Route, routes: Sequence[Route], rng=random) -> Route:
    """Pick the route a vehicle continues on after finishing ``current``.

    Routes with the same orientation class are preferred so vehicles do not
    cut across blocks; any route is used when none shares the orientation.
    """
    same_orientation = [route for route in routes if current is not None and route.orientation == current.orientation]
    candidates = same_orientation or list(routes)
    return candidates[rng.randrange(len(candidates))]


def advance_vehicles(vehicles: List[Vehicle], routes: Sequence[Route], dt: float = 1.0, rng=random) -> List[Vehicle]:
    """Advance every vehicle by one tick.

    Args:
        vehicles: Vehicles to advance, updated in place.
        routes: Current route set. An empty set makes the tick a no-op.
        dt: Tick delta; progress grows by ``speed * dt``.
        rng: Random source for route changes.

    Returns:
        The same vehicle list.
    """
    if not routes or dt <= 0:
        return vehicles

    for vehicle in vehicles:
        if vehicle.route is None:
            vehicle.route = routes[vehicle.id % len(routes)]

        vehicle.progress += vehicle.speed * dt
        if vehicle.progress >= 1.0:
            vehicle.progress %= 1.0
            vehicle.route = pick_next_route(vehicle.route, routes, rng)

        vehicle.update_pose()
    return vehicles


class VehicleManager:
    """Manages the vehicle population of the traffic overlay.

    Vehicles are created once and live for the whole session, cycling through
    routes indefinitely.
    """
    def __init__(self, routes: Sequence[Route], num_vehicles: int, config: Config, seed: int = None):
        """Initialize the vehicle manager with configuration and initial vehicles.

        Args:
            routes: Routes vehicles are placed on.
            num_vehicles: Number of vehicles to create.
            config: Configuration with ``traffic.speed_range`` and ``traffic.colors``.
            seed: Seed for the manager's random source.
        """
        self.config = config
        self.routes = list(routes)
        self.num_vehicles = num_vehicles
        self.vehicles: List[Vehicle] = []
        self.rng = random.Random(seed)

        self.logger = Logger.get_logger('VehicleManager')
        self.logger.info(f'VehicleManager initialized with {num_vehicles} vehicles')

        self.init_vehicles()

    def init_vehicles(self):
        """Create the vehicles, spreading them over the routes round-robin."""
        low, high = self.config['traffic.speed_range']
        colors = self.config['traffic.colors']
        for i in range(self.num_vehicles):
            route = self.routes[i % len(self.routes)] if self.routes else None
            vehicle = Vehicle(route=route, progress=self.rng.random(), speed=self.rng.uniform(low, high),
                              color=colors[i % len(colors)], vehicle_id=i)
            self.vehicles.append(vehicle)
            self.logger.debug(f'Spawned vehicle {vehicle.id} on route {route.id if route else None}')

    def set_routes(self, routes: Sequence[Route]):
        """Swap in a new route set and re-point every vehicle to a route of it.

        A vehicle keeps the route with the same id when it still exists,
        otherwise it moves to a route chosen by its id.
        """
        self.routes = list(routes)
        by_id = {route.id: route for route in self.routes}
        for vehicle in self.vehicles:
            if not self.routes:
                vehicle.route = None
                continue
            current_id = vehicle.route.id if vehicle.route is not None else None
            vehicle.route = by_id.get(current_id, self.routes[vehicle.id % len(self.routes)])
            vehicle.update_pose()

    def update_vehicles(self, dt: float = 1.0) -> List[Vehicle]:
        """Advance all vehicles by one tick."""
        return advance_vehicles(self.vehicles, self.routes, dt, self.rng)
