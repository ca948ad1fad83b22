"""Traffic controller module, the simulation driver for the vehicle overlay.

The controller owns the route set and the vehicle population. Routes are
rebuilt wholesale when the layout size or road spacing changes; vehicles are
created once and re-pointed to the new route set.
"""
from typing import List

from urbansim.agent.vehicle import Vehicle
from urbansim.citygen.dataclass import RoadSpacing, Route
from urbansim.config import Config
from urbansim.traffic.manager.vehicle_manager import VehicleManager
from urbansim.traffic.route.route_generator import (RouteGenerator,
                                                    bounds_for_layout)
from urbansim.utils.logger import Logger


class TrafficController:
    """Main controller class for the traffic overlay."""

    def __init__(self, config: Config, layout_size: int, spacing: RoadSpacing, num_vehicles: int = None, seed: int = None, dt: float = None):
        """Initialize the traffic controller with configuration.

        Args:
            config: Configuration object containing all simulation parameters.
            layout_size: Edge length of the layout the routes follow.
            spacing: Road spacing shared with the layout synthesizer.
            num_vehicles: Number of vehicles to create.
            seed: Seed for route selection and initial vehicle state.
            dt: Default per-tick delta.
        """
        self.config = config
        self.num_vehicles = num_vehicles if num_vehicles is not None else config['traffic.num_vehicles']
        self.seed = seed if seed is not None else config['urbansim.seed']
        self.dt = dt if dt is not None else config['urbansim.dt']
        self.paused = False

        self.logger = Logger.get_logger('TrafficController')

        self.route_generator = RouteGenerator(config)
        self.layout_size = layout_size
        self.spacing = spacing
        self._routes = self._build_routes(layout_size, spacing)
        self.vehicle_manager = VehicleManager(self._routes, self.num_vehicles, config, seed=self.seed)

        self.logger.info(f'TrafficController initialized with {self.num_vehicles} vehicles on {len(self._routes)} routes')

    @property
    def routes(self) -> List[Route]:
        """Current route set."""
        return list(self._routes)

    @property
    def vehicles(self) -> List[Vehicle]:
        """Vehicle population."""
        return self.vehicle_manager.vehicles

    @property
    def is_animating(self) -> bool:
        """Whether ticks currently advance the simulation."""
        return not self.paused

    def _build_routes(self, layout_size: int, spacing: RoadSpacing) -> List[Route]:
        bounds = bounds_for_layout(layout_size, spacing)
        return self.route_generator.build_routes(bounds, spacing.world_spacing)

    def rebuild(self, layout_size: int, spacing: RoadSpacing):
        """Rebuild routes for a new layout size or spacing.

        The new route list replaces the old one in a single assignment, so
        vehicles never reference a route that is no longer part of the set.
        """
        if layout_size == self.layout_size and spacing == self.spacing:
            return
        routes = self._build_routes(layout_size, spacing)
        self.layout_size = layout_size
        self.spacing = spacing
        self._routes = routes
        self.vehicle_manager.set_routes(routes)
        self.logger.info(f'Rebuilt {len(routes)} routes for layout size {layout_size}, arterial step {spacing.arterial_step}')

    def tick(self, dt: float = None) -> List[Vehicle]:
        """Advance the simulation by one tick.

        Args:
            dt: Tick delta; the configured per-tick delta is used when omitted.

        Returns:
            The vehicle population after the tick.
        """
        if self.paused:
            return self.vehicles
        return self.vehicle_manager.update_vehicles(self.dt if dt is None else dt)

    def pause(self):
        """Stop advancing vehicles on tick."""
        self.paused = True

    def resume(self):
        """Resume advancing vehicles on tick."""
        self.paused = False

    def snapshot(self) -> dict:
        """Routes and vehicle states for a renderer; vehicles ride at the configured road height."""
        road_height = self.config['traffic.road_height']
        vehicles = []
        for vehicle in self.vehicles:
            state = vehicle.to_dict()
            state['height'] = road_height
            vehicles.append(state)
        return {
            'routes': [route.to_dict() for route in self._routes],
            'vehicles': vehicles,
        }
