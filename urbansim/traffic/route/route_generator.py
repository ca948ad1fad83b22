"""Route generation module for the arterial traffic network.

Routes follow the arterial lines of the layout. They are derived from the
same ``RoadSpacing`` the layout synthesizer used, so every arterial route
runs over road cells only.
"""
from typing import List

from urbansim.citygen.dataclass import Bounds, RoadSpacing, Route
from urbansim.citygen.layout.road_spacing import (arterial_coordinates,
                                                  layout_bounds)
from urbansim.config import Config
from urbansim.utils.logger import Logger
from urbansim.utils.vector import Vector


def bounds_for_layout(size: int, spacing: RoadSpacing) -> Bounds:
    """World bounds the routes of a layout must stay within."""
    return layout_bounds(size, spacing)


class RouteGenerator:
    """Builds the fixed set of arterial routes for a layout."""

    def __init__(self, config: Config = None):
        """Initialize the route generator.

        Args:
            config: Configuration holding ``traffic.diagonal_connector_length``.
        """
        self.config = config if config is not None else Config()
        self.logger = Logger.get_logger('RouteGenerator')

    def build_routes(self, bounds: Bounds, arterial_spacing: float) -> List[Route]:
        """Build one route per arterial line plus two corner connectors.

        Args:
            bounds: World bounds of the layout.
            arterial_spacing: Distance between arterial lines in world units.

        Returns:
            Horizontal and vertical routes alternating per arterial coordinate,
            followed by diagonal connectors at the lower and upper corners.
        """
        routes = []
        for coordinate in arterial_coordinates(bounds, arterial_spacing):
            if bounds.max_x > bounds.min_x:
                routes.append(Route(f'h-{coordinate:g}', Vector(bounds.min_x, coordinate), Vector(bounds.max_x, coordinate)))
            if bounds.max_z > bounds.min_z:
                routes.append(Route(f'v-{coordinate:g}', Vector(coordinate, bounds.min_z), Vector(coordinate, bounds.max_z)))

        routes.extend(self._corner_connectors(bounds))
        self.logger.info(f'Built {len(routes)} routes with arterial spacing {arterial_spacing:g}')
        return routes

    def _corner_connectors(self, bounds: Bounds) -> List[Route]:
        """Short diagonals at the outer corners so vehicles have no dead ends there."""
        span = min(bounds.max_x - bounds.min_x, bounds.max_z - bounds.min_z)
        length = min(float(self.config['traffic.diagonal_connector_length']), span)
        if length <= 0:
            return []
        return [
            Route('d1', Vector(bounds.min_x, bounds.min_z), Vector(bounds.min_x + length, bounds.min_z + length)),
            Route('d2', Vector(bounds.max_x, bounds.max_z), Vector(bounds.max_x - length, bounds.max_z - length)),
        ]


def build_routes(bounds: Bounds, arterial_spacing: float, config: Config = None) -> List[Route]:
    """Build the arterial routes inside ``bounds``; see ``RouteGenerator.build_routes``."""
    return RouteGenerator(config).build_routes(bounds, arterial_spacing)
