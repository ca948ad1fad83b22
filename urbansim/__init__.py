"""UrbanSim package for synthesizing city layouts and simulating traffic on them.

This package provides the deterministic layout synthesizer, the arterial
traffic overlay, infrastructure placements, utility networks and the
planning state container used by a UI layer.
"""

from urbansim.agent.vehicle import Vehicle
from urbansim.citygen.dataclass import (Cell, CellKind, CityParameters,
                                        Climate, Layout, Placement,
                                        PlacementKind, RoadSpacing, Route,
                                        Terrain)
from urbansim.citygen.layout import LayoutSynthesizer, synthesize_layout
from urbansim.citygen.placement import PlacementManager, map_to_layout_space
from urbansim.citygen.utility import build_network
from urbansim.config import Config
from urbansim.planning import PlanningState
from urbansim.traffic.controller import TrafficController
from urbansim.traffic.manager import advance_vehicles
from urbansim.traffic.route import build_routes
from urbansim.utils.exceptions import (ProjectFileError, RangeError,
                                       ValidationError)
from urbansim.utils.logger import Logger

__version__ = '0.1.0'

__all__ = [
    'Cell',
    'CellKind',
    'CityParameters',
    'Climate',
    'Config',
    'Layout',
    'LayoutSynthesizer',
    'Logger',
    'Placement',
    'PlacementKind',
    'PlacementManager',
    'PlanningState',
    'ProjectFileError',
    'RangeError',
    'RoadSpacing',
    'Route',
    'Terrain',
    'TrafficController',
    'ValidationError',
    'Vehicle',
    'advance_vehicles',
    'build_network',
    'build_routes',
    'map_to_layout_space',
    'synthesize_layout',
]
