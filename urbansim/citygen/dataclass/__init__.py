"""Dataclass module for the city layout and simulation."""
from urbansim.citygen.dataclass.dataclass import (BUILDING_KINDS, Bounds,
                                                  Cell, CellKind,
                                                  CityParameters, Climate,
                                                  Layout, Placement,
                                                  PlacementKind,
                                                  RoadOrientation,
                                                  RoadSpacing, Route,
                                                  RouteOrientation, Terrain)

__all__ = ['BUILDING_KINDS', 'Bounds', 'Cell', 'CellKind', 'CityParameters', 'Climate', 'Layout', 'Placement',
           'PlacementKind', 'RoadOrientation', 'RoadSpacing', 'Route', 'RouteOrientation', 'Terrain']
