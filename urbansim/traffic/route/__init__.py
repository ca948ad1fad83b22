"""Arterial route generation package."""

from urbansim.traffic.route.route_generator import (RouteGenerator,
                                                    bounds_for_layout,
                                                    build_routes)

__all__ = ['RouteGenerator', 'bounds_for_layout', 'build_routes']
