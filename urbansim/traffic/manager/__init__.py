"""Traffic management package.

This package contains the vehicle manager and the plain stepping functions
used by the traffic controller:
- VehicleManager: Creates the vehicle population and advances it
- advance_vehicles: One simulation tick over a vehicle list
"""

from urbansim.traffic.manager.vehicle_manager import (VehicleManager,
                                                      advance_vehicles,
                                                      pick_next_route)

__all__ = ['VehicleManager', 'advance_vehicles', 'pick_next_route']
