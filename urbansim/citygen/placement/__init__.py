"""Infrastructure placement package.

Keeps user-placed hospitals, schools, airports and local roads on the
placement grid and maps them into layout space.
"""

from urbansim.citygen.placement.placement_manager import (PlacementManager,
                                                          map_to_layout_index,
                                                          map_to_layout_space)

__all__ = ['PlacementManager', 'map_to_layout_index', 'map_to_layout_space']
