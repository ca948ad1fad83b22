"""Placement manager module for user-placed infrastructure.

Placements live on a fixed-resolution placement grid (8x8 by default) that is
independent of the layout size. This module keeps the placement collection,
keyed by coordinate, and maps placement coordinates into layout space.
"""
from typing import List, Optional, Tuple

from urbansim.citygen.dataclass import Placement, PlacementKind
from urbansim.citygen.layout.road_spacing import grid_to_world
from urbansim.utils.exceptions import RangeError
from urbansim.utils.logger import Logger
from urbansim.utils.vector import Vector


def map_to_layout_index(coord: int, layout_size: int, placement_grid_size: int) -> int:
    """Map a placement-grid coordinate to a layout index proportionally.

    Args:
        coord: Coordinate on the placement grid.
        layout_size: Edge length of the layout.
        placement_grid_size: Edge length of the placement grid.

    Returns:
        ``round(coord / (placement_grid_size - 1) * (layout_size - 1))``; a placement
        grid of size 1 always maps to index 0.
    """
    if placement_grid_size <= 1:
        return 0
    # int(x + 0.5) keeps halves rounding up, unlike round()'s banker's rounding.
    return int(coord / (placement_grid_size - 1) * (layout_size - 1) + 0.5)


def map_to_layout_space(placement: Placement, layout_size: int, placement_grid_size: int, cell_spacing: float = 4.0) -> Vector:
    """World position of a placement inside a layout.

    Args:
        placement: Placement to map.
        layout_size: Edge length of the layout.
        placement_grid_size: Edge length of the placement grid.
        cell_spacing: World units per layout cell, as used by the layout.

    Returns:
        The world position of the layout cell the placement maps to.

    Raises:
        RangeError: If the placement lies outside the placement grid.
    """
    check_in_range(placement.px, placement.py, placement_grid_size)
    index_x = map_to_layout_index(placement.px, layout_size, placement_grid_size)
    index_z = map_to_layout_index(placement.py, layout_size, placement_grid_size)
    return Vector(grid_to_world(index_x, layout_size, cell_spacing), grid_to_world(index_z, layout_size, cell_spacing))


def check_in_range(px: int, py: int, placement_grid_size: int):
    """Raise ``RangeError`` unless ``0 <= px, py < placement_grid_size``."""
    if not (0 <= px < placement_grid_size and 0 <= py < placement_grid_size):
        raise RangeError(f'Placement ({px}, {py}) is outside the {placement_grid_size}x{placement_grid_size} placement grid')


class PlacementManager:
    """Manages placements on the placement grid.

    At most one placement exists per ``(px, py)``; adding at an occupied
    coordinate replaces the existing placement in place.
    """
    def __init__(self, grid_size: int = 8):
        """Initialize the placement manager.

        Args:
            grid_size: Edge length of the placement grid.
        """
        self.grid_size = grid_size
        self._placements: List[Placement] = []
        self.logger = Logger.get_logger('PlacementManager')

    @property
    def placements(self) -> Tuple[Placement, ...]:
        """Snapshot of the placements in insertion order."""
        return tuple(self._placements)

    def __len__(self):
        """Return the number of placements."""
        return len(self._placements)

    def placement_at(self, px: int, py: int) -> Optional[Placement]:
        """Get the placement at a coordinate, or None."""
        for placement in self._placements:
            if placement.px == px and placement.py == py:
                return placement
        return None

    def add_placement(self, item: Placement) -> Placement:
        """Add a placement, replacing any placement at the same coordinate.

        Args:
            item: The placement to add.

        Returns:
            The added placement.

        Raises:
            RangeError: If the coordinate is outside the placement grid.
        """
        check_in_range(item.px, item.py, self.grid_size)
        for i, placement in enumerate(self._placements):
            if placement.coordinate == item.coordinate:
                self._placements[i] = item
                self.logger.debug(f'Replaced {placement.kind.value} at {item.coordinate} with {item.kind.value}')
                return item
        self._placements.append(item)
        self.logger.debug(f'Placed {item.kind.value} at {item.coordinate}')
        return item

    def remove_at(self, px: int, py: int):
        """Remove the placement at a coordinate; does nothing if the cell is free.

        Raises:
            RangeError: If the coordinate is outside the placement grid.
        """
        check_in_range(px, py, self.grid_size)
        self._placements = [p for p in self._placements if not (p.px == px and p.py == py)]

    def clear(self):
        """Remove all placements."""
        self._placements = []

    def toggle_at(self, px: int, py: int, kind) -> Optional[Placement]:
        """Grid click behaviour: clear an occupied cell, otherwise place ``kind`` there.

        Args:
            px: Placement-grid X.
            py: Placement-grid Y.
            kind: Placement kind (enum or its string value).

        Returns:
            The new placement, or None if the cell was cleared.
        """
        if self.placement_at(px, py) is not None:
            self.remove_at(px, py)
            return None
        kind_name = kind.value if isinstance(kind, PlacementKind) else str(kind)
        return self.add_placement(Placement(f'{kind_name}-{px}-{py}', kind, px, py))
