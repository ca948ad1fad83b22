"""Arterial spacing shared by the layout synthesizer and the traffic router.

Both sides must agree on where arterial roads are, so the spacing is computed
once from the city parameters and the resulting ``RoadSpacing`` is passed to
each of them.
"""
from typing import List

from urbansim.citygen.dataclass import (Bounds, CityParameters, RoadSpacing,
                                        Terrain)
from urbansim.config import Config


def arterial_step_for(terrain: Terrain, config: Config) -> int:
    """Grid cells between arterial lines for a terrain type.

    Args:
        terrain: Terrain of the city.
        config: Configuration holding ``citygen.layout.arterial_step``.

    Returns:
        The arterial step; hilly and mountainous terrain use wider steps.
    """
    return int(config[f'citygen.layout.arterial_step.{terrain.value}'])


def road_spacing_for(params: CityParameters, config: Config) -> RoadSpacing:
    """Build the shared road spacing for a set of city parameters."""
    return RoadSpacing(
        arterial_step=arterial_step_for(params.terrain, config),
        cell_spacing=float(config['citygen.layout.cell_spacing']),
        signal_period=int(config['citygen.layout.signal_period']),
    )


def grid_to_world(index: float, size: int, cell_spacing: float) -> float:
    """World coordinate of a grid index: ``(index - size / 2) * cell_spacing``."""
    return (index - size / 2) * cell_spacing


def layout_bounds(size: int, spacing: RoadSpacing) -> Bounds:
    """World bounds spanned by the cell centres of a layout."""
    low = grid_to_world(0, size, spacing.cell_spacing)
    high = grid_to_world(size - 1, size, spacing.cell_spacing)
    return Bounds(low, low, high, high)


def arterial_indices(size: int, spacing: RoadSpacing) -> List[int]:
    """Grid indices of arterial lines along one axis."""
    return list(range(0, size, spacing.arterial_step))


def arterial_coordinates(bounds: Bounds, world_spacing: float) -> List[float]:
    """World coordinates of arterial lines inside ``bounds``, starting at its lower edge.

    Bounds are square, so the same coordinates serve both axes.
    """
    coordinates = []
    if world_spacing <= 0:
        return coordinates
    # Step by integer multiples so float error cannot accumulate.
    count = int((bounds.max_x - bounds.min_x) / world_spacing + 1e-9)
    for i in range(count + 1):
        coordinates.append(round(bounds.min_x + i * world_spacing, 4))
    return coordinates
