"""Utility network builder module for power and water lines over building cells.

The network is a heuristic proximity graph, not a minimum spanning tree or a
shortest-path construction. Building cells are walked in layout order and each
cell is linked to the next one whenever the two are close on at least one
axis. Depending on the layout order this yields redundant or disconnected
edges; that is the intended visual behaviour and should not be "optimized"
into an MST.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from urbansim.citygen.dataclass import Layout
from urbansim.config import Config
from urbansim.utils.logger import Logger

Point3 = Tuple[float, float, float]
Edge = Tuple[Point3, Point3]


@dataclass
class UtilityNetwork:
    """Power and water lines plus substations, in world coordinates (x, y, z)."""
    power_edges: List[Edge] = field(default_factory=list)
    water_edges: List[Edge] = field(default_factory=list)
    substations: List[Point3] = field(default_factory=list)

    def to_dict(self):
        """Convert the network to dictionary representation."""
        return {
            'power_edges': [list(map(list, edge)) for edge in self.power_edges],
            'water_edges': [list(map(list, edge)) for edge in self.water_edges],
            'substations': [list(point) for point in self.substations],
        }


def _sequential_links(xs: np.ndarray, zs: np.ndarray, threshold: float) -> np.ndarray:
    """Indices ``i`` where building ``i`` links to building ``i + 1``."""
    close_x = np.abs(np.diff(xs)) < threshold
    close_z = np.abs(np.diff(zs)) < threshold
    return np.flatnonzero(close_x | close_z)


def build_network(layout: Layout, config: Config = None) -> UtilityNetwork:
    """Build the power and water network over a layout's building cells.

    Args:
        layout: The synthesized layout.
        config: Configuration holding ``citygen.utility``; defaults when omitted.

    Returns:
        The utility network. Power edges hang at building height plus an offset,
        water edges run at a fixed depth, and a substation sits next to every
        n-th building.
    """
    config = config if config is not None else Config()
    cfg = config.section('citygen.utility')
    logger = Logger.get_logger('UtilityNetworkBuilder')

    buildings = layout.buildings
    network = UtilityNetwork()
    if not buildings:
        return network

    xs = np.array([b.world_position.x for b in buildings], dtype=float)
    zs = np.array([b.world_position.z for b in buildings], dtype=float)
    heights = np.array([b.height for b in buildings], dtype=float)

    power_y = heights + cfg['power_height_offset']
    for i in _sequential_links(xs, zs, cfg['power_threshold']):
        network.power_edges.append((
            (float(xs[i]), float(power_y[i]), float(zs[i])),
            (float(xs[i + 1]), float(power_y[i + 1]), float(zs[i + 1])),
        ))

    depth = float(cfg['water_depth'])
    for i in _sequential_links(xs, zs, cfg['water_threshold']):
        network.water_edges.append((
            (float(xs[i]), depth, float(zs[i])),
            (float(xs[i + 1]), depth, float(zs[i + 1])),
        ))

    offset_x, offset_y, offset_z = cfg['substation_offset']
    for i in range(0, len(buildings), cfg['substation_stride']):
        network.substations.append((float(xs[i] + offset_x), float(offset_y), float(zs[i] + offset_z)))

    logger.debug(
        f'Utility network: {len(network.power_edges)} power, {len(network.water_edges)} water, '
        f'{len(network.substations)} substations over {len(buildings)} buildings'
    )
    return network
