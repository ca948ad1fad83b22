"""Layout synthesizer module turning city parameters into a classified cell grid.

Synthesis is a pure function of the parameters and the static configuration:
every per-cell decision is driven by a reproducible hash of the cell
coordinate, never by a global random source, so the same parameters always
produce the same layout.
"""
import math
from collections import OrderedDict

from urbansim.citygen.dataclass import (Cell, CellKind, CityParameters,
                                        Layout, RoadOrientation, RoadSpacing)
from urbansim.citygen.layout.road_spacing import (grid_to_world,
                                                  road_spacing_for)
from urbansim.config import Config
from urbansim.utils.logger import Logger
from urbansim.utils.vector import Vector


def cell_hash(grid_x: int, grid_z: int, size: int, multiplier: int = 9301, increment: int = 49297, modulus: int = 233280) -> float:
    """Reproducible value in [0, 1) for a cell coordinate.

    Args:
        grid_x: Cell index along X.
        grid_z: Cell index along Z.
        size: Grid edge length.
        multiplier: Linear congruential multiplier.
        increment: Linear congruential increment.
        modulus: Linear congruential modulus.

    Returns:
        ``((x * size + z) * multiplier + increment) mod modulus`` normalized to [0, 1).
    """
    seed = grid_x * size + grid_z
    return ((seed * multiplier + increment) % modulus) / modulus


class LayoutSynthesizer:
    """Synthesizes complete layouts from city parameters.

    Results are memoized on ``(params.layout_key, spacing)``, so edits to
    fields the layout does not depend on, such as population drift, reuse the
    cached layout.
    """

    def __init__(self, config: Config = None, cache_size: int = 32):
        """Initialize the synthesizer.

        Args:
            config: Configuration; the packaged defaults are used when omitted.
            cache_size: Number of layouts kept in the memo.
        """
        self.config = config if config is not None else Config()
        self.layout_config = self.config.section('citygen.layout')
        self.cache_size = cache_size
        self._cache = OrderedDict()
        self.logger = Logger.get_logger('LayoutSynthesizer')

    def spacing_for(self, params: CityParameters) -> RoadSpacing:
        """Road spacing derived from the parameters' terrain."""
        return road_spacing_for(params, self.config)

    def synthesize(self, params: CityParameters, spacing: RoadSpacing = None) -> Layout:
        """Synthesize the layout for a set of parameters.

        Args:
            params: Validated city parameters.
            spacing: Shared road spacing. Derived from ``params.terrain`` when omitted;
                pass the same instance to the traffic router.

        Returns:
            A layout with exactly ``size * size`` cells, none of them empty.
        """
        if spacing is None:
            spacing = self.spacing_for(params)

        key = (params.layout_key, spacing)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.logger.debug(f'Layout cache hit for size {params.size}, terrain {params.terrain.value}')
            return cached

        cells = []
        for grid_x in range(params.size):
            for grid_z in range(params.size):
                cells.append(self._classify_cell(params, spacing, grid_x, grid_z))
        layout = Layout(size=params.size, spacing=spacing, cells=tuple(cells))

        self.logger.info(
            f'Synthesized {params.size}x{params.size} layout '
            f'(terrain={params.terrain.value}, climate={params.climate.value}, arterial_step={spacing.arterial_step})'
        )

        self._cache[key] = layout
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return layout

    def clear_cache(self):
        """Drop all memoized layouts."""
        self._cache.clear()

    def _classify_cell(self, params: CityParameters, spacing: RoadSpacing, grid_x: int, grid_z: int) -> Cell:
        """Classify one cell; rules are evaluated in order and the first match wins."""
        cfg = self.layout_config
        size = params.size
        step = spacing.arterial_step

        hash_cfg = cfg['hash']
        h = cell_hash(grid_x, grid_z, size, hash_cfg['multiplier'], hash_cfg['increment'], hash_cfg['modulus'])
        position = Vector(grid_to_world(grid_x, size, spacing.cell_spacing), grid_to_world(grid_z, size, spacing.cell_spacing))

        on_x_arterial = grid_x % step == 0
        on_z_arterial = grid_z % step == 0
        if on_x_arterial or on_z_arterial:
            return self._road_cell(grid_x, grid_z, position, h, on_x_arterial, on_z_arterial, spacing)

        center_factor = self._center_factor(grid_x, grid_z, size)
        building_chance, park_end, street_end = self.classification_windows(params, center_factor)

        if h < building_chance:
            kind = self._building_kind(params, center_factor, building_chance, h, params.normalized_risk)
        elif h < park_end:
            park = cfg['parks'][params.climate.value]
            return Cell(grid_x, grid_z, CellKind.PARK, park['height'], position, color=park['color'], seed=h)
        elif h < street_end:
            orientation = self._local_street_orientation(grid_x, grid_z, step)
            return self._make_road(grid_x, grid_z, position, h, orientation, has_signal=False)
        else:
            kind = CellKind.RESIDENTIAL

        base, spread = cfg['heights'][kind.value]
        height = self._apply_height_variance(params, grid_x, grid_z, base + h * spread)
        return Cell(grid_x, grid_z, kind, height, position, color=cfg['colors'][kind.value], seed=h)

    def _road_cell(self, grid_x, grid_z, position, h, on_x_arterial, on_z_arterial, spacing: RoadSpacing) -> Cell:
        if on_x_arterial and on_z_arterial:
            orientation = RoadOrientation.INTERSECTION
            signal_step = spacing.arterial_step * spacing.signal_period
            has_signal = grid_x % signal_step == 0 and grid_z % signal_step == 0
        elif on_z_arterial:
            # constant Z, runs along X
            orientation = RoadOrientation.HORIZONTAL
            has_signal = False
        else:
            orientation = RoadOrientation.VERTICAL
            has_signal = False
        return self._make_road(grid_x, grid_z, position, h, orientation, has_signal)

    def _make_road(self, grid_x, grid_z, position, h, orientation, has_signal) -> Cell:
        base, spread = self.layout_config['heights']['road']
        return Cell(grid_x, grid_z, CellKind.ROAD, base + h * spread, position,
                    orientation=orientation, has_signal=has_signal,
                    color=self.layout_config['colors']['road'], seed=h)

    @staticmethod
    def _center_factor(grid_x: int, grid_z: int, size: int) -> float:
        half = size / 2
        distance = math.hypot(grid_x - half, grid_z - half)
        return 1 - distance / half

    def classification_windows(self, params: CityParameters, center_factor: float):
        """Upper bounds of the building, park and local-street hash windows of a cell.

        The park and street windows are shares of the mass left over by the
        building window, so the residential fallback shrinks as
        ``building_chance`` grows and the overall building share
        ``1 - (1 - building_chance) * (park_window + street_window)`` follows
        density up and risk down.

        Returns:
            ``(building_chance, park_end, street_end)``.
        """
        building_chance = self._building_chance(params, center_factor)
        rest = 1 - building_chance
        park_end = building_chance + rest * self._park_window(params)
        street_end = park_end + rest * self.layout_config['local_street']['window']
        return building_chance, park_end, street_end

    def _building_chance(self, params: CityParameters, center_factor: float) -> float:
        cfg = self.layout_config['building']
        chance = (cfg['base']
                  + cfg['density_weight'] * params.population_density / 10000
                  + cfg['center_weight'] * max(center_factor, 0.0)
                  - cfg['risk_weight'] * params.normalized_risk)
        return min(cfg['max'], max(cfg['floor'], chance))

    def _park_window(self, params: CityParameters) -> float:
        cfg = self.layout_config['park']
        window = cfg['window'] + cfg['climate_bias'][params.climate.value] + cfg['risk_weight'] * params.normalized_risk
        return max(0.0, window)

    def _building_kind(self, params: CityParameters, center_factor: float, building_chance: float, h: float, risk: float) -> CellKind:
        cfg = self.layout_config
        sky = cfg['skyscraper']
        top_slice = sky['top_slice'] + sky['terrain_bias'][params.terrain.value] - sky['risk_weight'] * risk
        top_slice = min(1.0, max(0.0, top_slice))

        if center_factor > sky['center_factor'] and top_slice > 0 and h >= building_chance * (1 - top_slice):
            return CellKind.SKYSCRAPER
        if center_factor > cfg['commercial']['center_factor']:
            return CellKind.COMMERCIAL
        if h < building_chance * cfg['building']['residential_share']:
            return CellKind.RESIDENTIAL
        return CellKind.INDUSTRIAL

    @staticmethod
    def _local_street_orientation(grid_x: int, grid_z: int, step: int) -> RoadOrientation:
        """Local streets run towards their nearest arterial."""
        to_row = min(grid_z % step, step - grid_z % step)
        to_column = min(grid_x % step, step - grid_x % step)
        return RoadOrientation.VERTICAL if to_row <= to_column else RoadOrientation.HORIZONTAL

    def _apply_height_variance(self, params: CityParameters, grid_x: int, grid_z: int, height: float) -> float:
        cfg = self.layout_config['height_variance']
        amplitude = cfg['amplitude'][params.terrain.value]
        if amplitude:
            frequency = cfg['frequency']
            height += amplitude * (math.sin(grid_x * frequency) + math.cos(grid_z * frequency)) / 2
        return round(max(cfg['min_height'], height), 4)


_default_synthesizer = None


def synthesize_layout(params: CityParameters, config: Config = None, spacing: RoadSpacing = None) -> Layout:
    """Synthesize a layout, reusing a shared memoizing synthesizer for the default config.

    Args:
        params: Validated city parameters.
        config: Optional configuration; a fresh synthesizer is used when given.
        spacing: Optional shared road spacing.

    Returns:
        The synthesized layout.
    """
    global _default_synthesizer
    if config is not None:
        return LayoutSynthesizer(config).synthesize(params, spacing)
    if _default_synthesizer is None:
        _default_synthesizer = LayoutSynthesizer()
    return _default_synthesizer.synthesize(params, spacing)
