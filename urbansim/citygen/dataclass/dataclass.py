"""Module for data classes defining the city parameters, layout cells, placements and routes."""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from urbansim.utils.exceptions import ValidationError
from urbansim.utils.vector import Vector


class Climate(Enum):
    """Climate zones recognized by the synthesizer."""
    TEMPERATE = 'temperate'
    TROPICAL = 'tropical'
    ARID = 'arid'
    CONTINENTAL = 'continental'


class Terrain(Enum):
    """Terrain types recognized by the synthesizer."""
    FLAT = 'flat'
    HILLY = 'hilly'
    COASTAL = 'coastal'
    MOUNTAINOUS = 'mountainous'


class CellKind(Enum):
    """Classification of a layout cell."""
    EMPTY = 'empty'
    RESIDENTIAL = 'residential'
    COMMERCIAL = 'commercial'
    INDUSTRIAL = 'industrial'
    SKYSCRAPER = 'skyscraper'
    PARK = 'park'
    ROAD = 'road'

    @property
    def is_building(self) -> bool:
        """Whether the kind is one of the building kinds."""
        return self in BUILDING_KINDS


BUILDING_KINDS = frozenset({CellKind.RESIDENTIAL, CellKind.COMMERCIAL, CellKind.INDUSTRIAL, CellKind.SKYSCRAPER})


class RoadOrientation(Enum):
    """Orientation of a road cell.

    A horizontal road runs along the X axis (constant Z), a vertical road runs
    along the Z axis (constant X).
    """
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    INTERSECTION = 'intersection'


class RouteOrientation(Enum):
    """Orientation class of a traffic route."""
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    DIAGONAL = 'diagonal'


class PlacementKind(Enum):
    """Infrastructure that can be placed on the placement grid."""
    ROAD = 'road'
    HOSPITAL = 'hospital'
    SCHOOL = 'school'
    AIRPORT = 'airport'


# (min, max) for user-editable numeric parameters; None means unbounded.
PARAMETER_RANGES: Dict[str, Tuple[Optional[float], Optional[float]]] = {
    'size': (1, 200),
    'population': (50000, None),
    'population_density': (1000, 50000),
    'average_income': (30000, 150000),
    'age_diversity': (0, 100),
    'environmental_risk': (0, 100),
}

# Project-file (camelCase) key -> field name.
PARAMETER_KEYS = {
    'size': 'size',
    'population': 'population',
    'populationDensity': 'population_density',
    'averageIncome': 'average_income',
    'ageDiversity': 'age_diversity',
    'climate': 'climate',
    'terrain': 'terrain',
    'environmentalRisk': 'environmental_risk',
}


def _coerce_enum(enum_cls, value, name):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f'{name} must be one of {allowed}, got {value!r}') from e


def _coerce_number(value, name):
    if isinstance(value, bool) or value is None:
        raise ValidationError(f'{name} must be a number, got {value!r}')
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f'{name} must be a number, got {value!r}') from e
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f'{name} must be finite, got {value!r}')
    return number


def _clamp(value, bounds):
    low, high = bounds
    if low is not None:
        value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


@dataclass(frozen=True)
class CityParameters:
    """Validated city configuration, immutable for the duration of a synthesis call.

    Construction is strict: invalid or out-of-range values raise ``ValidationError``.
    User edits go through ``updated`` which clamps numeric values into range.
    """
    size: int = 20
    population: float = 250000
    population_density: float = 2500
    average_income: float = 75000
    age_diversity: float = 65
    climate: Climate = Climate.TEMPERATE
    terrain: Terrain = Terrain.FLAT
    environmental_risk: float = 25

    def __post_init__(self):
        """Validate every field against its declared range and normalize enum and numeric types."""
        for name, (low, high) in PARAMETER_RANGES.items():
            value = _coerce_number(getattr(self, name), name)
            if (low is not None and value < low) or (high is not None and value > high):
                allowed = f'>= {low:g}' if high is None else f'within {low:g}-{high:g}'
                raise ValidationError(f'{name} must be {allowed}, got {getattr(self, name)!r}')
            object.__setattr__(self, name, value)

        if self.size != int(self.size):
            raise ValidationError(f'size must be an integer, got {self.size!r}')
        object.__setattr__(self, 'size', int(self.size))

        object.__setattr__(self, 'climate', _coerce_enum(Climate, self.climate, 'climate'))
        object.__setattr__(self, 'terrain', _coerce_enum(Terrain, self.terrain, 'terrain'))

    @property
    def normalized_risk(self) -> float:
        """Environmental risk scaled to 0-1."""
        return self.environmental_risk / 100.0

    @property
    def layout_key(self) -> Tuple:
        """The fields layout synthesis depends on."""
        return (self.size, self.population_density, self.climate, self.terrain, self.environmental_risk)

    def updated(self, **changes) -> 'CityParameters':
        """Return a copy with user edits applied, clamping numeric values into range.

        Keys may be field names or project-file camelCase keys. Unknown keys are
        ignored; unknown climate or terrain values raise ``ValidationError``.
        """
        values = {name: getattr(self, name) for name in PARAMETER_KEYS.values()}
        for key, value in changes.items():
            name = PARAMETER_KEYS.get(key, key)
            if name not in values:
                continue
            if name in PARAMETER_RANGES:
                number = _clamp(_coerce_number(value, name), PARAMETER_RANGES[name])
                values[name] = int(round(number)) if name == 'size' else number
            else:
                values[name] = value
        return CityParameters(**values)

    def to_dict(self) -> Dict:
        """Convert the parameters to the project-file representation."""
        data = {}
        for key, name in PARAMETER_KEYS.items():
            value = getattr(self, name)
            data[key] = value.value if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'CityParameters':
        """Build parameters from a project-file dictionary, starting from defaults."""
        return cls().updated(**data)


@dataclass(frozen=True)
class RoadSpacing:
    """Arterial spacing shared by the layout synthesizer and the traffic router.

    Attributes:
        arterial_step: Grid cells between arterial lines.
        cell_spacing: World units per grid cell.
        signal_period: Every n-th arterial intersection (per axis) carries a signal.
    """
    arterial_step: int
    cell_spacing: float = 4.0
    signal_period: int = 2

    def __post_init__(self):
        """Reject spacings that cannot produce a road grid."""
        if self.arterial_step < 1:
            raise ValidationError(f'arterial_step must be >= 1, got {self.arterial_step}')
        if self.cell_spacing <= 0:
            raise ValidationError(f'cell_spacing must be positive, got {self.cell_spacing}')
        if self.signal_period < 1:
            raise ValidationError(f'signal_period must be >= 1, got {self.signal_period}')

    @property
    def world_spacing(self) -> float:
        """Distance between arterial lines in world units."""
        return self.arterial_step * self.cell_spacing


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned world-space bounds on the ground plane."""
    min_x: float
    min_z: float
    max_x: float
    max_z: float

    def contains(self, point: Vector) -> bool:
        """Check whether a point lies within the bounds (inclusive)."""
        return self.min_x <= point.x <= self.max_x and self.min_z <= point.z <= self.max_z


@dataclass(frozen=True)
class Cell:
    """One classified grid unit of a layout."""
    grid_x: int
    grid_z: int
    kind: CellKind
    height: float
    world_position: Vector
    orientation: Optional[RoadOrientation] = None
    has_signal: bool = False
    color: str = '#e5e7eb'
    seed: float = 0.0

    @property
    def is_building(self) -> bool:
        """Whether the cell holds a building."""
        return self.kind.is_building

    @property
    def id(self) -> str:
        """Stable identifier of the cell."""
        return f'{self.grid_x}-{self.grid_z}'

    def to_dict(self):
        """Convert the cell to dictionary representation."""
        return {
            'id': self.id,
            'grid_x': self.grid_x,
            'grid_z': self.grid_z,
            'kind': self.kind.value,
            'height': self.height,
            'x': self.world_position.x,
            'z': self.world_position.z,
            'orientation': self.orientation.value if self.orientation else None,
            'has_signal': self.has_signal,
            'color': self.color,
            'seed': self.seed,
        }


@dataclass(frozen=True)
class Layout:
    """Complete synthesized layout: exactly ``size * size`` cells, one per coordinate."""
    size: int
    spacing: RoadSpacing
    cells: Tuple[Cell, ...]
    _index: Dict[Tuple[int, int], Cell] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Index cells by coordinate and check that the grid is complete."""
        index = {(cell.grid_x, cell.grid_z): cell for cell in self.cells}
        if len(index) != self.size * self.size or len(self.cells) != len(index):
            raise ValueError(f'Layout of size {self.size} needs {self.size * self.size} unique cells, got {len(self.cells)}')
        object.__setattr__(self, '_index', index)

    def __len__(self):
        """Return the number of cells."""
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        """Iterate cells in layout order."""
        return iter(self.cells)

    def cell_at(self, grid_x: int, grid_z: int) -> Cell:
        """Get the cell at a grid coordinate.

        Raises:
            KeyError: If the coordinate is outside the layout.
        """
        return self._index[(grid_x, grid_z)]

    def cells_of_kind(self, *kinds: CellKind) -> List[Cell]:
        """Return cells of the given kinds, in layout order."""
        return [cell for cell in self.cells if cell.kind in kinds]

    @property
    def buildings(self) -> List[Cell]:
        """Building cells in layout order."""
        return [cell for cell in self.cells if cell.is_building]

    def kind_grid(self) -> np.ndarray:
        """Return a ``(size, size)`` array of kind names indexed ``[grid_x, grid_z]``."""
        grid = np.empty((self.size, self.size), dtype=object)
        for cell in self.cells:
            grid[cell.grid_x, cell.grid_z] = cell.kind.value
        return grid

    def to_dataframe(self) -> pd.DataFrame:
        """Return one row per cell, columns as in ``Cell.to_dict``."""
        return pd.DataFrame([cell.to_dict() for cell in self.cells])


@dataclass(frozen=True)
class Placement:
    """User-placed infrastructure on the placement grid; ``(px, py)`` is its identity."""
    id: str
    kind: PlacementKind
    px: int
    py: int

    def __post_init__(self):
        """Normalize the kind and coordinates."""
        object.__setattr__(self, 'kind', _coerce_enum(PlacementKind, self.kind, 'placement kind'))
        for name in ('px', 'py'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f'{name} must be an integer, got {value!r}')
            if isinstance(value, float) and not math.isfinite(value) or value != int(value):
                raise ValidationError(f'{name} must be an integer, got {value!r}')
            object.__setattr__(self, name, int(value))

    @property
    def coordinate(self) -> Tuple[int, int]:
        """The ``(px, py)`` identity key."""
        return (self.px, self.py)

    def to_dict(self):
        """Convert the placement to the project-file representation."""
        return {'id': self.id, 'type': self.kind.value, 'x': self.px, 'y': self.py}

    @classmethod
    def from_dict(cls, data: Dict) -> 'Placement':
        """Build a placement from a project-file entry.

        Raises:
            ValidationError: If the entry lacks a valid type or coordinates.
        """
        if not isinstance(data, dict):
            raise ValidationError(f'placement entry must be an object, got {data!r}')
        kind = data.get('type', data.get('kind'))
        px = data.get('x', data.get('px'))
        py = data.get('y', data.get('py'))
        if not isinstance(kind, str):
            raise ValidationError(f'placement type must be a string, got {kind!r}')
        placement_id = data.get('id') or f'{kind}-{px}-{py}'
        return cls(str(placement_id), kind, px, py)


@dataclass(frozen=True)
class Route:
    """A straight segment vehicles travel along.

    The orientation is derived from which axis varies between the endpoints;
    arterial routes also record the constant coordinate in ``axis_value``.
    """
    id: str
    start: Vector
    end: Vector
    orientation: RouteOrientation = field(init=False)
    axis_value: Optional[float] = field(init=False)

    def __post_init__(self):
        """Derive orientation and the constant-axis coordinate."""
        if self.start.z == self.end.z and self.start.x != self.end.x:
            orientation, axis_value = RouteOrientation.HORIZONTAL, self.start.z
        elif self.start.x == self.end.x and self.start.z != self.end.z:
            orientation, axis_value = RouteOrientation.VERTICAL, self.start.x
        else:
            orientation, axis_value = RouteOrientation.DIAGONAL, None
        object.__setattr__(self, 'orientation', orientation)
        object.__setattr__(self, 'axis_value', axis_value)

    @property
    def direction(self) -> Vector:
        """Normalized direction from start to end."""
        return (self.end - self.start).normalize()

    @property
    def length(self) -> float:
        """Route length in world units."""
        return self.start.distance(self.end)

    def point_at(self, progress: float) -> Vector:
        """Position at a progress value, snapped onto the arterial axis when there is one."""
        position = self.start.lerp(self.end, progress)
        if self.orientation == RouteOrientation.HORIZONTAL:
            position.z = self.axis_value
        elif self.orientation == RouteOrientation.VERTICAL:
            position.x = self.axis_value
        return position

    def to_dict(self):
        """Convert the route to dictionary representation."""
        return {
            'id': self.id,
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'orientation': self.orientation.value,
        }
