"""Layout metrics module summarizing a synthesized layout for dashboards and reports."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List

import pandas as pd

from urbansim.citygen.dataclass import (BUILDING_KINDS, CellKind,
                                        CityParameters, Layout, Placement)


@dataclass
class LayoutMetrics:
    """Aggregate figures of one layout."""
    total_cells: int
    kind_counts: Dict[str, int] = field(default_factory=dict)
    building_ratio: float = 0.0
    green_ratio: float = 0.0
    road_ratio: float = 0.0
    mean_building_height: float = 0.0
    max_building_height: float = 0.0
    signal_count: int = 0

    def to_dict(self):
        """Convert the metrics to dictionary representation."""
        return {
            'total_cells': self.total_cells,
            'kind_counts': dict(self.kind_counts),
            'building_ratio': self.building_ratio,
            'green_ratio': self.green_ratio,
            'road_ratio': self.road_ratio,
            'mean_building_height': self.mean_building_height,
            'max_building_height': self.max_building_height,
            'signal_count': self.signal_count,
        }


def summarize_layout(layout: Layout) -> LayoutMetrics:
    """Compute kind counts, coverage ratios and building heights of a layout."""
    df = layout.to_dataframe()
    total = len(df)

    counts = df['kind'].value_counts().reindex([kind.value for kind in CellKind], fill_value=0)
    building_names = [kind.value for kind in BUILDING_KINDS]
    buildings = df[df['kind'].isin(building_names)]

    def ratio(count):
        return round(float(count) / total, 4) if total else 0.0

    return LayoutMetrics(
        total_cells=total,
        kind_counts={kind: int(count) for kind, count in counts.items()},
        building_ratio=ratio(len(buildings)),
        green_ratio=ratio(counts[CellKind.PARK.value]),
        road_ratio=ratio(counts[CellKind.ROAD.value]),
        mean_building_height=round(float(buildings['height'].mean()), 4) if not buildings.empty else 0.0,
        max_building_height=round(float(buildings['height'].max()), 4) if not buildings.empty else 0.0,
        signal_count=int(df['has_signal'].sum()),
    )


def kind_height_table(layout: Layout) -> pd.DataFrame:
    """Per-kind cell count and mean height, one row per kind present in the layout."""
    df = layout.to_dataframe()
    return df.groupby('kind')['height'].agg(['count', 'mean']).sort_index()


def build_report_lines(params: CityParameters, placements: Iterable[Placement], metrics: LayoutMetrics,
                       generated_at: datetime = None) -> List[str]:
    """Plain-text city report.

    Args:
        params: Current city parameters.
        placements: Current placements.
        metrics: Metrics of the current layout.
        generated_at: Report timestamp, defaults to now.

    Returns:
        Report lines, placement listing truncated to 500 characters.
    """
    generated_at = generated_at or datetime.now()
    placements = list(placements)
    listing = ' | '.join(f'{p.kind.value}@{p.px},{p.py}' for p in placements)[:500]
    return [
        'UrbanSim - City Report',
        f'Generated: {generated_at.strftime("%Y-%m-%d %H:%M:%S")}',
        f'Grid: {params.size} x {params.size}',
        f'Population: {int(params.population):,}',
        f'Density: {params.population_density:g}/km²',
        f'Climate: {params.climate.value} | Terrain: {params.terrain.value}',
        f'Avg Income: ${params.average_income:g} | Age Diversity: {params.age_diversity:g}',
        f'Buildings: {metrics.building_ratio:.1%} | Green space: {metrics.green_ratio:.1%} | Roads: {metrics.road_ratio:.1%}',
        f'Mean building height: {metrics.mean_building_height:.1f} (max {metrics.max_building_height:.1f})',
        f'Placements ({len(placements)}): {listing}',
    ]
