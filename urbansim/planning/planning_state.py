"""Planning state module, the explicit state container consumed by the UI layer.

The state owns the city parameters, view-layer toggles, placements and the
traffic controller. The layout is derived from the parameters on demand and
is never patched in place: any parameter change yields a new layout.
"""
import asyncio
import random
from typing import Dict, List, Optional, Tuple

from urbansim.agent.vehicle import Vehicle
from urbansim.citygen.dataclass import (CityParameters, Layout, Placement,
                                        RoadSpacing)
from urbansim.citygen.layout.layout_synthesizer import LayoutSynthesizer
from urbansim.citygen.metrics.layout_metrics import (LayoutMetrics,
                                                     build_report_lines,
                                                     summarize_layout)
from urbansim.citygen.placement.placement_manager import (PlacementManager,
                                                          map_to_layout_space)
from urbansim.citygen.utility.utility_network_builder import (UtilityNetwork,
                                                              build_network)
from urbansim.config import Config
from urbansim.traffic.controller.traffic_controller import TrafficController
from urbansim.utils.data_exporter import DataExporter
from urbansim.utils.data_importer import DataImporter
from urbansim.utils.exceptions import ValidationError
from urbansim.utils.logger import Logger
from urbansim.utils.vector import Vector


class PlanningState:
    """State container for one planning session."""

    def __init__(self, config: Config = None, city_data: CityParameters = None, seed: int = None):
        """Initialize the planning state.

        Args:
            config: Configuration; the packaged defaults are used when omitted.
            city_data: Initial parameters, defaults when omitted.
            seed: Seed for the traffic simulation.
        """
        self.config = config if config is not None else Config()
        self.logger = Logger.get_logger('PlanningState')

        self.synthesizer = LayoutSynthesizer(self.config)
        self._city_data = city_data if city_data is not None else CityParameters()
        self.view_layers: Dict[str, bool] = dict(self.config['planning.view_layers'])
        self.placement_manager = PlacementManager(self.config['citygen.placement.grid_size'])

        self.is_generating = False
        self._generation_id = 0

        spacing = self.spacing
        self.traffic = TrafficController(self.config, self._city_data.size, spacing, seed=seed)

    # City parameters and layout
    @property
    def city_data(self) -> CityParameters:
        """Current city parameters."""
        return self._city_data

    @property
    def spacing(self) -> RoadSpacing:
        """Road spacing shared by the layout and the traffic routes."""
        return self.synthesizer.spacing_for(self._city_data)

    @property
    def layout(self) -> Layout:
        """Layout of the current parameters, memoized by the synthesizer."""
        return self.synthesizer.synthesize(self._city_data, self.spacing)

    def set_city_data(self, params: CityParameters) -> CityParameters:
        """Replace the parameters and keep the traffic routes in step with the layout."""
        self._city_data = params
        self.traffic.rebuild(params.size, self.spacing)
        return params

    def update_city_data(self, **changes) -> CityParameters:
        """Apply user edits; numeric values are clamped into range.

        Raises:
            ValidationError: If climate or terrain is not a known value.
        """
        params = self.set_city_data(self._city_data.updated(**changes))
        self.logger.debug(f'City data updated: {sorted(changes)}')
        return params

    # View layers
    def toggle_layer(self, name: str) -> bool:
        """Flip a view layer and return its new visibility.

        Raises:
            ValidationError: If the layer is unknown.
        """
        if name not in self.view_layers:
            raise ValidationError(f'Unknown view layer {name!r}; expected one of {sorted(self.view_layers)}')
        self.view_layers[name] = not self.view_layers[name]
        return self.view_layers[name]

    # Generation
    async def generate_city_async(self, delay: float = None) -> Optional[CityParameters]:
        """Run a generation with an artificial delay, then nudge the parameters.

        A newer call supersedes an older one; the older call's completion is
        ignored and it returns None.

        Args:
            delay: Delay in seconds, the configured UX delay when omitted.

        Returns:
            The updated parameters, or None if the request went stale.
        """
        delay = self.config['planning.generation_delay'] if delay is None else delay
        self._generation_id += 1
        generation_id = self._generation_id
        self.is_generating = True
        try:
            await asyncio.sleep(delay)
        finally:
            if generation_id == self._generation_id:
                self.is_generating = False

        if generation_id != self._generation_id:
            self.logger.debug(f'Generation {generation_id} superseded by {self._generation_id}; ignoring result')
            return None

        layout = self.layout
        params = self._city_data
        improvements = {
            'population_density': min(params.population_density * self.config['planning.density_growth'], 50000),
            'environmental_risk': max(params.environmental_risk * self.config['planning.risk_decay'], 0),
        }
        self.logger.info(f'Generated {layout.size}x{layout.size} city, applying improvements {improvements}')
        return self.update_city_data(**improvements)

    def cancel_generation(self):
        """Make any in-flight generation stale."""
        self._generation_id += 1
        self.is_generating = False

    def drift_population(self, rng=random) -> float:
        """Apply one step of background population drift.

        Growth is drawn uniformly from ``[-drift, drift)`` and applied only when
        its magnitude exceeds the configured threshold; nothing happens while
        a generation is running.

        Returns:
            The growth applied, 0 when skipped.
        """
        if self.is_generating:
            return 0.0
        drift = self.config['planning.population_drift']
        growth = rng.random() * 2 * drift - drift
        if abs(growth) <= self.config['planning.population_drift_threshold']:
            return 0.0
        self.update_city_data(population=self._city_data.population + growth)
        return growth

    # Placements
    @property
    def placements(self) -> Tuple[Placement, ...]:
        """Current placements."""
        return self.placement_manager.placements

    def add_placement(self, item: Placement) -> Placement:
        """Add or replace the placement at the item's coordinate."""
        return self.placement_manager.add_placement(item)

    def remove_placement_at(self, px: int, py: int):
        """Remove the placement at a coordinate, if any."""
        self.placement_manager.remove_at(px, py)

    def clear_placements(self):
        """Remove all placements."""
        self.placement_manager.clear()

    def placement_world_position(self, placement: Placement) -> Vector:
        """World position of a placement in the current layout."""
        return map_to_layout_space(placement, self._city_data.size, self.placement_manager.grid_size,
                                   self.spacing.cell_spacing)

    # Simulation and derived data
    def tick(self, dt: float = None) -> List[Vehicle]:
        """Advance the traffic overlay by one tick."""
        return self.traffic.tick(dt)

    def utility_network(self) -> UtilityNetwork:
        """Power and water network of the current layout."""
        return build_network(self.layout, self.config)

    def metrics(self) -> LayoutMetrics:
        """Metrics of the current layout."""
        return summarize_layout(self.layout)

    def report_lines(self) -> List[str]:
        """Plain-text city report."""
        return build_report_lines(self._city_data, self.placements, self.metrics())

    # Project files
    def export_project(self) -> Dict:
        """Project document of the current state."""
        return DataExporter(self).export_project()

    def save_project(self, file_path: str) -> Dict:
        """Write the project document to a file."""
        return DataExporter(self).export_to_json(file_path)

    def load_project(self, file_path: str) -> Dict[str, int]:
        """Restore state from a project file."""
        return DataImporter(self).import_from_file(file_path)

    def apply_project(self, data) -> Dict[str, int]:
        """Restore state from an already decoded project document."""
        return DataImporter(self).import_project(data)
