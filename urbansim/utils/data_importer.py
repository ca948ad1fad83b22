"""This module imports a project document back into a planning state.

Loading is forgiving: whatever valid subset of ``cityData``, ``placements``
and ``viewLayers`` is present gets applied, malformed parts are skipped with
a warning, and a partially valid document never raises.
"""
import json
from typing import Dict

from urbansim.citygen.dataclass import Placement
from urbansim.citygen.dataclass.dataclass import PARAMETER_KEYS
from urbansim.utils.exceptions import (ProjectFileError, RangeError,
                                       ValidationError)
from urbansim.utils.load_json import load_json
from urbansim.utils.logger import Logger


class DataImporter:
    """Applies project documents to a planning state."""

    def __init__(self, planning_state):
        """Initialize the data importer.

        Args:
            planning_state: The state container to restore into.
        """
        self.planning_state = planning_state
        self.logger = Logger.get_logger('DataImporter')

    def import_from_file(self, file_path: str) -> Dict[str, int]:
        """Read a project file and apply it.

        Args:
            file_path: The project JSON file.

        Returns:
            Counts of applied city fields, placements and view layers.

        Raises:
            ProjectFileError: If the file cannot be read, is not UTF-8 or is not JSON.
        """
        self.logger.info(f'Importing project from {file_path}')
        try:
            data = load_json(file_path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProjectFileError(f'Cannot read project file {file_path}: {e}') from e
        return self.import_project(data)

    def import_project(self, data) -> Dict[str, int]:
        """Apply a project document to the planning state.

        Args:
            data: The decoded project document.

        Returns:
            Counts of applied city fields, placements and view layers.
        """
        applied = {'city_fields': 0, 'placements': 0, 'view_layers': 0}
        if not isinstance(data, dict):
            self.logger.warning(f'Project document must be an object, got {type(data).__name__}; nothing imported')
            return applied

        if isinstance(data.get('cityData'), dict):
            applied['city_fields'] = self._import_city_data(data['cityData'])
        elif 'cityData' in data:
            self.logger.warning('Ignoring malformed cityData')

        if isinstance(data.get('placements'), list):
            applied['placements'] = self._import_placements(data['placements'])
        elif 'placements' in data:
            self.logger.warning('Ignoring malformed placements')

        # Current toggles stay when the document has none.
        if isinstance(data.get('viewLayers'), dict):
            applied['view_layers'] = self._import_view_layers(data['viewLayers'])

        self.logger.info(
            f'Import completed: {applied["city_fields"]} city fields, '
            f'{applied["placements"]} placements, {applied["view_layers"]} view layers'
        )
        return applied

    def _import_city_data(self, city_data: Dict) -> int:
        """Apply city fields one by one so a bad field does not block the rest."""
        state = self.planning_state
        params = state.city_data
        count = 0
        for key, value in city_data.items():
            if key not in PARAMETER_KEYS:
                self.logger.debug(f'Ignoring unknown cityData.{key}')
                continue
            try:
                params = params.updated(**{key: value})
            except ValidationError as e:
                self.logger.warning(f'Skipping cityData.{key}: {e}')
                continue
            count += 1
        state.set_city_data(params)
        return count

    def _import_placements(self, entries) -> int:
        state = self.planning_state
        state.clear_placements()
        count = 0
        for entry in entries:
            try:
                state.add_placement(Placement.from_dict(entry))
            except (ValidationError, RangeError) as e:
                self.logger.warning(f'Skipping placement {entry!r}: {e}')
                continue
            count += 1
        return count

    def _import_view_layers(self, layers: Dict) -> int:
        state = self.planning_state
        count = 0
        for name, visible in layers.items():
            if name in state.view_layers and isinstance(visible, bool):
                state.view_layers[name] = visible
                count += 1
        return count
