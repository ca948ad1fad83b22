"""Module for exporting the planning state as a project document.

The project document is the minimal JSON needed to round-trip a planning
session: ``{version, savedAt, cityData, viewLayers, placements}``.
"""
from datetime import datetime, timezone
from typing import Dict

from urbansim.utils.load_json import save_json
from urbansim.utils.logger import Logger

PROJECT_VERSION = 1


class DataExporter:
    """Exports a planning state to a project document."""

    def __init__(self, planning_state):
        """Initialize the data exporter with a planning state.

        Args:
            planning_state: The state container to export.
        """
        self.planning_state = planning_state
        self.logger = Logger.get_logger('DataExporter')

    def export_project(self, saved_at: datetime = None) -> Dict:
        """Export the planning state as a project dictionary.

        Args:
            saved_at: Timestamp to record, defaults to now (UTC).

        Returns:
            The project document.
        """
        saved_at = saved_at or datetime.now(timezone.utc)
        state = self.planning_state
        return {
            'version': PROJECT_VERSION,
            'savedAt': saved_at.isoformat(),
            'cityData': state.city_data.to_dict(),
            'viewLayers': dict(state.view_layers),
            'placements': [placement.to_dict() for placement in state.placements],
        }

    def export_to_json(self, file_path: str) -> Dict:
        """Write the project document to a JSON file.

        Args:
            file_path: Destination path.

        Returns:
            The written project document.
        """
        data = self.export_project()
        save_json(data, file_path)
        self.logger.info(f'Exported project with {len(data["placements"])} placements to {file_path}')
        return data
