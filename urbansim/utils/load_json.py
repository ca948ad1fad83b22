"""This module provides helpers to read and write JSON documents used by project files."""

import json
import os

from urbansim.utils.logger import Logger


def load_json(file_path: str):
    """Load a JSON file from a specific path.

    Args:
        file_path: The path to the JSON file to load.

    Returns:
        The JSON data from the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file content is not valid JSON.
    """
    logger = Logger.get_logger('JsonLoader')
    logger.debug(f'Loading JSON from {file_path}')
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(data, file_path: str, indent: int = 2):
    """Write JSON data to a file, creating parent directories when needed.

    Args:
        data: JSON-serializable data.
        file_path: Destination path.
        indent: Indentation passed to ``json.dump``.
    """
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent)
