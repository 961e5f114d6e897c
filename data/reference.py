"""
Loading helpers for the static reference tables shipped under data/tables.

Tables are read once, when a lookup service is built, and never during scoring.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from config.settings import SETTINGS
from utils.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML mapping from disk.

    Raises:
        ReferenceDataError: if the file is missing, unparsable, or not a mapping
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        logger.error(f"Reference file not found: {path}")
        raise ReferenceDataError(f"Reference file not found: {path}") from e
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {path}: {e}")
        raise ReferenceDataError(f"Invalid YAML in {path}") from e

    if not isinstance(data, dict):
        raise ReferenceDataError(f"Expected a mapping at the top of {path}")
    return data


def table_path(name: str, data_dir: Optional[Union[str, Path]] = None) -> Path:
    """Resolve a table file name (e.g. 'brands.yml') against the configured data dir."""
    base = Path(data_dir) if data_dir else Path(SETTINGS['reference_data_dir'])
    return base / name
