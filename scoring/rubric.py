"""
Rubric loading.

The rubric (scoring/config/truscore.yml) holds every constant the pillar
calculators and the insight generator use.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config.settings import SETTINGS
from data.reference import load_yaml
from utils.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ('pillars', 'aggregate', 'insights')
PILLAR_NAMES = ('body', 'planet', 'care', 'open')


def load_rubric(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load and sanity-check the scoring rubric.

    Args:
        path: Optional override; defaults to SETTINGS['rubric_path']

    Raises:
        ReferenceDataError: if the file is missing or a section is absent
    """
    path = path or SETTINGS['rubric_path']
    rubric = load_yaml(path)

    missing = [s for s in REQUIRED_SECTIONS if s not in rubric]
    missing += [f"pillars.{p}" for p in PILLAR_NAMES if p not in rubric.get('pillars', {})]
    if missing:
        raise ReferenceDataError(f"Rubric {path} is missing sections: {', '.join(missing)}")

    version = str(rubric.get('version', 'unknown'))
    if version != SETTINGS['rubric_version']:
        logger.warning(f"Rubric version {version} differs from configured {SETTINGS['rubric_version']}")
    logger.debug(f"Loaded TruScore rubric v{version} from {path}")
    return rubric
