"""
Runtime settings for the TruScore engine.

Values come from the environment (optionally a local .env file) so that hosts can
point the engine at alternative rubric or reference tables without code changes.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_RUBRIC_PATH = PROJECT_ROOT / "scoring" / "config" / "truscore.yml"
DEFAULT_DATA_DIR = PROJECT_ROOT / "data" / "tables"

SETTINGS = {
    'log_level': os.getenv('TRUSCORE_LOG_LEVEL', 'INFO').upper(),
    'rubric_path': os.getenv('TRUSCORE_RUBRIC_PATH') or str(DEFAULT_RUBRIC_PATH),
    'reference_data_dir': os.getenv('TRUSCORE_DATA_DIR') or str(DEFAULT_DATA_DIR),
    'rubric_version': os.getenv('TRUSCORE_RUBRIC_VERSION', '1.4'),
}
