#!/usr/bin/env python3
"""Score a product JSON file (snake_case or an Open Food Facts payload) and print the TruScore."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
import os
from typing import Any, Dict, Optional

# Ensure project root is on PYTHONPATH
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config.settings import SETTINGS
from scoring.engine import TruScoreEngine
from utils.exceptions import ReferenceDataError
from utils.score_formatter import format_score_display, get_score_label


logging.basicConfig(level=SETTINGS['log_level'], format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)


def _load_json(path: Optional[str]) -> Optional[Dict[str, Any]]:
    if not path:
        return None
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(json_path)
    with json_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    # Open Food Facts API responses wrap the product
    if isinstance(data, dict) and isinstance(data.get("product"), dict):
        return data["product"]
    return data


def main():
    parser = argparse.ArgumentParser(description="Compute the TruScore for a product")
    parser.add_argument("product", help="Path to a product JSON file")
    parser.add_argument("--preferences", help="Optional JSON file of values preferences (enables insights)")
    parser.add_argument("--explain", action="store_true", help="Include per-pillar adjustments in the output")

    args = parser.parse_args()

    product = _load_json(args.product)
    preferences = _load_json(args.preferences)

    try:
        engine = TruScoreEngine()
    except ReferenceDataError as e:
        logger.error(f"Could not load reference data: {e}")
        sys.exit(1)

    result = engine.compute_score(product, preferences)
    output = result.to_dict()
    if not args.explain:
        output.pop("adjustments", None)
    output["display"] = format_score_display(result.composite_score)
    output["label"] = get_score_label(result.composite_score)

    logger.info(f"TruScore {output['display']} ({output['label']})")
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
