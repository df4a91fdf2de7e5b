"""Venue alias resolution."""
import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


def resolve(raw_venue: str, location_map: Dict[str, str]) -> str:
    """
    Map a raw venue to its display location.

    The lookup is an exact match on the lowercased venue. Unknown venues
    are returned unchanged.
    """
    return location_map.get(raw_venue.lower()) or raw_venue


def parse_location_map(text: str) -> Dict[str, str]:
    """
    Build a location map from JSON text.

    Args:
        text: JSON object mapping venue alias to display location

    Returns:
        Dictionary keyed by lowercased alias; empty if the JSON is unusable
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Error loading location mapper: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error("Error loading location mapper: expected a JSON object")
        return {}

    location_map = {}
    for alias, location in data.items():
        if not isinstance(location, str):
            logger.warning(f"Ignoring non-text location for venue '{alias}'")
            continue
        key = alias.lower()
        if key in location_map:
            logger.warning(f"Duplicate venue alias '{alias}', keeping the last one")
        location_map[key] = location

    return location_map


def load_location_map(file_path: str) -> Dict[str, str]:
    """Load a location map from a local JSON file; missing file gives {}."""
    path = Path(file_path)
    if not path.exists():
        logger.warning(f"Location mapper file not found at {file_path}. Using default venues.")
        return {}
    return parse_location_map(path.read_text(encoding='utf-8'))
