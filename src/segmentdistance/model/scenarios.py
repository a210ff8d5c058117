"""
Scenario Table
==============
Named segment pairs used for manual runs from the command line and as
fixtures in the test-suite.

The table is a JSON document shipped in the package assets:

    {"scenarios": [{"name": ..., "description": ...,
                    "first": [[x, y, z], [x, y, z]],
                    "second": [[x, y, z], [x, y, z]],
                    "expected": <distance or null>}, ...]}
"""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Dict, Any, Optional, List

from segmentdistance.config import DEFAULT_SCENARIOS_PATH
from segmentdistance.model.geometry_primitives import Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    name: str
    first: Segment
    second: Segment
    expected: Optional[float] = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "first": self.first.to_array().tolist(),
            "second": self.second.to_array().tolist(),
            "expected": self.expected,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Scenario:
        try:
            name = data["name"]
            first = Segment.from_array(data["first"])
            second = Segment.from_array(data["second"])
        except KeyError as e:
            raise ValueError(f"Scenario entry is missing field {e}") from e

        expected = data.get("expected")
        return Scenario(
            name=str(name),
            first=first,
            second=second,
            expected=None if expected is None else float(expected),
            description=data.get("description", ""),
        )


def load_scenarios(filepath: str = DEFAULT_SCENARIOS_PATH) -> Dict[str, Scenario]:
    """
    Load the scenario table from a JSON file.

    Args:
        filepath: Path to the JSON document.

    Raises:
        ValueError: If the document or one of its entries is malformed.

    Returns:
        Scenarios keyed by name, in file order.
    """
    logger.info(f"Loading scenarios from: {filepath}")
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    entries = data.get("scenarios") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        msg = f"Scenario file '{filepath}' must contain a 'scenarios' list."
        logger.error(msg)
        raise ValueError(msg)

    scenarios: Dict[str, Scenario] = {}
    for entry in entries:
        try:
            scenario = Scenario.from_dict(entry)
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid scenario entry {entry!r}: {e}")
            raise ValueError(f"Invalid scenario entry in '{filepath}': {e}") from e
        if scenario.name in scenarios:
            raise ValueError(f"Duplicate scenario name: {scenario.name}")
        scenarios[scenario.name] = scenario

    logger.debug(f"Loaded {len(scenarios)} scenarios.")
    return scenarios


def save_scenarios(scenarios: List[Scenario], filepath: str) -> None:
    logger.info(f"Saving {len(scenarios)} scenarios to: {filepath}")
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump({"scenarios": [s.to_dict() for s in scenarios]}, f, indent=2)


def get_scenario(name: str, filepath: str = DEFAULT_SCENARIOS_PATH) -> Scenario:
    """
    Look up a single scenario by name.

    Raises:
        KeyError: If no scenario with that name exists.
    """
    scenarios = load_scenarios(filepath)
    if name not in scenarios:
        raise KeyError(f"Unknown scenario '{name}'. Available: {', '.join(scenarios)}")
    return scenarios[name]
