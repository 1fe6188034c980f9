"""Movement schedule calculations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyipsas._parse import parse_amount


def calculate_ppe_movement(data: Mapping[str, Any]) -> float:
    """Closing carrying amount of a property, plant and equipment class.

    ``opening + additions - disposals + revaluations``.  Missing or
    non-numeric terms count as zero.
    """
    opening = parse_amount(data.get("opening"))
    additions = parse_amount(data.get("additions"))
    disposals = parse_amount(data.get("disposals"))
    revaluations = parse_amount(data.get("revaluations"))

    return opening + additions - disposals + revaluations
