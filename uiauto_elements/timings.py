# uiauto_elements/timings.py
"""
@file timings.py
@brief Wait timeout presets and defaults for matcher polling.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict


TIMEOUT_FIELDS: Dict[str, Dict[str, Any]] = {
    "element_wait": {"timeout": 5.0, "interval": 0.1},
    "collection_wait": {"timeout": 5.0, "interval": 0.1},
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "fast": {
        "element_wait": {"timeout": 2.0, "interval": 0.05},
        "collection_wait": {"timeout": 2.0, "interval": 0.05},
    },
    "slow": {
        "element_wait": {"timeout": 15.0, "interval": 0.25},
        "collection_wait": {"timeout": 15.0, "interval": 0.25},
    },
    "ci": {
        "element_wait": {"timeout": 20.0, "interval": 0.3},
        "collection_wait": {"timeout": 20.0, "interval": 0.3},
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Any]:
    preset_key = (preset or "default").lower()
    values: Dict[str, Any] = deepcopy(TIMEOUT_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ValueError(f"Unknown timing preset: {preset}")

    for key, value in overrides.items():
        base = deepcopy(values[key])
        base.update(value)
        values[key] = base

    return values
