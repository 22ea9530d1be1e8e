"""Shared fixtures for the scorecard tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow running tests without `pip install -e .` by making the project root importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


# ---------------------------------------------------------------------------
# Scenario profiles, as entered in the form (string-encoded)
# ---------------------------------------------------------------------------

SCENARIOS: dict[str, dict[str, str]] = {
    "healthy_young_male": {
        "age": "25", "sex": "male", "a1c": "5.2", "ldl": "85", "lpa": "35",
        "apoB": "75", "systolic": "115", "diastolic": "75",
        "waistHeightRatio": "0.45", "vo2Max": "52", "gripStrength": "47", "bodyFat": "12",
    },
    "healthy_young_female": {
        "age": "25", "sex": "female", "a1c": "5.1", "ldl": "90", "lpa": "40",
        "apoB": "78", "systolic": "110", "diastolic": "70",
        "waistHeightRatio": "0.42", "vo2Max": "42", "gripStrength": "32", "bodyFat": "18",
    },
    "healthy_middle_aged_male": {
        "age": "45", "sex": "male", "a1c": "5.4", "ldl": "95", "lpa": "45",
        "apoB": "80", "systolic": "120", "diastolic": "78",
        "waistHeightRatio": "0.48", "vo2Max": "44", "gripStrength": "42", "bodyFat": "16",
    },
    "healthy_middle_aged_female": {
        "age": "45", "sex": "female", "a1c": "5.3", "ldl": "98", "lpa": "42",
        "apoB": "82", "systolic": "118", "diastolic": "76",
        "waistHeightRatio": "0.46", "vo2Max": "35", "gripStrength": "29", "bodyFat": "22",
    },
    "unhealthy_male": {
        "age": "40", "sex": "male", "a1c": "7.2", "ldl": "165", "lpa": "120",
        "apoB": "125", "systolic": "145", "diastolic": "92",
        "waistHeightRatio": "0.65", "vo2Max": "28", "gripStrength": "28", "bodyFat": "28",
    },
    "unhealthy_female": {
        "age": "38", "sex": "female", "a1c": "6.8", "ldl": "155", "lpa": "110",
        "apoB": "115", "systolic": "140", "diastolic": "88",
        "waistHeightRatio": "0.62", "vo2Max": "22", "gripStrength": "16", "bodyFat": "32",
    },
    "elderly_healthy_male": {
        "age": "65", "sex": "male", "a1c": "5.6", "ldl": "105", "lpa": "55",
        "apoB": "85", "systolic": "125", "diastolic": "80",
        "waistHeightRatio": "0.52", "vo2Max": "32", "gripStrength": "36", "bodyFat": "20",
    },
    "elderly_healthy_female": {
        "age": "65", "sex": "female", "a1c": "5.5", "ldl": "110", "lpa": "50",
        "apoB": "88", "systolic": "122", "diastolic": "78",
        "waistHeightRatio": "0.50", "vo2Max": "26", "gripStrength": "25", "bodyFat": "24",
    },
    "athletic_male": {
        "age": "30", "sex": "male", "a1c": "4.9", "ldl": "75", "lpa": "25",
        "apoB": "65", "systolic": "110", "diastolic": "68",
        "waistHeightRatio": "0.42", "vo2Max": "58", "gripStrength": "52", "bodyFat": "8",
    },
    "sedentary": {
        "age": "35", "sex": "male", "a1c": "6.1", "ldl": "140", "lpa": "85",
        "apoB": "105", "systolic": "135", "diastolic": "85",
        "waistHeightRatio": "0.58", "vo2Max": "25", "gripStrength": "25", "bodyFat": "25",
    },
}


@pytest.fixture
def scenarios() -> dict[str, dict[str, str]]:
    """Fresh copies of every scenario profile."""
    return {name: dict(form) for name, form in SCENARIOS.items()}


@pytest.fixture
def healthy_young_male(scenarios) -> dict[str, str]:
    return scenarios["healthy_young_male"]


@pytest.fixture
def unhealthy_male(scenarios) -> dict[str, str]:
    return scenarios["unhealthy_male"]


@pytest.fixture
def athletic_male(scenarios) -> dict[str, str]:
    return scenarios["athletic_male"]
