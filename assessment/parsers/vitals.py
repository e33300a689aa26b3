"""Field parsers for the three vitals carried by a patient record.

Parsing is total: every input maps to a reading or to ``Invalid``.
Malformed values are expected from the upstream API and never raise.
"""
from typing import Any, Mapping

from .base import _coerce_number, _is_empty_literal, _leading_number
from .models import (
    AgeReading,
    AgeResult,
    BloodPressureReading,
    BloodPressureResult,
    Invalid,
    ParsedVitals,
    TemperatureReading,
    TemperatureResult,
)

TEMPERATURE_MAX_F = 120
AGE_MAX_YEARS = 150


def parse_blood_pressure(raw: Any) -> BloodPressureResult:
    """'S/D' -> BloodPressureReading. Exactly one '/', both sides > 0."""
    if not isinstance(raw, str) or _is_empty_literal(raw):
        return Invalid("blood_pressure", raw)

    parts = raw.strip().split("/")
    if len(parts) != 2:
        return Invalid("blood_pressure", raw)

    systolic = _leading_number(parts[0])
    diastolic = _leading_number(parts[1])
    if systolic is None or diastolic is None:
        return Invalid("blood_pressure", raw)
    if systolic <= 0 or diastolic <= 0:
        return Invalid("blood_pressure", raw)
    return BloodPressureReading(systolic=systolic, diastolic=diastolic)


def parse_temperature(raw: Any) -> TemperatureResult:
    value = _coerce_number(raw)
    if value is None or not (0 < value <= TEMPERATURE_MAX_F):
        return Invalid("temperature", raw)
    return TemperatureReading(value=value)


def parse_age(raw: Any) -> AgeResult:
    value = _coerce_number(raw)
    if value is None or not (0 < value <= AGE_MAX_YEARS):
        return Invalid("age", raw)
    return AgeReading(value=value)


def parse_vitals(patient: Mapping[str, Any]) -> ParsedVitals:
    """Parse the vitals of a raw record without touching the record."""
    return ParsedVitals(
        blood_pressure=parse_blood_pressure(patient.get("blood_pressure")),
        temperature=parse_temperature(patient.get("temperature")),
        age=parse_age(patient.get("age")),
    )
