from typing import Any, Mapping, Optional

from assessment.parsers.models import (
    AgeResult,
    BloodPressureResult,
    ClassificationOutcome,
    FactorRisk,
    Invalid,
    ParsedVitals,
    TemperatureResult,
)
from assessment.parsers.vitals import parse_vitals

INVALID_CATEGORY = "Invalid/Missing"

RISK_SCORES = {
    "blood_pressure": {"Normal": 1, "Elevated": 2, "Stage 1": 3, "Stage 2": 4},
    "temperature": {"Normal": 0, "Low Fever": 1, "High Fever": 2},
    "age": {"Under 40": 1, "40-65": 1, "Over 65": 2},
}

THRESHOLDS = {
    "high_risk_score": 4,
    "fever_temperature": 99.6,
    "high_fever_temperature": 101,
}


def _blood_pressure_category(systolic: float, diastolic: float) -> str:
    # Primer match gana, de mayor a menor severidad
    if systolic >= 140 or diastolic >= 90:
        return "Stage 2"
    if 130 <= systolic <= 139 or 80 <= diastolic <= 89:
        return "Stage 1"
    if 120 <= systolic <= 129 and diastolic < 80:
        return "Elevated"
    # Lecturas validas fuera de las cuatro bandas (p.ej. 139.5/70) caen aqui
    return "Normal"


def blood_pressure_risk(parsed: BloodPressureResult) -> FactorRisk:
    if isinstance(parsed, Invalid):
        return FactorRisk(0, INVALID_CATEGORY, {"systolic": None, "diastolic": None})
    category = _blood_pressure_category(parsed.systolic, parsed.diastolic)
    return FactorRisk(
        RISK_SCORES["blood_pressure"][category],
        category,
        {"systolic": parsed.systolic, "diastolic": parsed.diastolic},
    )


def temperature_risk(parsed: TemperatureResult) -> FactorRisk:
    if isinstance(parsed, Invalid):
        return FactorRisk(0, INVALID_CATEGORY, {"temperature": None})
    if parsed.value >= THRESHOLDS["high_fever_temperature"]:
        category = "High Fever"
    elif parsed.value >= THRESHOLDS["fever_temperature"]:
        category = "Low Fever"
    else:
        category = "Normal"
    return FactorRisk(RISK_SCORES["temperature"][category], category, {"temperature": parsed.value})


def age_risk(parsed: AgeResult) -> FactorRisk:
    if isinstance(parsed, Invalid):
        return FactorRisk(0, INVALID_CATEGORY, {"age": None})
    if parsed.value > 65:
        category = "Over 65"
    elif parsed.value >= 40:
        category = "40-65"
    else:
        category = "Under 40"
    return FactorRisk(RISK_SCORES["age"][category], category, {"age": parsed.value})


def total_risk_score(vitals: ParsedVitals) -> int:
    return (
        blood_pressure_risk(vitals.blood_pressure).score
        + temperature_risk(vitals.temperature).score
        + age_risk(vitals.age).score
    )


def has_data_quality_issues(vitals: ParsedVitals) -> bool:
    return bool(vitals.invalid_fields)


def has_fever(vitals: ParsedVitals) -> bool:
    temp = vitals.temperature
    return not isinstance(temp, Invalid) and temp.value >= THRESHOLDS["fever_temperature"]


def is_high_risk(vitals: ParsedVitals) -> bool:
    return total_risk_score(vitals) >= THRESHOLDS["high_risk_score"]


def classify(patient: Mapping[str, Any], vitals: Optional[ParsedVitals] = None) -> ClassificationOutcome:
    """Classify one raw record. The three predicates are computed independently."""
    vitals = vitals or parse_vitals(patient)
    return ClassificationOutcome(
        patient_id=patient.get("patient_id"),
        total_score=total_risk_score(vitals),
        data_quality_issue=has_data_quality_issues(vitals),
        has_fever=has_fever(vitals),
        is_high_risk=is_high_risk(vitals),
    )
