# ===============================
# File: assessment/parsers/models.py
# ===============================
from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class BloodPressureReading:
    systolic: float
    diastolic: float


@dataclass(frozen=True)
class TemperatureReading:
    value: float  # °F


@dataclass(frozen=True)
class AgeReading:
    value: float  # años


@dataclass(frozen=True)
class Invalid:
    field_name: str
    raw: object = None


BloodPressureResult = Union[BloodPressureReading, Invalid]
TemperatureResult = Union[TemperatureReading, Invalid]
AgeResult = Union[AgeReading, Invalid]


@dataclass
class ParsedVitals:
    blood_pressure: BloodPressureResult
    temperature: TemperatureResult
    age: AgeResult

    @property
    def invalid_fields(self):
        return [
            p.field_name
            for p in (self.blood_pressure, self.temperature, self.age)
            if isinstance(p, Invalid)
        ]


@dataclass
class FactorRisk:
    score: int
    category: str
    values: Dict[str, Optional[float]] = field(default_factory=dict)


@dataclass
class ClassificationOutcome:
    patient_id: Optional[str]
    total_score: int
    data_quality_issue: bool
    has_fever: bool
    is_high_risk: bool
