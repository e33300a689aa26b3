from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from assessment.commons.logger import logger
from assessment.commons.risk_engine import (
    age_risk,
    blood_pressure_risk,
    classify,
    has_data_quality_issues,
    temperature_risk,
)
from assessment.parsers.vitals import parse_vitals


@dataclass
class AnalysisResults:
    high_risk_patients: List[str] = field(default_factory=list)
    fever_patients: List[str] = field(default_factory=list)
    data_quality_issues: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, List[str]]:
        return asdict(self)


def _sorted_unique(ids: List[str]) -> List[str]:
    return sorted(dict.fromkeys(ids))


class RiskAnalyzer:
    """Batch classification of the patients accumulated during one run."""

    def __init__(self):
        self.patients: List[Mapping[str, Any]] = []
        self.results = AnalysisResults()

    def add_patients(self, patients: Union[List[Mapping[str, Any]], Mapping[str, Any]]):
        if isinstance(patients, list):
            self.patients.extend(patients)
        else:
            self.patients.append(patients)

    def clear(self):
        self.patients = []
        self.results = AnalysisResults()

    def analyze(self) -> AnalysisResults:
        logger.info(f"Analyzing {len(self.patients)} patients...")
        high_risk: List[str] = []
        fever: List[str] = []
        data_quality: List[str] = []

        for patient in self.patients:
            outcome = classify(patient)
            patient_id = outcome.patient_id
            if not isinstance(patient_id, str):
                logger.warning(f"Patient record without a string patient_id skipped: {dict(patient)}")
                continue

            # Con problemas de calidad solo va a data_quality_issues
            if outcome.data_quality_issue:
                data_quality.append(patient_id)
                continue

            if outcome.has_fever:
                fever.append(patient_id)
            if outcome.is_high_risk:
                high_risk.append(patient_id)

        self.results = AnalysisResults(
            high_risk_patients=_sorted_unique(high_risk),
            fever_patients=_sorted_unique(fever),
            data_quality_issues=_sorted_unique(data_quality),
        )

        logger.info("Analysis complete:")
        logger.info(f"- High risk patients: {len(self.results.high_risk_patients)}")
        logger.info(f"- Fever patients: {len(self.results.fever_patients)}")
        logger.info(f"- Data quality issues: {len(self.results.data_quality_issues)}")
        return self.results

    def get_patient_analysis(self, patient_id: str) -> Optional[Dict[str, Any]]:
        patient = next((p for p in self.patients if p.get("patient_id") == patient_id), None)
        if patient is None:
            return None

        vitals = parse_vitals(patient)
        outcome = classify(patient, vitals)
        return {
            "patient_id": patient_id,
            "name": patient.get("name"),
            "age": patient.get("age"),
            "blood_pressure": patient.get("blood_pressure"),
            "temperature": patient.get("temperature"),
            "total_risk_score": outcome.total_score,
            "has_data_quality_issues": outcome.data_quality_issue,
            "has_fever": outcome.has_fever,
            "is_high_risk": outcome.is_high_risk,
            "risk_breakdown": {
                "blood_pressure": asdict(blood_pressure_risk(vitals.blood_pressure)),
                "temperature": asdict(temperature_risk(vitals.temperature)),
                "age": asdict(age_risk(vitals.age)),
            },
        }

    def get_summary(self) -> Dict[str, Any]:
        total = len(self.patients)
        valid = sum(1 for p in self.patients if not has_data_quality_issues(parse_vitals(p)))
        dq_count = len(self.results.data_quality_issues)
        return {
            "total_patients": total,
            "valid_patients": valid,
            "high_risk_count": len(self.results.high_risk_patients),
            "fever_count": len(self.results.fever_patients),
            "data_quality_count": dq_count,
            "data_quality_percentage": round(dq_count / total * 100, 2) if total else 0,
        }
