from assessment.services.analysis_service import RiskAnalyzer

PATIENTS = [
    {"patient_id": "DEMO003", "blood_pressure": "160/100", "temperature": 103.0, "age": 75},
    {"patient_id": "DEMO001", "blood_pressure": "110/70", "temperature": 100.2, "age": 30},
    {"patient_id": "DEMO002", "blood_pressure": "INVALID", "temperature": 101.5, "age": 80},
    {"patient_id": "DEMO004", "blood_pressure": "118/75", "temperature": 98.1, "age": 30},
    {"patient_id": "DEMO005", "blood_pressure": "135/85", "temperature": "99.0", "age": "55"},
]


def make_analyzer(patients=PATIENTS):
    analyzer = RiskAnalyzer()
    analyzer.add_patients(list(patients))
    return analyzer


def test_partitions_patients():
    results = make_analyzer().analyze()
    assert results.high_risk_patients == ["DEMO003", "DEMO005"]
    assert results.fever_patients == ["DEMO001", "DEMO003"]
    # DEMO002 tiene fiebre pero solo aparece en calidad de datos
    assert results.data_quality_issues == ["DEMO002"]


def test_data_quality_patients_are_exclusive():
    results = make_analyzer().analyze()
    dq = set(results.data_quality_issues)
    assert not dq & set(results.fever_patients)
    assert not dq & set(results.high_risk_patients)


def test_analyze_is_idempotent():
    analyzer = make_analyzer()
    first = analyzer.analyze().as_dict()
    second = analyzer.analyze().as_dict()
    assert first == second


def test_duplicate_ids_are_collapsed():
    analyzer = make_analyzer(PATIENTS + [PATIENTS[0]])
    assert analyzer.analyze().high_risk_patients == ["DEMO003", "DEMO005"]


def test_records_without_id_are_not_classified():
    analyzer = make_analyzer([{"blood_pressure": "INVALID"}])
    results = analyzer.analyze()
    assert results.as_dict() == {"high_risk_patients": [], "fever_patients": [], "data_quality_issues": []}
    assert analyzer.get_summary()["total_patients"] == 1


def test_add_single_patient_and_clear():
    analyzer = RiskAnalyzer()
    analyzer.add_patients(PATIENTS[0])
    assert len(analyzer.patients) == 1
    analyzer.analyze()
    analyzer.clear()
    assert analyzer.patients == []
    assert analyzer.results.high_risk_patients == []


def test_summary():
    analyzer = make_analyzer()
    analyzer.analyze()
    summary = analyzer.get_summary()
    assert summary == {
        "total_patients": 5,
        "valid_patients": 4,
        "high_risk_count": 2,
        "fever_count": 2,
        "data_quality_count": 1,
        "data_quality_percentage": 20.0,
    }


def test_summary_percentage_two_decimals_and_empty():
    analyzer = make_analyzer(PATIENTS[:3])
    analyzer.analyze()
    assert analyzer.get_summary()["data_quality_percentage"] == 33.33
    empty = RiskAnalyzer()
    empty.analyze()
    assert empty.get_summary()["data_quality_percentage"] == 0


def test_patient_analysis_breakdown():
    analyzer = make_analyzer()
    detail = analyzer.get_patient_analysis("DEMO002")
    assert detail["has_data_quality_issues"] is True
    assert detail["has_fever"] is True
    assert detail["total_risk_score"] == 4
    assert detail["risk_breakdown"]["blood_pressure"] == {
        "score": 0,
        "category": "Invalid/Missing",
        "values": {"systolic": None, "diastolic": None},
    }
    assert detail["risk_breakdown"]["temperature"]["category"] == "High Fever"
    assert detail["risk_breakdown"]["age"]["category"] == "Over 65"
    assert analyzer.get_patient_analysis("NOPE") is None


def test_oversized_integer_vitals_go_to_data_quality():
    analyzer = make_analyzer(
        [
            {"patient_id": "DEMO010", "blood_pressure": "120/80", "temperature": 98.6, "age": 10**400},
            {"patient_id": "DEMO011", "blood_pressure": "120/80", "temperature": -(10**400), "age": 40},
        ]
    )
    results = analyzer.analyze()
    assert results.data_quality_issues == ["DEMO010", "DEMO011"]
    assert results.high_risk_patients == []


def test_non_string_ids_are_not_classified():
    analyzer = make_analyzer(PATIENTS + [{"patient_id": 42, "blood_pressure": "160/100", "temperature": 103.0, "age": 75}])
    results = analyzer.analyze()
    assert results.high_risk_patients == ["DEMO003", "DEMO005"]
    assert analyzer.get_summary()["total_patients"] == 6
