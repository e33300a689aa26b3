from typing import Any, Dict, Optional

from assessment.commons.logger import logger
from assessment.validation.validators import parse_submission_results

_BREAKDOWN_LABELS = (
    ("high_risk", "High Risk Patients"),
    ("fever", "Fever Patients"),
    ("data_quality", "Data Quality Issues"),
)


def render_summary(summary: Dict[str, Any]):
    logger.info("Analysis Summary:")
    logger.info(f"- Total patients: {summary['total_patients']}")
    logger.info(f"- Valid patients: {summary['valid_patients']}")
    logger.info(f"- High risk patients: {summary['high_risk_count']}")
    logger.info(f"- Fever patients: {summary['fever_count']}")
    logger.info(
        f"- Data quality issues: {summary['data_quality_count']} "
        f"({summary['data_quality_percentage']:.2f}%)"
    )


def render_patient_analysis(analysis: Dict[str, Any]):
    logger.info(f"Patient {analysis['patient_id']} ({analysis.get('name') or '-'})")
    logger.info(f"- Total risk score: {analysis['total_risk_score']}")
    logger.info(f"- High risk: {analysis['is_high_risk']}")
    logger.info(f"- Fever: {analysis['has_fever']}")
    logger.info(f"- Data quality issues: {analysis['has_data_quality_issues']}")
    for factor, risk in analysis["risk_breakdown"].items():
        logger.info(f"  {factor}: {risk['score']} ({risk['category']}) {risk['values']}")


def render_submission_result(body: Optional[Any]):
    results = parse_submission_results(body)
    if results is None:
        logger.warning("No results to display")
        return

    logger.info("Assessment Score:")
    logger.info(f"- Overall Score: {results.score} ({results.percentage}%)")
    logger.info(f"- Status: {results.status}")
    if results.attempt_number is not None:
        total = results.attempt_number + (results.remaining_attempts or 0)
        logger.info(f"- Attempt: {results.attempt_number}/{total}")

    if results.breakdown:
        logger.info("Score Breakdown:")
        for key, label in _BREAKDOWN_LABELS:
            cat = results.breakdown.get(key)
            if cat is None:
                continue
            logger.info(f"- {label}: {cat.score}/{cat.max} ({cat.correct}/{cat.submitted} correct)")

    if results.feedback:
        logger.info("Feedback:")
        if results.feedback.strengths:
            logger.info("Strengths:")
            for s in results.feedback.strengths:
                logger.info(f"  {s}")
        if results.feedback.issues:
            logger.info("Issues:")
            for i in results.feedback.issues:
                logger.info(f"  {i}")

    if results.is_personal_best:
        logger.info("New Personal Best!")
    if results.can_resubmit:
        logger.info(f"You can resubmit {results.remaining_attempts} more time(s)")
