from typing import Any, Mapping, Optional, Union

from assessment.commons.logger import logger
from assessment.helpers.http_transport import ApiTransport
from assessment.services.analysis_service import AnalysisResults
from assessment.validation.validators import SubmissionPayload

SUBMIT_PATH = "/submit-assessment"


def build_payload(results: Optional[Union[AnalysisResults, Mapping[str, Any]]]) -> SubmissionPayload:
    if isinstance(results, AnalysisResults):
        results = results.as_dict()
    results = results or {}
    return SubmissionPayload(
        high_risk_patients=list(results.get("high_risk_patients") or []),
        fever_patients=list(results.get("fever_patients") or []),
        data_quality_issues=list(results.get("data_quality_issues") or []),
    )


class SubmissionService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport

    async def submit_assessment(self, results) -> Any:
        payload = build_payload(results)
        logger.info("Submitting assessment results...")
        logger.info(f"High risk patients: {len(payload.high_risk_patients)}")
        logger.info(f"Fever patients: {len(payload.fever_patients)}")
        logger.info(f"Data quality issues: {len(payload.data_quality_issues)}")
        return await self.transport.post(SUBMIT_PATH, payload.model_dump())
