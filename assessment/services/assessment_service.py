from typing import Any, Optional

from assessment.commons.errors import AssessmentAborted, AssessmentError
from assessment.commons.logger import logger
from assessment.helpers.http_transport import ApiTransport
from assessment.helpers.report import render_submission_result, render_summary
from assessment.services.analysis_service import AnalysisResults, RiskAnalyzer
from assessment.services.patients_service import PatientsService
from assessment.services.submission_service import SubmissionService


class AssessmentService:
    """Fetch -> analyze -> submit, in that order. Cualquier error corta el run."""

    def __init__(self, transport: ApiTransport, analyzer: Optional[RiskAnalyzer] = None):
        self.transport = transport
        self.patients = PatientsService(transport)
        self.submission = SubmissionService(transport)
        self.analyzer = analyzer or RiskAnalyzer()

    async def fetch_all_patients(self):
        patients = await self.patients.get_all_patients()
        if not patients:
            raise AssessmentAborted("No patients data received")
        logger.info(f"Successfully fetched {len(patients)} patients")
        return patients

    def analyze_patients(self, patients) -> AnalysisResults:
        # Un run nuevo descarta lo acumulado en el anterior
        self.analyzer.clear()
        self.analyzer.add_patients(patients)
        results = self.analyzer.analyze()
        render_summary(self.analyzer.get_summary())
        return results

    async def run(self, dry_run: bool = False) -> Optional[Any]:
        try:
            logger.info("Step 1: Fetching patient data...")
            patients = await self.fetch_all_patients()

            logger.info("Step 2: Analyzing patient data...")
            results = self.analyze_patients(patients)

            if dry_run:
                logger.info("Dry run: submission skipped")
                return None

            logger.info("Step 3: Submitting assessment results...")
            submission = await self.submission.submit_assessment(results)
            logger.info("Assessment submitted successfully")

            logger.info("Step 4: Assessment Results")
            render_submission_result(submission)
            return submission
        except AssessmentError as ex:
            logger.error(f"Assessment failed: {ex}")
            raise
