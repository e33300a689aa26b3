# assessment/validation/validators.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from assessment.commons.errors import RequestFailed


class Pagination(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    page: Optional[int] = None
    limit: Optional[int] = None
    total: Optional[int] = None
    total_pages: Optional[int] = Field(None, alias="totalPages")
    has_next: bool = Field(False, alias="hasNext")
    has_previous: Optional[bool] = Field(None, alias="hasPrevious")


class PatientsPage(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Registros crudos: se conservan tal cual llegan
    data: List[Dict[str, Any]] = []
    pagination: Optional[Pagination] = None

    @field_validator("data", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return [] if v is None else v

    @property
    def has_next(self) -> bool:
        return bool(self.pagination and self.pagination.has_next)


class SubmissionPayload(BaseModel):
    high_risk_patients: List[str] = []
    fever_patients: List[str] = []
    data_quality_issues: List[str] = []


class CategoryScore(BaseModel):
    model_config = ConfigDict(extra="allow")

    score: Any = None
    max: Any = None
    correct: Any = None
    submitted: Any = None


class Feedback(BaseModel):
    model_config = ConfigDict(extra="allow")

    strengths: List[str] = []
    issues: List[str] = []


class SubmissionResults(BaseModel):
    """Respuesta del endpoint de submit. Solo se muestra, no se procesa."""

    model_config = ConfigDict(extra="allow")

    score: Any = None
    percentage: Any = None
    status: Optional[str] = None
    attempt_number: Optional[int] = None
    remaining_attempts: Optional[int] = None
    breakdown: Optional[Dict[str, CategoryScore]] = None
    feedback: Optional[Feedback] = None
    is_personal_best: bool = False
    can_resubmit: bool = False


def validate_patients_page_or_raise(body: Any) -> PatientsPage:
    """Valida el cuerpo de una pagina; una forma inesperada es RequestFailed."""
    if not isinstance(body, dict):
        raise RequestFailed(f"Unexpected patients page body: {type(body).__name__}")
    try:
        return PatientsPage.model_validate(body)
    except ValidationError as ve:
        raise RequestFailed(f"Malformed patients page: {ve}") from ve


def parse_submission_results(body: Any) -> Optional[SubmissionResults]:
    if not isinstance(body, dict) or not isinstance(body.get("results"), dict):
        return None
    try:
        return SubmissionResults.model_validate(body["results"])
    except ValidationError:
        # El formato de la respuesta es opaco: si no encaja, no se muestra
        return None
