import json

import httpx
import pytest

from assessment.commons.errors import AssessmentAborted, RequestFailed
from assessment.helpers.report import render_submission_result
from assessment.services.assessment_service import AssessmentService

PAGE = {
    "data": [
        {"patient_id": "DEMO002", "blood_pressure": "160/100", "temperature": 103.0, "age": 75},
        {"patient_id": "DEMO001", "blood_pressure": "N/A", "temperature": 98.6, "age": 40},
    ],
    "pagination": {"hasNext": False},
}

SUBMIT_BODY = {
    "success": True,
    "results": {
        "score": 100,
        "percentage": 100,
        "status": "PASS",
        "attempt_number": 1,
        "remaining_attempts": 2,
        "breakdown": {
            "high_risk": {"score": 50, "max": 50, "correct": 1, "submitted": 1},
            "fever": {"score": 25, "max": 25, "correct": 1, "submitted": 1},
            "data_quality": {"score": 25, "max": 25, "correct": 1, "submitted": 1},
        },
        "feedback": {"strengths": ["ok"], "issues": []},
        "is_personal_best": True,
        "can_resubmit": True,
    },
}


def api_handler(patients_page, posted):
    def handler(request: httpx.Request):
        if request.url.path.endswith("/patients"):
            return httpx.Response(200, json=patients_page)
        posted.append(json.loads(request.content))
        return httpx.Response(200, json=SUBMIT_BODY)

    return handler


@pytest.mark.asyncio
async def test_full_run_submits_classification(make_transport):
    posted = []
    service = AssessmentService(make_transport(api_handler(PAGE, posted)))
    body = await service.run()
    assert body == SUBMIT_BODY
    assert posted == [
        {"high_risk_patients": ["DEMO002"], "fever_patients": ["DEMO002"], "data_quality_issues": ["DEMO001"]}
    ]


@pytest.mark.asyncio
async def test_dry_run_does_not_submit(make_transport):
    posted = []
    service = AssessmentService(make_transport(api_handler(PAGE, posted)))
    assert await service.run(dry_run=True) is None
    assert posted == []
    assert service.analyzer.results.data_quality_issues == ["DEMO001"]


@pytest.mark.asyncio
async def test_empty_fetch_aborts(make_transport):
    posted = []
    service = AssessmentService(make_transport(api_handler({"data": [], "pagination": {"hasNext": False}}, posted)))
    with pytest.raises(AssessmentAborted):
        await service.run()
    assert posted == []


@pytest.mark.asyncio
async def test_fetch_failure_skips_submission(make_transport):
    posted = []

    def handler(request: httpx.Request):
        if request.url.path.endswith("/patients"):
            return httpx.Response(401)
        posted.append(request)
        return httpx.Response(200, json={})

    service = AssessmentService(make_transport(handler))
    with pytest.raises(RequestFailed):
        await service.run()
    assert posted == []


@pytest.mark.asyncio
async def test_second_run_starts_clean(make_transport):
    posted = []
    service = AssessmentService(make_transport(api_handler(PAGE, posted)))
    await service.run()
    await service.run()
    assert len(service.analyzer.patients) == 2
    assert posted[0] == posted[1]


def test_render_submission_result_tolerates_odd_bodies():
    render_submission_result(None)
    render_submission_result({"results": "nope"})
    render_submission_result(SUBMIT_BODY)
