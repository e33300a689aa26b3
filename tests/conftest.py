import httpx
import pytest

from assessment.commons.types import Settings
from assessment.helpers.http_transport import ApiTransport

BASE_URL = "https://api.test/api"


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, delay: float):
        self.calls.append(delay)


@pytest.fixture
def settings():
    return Settings.model_validate(
        {
            "api": {"base_url": BASE_URL},
            "retry": {"attempts": 3, "backoff_sec": 1.0, "rate_limit_delay_sec": 2.0},
            "pagination": {"default_limit": 5, "max_limit": 20, "page_delay_sec": 0.5},
            "api_key": "test-key",
        }
    )


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def make_transport(settings, sleeper):
    def _make(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ApiTransport(settings, client=client, sleep=sleeper)

    return _make
