from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ApiCfg(BaseModel):
    base_url: str = "https://assessment.ksensetech.com/api"
    timeout_sec: float = 30.0
    user_agent: str = "HealthcareAssessment/1.0.0"
    api_key_env: str = "API_KEY"

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str):
        return v.rstrip("/")


class PaginationCfg(BaseModel):
    default_limit: int = Field(5, gt=0)
    max_limit: int = Field(20, gt=0)
    page_delay_sec: float = Field(0.5, ge=0)


class RetryCfg(BaseModel):
    attempts: int = Field(3, ge=1)
    backoff_sec: float = Field(1.0, ge=0)
    rate_limit_delay_sec: float = Field(2.0, ge=0)


class LoggingCfg(BaseModel):
    root: str = "logs"
    level: str = "INFO"
    retention_days: int = Field(14, gt=0)
    console_format: str = "{message}"


class Settings(BaseModel):
    api: ApiCfg = ApiCfg()
    pagination: PaginationCfg = PaginationCfg()
    retry: RetryCfg = RetryCfg()
    logging: LoggingCfg = LoggingCfg()
    api_key: Optional[str] = None
