from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


def utc_isoformat() -> str:
    return get_datetime_utc().isoformat().replace("+00:00", "Z")


# One entry of the "projects" list in the context file
class ProjectRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    description: str
    type: str = ""
    technologies: str | None = None
    url: str | None = None
    repository: str | None = None
    readme: str | None = None

    @property
    def has_readme(self) -> bool:
        return bool(self.readme and self.readme.strip())

    @property
    def primary_url(self) -> str | None:
        return self.url or self.repository or None


# Formatted prompt prefix plus the records it was built from
class ProjectContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    records: tuple[ProjectRecord, ...] = ()
    fallback: bool = False


class ChatRequest(BaseModel):
    # Optional here so a missing message is reported as a 400 envelope, not a 422.
    message: str | None = None


class ChatResponse(BaseModel):
    response: str
    timestamp: str = Field(default_factory=utc_isoformat)
    status: Literal["success"] = "success"


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    status: Literal["error"] = "error"


class ProjectSummary(BaseModel):
    name: str
    type: str
    url: str | None = None
    has_readme: bool = False


class ProjectStats(BaseModel):
    total: int
    with_readme: int


class ProjectsResponse(BaseModel):
    stats: ProjectStats
    projects: list[ProjectSummary]


class HealthResponse(BaseModel):
    status: Literal["OK"] = "OK"
    service: str
    timestamp: str = Field(default_factory=utc_isoformat)
    environment: str
    api_key_configured: bool
    projects: int = 0
