from typing import Any

from fastapi import APIRouter

from app.agent.context_loader import ProjectFileError, read_project_records
from app.agent.errors import ServiceError
from app.api.deps import SettingsDep
from app.core.logging import get_logger
from app.models import ErrorResponse, ProjectRecord, ProjectsResponse, ProjectStats, ProjectSummary

router = APIRouter()
logger = get_logger(__name__)


def summarize_projects(records: list[ProjectRecord]) -> ProjectsResponse:
    summaries = [
        ProjectSummary(
            name=record.name,
            type=record.type,
            url=record.primary_url,
            has_readme=record.has_readme,
        )
        for record in records
    ]
    stats = ProjectStats(
        total=len(summaries),
        with_readme=sum(1 for summary in summaries if summary.has_readme),
    )
    return ProjectsResponse(stats=stats, projects=summaries)


@router.get(
    "/projects",
    response_model=ProjectsResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_projects(settings: SettingsDep) -> Any:
    """
    Summarize the projects file. The file is re-read on every call.
    """
    try:
        records = read_project_records(settings.PROJECTS_FILE)
    except ProjectFileError as e:
        logger.error("Failed to read projects file", path=settings.PROJECTS_FILE, reason=str(e))
        raise ServiceError(500, "Failed to load projects", str(e)) from e
    return summarize_projects(records)
