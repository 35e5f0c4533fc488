import json
from pathlib import Path

from pydantic import ValidationError

from app.agent.prompts.chat import (
    CONTEXT_HEADER,
    CONTEXT_INSTRUCTIONS,
    DEFAULT_TECHNOLOGIES,
    FALLBACK_CONTEXT,
    NOT_AVAILABLE,
    PROJECT_SEPARATOR,
    PROJECT_TEMPLATE,
)
from app.core.logging import get_logger
from app.models import ProjectContext, ProjectRecord

logger = get_logger(__name__)


class ProjectFileError(ValueError):
    """The projects file is missing, unreadable or not shaped as expected."""


def read_project_records(path: str | Path) -> list[ProjectRecord]:
    """
    Read the projects file and return its records in file order.
    Raises ProjectFileError for any read, parse or shape problem.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectFileError(f"Cannot read {file_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProjectFileError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
        raise ProjectFileError(f"{file_path} has no 'projects' list")

    try:
        return [ProjectRecord.model_validate(item) for item in data["projects"]]
    except ValidationError as e:
        raise ProjectFileError(f"Malformed project record in {file_path}: {e}") from e


def format_project(record: ProjectRecord) -> str:
    return PROJECT_TEMPLATE.format(
        name=record.name,
        description=record.description,
        type=record.type or NOT_AVAILABLE,
        technologies=record.technologies or DEFAULT_TECHNOLOGIES,
        url=record.url or NOT_AVAILABLE,
        repository=record.repository or NOT_AVAILABLE,
        readme=record.readme or NOT_AVAILABLE,
    )


def build_context_text(records: list[ProjectRecord]) -> str:
    body = PROJECT_SEPARATOR.join(format_project(record) for record in records)
    return f"{CONTEXT_HEADER}\n\n{body}\n\n{CONTEXT_INSTRUCTIONS}"


class ContextLoader:
    """Builds the ProjectContext prefixed to every chat prompt."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> ProjectContext:
        """
        Return a fresh context from the projects file.
        Never raises: on any failure the context degrades to the fallback summary.
        """
        try:
            records = read_project_records(self.path)
        except ProjectFileError as e:
            logger.warn("Project context unavailable, using fallback summary", path=str(self.path), reason=str(e))
            return ProjectContext(text=FALLBACK_CONTEXT, fallback=True)

        logger.info("Loaded project context", path=str(self.path), records=len(records))
        return ProjectContext(text=build_context_text(records), records=tuple(records))
