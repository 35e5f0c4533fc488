from fastapi import APIRouter

from app.api.deps import ContextDep, SettingsDep
from app.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep, context: ContextDep) -> HealthResponse:
    return HealthResponse(
        service=settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT,
        api_key_configured=bool(settings.GEMINI_API_KEY),
        projects=len(context.records),
    )
