from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from src.depends import require_activated_user

router = APIRouter(prefix="/v1", tags=["Health"])


class SystemInfo(BaseModel):
    environment: str
    version: str


class HealthcheckResponse(BaseModel):
    status: str
    system_info: SystemInfo


@router.get(
    "/healthcheck",
    status_code=status.HTTP_200_OK,
    response_model=HealthcheckResponse,
    dependencies=[Depends(require_activated_user)],
)
async def healthcheck(request: Request):
    """Report availability plus the running environment and version"""
    config = request.app.state.config
    return HealthcheckResponse(
        status="available",
        system_info=SystemInfo(environment=config.ENV, version=config.VERSION),
    )
