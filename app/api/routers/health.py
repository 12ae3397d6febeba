"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, status

from app.core.config import settings
from app.infrastructure.db.mongo import db_ready
from app.api.schemas.health import PingOut, HealthOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health() -> HealthOut:
    return HealthOut(ok=True, app_name=settings.app_name, mongo_ready=db_ready())
