"""Health probe."""
from fastapi import APIRouter
from pydantic import BaseModel

from content_engines.elements.models import ElementKind

router = APIRouter(tags=["system"])


class HealthStatus(BaseModel):
    status: str
    version: str = "0.1.0"
    kinds: list[str] = []


@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(status="ok", kinds=[kind.value for kind in ElementKind])
