"""Public health check; reports database connectivity for load balancers."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from authapi.core.config import settings
from authapi.core.database import check_db_connected, get_db
from authapi.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Return service status and whether the users database is reachable. No auth required."""
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(environment=settings.APP_ENV, database=db_status)
