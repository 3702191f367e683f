import time
from datetime import datetime

from fastapi import APIRouter

from modules.signer.models.schemas import HealthResponse

router = APIRouter(tags=["Health"])

STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse, summary="Health check")
def health():
    return HealthResponse(status="OK", timestamp=datetime.utcnow(), uptime=time.monotonic() - STARTED_AT)
