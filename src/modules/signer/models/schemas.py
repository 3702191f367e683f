from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RunSummaryResponse(BaseModel):
    run_id: str
    total: int
    succeeded: int
    failed: int
    started_at: datetime
    finished_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class JobExecuteResponse(BaseModel):
    success: bool
    message: str
    timestamp: datetime
    total: int = 0
    succeeded: int = 0
    failed: int = 0


class JobStatusResponse(BaseModel):
    active: bool
    running: bool
    interval_minutes: int
    last_execution: Optional[datetime] = None
    last_finished: Optional[datetime] = None
    last_summary: Optional[RunSummaryResponse] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
