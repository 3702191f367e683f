# src/modules/signer/controllers/job_controller.py
from datetime import datetime

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from logger import get_logger
from modules.signer.exceptions import RunInProgressError
from modules.signer.job.signature_job import SignatureJobScheduler
from modules.signer.models.schemas import JobExecuteResponse, JobStatusResponse, RunSummaryResponse

router = APIRouter(
    prefix="/job",
    tags=["Job"]
)

logger = get_logger(__name__)


def get_scheduler(request: Request) -> SignatureJobScheduler:
    return request.app.state.scheduler


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = JobExecuteResponse(success=False, message=message, timestamp=datetime.utcnow())
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post(
    "/execute",
    response_model=JobExecuteResponse,
    summary="Ejecuta el job de firmas manualmente"
)
def execute_job(scheduler: SignatureJobScheduler = Depends(get_scheduler)):
    logger.info("Ejecución manual del job solicitada")
    try:
        summary = scheduler.run_now()
    except RunInProgressError as e:
        return _error_response(status.HTTP_409_CONFLICT, f"Error al ejecutar job: {e}")
    except Exception as e:
        logger.exception("Error al ejecutar job vía API")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error al ejecutar job: {e}")

    return JobExecuteResponse(
        success=True,
        message="Job ejecutado con éxito",
        timestamp=datetime.utcnow(),
        total=summary.total,
        succeeded=summary.succeeded,
        failed=summary.failed,
    )


@router.get(
    "/status",
    response_model=JobStatusResponse,
    summary="Estado actual del job"
)
def job_status(scheduler: SignatureJobScheduler = Depends(get_scheduler)):
    last_summary = None
    if scheduler.last_summary is not None:
        last_summary = RunSummaryResponse.model_validate(scheduler.last_summary)
    return JobStatusResponse(
        active=scheduler.active,
        running=scheduler.running,
        interval_minutes=scheduler.interval_minutes,
        last_execution=scheduler.last_started_at,
        last_finished=scheduler.last_finished_at,
        last_summary=last_summary,
    )
