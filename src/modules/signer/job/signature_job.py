import threading
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler

from logger import get_logger
from modules.signer.exceptions import RunInProgressError
from modules.signer.services.job_service import JobService, RunSummary

logger = get_logger(__name__)

JOB_ID = "signature-job"


class SignatureJobScheduler:
    """
    Dispara JobService.execute_run cada `interval_minutes`.

    Un solo run a la vez: si el anterior no terminó, el tick se descarta y se
    registra en el log. Los errores de un run nunca detienen el scheduler.
    """

    def __init__(
        self,
        job_service: JobService,
        interval_minutes: int = 2,
        run_on_startup: bool = True,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.job_service = job_service
        self.interval_minutes = interval_minutes
        self.run_on_startup = run_on_startup
        self.scheduler = scheduler or BackgroundScheduler()
        self._lock = threading.Lock()

        self.last_started_at: Optional[datetime] = None
        self.last_finished_at: Optional[datetime] = None
        self.last_summary: Optional[RunSummary] = None
        self.last_error: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.scheduler.running

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def start(self) -> None:
        options = {}
        if self.run_on_startup:
            # primera ejecución inmediata, independiente del intervalo
            options["next_run_time"] = datetime.now()

        # max_instances > 1: el lock propio decide qué tick se descarta
        self.scheduler.add_job(
            self.tick,
            "interval",
            minutes=self.interval_minutes,
            id=JOB_ID,
            replace_existing=True,
            max_instances=2,
            coalesce=True,
            **options,
        )
        self.scheduler.start()
        logger.info("Job agendado cada %d minutos", self.interval_minutes)

    def shutdown(self, wait: bool = False) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Job agendado detenido")

    def tick(self) -> None:
        """Punto de entrada del scheduler: nunca lanza."""
        try:
            self.run_now()
        except RunInProgressError:
            logger.warning("Ejecución anterior todavía en curso, se omite este tick")
        except Exception:
            logger.exception("Error en la ejecución agendada del job")

    def run_now(self) -> RunSummary:
        """Ejecuta el job ya. Lanza RunInProgressError si hay un run en curso."""
        if not self._lock.acquire(blocking=False):
            raise RunInProgressError("a run is already in progress")
        try:
            self.last_started_at = datetime.utcnow()
            summary = self.job_service.execute_run()
            self.last_summary = summary
            self.last_error = None
            return summary
        except Exception as e:
            self.last_error = str(e)
            raise
        finally:
            self.last_finished_at = datetime.utcnow()
            self._lock.release()
