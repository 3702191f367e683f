from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Settings, get_settings
from database import Database
from logger import configure_logging, get_logger
from modules.signer.controllers.health_controller import router as health_router
from modules.signer.controllers.job_controller import router as job_router
from modules.signer.job import SignatureJobScheduler
from modules.signer.repositories import SignatureRepository
from modules.signer.services import DropSignerClient, JobService

logger = get_logger(__name__)


def build_scheduler(settings: Settings, database: Database, gateway: DropSignerClient) -> SignatureJobScheduler:
    """Arma repositorio, servicio y scheduler. Sin contenedor global: todo se pasa explícito."""
    repository = SignatureRepository(database.SessionLocal)
    job_service = JobService(repository, gateway, database)
    return SignatureJobScheduler(
        job_service,
        interval_minutes=settings.job_interval_minutes,
        run_on_startup=settings.job_run_on_startup,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup logic ---
        configure_logging(settings.log_level)
        logger.info("Iniciando aplicación...")
        database = Database.from_settings(settings)
        gateway = DropSignerClient.from_settings(settings)
        scheduler = build_scheduler(settings, database, gateway)

        app.state.database = database
        app.state.gateway = gateway
        app.state.scheduler = scheduler

        scheduler.start()
        logger.info("Job de firmas iniciado (intervalo %d min)", settings.job_interval_minutes)
        yield
        # --- Shutdown logic ---
        scheduler.shutdown()
        gateway.close()
        database.close()
        logger.info("Aplicación detenida")

    app = FastAPI(
        title="Signer Job API",
        description="API para gestión del job de firmas DropSigner",
        version="1.0.0",
        lifespan=lifespan
    )
    app.include_router(health_router)
    app.include_router(job_router)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=get_settings().port)
