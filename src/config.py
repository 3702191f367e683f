"""
Configuración del servicio.

Valores leídos de variables de entorno (o de un archivo .env) mediante
pydantic-settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Job
    job_interval_minutes: int = Field(default=2, ge=1, description="Minutes between scheduled runs")
    job_run_on_startup: bool = Field(default=True, description="Fire a run as soon as the scheduler starts")

    # DropSigner
    dropsigner_base_url: str = "https://signer-lac.azurewebsites.net/api"
    dropsigner_api_key: str = ""
    dropsigner_timeout_seconds: float = 30.0

    # Base de datos
    database_url: Optional[str] = None
    db_username: str = "signer"
    db_password: str = ""
    db_host: str = "localhost"
    db_port: int = 1521
    db_service: str = "XEPDB1"
    db_pool_size: int = 10
    db_max_overflow: int = 2
    db_pool_recycle: int = 1800
    db_echo: bool = False

    # Aplicación
    log_level: str = "INFO"
    port: int = 3000

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"oracle+oracledb://{self.db_username}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/?service_name={self.db_service}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
