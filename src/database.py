from sqlalchemy import create_engine, literal, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from config import Settings
from logger import get_logger
from modules.signer.exceptions import ConnectivityError

Base = declarative_base()

logger = get_logger(__name__)


def build_engine(settings: Settings) -> Engine:
    url = settings.sqlalchemy_url
    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.db_echo)
    return create_engine(
        url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle,
    )


class Database:
    """Engine + fábrica de sesiones compartidos por el repositorio y el job."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(settings))

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(select(literal(1)))

    def ensure_connection(self) -> None:
        """
        Verifica la conexión; si falla, descarta el pool y prueba una vez más.

        Lanza ConnectivityError si el segundo intento también falla.
        """
        try:
            self.ping()
            logger.debug("Conexión con la base de datos verificada")
            return
        except SQLAlchemyError as e:
            logger.warning("Error de conexión con la base de datos, reconectando: %s", e)

        self.engine.dispose()
        try:
            self.ping()
        except SQLAlchemyError as e:
            raise ConnectivityError(f"database unreachable after reconnect: {e}") from e
        logger.info("Reconexión con la base de datos exitosa")

    def close(self) -> None:
        self.engine.dispose()
