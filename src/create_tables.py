# create_tables.py
from config import get_settings
from database import Base, build_engine
from logger import configure_logging, get_logger
# Importa los modelos para que se registren con Base
from modules.signer.models.signature_entity import SignatureRequestEntity  # noqa: F401

logger = get_logger(__name__)


def crear_tablas(engine=None):
    """Crea la tabla de firmas (bases locales / de desarrollo)."""
    engine = engine or build_engine(get_settings())
    logger.info("Tablas a crear: %s", list(Base.metadata.tables.keys()))
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas creadas exitosamente")


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    crear_tablas()
