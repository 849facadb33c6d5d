# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create tables")
        raise
    logger.info("Database tables ready")


init_db()

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
