from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from .models import Base
from worldaway.settings import settings, Settings
from worldaway.settings.logging import get_logger

logger = get_logger(__name__)


def engine_options(config: Settings) -> dict:
    """Connection pool options for the configured database"""
    if not config.is_sqlite:
        return {"pool_pre_ping": True, "pool_recycle": 300}
    options = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite must share one connection or every session sees an empty database
    if config.is_in_memory_sqlite:
        options["poolclass"] = StaticPool
    return options


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **engine_options(settings)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables():
    """Create all tables in the database"""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database():
    """Initialize the database schema"""
    create_tables()
    logger.info("database_initialized", url=engine.url.render_as_string(hide_password=True))
