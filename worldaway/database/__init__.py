from .database import create_tables, get_db, init_database, engine, SessionLocal
from .models import Base, Prediction, BatchJob

__all__ = [
    "create_tables", "get_db", "init_database", "engine", "SessionLocal",
    "Base", "Prediction", "BatchJob"
]
