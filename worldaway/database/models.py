from sqlalchemy import Column, Integer, String, DateTime, Float, Text, JSON
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone
import uuid

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Prediction(Base):
    """Single-record predictions"""
    __tablename__ = "predictions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Input data
    input_data = Column(JSON, nullable=False)

    # Prediction results
    label = Column(String(50), nullable=False, index=True)
    confidence = Column(Float, nullable=False)
    class_probabilities = Column(JSON, nullable=False)
    feature_importance = Column(JSON, nullable=False)

    # Metadata
    processing_time = Column(Float, nullable=False)
    created_at = Column(DateTime, default=_utcnow)


class BatchJob(Base):
    """Batch classification jobs"""
    __tablename__ = "batch_jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Job data
    filename = Column(String(255), nullable=True)
    source = Column(String(50), nullable=False)  # csv, manual
    total_records = Column(Integer, nullable=False)
    processed_records = Column(Integer, nullable=False, default=0)
    rows_skipped = Column(Integer, nullable=False, default=0)

    # Results
    results = Column(JSON, nullable=True)
    summary_statistics = Column(JSON, nullable=True)

    # Status
    status = Column(String(50), default="pending")  # pending, completed, failed
    processing_time = Column(Float, nullable=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=_utcnow)
    completed_at = Column(DateTime, nullable=True)
