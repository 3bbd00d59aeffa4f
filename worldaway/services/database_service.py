from sqlalchemy import func
from sqlalchemy.orm import Session
from worldaway.database.models import Prediction, BatchJob
from worldaway.schemas import FeatureRecord, ClassificationResult
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone


class DatabaseService:
    """Service for database operations"""

    def __init__(self, db: Session):
        self.db = db

    # Prediction operations
    def save_prediction(
        self,
        features: FeatureRecord,
        result: ClassificationResult,
        processing_time: float
    ) -> Prediction:
        """Save prediction to database"""
        db_prediction = Prediction(
            input_data=features.model_dump(),
            label=result.prediction.value,
            confidence=result.confidence,
            class_probabilities=result.class_probabilities,
            feature_importance=[f.model_dump() for f in result.feature_importance],
            processing_time=processing_time
        )

        self.db.add(db_prediction)
        self.db.commit()
        self.db.refresh(db_prediction)
        return db_prediction

    def get_prediction_by_id(self, prediction_id: str) -> Optional[Prediction]:
        return self.db.query(Prediction).filter(Prediction.id == prediction_id).first()

    def get_recent_predictions(self, limit: int = 10) -> List[Prediction]:
        return self.db.query(Prediction).order_by(
            Prediction.created_at.desc()
        ).limit(limit).all()

    # Batch operations
    def save_batch_job(
        self,
        source: str,
        filename: Optional[str],
        total_records: int,
        rows_skipped: int = 0
    ) -> BatchJob:
        """Save batch job to database"""
        batch_job = BatchJob(
            source=source,
            filename=filename,
            total_records=total_records,
            processed_records=0,
            rows_skipped=rows_skipped,
            status="pending"
        )

        self.db.add(batch_job)
        self.db.commit()
        self.db.refresh(batch_job)
        return batch_job

    def update_batch_job(
        self,
        batch_job_id: str,
        status: str,
        processed_records: int,
        results: Optional[List[Dict[str, Any]]] = None,
        summary_statistics: Optional[Dict[str, Any]] = None,
        processing_time: Optional[float] = None,
        error_message: Optional[str] = None
    ) -> BatchJob:
        """Update batch job status and results"""
        batch_job = self.get_batch_job(batch_job_id)
        if not batch_job:
            raise ValueError(f"Batch job {batch_job_id} not found")

        batch_job.status = status
        batch_job.processed_records = processed_records

        if results is not None:
            batch_job.results = results
        if summary_statistics is not None:
            batch_job.summary_statistics = summary_statistics
        if processing_time is not None:
            batch_job.processing_time = processing_time
        if error_message:
            batch_job.error_message = error_message

        if status in ("completed", "failed"):
            batch_job.completed_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(batch_job)
        return batch_job

    def get_batch_job(self, batch_job_id: str) -> Optional[BatchJob]:
        return self.db.query(BatchJob).filter(BatchJob.id == batch_job_id).first()

    # Statistics
    def get_prediction_distribution(self) -> Dict[str, Any]:
        """Count stored predictions per label"""
        rows = self.db.query(Prediction.label, func.count(Prediction.id)).group_by(Prediction.label).all()
        distribution = {label: count for label, count in rows}
        return {
            "total_stored": sum(distribution.values()),
            "distribution": distribution
        }
