from pydantic import BaseModel
from typing import List, Optional
from pydantic import Field
from .features import FeatureRecord, SkippedRow
from .prediction import ClassificationResult


class BatchRecordsRequest(BaseModel):
    records: List[FeatureRecord] = Field(..., description="Feature records to classify")


class BatchPredictionResult(BaseModel):
    row_index: int = Field(..., description="Source row of the record")
    features: FeatureRecord = Field(..., description="Features that were scored")
    result: ClassificationResult = Field(..., description="Classification result")


class BatchSummary(BaseModel):
    total: int = Field(..., description="Total records classified")
    confirmed: int = Field(..., description="Records classified as Confirmed Exoplanet")
    candidate: int = Field(..., description="Records classified as Candidate")
    false_positive: int = Field(..., description="Records classified as False Positive")
    average_confidence: float = Field(..., description="Mean confidence over the batch")
    rows_skipped: int = Field(0, description="CSV rows excluded because of invalid values")


class BatchProcessingResponse(BaseModel):
    results: List[BatchPredictionResult] = Field(..., description="Results in input order")
    summary: BatchSummary = Field(..., description="Summary statistics of the batch")
    skipped_rows: List[SkippedRow] = Field(default_factory=list, description="Rows excluded during ingestion")
    processing_time_seconds: float = Field(..., description="Processing time in seconds")
    batch_job_id: Optional[str] = Field(None, description="Batch job ID for tracking")
    filename: Optional[str] = Field(None, description="Uploaded file name, if any")
