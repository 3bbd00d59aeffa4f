from .features import FEATURE_FIELDS, FeatureRecord, IngestedRow, SkippedRow
from .prediction import PredictionLabel, FeatureImportance, ClassificationResult, PredictionResponse
from .batch import BatchRecordsRequest, BatchPredictionResult, BatchSummary, BatchProcessingResponse
from .stats import ModelStats, FeatureImportanceResponse, PredictionDistribution

__all__ = [
    "FEATURE_FIELDS", "FeatureRecord", "IngestedRow", "SkippedRow",
    "PredictionLabel", "FeatureImportance", "ClassificationResult", "PredictionResponse",
    "BatchRecordsRequest", "BatchPredictionResult", "BatchSummary", "BatchProcessingResponse",
    "ModelStats", "FeatureImportanceResponse", "PredictionDistribution"
]
