from pydantic import BaseModel
from typing import Dict, List
from .prediction import FeatureImportance


class ModelStats(BaseModel):
    """Model performance figures shown to users"""
    accuracy: float
    precision: float
    recall: float
    f1: float
    total_predictions: int
    last_updated: str


class FeatureImportanceResponse(BaseModel):
    features: List[FeatureImportance]


class PredictionDistribution(BaseModel):
    """Stored predictions per class"""
    total_stored: int
    distribution: Dict[str, int]
