from enum import Enum
from pydantic import BaseModel
from pydantic import Field
from typing import Dict, List, Optional
from .features import FeatureRecord


class PredictionLabel(str, Enum):
    CONFIRMED = "Confirmed Exoplanet"
    CANDIDATE = "Candidate"
    FALSE_POSITIVE = "False Positive"


class FeatureImportance(BaseModel):
    feature: str = Field(..., example="Snr", description="Human readable feature name")
    importance: float = Field(..., example=0.28, description="Fixed weight of the feature in the score")


class ClassificationResult(BaseModel):
    prediction: PredictionLabel = Field(..., example="Candidate", description="Predicted class")
    confidence: float = Field(..., example=0.57, description="Probability assigned to the predicted class")
    class_probabilities: Dict[str, float] = Field(..., description="Probability for each of the three classes")
    feature_importance: List[FeatureImportance] = Field(..., description="Feature weights sorted descending")


class PredictionResponse(BaseModel):
    result: ClassificationResult = Field(..., description="Classification result")
    features: FeatureRecord = Field(..., description="Features that were scored")
    processing_time_seconds: float = Field(..., description="Processing time in seconds")
    prediction_id: Optional[str] = Field(None, description="Database ID of the prediction")
    created_at: Optional[str] = Field(None, description="When the prediction was stored")
