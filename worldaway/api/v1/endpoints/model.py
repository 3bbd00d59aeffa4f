from fastapi import APIRouter, Depends
from worldaway.schemas import ModelStats, FeatureImportanceResponse, PredictionDistribution
from worldaway.services import ExoplanetClassifier
from worldaway.services.database_service import DatabaseService
from worldaway.database import get_db
from worldaway.api.dependencies import get_classifier
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/stats", response_model=ModelStats)
async def get_model_stats(classifier: ExoplanetClassifier = Depends(get_classifier)):
    """
    Accuracy, precision, recall and F1 of the classifier together with the
    number of predictions served since startup.

    `last_updated` is fixed when the service starts.
    """
    return classifier.get_stats()


@router.get("/feature-importance", response_model=FeatureImportanceResponse)
async def get_feature_importance(classifier: ExoplanetClassifier = Depends(get_classifier)):
    return FeatureImportanceResponse(features=classifier.feature_importance())


@router.get("/distribution", response_model=PredictionDistribution)
async def get_prediction_distribution(db: Session = Depends(get_db)):
    """Stored single-record predictions counted per class."""
    return DatabaseService(db).get_prediction_distribution()
