from fastapi import APIRouter, HTTPException, Depends, Body
from worldaway.schemas import FeatureRecord, ClassificationResult, PredictionResponse
from worldaway.services import ExoplanetClassifier, validate_features
from worldaway.services.database_service import DatabaseService
from worldaway.database import get_db, Prediction
from worldaway.exceptions import FeatureValidationError
from worldaway.api.dependencies import get_classifier
from worldaway.settings import settings
from worldaway.settings.logging import get_logger
from sqlalchemy.orm import Session
from typing import Any, Dict, List
import time

router = APIRouter()
logger = get_logger(__name__)

EXAMPLE_FEATURES = {
    "orbital_period": 15.234,
    "transit_duration": 2.45,
    "planetary_radius": 1.12,
    "stellar_temp": 5778,
    "snr": 12.5,
    "depth": 0.0023,
}


@router.post("/", response_model=PredictionResponse)
async def predict(
    request: Dict[str, Any] = Body(..., example=EXAMPLE_FEATURES),
    classifier: ExoplanetClassifier = Depends(get_classifier),
    db: Session = Depends(get_db)
):
    """
    Classify a single candidate as Confirmed Exoplanet, Candidate or False Positive.

    Every field is checked before scoring. When a field is missing, not a
    number or outside its input limits the response is a 422 whose `errors`
    object maps each failing field to a message, and nothing is scored.
    """
    try:
        features = validate_features(request)

        start_time = time.time()
        result = classifier.predict(features)
        classifier.increment_predictions()
        processing_time = time.time() - start_time

        db_service = DatabaseService(db)
        db_prediction = db_service.save_prediction(
            features=features,
            result=result,
            processing_time=processing_time
        )

        return PredictionResponse(
            result=result,
            features=features,
            processing_time_seconds=processing_time,
            prediction_id=db_prediction.id,
            created_at=db_prediction.created_at.isoformat()
        )

    except FeatureValidationError as e:
        logger.info("prediction_rejected", errors=e.errors)
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})
    except Exception as e:
        logger.exception("prediction_failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/history", response_model=List[PredictionResponse])
async def prediction_history(db: Session = Depends(get_db)):
    """Most recent stored predictions, newest first."""
    db_service = DatabaseService(db)
    return [to_prediction_response(p) for p in db_service.get_recent_predictions(settings.history_limit)]


@router.get("/{prediction_id}", response_model=PredictionResponse)
async def get_prediction(prediction_id: str, db: Session = Depends(get_db)):
    db_service = DatabaseService(db)
    db_prediction = db_service.get_prediction_by_id(prediction_id)
    if not db_prediction:
        raise HTTPException(status_code=404, detail=f"Prediction {prediction_id} not found")
    return to_prediction_response(db_prediction)


def to_prediction_response(db_prediction: Prediction) -> PredictionResponse:
    """Rebuild the API response from a stored prediction"""
    result = ClassificationResult(
        prediction=db_prediction.label,
        confidence=db_prediction.confidence,
        class_probabilities=db_prediction.class_probabilities,
        feature_importance=db_prediction.feature_importance
    )
    return PredictionResponse(
        result=result,
        features=FeatureRecord(**db_prediction.input_data),
        processing_time_seconds=db_prediction.processing_time,
        prediction_id=db_prediction.id,
        created_at=db_prediction.created_at.isoformat() if db_prediction.created_at else None
    )
