from fastapi import APIRouter
from worldaway.api.v1.endpoints import (
    prediction,
    batch,
    model
)

api_router = APIRouter(prefix="/v1")

api_router.include_router(
    prediction.router,
    prefix="/predict",
    tags=["Prediction"]
)

api_router.include_router(
    batch.router,
    prefix="/batch",
    tags=["Batch Processing"]
)

api_router.include_router(
    model.router,
    prefix="/model",
    tags=["Model Statistics"]
)
