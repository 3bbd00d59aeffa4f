from fastapi import Request
from worldaway.services import ExoplanetClassifier, BatchService


def get_classifier(request: Request) -> ExoplanetClassifier:
    """Dependency returning the classifier built at startup"""
    return request.app.state.classifier


def get_batch_service(request: Request) -> BatchService:
    return BatchService(get_classifier(request))
