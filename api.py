from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from worldaway import __version__
from worldaway.api.router import api_router
from worldaway.database import init_database
from worldaway.services import ExoplanetClassifier
from worldaway.settings import settings
from worldaway.settings.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("startup", seed=settings.classifier_seed)
    init_database()
    app.state.classifier = ExoplanetClassifier(seed=settings.classifier_seed)
    logger.info("classifier_ready", total_predictions=app.state.classifier.get_stats().total_predictions)
    yield
    logger.info("shutdown", total_predictions=app.state.classifier.get_stats().total_predictions)


app = FastAPI(
    title="A World Away: Exoplanet Classification API",
    description="""
    **Classification of transit candidates into Confirmed Exoplanet, Candidate or False Positive**

    ## Main Features:

    ### Single Prediction
    - Six observational parameters: orbital period, transit duration,
      planetary radius, stellar temperature, signal-to-noise ratio and depth
    - Per-field validation of the input limits
    - Class probabilities and feature importance ranking

    ### Batch Processing
    - CSV upload with case and separator insensitive header matching
    - Invalid rows are skipped and reported, valid rows are still classified
    - Downloadable sample CSV and CSV export of stored batches

    ### Model Statistics
    - Accuracy, precision, recall and F1
    - Number of predictions served

    ## Available Endpoints:

    - **`/api/v1/predict/`** - Single prediction
    - **`/api/v1/batch/`** - Batch processing
    - **`/api/v1/model/`** - Model statistics
    """,
    version=__version__,
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_redoc else None,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    **settings.get_cors_config()
)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": "A World Away: Exoplanet Classification API running",
        "version": __version__,
        "status": "operational",
        "endpoints": {
            "prediction": "/api/v1/predict/",
            "batch": "/api/v1/batch/",
            "model": "/api/v1/model/"
        },
        "documentation": "/docs"
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "a-world-away"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
        reload=settings.api_reload
    )
