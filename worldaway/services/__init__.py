from .classifier_service import ExoplanetClassifier
from .batch_service import BatchService, export_results_csv
from .ingestion_service import CSVIngestor, ParsedCSV, parse_csv, validate_features, generate_sample_csv

__all__ = [
    "ExoplanetClassifier", "BatchService", "export_results_csv",
    "CSVIngestor", "ParsedCSV", "parse_csv", "validate_features", "generate_sample_csv"
]
