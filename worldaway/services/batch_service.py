from typing import List, Optional, Sequence
from worldaway.schemas import (
    IngestedRow, SkippedRow, PredictionLabel,
    BatchPredictionResult, BatchSummary, BatchProcessingResponse
)
from worldaway.settings.logging import get_logger
from .classifier_service import ExoplanetClassifier
import numpy as np
import pandas as pd
import time

logger = get_logger(__name__)

EXPORT_COLUMNS = [
    "Index", "Prediction", "Confidence", "Orbital Period", "Transit Duration",
    "Planetary Radius", "Stellar Temp", "SNR", "Depth"
]


class BatchService:
    """Scores a sequence of ingested rows and summarizes the outcome"""

    def __init__(self, classifier: ExoplanetClassifier):
        self.classifier = classifier

    def process(
        self,
        rows: Sequence[IngestedRow],
        skipped_rows: Optional[List[SkippedRow]] = None
    ) -> BatchProcessingResponse:
        start_time = time.time()
        skipped_rows = skipped_rows or []

        results = []
        for row in rows:
            features = row.to_record()
            result = self.classifier.predict(features)
            self.classifier.increment_predictions()
            results.append(BatchPredictionResult(
                row_index=row.row_index,
                features=features,
                result=result
            ))

        summary = self.summarize(results, rows_skipped=len(skipped_rows))
        processing_time = time.time() - start_time

        logger.info(
            "batch_processed",
            total=summary.total,
            confirmed=summary.confirmed,
            candidate=summary.candidate,
            false_positive=summary.false_positive,
            rows_skipped=summary.rows_skipped
        )

        return BatchProcessingResponse(
            results=results,
            summary=summary,
            skipped_rows=skipped_rows,
            processing_time_seconds=processing_time
        )

    @staticmethod
    def summarize(results: Sequence[BatchPredictionResult], rows_skipped: int = 0) -> BatchSummary:
        if not results:
            return BatchSummary(
                total=0, confirmed=0, candidate=0, false_positive=0,
                average_confidence=0.0, rows_skipped=rows_skipped
            )

        df = pd.DataFrame([
            {"prediction": r.result.prediction.value, "confidence": r.result.confidence}
            for r in results
        ])
        counts = df["prediction"].value_counts()

        return BatchSummary(
            total=len(df),
            confirmed=int(counts.get(PredictionLabel.CONFIRMED.value, 0)),
            candidate=int(counts.get(PredictionLabel.CANDIDATE.value, 0)),
            false_positive=int(counts.get(PredictionLabel.FALSE_POSITIVE.value, 0)),
            average_confidence=float(df["confidence"].mean()),
            rows_skipped=rows_skipped
        )


def format_number(value: float) -> str:
    """Write numbers in plain decimal form: 5778.0 becomes 5778, 5e-05 becomes 0.00005"""
    return np.format_float_positional(float(value), trim="-")


def export_results_csv(results: Sequence[BatchPredictionResult]) -> str:
    """Render batch results in the downloadable CSV layout"""
    records = []
    for position, r in enumerate(results, start=1):
        f = r.features
        records.append([
            str(position),
            r.result.prediction.value,
            f"{r.result.confidence * 100:.2f}%",
            format_number(f.orbital_period),
            format_number(f.transit_duration),
            format_number(f.planetary_radius),
            format_number(f.stellar_temp),
            format_number(f.snr),
            format_number(f.depth),
        ])

    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n").rstrip("\n")
