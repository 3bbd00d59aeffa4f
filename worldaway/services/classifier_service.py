from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from worldaway.schemas import (
    FeatureRecord, PredictionLabel, FeatureImportance, ClassificationResult, ModelStats
)
from worldaway.settings.logging import get_logger
import numpy as np
import threading

logger = get_logger(__name__)

# Fixed min/max used to scale each feature, not derived from data
NORMALIZATION_RANGES: Dict[str, Tuple[float, float]] = {
    "orbital_period": (0.5, 500),
    "transit_duration": (0.5, 10),
    "planetary_radius": (0.3, 20),
    "stellar_temp": (3000, 8000),
    "snr": (5, 50),
    "depth": (0.0001, 0.05),
}

FEATURE_IMPORTANCES: Dict[str, float] = {
    "snr": 0.28,
    "depth": 0.24,
    "transit_duration": 0.19,
    "planetary_radius": 0.15,
    "orbital_period": 0.09,
    "stellar_temp": 0.05,
}

NOISE_AMPLITUDE = 0.15
CONFIRMED_THRESHOLD = 0.65
CANDIDATE_THRESHOLD = 0.35

BASELINE_STATS = {
    "accuracy": 0.92,
    "precision": 0.90,
    "recall": 0.88,
    "f1": 0.89,
    "total_predictions": 1247,
}


class ExoplanetClassifier:
    """
    Weighted-score classifier for transit candidates.

    Each record is scaled against fixed ranges, combined with the feature
    weights, perturbed by uniform noise and banded into one of three labels.
    ``rng`` only needs a ``random()`` method returning a float in [0, 1).
    """

    def __init__(self, rng=None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.feature_importances = dict(FEATURE_IMPORTANCES)
        self._stats = ModelStats(
            last_updated=datetime.now(timezone.utc).isoformat(),
            **BASELINE_STATS
        )
        self._stats_lock = threading.Lock()
        self._rng_lock = threading.Lock()

    @staticmethod
    def normalize(value: float, min_value: float, max_value: float) -> float:
        return (value - min_value) / (max_value - min_value)

    def _normalize_record(self, features: FeatureRecord) -> Dict[str, float]:
        return {
            name: self.normalize(getattr(features, name), low, high)
            for name, (low, high) in NORMALIZATION_RANGES.items()
        }

    def _draw(self) -> float:
        with self._rng_lock:
            return float(self.rng.random())

    def calculate_score(self, features: FeatureRecord) -> float:
        """Weighted aggregate of the normalized features plus noise, clamped to [0, 1]"""
        normalized = self._normalize_record(features)
        weights = self.feature_importances

        score = 0.0
        score += normalized["snr"] * weights["snr"]
        score += normalized["depth"] * weights["depth"]
        score += normalized["transit_duration"] * weights["transit_duration"]
        score += normalized["planetary_radius"] * weights["planetary_radius"]
        score += (1 - abs(normalized["orbital_period"] - 0.3)) * weights["orbital_period"]
        stellar = normalized["stellar_temp"]
        score += (1 if 0.3 < stellar < 0.8 else 0.5) * weights["stellar_temp"]

        noise = (self._draw() - 0.5) * NOISE_AMPLITUDE
        return max(0.0, min(1.0, score + noise))

    @staticmethod
    def band_score(score: float) -> Tuple[PredictionLabel, Dict[str, float]]:
        """Map a score to a label and its class probability split"""
        if score >= CONFIRMED_THRESHOLD:
            confirmed_prob = 0.6 + (score - CONFIRMED_THRESHOLD) * 0.8
            candidate_prob = (1 - confirmed_prob) * 0.7
            false_prob = 1 - confirmed_prob - candidate_prob
            label = PredictionLabel.CONFIRMED
        elif score >= CANDIDATE_THRESHOLD:
            candidate_prob = 0.5 + (score - CANDIDATE_THRESHOLD) * 0.5
            confirmed_prob = (1 - candidate_prob) * 0.4
            false_prob = 1 - confirmed_prob - candidate_prob
            label = PredictionLabel.CANDIDATE
        else:
            false_prob = 0.6 + (CANDIDATE_THRESHOLD - score) * 0.8
            candidate_prob = (1 - false_prob) * 0.6
            confirmed_prob = 1 - false_prob - candidate_prob
            label = PredictionLabel.FALSE_POSITIVE

        probabilities = {
            PredictionLabel.CONFIRMED.value: confirmed_prob,
            PredictionLabel.CANDIDATE.value: candidate_prob,
            PredictionLabel.FALSE_POSITIVE.value: false_prob,
        }
        return label, probabilities

    def feature_importance(self) -> List[FeatureImportance]:
        ranked = [
            FeatureImportance(feature=name.replace("_", " ").title(), importance=weight)
            for name, weight in self.feature_importances.items()
        ]
        ranked.sort(key=lambda x: x.importance, reverse=True)
        return ranked

    def classify_score(self, score: float) -> ClassificationResult:
        label, probabilities = self.band_score(score)
        return ClassificationResult(
            prediction=label,
            confidence=probabilities[label.value],
            class_probabilities=probabilities,
            feature_importance=self.feature_importance()
        )

    def predict(self, features: FeatureRecord) -> ClassificationResult:
        """
        Classify a single record.

        Does not touch the prediction counter; callers invoke
        ``increment_predictions`` once per scored record.
        """
        score = self.calculate_score(features)
        result = self.classify_score(score)
        logger.debug(
            "record_scored",
            score=round(score, 4),
            prediction=result.prediction.value,
            confidence=round(result.confidence, 4)
        )
        return result

    def increment_predictions(self, count: int = 1) -> None:
        with self._stats_lock:
            self._stats.total_predictions += count

    def get_stats(self) -> ModelStats:
        with self._stats_lock:
            return self._stats.model_copy()
