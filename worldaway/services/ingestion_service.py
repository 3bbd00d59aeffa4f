from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from worldaway.exceptions import FeatureValidationError, IngestionError
from worldaway.schemas import FEATURE_FIELDS, FeatureRecord, IngestedRow, SkippedRow
from worldaway.settings.logging import get_logger
import math

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldRange:
    low: float
    high: float
    low_inclusive: bool
    message: str

    def contains(self, value: float) -> bool:
        above_low = value >= self.low if self.low_inclusive else value > self.low
        return above_low and value <= self.high


# Input limits for manually entered records; CSV rows are not range checked
FEATURE_RANGES: Dict[str, FieldRange] = {
    "orbital_period": FieldRange(0, 10000, False, "Must be between 0 and 10000 days"),
    "transit_duration": FieldRange(0, 24, False, "Must be between 0 and 24 hours"),
    "planetary_radius": FieldRange(0, 50, False, "Must be between 0 and 50 Earth radii"),
    "stellar_temp": FieldRange(2000, 10000, True, "Must be between 2000 and 10000 K"),
    "snr": FieldRange(0, 100, False, "Must be between 0 and 100"),
    "depth": FieldRange(0, 1, False, "Must be between 0 and 1"),
}

SAMPLE_CSV_HEADER = ",".join(FEATURE_FIELDS)
SAMPLE_CSV_ROWS = [
    "15.234,2.45,1.12,5778,12.5,0.0023",
    "3.567,1.23,0.89,6200,18.3,0.0045",
    "89.123,4.12,2.34,5100,8.7,0.0012",
    "1.234,0.78,0.65,4500,7.2,0.0008",
    "234.567,5.67,3.45,5900,22.1,0.0067",
    "45.678,3.12,1.78,6100,15.6,0.0034",
    "7.890,1.45,0.98,5500,9.8,0.0015",
    "123.456,4.56,2.12,5800,19.4,0.0052",
]


def _to_float(value: Any) -> Optional[float]:
    """Parse a finite float, None when the value is missing or not numeric"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def validate_features(data: Mapping[str, Any]) -> FeatureRecord:
    """
    Validate a manually entered record against the input limits.

    All failing fields are reported together; nothing is scored unless every
    field passes.
    """
    errors: Dict[str, str] = {}
    values: Dict[str, float] = {}

    for name in FEATURE_FIELDS:
        number = _to_float(data.get(name))
        if number is None:
            errors[name] = "Must be a number"
            continue
        if not FEATURE_RANGES[name].contains(number):
            errors[name] = FEATURE_RANGES[name].message
            continue
        values[name] = number

    if errors:
        raise FeatureValidationError(errors)
    return FeatureRecord(**values)


def _normalize_header(header: str) -> str:
    return "".join(ch for ch in header if ch != "_" and not ch.isspace())


@dataclass
class ParsedCSV:
    rows: List[IngestedRow]
    skipped_rows: List[SkippedRow] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)


class CSVIngestor:
    """Turns uploaded CSV text into feature records"""

    @staticmethod
    def match_headers(headers: List[str]) -> Dict[str, int]:
        """Locate the column of each required field, case and separator insensitive"""
        indices: Dict[str, int] = {}
        normalized = [_normalize_header(h) for h in headers]
        for name in FEATURE_FIELDS:
            target = name.replace("_", "")
            try:
                indices[name] = normalized.index(target)
            except ValueError:
                raise IngestionError(
                    f"Required column '{name}' not found in CSV. Found headers: {', '.join(headers)}"
                ) from None
        return indices

    @classmethod
    def parse(cls, csv_text: str) -> ParsedCSV:
        lines = csv_text.strip().split("\n")
        if len(lines) < 2:
            raise IngestionError("CSV must contain at least a header row and one data row")

        headers = [h.strip().lower() for h in lines[0].split(",")]
        indices = cls.match_headers(headers)

        rows: List[IngestedRow] = []
        skipped: List[SkippedRow] = []

        for row_index in range(1, len(lines)):
            line = lines[row_index].strip()
            if not line:
                continue

            values = [v.strip() for v in line.split(",")]
            parsed: Dict[str, float] = {}
            invalid: List[str] = []
            for name, column in indices.items():
                number = _to_float(values[column]) if column < len(values) else None
                if number is None:
                    invalid.append(name)
                else:
                    parsed[name] = number

            if invalid:
                reason = f"Invalid numeric value for: {', '.join(invalid)}"
                logger.warning("csv_row_skipped", row_index=row_index, reason=reason)
                skipped.append(SkippedRow(row_index=row_index, reason=reason))
                continue

            rows.append(IngestedRow(row_index=row_index, **parsed))

        if not rows:
            raise IngestionError("No valid data rows found in CSV")

        logger.info("csv_parsed", rows=len(rows), skipped=len(skipped))
        return ParsedCSV(rows=rows, skipped_rows=skipped, headers=headers)


def parse_csv(csv_text: str) -> List[IngestedRow]:
    return CSVIngestor.parse(csv_text).rows


def generate_sample_csv() -> str:
    """Template CSV offered for download"""
    return "\n".join([SAMPLE_CSV_HEADER, *SAMPLE_CSV_ROWS])
