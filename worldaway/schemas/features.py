from pydantic import BaseModel, ConfigDict
from pydantic import Field
from typing import List

FEATURE_FIELDS: List[str] = [
    "orbital_period",
    "transit_duration",
    "planetary_radius",
    "stellar_temp",
    "snr",
    "depth",
]


class FeatureRecord(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    orbital_period: float = Field(..., example=15.234, description="Orbital Period (days)")
    transit_duration: float = Field(..., example=2.45, description="Transit Duration (hours)")
    planetary_radius: float = Field(..., example=1.12, description="Planetary Radius (R⊕)")
    stellar_temp: float = Field(..., example=5778, description="Stellar Temperature (K)")
    snr: float = Field(..., example=12.5, description="Signal-to-Noise Ratio")
    depth: float = Field(..., example=0.0023, description="Transit Depth (fractional brightness dip)")


class IngestedRow(FeatureRecord):
    """A feature record tagged with the CSV line it was read from."""

    row_index: int = Field(..., description="Line position in the uploaded CSV (header is 0)")

    def to_record(self) -> FeatureRecord:
        return FeatureRecord(**self.model_dump(exclude={"row_index"}))


class SkippedRow(BaseModel):
    row_index: int = Field(..., description="Line position in the uploaded CSV")
    reason: str = Field(..., description="Why the row was excluded")
