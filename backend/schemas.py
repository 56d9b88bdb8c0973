"""
Agri Advisor - request/response models.
"""
import math
import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_CONSTRAINT = "all"

# Leading numeric prefix of a form value, e.g. "5000", "  7.5e3", "6000 INR", "Infinity"
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)")


def coerce_budget(value: Any) -> float:
    """Budget from a form field; anything that is not a number becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number):
        return 0.0
    return number


def normalize_filter(value: Any) -> Optional[str]:
    """Soil/season filter: None means "no constraint" (missing, blank or "all")."""
    if value is None:
        return None
    tag = str(value).strip().lower()
    if not tag or tag == NO_CONSTRAINT:
        return None
    return tag


class AdvisoryQuery(BaseModel):
    """Farm parameters for one recommendation request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    soil: Optional[str] = None
    season: Optional[str] = None
    budget: float = 0.0
    location: Optional[str] = None
    prev_crop: Optional[str] = Field(default=None, alias="prevCrop")

    @field_validator("soil", "season", mode="before")
    @classmethod
    def _normalize_filter(cls, value):
        return normalize_filter(value)

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, value):
        return coerce_budget(value)

    @field_validator("prev_crop", mode="before")
    @classmethod
    def _normalize_prev_crop(cls, value):
        if value is None:
            return None
        return str(value).strip().lower()

    @field_validator("location", mode="before")
    @classmethod
    def _stringify_location(cls, value):
        if value is None:
            return None
        return str(value)

    def to_form(self) -> dict:
        """Wire body for POST /api/recommend (all strings, "all" for no constraint)."""
        if math.isinf(self.budget):
            budget = "Infinity" if self.budget > 0 else "-Infinity"
        elif self.budget.is_integer():
            budget = int(self.budget)
        else:
            budget = self.budget
        return {
            "soil": self.soil or NO_CONSTRAINT,
            "season": self.season or NO_CONSTRAINT,
            "budget": str(budget),
            "location": self.location or "",
            "prevCrop": self.prev_crop or "",
        }


class CropSuggestion(BaseModel):
    name: str
    details: str


class FallbackSuggestion(CropSuggestion):
    """Suggestion synthesized locally when the advisory API is unreachable."""

    details: str = "Suitable match found."


class RecommendationResponse(BaseModel):
    recommendations: List[CropSuggestion]


class CropProfileOut(BaseModel):
    name: str
    soils: List[str]
    season: str
    season_display: str
    min_budget: float = Field(serialization_alias="minBudget")
    details: str


class WeatherReport(BaseModel):
    temp: float
    humidity: float
    rainfall: str
    condition: str


class MarketPrice(BaseModel):
    crop: str
    price: str
    change: str


class DiagnosisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["Healthy", "Diseased"]
    disease: str
    remedy: str
