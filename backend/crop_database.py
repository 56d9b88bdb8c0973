"""
Agri Advisor - Crop Catalog and Recommendation Engine.
Rule-based crop suggestion from soil type, season, budget, location and the
previous crop. The catalog is fixed reference data built once at import.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from schemas import AdvisoryQuery, CropSuggestion

SOIL_TYPES: Tuple[str, ...] = ("clay", "loam", "black", "sandy")
SEASONS: Tuple[str, ...] = ("rabi", "kharif", "zaid")


def get_season_display_name(season: str) -> str:
    """Human-readable season name."""
    names = {
        "kharif": "Kharif (Monsoon)",
        "rabi": "Rabi (Winter)",
        "zaid": "Zaid (Summer)",
    }
    return names.get(season, season.title())


@dataclass(frozen=True)
class CropProfile:
    name: str
    soils: FrozenSet[str]
    season: str
    min_budget: float
    details: str

    def __post_init__(self):
        if not self.soils:
            raise ValueError(f"{self.name}: soils must not be empty")
        if self.min_budget < 0:
            raise ValueError(f"{self.name}: min_budget must be >= 0")
        if self.season not in SEASONS:
            raise ValueError(f"{self.name}: unknown season {self.season!r}")


def _crop(name: str, soils: List[str], season: str, min_budget: float, details: str) -> CropProfile:
    return CropProfile(name, frozenset(soils), season, float(min_budget), details)


# --- Crop Catalog ---
# Declaration order is the output order of recommend_crops.
CROP_DATABASE: Tuple[CropProfile, ...] = (
    _crop("Wheat", ["loam", "clay"], "rabi", 5000, "Requires cool climate. Good for North India."),
    _crop("Rice", ["clay", "loam"], "kharif", 8000, "High water requirement. Ideal for heavy rain areas."),
    _crop("Cotton", ["black"], "kharif", 10000, "Cash crop. Best in black soil regions."),
    _crop("Maize", ["loam", "sandy"], "kharif", 4000, "Versatile crop. Good fodder and food."),
    _crop("Mustard", ["sandy", "loam"], "rabi", 3000, "Low water needed. High oil content."),
    _crop("Watermelon", ["sandy"], "zaid", 5000, "Summer crop. High profit potential."),
    _crop("Soybean", ["loam", "black"], "kharif", 6000, "Nitrogen-fixing. Improves soil health."),
    _crop("Sugarcane", ["loam", "clay"], "kharif", 15000, "Long duration crop. High water need."),
    _crop("Barley", ["sandy", "loam"], "rabi", 3500, "Drought tolerant. Good for saline soil."),
)

# --- Advisory clauses ---
LEGUME_MARKERS = ("soybean", "pulse", "legume")
ROTATION_CROPS = frozenset({"maize", "wheat", "sugarcane"})
ROTATION_CLAUSE = " (Highly Recommended: Good rotation after legumes)"

REGION_MARKER = "north"
NORTH_REGION_CROPS = frozenset({"wheat", "mustard"})
REGION_CLAUSE = " (Suitable for this region)"

GENERIC_SUGGESTION = CropSuggestion(
    name="General Mixed Vegetables",
    details="Spinach, Radish, or Okra suitable for low budget or mixed conditions.",
)


def get_crop(name: str) -> Optional[CropProfile]:
    """Catalog lookup by name, case-insensitive."""
    wanted = name.strip().lower()
    for crop in CROP_DATABASE:
        if crop.name.lower() == wanted:
            return crop
    return None


def list_soils() -> List[str]:
    return list(SOIL_TYPES)


def list_seasons() -> List[str]:
    return list(SEASONS)


def _matches(crop: CropProfile, query: AdvisoryQuery) -> bool:
    soil_ok = query.soil is None or query.soil in crop.soils
    season_ok = query.season is None or crop.season == query.season
    return soil_ok and season_ok and query.budget >= crop.min_budget


def _annotate(crop: CropProfile, query: AdvisoryQuery) -> CropSuggestion:
    details = crop.details
    crop_key = crop.name.lower()

    prev_crop = query.prev_crop or ""
    if any(marker in prev_crop for marker in LEGUME_MARKERS) and crop_key in ROTATION_CROPS:
        details += ROTATION_CLAUSE

    if query.location and REGION_MARKER in query.location.lower() and crop_key in NORTH_REGION_CROPS:
        details += REGION_CLAUSE

    return CropSuggestion(name=crop.name, details=details)


def recommend_crops(query: AdvisoryQuery) -> List[CropSuggestion]:
    """
    Filter the catalog by soil, season and budget, then annotate each match
    with rotation and regional advice.

    Args:
        query: Normalized farm parameters. A None soil/season matches every crop.

    Returns:
        Suggestions in catalog order. Never empty: when nothing matches, a single
        generic low-budget suggestion is returned.
    """
    recommendations = [_annotate(crop, query) for crop in CROP_DATABASE if _matches(crop, query)]
    if not recommendations:
        recommendations.append(GENERIC_SUGGESTION.model_copy())
    return recommendations
