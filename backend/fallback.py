"""
Agri Advisor - local fallback data.
Used by the client when the advisory API cannot be reached. Nothing here reads
the crop catalog or touches the network.
"""
from typing import List

from schemas import AdvisoryQuery, DiagnosisResult, FallbackSuggestion, MarketPrice, WeatherReport

WATER_RETAINING_SOILS = ("clay", "loam")

FALLBACK_WEATHER = WeatherReport(temp=28, humidity=65, rainfall="Moderate", condition="Cloudy")

FALLBACK_MARKET: List[MarketPrice] = [
    MarketPrice(crop="Wheat", price="2200/q", change="+5%"),
    MarketPrice(crop="Rice", price="1900/q", change="-2%"),
    MarketPrice(crop="Cotton", price="6000/q", change="+1.5%"),
    MarketPrice(crop="Tomato", price="1200/q", change="+10%"),
    MarketPrice(crop="Potato", price="900/q", change="0%"),
]

FALLBACK_DIAGNOSIS = DiagnosisResult(
    status="Healthy",
    disease="None detected",
    remedy="Plant looks healthy. Keep monitoring.",
)


def fallback_recommend(query: AdvisoryQuery) -> List[FallbackSuggestion]:
    """
    Coarse offline rules. Rules are independent, so a crop may appear twice;
    duplicates are kept.
    """
    names: List[str] = []
    if query.budget > 8000 and query.soil in WATER_RETAINING_SOILS:
        names += ["Rice", "Sugarcane"]
    if query.budget > 5000:
        names += ["Wheat", "Maize"]
    if query.soil == "black":
        names.append("Cotton")
    if not names:
        names += ["Spinach", "Radish (Low Cost)"]
    return [FallbackSuggestion(name=name) for name in names]


def fallback_recommendation_payload(query: AdvisoryQuery) -> dict:
    """Same shape as a POST /api/recommend response."""
    return {"recommendations": [s.model_dump() for s in fallback_recommend(query)]}
