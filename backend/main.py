"""
Agri Advisor - FastAPI backend: crop recommendations, leaf diagnosis (mock),
weather snapshot and market prices.

Run with: uvicorn main:app --app-dir backend --port 3000
"""
import time
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import settings
from crop_database import CROP_DATABASE, get_season_display_name, list_seasons, list_soils, recommend_crops
from diagnosis import DiagnosisProvider, RandomDiagnosisProvider, decode_leaf_image
from logger import logger
from market import MARKET_PRICES, WEATHER_SNAPSHOT
from middleware import ExceptionLoggingMiddleware, RequestLoggingMiddleware
from schemas import (
    AdvisoryQuery,
    CropProfileOut,
    DiagnosisResult,
    MarketPrice,
    RecommendationResponse,
    WeatherReport,
)

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)

_diagnosis_provider = RandomDiagnosisProvider()


def get_diagnosis_provider() -> DiagnosisProvider:
    """Diagnosis strategy for /api/analyze-image; override in tests."""
    return _diagnosis_provider


@app.get("/api/weather", response_model=WeatherReport)
def get_weather():
    return WEATHER_SNAPSHOT


@app.post("/api/recommend", response_model=RecommendationResponse)
def recommend(query: AdvisoryQuery):
    """Rule-based crop suggestions for soil, season and budget. Always at least one."""
    recommendations = recommend_crops(query)
    logger.info(
        f"Recommended {len(recommendations)} crop(s) for soil={query.soil or 'all'} "
        f"season={query.season or 'all'} budget={query.budget}"
    )
    return RecommendationResponse(recommendations=recommendations)


@app.post("/api/analyze-image", response_model=DiagnosisResult)
def analyze_image(
    crop_image: UploadFile = File(..., alias="cropImage"),
    provider: DiagnosisProvider = Depends(get_diagnosis_provider),
):
    """Leaf photo diagnosis. The upload is only decoded, never stored."""
    if not crop_image.content_type or not crop_image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Invalid image: file must be an image")

    try:
        contents = crop_image.file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Invalid image: could not read file - {str(e)}")

    try:
        image = decode_leaf_image(contents)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # Mock classifier: mimic model latency
    if settings.ANALYSIS_DELAY_SECONDS > 0:
        time.sleep(settings.ANALYSIS_DELAY_SECONDS)

    result = provider.diagnose(image)
    logger.info(f"Leaf diagnosis: {result.status} ({result.disease})")
    return result


@app.get("/api/market", response_model=List[MarketPrice])
def get_market():
    return MARKET_PRICES


@app.get("/api/crops", response_model=List[CropProfileOut])
def list_crops():
    """Crop catalog, in declaration order."""
    return [
        CropProfileOut(
            name=crop.name,
            soils=sorted(crop.soils),
            season=crop.season,
            season_display=get_season_display_name(crop.season),
            min_budget=crop.min_budget,
            details=crop.details,
        )
        for crop in CROP_DATABASE
    ]


@app.get("/health")
def health():
    return {
        "status": "active",
        "version": app.version,
        "soils": list_soils(),
        "seasons": list_seasons(),
        "features": [
            "crop_recommendations",
            "leaf_diagnosis_mock",
            "weather",
            "market_prices",
        ],
    }


# Frontend, mounted last so /api routes win
_static_dir = Path(settings.STATIC_DIR)
if _static_dir.is_dir():
    app.mount("/", StaticFiles(directory=str(_static_dir), html=True), name="static")
