import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from config import settings
from diagnosis import FixedDiagnosisProvider
from main import app, get_diagnosis_provider
from schemas import DiagnosisResult


@pytest.fixture
def leaf_png() -> bytes:
    img = np.zeros((32, 32, 3), dtype=np.uint8)
    img[:, :] = (34, 139, 34)
    _, buf = cv2.imencode(".png", img)
    return buf.tobytes()


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "ANALYSIS_DELAY_SECONDS", 0)
    app.dependency_overrides[get_diagnosis_provider] = lambda: FixedDiagnosisProvider(
        DiagnosisResult(status="Diseased", disease="Leaf Spot", remedy="Apply Fungicide X.")
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
