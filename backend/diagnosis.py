"""
Agri Advisor - leaf disease diagnosis.
The shipped provider is a mock that picks a canned result at random; swap in a
real classifier by implementing DiagnosisProvider.
"""
import random
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import cv2
import numpy as np

from schemas import DiagnosisResult

CANNED_RESULTS: Tuple[DiagnosisResult, ...] = (
    DiagnosisResult(status="Healthy", disease="None", remedy="Continue standard care."),
    DiagnosisResult(status="Diseased", disease="Leaf Spot", remedy="Apply Fungicide X."),
    DiagnosisResult(status="Diseased", disease="Yellow Rust", remedy="Spray Nitrogen supplement."),
)


def decode_leaf_image(image_bytes: bytes) -> np.ndarray:
    """Decode an uploaded leaf photo to a BGR array; ValueError if it is not an image."""
    if not image_bytes:
        raise ValueError("Invalid image: empty file")
    nparr = np.frombuffer(image_bytes, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError("Invalid image: could not decode")
    return img


class DiagnosisProvider(ABC):
    @abstractmethod
    def diagnose(self, image: np.ndarray) -> DiagnosisResult:
        ...


class RandomDiagnosisProvider(DiagnosisProvider):
    """Uniform pick from CANNED_RESULTS. Pass a seeded Random for repeatable output."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def diagnose(self, image: np.ndarray) -> DiagnosisResult:
        return self.rng.choice(CANNED_RESULTS)


class FixedDiagnosisProvider(DiagnosisProvider):
    """Always returns the same result."""

    def __init__(self, result: DiagnosisResult):
        self.result = result

    def diagnose(self, image: np.ndarray) -> DiagnosisResult:
        return self.result
