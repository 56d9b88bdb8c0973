"""
Agri Advisor - HTTP client with local fallback.
Every remote call is paired with a fallback payload of the same shape. A failed
call (timeout, connection error, non-2xx, bad JSON) is logged once and the
fallback is returned; nothing is retried and nothing is raised to the caller.
"""
from typing import Any, Callable, Optional, TypeVar

import requests

from config import settings
from fallback import (
    FALLBACK_DIAGNOSIS,
    FALLBACK_MARKET,
    FALLBACK_WEATHER,
    fallback_recommendation_payload,
)
from logger import logger
from schemas import AdvisoryQuery

T = TypeVar("T")


def fetch_with_fallback(operation: Callable[[], T], fallback_value: T, label: Optional[str] = None) -> T:
    """
    Run operation(); on any exception log a warning and return fallback_value.

    Args:
        operation: Zero-argument callable doing the remote work.
        fallback_value: Returned as-is when the operation fails.
        label: Name of the call, for the log line.

    Returns:
        The operation's result unmodified, or fallback_value.
    """
    try:
        return operation()
    except Exception as e:
        logger.warning(
            f"Call to {label or 'remote service'} failed, using fallback data: {e}",
            extra={"label": label},
        )
        return fallback_value


def request_json(session: requests.Session, method: str, url: str, timeout: float, **kwargs) -> Any:
    """Issue one HTTP request; raise on non-2xx, return the decoded JSON body."""
    response = session.request(method, url, timeout=timeout, **kwargs)
    response.raise_for_status()
    return response.json()


class AdvisorClient:
    """Client for the advisory API that degrades to local data when the API is down."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _call(self, method: str, path: str, fallback_value: T, **kwargs) -> T:
        url = f"{self.base_url}{path}"
        return fetch_with_fallback(
            lambda: request_json(self.session, method, url, self.timeout, **kwargs),
            fallback_value,
            label=f"{method} {path}",
        )

    def recommend(self, query: AdvisoryQuery) -> dict:
        """{"recommendations": [{"name", "details"}, ...]} from the API or the offline rules."""
        return self._call(
            "POST",
            "/api/recommend",
            fallback_recommendation_payload(query),
            json=query.to_form(),
        )

    def weather(self) -> dict:
        return self._call("GET", "/api/weather", FALLBACK_WEATHER.model_dump())

    def market(self) -> list:
        return self._call("GET", "/api/market", [item.model_dump() for item in FALLBACK_MARKET])

    def analyze_image(self, image_bytes: bytes, filename: str = "leaf.jpg", content_type: str = "image/jpeg") -> dict:
        return self._call(
            "POST",
            "/api/analyze-image",
            FALLBACK_DIAGNOSIS.model_dump(),
            files={"cropImage": (filename, image_bytes, content_type)},
        )
