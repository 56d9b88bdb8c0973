"""
Unit tests for the resilience wrapper and the advisory API client
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from advisor_client import AdvisorClient, fetch_with_fallback, request_json
from fallback import FALLBACK_DIAGNOSIS, FALLBACK_MARKET, FALLBACK_WEATHER
from schemas import AdvisoryQuery


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


class TestFetchWithFallback:
    @patch("advisor_client.logger")
    def test_failure_returns_fallback_and_logs_once(self, mock_logger):
        fallback = {"recommendations": []}

        def boom():
            raise requests.ConnectionError("refused")

        assert fetch_with_fallback(boom, fallback, label="POST /api/recommend") is fallback
        mock_logger.warning.assert_called_once()

    @patch("advisor_client.logger")
    def test_success_returns_result_untouched(self, mock_logger):
        result = {"recommendations": [{"name": "Maize", "details": "x"}]}
        fallback = MagicMock()

        assert fetch_with_fallback(lambda: result, fallback) is result
        assert fallback.mock_calls == []
        mock_logger.warning.assert_not_called()

    @patch("advisor_client.logger")
    def test_operation_is_not_retried(self, mock_logger):
        operation = MagicMock(side_effect=requests.Timeout("slow"))
        assert fetch_with_fallback(operation, "fallback") == "fallback"
        operation.assert_called_once_with()


class TestRequestJson:
    def test_passes_timeout_and_decodes(self):
        session = MagicMock()
        session.request.return_value = make_response(payload={"ok": True})

        assert request_json(session, "GET", "http://api/x", 2.5) == {"ok": True}
        session.request.assert_called_once_with("GET", "http://api/x", timeout=2.5)

    def test_non_2xx_raises(self):
        session = MagicMock()
        session.request.return_value = make_response(status_code=503)

        with pytest.raises(requests.HTTPError):
            request_json(session, "GET", "http://api/x", 2.5)


class TestAdvisorClient:
    @patch("advisor_client.logger")
    def test_recommend_success(self, mock_logger):
        payload = {"recommendations": [{"name": "Maize", "details": "Versatile crop."}]}
        session = MagicMock()
        session.request.return_value = make_response(payload=payload)
        client = AdvisorClient(base_url="http://advisor/", timeout=3, session=session)

        result = client.recommend(AdvisoryQuery(soil="loam", season="kharif", budget=6000, prevCrop="soybean"))

        assert result == payload
        session.request.assert_called_once_with(
            "POST",
            "http://advisor/api/recommend",
            timeout=3,
            json={
                "soil": "loam",
                "season": "kharif",
                "budget": "6000",
                "location": "",
                "prevCrop": "soybean",
            },
        )
        mock_logger.warning.assert_not_called()

    @patch("advisor_client.logger")
    def test_recommend_server_error_uses_offline_rules(self, mock_logger):
        session = MagicMock()
        session.request.return_value = make_response(status_code=500)
        client = AdvisorClient(base_url="http://advisor", session=session)

        result = client.recommend(AdvisoryQuery(soil="clay", budget=9000))

        assert [r["name"] for r in result["recommendations"]] == ["Rice", "Sugarcane", "Wheat", "Maize"]
        mock_logger.warning.assert_called_once()

    @patch("advisor_client.logger")
    def test_weather_timeout_uses_fallback(self, mock_logger):
        session = MagicMock()
        session.request.side_effect = requests.Timeout("timed out")
        client = AdvisorClient(base_url="http://advisor", session=session)

        assert client.weather() == FALLBACK_WEATHER.model_dump()
        mock_logger.warning.assert_called_once()

    @patch("advisor_client.logger")
    def test_market_bad_json_uses_fallback(self, mock_logger):
        response = make_response()
        response.json.side_effect = ValueError("no json")
        session = MagicMock()
        session.request.return_value = response
        client = AdvisorClient(base_url="http://advisor", session=session)

        market = client.market()

        assert market == [item.model_dump() for item in FALLBACK_MARKET]
        assert market[-1]["crop"] == "Potato"

    @patch("advisor_client.logger")
    def test_analyze_image_posts_multipart(self, mock_logger):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("down")
        client = AdvisorClient(base_url="http://advisor", session=session)

        assert client.analyze_image(b"\x89PNG", filename="leaf.png", content_type="image/png") == FALLBACK_DIAGNOSIS.model_dump()
        _, kwargs = session.request.call_args
        assert kwargs["files"] == {"cropImage": ("leaf.png", b"\x89PNG", "image/png")}

    def test_defaults_from_settings(self):
        with patch("advisor_client.settings") as mock_settings:
            mock_settings.API_BASE_URL = "http://configured:3000/"
            mock_settings.REQUEST_TIMEOUT_SECONDS = 7.0
            client = AdvisorClient(session=MagicMock())

        assert client.base_url == "http://configured:3000"
        assert client.timeout == 7.0
