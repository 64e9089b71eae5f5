"""
End-to-end tests for POST /api/analyze with Gemini mocked out.
"""

from fastapi.testclient import TestClient

from reviewsift.main import app
from reviewsift.services.analyzer import FAILURE_REASONS
from reviewsift.services.errors import BadRequestError, RateLimitError

from conftest import gemini_json_response, gemini_response

MARIO_REVIEW = "Great food, friendly staff, the lasagna was perfectly al dente"


class TestAnalyzeEndpoint:
    """Scenario tests for the analysis endpoint."""

    def test_genuine_review(self, client, mock_gemini, genuine_analysis):
        mock_gemini.return_value = gemini_json_response(genuine_analysis)

        response = client.post(
            "/api/analyze",
            json={"reviewText": MARIO_REVIEW, "restaurantName": "Mario's"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "trustScore": 85,
            "isSuspicious": False,
            "explanation": "Specific and genuine",
            "reasons": [
                "**Food Match**: appropriate",
                "**Specific Details**: lasagna mentioned",
            ],
            "restaurant": "Mario's",
        }
        mock_gemini.assert_awaited_once()

    def test_empty_review_rejected(self, client, mock_gemini):
        response = client.post("/api/analyze", json={"reviewText": "", "restaurantName": "Mario's"})

        assert response.status_code == 400
        assert response.json() == {"error": "Review text required"}
        mock_gemini.assert_not_called()

    def test_missing_review_rejected(self, client, mock_gemini):
        response = client.post("/api/analyze", json={"restaurantName": "Mario's"})

        assert response.status_code == 400
        assert response.json() == {"error": "Review text required"}
        mock_gemini.assert_not_called()

    def test_whitespace_review_rejected(self, client, mock_gemini):
        response = client.post("/api/analyze", json={"reviewText": "   \n\t"})

        assert response.status_code == 400
        assert response.json() == {"error": "Review text required"}

    def test_malformed_body_is_pipeline_failure(self, client, mock_gemini):
        response = client.post(
            "/api/analyze",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["trustScore"] == 0
        assert body["isSuspicious"] is True
        assert body["explanation"] == "Analysis failed: Invalid request body"
        assert body["reasons"] == FAILURE_REASONS
        assert body["restaurant"] == "Not specified"
        mock_gemini.assert_not_called()

    def test_numeric_restaurant_name_coerced(self, client, mock_gemini, genuine_analysis):
        mock_gemini.return_value = gemini_json_response(genuine_analysis)

        response = client.post(
            "/api/analyze", json={"reviewText": MARIO_REVIEW, "restaurantName": 5}
        )

        assert response.status_code == 200
        assert response.json()["restaurant"] == "5"
        assert "5" in mock_gemini.call_args.args[0]

    def test_non_string_restaurant_name_ignored(self, client, mock_gemini, genuine_analysis):
        mock_gemini.return_value = gemini_json_response(genuine_analysis)

        response = client.post(
            "/api/analyze",
            json={"reviewText": MARIO_REVIEW, "restaurantName": {"name": "Mario's"}},
        )

        assert response.status_code == 200
        assert response.json()["restaurant"] == "Not specified"

    def test_non_string_review_rejected(self, client, mock_gemini):
        response = client.post("/api/analyze", json={"reviewText": ["a", "b"]})

        assert response.status_code == 400
        assert response.json() == {"error": "Review text required"}
        mock_gemini.assert_not_called()

    def test_missing_api_key(self, client_without_key, mock_gemini):
        response = client_without_key.post("/api/analyze", json={"reviewText": MARIO_REVIEW})

        assert response.status_code == 500
        assert response.json() == {"error": "API key missing"}
        mock_gemini.assert_not_called()

    def test_rate_limited(self, client, mock_gemini):
        mock_gemini.side_effect = RateLimitError(
            "API quota exceeded - please try again later", status_code=429
        )

        response = client.post("/api/analyze", json={"reviewText": MARIO_REVIEW})
        body = response.json()

        assert response.status_code == 500
        assert body["trustScore"] == 0
        assert body["isSuspicious"] is True
        assert "quota exceeded" in body["explanation"]
        assert body["reasons"] == FAILURE_REASONS
        assert body["restaurant"] == "Not specified"

    def test_upstream_bad_request(self, client, mock_gemini):
        mock_gemini.side_effect = BadRequestError(
            "Invalid request - review might be too long", status_code=400
        )

        response = client.post("/api/analyze", json={"reviewText": MARIO_REVIEW})

        assert response.status_code == 500
        assert "too long" in response.json()["explanation"]

    def test_unparseable_model_answer(self, client, mock_gemini):
        mock_gemini.return_value = gemini_response("Sorry, I can't help with that.")

        response = client.post(
            "/api/analyze", json={"reviewText": MARIO_REVIEW, "restaurantName": "Mario's"}
        )
        body = response.json()

        assert response.status_code == 500
        assert body["trustScore"] == 0
        assert body["isSuspicious"] is True
        assert body["restaurant"] == "Mario's"

    def test_long_review_truncated_before_gemini(self, client, mock_gemini, genuine_analysis):
        mock_gemini.return_value = gemini_json_response(genuine_analysis)
        review = "a" * 1500 + "b" * 500

        response = client.post("/api/analyze", json={"reviewText": review})

        assert response.status_code == 200
        prompt = mock_gemini.await_args.args[0]
        assert ("a" * 1500 + "... [truncated]") in prompt
        assert review not in prompt
        assert "b" * 500 not in prompt

    def test_each_request_calls_gemini(self, client, mock_gemini, genuine_analysis):
        mock_gemini.return_value = gemini_json_response(genuine_analysis)
        payload = {"reviewText": MARIO_REVIEW, "restaurantName": "Mario's"}

        client.post("/api/analyze", json=payload)
        client.post("/api/analyze", json=payload)

        assert mock_gemini.await_count == 2


class TestHealthEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_ready_with_key(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"gemini_api_key": "ok"}

    def test_ready_without_key(self, client_without_key):
        response = client_without_key.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"gemini_api_key": "missing"}

    def test_ready_reads_key_per_request(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        client = TestClient(app)

        assert client.get("/ready").status_code == 503

        monkeypatch.setenv("GEMINI_API_KEY", "rotated-key")
        assert client.get("/ready").status_code == 200

        monkeypatch.delenv("GEMINI_API_KEY")
        assert client.get("/ready").status_code == 503


class TestUserInterface:
    def test_index_served(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/api/analyze" in response.text

    def test_error_body_shown_without_score_card(self, client):
        page = client.get("/").text

        assert 'id="error"' in page
        assert "showError((result && result.error)" in page
        assert "isSuspicious: FALLBACK_SCORE < SUSPICION_THRESHOLD" in page
