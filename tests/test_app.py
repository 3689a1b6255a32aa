# Test cases for app-level behaviour

def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json["data"]["name"] == "Quiz API"


def test_db_health(client):
    response = client.get("/db_health")
    assert response.status_code == 200
    assert response.json["data"]["status"] == "connected"


def test_unknown_route_returns_envelope(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json == {"message": "Resource not found", "data": None}


def test_unsupported_http_method_returns_envelope(client):
    response = client.patch("/quizzes")
    assert response.status_code == 405
    assert response.json["message"] == "Method not allowed"
    assert response.json["data"] is None


def test_security_headers_are_applied(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "default-src 'none'" in response.headers["Content-Security-Policy"]
    assert "Strict-Transport-Security" not in response.headers


def test_hsts_only_on_secure_requests(client):
    response = client.get("/", base_url="https://localhost")
    assert response.headers["Strict-Transport-Security"].startswith("max-age=31536000")


def test_cors_for_allowed_origin(client):
    response = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"


def test_cors_ignores_unknown_origin(client):
    response = client.get("/", headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in response.headers


def test_usage_is_logged_for_every_request(client, caplog):
    with caplog.at_level("INFO", logger="quiz_api.security"):
        client.get("/quizzes/42")

    usage = [r for r in caplog.records if r.getMessage() == "API request"]
    assert len(usage) == 1
    assert usage[0].context["endpoint"] == "/quizzes/42"
    assert usage[0].context["response_code"] == 404
    assert usage[0].context["response_time_ms"] >= 0
