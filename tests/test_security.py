import pytest

from utils.security import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_limiter_allows_up_to_limit(clock):
    limiter = FixedWindowRateLimiter(3, 60, clock=clock)

    states = [limiter.hit("10.0.0.1") for _ in range(3)]

    assert all(state.allowed for state in states)
    assert [state.remaining for state in states] == [2, 1, 0]


def test_limiter_blocks_after_limit(clock):
    limiter = FixedWindowRateLimiter(2, 60, clock=clock)
    limiter.hit("10.0.0.1")
    limiter.hit("10.0.0.1")

    clock.now += 15
    state = limiter.hit("10.0.0.1")

    assert not state.allowed
    assert state.remaining == 0
    assert state.retry_after == 45
    assert state.headers["X-RateLimit-Limit"] == "2"


def test_limiter_resets_after_window(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    limiter.hit("10.0.0.1")
    assert not limiter.hit("10.0.0.1").allowed

    clock.now += 60

    assert limiter.hit("10.0.0.1").allowed


def test_limiter_counts_clients_separately(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)

    assert limiter.hit("10.0.0.1").allowed
    assert limiter.hit("10.0.0.2").allowed
    assert not limiter.hit("10.0.0.1").allowed


def test_limiter_reset(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    limiter.hit("10.0.0.1")

    limiter.reset("10.0.0.1")

    assert limiter.hit("10.0.0.1").allowed


def test_limiter_prunes_expired_windows(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    limiter.PRUNE_THRESHOLD = 2
    for address in ("a", "b", "c"):
        limiter.hit(address)

    clock.now += 120
    limiter.hit("d")

    assert set(limiter._windows) == {"d"}


@pytest.fixture
def limited_app(app, clock):
    app.extensions["rate_limiter"] = FixedWindowRateLimiter(2, 3600, clock=clock)
    return app


def test_rate_limit_headers_on_allowed_request(limited_app, client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["X-RateLimit-Limit"] == "2"
    assert response.headers["X-RateLimit-Remaining"] == "1"
    assert response.headers["X-RateLimit-Reset"] == "4600"


def test_rate_limit_exceeded(limited_app, client, clock):
    client.get("/")
    client.get("/")

    clock.now += 600
    response = client.get("/quizzes")

    assert response.status_code == 429
    assert response.json["message"] == "Rate limit exceeded"
    assert response.json["data"] == {"limit": 2, "retry_after": 3000}
    assert response.headers["Retry-After"] == "3000"
    assert response.headers["X-Content-Type-Options"] == "nosniff"

    clock.now += 3000
    assert client.get("/").status_code == 200


def test_rate_limit_uses_forwarded_address(limited_app, client):
    client.get("/", headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"})
    client.get("/", headers={"X-Forwarded-For": "203.0.113.5"})

    assert client.get("/", headers={"X-Forwarded-For": "203.0.113.5"}).status_code == 429
    assert client.get("/", headers={"X-Forwarded-For": "203.0.113.6"}).status_code == 200


def test_invalid_forwarded_address_falls_back_to_peer(limited_app, client):
    client.get("/", headers={"X-Forwarded-For": "not-an-ip"})
    client.get("/")

    assert client.get("/").status_code == 429


def test_rate_limit_can_be_disabled(limited_app, client):
    limited_app.config["RATE_LIMIT_ENABLED"] = False

    for _ in range(5):
        response = client.get("/")
        assert response.status_code == 200
    assert "X-RateLimit-Limit" not in response.headers


def test_blocked_input_is_logged(client, caplog):
    with caplog.at_level("INFO", logger="quiz_api.security"):
        response = client.post(
            "/quizzes",
            json={"title": "Science Quiz", "tags": "<script>alert(1)</script>"},
            headers={"X-Forwarded-For": "198.51.100.7"},
        )

    assert response.status_code == 403
    records = [r for r in caplog.records if r.getMessage() == "XSS attempt detected"]
    assert len(records) == 1
    assert records[0].levelname == "CRITICAL"
    assert records[0].client_ip == "198.51.100.7"
    assert records[0].context["field"] == "tags"
