# tests/test_rate_limiter.py

from app.main import app
from app.rate_limiter import RollingWindowLimiter, limit_booking_attempts

from tests.conftest import TOMORROW


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_rolling_window():
    clock = FakeClock()
    limiter = RollingWindowLimiter(limit=3, window_seconds=3600, clock=clock)

    assert all(limiter.hit("1.2.3.4") for _ in range(3))
    assert not limiter.hit("1.2.3.4")
    # other clients are counted separately
    assert limiter.hit("5.6.7.8")

    clock.now += 3599
    assert not limiter.hit("1.2.3.4")
    clock.now += 1
    assert limiter.hit("1.2.3.4")


def test_rejected_attempts_do_not_extend_the_window():
    clock = FakeClock()
    limiter = RollingWindowLimiter(limit=1, window_seconds=60, clock=clock)
    assert limiter.hit("a")
    clock.now += 30
    assert not limiter.hit("a")
    clock.now += 30
    assert limiter.hit("a")


def test_fourth_booking_attempt_in_an_hour_is_429(client, cut):
    del app.dependency_overrides[limit_booking_attempts]

    for time in ("10:00", "12:00", "14:00"):
        body = {
            "customerName": "Carla",
            "customerPhone": "11988887777",
            "customerEmail": "carla@example.com",
            "serviceId": cut.id,
            "date": TOMORROW,
            "time": time,
        }
        assert client.post("/bookings", json=body).status_code == 201

    body["time"] = "16:00"
    response = client.post("/bookings", json=body)
    assert response.status_code == 429
    # public reads are not limited
    assert client.get("/availability", params={"date": TOMORROW, "serviceId": cut.id}).status_code == 200


def test_idle_clients_are_forgotten_after_the_window():
    clock = FakeClock()
    limiter = RollingWindowLimiter(limit=3, window_seconds=60, clock=clock)
    for n in range(10_000):
        assert limiter.hit(f"10.0.{n // 256}.{n % 256}")
    assert len(limiter._hits) == 10_000

    clock.now += 60
    assert limiter.hit("10.9.9.9")
    assert list(limiter._hits) == ["10.9.9.9"]


def test_client_inside_the_window_survives_a_sweep():
    clock = FakeClock()
    limiter = RollingWindowLimiter(limit=1, window_seconds=60, clock=clock)
    assert limiter.hit("old")
    clock.now += 30
    assert limiter.hit("recent")
    clock.now += 30
    assert limiter.hit("other")
    assert set(limiter._hits) == {"recent", "other"}
    assert not limiter.hit("recent")
