"""
Integration tests for API endpoints using the SQLite test DB and a frozen
clock (2026-02-20 12:00 in the calendar timezone).
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest


def _payload(**overrides) -> dict:
    body = {
        "sleep_quality": 4,
        "stress_level": 2,
        "muscle_soreness": 2,
        "motivation": 4,
        "time_available": 45,
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestCreateCheckIn:

    def test_create_defaults_to_now(self, client, now):
        r = client.post("/checkins", json=_payload())
        assert r.status_code == 201
        body = r.json()
        assert body["date"] == now.isoformat()
        assert body["formatted_date"] == "Feb 20, 2026"
        assert body["readiness"] == {
            "score": 100,
            "zone": "train_hard",
            "recommendation": "Train hard",
            "color": "green",
            "explanation": body["readiness"]["explanation"],
        }

    def test_create_poor_day(self, client):
        r = client.post("/checkins", json=_payload(
            sleep_quality=1, stress_level=5, muscle_soreness=5, motivation=1, time_available=0
        ))
        assert r.status_code == 201
        readiness = r.json()["readiness"]
        assert readiness["score"] == 20
        assert readiness["zone"] == "recovery"
        assert readiness["recommendation"] == "Focus on recovery"

    def test_same_day_replaces(self, client, now):
        client.post("/checkins", json=_payload(sleep_quality=1))
        later = (now + timedelta(hours=3)).isoformat()
        second = client.post("/checkins", json=_payload(sleep_quality=5, date=later)).json()

        r = client.get("/checkins/recent")
        body = r.json()
        assert body["total"] == 1
        assert body["items"][0]["id"] == second["id"]
        assert body["items"][0]["sleep_quality"] == 5

    @pytest.mark.parametrize(
        "field,value",
        [
            ("sleep_quality", 0),
            ("stress_level", 6),
            ("muscle_soreness", -1),
            ("motivation", 99),
            ("time_available", 121),
            ("time_available", -5),
        ],
    )
    def test_out_of_range_rejected(self, client, field, value):
        r = client.post("/checkins", json=_payload(**{field: value}))
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any(e["field"] == field for e in body["details"]["errors"])

    def test_missing_field_rejected(self, client):
        body = _payload()
        del body["motivation"]
        r = client.post("/checkins", json=body)
        assert r.status_code == 422


class TestRecent:

    def _seed(self, client, now, days: int) -> None:
        for d in range(days):
            date = (now - timedelta(days=d)).isoformat()
            r = client.post("/checkins", json=_payload(date=date))
            assert r.status_code == 201

    def test_empty(self, client):
        r = client.get("/checkins/recent")
        assert r.status_code == 200
        assert r.json() == {"total": 0, "items": []}

    def test_default_seven_newest_first(self, client, now):
        self._seed(client, now, 10)
        body = client.get("/checkins/recent").json()
        assert body["total"] == 10
        assert len(body["items"]) == 7
        dates = [i["date"] for i in body["items"]]
        assert dates[0] == now.isoformat()
        assert dates == sorted(dates, reverse=True)

    def test_count_larger_than_collection(self, client, now):
        self._seed(client, now, 10)
        assert len(client.get("/checkins/recent?count=20").json()["items"]) == 10

    def test_count_zero(self, client, now):
        self._seed(client, now, 2)
        assert client.get("/checkins/recent?count=0").json()["items"] == []

    def test_negative_count_rejected(self, client):
        r = client.get("/checkins/recent?count=-1")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestToday:

    def test_status_false_when_empty(self, client, now):
        r = client.get("/checkins/today/status")
        assert r.status_code == 200
        assert r.json() == {"day": str(now.date()), "has_check_in": False}

    def test_no_checkin_today_is_404(self, client, now):
        client.post("/checkins", json=_payload(date=(now - timedelta(days=1)).isoformat()))
        r = client.get("/checkins/today")
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "NO_CHECKIN_TODAY"
        assert body["details"]["day"] == str(now.date())

    def test_yesterday_then_today(self, client, now):
        client.post("/checkins", json=_payload(date=(now - timedelta(days=1)).isoformat()))
        created = client.post("/checkins", json=_payload()).json()

        assert client.get("/checkins/today/status").json()["has_check_in"] is True
        r = client.get("/checkins/today")
        assert r.status_code == 200
        assert r.json()["id"] == created["id"]
        assert client.get("/checkins/recent").json()["items"][0]["id"] == created["id"]

    def test_status_follows_clock(self, client, clock):
        client.post("/checkins", json=_payload())
        assert client.get("/checkins/today/status").json()["has_check_in"] is True
        clock.advance(days=1)
        assert client.get("/checkins/today/status").json()["has_check_in"] is False


class TestHistory:

    def test_empty(self, client):
        body = client.get("/checkins/history").json()
        assert body == {"count": 0, "average_score": None, "latest": None, "points": []}

    def test_oldest_first_with_average(self, client, now):
        client.post("/checkins", json=_payload(
            sleep_quality=1, stress_level=5, muscle_soreness=5, motivation=1,
            date=(now - timedelta(days=1)).isoformat(),
        ))
        client.post("/checkins", json=_payload(
            sleep_quality=5, stress_level=1, muscle_soreness=1, motivation=5,
        ))
        body = client.get("/checkins/history").json()
        assert body["count"] == 2
        assert [p["score"] for p in body["points"]] == [20, 100]
        assert body["average_score"] == 60.0
        assert body["latest"]["zone"] == "train_hard"

    def test_count_must_be_positive(self, client):
        assert client.get("/checkins/history?count=0").status_code == 422


class TestClear:

    def test_clear(self, client, now):
        client.post("/checkins", json=_payload())
        client.post("/checkins", json=_payload(date=(now - timedelta(days=1)).isoformat()))
        r = client.delete("/checkins")
        assert r.status_code == 204
        assert client.get("/checkins/recent").json()["total"] == 0
        assert client.get("/checkins/today/status").json()["has_check_in"] is False


class TestConcurrentWrites:

    def test_parallel_posts_for_different_days_are_all_kept(self, client, now):
        days = 8

        def post(offset):
            date = (now - timedelta(days=offset)).isoformat()
            return client.post("/checkins", json=_payload(date=date)).status_code

        with ThreadPoolExecutor(max_workers=days) as pool:
            statuses = list(pool.map(post, range(days)))

        assert statuses == [201] * days
        body = client.get("/checkins/recent?count=50").json()
        assert body["total"] == days
        assert len({item["id"] for item in body["items"]}) == days

    def test_parallel_posts_for_the_same_day_keep_one(self, client, now):
        def post(hour):
            date = now.replace(hour=hour).isoformat()
            return client.post("/checkins", json=_payload(date=date)).status_code

        with ThreadPoolExecutor(max_workers=6) as pool:
            statuses = list(pool.map(post, range(6, 12)))

        assert statuses == [201] * 6
        assert client.get("/checkins/recent?count=50").json()["total"] == 1
