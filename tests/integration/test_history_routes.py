"""
Integration Tests for the history and event logging routes
"""

import pytest
from sqlalchemy import text

from fakes import FakeEventSource
from fluidtrack.api.deps import get_event_repository

pytestmark = pytest.mark.integration


async def log(client, kind, **body):
    response = await client.post(f"/api/log/{kind}", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestEventLogging:

    async def test_event_without_timestamp_lands_on_today(self, client):
        data = await log(client, "intake", fluid_type="water", amount_ml=150)
        assert data["ok"] is True
        assert data["day_key"] == "2026-10-17"

    async def test_timestamp_is_bucketed_by_local_day(self, client):
        # 03:00 UTC on the 17th is 11 PM on the 16th in New York
        data = await log(client, "gag", logged_at="2026-10-17T03:00:00Z")
        assert data["day_key"] == "2026-10-16"

    async def test_day_start_hour_applies_to_logging(self, client):
        await client.post("/api/settings", json={
            "daily_limit_ml": "1000",
            "warn_threshold_yellow": "70",
            "warn_threshold_red": "90",
            "day_start_hour": "4",
        })
        # 2:00 AM local on the 17th belongs to the 16th with a 4am start
        data = await log(client, "output", fluid_type="urine", logged_at="2026-10-17T06:00:00Z")
        assert data["day_key"] == "2026-10-16"

    async def test_rejects_non_positive_intake(self, client):
        response = await client.post("/api/log/intake", json={"fluid_type": "water", "amount_ml": 0})
        assert response.status_code == 422

    async def test_rejects_unknown_fluid(self, client):
        response = await client.post("/api/log/intake", json={"fluid_type": "soda", "amount_ml": 100})
        assert response.status_code == 422


class TestHistory:

    async def test_default_is_seven_days_today_first(self, client):
        response = await client.get("/api/history")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        days = body["days"]
        assert [d["dayKey"] for d in days] == [
            "2026-10-17", "2026-10-16", "2026-10-15", "2026-10-14",
            "2026-10-13", "2026-10-12", "2026-10-11",
        ]
        assert days[0]["isToday"] is True
        assert days[0]["label"] == "Sat, Oct 17"
        assert days[0]["collapsed"] is False
        assert all(d["collapsed"] for d in days[1:])

    async def test_summaries_reflect_logged_events(self, client):
        await log(client, "intake", fluid_type="water", amount_ml=500, logged_at="2026-10-17T15:00:00Z")
        await log(client, "intake", fluid_type="pediasure", amount_ml=250, logged_at="2026-10-17T16:00:00Z")
        await log(client, "output", fluid_type="urine", amount_ml=80, logged_at="2026-10-17T17:30:00Z")
        await log(client, "gag", logged_at="2026-10-16T14:00:00Z")
        await log(client, "wellness", slot="evening", energy=4, cyanosis=1, logged_at="2026-10-17T23:00:00Z")
        await log(client, "wellness", slot="evening", energy=2, cyanosis=1, logged_at="2026-10-16T23:00:00Z")

        days = (await client.get("/api/history", params={"days": 3})).json()["days"]
        today, yesterday, before = days

        assert today["intake"]["total_ml"] == 750
        assert today["intake"]["percent"] == 75
        assert today["intake"]["severity"] == "yellow"
        assert today["intake"]["byType"] == {"water": 500, "pediasure": 250}
        assert today["outputs"][0]["fluid_type"] == "urine"
        assert today["outputs"][0]["time"] == "1:30 PM"
        assert today["wellness"]["evening"]["energy"] == 4
        assert today["trends"] == {"energy": "up", "cyanosis": "flat"}

        assert yesterday["gagCount"] == 1
        assert yesterday["collapsed"] is False
        assert yesterday["trends"] == {"energy": None, "cyanosis": None}

        assert before["collapsed"] is True

    @pytest.mark.parametrize("days", [0, -3])
    async def test_rejects_invalid_days(self, client, days):
        response = await client.get("/api/history", params={"days": days})
        assert response.status_code == 422

    async def test_store_failure_is_503_with_no_partial_data(self, app, client):
        app.dependency_overrides[get_event_repository] = lambda: FakeEventSource(
            fail_on=["2026-10-15"]
        )

        response = await client.get("/api/history")

        assert response.status_code == 503
        body = response.json()
        assert body["ok"] is False
        assert "days" not in body
        assert "2026-10-15" in body["error"]


class TestSettingsStoreFailure:

    @pytest.fixture
    async def settings_table_dropped(self, db_session):
        await db_session.execute(text("DROP TABLE setting"))
        await db_session.commit()

    @pytest.mark.parametrize("path", ["/api/history", "/api/report/today", "/api/settings"])
    async def test_config_load_failure_is_503(self, client, settings_table_dropped, path):
        response = await client.get(path)

        assert response.status_code == 503
        assert response.json() == {"ok": False, "error": "Could not load settings"}

    async def test_event_logging_is_503(self, client, settings_table_dropped):
        response = await client.post("/api/log/gag", json={})

        assert response.status_code == 503
        assert response.json() == {"detail": "Could not load settings"}
