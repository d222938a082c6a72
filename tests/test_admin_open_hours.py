"""Admin open hours configuration and the schedule store"""
import pytest
from sqlalchemy.exc import OperationalError

from app.services.business.hours import DayWindow, TimeFact, Weekday
from app.services.store.open_hours import OpenHoursStore
from tests.conftest import SHOP

FULL_WEEK = {
    day: {"open_time": "09:00", "close_time": "17:00"}
    for day in ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
}


@pytest.fixture
def frozen_monday(monkeypatch):
    def freeze(time_of_day):
        monkeypatch.setattr(
            "app.api.v1.routers.admin_open_hours.fact_from_reference_now",
            lambda timezone_name, now=None: TimeFact(Weekday.MONDAY, time_of_day),
        )
    return freeze


class TestOpenHoursStore:
    def test_upsert_inserts_then_updates(self, db_session):
        store = OpenHoursStore(db_session)
        store.upsert(SHOP, Weekday.MONDAY, DayWindow("09:00", "17:00"))
        store.upsert(SHOP, Weekday.MONDAY, DayWindow("10:00", "18:00"))
        db_session.commit()

        assert store.get(SHOP, Weekday.MONDAY) == DayWindow("10:00", "18:00")
        assert len(store.list_rows(SHOP)) == 1

    def test_get_missing_day(self, db_session):
        assert OpenHoursStore(db_session).get(SHOP, Weekday.SUNDAY) is None

    def test_get_all_is_per_shop(self, db_session):
        store = OpenHoursStore(db_session)
        store.upsert(SHOP, Weekday.MONDAY, DayWindow("09:00", "17:00"))
        store.upsert("other.myshopify.com", Weekday.TUESDAY, DayWindow("08:00", "12:00"))
        db_session.commit()

        assert store.get_all(SHOP) == {Weekday.MONDAY: DayWindow("09:00", "17:00")}
        assert store.get_all("nobody.myshopify.com") == {}

    def test_rows_ordered_monday_first(self, db_session):
        store = OpenHoursStore(db_session)
        for day in [Weekday.SUNDAY, Weekday.WEDNESDAY, Weekday.MONDAY]:
            store.upsert(SHOP, day, DayWindow("09:00", "17:00"))
        db_session.commit()

        assert [r.day_of_week for r in store.list_rows(SHOP)] == ["Monday", "Wednesday", "Sunday"]


class TestSaveOpenHours:
    def test_requires_session(self, client):
        r = client.put("/api/v1/admin/open-hours", json=FULL_WEEK)
        assert r.status_code == 401

    def test_rejects_bad_token(self, client):
        r = client.put(
            "/api/v1/admin/open-hours",
            json=FULL_WEEK,
            headers={"Authorization": "Bearer garbage"},
        )
        assert r.status_code == 401

    def test_saves_full_week(self, client, auth_headers, db_session):
        r = client.put("/api/v1/admin/open-hours", json=FULL_WEEK, headers=auth_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "success"
        assert data["updated_days"] == [d.value for d in Weekday]

        assert len(OpenHoursStore(db_session).get_all(SHOP)) == 7

    def test_skips_days_left_out(self, client, auth_headers, db_session):
        r = client.put(
            "/api/v1/admin/open-hours",
            json={"friday": {"open_time": "10:00", "close_time": "14:00"}},
            headers=auth_headers,
        )
        assert r.json()["updated_days"] == ["Friday"]
        assert OpenHoursStore(db_session).get_all(SHOP) == {Weekday.FRIDAY: DayWindow("10:00", "14:00")}

    def test_resave_updates_in_place(self, client, auth_headers, db_session):
        client.put("/api/v1/admin/open-hours", json=FULL_WEEK, headers=auth_headers)
        client.put(
            "/api/v1/admin/open-hours",
            json={"monday": {"open_time": "11:00", "close_time": "15:00"}},
            headers=auth_headers,
        )
        store = OpenHoursStore(db_session)
        assert len(store.list_rows(SHOP)) == 7
        assert store.get(SHOP, Weekday.MONDAY) == DayWindow("11:00", "15:00")

    @pytest.mark.parametrize("value", ["9:00", "25:00", "noon", "09:00:00"])
    def test_rejects_bad_time_format(self, client, auth_headers, value):
        r = client.put(
            "/api/v1/admin/open-hours",
            json={"monday": {"open_time": value, "close_time": "17:00"}},
            headers=auth_headers,
        )
        assert r.status_code == 422

    def test_inverted_window_is_stored(self, client, auth_headers, db_session):
        r = client.put(
            "/api/v1/admin/open-hours",
            json={"saturday": {"open_time": "22:00", "close_time": "02:00"}},
            headers=auth_headers,
        )
        assert r.status_code == 200
        assert OpenHoursStore(db_session).get(SHOP, Weekday.SATURDAY) == DayWindow("22:00", "02:00")

    def test_storage_failure(self, client, auth_headers, monkeypatch):
        def broken_upsert(self, shop_id, day, window):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(OpenHoursStore, "upsert", broken_upsert)
        r = client.put("/api/v1/admin/open-hours", json=FULL_WEEK, headers=auth_headers)
        assert r.status_code == 500
        assert r.json() == {"status": "error", "message": "Error saving open hours."}


class TestSaveDayHours:
    def test_saves_single_day(self, client, auth_headers, db_session):
        r = client.put(
            "/api/v1/admin/open-hours/day/Wednesday",
            json={"open_time": "08:30", "close_time": "12:30"},
            headers=auth_headers,
        )
        assert r.status_code == 200
        assert r.json()["updated_days"] == ["Wednesday"]
        assert OpenHoursStore(db_session).get(SHOP, Weekday.WEDNESDAY) == DayWindow("08:30", "12:30")

    def test_unknown_day(self, client, auth_headers):
        r = client.put(
            "/api/v1/admin/open-hours/day/funday",
            json={"open_time": "08:30", "close_time": "12:30"},
            headers=auth_headers,
        )
        assert r.status_code == 400


class TestGetOpenHours:
    def test_requires_session(self, client):
        assert client.get("/api/v1/admin/open-hours").status_code == 401

    def test_empty(self, client, auth_headers, frozen_monday):
        frozen_monday("12:00")
        r = client.get("/api/v1/admin/open-hours", headers=auth_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["shop_id"] == SHOP
        assert data["open_hours"] == []
        # same defaults as the session status endpoint
        assert data["current_status"]["is_open"] is True

    def test_open_now(self, client, auth_headers, frozen_monday):
        frozen_monday("12:00")
        client.put("/api/v1/admin/open-hours", json=FULL_WEEK, headers=auth_headers)

        data = client.get("/api/v1/admin/open-hours", headers=auth_headers).json()
        assert [h["day_of_week"] for h in data["open_hours"]] == [d.value for d in Weekday]
        status = data["current_status"]
        assert status["is_open"] is True
        assert status["current_day"] == "Monday"
        assert status["current_time"] == "12:00"
        assert status["next_open_time"] is None

    def test_closed_now_reports_next_opening(self, client, auth_headers, frozen_monday):
        frozen_monday("18:30")
        client.put("/api/v1/admin/open-hours", json=FULL_WEEK, headers=auth_headers)

        status = client.get("/api/v1/admin/open-hours", headers=auth_headers).json()["current_status"]
        assert status["is_open"] is False
        assert status["reason"] == "outside_window"
        assert status["next_open_day"] == "Tuesday"
        assert status["next_open_time"] == "09:00"
