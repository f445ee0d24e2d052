"""Tests for session scheduling API endpoints."""

from datetime import UTC, datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from fastapi import status
from fastapi.testclient import TestClient

T = datetime(2024, 10, 7, 9, 0, tzinfo=UTC)


def session_payload(
    begins: datetime = T,
    ends: datetime | None = None,
    session_type: str = "tutorial",
    location: str = "Room 101",
) -> dict[str, str]:
    return {
        "session_type": session_type,
        "location": location,
        "begins": begins.isoformat(),
        "ends": (ends or begins + timedelta(hours=2)).isoformat(),
    }


def parse(value: str) -> datetime:
    return datetime.fromisoformat(value)


class TestScheduleSession:
    """Test suite for POST /groups/:id/sessions endpoint."""

    def test_schedule_session_success(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions", json=session_payload()
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["group_id"] == test_group["id"]
        assert data["session_type"] == "tutorial"
        assert data["location"] == "Room 101"
        assert parse(data["begins"]) == T
        assert parse(data["ends"]) == T + timedelta(hours=2)
        assert data["attendance_count"] == 0

        group = authorized_client.get(f"/api/v1/groups/{test_group['id']}").json()
        assert group["session_count"] == 1

    def test_schedule_session_other_timezone(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        """Test times with an offset are kept as the same instant."""
        cest = timezone(timedelta(hours=2))
        begins = datetime(2024, 10, 7, 11, 0, tzinfo=cest)
        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions", json=session_payload(begins=begins)
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert parse(response.json()["begins"]) == T

    def test_ends_equal_to_begins(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        """Test an empty time window is rejected and nothing is scheduled."""
        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions", json=session_payload(ends=T)
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error"] == "ValidationError"
        assert "'ends' datetime must be after" in data["detail"]

        sessions = authorized_client.get(f"/api/v1/groups/{test_group['id']}/sessions").json()
        assert sessions["sessions"] == []

    def test_naive_datetime_rejected(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        payload = session_payload()
        payload["begins"] = "2024-10-07T09:00:00"

        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions", json=payload
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_unknown_session_type(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions",
            json=session_payload(session_type="party"),
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_blank_location(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        response = authorized_client.post(
            f"/api/v1/groups/{test_group['id']}/sessions", json=session_payload(location="   ")
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_group_not_found(self, authorized_client: TestClient) -> None:
        response = authorized_client.post(
            f"/api/v1/groups/{uuid4()}/sessions", json=session_payload()
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestListSessions:
    """Test suite for GET /groups/:id/sessions endpoints."""

    def test_list_in_schedule_order(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        url = f"/api/v1/groups/{test_group['id']}/sessions"
        authorized_client.post(url, json=session_payload(session_type="lecture"))
        authorized_client.post(url, json=session_payload(begins=T + timedelta(days=1)))

        response = authorized_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        types = [s["session_type"] for s in response.json()["sessions"]]
        assert types == ["lecture", "tutorial"]

    def test_filter_by_type(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        url = f"/api/v1/groups/{test_group['id']}/sessions"
        authorized_client.post(url, json=session_payload(session_type="lecture"))
        authorized_client.post(url, json=session_payload(session_type="exam"))

        response = authorized_client.get(url, params={"session_type": "exam"})

        sessions = response.json()["sessions"]
        assert [s["session_type"] for s in sessions] == ["exam"]

    def test_get_session(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        response = authorized_client.get(
            f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == test_session

    def test_get_session_not_found(
        self, authorized_client: TestClient, test_group: dict[str, Any]
    ) -> None:
        response = authorized_client.get(f"/api/v1/groups/{test_group['id']}/sessions/{uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "SessionNotFoundError"


class TestUpdateSession:
    """Test suite for PATCH /groups/:id/sessions/:session_id endpoint."""

    def test_relocate_and_repurpose(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        response = authorized_client.patch(
            f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}",
            json={"location": "Lab 3", "session_type": "exercise"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["location"] == "Lab 3"
        assert data["session_type"] == "exercise"
        assert data["begins"] == test_session["begins"]

    def test_reschedule_both_bounds(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        """Test a session can move entirely past its old end."""
        begins = T + timedelta(days=1)
        response = authorized_client.patch(
            f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}",
            json={
                "begins": begins.isoformat(),
                "ends": (begins + timedelta(hours=1)).isoformat(),
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert parse(response.json()["begins"]) == begins

    def test_change_only_ends(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        response = authorized_client.patch(
            f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}",
            json={"ends": (T + timedelta(hours=3)).isoformat()},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert parse(data["begins"]) == T
        assert parse(data["ends"]) == T + timedelta(hours=3)

    def test_invalid_window_changes_nothing(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        url = f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}"
        response = authorized_client.patch(
            url, json={"location": "Lab 3", "begins": (T + timedelta(hours=2)).isoformat()}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert authorized_client.get(url).json() == test_session

    def test_empty_update(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        response = authorized_client.patch(
            f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}", json={}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestRemoveSessions:
    """Test suite for DELETE session endpoints."""

    def test_remove_session(
        self,
        authorized_client: TestClient,
        test_group: dict[str, Any],
        test_session: dict[str, Any],
    ) -> None:
        url = f"/api/v1/groups/{test_group['id']}/sessions/{test_session['id']}"

        assert authorized_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert authorized_client.get(url).status_code == status.HTTP_404_NOT_FOUND
        assert authorized_client.delete(url).status_code == status.HTTP_404_NOT_FOUND

    def test_unschedule(self, authorized_client: TestClient, test_group: dict[str, Any]) -> None:
        url = f"/api/v1/groups/{test_group['id']}/sessions"
        authorized_client.post(url, json=session_payload())
        authorized_client.post(url, json=session_payload(begins=T + timedelta(days=7)))

        response = authorized_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"group_id": test_group["id"], "removed": 2}
        assert authorized_client.get(url).json()["sessions"] == []
