"""API tests through FastAPI's TestClient with the store and identity swapped out."""

import pytest
from fastapi.testclient import TestClient

from booking_admin.auth import get_identity
from booking_admin.domain.bookings.registry import WorkflowRegistry
from booking_admin.errors import AuthError, StoreError
from booking_admin.main import app
from booking_admin.models import BOOKINGS, TECHNICIANS
from booking_admin.routes.auth import rate_limit_login
from booking_admin.shared.lookups import UNKNOWN_SERVICE
from booking_admin.shared.messages import (
    ACCESS_DENIED,
    ASSIGNMENT_MESSAGES,
    BOOKING_NOT_FOUND,
    MISSING_CREDENTIALS,
    SIGN_IN_MESSAGES,
)


@pytest.fixture
def client(store, identity):
    app.state.store = store
    app.state.workflows = WorkflowRegistry()
    app.dependency_overrides[get_identity] = lambda: identity
    app.dependency_overrides[rate_limit_login] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(identity):
    token = identity.add_account("admin-1", "admin@admin.com", "Admin@123456")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(identity):
    token = identity.add_account("user-1", "user@example.com", "secret123")
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestProtectedRoutes:
    def test_missing_token(self, client):
        assert client.get("/dashboard").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/dashboard", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401

    def test_non_admin_is_denied(self, client, customer_headers):
        response = client.get("/dashboard", headers=customer_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == ACCESS_DENIED

    def test_profile_read_fault_is_denied(self, client, store, admin_headers):
        store.fail("get_document", StoreError("unavailable"))
        assert client.get("/bookings", headers=admin_headers).status_code == 403

    def test_session(self, client, admin_headers):
        response = client.get("/auth/session", headers=admin_headers)
        assert response.json() == {"uid": "admin-1", "email": "admin@admin.com"}


class TestLogin:
    def test_admin_login(self, client, identity, admin_headers):
        response = client.post(
            "/auth/login", json={"email": "admin@admin.com", "password": "Admin@123456"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["uid"] == "admin-1"
        assert body["idToken"] == "token-admin-1"
        assert body["expiresIn"] == 3600

    def test_blank_credentials(self, client):
        response = client.post("/auth/login", json={"email": "", "password": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == MISSING_CREDENTIALS

    def test_wrong_password(self, client, admin_headers):
        response = client.post("/auth/login", json={"email": "admin@admin.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == SIGN_IN_MESSAGES["auth/wrong-password"]

    def test_throttled_by_identity_provider(self, client, identity):
        identity.sign_in_error = AuthError("auth/too-many-requests", "TOO_MANY_ATTEMPTS_TRY_LATER")
        response = client.post("/auth/login", json={"email": "a@b.co", "password": "secret123"})
        assert response.status_code == 429

    def test_non_admin_is_signed_out(self, client, identity, customer_headers):
        response = client.post(
            "/auth/login", json={"email": "user@example.com", "password": "secret123"}
        )
        assert response.status_code == 403
        assert response.json()["detail"] == ACCESS_DENIED
        assert identity.signed_out == ["user-1"]

    def test_logout_revokes_session(self, client, identity, admin_headers):
        response = client.post("/auth/logout", headers=admin_headers)
        assert response.status_code == 200
        assert identity.signed_out == ["admin-1"]


class TestDashboard:
    def test_overview(self, client, admin_headers):
        body = client.get("/dashboard", headers=admin_headers).json()
        assert body["stats"]["totalBookings"] == 3
        assert body["statsError"] is None
        assert len(body["recentBookings"]) == 3
        assert body["admin"]["uid"] == "admin-1"


class TestBookings:
    def test_list_newest_first_with_service_names(self, client, admin_headers):
        rows = client.get("/bookings", headers=admin_headers).json()
        assert [row["id"] for row in rows] == ["bk-orphan", "bk-assigned", "bk-pending"]
        assert rows[0]["serviceName"] == UNKNOWN_SERVICE
        assert rows[2]["serviceName"] == "Electrician"

    def test_missing_booking(self, client, admin_headers):
        response = client.get("/bookings/nope", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == BOOKING_NOT_FOUND

    def test_assignment_flow(self, client, store, admin_headers):
        page = client.get("/bookings/bk-pending", headers=admin_headers).json()
        assert page["canAssign"]
        assert [t["id"] for t in page["technicians"]] == ["tech-1", "tech-2"]
        assert page["booking"]["timelineStep"] == 0

        client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-1"},
            headers=admin_headers,
        )
        view = client.post("/bookings/bk-pending/assignment/confirmation", headers=admin_headers).json()
        assert view["confirmation"]["open"]
        assert "Rajesh Kumar" in view["confirmation"]["prompt"]

        view = client.post("/bookings/bk-pending/assignment/confirm", headers=admin_headers).json()
        assert view["booking"]["status"] == "assigned"
        assert view["booking"]["technicianId"] == "tech-1"
        assert view["technician"]["name"] == "Rajesh Kumar"
        assert view["message"]["type"] == "success"
        assert store.data[BOOKINGS]["bk-pending"]["status"] == "assigned"

    def test_selection_cannot_change_behind_open_confirmation(self, client, store, admin_headers):
        client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-1"},
            headers=admin_headers,
        )
        client.post("/bookings/bk-pending/assignment/confirmation", headers=admin_headers)
        view = client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-2"},
            headers=admin_headers,
        ).json()
        assert view["selectedTechnicianId"] == "tech-1"

        view = client.post("/bookings/bk-pending/assignment/confirm", headers=admin_headers).json()
        assert view["booking"]["technicianId"] == "tech-1"
        assert store.data[BOOKINGS]["bk-pending"]["technicianId"] == "tech-1"

    def test_confirm_without_confirmation_writes_nothing(self, client, store, admin_headers):
        client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-1"},
            headers=admin_headers,
        )
        view = client.post("/bookings/bk-pending/assignment/confirm", headers=admin_headers).json()
        assert view["booking"]["technicianId"] is None
        assert store.writes() == []

    def test_failed_assignment_rolls_back(self, client, store, admin_headers):
        store.fail("update_fields", StoreError("permission-denied"))
        client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-2"},
            headers=admin_headers,
        )
        client.post("/bookings/bk-pending/assignment/confirmation", headers=admin_headers)
        view = client.post("/bookings/bk-pending/assignment/confirm", headers=admin_headers).json()
        assert view["booking"]["technicianId"] is None
        assert view["booking"]["status"] == "pending"
        assert view["message"] == {"type": "error", "text": ASSIGNMENT_MESSAGES["permission-denied"]}

    def test_reopening_discards_staged_choice(self, client, admin_headers):
        client.post(
            "/bookings/bk-pending/assignment/select",
            json={"technicianId": "tech-1"},
            headers=admin_headers,
        )
        page = client.get("/bookings/bk-pending", headers=admin_headers).json()
        assert page["selectedTechnicianId"] == ""

    def test_close_page(self, client, admin_headers):
        client.get("/bookings/bk-pending", headers=admin_headers)
        response = client.delete("/bookings/bk-pending/page", headers=admin_headers)
        assert response.json() == {"closed": True}


class TestTechniciansAndServices:
    def test_create_technician(self, client, store, admin_headers):
        response = client.post(
            "/technicians",
            json={"name": "Amit Patel", "phone": "+91 98765 43212", "skills": "Electrician, Plumber"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["active"] is True
        assert store.data[TECHNICIANS][body["id"]]["skills"] == ["Electrician", "Plumber"]

    def test_active_technicians(self, client, admin_headers):
        technicians = client.get("/technicians/active", headers=admin_headers).json()
        assert [t["id"] for t in technicians] == ["tech-1", "tech-2"]

    def test_toggle_active(self, client, admin_headers):
        body = client.post("/technicians/tech-3/toggle-active", headers=admin_headers).json()
        assert body["active"] is True
        assert body["message"] == "Technician activated successfully"

    def test_service_validation(self, client, admin_headers):
        response = client.post(
            "/services", json={"title": "Painter", "price": 0, "duration": 60}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_create_and_toggle_service(self, client, admin_headers):
        created = client.post(
            "/services",
            json={"title": "Painter", "category": "Painting", "price": 2500, "duration": 240},
            headers=admin_headers,
        ).json()
        assert created["isActive"] is True

        toggled = client.post(f"/services/{created['id']}/toggle", headers=admin_headers).json()
        assert toggled == {
            "id": created["id"],
            "isActive": False,
            "message": "Service disabled successfully",
        }

    def test_services_listing_uses_legacy_names(self, client, admin_headers):
        services = client.get("/services", headers=admin_headers).json()
        assert {s["title"] for s in services} == {"Electrician", "Plumber"}
