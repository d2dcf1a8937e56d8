from __future__ import annotations

import itertools
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.exceptions import PersistenceError
from app.main import app
from app.services.appointment_service import AppointmentService
from app.services.dashboard_service import DashboardService
from app.services.gatekeeper import Gatekeeper
from app.services.ownership import OwnershipResolver
from app.services.provisioning import ProfileProvisioner

CLIENT_ID = "client-1"
OTHER_CLIENT_ID = "client-2"
OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"
BUSINESS_ID = 10
OTHER_BUSINESS_ID = 20


def make_user(user_id: str, email: str, role: Optional[str] = None, name: Optional[str] = None):
    app_metadata = {"role": role} if role else {}
    user_metadata = {"name": name} if name else {}
    return SimpleNamespace(id=user_id, email=email, app_metadata=app_metadata, user_metadata=user_metadata)


class FakeAuth:
    """Stands in for `supabase.auth`: tokens map to user records."""

    def __init__(self, users: Dict[str, Any]):
        self.users = users

    def get_user(self, token: str):
        if token not in self.users:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=self.users[token])


class FailingRepo:
    """Mixin: methods listed in `fail` raise the configured error."""

    def _maybe_fail(self, name: str) -> None:
        error = self.fail.get(name)
        if error is not None:
            raise error


class FakeClientRepository(FailingRepo):
    def __init__(self):
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self.calls = 0
        self.fail: Dict[str, Exception] = {}

    def insert_if_absent(self, client_id: str, email: Optional[str], name: str) -> None:
        self.calls += 1
        self._maybe_fail("insert_if_absent")
        self.profiles.setdefault(client_id, {"clientid": client_id, "email": email, "name": name})


class FakeBusinessRepository(FailingRepo):
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self.rows = rows or []
        self.fail: Dict[str, Exception] = {}

    def find_owned(self, owner_id: str, business_id: Any = None) -> List[Dict[str, Any]]:
        self._maybe_fail("find_owned")
        return [
            {"id": r["id"]}
            for r in self.rows
            if r["owner_id"] == owner_id and (business_id is None or r["id"] == business_id)
        ]

    def list_all(self) -> List[Dict[str, Any]]:
        return [{"id": r["id"], "name": r["name"]} for r in self.rows]

    def create(self, owner_id: str, name: str, email: Optional[str]) -> Dict[str, Any]:
        self._maybe_fail("create")
        row = {"id": len(self.rows) + 100, "owner_id": owner_id, "name": name, "email": email}
        self.rows.append(row)
        return row


class FakeServiceRepository:
    def __init__(self, rows: Dict[Any, Dict[str, Any]]):
        self.rows = rows

    def list_all(self) -> List[Dict[str, Any]]:
        return [{"id": sid, "name": r["name"], "price": r["price"]} for sid, r in self.rows.items()]


class FakeAppointmentRepository(FailingRepo):
    """In-memory appointment table with the joins the real queries perform."""

    def __init__(self, services, businesses, clients):
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.services = services
        self.businesses = businesses
        self.clients = clients
        self.fail: Dict[str, Exception] = {}
        self._ids = itertools.count(1)

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        self._maybe_fail("insert")
        appt_id = next(self._ids)
        stored = {"apptid": appt_id, "cancellation_reason": None, **row}
        self.rows[appt_id] = stored
        return dict(stored)

    def get(self, appt_id: Any) -> Optional[Dict[str, Any]]:
        self._maybe_fail("get")
        try:
            row = self.rows.get(int(appt_id))
        except (TypeError, ValueError):
            raise PersistenceError(f'invalid input syntax for type bigint: "{appt_id}"')
        return dict(row) if row else None

    def update(self, appt_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        self._maybe_fail("update")
        row = self.rows[int(appt_id)]
        row.update(changes)
        return dict(row)

    def _service(self, row):
        return self.services.rows.get(row.get("serviceid"))

    def list_for_client(self, client_id: str) -> List[Dict[str, Any]]:
        self._maybe_fail("list_for_client")
        result = []
        for row in self.rows.values():
            if row["clientid"] != client_id:
                continue
            service = self._service(row) or {}
            business = next((b for b in self.businesses.rows if b["id"] == row["business_id"]), {})
            result.append({
                **{k: row.get(k) for k in ("apptid", "date", "time", "notes", "status", "cancellation_reason")},
                "service": {
                    "name": service.get("name"),
                    "price": service.get("price"),
                    "businesses": {"name": business.get("name")},
                },
            })
        return result

    def _for_business(self, business_id):
        return [r for r in self.rows.values() if r["business_id"] == business_id]

    def count_for_business(self, business_id: Any) -> int:
        self._maybe_fail("count_for_business")
        return len(self._for_business(business_id))

    def completed_prices(self, business_id: Any) -> List[Any]:
        self._maybe_fail("completed_prices")
        return [
            (self._service(r) or {}).get("price")
            for r in self._for_business(business_id)
            if r["status"] == "Completed"
        ]

    def upcoming_for_business(self, business_id: Any, limit: int = 5) -> List[Dict[str, Any]]:
        self._maybe_fail("upcoming_for_business")
        rows = [r for r in self._for_business(business_id) if r["status"] == "Confirmed"]
        rows.sort(key=lambda r: (r["date"], r["time"]))
        return [
            {
                "apptid": r["apptid"],
                "date": r["date"],
                "time": r["time"],
                "status": r["status"],
                "client": {"name": (self.clients.profiles.get(r["clientid"]) or {}).get("name")},
                "service": {"name": (self._service(r) or {}).get("name")},
            }
            for r in rows[:limit]
        ]

    def seed(self, **row) -> Dict[str, Any]:
        """Store a row directly, bypassing the lifecycle rules."""
        defaults = {"notes": None, "status": "Confirmed", "date": "2030-01-01", "time": "09:00:00"}
        return self.insert({**defaults, **row})


@pytest.fixture
def users():
    return {
        "client-token": make_user(CLIENT_ID, "ada@example.com", name="Ada"),
        "other-client-token": make_user(OTHER_CLIENT_ID, "bob@example.com", role="client"),
        "owner-token": make_user(OWNER_ID, "owner@example.com", role="business_owner"),
        "other-owner-token": make_user(OTHER_OWNER_ID, "rival@example.com", role="business_owner"),
    }


@pytest.fixture
def gatekeeper(users):
    return Gatekeeper(FakeAuth(users))


@pytest.fixture
def principals(gatekeeper, users):
    return {token: gatekeeper.authenticate(token) for token in users}


@pytest.fixture
def client_repo():
    return FakeClientRepository()


@pytest.fixture
def business_repo():
    return FakeBusinessRepository([
        {"id": BUSINESS_ID, "owner_id": OWNER_ID, "name": "Shear Joy", "email": "owner@example.com"},
        {"id": OTHER_BUSINESS_ID, "owner_id": OTHER_OWNER_ID, "name": "Rival Cuts", "email": "rival@example.com"},
    ])


@pytest.fixture
def service_repo():
    return FakeServiceRepository({
        1: {"name": "Haircut", "price": 10},
        2: {"name": "Colour", "price": "20.00"},
        3: {"name": "Consultation", "price": None},
    })


@pytest.fixture
def appointment_repo(service_repo, business_repo, client_repo):
    return FakeAppointmentRepository(service_repo, business_repo, client_repo)


@pytest.fixture
def ownership(business_repo):
    return OwnershipResolver(business_repo)


@pytest.fixture
def appointment_service(appointment_repo, client_repo, ownership):
    return AppointmentService(appointment_repo, ProfileProvisioner(client_repo), ownership)


@pytest.fixture
def dashboard_service(appointment_repo, ownership):
    return DashboardService(appointment_repo, ownership)


@pytest.fixture
def api_client(gatekeeper, appointment_service, dashboard_service, business_repo, service_repo):
    app.dependency_overrides[deps.get_gatekeeper] = lambda: gatekeeper
    app.dependency_overrides[deps.get_appointment_service] = lambda: appointment_service
    app.dependency_overrides[deps.get_dashboard_service] = lambda: dashboard_service
    app.dependency_overrides[deps.get_business_repository] = lambda: business_repo
    app.dependency_overrides[deps.get_service_repository] = lambda: service_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def anyio_backend():
    return "asyncio"
