"""Shared test fixtures and helpers."""

import asyncio
import itertools
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from booking_admin.errors import AuthError, StoreError
from booking_admin.identity import AuthSession
from booking_admin.models import BOOKINGS, SERVICES, TECHNICIANS, USERS


class FakeStore:
    """
    In-memory stand-in for DocumentStore.

    Faults are injected per method name through `faults`; `hold_updates`
    makes update_fields wait on an event so a write can be kept in flight.
    """

    def __init__(self, data: Optional[dict] = None):
        self.data: dict[str, dict[str, dict]] = {
            name: {doc_id: dict(doc) for doc_id, doc in docs.items()}
            for name, docs in (data or {}).items()
        }
        self.faults: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self.update_gate: Optional[asyncio.Event] = None
        self._ids = itertools.count(1)

    def fail(self, method: str, error: Exception) -> None:
        self.faults[method] = error

    def hold_updates(self) -> asyncio.Event:
        self.update_gate = asyncio.Event()
        return self.update_gate

    def writes(self, method: str = "update_fields") -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    def _check(self, method: str, *args) -> None:
        self.calls.append((method, *args))
        if method in self.faults:
            raise self.faults[method]

    def _collection(self, name: str) -> dict[str, dict]:
        return self.data.setdefault(name, {})

    async def get_document(self, collection, doc_id):
        self._check("get_document", collection, doc_id)
        doc = self._collection(collection).get(doc_id)
        return {**doc, "id": doc_id} if doc is not None else None

    async def create_document(self, collection, data):
        self._check("create_document", collection, data)
        doc_id = f"{collection}-{next(self._ids)}"
        self._collection(collection)[doc_id] = dict(data)
        return doc_id

    async def set_document(self, collection, doc_id, data):
        self._check("set_document", collection, doc_id, data)
        self._collection(collection)[doc_id] = dict(data)

    async def update_fields(self, collection, doc_id, fields):
        self._check("update_fields", collection, doc_id, fields)
        if self.update_gate is not None:
            await self.update_gate.wait()
        if doc_id not in self._collection(collection):
            raise StoreError("not-found", f"No document to update: {collection}/{doc_id}")
        self._collection(collection)[doc_id].update(fields)

    async def delete_document(self, collection, doc_id):
        self._check("delete_document", collection, doc_id)
        self._collection(collection).pop(doc_id, None)

    async def list_documents(self, collection, filters=(), order_by=None, descending=True, limit=None):
        self._check("list_documents", collection)
        docs = [
            {**doc, "id": doc_id}
            for doc_id, doc in self._collection(collection).items()
            if all(doc.get(field) == value for field, value in filters)
        ]
        if order_by:
            # Documents without the field are left out, as Firestore does
            docs = [doc for doc in docs if doc.get(order_by) is not None]
            docs.sort(key=lambda doc: doc[order_by], reverse=descending)
        return docs[:limit] if limit else docs

    async def count_documents(self, collection, filters=()):
        self._check("count_documents", collection)
        return len(await self.list_documents(collection, filters))


class FakeIdentity:
    """Identity provider double: known passwords and issued tokens only"""

    def __init__(self):
        self.accounts: dict[str, tuple[str, str]] = {}  # email -> (uid, password)
        self.tokens: dict[str, AuthSession] = {}
        self.sign_in_error: Optional[AuthError] = None
        self.current_session: Optional[AuthSession] = None
        self.signed_out: list[str] = []
        self._listeners = []

    def add_account(self, uid: str, email: str, password: str = "secret123") -> str:
        self.accounts[email] = (uid, password)
        token = f"token-{uid}"
        self.tokens[token] = AuthSession(uid=uid, email=email, id_token=token)
        return token

    async def on_session_changed(self, listener):
        self._listeners.append(listener)
        await listener(self.current_session)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    async def _notify(self):
        for listener in list(self._listeners):
            await listener(self.current_session)

    async def sign_in(self, email, password):
        if self.sign_in_error is not None:
            raise self.sign_in_error
        if email not in self.accounts:
            raise AuthError("auth/user-not-found", "EMAIL_NOT_FOUND")
        uid, expected = self.accounts[email]
        if password != expected:
            raise AuthError("auth/wrong-password", "INVALID_PASSWORD")
        self.current_session = AuthSession(
            uid=uid,
            email=email,
            id_token=f"token-{uid}",
            refresh_token=f"refresh-{uid}",
            expires_in=3600,
        )
        await self._notify()
        return self.current_session

    async def verify_session(self, id_token):
        session = self.tokens.get(id_token)
        if session is None:
            raise AuthError("auth/invalid-id-token", "Invalid token")
        return session

    async def restore(self, id_token):
        self.current_session = await self.verify_session(id_token)
        await self._notify()
        return self.current_session

    async def sign_out(self):
        if self.current_session is not None:
            self.signed_out.append(self.current_session.uid)
        self.current_session = None
        await self._notify()


NOW = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def make_data() -> dict:
    """A small catalogue, directory and booking set"""
    return {
        USERS: {
            "admin-1": {"role": "admin", "email": "admin@admin.com"},
            "user-1": {"role": "customer", "email": "user@example.com"},
        },
        SERVICES: {
            "svc-elec": {"title": "Electrician", "category": "Electrical", "price": 1500, "duration": 120},
            "svc-plumb": {"name": "Plumber", "price": 1200, "duration": 90},
        },
        TECHNICIANS: {
            "tech-1": {"name": "Rajesh Kumar", "phone": "+91 98765 43210", "skills": ["Electrician", "AC Repair"], "active": True},
            "tech-2": {"name": "Priya Sharma", "phone": "+91 98765 43211", "skills": ["Plumber"], "active": True},
            "tech-3": {"name": "Vikram Singh", "phone": "+91 98765 43214", "skills": ["Painter"], "active": False},
        },
        BOOKINGS: {
            "bk-pending": {
                "serviceId": "svc-elec",
                "technicianId": None,
                "status": "pending",
                "customerName": "Ramesh Gupta",
                "customerPhone": "+91 98765 12345",
                "customerAddress": "123 Main Street, Mumbai",
                "notes": "Need urgent electrical repair",
                "createdAt": NOW - timedelta(days=2),
                "scheduledAt": NOW + timedelta(days=1),
            },
            "bk-assigned": {
                "serviceId": "svc-plumb",
                "technicianId": "tech-2",
                "status": "assigned",
                "customerName": "Meera Desai",
                "createdAt": NOW - timedelta(days=1),
                "scheduledAt": NOW + timedelta(days=3),
            },
            "bk-orphan": {
                "serviceId": "svc-gone",
                "status": "pending",
                "customerName": "Arjun Iyer",
                "createdAt": NOW,
                "scheduledAt": NOW + timedelta(days=2),
            },
        },
    }


@pytest.fixture
def store():
    return FakeStore(make_data())


@pytest.fixture
def identity():
    return FakeIdentity()
