"""Pytest fixtures for catalog_admin tests."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from catalog_admin.app import create_app
from catalog_admin.auth.helpers import create_access_token, hash_password
from catalog_admin.config import get_database
from catalog_admin.rbac import get_role_permissions


# --- Fake MongoDB ---


@dataclass
class FakeInsertResult:
    inserted_id: object


@dataclass
class FakeUpdateResult:
    matched_count: int
    modified_count: int


@dataclass
class FakeDeleteResult:
    deleted_count: int


def _matches(doc: dict, query: dict | None) -> bool:
    for key, cond in (query or {}).items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in cond):
                return False
            continue

        value = doc.get(key)
        if isinstance(cond, dict) and any(k.startswith("$") for k in cond):
            for op, arg in cond.items():
                if op == "$ne":
                    if value == arg:
                        return False
                elif op == "$in":
                    if value not in arg:
                        return False
                elif op == "$regex":
                    flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
                    if not isinstance(value, str) or not re.search(arg, value, flags):
                        return False
                elif op == "$options":
                    continue
                else:
                    raise NotImplementedError(f"Fake collection does not support {op}")
        elif value != cond:
            return False
    return True


def _sort_key(value):
    return (0, "") if value is None else (1, value)


class FakeCursor:
    """Chainable cursor supporting sort / skip / limit and async iteration."""

    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs
        self._sort: list[tuple[str, int]] = []
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int = 1) -> FakeCursor:
        self._sort.append((key, direction))
        return self

    def skip(self, count: int) -> FakeCursor:
        self._skip = count
        return self

    def limit(self, count: int) -> FakeCursor:
        self._limit = count
        return self

    def _results(self) -> list[dict]:
        docs = list(self._docs)
        for key, direction in reversed(self._sort):
            docs.sort(key=lambda d: _sort_key(d.get(key)), reverse=direction < 0)
        end = self._skip + self._limit if self._limit else None
        return docs[self._skip:end]

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._results():
            yield doc

    async def to_list(self, length: int | None = None) -> list[dict]:
        docs = self._results()
        return docs if length is None else docs[:length]


class FakeCollection:
    """In-memory stand-in for an AsyncIOMotorCollection."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict] = []

    def _first(self, query: dict | None) -> dict | None:
        for doc in self.docs:
            if _matches(doc, query):
                return doc
        return None

    async def find_one(self, query: dict | None = None) -> dict | None:
        doc = self._first(query)
        return copy.deepcopy(doc) if doc else None

    def find(self, query: dict | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def insert_one(self, doc: dict) -> FakeInsertResult:
        doc.setdefault("_id", ObjectId())
        if self._first({"_id": doc["_id"]}):
            raise ValueError(f"duplicate _id {doc['_id']} in {self.name}")
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertResult(doc["_id"])

    async def update_one(self, query: dict, update: dict) -> FakeUpdateResult:
        doc = self._first(query)
        if doc is None:
            return FakeUpdateResult(0, 0)
        doc.update(copy.deepcopy(update.get("$set", {})))
        return FakeUpdateResult(1, 1)

    async def find_one_and_update(
        self, query: dict, update: dict, return_document: bool = False
    ) -> dict | None:
        doc = self._first(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(copy.deepcopy(update.get("$set", {})))
        return copy.deepcopy(doc) if return_document else before

    async def delete_one(self, query: dict) -> FakeDeleteResult:
        doc = self._first(query)
        if doc is None:
            return FakeDeleteResult(0)
        self.docs.remove(doc)
        return FakeDeleteResult(1)

    async def count_documents(self, query: dict | None = None) -> int:
        return sum(1 for d in self.docs if _matches(d, query))


class FakeDatabase:
    def __init__(self) -> None:
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


# --- Seed helpers ---


def make_staff_user(
    email: str = "staff@example.com",
    password: str = "secret123",
    role: str | None = "user",
    status: str = "active",
    name: str | None = "Staff Member",
    phone: str | None = None,
) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "email": email,
        "password": hash_password(password),
        "role": role,
        "status": status,
        "name": name,
        "phone": phone,
        "created_at": now,
        "updated_at": now,
    }


def token_for(user: dict, role: str | None = None) -> dict:
    """Auth header for `user`; `role` overrides the claim to mimic an old token."""
    role = role if role is not None else user.get("role")
    payload = {"sub": str(user["_id"]), "email": user["email"]}
    if role is not None:
        payload["role"] = role
        payload["permissions"] = get_role_permissions(role)
    return {"Authorization": f"Bearer {create_access_token(payload)}"}


def bearer(
    db: FakeDatabase,
    role: str | None,
    email: str = "staff@example.com",
    status: str = "active",
) -> dict:
    """Seed a staff record with `role` and return an auth header for it."""
    user = make_staff_user(email=email, role=role, status=status)
    db["users"].docs.append(user)
    return token_for(user)


# --- Fixtures ---


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(db: FakeDatabase) -> TestClient:
    """TestClient without lifespan, so no real MongoDB connection is attempted."""
    app = create_app()

    async def override_database():
        return db

    app.dependency_overrides[get_database] = override_database
    return TestClient(app)
