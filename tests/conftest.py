"""
Shared fixtures: an in-memory stand-in for the Mongo database, a scripted LLM
and helpers to create users and bearer headers.
"""

import copy
import os
from datetime import datetime, timedelta
from types import SimpleNamespace

os.environ.setdefault("MONGO_USER", "test")
os.environ.setdefault("MONGO_PASS", "test")
os.environ.setdefault("MONGO_CLUSTER", "localhost")
os.environ.setdefault("DB_NAME", "buzai_test")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_REFRESH_SECRET_KEY", "test-refresh-secret")
os.environ.setdefault("ADMIN_EMAILS", '["admin@buzai.io"]')

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from main import app
from app.core.security import create_access_token, hash_password
from app.database.connection import get_mongo_db
from app.database.models import UserModel
from app.integrations import llm_client

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)

_MISSING = object()


def _matches(doc: dict, query: dict) -> bool:
    for key, condition in query.items():
        value = doc.get(key, _MISSING)
        if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
            for op, operand in condition.items():
                if op == "$lt":
                    if value is _MISSING or not value < operand:
                        return False
                elif op == "$ne":
                    if value is not _MISSING and value == operand:
                        return False
                elif op == "$in":
                    if value not in operand:
                        return False
                else:
                    raise NotImplementedError(op)
        elif value is _MISSING:
            if condition is not None:
                return False
        elif value != condition:
            return False
    return True


def _apply_update(doc: dict, update: dict):
    for op, fields in update.items():
        if op == "$set":
            doc.update(fields)
        elif op == "$inc":
            for key, amount in fields.items():
                doc[key] = doc.get(key, 0) + amount
        else:
            raise NotImplementedError(op)


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """The subset of motor's collection API that app.database.crud and quota_service use."""

    def __init__(self):
        self.docs = []

    def _find(self, query):
        return [d for d in self.docs if _matches(d, query)]

    async def insert_one(self, doc):
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query):
        found = self._find(query)
        return copy.deepcopy(found[0]) if found else None

    def find(self, query):
        return FakeCursor(self._find(query))

    async def count_documents(self, query):
        return len(self._find(query))

    async def update_one(self, query, update):
        found = self._find(query)
        if found:
            _apply_update(found[0], update)
        return SimpleNamespace(matched_count=len(found[:1]), modified_count=len(found[:1]))

    async def find_one_and_update(self, query, update, return_document=False):
        found = self._find(query)
        if not found:
            return None
        before = copy.deepcopy(found[0])
        _apply_update(found[0], update)
        return copy.deepcopy(found[0]) if return_document else before

    async def delete_one(self, query):
        found = self._find(query)
        if found:
            self.docs.remove(found[0])
        return SimpleNamespace(deleted_count=len(found[:1]))

    async def delete_many(self, query):
        found = self._find(query)
        for doc in found:
            self.docs.remove(doc)
        return SimpleNamespace(deleted_count=len(found))


class FakeDatabase:
    def __init__(self):
        self._collections = {}

    def __getitem__(self, name):
        return self._collections.setdefault(name, FakeCollection())


class FakeLLM:
    """Replays queued replies (or raises queued exceptions); defaults to 'AI reply'."""

    def __init__(self):
        self.replies = []
        self.calls = []

    async def __call__(self, messages):
        self.calls.append(messages)
        reply = self.replies.pop(0) if self.replies else "AI reply"
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def fake_llm(monkeypatch):
    llm = FakeLLM()
    monkeypatch.setattr(llm_client, "generate_chat_completion", llm)
    return llm


@pytest.fixture
def client(db, fake_llm):
    app.dependency_overrides[get_mongo_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Inserts a user document and returns it (with `_id`)."""

    def _make_user(email="alice@buzai.io", status="trial", **fields):
        now = datetime.utcnow()
        doc = UserModel(email=email, password=PASSWORD_HASH, status=status).model_dump()
        if status == "trial":
            doc.update(plan="trial", trial_used=True, trial_start=now, trial_end=now + timedelta(days=2))
        elif status == "approved":
            doc.update(plan="monthly", paid=True, start_date=now, end_date=now + timedelta(days=20))
        doc.update(fields)
        doc["_id"] = ObjectId()
        db["users"].docs.append(doc)
        return copy.deepcopy(doc)

    return _make_user


def auth_headers(user: dict) -> dict:
    token = create_access_token({"sub": str(user["_id"])})
    return {"Authorization": f"Bearer {token}"}


def stored_user(db, user: dict) -> dict:
    return next(d for d in db["users"].docs if d["_id"] == user["_id"])
