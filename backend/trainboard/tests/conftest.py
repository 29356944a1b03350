"""
Shared pytest fixtures.

MongoDB is replaced by a small in-memory fake that implements the handful of
collection methods DocumentRepository uses (insert_one, find, find_one,
replace_one, delete_one), so the suite runs without a database server.
"""

import copy
import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Keep test output quiet and never pick up a developer's database settings
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BACKEND__DB"] = "mongodb://localhost:27017/trainboard_test"


def _matches(doc, query):
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and "$in" in cond:
            if value not in cond["$in"]:
                return False
        elif value != cond:
            return False
    return True


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = {}

    def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query=None, sort=None):
        docs = [copy.deepcopy(d) for d in self.docs.values() if _matches(d, query or {})]
        for key, direction in reversed(sort or []):
            docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return iter(docs)

    def find_one(self, query):
        return next(self.find(query), None)

    def replace_one(self, query, doc):
        current = self.find_one(query)
        if current is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        self.docs[current["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(matched_count=1, modified_count=1)

    def delete_one(self, query):
        current = self.find_one(query)
        if current is None:
            return SimpleNamespace(deleted_count=0)
        del self.docs[current["_id"]]
        return SimpleNamespace(deleted_count=1)


class FakeDatabase:
    name = "trainboard_test"

    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def command(self, name):
        return {"ok": 1.0}


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc))


@pytest.fixture
def static_dir(tmp_path):
    """A built single-page app: an index page and one asset."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text('<!DOCTYPE html><html><body><div id="app"></div></body></html>')
    (public / "app.js").write_text("console.log('trainboard');")
    return public


@pytest.fixture
def app(fake_db, static_dir):
    from trainboard.config import Settings
    from trainboard.main import create_app

    return create_app(Settings(static_dir=str(static_dir)), database=fake_db)


@pytest_asyncio.fixture
async def test_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
