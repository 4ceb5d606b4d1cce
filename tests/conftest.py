import re

import pytest
import sys
from pathlib import Path

# Ensure repository root is on sys.path for `import meetvoice_api`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from bson import ObjectId
from fastapi.testclient import TestClient


def _matches(doc: dict, filter_doc: dict) -> bool:
    for field, cond in filter_doc.items():
        value = doc.get(field)
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            if not isinstance(value, str) or re.search(cond["$regex"], value, flags) is None:
                return False
        elif value != cond:
            return False
    return True


def _project(doc: dict, projection: dict | None) -> dict:
    if not projection:
        return dict(doc)
    keep = {k for k, v in projection.items() if v}
    keep.add("_id")
    return {k: v for k, v in doc.items() if k in keep}


class FakeCursor:
    """Chainable subset of an async MongoDB cursor."""

    def __init__(self, docs: list[dict]):
        self._docs = docs
        self._sort: list[tuple[str, int]] = []
        self._skip = 0
        self._limit = 0

    def sort(self, keys):
        self._sort = list(keys)
        return self

    def skip(self, n: int):
        self._skip = n
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    async def to_list(self, length=None):
        docs = list(self._docs)
        # Stable sorts applied from the last key to the first; null/missing compare lowest
        for field, direction in reversed(self._sort):
            docs.sort(
                key=lambda d: (d.get(field) is not None, d.get(field) if d.get(field) is not None else 0),
                reverse=direction < 0,
            )
        docs = docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        return docs


class FakeCollection:
    def __init__(self, docs: list[dict] | None = None):
        self.docs = [dict(d, _id=d.get("_id") or ObjectId()) for d in (docs or [])]
        self.calls: list[tuple[str, dict]] = []

    async def count_documents(self, filter_doc: dict) -> int:
        self.calls.append(("count_documents", filter_doc))
        return sum(1 for d in self.docs if _matches(d, filter_doc))

    def find(self, filter_doc: dict, projection: dict | None = None) -> FakeCursor:
        self.calls.append(("find", filter_doc))
        return FakeCursor([_project(d, projection) for d in self.docs if _matches(d, filter_doc)])

    async def find_one(self, filter_doc: dict):
        self.calls.append(("find_one", filter_doc))
        for d in self.docs:
            if _matches(d, filter_doc):
                return dict(d)
        return None


class FailingCollection:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def count_documents(self, filter_doc: dict) -> int:
        raise self.exc

    def find(self, filter_doc: dict, projection: dict | None = None):
        raise self.exc

    async def find_one(self, filter_doc: dict):
        raise self.exc


SAMPLE_ARTICLES = [
    {
        "slug": "concert-rock-paris",
        "titre": "Concert rock a Paris",
        "petit_description": "Une soiree rock",
        "contenu": "Texte complet du concert",
        "theme": "rock",
        "categorie": "music",
        "photo": "rock.jpg",
        "date_publication": "2024-05-10",
        "seo_title": "Concert rock",
        "seo_keywords": ["rock", "paris"],
    },
    {
        "slug": "festival-jazz",
        "titre": "Festival de jazz",
        "theme": "Jazz",
        "categorie": "music",
        "date_publication": "2024-06-01",
    },
    {
        "slug": "expo-peinture",
        "titre": "Exposition de peinture",
        "theme": "peinture",
        "categorie": "art",
        "date_publication": "2024-03-15",
    },
    {
        "slug": "rencontre-sans-date",
        "titre": "Rencontre sans date",
        "theme": "Rock alternatif",
        "categorie": "music",
    },
    {
        "slug": "atelier-poterie",
        "titre": "Atelier poterie",
        "theme": "ceramique",
        "categorie": "art",
        "date_publication": "2023-12-01",
    },
]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def articles_collection():
    return FakeCollection(SAMPLE_ARTICLES)


@pytest.fixture()
def make_client(monkeypatch):
    # Patch store init/close in lifespan to no-op
    import meetvoice_api.db.mongo as db_mongo
    from meetvoice_api import main as main_mod

    async def _noop(*args, **kwargs):
        return None

    monkeypatch.setattr(db_mongo, "connect_db", _noop)
    monkeypatch.setattr(db_mongo, "close_db", _noop)

    app = main_mod.app
    clients = []

    def _make(collection) -> TestClient:
        async def fake_get_collection():
            return collection

        app.dependency_overrides[db_mongo.get_collection] = fake_get_collection
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client, articles_collection):
    return make_client(articles_collection)
