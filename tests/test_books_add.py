import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

from bookshelf.main import app
from bookshelf.core.errors import StorageError, TransportError
from bookshelf.database import get_db
from bookshelf.models import Base, Book
from bookshelf.services.book_store import get_store
from bookshelf.services.classify import get_client

# Shared in-memory SQLite for this test module
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base.metadata.create_all(bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


WORK_XML = b"""<classify xmlns="http://classify.oclc.org">
  <work author="Kernighan, Brian W." owi="2925745812" title="The Go programming language"/>
  <recommendations><ddc><mostPopular sfa="005.133"/></ddc></recommendations>
</classify>"""


class FakeClassifyClient:
    def __init__(self, body=b"", error=None):
        self.body = body
        self.error = error
        self.ids = []

    def fetch_by_identifier(self, owi):
        self.ids.append(owi)
        if self.error is not None:
            raise self.error
        return self.body


class RecordingStore:
    def __init__(self, reachable=True, insert_error=None):
        self.reachable = reachable
        self.insert_error = insert_error
        self.inserts = []

    def ping(self):
        if not self.reachable:
            raise StorageError("database is locked")

    def is_reachable(self):
        return self.reachable

    def insert_book(self, title, author, work_id, classification):
        self.inserts.append((title, author, work_id, classification))
        if self.insert_error is not None:
            raise self.insert_error


client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_state():
    app.dependency_overrides[get_db] = override_get_db
    with TestingSessionLocal() as db:
        db.query(Book).delete()
        db.commit()
    yield
    app.dependency_overrides.clear()


def test_add_book_inserts_decoded_work():
    fake = FakeClassifyClient(WORK_XML)
    store = RecordingStore()
    app.dependency_overrides[get_client] = lambda: fake
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add", params={"id": "2925745812"})
    assert r.status_code == 200
    assert r.content == b""
    assert fake.ids == ["2925745812"]
    assert store.inserts == [
        ("The Go programming language", "Kernighan, Brian W.", "2925745812", "005.133"),
    ]


def test_add_book_persists_row_in_books_table():
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(WORK_XML)

    r = client.get("/books/add", params={"id": "2925745812"})
    assert r.status_code == 200

    with TestingSessionLocal() as db:
        rows = db.query(Book).all()
    assert len(rows) == 1
    assert rows[0].pk is not None
    assert rows[0].title == "The Go programming language"
    assert rows[0].author == "Kernighan, Brian W."
    assert rows[0].work_id == "2925745812"
    assert rows[0].classification == "005.133"


def test_add_book_allows_duplicates():
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(WORK_XML)

    assert client.get("/books/add", params={"id": "2925745812"}).status_code == 200
    assert client.get("/books/add", params={"id": "2925745812"}).status_code == 200

    with TestingSessionLocal() as db:
        assert db.query(Book).filter(Book.work_id == "2925745812").count() == 2


def test_add_book_unreachable_store_skips_insert():
    store = RecordingStore(reachable=False)
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(WORK_XML)
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add", params={"id": "2925745812"})
    assert r.status_code == 500
    assert r.text == "database is locked"
    # 첫 에러에서 중단: insert 없음
    assert store.inserts == []


def test_add_book_fetch_error_skips_insert():
    store = RecordingStore()
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(error=TransportError("no route to host"))
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add", params={"id": "1"})
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "no route to host"
    assert store.inserts == []


def test_add_book_decode_error_skips_insert():
    store = RecordingStore()
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(b"<<garbage")
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add", params={"id": "1"})
    assert r.status_code == 500
    assert store.inserts == []


def test_add_book_insert_error_is_500():
    store = RecordingStore(insert_error=StorageError("no such table: books"))
    app.dependency_overrides[get_client] = lambda: FakeClassifyClient(WORK_XML)
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add", params={"id": "2925745812"})
    assert r.status_code == 500
    assert r.text == "no such table: books"
    assert len(store.inserts) == 1


def test_add_book_without_id_is_forwarded():
    fake = FakeClassifyClient(b"<classify><response code=\"102\"/></classify>")
    store = RecordingStore()
    app.dependency_overrides[get_client] = lambda: fake
    app.dependency_overrides[get_store] = lambda: store

    r = client.get("/books/add")
    assert r.status_code == 200
    assert fake.ids == [""]
    # 응답이 비어 있으면 빈 값으로 저장됨 (검증 없음)
    assert store.inserts == [("", "", "", "")]
