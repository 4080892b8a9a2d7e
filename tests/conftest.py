import os
import tempfile

os.environ["SEAT_ALLOCATOR_DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SEAT_ALLOCATOR_EXPORT_DIR", tempfile.mkdtemp(prefix="seat-exports-"))

import pytest
from fastapi.testclient import TestClient

from seat_allocator.database import Base, SessionLocal, engine
from seat_allocator.main_api import app
from seat_allocator.models import Department, Hall


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_hall():
    def _make(rows, columns, seats_per_bench=1, id=1, name="Hall A"):
        return Hall(id=id, name=name, rows=rows, columns=columns, seats_per_bench=seats_per_bench)
    return _make


@pytest.fixture
def make_department():
    def _make(id, start, end, name=None):
        return Department(id=id, name=name or f"Dept {id}", roll_number_start=start, roll_number_end=end)
    return _make
