# tests/conftest.py
import json
import os

# Must be set before the application (and its limiter) is imported.
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
import pytest_asyncio

from attendance_book.backend.db.attendance_files import AttendanceFiles
from attendance_book.backend.db.record_store import RecordStore

SAMPLE_PROFESSORS = [
    {"id": 1, "nom": "Doe", "prenom": "Jane"},
    {"id": 2, "nom": "Hopper", "prenom": "Grace"},
]

SAMPLE_STUDENTS = [
    {"id": 1, "nom": "Curie", "prenom": "Marie", "isAbsent": False},
    {"id": 2, "nom": "Turing", "prenom": "Alan", "isAbsent": False},
    {"id": 3, "nom": "Noether", "prenom": "Emmy"},
]


@pytest.fixture
def store_root(tmp_path):
    """A store root holding two professors, three students and an empty data directory."""
    (tmp_path / "professors.json").write_text(json.dumps(SAMPLE_PROFESSORS), encoding="utf-8")
    (tmp_path / "students.json").write_text(json.dumps(SAMPLE_STUDENTS), encoding="utf-8")
    (tmp_path / "data").mkdir()
    return tmp_path

@pytest.fixture
def record_store(store_root) -> RecordStore:
    return RecordStore(root=store_root)

@pytest.fixture
def attendance_files(store_root) -> AttendanceFiles:
    return AttendanceFiles(data_dir=store_root / "data")

@pytest_asyncio.fixture
async def api_client(record_store, attendance_files):
    """httpx client talking to the app in-process, wired to the temporary store."""
    from attendance_book.backend.main import app
    from attendance_book.backend.api.utilities.limiter import limiter

    app.state.limiter = limiter
    app.state.record_store = record_store
    app.state.attendance_files = attendance_files
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
