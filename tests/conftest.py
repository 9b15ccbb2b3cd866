import os
import tempfile
from pathlib import Path

import pytest

DB_FILE = Path(tempfile.mkdtemp(prefix="assetflow-tests-")) / "assetflow-test.db"

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_PATH"] = str(DB_FILE)
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["API_PREFIX"] = "/api"
os.environ["MAX_FILE_MB"] = "1"
os.environ["ALLOWED_FILE_TYPES"] = "application/pdf,image/png,image/jpeg"

from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402

API = "/api"


@pytest.fixture
def client():
    # fresh schema per test, created by the app lifespan
    if DB_FILE.exists():
        DB_FILE.unlink()
    with TestClient(app) as c:
        yield c


def register(client, email, role="officer", name="Test User", password="secret123"):
    res = client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def admin_headers(client):
    body = register(client, "admin@example.com", role="admin", name="Admin")
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def officer_headers(client):
    body = register(client, "officer@example.com", name="Priya Officer")
    return {"Authorization": f"Bearer {body['token']}"}


def make_department(client, headers, name="Department of Physics", type_="academic"):
    res = client.post(
        f"{API}/departments",
        json={"name": name, "type": type_},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()["data"]["id"]


@pytest.fixture
def department_id(client, admin_headers):
    return make_department(client, admin_headers)


def asset_payload(department_id, items=None, **overrides):
    payload = {
        "type": "capital",
        "departmentId": department_id,
        "subcategory": "Lab Equipment",
        "academicYear": "2024-25",
        "items": items or [
            {"itemName": "Oscilloscope", "quantity": 2, "pricePerItem": 100},
        ],
    }
    payload.update(overrides)
    return payload


def create_asset(client, headers, department_id, items=None, **overrides):
    res = client.post(
        f"{API}/assets",
        json=asset_payload(department_id, items, **overrides),
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()["id"]
