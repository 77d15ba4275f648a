import os
import tempfile

import pytest

# Settings are read when venue_menu is first imported, so the temporary
# locations must be in the environment before that import.
TEST_DIR = tempfile.mkdtemp(prefix="venue_menu_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DIR, 'test.db')}"
os.environ["LOCAL_STORE_PATH"] = os.path.join(TEST_DIR, "local_store.json")
os.environ["MEDIA_ROOT"] = os.path.join(TEST_DIR, "media")
os.environ["LOG_FILE_PATH"] = os.path.join(TEST_DIR, "logs", "app.log")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SEED_ADMIN"] = "true"
os.environ["SEED_DEMO_MENU"] = "false"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "Admin1234!"
os.environ["SMTP_HOST"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from venue_menu.main import app  # noqa: E402
from venue_menu.db.database import get_connection  # noqa: E402

MEMBER = {"email": "member@example.com", "username": "member", "password": "Member1234!"}

RESET_TABLES = ("food_menu", "alcohol", "promotions", "venue_settings", "sessions")


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def clean_state(client):
    conn = get_connection()
    try:
        for table in RESET_TABLES:
            conn.execute(f"DELETE FROM {table}")
        conn.commit()
    finally:
        conn.close()
    app.state.local_store.clear()
    yield


def login(client, username, password):
    r = client.post("/api/v1/auth/login", data={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def get_admin_token(client):
    return login(client, "admin", "Admin1234!")["access_token"]


def get_member_token(client):
    r = client.post("/api/v1/auth/sign-up", json=MEMBER)
    assert r.status_code in (201, 409), r.text
    return login(client, MEMBER["username"], MEMBER["password"])["access_token"]


@pytest.fixture()
def admin_headers(client):
    return {"Authorization": f"Bearer {get_admin_token(client)}"}


@pytest.fixture()
def member_headers(client):
    return {"Authorization": f"Bearer {get_member_token(client)}"}
