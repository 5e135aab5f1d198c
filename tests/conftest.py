import os
import tempfile

import pytest

# Settings are read once at import time, so the environment has to be in
# place before anything from aacshare is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="aacshare-tests-")
os.environ["SECRET_KEY"] = "test-secret-key-0123456789-abcdefghij"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["STORAGE_DIR"] = os.path.join(_TMP_DIR, "saved")

from httpx import ASGITransport, AsyncClient  # noqa: E402

from aacshare.app import models  # noqa: E402,F401
from aacshare.app.api import deps  # noqa: E402
from aacshare.app.db.base import AsyncSessionLocal, Base, engine  # noqa: E402
from aacshare.app.main import app  # noqa: E402
from aacshare.app.repositories.storage import FileStorage  # noqa: E402

AAC_BYTES = b"\xff\xf1\x50\x80\x02\x1f\xfc" + bytes(range(256)) * 4


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine


@pytest.fixture
async def db(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "blobs"))


@pytest.fixture
async def client(database, storage):
    app.dependency_overrides[deps.get_file_storage] = lambda: storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def sign_up_and_in(client, name, username, password="secret"):
    """Create a user over HTTP and return (user_id, auth headers, refresh token)."""
    response = await client.post(
        "/auth/sign-up", json={"name": name, "username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    user_id = response.json()["id"]

    response = await client.post("/auth/sign-in", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    tokens = response.json()
    return user_id, {"Authorization": f"Bearer {tokens['token']}"}, tokens["refresh_token"]
