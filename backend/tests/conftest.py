import os

# Must be set before anything imports app.core.config
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TIMEZONE"] = "UTC"

import pytest  # noqa: E402


@pytest.fixture
def client():
    from fastapi.testclient import TestClient  # noqa: WPS433
    from app.db import Base, engine  # noqa: WPS433
    from app.main import app  # noqa: WPS433

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def child(client):
    r = client.post("/children/", json={"name": "Léa"})
    assert r.status_code == 200, r.text
    return r.json()
