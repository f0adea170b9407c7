"""
Shared fixtures: an app on a fresh in-memory SQLite database per test.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models
from main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "jwt_secret": "test-secret",
        "bcrypt_rounds": 4,
        "seed_catalog": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def app():
    return create_app(make_settings())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session():
    engine = build_engine("sqlite+aiosqlite://")
    await init_models(engine)
    factory = build_session_factory(engine)
    async with factory() as s:
        yield s
    await engine.dispose()


def register(client, username="alice", password="secret1"):
    return client.post("/register", json={"username": username, "password": password})


def login_token(client, username="alice", password="secret1") -> str:
    register(client, username, password)
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_product(client, name="Lip Balm", price=250.0, stock_quantity=10) -> dict:
    resp = client.post(
        "/product",
        json={
            "name": name,
            "price": price,
            "description": f"{name} description",
            "stock_quantity": stock_quantity,
        },
    )
    assert resp.status_code == 200
    return resp.json()
