from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_ACCOUNT", "admin.near")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import membership_token, proposal, registry_state  # noqa: F401
from src.interfaces.http.main import create_app

ADMIN = "admin.near"


@pytest.fixture()
def admin_account() -> str:
    return ADMIN


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "log_level": "INFO",
            "environment": "test",
            "admin_account": ADMIN,
            "minting_policy": "admin",
            "profile_policy": "owner_or_admin",
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client


@pytest.fixture()
def auth_headers(app) -> Callable[[str], dict[str, str]]:
    def _headers(account_id: str) -> dict[str, str]:
        token = app.state.jwt_service.create_access_token(account_id=account_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def mint(client, auth_headers):
    async def _mint(account_id: str, cooperative_id: str = "coop-1", role: str = "Member"):
        response = await client.post(
            "/api/v1/tokens/",
            json={
                "account_id": account_id,
                "cooperative_id": cooperative_id,
                "governance_role": role,
            },
            headers=auth_headers(ADMIN),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _mint
