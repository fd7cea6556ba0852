"""
Shared fixtures — in-memory stores, plus SQLite-backed SQL stores.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Dict, Iterator, List, Optional, Tuple

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.dependencies import get_auth_service
from auth.service import AuthService
from config.settings import config
from database.models import Base, Product, User
from database.session import get_db_session
from products.routes import get_product_store

TEST_SECRET = "test-secret"
TEST_ROUNDS = 4  # bcrypt minimum; keeps the suite fast


class InMemoryCredentialStore:
    def __init__(self):
        self.users: Dict[str, User] = {}
        self.inserts = 0

    async def find_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    async def insert(self, *, full_name, email, password_hash, role="user") -> User:
        now = datetime.now(timezone.utc)
        user = User(
            user_id=uuid.uuid4(),
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.users[email] = user
        self.inserts += 1
        return user


class InMemoryProductStore:
    def __init__(self):
        self.products: Dict[str, Product] = {}
        self._seq = 0

    def _now(self) -> datetime:
        # strictly increasing so "newest first" is deterministic
        self._seq += 1
        return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._seq)

    async def create(self, fields: Dict[str, Any]) -> Product:
        now = self._now()
        product = Product(product_id=uuid.uuid4(), created_at=now, updated_at=now, **fields)
        self.products[str(product.product_id)] = product
        return product

    async def list(
        self,
        *,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        rows = list(self.products.values())
        if search:
            term = search.lower()
            rows = [p for p in rows if term in p.name.lower() or term in p.category.lower()]
        if category:
            rows = [p for p in rows if category.lower() in p.category.lower()]
        rows.sort(key=lambda p: p.created_at, reverse=True)
        return rows[offset:offset + limit], len(rows)

    async def get(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        product = self.products.get(product_id)
        if product is None:
            return None
        for key, value in fields.items():
            setattr(product, key, value)
        product.updated_at = self._now()
        return product

    async def delete(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def product_store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def auth_service(credential_store) -> AuthService:
    return AuthService(
        credential_store,
        secret=TEST_SECRET,
        expires_in="1h",
        bcrypt_rounds=TEST_ROUNDS,
    )


@pytest.fixture
def client(credential_store, product_store) -> TestClient:
    """App wired to in-memory stores; tokens use the configured secret."""
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        credential_store, bcrypt_rounds=TEST_ROUNDS
    )
    app.dependency_overrides[get_product_store] = lambda: product_store
    return TestClient(app)


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    res = client.post(
        "/api/auth/register",
        json={"full_name": "Ann Lee", "email": "ann@example.com", "password": "secret1"},
    )
    assert res.status_code == 201, res.text
    return {"Authorization": f"Bearer {res.json()['data']['access_token']}"}


# ── Real SQL stores on an in-process SQLite engine ─────────────────────


def _sqlite_engine():
    return create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)


@pytest_asyncio.fixture
async def sql_session() -> AsyncGenerator[AsyncSession, None]:
    engine = _sqlite_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def sql_client(monkeypatch) -> Iterator[TestClient]:
    """App backed by the real SQL stores; tables are created on first request."""
    from main import create_app

    monkeypatch.setattr(config, "create_tables_on_startup", False)
    engine = _sqlite_engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    tables_ready = False

    async def sqlite_session() -> AsyncGenerator[AsyncSession, None]:
        nonlocal tables_ready
        if not tables_ready:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            tables_ready = True
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = sqlite_session
    # one portal for the whole test so every request shares an event loop
    with TestClient(app) as client:
        yield client
