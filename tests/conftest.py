"""
tests/conftest.py -- Shared fixtures for the Flock Tracker test suite.

This module provides:
  - db_engine / db_session: an isolated in-memory SQLite database per test
  - org: a seeded hierarchy (two regions, three groups, leaders, members and
    users with missing profiles)
  - store / resolver / engine: the authorization stack bound to db_session
  - client: an httpx AsyncClient over the real FastAPI app with get_db
    pointed at the test database

The in-memory database uses StaticPool so every session shares the one
connection that holds the schema.

RATE_LIMIT_ENABLED must be set before any app import so the shared limiter
is built disabled.
"""
from __future__ import annotations

import os
from types import SimpleNamespace

os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database.engine import get_db, init_db
from app.features.authorization.engine import AuthorizationEngine
from app.features.authorization.resolver import OrgHierarchyResolver
from app.features.authorization.store import HierarchyStore
from app.features.regions.models import Group, Region
from app.features.users.models import Role, User
from app.features.users.profiles import attach_profile
from app.main import app


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


def _user(name: str, role: Role, region: Region | None = None, group: Group | None = None) -> User:
    user = User(email=f"{name}@example.org", name=name, role=role)
    attach_profile(
        user,
        region_id=region.id if region is not None else None,
        group_id=group.id if group is not None else None,
    )
    return user


@pytest.fixture
async def org(db_session: AsyncSession) -> SimpleNamespace:
    """Seed the test hierarchy.

    North
      Alpha: alpha_leader, alpha_member, alpha_member2, alpha_co_leader
      Beta:  beta_leader, beta_member
    South
      Gamma: gamma_leader, gamma_member

    Plus a director, one region leader per region, and a region leader and
    group leader that have no profile rows.
    """
    north = Region(name="North")
    south = Region(name="South")
    db_session.add_all([north, south])
    await db_session.flush()

    alpha = Group(name="Alpha", region_id=north.id)
    beta = Group(name="Beta", region_id=north.id)
    gamma = Group(name="Gamma", region_id=south.id)
    db_session.add_all([alpha, beta, gamma])
    await db_session.flush()

    users = dict(
        director=_user("director", Role.DIRECTOR),
        north_leader=_user("north_leader", Role.REGION_LEADER, region=north),
        south_leader=_user("south_leader", Role.REGION_LEADER, region=south),
        alpha_leader=_user("alpha_leader", Role.GROUP_LEADER, group=alpha),
        alpha_co_leader=_user("alpha_co_leader", Role.GROUP_LEADER, group=alpha),
        alpha_member=_user("alpha_member", Role.GROUP_MEMBER, group=alpha),
        alpha_member2=_user("alpha_member2", Role.GROUP_MEMBER, group=alpha),
        beta_leader=_user("beta_leader", Role.GROUP_LEADER, group=beta),
        beta_member=_user("beta_member", Role.GROUP_MEMBER, group=beta),
        gamma_leader=_user("gamma_leader", Role.GROUP_LEADER, group=gamma),
        gamma_member=_user("gamma_member", Role.GROUP_MEMBER, group=gamma),
        # Leaders whose profile rows are missing
        orphan_region_leader=User(email="orphan_rl@example.org", name="orphan_rl", role=Role.REGION_LEADER),
        orphan_group_leader=User(email="orphan_gl@example.org", name="orphan_gl", role=Role.GROUP_LEADER),
    )
    db_session.add_all(users.values())
    await db_session.commit()

    return SimpleNamespace(north=north, south=south, alpha=alpha, beta=beta, gamma=gamma, **users)


@pytest.fixture
def store(db_session: AsyncSession) -> HierarchyStore:
    return HierarchyStore(db_session)


@pytest.fixture
def resolver(store: HierarchyStore) -> OrgHierarchyResolver:
    return OrgHierarchyResolver(store)


@pytest.fixture
def engine(resolver: OrgHierarchyResolver) -> AuthorizationEngine:
    return AuthorizationEngine(resolver)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


def auth(user: User) -> dict[str, str]:
    """Authorization header using the development (raw user ID) token form."""
    return {"Authorization": f"Bearer {user.id}"}


@pytest.fixture
async def client(session_factory):
    """AsyncClient over the real app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
