"""
Tests for the write rate limit and per-route timing logs.
"""
from unittest.mock import MagicMock

import pytest
from limits import parse

import app.main as main
from app.core import config
from app.core.limiter import limiter
from tests.conftest import auth


@pytest.fixture
def rate_limited(monkeypatch):
    """Turn the shared limiter on for one test with clean counters."""
    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield limiter
    limiter.reset()


class TestWriteRateLimit:
    async def test_create_beyond_limit_is_rejected(self, client, org, rate_limited):
        allowed = parse(config.WRITE_RATE_LIMIT).amount
        statuses = []
        for i in range(allowed + 1):
            response = await client.post(
                "/contacts", json={"contact_name": f"contact {i}"}, headers=auth(org.director)
            )
            statuses.append(response.status_code)

        assert statuses[:allowed] == [201] * allowed
        assert statuses[-1] == 429
        assert response.json() == {"error": "You are going too fast"}

    async def test_limit_is_per_credential(self, client, org, rate_limited):
        allowed = parse(config.WRITE_RATE_LIMIT).amount
        for i in range(allowed + 1):
            await client.post("/students", json={"student_name": f"s{i}"}, headers=auth(org.alpha_member))

        response = await client.post("/students", json={"student_name": "other"}, headers=auth(org.beta_member))

        assert response.status_code == 201

    async def test_reads_are_not_limited(self, client, org, rate_limited):
        allowed = parse(config.WRITE_RATE_LIMIT).amount
        for _ in range(allowed + 1):
            response = await client.get("/health")
        assert response.status_code == 200


class TestRouteTimings:
    def test_feature_prefix_is_trimmed(self, monkeypatch):
        log = MagicMock()
        monkeypatch.setattr(main, "log", log)

        main.RouteTimings().timing(
            f"{main.TIMING_PREFIX}.app.features.contacts.routes.create_contact", 0.25, ["http_status:201"]
        )

        log.debug.assert_called_once_with(
            dict(route="contacts.routes.create_contact", timing=0.25, tags=["http_status:201"])
        )

    async def test_requests_are_timed(self, client, org, monkeypatch):
        log = MagicMock()
        monkeypatch.setattr(main, "log", log)

        await client.get("/contacts", headers=auth(org.alpha_member))

        routes = [c.args[0]["route"] for c in log.debug.call_args_list if isinstance(c.args[0], dict)]
        assert "contacts.routes.list_contacts" in routes
