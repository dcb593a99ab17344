"""HTTP-level tests with service dependencies overridden (no database)."""

from collections.abc import AsyncGenerator
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.churchhub import main
from src.churchhub.api.dependencies.auth import get_current_user
from src.churchhub.api.dependencies.repositories import get_user_repository
from src.churchhub.api.dependencies.services import (
    get_audit_service,
    get_auth_service,
    get_church_service,
    get_member_service,
    get_registration_service,
)
from src.churchhub.api.dependencies.tenant import get_current_tenant, get_tenant_resolver
from src.churchhub.core.exceptions import ConflictError, TransientStoreError, UnauthorizedError
from src.churchhub.core.request_metadata import get_request_metadata
from src.churchhub.core.security import create_access_token
from src.churchhub.schemas.member import MemberRead
from src.churchhub.services.registration_service import RegistrationResult
from tests.factories import TenantFactory, UserFactory
from tests.unit.fakes import FakeConnection, FakeEngine, make_result

pytestmark = pytest.mark.unit

REGISTRATION = {
    "name": "Igreja da Graça",
    "subdomain": "graca",
    "email": "contato@graca.org",
    "admin_name": "Pastor João",
    "admin_email": "joao@graca.org",
    "admin_password": "senha1234",
    "confirm_password": "senha1234",
    "accept_terms": True,
    "accept_privacy": True,
}


@pytest.fixture
def app() -> FastAPI:
    return main.create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestErrorResponses:
    async def test_not_found_includes_request_id(self, client):
        response = await client.get("/api/v1/nonexistent-endpoint")

        assert response.status_code == 404
        data = response.json()
        assert data["request_id"]
        assert response.headers["x-request-id"] == data["request_id"]

    async def test_domain_error_carries_field(self, app, client):
        service = MagicMock()
        service.register_church = AsyncMock(
            side_effect=ConflictError("Subdomain already in use", field="subdomain")
        )
        app.dependency_overrides[get_registration_service] = lambda: service

        response = await client.post("/api/v1/churches/register", json=REGISTRATION)

        assert response.status_code == 409
        assert response.json()["field"] == "subdomain"
        assert "request_id" in response.json()

    async def test_transient_error_is_503(self, app, client):
        service = MagicMock()
        service.register_church = AsyncMock(side_effect=TransientStoreError())
        app.dependency_overrides[get_registration_service] = lambda: service

        response = await client.post("/api/v1/churches/register", json=REGISTRATION)

        assert response.status_code == 503

    async def test_request_validation_is_422(self, app, client):
        app.dependency_overrides[get_registration_service] = lambda: MagicMock()

        response = await client.post(
            "/api/v1/churches/register", json={**REGISTRATION, "subdomain": "admin"}
        )

        assert response.status_code == 422
        assert any(error["loc"][-1] == "subdomain" for error in response.json()["detail"])


class TestRegisterEndpoint:
    async def test_created(self, app, client):
        tenant = TenantFactory.build(subdomain="graca")
        admin = UserFactory.church_admin(tenant_id=tenant.id)
        tenant.admin_user_id = admin.id
        service = MagicMock()
        service.register_church = AsyncMock(
            return_value=RegistrationResult(tenant=tenant, admin_user=admin, namespace_ready=True)
        )
        app.dependency_overrides[get_registration_service] = lambda: service

        response = await client.post("/api/v1/churches/register", json=REGISTRATION)

        assert response.status_code == 201
        body = response.json()
        assert body["church"]["subdomain"] == "graca"
        assert body["admin_user_id"] == str(admin.id)
        assert body["namespace_ready"] is True

    async def test_garbage_forwarded_for_is_not_stamped(self, app, client):
        tenant = TenantFactory.build(subdomain="graca")
        admin = UserFactory.church_admin(tenant_id=tenant.id)
        seen: list[str | None] = []

        async def register(data):
            seen.append(get_request_metadata().ip_address)
            return RegistrationResult(tenant=tenant, admin_user=admin, namespace_ready=True)

        service = MagicMock()
        service.register_church = AsyncMock(side_effect=register)
        app.dependency_overrides[get_registration_service] = lambda: service

        response = await client.post(
            "/api/v1/churches/register",
            json=REGISTRATION,
            headers={"X-Forwarded-For": "z" * 300},
        )

        assert response.status_code == 201
        assert seen == ["127.0.0.1"]


class TestAuth:
    async def test_login_failure_is_401(self, app, client):
        service = MagicMock()
        service.authenticate = AsyncMock(return_value=None)
        app.dependency_overrides[get_auth_service] = lambda: service

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "x@example.com", "password": "senha1234"},
            headers={"X-Church-Subdomain": "graca"},
        )

        assert response.status_code == 401
        service.authenticate.assert_awaited_once_with("x@example.com", "senha1234", "graca")

    async def test_me_with_valid_token(self, app, client):
        user = UserFactory.church_admin(tenant_id=uuid4())
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=user)
        app.dependency_overrides[get_user_repository] = lambda: repo
        token = create_access_token(user.id, user.role, user.tenant_id)

        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)

    async def test_me_without_token(self, app, client):
        app.dependency_overrides[get_user_repository] = lambda: MagicMock()

        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    async def test_me_with_garbage_token(self, app, client):
        app.dependency_overrides[get_user_repository] = lambda: MagicMock()

        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


class TestChurchEndpoints:
    async def test_list_requires_super_admin(self, app, client):
        app.dependency_overrides[get_current_user] = lambda: UserFactory.church_admin(
            tenant_id=uuid4()
        )
        service = MagicMock()
        service.list_churches = AsyncMock(side_effect=UnauthorizedError())
        app.dependency_overrides[get_church_service] = lambda: service

        response = await client.get("/api/v1/churches")

        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied"

    async def test_bad_cursor_is_422(self, app, client):
        app.dependency_overrides[get_current_user] = lambda: UserFactory.super_admin()
        service = MagicMock()
        service.list_churches = AsyncMock(side_effect=ValueError("Invalid cursor"))
        app.dependency_overrides[get_church_service] = lambda: service

        response = await client.get("/api/v1/churches", params={"cursor": "garbage"})

        assert response.status_code == 422
        assert response.json()["field"] == "cursor"

    async def test_by_subdomain_reserved_is_404(self, app, client):
        resolver = MagicMock()
        resolver.resolve_tenant = AsyncMock(return_value=None)
        app.dependency_overrides[get_tenant_resolver] = lambda: resolver

        response = await client.get("/api/v1/churches/by-subdomain/www")

        assert response.status_code == 404


class TestMemberEndpoints:
    async def test_other_church_user_is_forbidden(self, app, client):
        app.dependency_overrides[get_current_tenant] = lambda: TenantFactory.build()
        app.dependency_overrides[get_current_user] = lambda: UserFactory.build(tenant_id=uuid4())
        app.dependency_overrides[get_member_service] = lambda: MagicMock()

        response = await client.get("/api/v1/members")

        assert response.status_code == 403

    async def test_visitor_cannot_add_members(self, app, client):
        tenant = TenantFactory.build()
        app.dependency_overrides[get_current_tenant] = lambda: tenant
        app.dependency_overrides[get_current_user] = lambda: UserFactory.build(
            role="visitor", tenant_id=tenant.id
        )
        app.dependency_overrides[get_member_service] = lambda: MagicMock()
        app.dependency_overrides[get_audit_service] = lambda: MagicMock()

        response = await client.post(
            "/api/v1/members", json={"first_name": "Ana", "last_name": "Lima"}
        )

        assert response.status_code == 403

    async def test_leader_adds_member(self, app, client):
        tenant = TenantFactory.build()
        app.dependency_overrides[get_current_tenant] = lambda: tenant
        app.dependency_overrides[get_current_user] = lambda: UserFactory.build(
            role="leader", tenant_id=tenant.id
        )
        member = MemberRead(
            id=uuid4(),
            tenant_id=tenant.id,
            first_name="Ana",
            last_name="Lima",
            membership_date=date(2026, 3, 1),
            is_active=True,
            created_at=datetime(2026, 3, 1, 9, 0),
        )
        service = MagicMock()
        service.create_member = AsyncMock(return_value=member)
        audit = MagicMock()
        audit.log_action = AsyncMock()
        app.dependency_overrides[get_member_service] = lambda: service
        app.dependency_overrides[get_audit_service] = lambda: audit

        response = await client.post(
            "/api/v1/members", json={"first_name": "Ana", "last_name": "Lima"}
        )

        assert response.status_code == 201
        assert response.json()["tenant_id"] == str(tenant.id)
        audit.log_action.assert_awaited_once()

    async def test_missing_church_context_is_400(self, app, client):
        app.dependency_overrides[get_current_user] = lambda: UserFactory.super_admin()
        app.dependency_overrides[get_tenant_resolver] = lambda: MagicMock()
        app.dependency_overrides[get_member_service] = lambda: MagicMock()

        response = await client.get("/api/v1/members")

        assert response.status_code == 400


class TestHealth:
    async def test_healthy_database(self, app, client, monkeypatch):
        monkeypatch.setattr(main, "_health_cache", None)
        monkeypatch.setattr(main, "ping_redis", AsyncMock(return_value="not_configured"))
        pools = MagicMock()
        pools.get_shared_pool.return_value = FakeEngine(FakeConnection([make_result([{"?": 1}])]))
        pools.tenant_pool_count = 0
        app.state.pools = pools

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "healthy"

    async def test_cache_outage_is_degraded(self, app, client, monkeypatch):
        monkeypatch.setattr(main, "_health_cache", None)
        monkeypatch.setattr(main, "ping_redis", AsyncMock(return_value="unhealthy: unreachable"))
        pools = MagicMock()
        pools.get_shared_pool.return_value = FakeEngine(FakeConnection([make_result([{"?": 1}])]))
        pools.tenant_pool_count = 0
        app.state.pools = pools

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    async def test_unreachable_database(self, app, client, monkeypatch):
        monkeypatch.setattr(main, "_health_cache", None)
        monkeypatch.setattr(main, "ping_redis", AsyncMock(return_value="not_configured"))
        pools = MagicMock()
        pools.get_shared_pool.side_effect = OSError("connection refused")
        app.state.pools = pools

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
