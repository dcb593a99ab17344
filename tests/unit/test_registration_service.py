"""Unit tests for RegistrationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.churchhub.core.db.executor import UNIQUE_VIOLATION
from src.churchhub.core.exceptions import (
    ConflictError,
    PartialProvisioningError,
    TransientStoreError,
)
from src.churchhub.core.request_metadata import RequestMetadata
from src.churchhub.core.security import verify_password
from src.churchhub.models.enums import ConsentPurpose, SubscriptionStatus, UserRole
from src.churchhub.models.public import AuditAction, AuditLog, ConsentRecord
from src.churchhub.schemas.church import ChurchRegisterRequest
from src.churchhub.services.registration_service import RegistrationService
from tests.unit.fakes import integrity_error

pytestmark = pytest.mark.unit


@pytest.fixture
def request_data() -> ChurchRegisterRequest:
    return ChurchRegisterRequest(
        name="Igreja da Graça",
        subdomain="graca",
        address="Rua A, 1",
        email="contato@graca.org",
        admin_name="Pastor João",
        admin_email="joao@graca.org",
        admin_password="senha1234",
        confirm_password="senha1234",
        accept_terms=True,
        accept_privacy=True,
    )


@pytest.fixture
def tenant_repo() -> MagicMock:
    repo = MagicMock()
    repo.exists_by_subdomain = AsyncMock(return_value=False)
    repo.flush = AsyncMock()
    return repo


@pytest.fixture
def user_repo() -> MagicMock:
    repo = MagicMock()
    repo.exists_by_email = AsyncMock(return_value=False)
    repo.flush = AsyncMock()
    return repo


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def provisioner() -> MagicMock:
    provisioner = MagicMock()
    provisioner.create_tenant_namespace = AsyncMock(return_value="tenant_x")
    return provisioner


@pytest.fixture
def service(tenant_repo, user_repo, session, provisioner) -> RegistrationService:
    return RegistrationService(tenant_repo, user_repo, session, provisioner)


def _session_rows(session: MagicMock, model: type) -> list:
    return [c.args[0] for c in session.add.call_args_list if isinstance(c.args[0], model)]


class TestRegisterChurch:
    async def test_creates_church_and_admin(self, service, tenant_repo, user_repo, request_data):
        result = await service.register_church(request_data)

        tenant = result.tenant
        admin = result.admin_user
        assert result.namespace_ready is True
        assert tenant.subdomain == "graca"
        assert tenant.subscription_status == SubscriptionStatus.TRIAL.value
        assert tenant.member_count == 0
        assert tenant.admin_user_id == admin.id
        assert admin.role == UserRole.CHURCH_ADMIN.value
        assert admin.tenant_id == tenant.id
        tenant_repo.add.assert_called_once_with(tenant)
        user_repo.add.assert_called_once_with(admin)

    async def test_password_is_hashed(self, service, request_data):
        result = await service.register_church(request_data)

        password_hash = result.admin_user.password_hash
        assert password_hash != "senha1234"
        assert verify_password("senha1234", password_hash)

    async def test_records_every_consent(self, service, session, request_data):
        metadata = RequestMetadata.build(ip_address="203.0.113.7", user_agent="pytest")

        await service.register_church(request_data, metadata=metadata)

        consents = _session_rows(session, ConsentRecord)
        assert {c.purpose for c in consents} == {p.value for p in ConsentPurpose}
        assert all(c.consent_given for c in consents)
        assert all(c.ip_address == "203.0.113.7" for c in consents)

    async def test_audits_in_same_transaction(self, service, session, request_data):
        await service.register_church(request_data)

        [audit] = _session_rows(session, AuditLog)
        assert audit.action == AuditAction.TENANT_CREATE.value
        session.commit.assert_awaited_once()

    async def test_provisions_after_commit(self, service, session, provisioner, request_data):
        order: list[str] = []
        session.commit.side_effect = lambda: order.append("commit")
        provisioner.create_tenant_namespace.side_effect = lambda _id: order.append("provision")

        result = await service.register_church(request_data)

        assert order == ["commit", "provision"]
        provisioner.create_tenant_namespace.assert_awaited_once_with(result.tenant.id)

    async def test_subdomain_taken(self, service, tenant_repo, session, provisioner, request_data):
        tenant_repo.exists_by_subdomain.return_value = True

        with pytest.raises(ConflictError) as exc_info:
            await service.register_church(request_data)

        assert exc_info.value.field == "subdomain"
        session.commit.assert_not_awaited()
        provisioner.create_tenant_namespace.assert_not_awaited()

    async def test_email_taken(self, service, user_repo, tenant_repo, request_data):
        user_repo.exists_by_email.return_value = True

        with pytest.raises(ConflictError) as exc_info:
            await service.register_church(request_data)

        assert exc_info.value.field == "admin_email"
        tenant_repo.add.assert_not_called()

    async def test_lost_race_maps_to_conflict(self, service, session, request_data):
        session.commit.side_effect = integrity_error(
            'duplicate key value violates "ix_public_tenants_subdomain"', UNIQUE_VIOLATION
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.register_church(request_data)

        assert exc_info.value.field == "subdomain"
        session.rollback.assert_awaited_once()

    async def test_lost_race_at_flush_leaves_nothing_behind(
        self, service, user_repo, session, provisioner, request_data
    ):
        user_repo.flush.side_effect = integrity_error(
            'duplicate key value violates "ix_public_users_email"', UNIQUE_VIOLATION
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.register_church(request_data)

        assert exc_info.value.field == "admin_email"
        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        assert _session_rows(session, ConsentRecord) == []
        assert _session_rows(session, AuditLog) == []
        provisioner.create_tenant_namespace.assert_not_awaited()

    async def test_non_unique_integrity_error_propagates(self, service, session, request_data):
        error = integrity_error('violates check constraint "ck_tenants_subscription_status"', "23514")
        session.commit.side_effect = error

        with pytest.raises(IntegrityError) as exc_info:
            await service.register_church(request_data)

        assert exc_info.value is error
        session.rollback.assert_awaited_once()

    async def test_insert_failure_rolls_back(self, service, user_repo, session, provisioner, request_data):
        user_repo.flush.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await service.register_church(request_data)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        provisioner.create_tenant_namespace.assert_not_awaited()

    async def test_provisioning_failure_keeps_registration(
        self, service, session, provisioner, request_data
    ):
        provisioner.create_tenant_namespace.side_effect = TransientStoreError()

        result = await service.register_church(request_data)

        assert result.namespace_ready is False
        assert isinstance(result.provisioning_error, PartialProvisioningError)
        assert result.provisioning_error.tenant_id == result.tenant.id
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()
