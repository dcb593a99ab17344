"""Unit tests for AuditService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.churchhub.core.request_metadata import RequestMetadata
from src.churchhub.models.public import AuditAction
from src.churchhub.services.audit_service import AuditService, build_audit_log

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_audit_repo() -> MagicMock:
    """Create mock audit repository."""
    repo = MagicMock()
    repo.add = MagicMock()
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def audit_service(mock_audit_repo, mock_session) -> AuditService:
    return AuditService(mock_audit_repo, mock_session)


class TestLogAction:
    async def test_log_action_creates_audit_log(self, audit_service, mock_audit_repo, mock_session):
        user_id, tenant_id = uuid4(), uuid4()

        result = await audit_service.log_action(
            AuditAction.USER_LOGIN,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            tenant_id=tenant_id,
        )

        assert result is not None
        assert result.action == "user.login"
        assert result.tenant_id == tenant_id
        mock_audit_repo.add.assert_called_once_with(result)
        mock_session.commit.assert_awaited_once()

    async def test_failure_does_not_raise(self, audit_service, mock_session):
        """Audit logging must never break the business operation."""
        mock_session.commit.side_effect = RuntimeError("db down")

        result = await audit_service.log_action(
            AuditAction.TENANT_DELETE,
            entity_type="tenant",
            entity_id=uuid4(),
            user_id=uuid4(),
        )

        assert result is None
        mock_session.rollback.assert_awaited_once()


class TestBuildAuditLog:
    def test_stamps_request_metadata(self):
        metadata = RequestMetadata.build(ip_address="192.0.2.1", user_agent="x" * 800)

        log = build_audit_log(
            AuditAction.TENANT_CREATE,
            entity_type="tenant",
            entity_id=uuid4(),
            user_id=uuid4(),
            tenant_id=None,
            new_values={"subdomain": "graca"},
            metadata=metadata,
        )

        assert log.ip_address == "192.0.2.1"
        assert len(log.user_agent) == 500
        assert log.new_values == {"subdomain": "graca"}
