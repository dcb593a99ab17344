"""LGPD bookkeeping - consent ledger and data-subject requests."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.exceptions import ValidationError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.request_metadata import get_request_metadata
from src.churchhub.models.enums import ConsentPurpose, DataRequestType
from src.churchhub.models.public import AuditAction, ConsentRecord, DataRequest, User
from src.churchhub.repositories.public import ConsentRecordRepository, DataRequestRepository
from src.churchhub.services.audit_service import AuditService

logger = get_logger(__name__)


def _require_church(user: User) -> UUID:
    """Consents and requests are recorded against the user's church."""
    if user.tenant_id is None:
        raise ValidationError("User is not associated with a church")
    return user.tenant_id


class PrivacyService:
    def __init__(
        self,
        consent_repo: ConsentRecordRepository,
        data_request_repo: DataRequestRepository,
        session: AsyncSession,
        audit_service: AuditService,
    ):
        self.consent_repo = consent_repo
        self.data_request_repo = data_request_repo
        self.session = session
        self.audit_service = audit_service

    async def list_consents(self, user: User) -> list[ConsentRecord]:
        """Current consent state, one record per purpose."""
        current = await self.consent_repo.current_by_purpose(user.id)
        return list(current.values())

    async def withdraw_consent(self, user: User, purpose: str) -> ConsentRecord:
        """Append a withdrawal. Earlier records are never modified."""
        try:
            purpose_enum = ConsentPurpose(purpose)
        except ValueError as e:
            raise ValidationError(f"Unknown consent purpose: {purpose}", field="purpose") from e
        tenant_id = _require_church(user)

        metadata = get_request_metadata()
        record = ConsentRecord(
            user_id=user.id,
            tenant_id=tenant_id,
            purpose=purpose_enum.value,
            consent_given=False,
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
        )
        try:
            self.consent_repo.add(record)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.audit_service.log_action(
            AuditAction.CONSENT_WITHDRAW,
            entity_type="consent",
            entity_id=record.id,
            user_id=user.id,
            tenant_id=tenant_id,
            new_values={"purpose": purpose_enum.value, "consent_given": False},
        )
        return record

    async def open_data_request(
        self,
        user: User,
        request_type: DataRequestType,
        notes: str | None = None,
    ) -> DataRequest:
        tenant_id = _require_church(user)
        data_request = DataRequest(
            user_id=user.id,
            tenant_id=tenant_id,
            type=request_type.value,
            notes=notes,
        )
        try:
            self.data_request_repo.add(data_request)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Data request opened",
            data_request_id=str(data_request.id),
            request_type=request_type.value,
        )
        await self.audit_service.log_action(
            AuditAction.DATA_REQUEST_CREATE,
            entity_type="data_request",
            entity_id=data_request.id,
            user_id=user.id,
            tenant_id=tenant_id,
            new_values={"type": request_type.value},
        )
        return data_request

    async def list_data_requests(self, user: User) -> list[DataRequest]:
        return await self.data_request_repo.list_by_user(user.id)
