"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.churchhub.api.dependencies.db import DBSession
from src.churchhub.repositories import (
    AuditLogRepository,
    ConsentRecordRepository,
    DataRequestRepository,
    TenantRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_audit_repository(session: DBSession) -> AuditLogRepository:
    return AuditLogRepository(session)


def get_consent_repository(session: DBSession) -> ConsentRecordRepository:
    return ConsentRecordRepository(session)


def get_data_request_repository(session: DBSession) -> DataRequestRepository:
    return DataRequestRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
AuditRepo = Annotated[AuditLogRepository, Depends(get_audit_repository)]
ConsentRepo = Annotated[ConsentRecordRepository, Depends(get_consent_repository)]
DataRequestRepo = Annotated[DataRequestRepository, Depends(get_data_request_repository)]
