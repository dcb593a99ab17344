"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.churchhub.api.dependencies.db import DBSession, Executor, Provisioner
from src.churchhub.api.dependencies.repositories import (
    AuditRepo,
    ConsentRepo,
    DataRequestRepo,
    TenantRepo,
    UserRepo,
)
from src.churchhub.api.dependencies.tenant import Resolver
from src.churchhub.services import (
    AuditService,
    AuthService,
    ChurchService,
    MemberService,
    PrivacyService,
    RegistrationService,
)


def get_audit_service(audit_repo: AuditRepo, session: DBSession) -> AuditService:
    return AuditService(audit_repo, session)


AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]


def get_registration_service(
    tenant_repo: TenantRepo,
    user_repo: UserRepo,
    session: DBSession,
    provisioner: Provisioner,
) -> RegistrationService:
    """Get registration service (no tenant context required)."""
    return RegistrationService(tenant_repo, user_repo, session, provisioner)


def get_church_service(
    tenant_repo: TenantRepo,
    session: DBSession,
    provisioner: Provisioner,
    audit_service: AuditServiceDep,
) -> ChurchService:
    return ChurchService(tenant_repo, session, provisioner, audit_service)


def get_auth_service(
    user_repo: UserRepo,
    session: DBSession,
    resolver: Resolver,
    audit_service: AuditServiceDep,
) -> AuthService:
    return AuthService(user_repo, session, resolver, audit_service)


def get_privacy_service(
    consent_repo: ConsentRepo,
    data_request_repo: DataRequestRepo,
    session: DBSession,
    audit_service: AuditServiceDep,
) -> PrivacyService:
    return PrivacyService(consent_repo, data_request_repo, session, audit_service)


def get_member_service(executor: Executor) -> MemberService:
    return MemberService(executor)


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
ChurchServiceDep = Annotated[ChurchService, Depends(get_church_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PrivacyServiceDep = Annotated[PrivacyService, Depends(get_privacy_service)]
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
