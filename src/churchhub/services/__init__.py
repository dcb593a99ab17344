from src.churchhub.services.audit_service import AuditService
from src.churchhub.services.auth_service import AuthService
from src.churchhub.services.church_service import ChurchService
from src.churchhub.services.member_service import MemberService
from src.churchhub.services.privacy_service import PrivacyService
from src.churchhub.services.registration_service import RegistrationResult, RegistrationService
from src.churchhub.services.tenant_resolver import TenantResolver

__all__ = [
    "AuditService",
    "AuthService",
    "ChurchService",
    "MemberService",
    "PrivacyService",
    "RegistrationResult",
    "RegistrationService",
    "TenantResolver",
]
