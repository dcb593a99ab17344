"""Registration service - creates a church, its admin and consents, then its namespace.

This service does NOT require a tenant context because it creates a new church.
"""

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.db.executor import UNIQUE_VIOLATION, sqlstate_of
from src.churchhub.core.db.provisioner import SchemaProvisioner
from src.churchhub.core.exceptions import ConflictError, PartialProvisioningError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.request_metadata import RequestMetadata, get_request_metadata
from src.churchhub.core.security import hash_password_async
from src.churchhub.core.security.validators import normalize_subdomain
from src.churchhub.models.enums import ConsentPurpose, SubscriptionStatus, UserRole
from src.churchhub.models.public import AuditAction, ConsentRecord, Tenant, User
from src.churchhub.repositories.public import TenantRepository, UserRepository
from src.churchhub.schemas.church import ChurchRegisterRequest
from src.churchhub.services.audit_service import build_audit_log

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    tenant: Tenant
    admin_user: User
    namespace_ready: bool
    provisioning_error: PartialProvisioningError | None = None


def _conflict_from_integrity_error(e: IntegrityError) -> ConflictError | None:
    """Map a lost uniqueness race to the field that collided.

    Returns None for any other integrity violation (check, foreign key, not null).
    """
    if sqlstate_of(e) != UNIQUE_VIOLATION:
        return None
    message = str(e.orig if e.orig is not None else e).lower()
    if "subdomain" in message:
        return ConflictError("Subdomain already in use", field="subdomain")
    if "email" in message:
        return ConflictError("Email already registered", field="admin_email")
    return ConflictError("Church or admin already exists")


class RegistrationService:
    """Registers a church atomically and provisions its namespace after commit."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        provisioner: SchemaProvisioner,
    ):
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo
        self.session = session
        self.provisioner = provisioner

    async def register_church(
        self,
        request: ChurchRegisterRequest,
        metadata: RequestMetadata | None = None,
    ) -> RegistrationResult:
        """Register a church with its admin user.

        1. Pre-check subdomain and admin email
        2. Insert church (trial, no members, no fee)
        3. Insert admin user (church_admin, bound to the church)
        4. Link church.admin_user_id
        5. Insert one consent per ConsentPurpose plus a tenant.create audit entry
        6. COMMIT (point of no return; any earlier failure rolls everything back)
        7. Provision the namespace. Failure is recorded on the result, not raised.

        Raises:
            ConflictError: Subdomain or admin email already taken (pre-check or lost race)
        """
        metadata = metadata or get_request_metadata()
        subdomain = normalize_subdomain(request.subdomain)
        admin_email = request.admin_email.lower().strip()

        if await self.tenant_repo.exists_by_subdomain(subdomain):
            raise ConflictError("Subdomain already in use", field="subdomain")
        if await self.user_repo.exists_by_email(admin_email):
            raise ConflictError("Email already registered", field="admin_email")

        password_hash = await hash_password_async(request.admin_password)

        try:
            tenant = Tenant(
                name=request.name,
                subdomain=subdomain,
                address=request.address,
                phone=request.phone,
                email=request.email.lower(),
                subscription_status=SubscriptionStatus.TRIAL.value,
            )
            self.tenant_repo.add(tenant)
            await self.tenant_repo.flush()

            admin = User(
                email=admin_email,
                name=request.admin_name,
                role=UserRole.CHURCH_ADMIN.value,
                tenant_id=tenant.id,
                password_hash=password_hash,
            )
            self.user_repo.add(admin)
            await self.user_repo.flush()

            tenant.admin_user_id = admin.id

            for purpose in ConsentPurpose:
                self.session.add(
                    ConsentRecord(
                        user_id=admin.id,
                        tenant_id=tenant.id,
                        purpose=purpose.value,
                        consent_given=True,
                        ip_address=metadata.ip_address,
                        user_agent=metadata.user_agent,
                    )
                )

            self.session.add(
                build_audit_log(
                    AuditAction.TENANT_CREATE,
                    entity_type="tenant",
                    entity_id=tenant.id,
                    user_id=admin.id,
                    tenant_id=tenant.id,
                    new_values={"name": tenant.name, "subdomain": tenant.subdomain},
                    metadata=metadata,
                )
            )

            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            conflict = _conflict_from_integrity_error(e)
            if conflict is None:
                raise
            raise conflict from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Church registered",
            tenant_id=str(tenant.id),
            subdomain=subdomain,
            admin_user_id=str(admin.id),
        )

        # Provision only after the registry row is committed
        try:
            await self.provisioner.create_tenant_namespace(tenant.id)
        except Exception as e:
            error = PartialProvisioningError(tenant.id, e)
            logger.error(
                "Namespace provisioning failed - church registered without namespace",
                tenant_id=str(tenant.id),
                subdomain=subdomain,
                error=str(e),
            )
            return RegistrationResult(
                tenant=tenant,
                admin_user=admin,
                namespace_ready=False,
                provisioning_error=error,
            )

        return RegistrationResult(tenant=tenant, admin_user=admin, namespace_ready=True)
