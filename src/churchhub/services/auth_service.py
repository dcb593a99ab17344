"""Authentication service - credential check and access token issue."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.churchhub.core.exceptions import NotFoundError, ValidationError
from src.churchhub.core.logging import get_logger
from src.churchhub.core.security import (
    create_access_token,
    get_dummy_password_hash,
    verify_password_async,
)
from src.churchhub.core.security.access import can_access_tenant
from src.churchhub.models.public import AuditAction, Tenant
from src.churchhub.repositories.public import UserRepository
from src.churchhub.schemas.auth import LoginResponse
from src.churchhub.services.audit_service import AuditService
from src.churchhub.services.tenant_resolver import TenantResolver

logger = get_logger(__name__)


class AuthService:
    """Authentication service.

    Users are centralized in public schema. Outside super admins, a user
    can only sign in through the subdomain of their own church.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        resolver: TenantResolver,
        audit_service: AuditService,
    ):
        self.user_repo = user_repo
        self.session = session
        self.resolver = resolver
        self.audit_service = audit_service

    async def _resolve(self, routing_key: str | None) -> tuple[Tenant | None, bool]:
        """Resolve the church for a login. Second item is False when the key is bad."""
        if not routing_key:
            return None, True
        try:
            return await self.resolver.resolve_tenant(routing_key), True
        except (ValidationError, NotFoundError):
            return None, False

    async def authenticate(
        self,
        email: str,
        password: str,
        routing_key: str | None = None,
    ) -> LoginResponse | None:
        """Authenticate user and return an access token.

        Validates:
        1. Routing key resolves (or is absent / reserved)
        2. User exists and password is correct
        3. User is active
        4. User belongs to the resolved church (super admins exempt)

        Returns None if authentication fails, without saying why.
        """
        tenant, routing_ok = await self._resolve(routing_key)

        user = await self.user_repo.get_by_email(email.lower().strip())

        # Always verify a hash so response time does not reveal whether the email exists
        password_hash = user.password_hash if user else get_dummy_password_hash()
        password_valid = await verify_password_async(password, password_hash)

        if user is None or not password_valid or not routing_ok:
            return None

        if not user.is_active:
            return None

        target_tenant_id = tenant.id if tenant else None
        if not can_access_tenant(user.role, user.tenant_id, target_tenant_id):
            logger.info("Login rejected for church mismatch", user_id=str(user.id))
            return None

        try:
            await self.user_repo.touch_last_login(user.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.audit_service.log_action(
            AuditAction.USER_LOGIN,
            entity_type="user",
            entity_id=user.id,
            user_id=user.id,
            tenant_id=user.tenant_id,
        )

        return LoginResponse(
            access_token=create_access_token(user.id, user.role, user.tenant_id),
        )
