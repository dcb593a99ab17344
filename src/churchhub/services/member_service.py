"""Member management - church-scoped data through the tenant query executor."""

from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError

from src.churchhub.core.db.executor import FOREIGN_KEY_VIOLATION, TenantQueryExecutor, sqlstate_of
from src.churchhub.core.exceptions import ValidationError
from src.churchhub.core.logging import get_logger
from src.churchhub.models.base import utc_now
from src.churchhub.schemas.member import MemberCreate, MemberRead

logger = get_logger(__name__)

MEMBER_COLUMNS = (
    "id, tenant_id, first_name, last_name, email, phone, birth_date, baptism_date, "
    "membership_date, is_active, cell_group_id, created_at"
)

_LIST_MEMBERS = f"""
    SELECT {MEMBER_COLUMNS}
    FROM members
    WHERE tenant_id = :tenant_id AND is_active = true
    ORDER BY last_name, first_name, id
    LIMIT :limit OFFSET :offset
"""

_INSERT_MEMBER = f"""
    WITH inserted AS (
        INSERT INTO members (
            id, tenant_id, first_name, last_name, email, phone, birth_date, baptism_date,
            membership_date, is_active, cell_group_id, created_at, updated_at
        ) VALUES (
            :id, :tenant_id, :first_name, :last_name, :email, :phone, :birth_date, :baptism_date,
            CURRENT_DATE, true, :cell_group_id, :now, :now
        )
        RETURNING {MEMBER_COLUMNS}
    ),
    counted AS (
        UPDATE public.tenants
        SET member_count = member_count + 1, updated_at = :now
        WHERE id = :tenant_id
    )
    SELECT {MEMBER_COLUMNS} FROM inserted
"""


class MemberService:
    def __init__(self, executor: TenantQueryExecutor):
        self.executor = executor

    async def list_members(self, tenant_id: UUID, limit: int = 50, offset: int = 0) -> list[MemberRead]:
        result = await self.executor.execute(
            tenant_id, _LIST_MEMBERS, {"limit": limit, "offset": offset}
        )
        return [MemberRead.model_validate(row) for row in result.rows]

    async def create_member(self, tenant_id: UUID, data: MemberCreate) -> MemberRead:
        """Insert a member and bump the church's billable member count.

        Both writes are one statement on the tenant connection, so they commit
        or roll back together.

        Raises:
            ValidationError: cell_group_id does not exist in this church
        """
        now = utc_now()
        params = data.model_dump()
        params.update(id=uuid4(), now=now)
        try:
            result = await self.executor.execute(tenant_id, _INSERT_MEMBER, params)
        except IntegrityError as e:
            if sqlstate_of(e) != FOREIGN_KEY_VIOLATION:
                raise
            raise ValidationError("Unknown cell group", field="cell_group_id") from e

        member = MemberRead.model_validate(result.first())
        logger.info("Member created", tenant_id=str(tenant_id), member_id=str(member.id))
        return member
