"""Repositories for consent records and data-subject requests."""

from uuid import UUID

from sqlmodel import select

from src.churchhub.models.public import ConsentRecord, DataRequest
from src.churchhub.repositories.base import BaseRepository


class ConsentRecordRepository(BaseRepository[ConsentRecord]):
    model = ConsentRecord

    async def list_by_user(self, user_id: UUID) -> list[ConsentRecord]:
        """Full consent history for a user, oldest first."""
        result = await self.session.execute(
            select(ConsentRecord)
            .where(ConsentRecord.user_id == user_id)
            .order_by(ConsentRecord.consent_date, ConsentRecord.id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def current_by_purpose(self, user_id: UUID) -> dict[str, ConsentRecord]:
        """Latest record per purpose. Later rows supersede earlier ones."""
        current: dict[str, ConsentRecord] = {}
        for record in await self.list_by_user(user_id):
            current[record.purpose] = record
        return current


class DataRequestRepository(BaseRepository[DataRequest]):
    model = DataRequest

    async def list_by_user(self, user_id: UUID) -> list[DataRequest]:
        result = await self.session.execute(
            select(DataRequest)
            .where(DataRequest.user_id == user_id)
            .order_by(DataRequest.request_date.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
