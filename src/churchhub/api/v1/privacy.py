"""LGPD endpoints - consents and data-subject requests of the current user."""

from fastapi import APIRouter, status

from src.churchhub.api.dependencies import CurrentUser, PrivacyServiceDep
from src.churchhub.schemas.privacy import ConsentRead, DataRequestCreate, DataRequestRead

router = APIRouter(prefix="/privacy", tags=["privacy"])


@router.get("/consents", response_model=list[ConsentRead])
async def list_consents(user: CurrentUser, service: PrivacyServiceDep) -> list[ConsentRead]:
    records = await service.list_consents(user)
    return [ConsentRead.model_validate(r) for r in records]


@router.post("/consents/{purpose}/withdraw", response_model=ConsentRead)
async def withdraw_consent(
    purpose: str, user: CurrentUser, service: PrivacyServiceDep
) -> ConsentRead:
    record = await service.withdraw_consent(user, purpose)
    return ConsentRead.model_validate(record)


@router.get("/data-requests", response_model=list[DataRequestRead])
async def list_data_requests(
    user: CurrentUser, service: PrivacyServiceDep
) -> list[DataRequestRead]:
    requests = await service.list_data_requests(user)
    return [DataRequestRead.model_validate(r) for r in requests]


@router.post(
    "/data-requests",
    response_model=DataRequestRead,
    status_code=status.HTTP_201_CREATED,
)
async def open_data_request(
    data: DataRequestCreate, user: CurrentUser, service: PrivacyServiceDep
) -> DataRequestRead:
    data_request = await service.open_data_request(user, data.type, data.notes)
    return DataRequestRead.model_validate(data_request)
