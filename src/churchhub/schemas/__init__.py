from src.churchhub.schemas.auth import LoginRequest, LoginResponse, UserRead
from src.churchhub.schemas.church import (
    ChurchRead,
    ChurchRegisterRequest,
    ChurchRegisterResponse,
    ProvisionResponse,
    RepairResponse,
)
from src.churchhub.schemas.member import MemberCreate, MemberRead
from src.churchhub.schemas.pagination import PaginatedResponse
from src.churchhub.schemas.privacy import ConsentRead, DataRequestCreate, DataRequestRead

__all__ = [
    "ChurchRead",
    "ChurchRegisterRequest",
    "ChurchRegisterResponse",
    "ConsentRead",
    "DataRequestCreate",
    "DataRequestRead",
    "LoginRequest",
    "LoginResponse",
    "MemberCreate",
    "MemberRead",
    "PaginatedResponse",
    "ProvisionResponse",
    "RepairResponse",
    "UserRead",
]
