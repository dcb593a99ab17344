from datetime import UTC, datetime
from typing import Final

# Control-plane schema; church namespaces live beside it in the same database
SHARED_SCHEMA: Final[str] = "public"


def utc_now() -> datetime:
    """Current UTC time, naive, for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def shared_table_args(*constraints: object) -> tuple[object, ...]:
    """__table_args__ for control-plane tables: constraints plus the schema."""
    return (*constraints, {"schema": SHARED_SCHEMA})
