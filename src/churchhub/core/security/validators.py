"""Security validators."""

import re
from typing import Final
from uuid import UUID

MAX_SCHEMA_LENGTH: Final[int] = 63  # PostgreSQL identifier limit
TENANT_SCHEMA_PREFIX: Final[str] = "tenant_"
MAX_SUBDOMAIN_LENGTH: Final[int] = 63  # DNS label limit
RESERVED_SUBDOMAINS: Final[frozenset[str]] = frozenset({"www", "admin"})

# DNS label: lowercase alphanumerics and hyphens, no leading/trailing hyphen
SUBDOMAIN_REGEX: Final[str] = r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$"
# tenant_ + 32 hex chars of the tenant UUID
TENANT_SCHEMA_REGEX: Final[str] = rf"^{TENANT_SCHEMA_PREFIX}[0-9a-f]{{32}}$"

_SUBDOMAIN_PATTERN: Final[re.Pattern[str]] = re.compile(SUBDOMAIN_REGEX)
_TENANT_SCHEMA_PATTERN: Final[re.Pattern[str]] = re.compile(TENANT_SCHEMA_REGEX)


def normalize_subdomain(subdomain: str) -> str:
    """Lowercase and strip a routing key."""
    return subdomain.strip().lower()


def validate_subdomain_format(subdomain: str) -> str:
    """Validate subdomain format (already normalized).

    Raises:
        ValueError: If the subdomain is empty, too long or has invalid characters
    """
    if not subdomain:
        raise ValueError("Subdomain must not be empty")
    if len(subdomain) > MAX_SUBDOMAIN_LENGTH:
        raise ValueError(f"Subdomain exceeds {MAX_SUBDOMAIN_LENGTH} characters")
    if not _SUBDOMAIN_PATTERN.match(subdomain):
        raise ValueError(
            "Subdomain must contain only lowercase letters, numbers and hyphens, "
            "and must not start or end with a hyphen"
        )
    return subdomain


def is_reserved_subdomain(subdomain: str) -> bool:
    return subdomain in RESERVED_SUBDOMAINS


def tenant_schema_name(tenant_id: UUID) -> str:
    """Derive the namespace name for a church.

    Derived from the immutable UUID, never from user input, so the
    subdomain has no influence on identifiers interpolated into DDL.

    E.g., UUID('0b3c...') -> 'tenant_0b3c...'
    """
    name = f"{TENANT_SCHEMA_PREFIX}{tenant_id.hex}"
    validate_schema_name(name)
    return name


def validate_schema_name(schema_name: str) -> None:
    """Validate schema name follows strict tenant naming convention.

    Schema names must:
    - Start with 'tenant_' prefix
    - Be followed by exactly 32 lowercase hex characters
    - Not exceed 63 characters (PostgreSQL limit)
    - Not contain forbidden patterns

    Args:
        schema_name: The schema name to validate

    Raises:
        ValueError: If schema name is invalid

    Examples:
        >>> validate_schema_name("tenant_" + "a" * 32)  # Valid
        >>> validate_schema_name("tenant_graca")  # Invalid - not a UUID
        >>> validate_schema_name("public")  # Invalid - missing prefix
    """
    # Length check
    if len(schema_name) > MAX_SCHEMA_LENGTH:
        raise ValueError(
            f"Schema name exceeds PostgreSQL limit: {len(schema_name)} > {MAX_SCHEMA_LENGTH}"
        )

    if not _TENANT_SCHEMA_PATTERN.match(schema_name):
        raise ValueError(
            f"Invalid schema name format: {schema_name}. "
            "Must be 'tenant_' followed by 32 lowercase hex characters."
        )

    # Defense in depth - forbidden patterns
    forbidden = ["pg_", "information_schema", "public", "--", ";", "/*", "*/"]
    if any(pattern in schema_name.lower() for pattern in forbidden):
        raise ValueError(f"Schema name contains forbidden pattern: {schema_name}")
