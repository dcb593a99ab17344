"""Security utilities - crypto, validators and access checks.

Re-exports all security-related functions for convenience.
"""

from src.churchhub.core.security.access import (
    can_access_tenant,
    has_permission,
    require_permission,
    require_tenant_access,
)
from src.churchhub.core.security.crypto import (
    create_access_token,
    decode_token,
    get_dummy_password_hash,
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)
from src.churchhub.core.security.validators import (
    tenant_schema_name,
    validate_schema_name,
    validate_subdomain_format,
)

__all__ = [
    # Access
    "can_access_tenant",
    "has_permission",
    "require_permission",
    "require_tenant_access",
    # Crypto
    "create_access_token",
    "decode_token",
    "get_dummy_password_hash",
    "hash_password",
    "hash_password_async",
    "verify_password",
    "verify_password_async",
    # Validators
    "tenant_schema_name",
    "validate_schema_name",
    "validate_subdomain_format",
]
