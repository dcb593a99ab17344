"""Tests for TenantResolver and the tenant lookup cache."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.churchhub.core import cache
from src.churchhub.core.exceptions import TenantNotFoundError, ValidationError
from src.churchhub.services.tenant_resolver import TenantResolver
from tests.factories import TenantFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def tenant_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_active_by_subdomain = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def resolver(tenant_repo) -> TenantResolver:
    return TenantResolver(tenant_repo)


class TestResolveTenant:
    async def test_resolves_active_church(self, resolver, tenant_repo, mock_redis_unavailable):
        tenant = TenantFactory.build(subdomain="graca")
        tenant_repo.get_active_by_subdomain.return_value = tenant

        assert await resolver.resolve_tenant("graca") is tenant
        tenant_repo.get_active_by_subdomain.assert_awaited_once_with("graca")

    async def test_normalizes_routing_key(self, resolver, tenant_repo, mock_redis_unavailable):
        tenant_repo.get_active_by_subdomain.return_value = TenantFactory.build(subdomain="graca")

        await resolver.resolve_tenant("  GRACA ")

        tenant_repo.get_active_by_subdomain.assert_awaited_once_with("graca")

    @pytest.mark.parametrize("routing_key", ["www", "admin", "WWW"])
    async def test_reserved_key_means_no_church(self, resolver, tenant_repo, routing_key):
        assert await resolver.resolve_tenant(routing_key) is None
        tenant_repo.get_active_by_subdomain.assert_not_awaited()

    @pytest.mark.parametrize("routing_key", ["", "-graca", "graca_1", "a" * 64])
    async def test_malformed_key_rejected(self, resolver, tenant_repo, routing_key):
        with pytest.raises(ValidationError) as exc_info:
            await resolver.resolve_tenant(routing_key)
        assert exc_info.value.field == "subdomain"
        tenant_repo.get_active_by_subdomain.assert_not_awaited()

    async def test_unknown_church(self, resolver, mock_redis_unavailable):
        with pytest.raises(TenantNotFoundError):
            await resolver.resolve_tenant("naoexiste")


class TestResolverCache:
    async def test_hit_skips_database(self, resolver, tenant_repo, mock_redis):
        tenant = TenantFactory.build(subdomain="graca")
        tenant_repo.get_active_by_subdomain.return_value = tenant

        first = await resolver.resolve_tenant("graca")
        second = await resolver.resolve_tenant("graca")

        assert first.id == second.id
        assert second.subdomain == "graca"
        tenant_repo.get_active_by_subdomain.assert_awaited_once()

    async def test_entry_has_ttl(self, resolver, tenant_repo, mock_redis):
        tenant_repo.get_active_by_subdomain.return_value = TenantFactory.build(subdomain="graca")

        await resolver.resolve_tenant("graca")

        ttl = await mock_redis.ttl(cache.tenant_cache_key("graca"))
        assert 0 < ttl <= 60

    async def test_misses_are_not_cached(self, resolver, mock_redis):
        with pytest.raises(TenantNotFoundError):
            await resolver.resolve_tenant("naoexiste")

        assert await mock_redis.get(cache.tenant_cache_key("naoexiste")) is None

    async def test_invalidate_drops_entry(self, resolver, tenant_repo, mock_redis):
        tenant_repo.get_active_by_subdomain.return_value = TenantFactory.build(subdomain="graca")
        await resolver.resolve_tenant("graca")

        assert await cache.invalidate_tenant("graca") is True

        assert await mock_redis.get(cache.tenant_cache_key("graca")) is None

    async def test_redis_unavailable_falls_back(self, mock_redis_unavailable):
        tenant = TenantFactory.build()

        assert await cache.cache_tenant(tenant) is False
        assert await cache.get_cached_tenant(tenant.subdomain) is None
        assert await cache.invalidate_tenant(tenant.subdomain) is False

    async def test_redis_errors_are_swallowed(self, monkeypatch):
        broken = MagicMock()
        broken.get = AsyncMock(side_effect=ConnectionError("redis down"))

        async def _get_broken():
            return broken

        monkeypatch.setattr("src.churchhub.core.cache.get_redis", _get_broken)

        assert await cache.get_cached_tenant("graca") is None
