import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.transactions.infrastructure.providers.mock import MockProvider
from apps.transactions.infrastructure.providers.registry import (
    PROVIDER_REGISTRY,
    ProviderName,
    get_configured_provider,
    get_provider_instance,
)
from apps.transactions.infrastructure.providers.treasury import TreasuryProvider


class TestProviderRegistry:
    """Tests for provider registry functions."""

    def test_provider_registry_contains_providers(self):
        assert ProviderName.TREASURY in PROVIDER_REGISTRY
        assert ProviderName.MOCK in PROVIDER_REGISTRY

    def test_get_provider_instance_treasury(self):
        assert isinstance(get_provider_instance("treasury"), TreasuryProvider)

    def test_get_provider_instance_mock(self):
        assert isinstance(get_provider_instance(ProviderName.MOCK), MockProvider)

    def test_get_provider_instance_invalid(self):
        assert get_provider_instance("invalid_provider") is None

    def test_get_configured_provider(self, settings):
        settings.EXCHANGE_RATE_PROVIDER = "mock"

        assert isinstance(get_configured_provider(), MockProvider)

    def test_get_configured_provider_default_is_treasury(self):
        assert isinstance(get_configured_provider(), TreasuryProvider)

    def test_get_configured_provider_unknown(self, settings):
        settings.EXCHANGE_RATE_PROVIDER = "open_exchange"

        with pytest.raises(ImproperlyConfigured):
            get_configured_provider()
