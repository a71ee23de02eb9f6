"""
Provider Registry - Maps provider names to adapter classes.
The active provider is selected with the EXCHANGE_RATE_PROVIDER setting.
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import models

from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.infrastructure.providers.mock import MockProvider
from apps.transactions.infrastructure.providers.treasury import TreasuryProvider


class ProviderName(models.TextChoices):
    """
    Enum with available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface
    3. Register it in PROVIDER_REGISTRY
    """

    TREASURY = "treasury", "Treasury"
    MOCK = "mock", "Mock"


PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    ProviderName.TREASURY: TreasuryProvider,
    ProviderName.MOCK: MockProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Returns:
        Instance of the provider adapter, or None if not registered
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        return None

    return provider_class()


def get_configured_provider() -> BaseExchangeRateProvider:
    """
    Get the provider named by settings.EXCHANGE_RATE_PROVIDER.

    Raises:
        ImproperlyConfigured: if the name is not registered
    """
    provider = get_provider_instance(settings.EXCHANGE_RATE_PROVIDER)

    if provider is None:
        raise ImproperlyConfigured(
            f"Unknown EXCHANGE_RATE_PROVIDER '{settings.EXCHANGE_RATE_PROVIDER}'. "
            f"Choose one of: {', '.join(PROVIDER_REGISTRY)}"
        )

    return provider
