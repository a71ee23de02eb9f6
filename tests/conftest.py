import pytest
from django.conf import settings
from django.core.cache import caches
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_exchange_rate_cache():
    """Every test starts with an empty exchange rate cache."""
    caches[settings.EXCHANGE_RATE_CACHE].clear()
    yield
    caches[settings.EXCHANGE_RATE_CACHE].clear()


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()


@pytest.fixture
def mock_provider_settings(settings):
    """Route exchange rate lookups to the offline MockProvider."""
    settings.EXCHANGE_RATE_PROVIDER = "mock"
    return settings
