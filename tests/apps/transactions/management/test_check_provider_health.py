import pytest
from io import StringIO
from unittest.mock import patch, MagicMock

from django.core.management import call_command
from django.core.management.base import CommandError


class TestCheckProviderHealthCommand:

    def test_sync_healthy(self, mock_provider_settings):
        out = StringIO()

        call_command("check_provider_health", "--sync", stdout=out)

        assert "Provider 'mock' is healthy" in out.getvalue()

    @patch('apps.transactions.management.commands.check_provider_health.check_provider_health')
    def test_sync_unhealthy_raises(self, mock_task):
        mock_task.return_value = {
            "success": True,
            "provider": "treasury",
            "status": "unhealthy",
            "message": "timeout calling Treasury API for Euro Zone-Euro",
        }

        with pytest.raises(CommandError) as exc_info:
            call_command("check_provider_health", "--sync")

        assert "unhealthy" in str(exc_info.value)

    def test_sync_unregistered_provider_raises(self, settings):
        settings.EXCHANGE_RATE_PROVIDER = "open_exchange"

        with pytest.raises(CommandError) as exc_info:
            call_command("check_provider_health", "--sync")

        assert "not registered" in str(exc_info.value)

    @patch('apps.transactions.management.commands.check_provider_health.check_provider_health')
    def test_async_dispatches_task(self, mock_task):
        mock_task.delay.return_value = MagicMock(id="task-123")
        out = StringIO()

        call_command("check_provider_health", stdout=out)

        mock_task.delay.assert_called_once_with()
        assert "Task dispatched with ID: task-123" in out.getvalue()
