from django.core.management.base import BaseCommand, CommandError

from apps.transactions.application.tasks import check_provider_health


class Command(BaseCommand):
    help = 'Check that the configured exchange rate provider returns rates'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        if not options['sync']:
            self.stdout.write('Dispatching Celery task...')
            task = check_provider_health.delay()
            self.stdout.write(self.style.SUCCESS(f'Task dispatched with ID: {task.id}'))
            return

        result = check_provider_health()

        if not result['success']:
            raise CommandError(f"Failed: {result.get('message', 'Unknown error')}")

        message = f"Provider '{result['provider']}' is {result['status']}: {result['message']}"
        if result['status'] == 'healthy':
            self.stdout.write(self.style.SUCCESS(message))
        else:
            raise CommandError(message)
