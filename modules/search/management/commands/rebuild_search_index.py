"""
Management command to (re)index every order in the search daemon.
"""
from django.core.management.base import BaseCommand

from modules.search.services import OrderSearchService
from modules.search.tasks import rebuild_index


class Command(BaseCommand):
    help = 'Index all orders into the Manticore search index'

    def add_arguments(self, parser):
        parser.add_argument(
            '--async',
            action='store_true',
            dest='run_async',
            help='Queue the rebuild as a Celery task instead of running it inline',
        )

    def handle(self, *args, **options):
        if options['run_async']:
            result = rebuild_index.delay()
            self.stdout.write(f'Rebuild queued: task {result.id}')
            return

        stats = OrderSearchService().rebuild_index()
        message = f"Indexed {stats['indexed']} orders, {stats['failed']} failed"
        if stats['failed']:
            self.stdout.write(self.style.WARNING(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))
