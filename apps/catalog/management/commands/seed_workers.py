"""
Management command to load the default worker catalog.
"""
from django.core.management.base import BaseCommand

from apps.catalog import services


class Command(BaseCommand):
    help = 'Seeds the default worker catalog when it is empty'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Replace existing workers (existing hires are removed too)',
        )

    def handle(self, *args, **options):
        created = services.seed_workers(force=options.get('force', False))

        if not created:
            self.stdout.write(self.style.WARNING('Workers already exist. Use --force to reseed.'))
            return

        self.stdout.write(self.style.SUCCESS(f'Seeded {created} workers'))
