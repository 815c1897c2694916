"""
Management command to expire deals whose expiry time has passed.

Buyers never see such deals (availability is checked at query time), but
their stored status stays 'active' until swept. Run this periodically
(e.g. from cron) to keep stored status and analytics in line.

Usage:
    python manage.py expire_deals [--dry-run]
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.deals.models import Deal
from apps.deals.services import expire_overdue_deals


class Command(BaseCommand):
    help = 'Mark active deals past their expiry time as expired'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        now = timezone.now()
        overdue = Deal.objects.overdue(now).select_related('vendor')
        count = overdue.count()

        if count == 0:
            self.stdout.write(self.style.SUCCESS('No overdue deals.'))
            return

        self.stdout.write(f'\nFound {count} overdue deal(s):\n')
        for deal in overdue:
            self.stdout.write(
                f'  - {deal.title} | vendor: {deal.vendor.email} | expired at: {deal.expiry_time:%Y-%m-%d %H:%M}'
            )

        if options['dry_run']:
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
            return

        updated = expire_overdue_deals(now=now)
        self.stdout.write(self.style.SUCCESS(f'\nExpired {updated} deal(s).'))
