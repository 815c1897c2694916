"""
Management command to delete expired phone verification codes.

Codes are removed on use or when an expired one is presented; this sweeps
the ones nobody came back for.

Usage:
    python manage.py cleanup_otps [--dry-run]
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.accounts.models import OneTimePassword
from apps.accounts.services import cleanup_expired_otps, otp_validity


class Command(BaseCommand):
    help = 'Delete OTP codes older than the validity window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many codes would be deleted without deleting them',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            cutoff = timezone.now() - otp_validity()
            count = OneTimePassword.objects.filter(created_at__lt=cutoff).count()
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {count} expired OTP(s) would be deleted.')
            )
            return

        deleted = cleanup_expired_otps()
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} expired OTP(s).'))
