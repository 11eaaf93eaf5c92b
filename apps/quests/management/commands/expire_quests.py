"""
Management command to deactivate quests past their deadline.

Meant to run from a scheduler (cron, Render cron job).

Usage:
    python manage.py expire_quests
    python manage.py expire_quests --dry-run
"""

from django.core.management.base import BaseCommand

from apps.quests.models import Quest
from apps.quests.services import expire_overdue_quests


class Command(BaseCommand):
    help = 'Mark active quests past their expiry date as inactive'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be expired without making changes',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            overdue = Quest.objects.overdue()
            count = overdue.count()
            for quest in overdue:
                self.stdout.write(f'  - {quest.title} (expired {quest.expires_at:%Y-%m-%d %H:%M})')
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {count} quest(s) would be expired.')
            )
            return

        count = expire_overdue_quests()
        if count == 0:
            self.stdout.write(self.style.SUCCESS('No overdue quests.'))
            return
        self.stdout.write(self.style.SUCCESS(f'Expired {count} quest(s).'))
