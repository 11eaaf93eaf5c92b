"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 1 admin and 5 participants (two partnerships, one single)
- 4 quests (pair, multiple-pair, bonus, expired)
- A pending pair submission and an approved bonus submission
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.activities.models import Activity
from apps.groups.models import GroupSubmission
from apps.partnerships.services import link_partners
from apps.quests.models import Quest, QuestCategory, QuestStatus
from apps.submissions.models import Submission
from apps.submissions.services import create_submission, review_submission

PARTICIPANTS = [
    ('alice@example.com', 'Alice', 'alice_q'),
    ('bob@example.com', 'Bob', 'bob_q'),
    ('charlie@example.com', 'Charlie', 'charlie_q'),
    ('dana@example.com', 'Dana', 'dana_q'),
    ('eve@example.com', 'Eve', ''),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_partnerships(users)
        quests = self.create_quests(users['admin'])
        self.create_submissions(users, quests)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin)')
        for email, _, _ in PARTICIPANTS:
            self.stdout.write(f'  {email} / password123')

    def clear_data(self):
        """Clear all quest data and the sample accounts."""
        Activity.objects.all().delete()
        GroupSubmission.objects.all().delete()
        Submission.objects.all().delete()
        Quest.objects.all().delete()
        User.objects.filter(email__in=[email for email, _, _ in PARTICIPANTS]).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'role': UserRole.ADMIN,
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        users = {'admin': admin}
        for email, name, telegram in PARTICIPANTS:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={'display_name': name, 'telegram_username': telegram},
            )
            user.set_password('password123')
            user.save()
            users[name.lower()] = user
        return users

    def create_partnerships(self, users):
        self.stdout.write('  Linking partners...')
        link_partners(user_id=users['alice'].id, partner_id=users['bob'].id, performed_by=users['admin'])
        link_partners(user_id=users['charlie'].id, partner_id=users['dana'].id, performed_by=users['admin'])

    def create_quests(self, created_by):
        self.stdout.write('  Creating quests...')

        now = timezone.now()
        quests_data = [
            ('sunrise', 'Watch a sunrise together', QuestCategory.PAIR, 20, now + timedelta(days=7)),
            ('picnic', 'Group picnic in the park', QuestCategory.MULTIPLE_PAIR, 30, now + timedelta(days=14)),
            ('selfie', 'Selfie with a landmark', QuestCategory.BONUS, 5, None),
            ('snow', 'Build a snowman', QuestCategory.PAIR, 15, now - timedelta(days=1)),
        ]

        quests = {}
        for key, title, category, points, expires_at in quests_data:
            quest, _ = Quest.objects.get_or_create(
                title=title,
                defaults={
                    'category': category,
                    'points': points,
                    'expires_at': expires_at,
                    'status': QuestStatus.ACTIVE,
                    'created_by': created_by,
                }
            )
            quests[key] = quest
        return quests

    def create_submissions(self, users, quests):
        self.stdout.write('  Creating submissions...')

        if not Submission.objects.live().filter(quest=quests['sunrise']).exists():
            create_submission(user=users['alice'], quest_id=quests['sunrise'].id, proof_ref='sample-sunrise')

        if not Submission.objects.live().filter(user=users['eve'], quest=quests['selfie']).exists():
            selfie = create_submission(user=users['eve'], quest_id=quests['selfie'].id, proof_ref='sample-selfie')
            review_submission(submission_id=selfie.id, reviewer=users['admin'], decision='approve')
