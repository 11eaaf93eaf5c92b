# Generated manually for group submissions

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('quests', '0001_initial'),
        ('submissions', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GroupSubmission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('quest', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='group_submission', to='quests.quest')),
                ('submission', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='group', to='submissions.submission')),
                ('submitter', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='submitted_groups', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'group_submissions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['submitter', 'created_at'], name='group_subs_submitter_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GroupParticipant',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('opted_out', models.BooleanField(default=False)),
                ('opted_out_at', models.DateTimeField(blank=True, null=True)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='groups.groupsubmission')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='group_participations', to=settings.AUTH_USER_MODEL)),
                ('partner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'group_participants',
                'ordering': ['joined_at'],
                'indexes': [
                    models.Index(fields=['group', 'opted_out'], name='group_parts_group_opt_idx'),
                    models.Index(fields=['user', 'opted_out'], name='group_parts_user_opt_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('group', 'user'), name='group_participants_unique_user'),
                ],
            },
        ),
    ]
