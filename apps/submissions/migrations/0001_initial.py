# Generated manually for the submission ledger

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('quests', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('proof_ref', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('pending_review', 'Pending review'), ('manual_review', 'Manual review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending_review', max_length=20)),
                ('points_awarded', models.PositiveIntegerField(default=0)),
                ('visible_to_partner', models.BooleanField(default=False)),
                ('is_group_submission', models.BooleanField(default=False)),
                ('represents_pairs', models.PositiveSmallIntegerField(default=1)),
                ('ai_analysis', models.JSONField(blank=True, null=True)),
                ('admin_feedback', models.TextField(blank=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('is_deleted', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('submitted_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='submissions', to=settings.AUTH_USER_MODEL)),
                ('quest', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='submissions', to='quests.quest')),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reviewed_submissions', to=settings.AUTH_USER_MODEL)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deleted_submissions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'submissions',
                'ordering': ['-submitted_at'],
                'indexes': [
                    models.Index(fields=['quest', 'status'], name='submissions_quest_status_idx'),
                    models.Index(fields=['user', 'is_deleted'], name='submissions_user_deleted_idx'),
                    models.Index(fields=['status', 'is_deleted'], name='submissions_status_del_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('is_deleted', False)), fields=('user', 'quest'), name='submissions_one_live_per_quest'),
                    models.CheckConstraint(condition=models.Q(('status', 'approved'), ('points_awarded', 0), _connector='OR'), name='submissions_points_only_approved'),
                ],
            },
        ),
    ]
