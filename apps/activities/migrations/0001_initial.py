# Generated manually for the activity log

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
            name='Activity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('activity_type', models.CharField(choices=[
                    ('partnership_created', 'Partnership created'),
                    ('partnership_removed', 'Partnership removed'),
                    ('partnership_force_changed', 'Partnership force changed'),
                    ('partnership_force_broken', 'Partnership force broken'),
                    ('partnership_force_created', 'Partnership force created'),
                    ('submission_created', 'Submission created'),
                    ('submission_escalated', 'Submission escalated'),
                    ('submission_approved', 'Submission approved'),
                    ('submission_rejected', 'Submission rejected'),
                    ('submission_deleted', 'Submission deleted'),
                    ('group_submission_created', 'Group submission created'),
                    ('group_submission_opted_out', 'Opted out of group submission'),
                    ('group_submission_opted_in', 'Opted back into group submission'),
                ], max_length=40)),
                ('description', models.TextField(blank=True)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to=settings.AUTH_USER_MODEL)),
                ('quest', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to='quests.quest')),
                ('submission', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to='submissions.submission')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='performed_activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'activities',
                'verbose_name_plural': 'activities',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='activities_user_created_idx'),
                    models.Index(fields=['activity_type', 'created_at'], name='activities_type_created_idx'),
                ],
            },
        ),
    ]
