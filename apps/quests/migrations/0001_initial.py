# Generated manually for the quest catalogue

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Quest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(choices=[('pair', 'Pair'), ('multiple-pair', 'Multiple pairs'), ('bonus', 'Bonus')], default='pair', max_length=20)),
                ('points', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive'), ('archived', 'Archived')], default='active', max_length=20)),
                ('expires_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_quests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'quests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'expires_at'], name='quests_status_expires_idx'),
                    models.Index(fields=['category'], name='quests_category_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('points__gt', 0)), name='quests_points_positive'),
                ],
            },
        ),
    ]
