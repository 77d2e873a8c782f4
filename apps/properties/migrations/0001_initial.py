# Generated manually for properties app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import apps.properties.settings_schema


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('settings', models.JSONField(blank=True, default=apps.properties.settings_schema.default_property_settings)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='owned_properties', to=settings.AUTH_USER_MODEL)),
                ('admins', models.ManyToManyField(blank=True, related_name='administered_properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'properties',
                'verbose_name_plural': 'properties',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['owner', 'created_at'], name='properties_owner_idx')],
            },
        ),
        migrations.CreateModel(
            name='PropertyMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('email', models.EmailField(max_length=255)),
                ('added_at', models.DateTimeField(auto_now_add=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='properties.property')),
            ],
            options={
                'db_table': 'property_members',
                'ordering': ['email'],
                'indexes': [models.Index(fields=['email'], name='property_members_email_idx')],
                'unique_together': {('property', 'email')},
            },
        ),
    ]
