# Generated manually for expenses app

import uuid
from decimal import Decimal
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='SharedExpense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('frequency', models.CharField(choices=[('monthly', 'Monthly'), ('quarterly', 'Quarterly'), ('yearly', 'Yearly'), ('one-time', 'One-time')], default='monthly', max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='shared_expenses', to=settings.AUTH_USER_MODEL)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shared_expenses', to='properties.property')),
            ],
            options={
                'db_table': 'shared_expenses',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['property', 'created_at'], name='shared_expenses_prop_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MemberTag',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('share_percentage', models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('fixed_fee', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('color', models.CharField(blank=True, default='blue', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='member_tags', to='properties.property')),
            ],
            options={
                'db_table': 'member_tags',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='MemberShare',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('member_email', models.EmailField(max_length=255)),
                ('tag_id', models.UUIDField(blank=True, null=True)),
                ('share_percentage', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('custom_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='member_shares', to='properties.property')),
            ],
            options={
                'db_table': 'member_shares',
                'ordering': ['member_email', 'created_at'],
                'indexes': [
                    models.Index(fields=['property', 'member_email'], name='member_shares_email_idx'),
                ],
            },
        ),
        migrations.AddConstraint(
            model_name='membershare',
            constraint=models.UniqueConstraint(fields=('property', 'member_email', 'tag_id'), name='member_shares_unique_tagged'),
        ),
        migrations.AddConstraint(
            model_name='membershare',
            constraint=models.UniqueConstraint(condition=models.Q(('tag_id__isnull', True)), fields=('property', 'member_email'), name='member_shares_unique_untagged'),
        ),
    ]
