# Generated manually for the shed registry
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Shed',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=50, unique=True)),
                ('variant', models.CharField(choices=[('W', 'W'), ('B', 'B')], help_text='Shed variant, used for filtering reports', max_length=1)),
                ('description', models.CharField(blank=True, default='', max_length=500)),
                ('capacity', models.PositiveIntegerField(default=0, help_text='Design maximum bird count', validators=[django.core.validators.MinValueValidator(0)])),
                ('number_of_birds', models.PositiveIntegerField(default=0, help_text='Baseline bird count used when the shed has no entries yet', validators=[django.core.validators.MinValueValidator(0)])),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sheds_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'sheds',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['variant', 'is_active'], name='sheds_variant_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='WorkerAssignment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('assigned_at', models.DateTimeField(auto_now_add=True)),
                ('is_active', models.BooleanField(default=True)),
                ('assigned_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assignments_made', to=settings.AUTH_USER_MODEL)),
                ('shed', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='worker_assignments', to='sheds.shed')),
                ('worker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shed_assignments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'worker_assignments',
                'ordering': ['-assigned_at'],
                'unique_together': {('worker', 'shed')},
            },
        ),
    ]
