# Generated manually for daily production entries
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.core.serializers.json
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('sheds', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entry_date', models.DateField(db_index=True, help_text='Date of this production record')),
                ('production_crates', models.DecimalField(decimal_places=2, default=0, help_text='Crates collected; one crate holds 30 eggs', max_digits=6, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(Decimal('9999.99'))])),
                ('production_birds', models.PositiveIntegerField(default=0, help_text='round(production_crates × 30)')),
                ('total_birds', models.PositiveIntegerField(default=0, help_text='Live population at the start of the day')),
                ('non_production', models.PositiveIntegerField(default=0, help_text='max(0, total_birds − production_birds)')),
                ('mortality', models.PositiveIntegerField(default=0, help_text='Number of birds that died today')),
                ('notes', models.TextField(blank=True, default='')),
                ('corrected_at', models.DateTimeField(blank=True, null=True)),
                ('original_values', models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Values as first recorded, captured on the first correction', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('corrected_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='corrected_entries', to=settings.AUTH_USER_MODEL)),
                ('shed', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='daily_entries', to='sheds.shed')),
                ('worker', models.ForeignKey(help_text='Worker who submitted the entry', on_delete=django.db.models.deletion.PROTECT, related_name='daily_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'daily_entries',
                'ordering': ['-entry_date'],
                'verbose_name_plural': 'daily entries',
                'unique_together': {('shed', 'entry_date')},
                'indexes': [
                    models.Index(fields=['shed', '-entry_date'], name='daily_entr_shed_date_idx'),
                    models.Index(fields=['worker', '-entry_date'], name='daily_entr_worker_date_idx'),
                    models.Index(fields=['-corrected_at'], name='daily_entr_corrected_idx'),
                ],
            },
        ),
    ]
