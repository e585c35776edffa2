from decimal import Decimal

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid

from sheds.models import Shed


# =============================================================================
# DAILY ENTRY MODEL
# =============================================================================

class DailyEntry(models.Model):
    """
    Daily production record for one shed on one calendar date.

    The worker enters `production_crates` and `mortality`; the bird counts are
    derived by the accounting calculator. Admin corrections overwrite the
    current values and keep a one-time snapshot of what was first recorded in
    `original_values`.
    """

    class State(models.TextChoices):
        ORIGINAL = 'original', 'Original'
        CORRECTED = 'corrected', 'Corrected'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Associations
    shed = models.ForeignKey(Shed, on_delete=models.PROTECT, related_name='daily_entries')
    worker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='daily_entries',
        help_text="Worker who submitted the entry"
    )
    entry_date = models.DateField(
        db_index=True,
        help_text="Date of this production record"
    )

    # === PRODUCTION ===
    production_crates = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(Decimal('9999.99'))],
        help_text="Crates collected; one crate holds 30 eggs"
    )
    production_birds = models.PositiveIntegerField(
        default=0,
        help_text="round(production_crates × 30)"
    )
    total_birds = models.PositiveIntegerField(
        default=0,
        help_text="Live population at the start of the day"
    )
    non_production = models.PositiveIntegerField(
        default=0,
        help_text="max(0, total_birds − production_birds)"
    )

    # === MORTALITY ===
    mortality = models.PositiveIntegerField(
        default=0,
        help_text="Number of birds that died today"
    )
    notes = models.TextField(blank=True, default='')

    # === CORRECTION AUDIT ===
    corrected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='corrected_entries'
    )
    corrected_at = models.DateTimeField(null=True, blank=True)
    original_values = models.JSONField(
        null=True,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="Values as first recorded, captured on the first correction"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'daily_entries'
        ordering = ['-entry_date']
        unique_together = [('shed', 'entry_date')]
        verbose_name_plural = 'daily entries'
        indexes = [
            models.Index(fields=['shed', '-entry_date'], name='daily_entr_shed_date_idx'),
            models.Index(fields=['worker', '-entry_date'], name='daily_entr_worker_date_idx'),
            models.Index(fields=['-corrected_at'], name='daily_entr_corrected_idx'),
        ]

    def __str__(self):
        return f"{self.shed.name} - {self.entry_date}"

    @property
    def state(self):
        # corrected_by may be nulled when the admin account is deleted
        if self.original_values is not None or self.corrected_at is not None:
            return self.State.CORRECTED
        return self.State.ORIGINAL

    @property
    def is_corrected(self):
        return self.state == self.State.CORRECTED
