"""
Shed registry models.

A Shed is a physical housing unit. Its `number_of_birds` is the baseline
population used for the first daily entry recorded against it; after that
the population is carried forward entry to entry.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Shed(models.Model):
    """Physical housing unit for a flock."""

    class Variant(models.TextChoices):
        WHITE = 'W', 'W'
        BROWN = 'B', 'B'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=50, unique=True)
    variant = models.CharField(
        max_length=1,
        choices=Variant.choices,
        help_text="Shed variant, used for filtering reports"
    )
    description = models.CharField(max_length=500, blank=True, default='')
    capacity = models.PositiveIntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Design maximum bird count"
    )
    number_of_birds = models.PositiveIntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Baseline bird count used when the shed has no entries yet"
    )
    is_active = models.BooleanField(default=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sheds_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sheds'
        ordering = ['name']
        indexes = [
            models.Index(fields=['variant', 'is_active'], name='sheds_variant_active_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.variant})"


class WorkerAssignment(models.Model):
    """Links a worker to a shed they may submit daily entries for."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    worker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='shed_assignments'
    )
    shed = models.ForeignKey(
        Shed,
        on_delete=models.CASCADE,
        related_name='worker_assignments'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assignments_made'
    )
    assigned_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'worker_assignments'
        ordering = ['-assigned_at']
        unique_together = [('worker', 'shed')]

    def __str__(self):
        return f"{self.worker} -> {self.shed.name}"
