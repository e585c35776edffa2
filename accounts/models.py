from django.contrib.auth.models import AbstractUser
from django.db import models
import uuid


class User(AbstractUser):
    """
    Custom User model for farm staff.

    Every person who touches a daily entry is a User: workers submit entries
    for the sheds they are assigned to, admins manage sheds and correct
    submitted entries.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class UserRole(models.TextChoices):
        ADMIN = 'ADMIN', 'Administrator'
        WORKER = 'WORKER', 'Worker'

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.WORKER,
        db_index=True,
        help_text="User's role on the farm"
    )
    full_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Display name shown on entries and correction history"
    )

    class Meta:
        db_table = 'users'
        ordering = ['full_name', 'username']
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name()} ({self.get_role_display()})"

    def get_full_name(self):
        if self.full_name:
            return self.full_name
        return super().get_full_name() or self.username

    @property
    def is_farm_admin(self):
        return self.role == self.UserRole.ADMIN or self.is_superuser

    @property
    def is_farm_worker(self):
        return self.role == self.UserRole.WORKER
