"""
Daily Entry Store

Persistence boundary for daily entries. Lookups of the "most recent prior
entry" are ordered by entry_date, never by insertion order, because workers
can submit entries for past dates late.
"""

from datetime import date
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from ..exceptions import DuplicateEntryError, EntryNotFound
from ..models import DailyEntry


def _base_queryset():
    return DailyEntry.objects.select_related('shed', 'worker', 'corrected_by')


def find_latest_entry(shed_id, before: Optional[date] = None) -> Optional[DailyEntry]:
    """
    Latest entry for the shed by entry_date.

    Args:
        shed_id: Shed to search
        before: Only consider entries strictly before this date
    """
    qs = DailyEntry.objects.filter(shed_id=shed_id)
    if before is not None:
        qs = qs.filter(entry_date__lt=before)
    return qs.order_by('-entry_date').first()


def find_entry(shed_id, entry_date) -> Optional[DailyEntry]:
    return _base_queryset().filter(shed_id=shed_id, entry_date=entry_date).first()


def entry_exists(shed_id, entry_date) -> bool:
    return DailyEntry.objects.filter(shed_id=shed_id, entry_date=entry_date).exists()


def get_entry(entry_id) -> DailyEntry:
    """
    Raises:
        EntryNotFound: if the id does not match a stored entry
    """
    try:
        return _base_queryset().get(id=entry_id)
    except (DailyEntry.DoesNotExist, ValidationError, ValueError):
        raise EntryNotFound(entry_id)


def lock_entry(entry_id) -> DailyEntry:
    """
    Fetch an entry with a row lock. Must be called inside transaction.atomic().
    """
    try:
        return DailyEntry.objects.select_for_update().get(id=entry_id)
    except (DailyEntry.DoesNotExist, ValidationError, ValueError):
        raise EntryNotFound(entry_id)


def insert_entry(**fields) -> DailyEntry:
    """
    Insert a new entry.

    Raises:
        DuplicateEntryError: if the shed already has an entry for the date
    """
    try:
        with transaction.atomic():
            return DailyEntry.objects.create(**fields)
    except IntegrityError:
        shed_id = fields.get('shed_id') or getattr(fields.get('shed'), 'id', None)
        entry_date = fields.get('entry_date')
        if entry_exists(shed_id, entry_date):
            raise DuplicateEntryError(shed_id, entry_date)
        raise


def update_entry(entry_id, patch) -> DailyEntry:
    """
    Apply `patch` to the entry in a single UPDATE and return the fresh row.

    Raises:
        EntryNotFound: if no row was updated
    """
    patch = dict(patch)
    patch.setdefault('updated_at', timezone.now())
    updated = DailyEntry.objects.filter(id=entry_id).update(**patch)
    if not updated:
        raise EntryNotFound(entry_id)
    return get_entry(entry_id)


def list_entries(shed_id=None, worker_id=None, start_date=None, end_date=None):
    """Entries ordered by entry_date, newest first."""
    qs = _base_queryset()
    if shed_id:
        qs = qs.filter(shed_id=shed_id)
    if worker_id:
        qs = qs.filter(worker_id=worker_id)
    if start_date:
        qs = qs.filter(entry_date__gte=start_date)
    if end_date:
        qs = qs.filter(entry_date__lte=end_date)
    return qs.order_by('-entry_date', 'shed__name')


def entries_for_month(month: date, shed_id=None):
    """Entries in the calendar month containing `month`, oldest first."""
    qs = _base_queryset().filter(entry_date__year=month.year, entry_date__month=month.month)
    if shed_id:
        qs = qs.filter(shed_id=shed_id)
    return qs.order_by('entry_date', 'shed__name')


def list_corrected_entries(shed_id=None, worker_id=None, start_date=None, end_date=None):
    """Corrected entries, most recently corrected first."""
    qs = list_entries(shed_id, worker_id, start_date, end_date)
    return qs.filter(corrected_at__isnull=False).order_by('-corrected_at')
