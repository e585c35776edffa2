"""
Daily Entry Corrections

Administrators overwrite the values of a submitted entry. The first
correction captures a snapshot of the entry as it was recorded
(`original_values`); later corrections keep that snapshot untouched, so the
audit trail always shows what the worker originally submitted.

An entry is in one of two states:
    ORIGINAL   never corrected, no snapshot
    CORRECTED  corrected at least once, snapshot fixed

A correction is a partial update: fields left out of the proposed values
keep their stored value. Only the fields the admin sends are replaced.

Numeric input policy: by default a malformed numeric value (empty string,
text, NaN) is stored as 0 instead of failing the correction
(`coerce_numeric_or_zero`). Setting DAILY_ENTRY_STRICT_NUMERIC_CORRECTIONS
rejects such values with a field error instead.
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from ..exceptions import EntryValidationError
from ..models import DailyEntry
from . import store
from .validation import parse_number, validate_entry

logger = logging.getLogger(__name__)

CORRECTABLE_FIELDS = (
    'production_crates',
    'production_birds',
    'total_birds',
    'non_production',
    'mortality',
)
SNAPSHOT_FIELDS = CORRECTABLE_FIELDS + ('notes',)


def coerce_numeric_or_zero(value) -> Decimal:
    """Value as a Decimal, or Decimal(0) if it is not a finite number."""
    number = parse_number(value)
    return number if number is not None else Decimal('0')


def _normalize(field_name, number):
    if field_name == 'production_crates':
        return number
    # Whole counts are stored as int; fractional ones are left for the
    # validator to reject
    if number == number.to_integral_value():
        return int(number)
    return number


def take_snapshot(entry) -> dict:
    """The snapshot-able fields of an entry as JSON-ready values."""
    return {
        'production_crates': float(entry.production_crates),
        'production_birds': entry.production_birds,
        'total_birds': entry.total_birds,
        'non_production': entry.non_production,
        'mortality': entry.mortality,
        'notes': entry.notes,
    }


def build_replacement(current, proposed_values, strict=False):
    """
    Merge proposed values over the current entry.

    Fields missing from `proposed_values` keep their current value. Present
    numeric fields are coerced (or, in strict mode, rejected when malformed).

    Returns:
        (replacement dict, errors dict)
    """
    replacement = {}
    errors = {}

    for name in CORRECTABLE_FIELDS:
        if name not in proposed_values:
            replacement[name] = getattr(current, name)
            continue
        raw = proposed_values[name]
        number = parse_number(raw)
        if number is None:
            if strict:
                errors.setdefault(name, []).append('Must be a number')
                continue
            logger.warning(
                f"Correction of entry {current.id}: malformed {name}={raw!r} stored as 0"
            )
            number = coerce_numeric_or_zero(raw)
        replacement[name] = _normalize(name, number)

    if 'notes' in proposed_values:
        replacement['notes'] = proposed_values['notes'] or ''
    else:
        replacement['notes'] = current.notes

    return replacement, errors


def correct_entry(entry, proposed_values, admin, strict=None) -> DailyEntry:
    """
    Apply an administrator's correction to a stored entry.

    Args:
        entry: DailyEntry instance or entry id. The row is re-read under a
            lock, so the snapshot always reflects the stored state.
        proposed_values: Mapping of replacement values
        admin: Acting administrator (User or user id)
        strict: Reject malformed numbers instead of coercing them to 0.
            Defaults to settings.DAILY_ENTRY_STRICT_NUMERIC_CORRECTIONS.

    Returns:
        The updated DailyEntry

    Raises:
        EntryNotFound: if the entry does not exist
        EntryValidationError: if the corrected values are invalid; nothing
            is written
    """
    if strict is None:
        strict = getattr(settings, 'DAILY_ENTRY_STRICT_NUMERIC_CORRECTIONS', False)

    entry_id = entry.id if isinstance(entry, DailyEntry) else entry
    admin_id = getattr(admin, 'pk', admin)

    with transaction.atomic():
        current = store.lock_entry(entry_id)

        replacement, errors = build_replacement(current, proposed_values, strict=strict)
        if errors:
            raise EntryValidationError(errors)

        result = validate_entry({**replacement, 'entry_date': current.entry_date})
        if not result.is_valid:
            logger.warning(f"Correction of entry {current.id} rejected: {result.errors}")
            raise EntryValidationError(result.errors)

        patch = {
            **replacement,
            'corrected_by_id': admin_id,
            'corrected_at': timezone.now(),
        }
        first_correction = current.state == DailyEntry.State.ORIGINAL
        if current.original_values is None:
            patch['original_values'] = take_snapshot(current)

        updated = store.update_entry(current.id, patch)

    logger.info(
        f"daily_entry_corrected entry={updated.id} shed={updated.shed_id} "
        f"date={updated.entry_date} admin={admin_id} first_correction={first_correction}"
    )
    return updated
