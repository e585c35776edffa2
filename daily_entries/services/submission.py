"""
Daily Entry Submission

Worker flow for recording a new day: look up the shed's latest earlier
entry, derive the bird counts, validate, then insert. The store's unique
constraint decides races between two submissions for the same shed and date.
"""

import logging

from ..exceptions import EntryValidationError
from . import store
from .accounting import compute_bird_counts
from .validation import parse_entry_date, parse_number, validate_entry

logger = logging.getLogger(__name__)

_INPUT_FIELDS = ('entry_date', 'production_crates', 'mortality', 'notes')


def _check_inputs(entry_date, production_crates, mortality, notes):
    result = validate_entry(
        {
            'entry_date': entry_date,
            'production_crates': production_crates,
            'mortality': mortality,
            'notes': notes,
        },
        fields=_INPUT_FIELDS,
    )
    if not result.is_valid:
        logger.warning(f"Daily entry input rejected: {result.errors}")
        raise EntryValidationError(result.errors)


def preview_bird_counts(shed, entry_date, production_crates):
    """
    Bird counts a submission would record, without saving anything.

    Raises:
        EntryValidationError: if the date or crate value is malformed
    """
    result = validate_entry(
        {'entry_date': entry_date, 'production_crates': production_crates},
        fields=('entry_date', 'production_crates'),
    )
    if not result.is_valid:
        raise EntryValidationError(result.errors)

    prior = store.find_latest_entry(shed.id, before=parse_entry_date(entry_date))
    return compute_bird_counts(parse_number(production_crates), shed, prior)


def submit_daily_entry(worker, shed, entry_date, production_crates, mortality=0, notes=''):
    """
    Record a worker's daily entry for a shed.

    Args:
        worker: Submitting User
        shed: Shed the entry is for
        entry_date: date or YYYY-MM-DD string
        production_crates: Crates collected
        mortality: Birds that died that day
        notes: Free text

    Returns:
        The created DailyEntry

    Raises:
        EntryValidationError: malformed input or broken conservation rule
        DuplicateEntryError: the shed already has an entry for the date
    """
    notes = notes or ''
    _check_inputs(entry_date, production_crates, mortality, notes)

    entry_date = parse_entry_date(entry_date)
    crates = parse_number(production_crates)
    mortality = int(parse_number(mortality))

    prior = store.find_latest_entry(shed.id, before=entry_date)
    counts = compute_bird_counts(crates, shed, prior)

    values = {
        'entry_date': entry_date,
        'production_crates': crates,
        'mortality': mortality,
        'notes': notes,
        **counts.as_dict(),
    }
    result = validate_entry(values)
    if not result.is_valid:
        logger.warning(f"Daily entry for shed {shed.id} on {entry_date} rejected: {result.errors}")
        raise EntryValidationError(result.errors)

    entry = store.insert_entry(shed=shed, worker=worker, **values)

    logger.info(
        f"daily_entry_submitted entry={entry.id} shed={shed.id} date={entry_date} "
        f"worker={worker.pk} crates={crates} total_birds={counts.total_birds}"
    )
    return entry
