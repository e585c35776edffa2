"""
Daily Entry Validation

Shape and invariant checks shared by the worker submission path and the
admin correction path. Validation never modifies the values it is given; it
reports a field-tagged list of broken rules.

Uniqueness of (shed, entry_date) is not checked here. The database unique
constraint enforces it when the entry is inserted.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

MAX_PRODUCTION_CRATES = Decimal('9999.99')
MAX_BIRD_COUNT = 99999
MAX_NOTES_LENGTH = 1000

ENTRY_FIELDS = (
    'entry_date',
    'production_crates',
    'production_birds',
    'total_birds',
    'non_production',
    'mortality',
    'notes',
)

_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


@dataclass
class ValidationResult:
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_valid(self):
        return not self.errors

    def add(self, field_name, message):
        self.errors.setdefault(field_name, []).append(message)


def parse_number(value) -> Optional[Decimal]:
    """Return value as a finite Decimal, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite():
        return None
    return number


def parse_entry_date(value) -> Optional[date]:
    """Accept a date or a YYYY-MM-DD string naming a real calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.match(value.strip()):
        return None
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        return None


def satisfies_conservation(production_birds, non_production, total_birds) -> bool:
    """Production and non-production birds together never exceed the total."""
    return production_birds + non_production <= total_birds


def _check_entry_date(value, result):
    if parse_entry_date(value) is None:
        result.add('entry_date', 'Invalid date format')


def _check_production_crates(value, result):
    crates = parse_number(value)
    if crates is None:
        result.add('production_crates', 'Production crates must be a number')
        return
    if crates < 0:
        result.add('production_crates', 'Production crates must be 0 or greater')
    elif crates > MAX_PRODUCTION_CRATES:
        result.add('production_crates', 'Production crates seems too high')
    elif crates != crates.quantize(Decimal('0.01')):
        result.add('production_crates', 'Production crates can have at most 2 decimal places')


def _check_count(field_name, label, value, result, maximum=None):
    count = parse_number(value)
    if count is None:
        result.add(field_name, f'{label} must be a number')
        return
    if count != count.to_integral_value():
        result.add(field_name, 'Must be a whole number')
    if count < 0:
        result.add(field_name, f'{label} must be 0 or greater')
    elif maximum is not None and count > maximum:
        result.add(field_name, f'{label} seems too high')


def _check_notes(value, result):
    if value is None:
        return
    if not isinstance(value, str):
        result.add('notes', 'Notes must be text')
    elif len(value) > MAX_NOTES_LENGTH:
        result.add('notes', f'Notes must be less than {MAX_NOTES_LENGTH} characters')


_FIELD_CHECKS = {
    'entry_date': _check_entry_date,
    'production_crates': _check_production_crates,
    'production_birds': lambda v, r: _check_count('production_birds', 'Production birds', v, r, MAX_BIRD_COUNT),
    'total_birds': lambda v, r: _check_count('total_birds', 'Total birds', v, r, MAX_BIRD_COUNT),
    'non_production': lambda v, r: _check_count('non_production', 'Non-production', v, r),
    'mortality': lambda v, r: _check_count('mortality', 'Mortality', v, r),
    'notes': _check_notes,
}


def validate_entry(data, fields: Optional[Iterable[str]] = None) -> ValidationResult:
    """
    Validate daily entry values.

    Args:
        data: Mapping of field name to value
        fields: Restrict checks to these fields (all entry fields by default)

    Returns:
        ValidationResult with errors keyed by field name. A conservation
        failure is reported against `total_birds`.
    """
    result = ValidationResult()
    checked = tuple(fields) if fields is not None else ENTRY_FIELDS

    for name in checked:
        _FIELD_CHECKS[name](data.get(name), result)

    if {'production_birds', 'non_production', 'total_birds'} <= set(checked):
        production_birds = parse_number(data.get('production_birds'))
        non_production = parse_number(data.get('non_production'))
        total_birds = parse_number(data.get('total_birds'))
        if None not in (production_birds, non_production, total_birds):
            if not satisfies_conservation(production_birds, non_production, total_birds):
                result.add('total_birds', 'Production + Non-production birds cannot exceed total birds')

    return result

