"""
Daily entry services

Accounting calculator, validator, correction engine and the store they
persist through.
"""

from .accounting import CRATE_SIZE, BirdCounts, compute_bird_counts
from .corrections import coerce_numeric_or_zero, correct_entry
from .submission import preview_bird_counts, submit_daily_entry
from .validation import ValidationResult, satisfies_conservation, validate_entry

__all__ = [
    'CRATE_SIZE',
    'BirdCounts',
    'compute_bird_counts',
    'coerce_numeric_or_zero',
    'correct_entry',
    'preview_bird_counts',
    'submit_daily_entry',
    'ValidationResult',
    'satisfies_conservation',
    'validate_entry',
]
