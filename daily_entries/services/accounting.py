"""
Bird Accounting

Derives the bird-count fields of a daily entry from the one measurement the
worker types in (crates collected) and the shed's carried-forward population.

Rounding rule: crates are converted to birds by multiplying the exact
decimal value by CRATE_SIZE and rounding half away from zero
(Decimal ROUND_HALF_UP). Floats are converted through str() first so that
5.10 is treated as Decimal('5.10') and not as its binary approximation.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

# One crate holds 30 eggs
CRATE_SIZE = 30


@dataclass(frozen=True)
class BirdCounts:
    production_birds: int
    non_production: int
    total_birds: int

    def as_dict(self):
        return {
            'production_birds': self.production_birds,
            'non_production': self.non_production,
            'total_birds': self.total_birds,
        }


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def crates_to_birds(crates) -> int:
    """round(crates × CRATE_SIZE), half away from zero."""
    birds = to_decimal(crates) * CRATE_SIZE
    return int(birds.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def carry_forward_total(prior_entry, shed) -> int:
    """
    Starting population for the day being entered.

    With a prior entry, yesterday's population minus yesterday's deaths,
    clamped at zero. Without one, the shed's baseline bird count.
    """
    if prior_entry is None:
        return max(0, int(shed.number_of_birds or 0))
    return max(0, int(prior_entry.total_birds or 0) - int(prior_entry.mortality or 0))


def compute_bird_counts(crates_entered, shed, prior_entry=None) -> BirdCounts:
    """
    Compute production, non-production and total birds for a new entry.

    Pure function: the caller looks up `prior_entry` (the latest entry for the
    same shed strictly before the entry date) and passes it in.

    Args:
        crates_entered: Crates collected (Decimal, int, float or numeric str)
        shed: Object with a `number_of_birds` baseline
        prior_entry: Object with `total_birds` and `mortality`, or None

    Returns:
        BirdCounts
    """
    production_birds = crates_to_birds(crates_entered)
    total_birds = carry_forward_total(prior_entry, shed)
    non_production = max(0, total_birds - production_birds)

    return BirdCounts(
        production_birds=production_birds,
        non_production=non_production,
        total_birds=total_birds,
    )
