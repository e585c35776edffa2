"""
Production Reporting

Read-only rollups over daily entries. Summaries are recomputed from the
stored rows on every call by summation and averaging, so a correction is
reflected in the next report without any extra bookkeeping.
"""

from dataclasses import dataclass, asdict
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from django.db.models import Avg, Count, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from sheds.models import Shed
from ..models import DailyEntry


@dataclass(frozen=True)
class ProductionSummary:
    shed_id: Optional[str]
    month: date
    total_production_crates: Decimal
    total_production_birds: int
    avg_total_birds: Decimal
    total_non_production: int
    total_mortality: int
    entry_count: int

    def as_dict(self):
        data = asdict(self)
        data['shed_id'] = str(self.shed_id) if self.shed_id else None
        data['month'] = self.month.strftime('%Y-%m')
        data['total_production_crates'] = float(self.total_production_crates)
        data['avg_total_birds'] = float(self.avg_total_birds)
        return data


_AGGREGATES = {
    'total_production_crates': Sum('production_crates'),
    'total_production_birds': Sum('production_birds'),
    'avg_total_birds': Avg('total_birds'),
    'total_non_production': Sum('non_production'),
    'total_mortality': Sum('mortality'),
    'entry_count': Count('id'),
}


def _to_summary(shed_id, month, row):
    avg = row['avg_total_birds']
    return ProductionSummary(
        shed_id=shed_id,
        month=month,
        total_production_crates=row['total_production_crates'] or Decimal('0.00'),
        total_production_birds=row['total_production_birds'] or 0,
        avg_total_birds=Decimal(str(avg)).quantize(Decimal('0.01')) if avg is not None else Decimal('0.00'),
        total_non_production=row['total_non_production'] or 0,
        total_mortality=row['total_mortality'] or 0,
        entry_count=row['entry_count'] or 0,
    )


def build_production_summary(month: date, shed_id=None) -> ProductionSummary:
    """Rollup for one calendar month, for one shed or the whole farm."""
    month = month.replace(day=1)
    qs = DailyEntry.objects.filter(entry_date__year=month.year, entry_date__month=month.month)
    if shed_id:
        qs = qs.filter(shed_id=shed_id)
    return _to_summary(shed_id, month, qs.aggregate(**_AGGREGATES))


def monthly_summaries(shed_id=None, months=12, today: Optional[date] = None) -> List[ProductionSummary]:
    """
    Per-shed monthly rollups covering the last `months` calendar months,
    newest month first.
    """
    today = today or timezone.localdate()
    start = today.replace(day=1)
    for _ in range(max(months - 1, 0)):
        start = (start - timedelta(days=1)).replace(day=1)

    qs = DailyEntry.objects.filter(entry_date__gte=start)
    if shed_id:
        qs = qs.filter(shed_id=shed_id)

    rows = (
        qs.annotate(month=TruncMonth('entry_date'))
        .values('shed_id', 'month')
        .annotate(**_AGGREGATES)
        .order_by('-month', 'shed_id')
    )
    return [_to_summary(row['shed_id'], row['month'], row) for row in rows]


def build_report_data(start_date: date, end_date: date, shed_id=None, variant=None) -> dict:
    """
    Entries and totals for a date range, optionally narrowed to one shed or
    one shed variant.
    """
    entries = DailyEntry.objects.select_related('shed', 'worker').filter(
        entry_date__gte=start_date,
        entry_date__lte=end_date,
    )
    sheds = Shed.objects.all()
    if shed_id:
        entries = entries.filter(shed_id=shed_id)
    if variant:
        entries = entries.filter(shed__variant=variant)
        sheds = sheds.filter(variant=variant)

    totals = entries.aggregate(**_AGGREGATES)
    avg = totals['avg_total_birds']

    return {
        'entries': list(entries.order_by('entry_date', 'shed__name')),
        'summary': {
            'total_crates': totals['total_production_crates'] or Decimal('0.00'),
            'total_birds': totals['total_production_birds'] or 0,
            'total_mortality': totals['total_mortality'] or 0,
            'total_non_production': totals['total_non_production'] or 0,
            'avg_birds': Decimal(str(avg)).quantize(Decimal('0.01')) if avg is not None else Decimal('0.00'),
            'entry_count': totals['entry_count'] or 0,
        },
        'sheds': list(sheds.order_by('name')),
        'date_range': {
            'start': start_date,
            'end': end_date,
        },
    }
