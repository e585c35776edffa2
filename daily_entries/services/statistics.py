"""
Farm Statistics

Admin overview numbers: the current-month dashboard, per-shed statistics
and per-worker activity. Everything is aggregated from stored rows on each
call.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, Max, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from sheds.models import Shed, WorkerAssignment
from . import store

User = get_user_model()


def _month_bounds(today: date):
    start = today.replace(day=1)
    if start.month == 12:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, next_month


def dashboard_stats(today: Optional[date] = None) -> Dict[str, Any]:
    """
    Current-month totals for the admin dashboard, plus active shed and
    worker head counts.
    """
    today = today or timezone.localdate()

    totals = store.entries_for_month(today).aggregate(
        crates=Coalesce(Sum('production_crates'), Value(Decimal('0.00')), output_field=DecimalField()),
        birds=Coalesce(Sum('production_birds'), 0),
        mortality=Coalesce(Sum('mortality'), 0),
        non_production=Coalesce(Sum('non_production'), 0),
        total_birds=Coalesce(Sum('total_birds'), 0),
        entries=Count('id'),
    )

    return {
        'month': today.strftime('%Y-%m'),
        'total_sheds': Shed.objects.filter(is_active=True).count(),
        'total_workers': User.objects.filter(role=User.UserRole.WORKER).count(),
        'monthly_production': {
            'crates': totals['crates'],
            'birds': totals['birds'],
        },
        'monthly_mortality': totals['mortality'],
        'monthly_non_production': totals['non_production'],
        'monthly_total_birds': totals['total_birds'],
        'total_entries': totals['entries'],
    }


def shed_statistics(today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Per-shed current-month production and mortality with the number of
    actively assigned workers, ordered by shed name.
    """
    today = today or timezone.localdate()
    start, next_month = _month_bounds(today)
    in_month = Q(daily_entries__entry_date__gte=start, daily_entries__entry_date__lt=next_month)

    sheds = Shed.objects.annotate(
        month_crates=Coalesce(
            Sum('daily_entries__production_crates', filter=in_month),
            Value(Decimal('0.00')),
            output_field=DecimalField(),
        ),
        month_birds=Coalesce(Sum('daily_entries__production_birds', filter=in_month), 0),
        month_mortality=Coalesce(Sum('daily_entries__mortality', filter=in_month), 0),
        month_entries=Count('daily_entries', filter=in_month),
    ).order_by('name')

    # Separate query so assignment rows do not repeat entry rows in the sums
    worker_counts = dict(
        WorkerAssignment.objects.filter(is_active=True)
        .order_by()
        .values('shed_id')
        .annotate(workers=Count('worker_id', distinct=True))
        .values_list('shed_id', 'workers')
    )

    return [
        {
            'id': str(shed.id),
            'name': shed.name,
            'variant': shed.variant,
            'is_active': shed.is_active,
            'number_of_birds': shed.number_of_birds,
            'month_production_crates': shed.month_crates,
            'month_production_birds': shed.month_birds,
            'month_mortality': shed.month_mortality,
            'month_entries': shed.month_entries,
            'assigned_workers': worker_counts.get(shed.id, 0),
        }
        for shed in sheds
    ]


def worker_statistics() -> List[Dict[str, Any]]:
    """Per-worker assigned shed count, entry count and last entry date."""
    workers = User.objects.filter(role=User.UserRole.WORKER).annotate(
        assigned_shed_count=Count(
            'shed_assignments',
            filter=Q(shed_assignments__is_active=True),
            distinct=True,
        ),
        total_entries=Count('daily_entries', distinct=True),
        last_entry_date=Max('daily_entries__entry_date'),
    ).order_by('full_name', 'username')

    return [
        {
            'id': str(worker.id),
            'username': worker.username,
            'full_name': worker.get_full_name(),
            'email': worker.email,
            'is_active': worker.is_active,
            'assigned_sheds': worker.assigned_shed_count,
            'total_entries': worker.total_entries,
            'last_entry_date': worker.last_entry_date.isoformat() if worker.last_entry_date else None,
        }
        for worker in workers
    ]
