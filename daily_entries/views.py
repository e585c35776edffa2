"""
Daily Entry API Views

Workers submit one entry per shed per day; administrators review, correct
and report on entries.
"""

from datetime import datetime
import uuid

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsFarmAdmin
from sheds.exceptions import ShedNotFound
from sheds.services import can_submit_for_shed, get_shed
from .exceptions import DuplicateEntryError, EntryNotFound, EntryValidationError
from .services import reporting, statistics, store
from .services.corrections import correct_entry
from .services.submission import preview_bird_counts, submit_daily_entry
from .services.validation import parse_entry_date


class StandardResultsSetPagination(PageNumberPagination):
    """Standard pagination for daily entry views."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response_data(self, data):
        """Return pagination metadata along with results."""
        return {
            'count': self.page.paginator.count,
            'total_pages': self.page.paginator.num_pages,
            'current_page': self.page.number,
            'page_size': self.get_page_size(self.request),
            'next': self.get_next_link(),
            'previous': self.get_previous_link(),
            'results': data,
        }


def invalid_id_response(**params):
    """400 response for the first param that is not a UUID, else None."""
    for name, value in params.items():
        if not value:
            continue
        try:
            uuid.UUID(str(value))
        except ValueError:
            return Response(
                {'errors': {name: ['Invalid id']}},
                status=status.HTTP_400_BAD_REQUEST
            )
    return None


def serialize_entry(entry):
    """Serialize a DailyEntry record."""
    return {
        'id': str(entry.id),
        'shed_id': str(entry.shed_id),
        'shed_name': entry.shed.name if entry.shed else None,
        'shed_variant': entry.shed.variant if entry.shed else None,
        'worker_id': str(entry.worker_id),
        'worker_name': entry.worker.get_full_name() if entry.worker else None,
        'entry_date': entry.entry_date.isoformat() if entry.entry_date else None,
        'production_crates': float(entry.production_crates),
        'production_birds': entry.production_birds,
        'total_birds': entry.total_birds,
        'non_production': entry.non_production,
        'mortality': entry.mortality,
        'notes': entry.notes,
        'state': entry.state,
        'corrected_by': str(entry.corrected_by_id) if entry.corrected_by_id else None,
        'corrected_by_name': entry.corrected_by.get_full_name() if entry.corrected_by else None,
        'corrected_at': entry.corrected_at.isoformat() if entry.corrected_at else None,
        'original_values': entry.original_values,
        'created_at': entry.created_at.isoformat() if entry.created_at else None,
        'updated_at': entry.updated_at.isoformat() if entry.updated_at else None,
    }


class EntryFilterMixin:
    """Shared query-param parsing for entry listings."""

    def _date_param(self, request, name):
        value = request.query_params.get(name)
        if not value:
            return None, None
        parsed = parse_entry_date(value)
        if parsed is None:
            return None, Response(
                {'errors': {name: ['Invalid date format. Use YYYY-MM-DD']}},
                status=status.HTTP_400_BAD_REQUEST
            )
        return parsed, None

    def _filters(self, request):
        start_date, error = self._date_param(request, 'start_date')
        if error:
            return None, error
        end_date, error = self._date_param(request, 'end_date')
        if error:
            return None, error

        shed_id = request.query_params.get('shed_id') or request.query_params.get('shed')
        worker_id = request.query_params.get('worker_id')
        error = invalid_id_response(shed_id=shed_id, worker_id=worker_id)
        if error:
            return None, error

        # Workers only ever see their own entries
        if not request.user.is_farm_admin:
            worker_id = request.user.id

        return {
            'shed_id': shed_id,
            'worker_id': worker_id,
            'start_date': start_date,
            'end_date': end_date,
        }, None

    def _paginate(self, request, qs):
        paginator = self.pagination_class()
        page = paginator.paginate_queryset(qs, request, view=self)
        if page is not None:
            data = [serialize_entry(entry) for entry in page]
            return Response(paginator.get_paginated_response_data(data))

        data = [serialize_entry(entry) for entry in qs]
        return Response({'results': data, 'count': len(data)})


class DailyEntryView(EntryFilterMixin, APIView):
    """
    GET /api/entries/
    POST /api/entries/

    List entries (newest first) or submit today's entry for a shed. The
    bird counts are derived server-side; the client sends only
    `production_crates`, `mortality` and `notes`.
    """
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get(self, request):
        filters, error = self._filters(request)
        if error:
            return error
        return self._paginate(request, store.list_entries(**filters))

    def post(self, request):
        shed_id = request.data.get('shed_id') or request.data.get('shed')
        if not shed_id:
            return Response({'errors': {'shed_id': ['Please select a shed']}}, status=status.HTTP_400_BAD_REQUEST)

        try:
            shed = get_shed(shed_id)
        except ShedNotFound:
            return Response({'error': 'Shed not found'}, status=status.HTTP_404_NOT_FOUND)

        if not shed.is_active:
            return Response(
                {'errors': {'shed_id': ['This shed is not active']}},
                status=status.HTTP_400_BAD_REQUEST
            )
        if not can_submit_for_shed(request.user, shed):
            return Response(
                {'error': 'You are not assigned to this shed'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            entry = submit_daily_entry(
                worker=request.user,
                shed=shed,
                entry_date=request.data.get('entry_date') or request.data.get('date'),
                production_crates=request.data.get('production_crates'),
                mortality=request.data.get('mortality', 0),
                notes=request.data.get('notes', ''),
            )
        except EntryValidationError as exc:
            return Response({'errors': exc.errors}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateEntryError as exc:
            return Response(
                {'error': 'An entry for this shed and date already exists', 'errors': exc.errors},
                status=status.HTTP_409_CONFLICT
            )

        return Response(serialize_entry(entry), status=status.HTTP_201_CREATED)


class DailyEntryDetailView(APIView):
    """
    GET /api/entries/{id}/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, entry_id):
        try:
            entry = store.get_entry(entry_id)
        except EntryNotFound:
            return Response({'error': 'Entry not found'}, status=status.HTTP_404_NOT_FOUND)

        if not request.user.is_farm_admin and entry.worker_id != request.user.id:
            return Response({'error': 'Entry not found'}, status=status.HTTP_404_NOT_FOUND)

        return Response(serialize_entry(entry))


class EntryPreviewView(APIView):
    """
    POST /api/entries/preview/

    Bird counts the submission would record, for the live form display.
    Also reports whether the shed already has an entry for the date.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        shed_id = request.data.get('shed_id') or request.data.get('shed')
        try:
            shed = get_shed(shed_id)
        except ShedNotFound:
            return Response({'error': 'Shed not found'}, status=status.HTTP_404_NOT_FOUND)

        if not can_submit_for_shed(request.user, shed):
            return Response(
                {'error': 'You are not assigned to this shed'},
                status=status.HTTP_403_FORBIDDEN
            )

        entry_date = request.data.get('entry_date') or request.data.get('date')
        try:
            counts = preview_bird_counts(shed, entry_date, request.data.get('production_crates', 0))
        except EntryValidationError as exc:
            return Response({'errors': exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            **counts.as_dict(),
            'entry_exists': store.entry_exists(shed.id, parse_entry_date(entry_date)),
        })


class EntryCorrectionView(APIView):
    """
    POST /api/entries/{id}/correct/

    Administrator correction. The first correction keeps a snapshot of the
    submitted values in `original_values`.
    """
    permission_classes = [IsFarmAdmin]

    def post(self, request, entry_id):
        try:
            entry = correct_entry(entry_id, request.data, request.user)
        except EntryNotFound:
            return Response({'error': 'Entry not found'}, status=status.HTTP_404_NOT_FOUND)
        except EntryValidationError as exc:
            return Response({'errors': exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        return Response(serialize_entry(entry))


class CorrectedEntriesView(EntryFilterMixin, APIView):
    """
    GET /api/entries/corrected/
    """
    permission_classes = [IsFarmAdmin]
    pagination_class = StandardResultsSetPagination

    def get(self, request):
        filters, error = self._filters(request)
        if error:
            return error
        return self._paginate(request, store.list_corrected_entries(**filters))


class ProductionSummaryView(APIView):
    """
    GET /api/entries/summary/?month=YYYY-MM&shed_id=...
    GET /api/entries/summary/?months=12&shed_id=...

    With `month`, one rollup for that month. Otherwise per-shed monthly
    rollups for the last `months` months.
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        shed_id = request.query_params.get('shed_id')
        month = request.query_params.get('month')
        error = invalid_id_response(shed_id=shed_id)
        if error:
            return error

        if month:
            try:
                month_date = datetime.strptime(month, '%Y-%m').date()
            except ValueError:
                return Response(
                    {'errors': {'month': ['Invalid month format. Use YYYY-MM']}},
                    status=status.HTTP_400_BAD_REQUEST
                )
            summary = reporting.build_production_summary(month_date, shed_id=shed_id)
            return Response(summary.as_dict())

        try:
            months = int(request.query_params.get('months', 12))
        except ValueError:
            return Response({'errors': {'months': ['Must be a whole number']}}, status=status.HTTP_400_BAD_REQUEST)

        summaries = reporting.monthly_summaries(shed_id=shed_id, months=max(1, min(months, 60)))
        data = [summary.as_dict() for summary in summaries]
        return Response({'results': data, 'count': len(data)})


class ProductionReportView(APIView):
    """
    GET /api/entries/report/?start_date=&end_date=&shed_id=&variant=
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        start_date = parse_entry_date(request.query_params.get('start_date') or '')
        end_date = parse_entry_date(request.query_params.get('end_date') or '')

        errors = {}
        if start_date is None:
            errors['start_date'] = ['start_date is required (YYYY-MM-DD)']
        if end_date is None:
            errors['end_date'] = ['end_date is required (YYYY-MM-DD)']
        elif start_date and end_date < start_date:
            errors['end_date'] = ['end_date must be on or after start_date']
        shed_id = request.query_params.get('shed_id')
        error = invalid_id_response(shed_id=shed_id)
        if error:
            return error

        variant = request.query_params.get('variant')
        if variant in ('', 'all'):
            variant = None
        if variant and variant not in ('W', 'B'):
            errors['variant'] = ['Variant must be W, B or all']
        if errors:
            return Response({'errors': errors}, status=status.HTTP_400_BAD_REQUEST)

        report = reporting.build_report_data(
            start_date,
            end_date,
            shed_id=shed_id,
            variant=variant,
        )
        summary = report['summary']
        return Response({
            'date_range': {
                'start': start_date.isoformat(),
                'end': end_date.isoformat(),
            },
            'summary': {
                **summary,
                'total_crates': float(summary['total_crates']),
                'avg_birds': float(summary['avg_birds']),
            },
            'sheds': [
                {'id': str(shed.id), 'name': shed.name, 'variant': shed.variant}
                for shed in report['sheds']
            ],
            'entries': [serialize_entry(entry) for entry in report['entries']],
        })


class DashboardStatsView(APIView):
    """
    GET /api/entries/dashboard/

    Current-month production totals with active shed and worker counts.
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        stats = statistics.dashboard_stats()
        stats['monthly_production']['crates'] = float(stats['monthly_production']['crates'])
        return Response(stats)
