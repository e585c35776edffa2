"""
Integration tests for worker daily entry submission.

Covers:
1. Bird counts derived from the shed baseline and carried forward
2. Prior-entry lookup ordered by entry date, not insertion order
3. One entry per shed per date
4. Validation failures store nothing

Run with: pytest tests/integration/test_entry_submission.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from daily_entries.exceptions import DuplicateEntryError, EntryValidationError
from daily_entries.models import DailyEntry
from daily_entries.services import preview_bird_counts, submit_daily_entry
from daily_entries.services import store
from sheds.models import Shed

pytestmark = pytest.mark.django_db


class TestSubmitDailyEntry:

    def test_first_entry_uses_shed_baseline(self, shed, worker):
        entry = submit_daily_entry(worker, shed, '2024-03-01', '5.10', mortality=2)

        assert entry.production_crates == Decimal('5.10')
        assert entry.production_birds == 153
        assert entry.total_birds == 1000
        assert entry.non_production == 847
        assert entry.mortality == 2
        assert entry.notes == ''
        assert entry.state == DailyEntry.State.ORIGINAL
        assert entry.original_values is None

    def test_carries_forward_from_previous_day(self, shed, worker, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 1), production_crates=Decimal('0'),
                   production_birds=0, total_birds=1000, non_production=1000, mortality=4)

        entry = submit_daily_entry(worker, shed, date(2024, 3, 2), 0)

        assert entry.total_birds == 996
        assert entry.production_birds == 0
        assert entry.non_production == 996

    def test_late_submission_uses_entry_date_order(self, shed, worker, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 5), total_birds=900, production_birds=0,
                   non_production=900, production_crates=Decimal('0'), mortality=0)
        make_entry(shed, entry_date=date(2024, 3, 1), total_birds=1000, production_birds=0,
                   non_production=1000, production_crates=Decimal('0'), mortality=10)

        entry = submit_daily_entry(worker, shed, '2024-03-03', '1')

        assert entry.total_birds == 990

    def test_other_sheds_do_not_carry_forward(self, shed, brown_shed, worker, make_entry):
        make_entry(brown_shed, entry_date=date(2024, 3, 1), total_birds=500, production_birds=0,
                   non_production=500, production_crates=Decimal('0'), mortality=100)

        entry = submit_daily_entry(worker, shed, '2024-03-02', '0')

        assert entry.total_birds == 1000

    def test_duplicate_date_rejected(self, shed, worker, other_worker):
        submit_daily_entry(worker, shed, '2024-03-01', '5.10')

        with pytest.raises(DuplicateEntryError) as exc_info:
            submit_daily_entry(other_worker, shed, '2024-03-01', '2')

        assert exc_info.value.errors == {
            'entry_date': ['An entry for this shed and date already exists']
        }
        assert DailyEntry.objects.filter(shed=shed, entry_date=date(2024, 3, 1)).count() == 1
        assert store.find_entry(shed.id, date(2024, 3, 1)).worker_id == worker.id

    def test_same_date_allowed_on_different_sheds(self, shed, brown_shed, worker):
        submit_daily_entry(worker, shed, '2024-03-01', '1')
        submit_daily_entry(worker, brown_shed, '2024-03-01', '1')

        assert DailyEntry.objects.filter(entry_date=date(2024, 3, 1)).count() == 2

    def test_invalid_input_stores_nothing(self, shed, worker):
        with pytest.raises(EntryValidationError) as exc_info:
            submit_daily_entry(worker, shed, '2024-03-01', '-1', notes='x' * 1001)

        assert set(exc_info.value.errors) == {'production_crates', 'notes'}
        assert DailyEntry.objects.count() == 0

    def test_invalid_date_rejected(self, shed, worker):
        with pytest.raises(EntryValidationError) as exc_info:
            submit_daily_entry(worker, shed, '2024-02-30', '1')

        assert exc_info.value.errors == {'entry_date': ['Invalid date format']}


    def test_zero_baseline_rejects_production(self, worker):
        empty_shed = Shed.objects.create(name='Shed Z', variant=Shed.Variant.WHITE, number_of_birds=0)

        with pytest.raises(EntryValidationError) as exc_info:
            submit_daily_entry(worker, empty_shed, '2024-03-01', '1')

        assert exc_info.value.errors == {
            'total_birds': ['Production + Non-production birds cannot exceed total birds']
        }
        assert DailyEntry.objects.count() == 0

    def test_zero_baseline_accepts_zero_crates(self, worker):
        empty_shed = Shed.objects.create(name='Shed Z', variant=Shed.Variant.WHITE, number_of_birds=0)

        entry = submit_daily_entry(worker, empty_shed, '2024-03-01', '0')

        assert entry.total_birds == 0
        assert entry.production_birds == 0
        assert entry.non_production == 0


class TestPreviewBirdCounts:

    def test_preview_matches_submission(self, shed, worker, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 1), mortality=4)

        counts = preview_bird_counts(shed, '2024-03-02', '5.10')
        entry = submit_daily_entry(worker, shed, '2024-03-02', '5.10')

        assert counts.as_dict() == {
            'production_birds': entry.production_birds,
            'non_production': entry.non_production,
            'total_birds': entry.total_birds,
        }

    def test_preview_saves_nothing(self, shed):
        preview_bird_counts(shed, '2024-03-01', '2')

        assert DailyEntry.objects.count() == 0

    def test_preview_rejects_bad_crates(self, shed):
        with pytest.raises(EntryValidationError):
            preview_bird_counts(shed, '2024-03-01', 'abc')
