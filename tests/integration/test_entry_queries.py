"""
Tests for the daily entry store queries.

Run with: pytest tests/integration/test_entry_queries.py -v
"""

from datetime import date

import pytest

from daily_entries.exceptions import EntryNotFound
from daily_entries.services import store

pytestmark = pytest.mark.django_db


@pytest.fixture
def entries(shed, brown_shed, make_entry, other_worker):
    return [
        make_entry(shed, entry_date=date(2024, 2, 28)),
        make_entry(shed, entry_date=date(2024, 3, 2)),
        make_entry(shed, entry_date=date(2024, 3, 1), entry_worker=other_worker),
        make_entry(brown_shed, entry_date=date(2024, 3, 1), total_birds=500, non_production=347),
    ]


class TestEntryQueries:

    def test_find_latest_entry_by_entry_date(self, shed, entries):
        assert store.find_latest_entry(shed.id).entry_date == date(2024, 3, 2)
        assert store.find_latest_entry(shed.id, before=date(2024, 3, 2)).entry_date == date(2024, 3, 1)
        assert store.find_latest_entry(shed.id, before=date(2024, 2, 28)) is None

    def test_list_entries_newest_first(self, shed, entries):
        dates = [e.entry_date for e in store.list_entries(shed_id=shed.id)]

        assert dates == [date(2024, 3, 2), date(2024, 3, 1), date(2024, 2, 28)]

    def test_list_entries_by_worker(self, other_worker, entries):
        assert [e.id for e in store.list_entries(worker_id=other_worker.id)] == [entries[2].id]

    def test_entries_for_month_oldest_first(self, shed, entries):
        month = store.entries_for_month(date(2024, 3, 1), shed_id=shed.id)

        assert [e.entry_date for e in month] == [date(2024, 3, 1), date(2024, 3, 2)]
        assert len(store.entries_for_month(date(2024, 3, 1))) == 3

    def test_entry_exists(self, shed, entries):
        assert store.entry_exists(shed.id, date(2024, 3, 1))
        assert not store.entry_exists(shed.id, date(2024, 3, 3))

    def test_get_entry_with_malformed_id(self):
        with pytest.raises(EntryNotFound):
            store.get_entry('not-a-uuid')
