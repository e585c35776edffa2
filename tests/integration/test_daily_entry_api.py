"""
API tests for daily entry endpoints.

Run with: pytest tests/integration/test_daily_entry_api.py -v
"""

import uuid
from datetime import date

import pytest
from django.urls import reverse
from rest_framework import status

from daily_entries.models import DailyEntry

pytestmark = pytest.mark.django_db


def entries_url():
    return reverse('daily_entries:entries')


class TestSubmitEntryAPI:

    def test_worker_submits_for_assigned_shed(self, api_client, assigned_worker, shed):
        api_client.force_authenticate(user=assigned_worker)

        response = api_client.post(entries_url(), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-01',
            'production_crates': '5.10',
            'mortality': 2,
            'notes': 'All good',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['production_birds'] == 153
        assert response.data['total_birds'] == 1000
        assert response.data['non_production'] == 847
        assert response.data['state'] == 'original'
        assert response.data['worker_id'] == str(assigned_worker.id)

    def test_client_bird_counts_are_ignored(self, api_client, assigned_worker, shed):
        api_client.force_authenticate(user=assigned_worker)

        response = api_client.post(entries_url(), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-01',
            'production_crates': '1',
            'total_birds': 5,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_birds'] == 1000

    def test_unassigned_worker_forbidden(self, api_client, worker, shed):
        api_client.force_authenticate(user=worker)

        response = api_client.post(entries_url(), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-01',
            'production_crates': '1',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert DailyEntry.objects.count() == 0

    def test_duplicate_returns_conflict(self, api_client, assigned_worker, shed):
        api_client.force_authenticate(user=assigned_worker)
        payload = {'shed_id': str(shed.id), 'entry_date': '2024-03-01', 'production_crates': '1'}

        first = api_client.post(entries_url(), payload, format='json')
        second = api_client.post(entries_url(), payload, format='json')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT
        assert 'entry_date' in second.data['errors']

    def test_validation_errors(self, api_client, assigned_worker, shed):
        api_client.force_authenticate(user=assigned_worker)

        response = api_client.post(entries_url(), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-01',
            'production_crates': '-1',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors']['production_crates'] == ['Production crates must be 0 or greater']

    def test_missing_shed(self, api_client, assigned_worker):
        api_client.force_authenticate(user=assigned_worker)

        response = api_client.post(entries_url(), {'entry_date': '2024-03-01'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_shed(self, api_client, farm_admin):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(entries_url(), {
            'shed_id': str(uuid.uuid4()),
            'entry_date': '2024-03-01',
            'production_crates': '1',
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_inactive_shed(self, api_client, farm_admin, shed):
        shed.is_active = False
        shed.save()
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(entries_url(), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-01',
            'production_crates': '1',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, api_client, shed):
        response = api_client.post(entries_url(), {'shed_id': str(shed.id)}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestListEntriesAPI:

    def test_worker_sees_only_own_entries(self, api_client, worker, other_worker, shed, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 1))
        make_entry(shed, entry_date=date(2024, 3, 2), entry_worker=other_worker)
        api_client.force_authenticate(user=worker)

        response = api_client.get(entries_url())

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['entry_date'] == '2024-03-01'

    def test_admin_filters_by_date_range(self, api_client, farm_admin, shed, make_entry):
        for day in (1, 2, 3):
            make_entry(shed, entry_date=date(2024, 3, day))
        api_client.force_authenticate(user=farm_admin)

        response = api_client.get(entries_url(), {'start_date': '2024-03-02', 'end_date': '2024-03-03'})

        assert response.data['count'] == 2
        assert [row['entry_date'] for row in response.data['results']] == ['2024-03-03', '2024-03-02']

    def test_bad_date_filter(self, api_client, farm_admin):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.get(entries_url(), {'start_date': '03/01/2024'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_worker_cannot_read_other_workers_entry(self, api_client, worker, other_worker, shed, make_entry):
        entry = make_entry(shed, entry_worker=other_worker)
        api_client.force_authenticate(user=worker)

        response = api_client.get(reverse('daily_entries:entry-detail', args=[entry.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestPreviewAPI:

    def test_preview_reports_counts_and_existing_entry(self, api_client, assigned_worker, shed, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 1), mortality=4)
        api_client.force_authenticate(user=assigned_worker)

        response = api_client.post(reverse('daily_entries:entry-preview'), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-02',
            'production_crates': '5.10',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'production_birds': 153,
            'non_production': 843,
            'total_birds': 996,
            'entry_exists': False,
        }


    def test_unassigned_worker_cannot_preview(self, api_client, worker, shed):
        api_client.force_authenticate(user=worker)

        response = api_client.post(reverse('daily_entries:entry-preview'), {
            'shed_id': str(shed.id),
            'entry_date': '2024-03-02',
            'production_crates': '1',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCorrectionAPI:

    def test_admin_corrects_entry(self, api_client, farm_admin, shed, make_entry):
        entry = make_entry(shed)
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(reverse('daily_entries:entry-correct', args=[entry.id]), {
            'production_crates': 6.0,
            'production_birds': 180,
            'total_birds': 1000,
            'non_production': 820,
            'mortality': 3,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['state'] == 'corrected'
        assert response.data['corrected_by'] == str(farm_admin.id)
        assert response.data['original_values']['production_birds'] == 153

    def test_worker_cannot_correct(self, api_client, worker, shed, make_entry):
        entry = make_entry(shed)
        api_client.force_authenticate(user=worker)

        response = api_client.post(
            reverse('daily_entries:entry-correct', args=[entry.id]), {'mortality': 0}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        entry.refresh_from_db()
        assert entry.original_values is None

    def test_invalid_correction(self, api_client, farm_admin, shed, make_entry):
        entry = make_entry(shed)
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('daily_entries:entry-correct', args=[entry.id]), {'production_birds': 999}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'total_birds' in response.data['errors']

    def test_unknown_entry(self, api_client, farm_admin):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('daily_entries:entry-correct', args=[uuid.uuid4()]), {'mortality': 0}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_partial_correction_keeps_other_fields(self, api_client, farm_admin, shed, make_entry):
        entry = make_entry(shed)
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('daily_entries:entry-correct', args=[entry.id]), {'notes': 'recounted'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['notes'] == 'recounted'
        assert response.data['production_crates'] == 5.1
        assert response.data['production_birds'] == 153
        assert response.data['total_birds'] == 1000
        assert response.data['non_production'] == 847
        assert response.data['mortality'] == 2
        assert response.data['original_values']['notes'] == ''
