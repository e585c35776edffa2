"""
API tests for the shed registry and worker assignments.

Run with: pytest tests/integration/test_shed_api.py -v
"""

from datetime import date

import pytest
from django.urls import reverse
from rest_framework import status

from sheds.models import Shed, WorkerAssignment
from sheds.services import assign_worker, assigned_sheds, can_submit_for_shed, unassign_worker

pytestmark = pytest.mark.django_db


class TestShedAPI:

    def test_admin_creates_shed(self, api_client, farm_admin):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(reverse('sheds:sheds'), {
            'name': 'Shed C',
            'variant': 'W',
            'capacity': 1000,
            'number_of_birds': 950,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['created_by'] == farm_admin.id
        assert Shed.objects.filter(name='Shed C').exists()

    def test_birds_cannot_exceed_capacity(self, api_client, farm_admin):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(reverse('sheds:sheds'), {
            'name': 'Shed C',
            'variant': 'W',
            'capacity': 100,
            'number_of_birds': 150,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'number_of_birds' in response.data['errors']

    def test_worker_cannot_create_shed(self, api_client, worker):
        api_client.force_authenticate(user=worker)

        response = api_client.post(reverse('sheds:sheds'), {'name': 'Shed C', 'variant': 'W'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_filters_by_variant(self, api_client, worker, shed, brown_shed):
        api_client.force_authenticate(user=worker)

        response = api_client.get(reverse('sheds:sheds'), {'variant': 'B'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['name'] for row in response.data['results']] == ['Shed B']

    def test_shed_with_entries_cannot_be_deleted(self, api_client, farm_admin, shed, make_entry):
        make_entry(shed, entry_date=date(2024, 3, 1))
        api_client.force_authenticate(user=farm_admin)

        response = api_client.delete(reverse('sheds:shed-detail', args=[shed.id]))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert Shed.objects.filter(id=shed.id).exists()


class TestWorkerAssignments:

    def test_assign_and_unassign(self, shed, worker, farm_admin):
        assign_worker(shed, worker, assigned_by=farm_admin)

        assert can_submit_for_shed(worker, shed)
        assert list(assigned_sheds(worker)) == [shed]

        assert unassign_worker(shed, worker) == 1
        assert not can_submit_for_shed(worker, shed)

    def test_reassign_reactivates(self, shed, worker, farm_admin):
        assign_worker(shed, worker, assigned_by=farm_admin)
        unassign_worker(shed, worker)
        assign_worker(shed, worker, assigned_by=farm_admin)

        assert WorkerAssignment.objects.filter(shed=shed, worker=worker).count() == 1
        assert can_submit_for_shed(worker, shed)

    def test_admin_can_submit_anywhere(self, shed, farm_admin):
        assert can_submit_for_shed(farm_admin, shed)

    def test_assign_endpoint_rejects_admins(self, api_client, farm_admin, shed):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('sheds:shed-workers', args=[shed.id]), {'worker_id': str(farm_admin.id)}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_assign_endpoint(self, api_client, farm_admin, worker, shed):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('sheds:shed-workers', args=[shed.id]), {'worker_id': str(worker.id)}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert can_submit_for_shed(worker, shed)

    def test_assign_endpoint_rejects_malformed_worker_id(self, api_client, farm_admin, shed):
        api_client.force_authenticate(user=farm_admin)

        response = api_client.post(
            reverse('sheds:shed-workers', args=[shed.id]), {'worker_id': 'bad'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestShedListFilters:

    def test_active_filter(self, api_client, worker, shed, brown_shed):
        brown_shed.is_active = False
        brown_shed.save()
        api_client.force_authenticate(user=worker)

        active = api_client.get(reverse('sheds:sheds'), {'active': 'true'})
        inactive = api_client.get(reverse('sheds:sheds'), {'active': 'false'})

        assert [row['name'] for row in active.data['results']] == ['Shed A']
        assert [row['name'] for row in inactive.data['results']] == ['Shed B']

    def test_active_all_returns_every_shed(self, api_client, farm_admin, shed, brown_shed):
        brown_shed.is_active = False
        brown_shed.save()
        api_client.force_authenticate(user=farm_admin)

        response = api_client.get(reverse('sheds:sheds'), {'active': 'all'})

        assert [row['name'] for row in response.data['results']] == ['Shed A', 'Shed B']

    def test_assigned_sheds_respect_variant(self, api_client, worker, shed, brown_shed, farm_admin):
        assign_worker(shed, worker, assigned_by=farm_admin)
        assign_worker(brown_shed, worker, assigned_by=farm_admin)
        api_client.force_authenticate(user=worker)

        response = api_client.get(reverse('sheds:sheds'), {'assigned': 'true', 'variant': 'B'})

        assert [row['name'] for row in response.data['results']] == ['Shed B']
