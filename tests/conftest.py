"""
Shared fixtures for the shed production test suite.
"""

from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def farm_admin(django_user_model):
    """Create a farm administrator."""
    return django_user_model.objects.create_user(
        username='farm_admin',
        email='admin@example.com',
        password='testpass123',
        role='ADMIN',
        full_name='Ama Mensah',
    )


@pytest.fixture
def worker(django_user_model):
    """Create a shed worker."""
    return django_user_model.objects.create_user(
        username='shed_worker',
        email='worker@example.com',
        password='testpass123',
        role='WORKER',
        full_name='Kofi Boateng',
    )


@pytest.fixture
def other_worker(django_user_model):
    return django_user_model.objects.create_user(
        username='other_worker',
        email='other@example.com',
        password='testpass123',
        role='WORKER',
        full_name='Yaw Owusu',
    )


@pytest.fixture
def shed(farm_admin):
    """Active white-variant shed with a 1000 bird baseline."""
    from sheds.models import Shed
    return Shed.objects.create(
        name='Shed A',
        variant=Shed.Variant.WHITE,
        capacity=1200,
        number_of_birds=1000,
        created_by=farm_admin,
    )


@pytest.fixture
def brown_shed(farm_admin):
    from sheds.models import Shed
    return Shed.objects.create(
        name='Shed B',
        variant=Shed.Variant.BROWN,
        capacity=800,
        number_of_birds=500,
        created_by=farm_admin,
    )


@pytest.fixture
def assigned_worker(worker, shed, farm_admin):
    """Worker assigned to `shed`."""
    from sheds.services import assign_worker
    assign_worker(shed, worker, assigned_by=farm_admin)
    return worker


@pytest.fixture
def make_entry(worker):
    """Factory for stored entries with explicit values."""
    from daily_entries.models import DailyEntry

    def _make_entry(shed, entry_date=date(2024, 3, 1), production_crates=Decimal('5.10'),
                    production_birds=153, total_birds=1000, non_production=847,
                    mortality=2, notes='', entry_worker=None):
        return DailyEntry.objects.create(
            shed=shed,
            worker=entry_worker or worker,
            entry_date=entry_date,
            production_crates=production_crates,
            production_birds=production_birds,
            total_birds=total_birds,
            non_production=non_production,
            mortality=mortality,
            notes=notes,
        )

    return _make_entry
