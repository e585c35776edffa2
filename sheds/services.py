"""
Shed Registry Services

Lookups used by the daily entry core (baseline bird count per shed) and the
worker-to-shed assignment rules.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .exceptions import ShedNotFound
from .models import Shed, WorkerAssignment

logger = logging.getLogger(__name__)


def get_shed(shed_id):
    """
    Return the Shed with the given id.

    Raises:
        ShedNotFound: if no shed matches (including malformed ids)
    """
    try:
        return Shed.objects.get(id=shed_id)
    except (Shed.DoesNotExist, ValidationError, ValueError):
        raise ShedNotFound(shed_id)


def active_sheds(variant=None):
    qs = Shed.objects.filter(is_active=True)
    if variant:
        qs = qs.filter(variant=variant)
    return qs.order_by('name')


def assigned_sheds(worker):
    """Active sheds the worker is actively assigned to."""
    return Shed.objects.filter(
        worker_assignments__worker=worker,
        worker_assignments__is_active=True,
        is_active=True,
    ).order_by('name')


def can_submit_for_shed(user, shed):
    """Admins may submit for any shed; workers only for their assigned sheds."""
    if user.is_farm_admin:
        return True
    return WorkerAssignment.objects.filter(
        worker=user, shed=shed, is_active=True
    ).exists()


def assign_worker(shed, worker, assigned_by=None):
    """
    Assign a worker to a shed, reactivating a previous assignment if one exists.
    """
    with transaction.atomic():
        assignment, created = WorkerAssignment.objects.select_for_update().get_or_create(
            worker=worker,
            shed=shed,
            defaults={'assigned_by': assigned_by},
        )
        if not created and not assignment.is_active:
            assignment.is_active = True
            assignment.assigned_by = assigned_by
            assignment.save(update_fields=['is_active', 'assigned_by'])

    logger.info(f"Worker {worker.id} assigned to shed {shed.id} by {getattr(assigned_by, 'id', None)}")
    return assignment


def unassign_worker(shed, worker):
    """
    Deactivate a worker's assignment. Returns the number of assignments changed.
    """
    updated = WorkerAssignment.objects.filter(
        worker=worker, shed=shed, is_active=True
    ).update(is_active=False)
    if updated:
        logger.info(f"Worker {worker.id} removed from shed {shed.id}")
    return updated

