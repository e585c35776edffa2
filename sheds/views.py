"""
Shed Registry API Views

CRUD for sheds and worker-to-shed assignments. Reads are open to any
authenticated user; writes are administrator-only.
"""

import uuid

from django.contrib.auth import get_user_model
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsFarmAdmin, IsFarmAdminOrReadOnly
from daily_entries.services.statistics import shed_statistics
from .models import Shed
from .serializers import ShedSerializer, WorkerAssignmentSerializer
from . import services

User = get_user_model()


class ShedView(APIView):
    """
    GET /api/sheds/
    POST /api/sheds/
    GET /api/sheds/{id}/
    PUT /api/sheds/{id}/
    DELETE /api/sheds/{id}/
    """
    permission_classes = [IsFarmAdminOrReadOnly]

    def get(self, request, shed_id=None):
        if shed_id:
            shed = get_object_or_404(Shed, id=shed_id)
            return Response(ShedSerializer(shed).data)

        variant = request.query_params.get('variant')
        active = self._active_flag(request.query_params.get('active'))

        # Workers only see the sheds they are assigned to
        if request.query_params.get('assigned') and not request.user.is_farm_admin:
            sheds = services.assigned_sheds(request.user)
        elif active:
            sheds = services.active_sheds()
        else:
            sheds = Shed.objects.select_related('created_by').order_by('name')
            if active is False:
                sheds = sheds.filter(is_active=False)

        if variant:
            sheds = sheds.filter(variant=variant)

        data = ShedSerializer(sheds, many=True).data
        return Response({'results': data, 'count': len(data)})

    @staticmethod
    def _active_flag(value):
        """True, False, or None when absent or 'all'."""
        if value is None:
            return None
        value = value.lower()
        if value in {'true', '1', 'yes'}:
            return True
        if value in {'false', '0', 'no'}:
            return False
        return None

    def post(self, request):
        serializer = ShedSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)
        shed = serializer.save(created_by=request.user)
        return Response(ShedSerializer(shed).data, status=status.HTTP_201_CREATED)

    def put(self, request, shed_id=None):
        shed = get_object_or_404(Shed, id=shed_id)
        serializer = ShedSerializer(shed, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response({'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)
        shed = serializer.save()
        return Response(ShedSerializer(shed).data)

    def delete(self, request, shed_id=None):
        shed = get_object_or_404(Shed, id=shed_id)
        try:
            shed.delete()
        except ProtectedError:
            return Response(
                {'error': 'Shed has daily entries and cannot be deleted. Deactivate it instead.'},
                status=status.HTTP_409_CONFLICT
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class ShedWorkersView(APIView):
    """
    GET /api/sheds/{id}/workers/
    POST /api/sheds/{id}/workers/          {"worker_id": "..."}
    DELETE /api/sheds/{id}/workers/{worker_id}/
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request, shed_id):
        shed = get_object_or_404(Shed, id=shed_id)
        assignments = shed.worker_assignments.filter(is_active=True).select_related('worker', 'shed')
        data = WorkerAssignmentSerializer(assignments, many=True).data
        return Response({'results': data, 'count': len(data)})

    def post(self, request, shed_id):
        shed = get_object_or_404(Shed, id=shed_id)
        worker_id = request.data.get('worker_id') or request.data.get('worker')
        if not worker_id:
            return Response({'error': 'worker_id is required'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            uuid.UUID(str(worker_id))
        except ValueError:
            return Response({'errors': {'worker_id': ['Invalid id']}}, status=status.HTTP_400_BAD_REQUEST)

        worker = get_object_or_404(User, id=worker_id)
        if not worker.is_farm_worker:
            return Response(
                {'errors': {'worker_id': ['Only workers can be assigned to sheds']}},
                status=status.HTTP_400_BAD_REQUEST
            )

        assignment = services.assign_worker(shed, worker, assigned_by=request.user)
        return Response(WorkerAssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)

    def delete(self, request, shed_id, worker_id):
        shed = get_object_or_404(Shed, id=shed_id)
        worker = get_object_or_404(User, id=worker_id)
        if not services.unassign_worker(shed, worker):
            return Response({'error': 'Assignment not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ShedStatisticsView(APIView):
    """
    GET /api/sheds/statistics/

    Current-month production, mortality and assigned worker count per shed.
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        data = shed_statistics()
        for row in data:
            row['month_production_crates'] = float(row['month_production_crates'])
        return Response({'results': data, 'count': len(data)})
