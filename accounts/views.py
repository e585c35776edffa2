import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from daily_entries.services.statistics import worker_statistics
from .permissions import IsFarmAdmin
from .serializers import CustomTokenObtainPairSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    JWT token obtain view with additional user information.
    """
    serializer_class = CustomTokenObtainPairSerializer


class UserProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for retrieving and updating the current user's profile.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user


class WorkerListView(APIView):
    """
    GET /api/auth/workers/

    Workers ordered by name, for the shed assignment screens.
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        workers = User.objects.filter(role=User.UserRole.WORKER).order_by('full_name', 'username')
        data = UserSerializer(workers, many=True).data
        return Response({'results': data, 'count': len(data)})


class WorkerStatisticsView(APIView):
    """
    GET /api/auth/workers/statistics/
    """
    permission_classes = [IsFarmAdmin]

    def get(self, request):
        data = worker_statistics()
        return Response({'results': data, 'count': len(data)})


class UserRoleView(APIView):
    """
    PATCH /api/auth/users/{id}/role/     {"role": "ADMIN" | "WORKER"}
    """
    permission_classes = [IsFarmAdmin]

    def patch(self, request, user_id):
        user = get_object_or_404(User, id=user_id)

        role = str(request.data.get('role') or '').upper()
        if role not in User.UserRole.values:
            return Response(
                {'errors': {'role': ['Role must be ADMIN or WORKER']}},
                status=status.HTTP_400_BAD_REQUEST
            )
        if user.pk == request.user.pk and role != User.UserRole.ADMIN:
            return Response(
                {'errors': {'role': ['You cannot remove your own administrator role']}},
                status=status.HTTP_400_BAD_REQUEST
            )

        previous = user.role
        user.role = role
        user.save(update_fields=['role'])
        logger.info(f"User {user.id} role changed from {previous} to {role} by {request.user.id}")

        return Response(UserSerializer(user).data)
