from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    CustomTokenObtainPairView,
    UserProfileView,
    UserRoleView,
    WorkerListView,
    WorkerStatisticsView,
)

app_name = 'accounts'

urlpatterns = [
    path('login/', CustomTokenObtainPairView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('profile/', UserProfileView.as_view(), name='profile'),
    path('workers/', WorkerListView.as_view(), name='workers'),
    path('workers/statistics/', WorkerStatisticsView.as_view(), name='worker-statistics'),
    path('users/<uuid:user_id>/role/', UserRoleView.as_view(), name='user-role'),
]
