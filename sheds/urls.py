"""
Shed Registry URLs
"""
from django.urls import path
from .views import ShedStatisticsView, ShedView, ShedWorkersView

app_name = 'sheds'

urlpatterns = [
    path('', ShedView.as_view(), name='sheds'),
    path('statistics/', ShedStatisticsView.as_view(), name='shed-statistics'),
    path('<uuid:shed_id>/', ShedView.as_view(), name='shed-detail'),
    path('<uuid:shed_id>/workers/', ShedWorkersView.as_view(), name='shed-workers'),
    path('<uuid:shed_id>/workers/<uuid:worker_id>/', ShedWorkersView.as_view(), name='shed-worker-detail'),
]
