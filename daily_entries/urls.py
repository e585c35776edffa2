"""
Daily Entry URLs
"""
from django.urls import path
from .views import (
    CorrectedEntriesView,
    DailyEntryDetailView,
    DailyEntryView,
    DashboardStatsView,
    EntryCorrectionView,
    EntryPreviewView,
    ProductionReportView,
    ProductionSummaryView,
)

app_name = 'daily_entries'

urlpatterns = [
    # Fixed routes (must come before detail routes)
    path('preview/', EntryPreviewView.as_view(), name='entry-preview'),
    path('corrected/', CorrectedEntriesView.as_view(), name='corrected-entries'),
    path('summary/', ProductionSummaryView.as_view(), name='production-summary'),
    path('report/', ProductionReportView.as_view(), name='production-report'),
    path('dashboard/', DashboardStatsView.as_view(), name='dashboard-stats'),

    path('', DailyEntryView.as_view(), name='entries'),
    path('<uuid:entry_id>/', DailyEntryDetailView.as_view(), name='entry-detail'),
    path('<uuid:entry_id>/correct/', EntryCorrectionView.as_view(), name='entry-correct'),
]
