from django.apps import AppConfig


class DailyEntriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "daily_entries"
    verbose_name = "Daily Entries"
