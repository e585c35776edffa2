from django.apps import AppConfig


class ShedsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sheds"
    verbose_name = "Sheds"
