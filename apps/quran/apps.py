from django.apps import AppConfig


class QuranConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.quran"
    verbose_name = "Quran reference"

    def ready(self):
        from . import signals  # noqa: F401
