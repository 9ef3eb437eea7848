from django.apps import AppConfig


class EventEngineConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "event_engine"
    verbose_name = "Event engine"
