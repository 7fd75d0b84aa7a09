from django.apps import AppConfig


class TenantEventsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "tenant_events"
    verbose_name = "Tenant events"
