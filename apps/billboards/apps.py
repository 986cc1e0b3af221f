from django.apps import AppConfig


class BillboardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.billboards"
    label = "billboards"
    verbose_name = "Billboards"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .handlers import register_handlers

        register_handlers(message_bus)
