from django.apps import AppConfig


class ShippingAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.shipping"
    verbose_name = "Envíos"

    def ready(self):
        """Registra las señales de tarifas en lote"""
        import apps.shipping.signals  # noqa: F401
