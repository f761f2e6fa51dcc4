import logging
from decimal import Decimal

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import CarrierZoneRate, ShippingCarrier, ShippingZone

logger = logging.getLogger(__name__)

# Tarifa provisional al crear una zona nueva (se agrega a todas las transportadoras)
NEW_ZONE_RATE = {
    "base_cost": Decimal("15000"),
    "cost_per_kg": Decimal("2000"),
    "min_days": 3,
    "max_days": 6,
}

# Tarifa inicial de una transportadora nueva para cada zona existente
NEW_CARRIER_RATE = {
    "base_cost": Decimal("10000"),
    "cost_per_kg": Decimal("2000"),
    "min_days": 2,
    "max_days": 5,
}


@receiver(post_save, sender=ShippingZone)
def add_rate_stubs_for_new_zone(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    for carrier in ShippingCarrier.objects.all():
        CarrierZoneRate.objects.get_or_create(carrier=carrier, zone=instance, defaults=NEW_ZONE_RATE)
    logger.info("Zona %s creada: tarifas por defecto agregadas a las transportadoras", instance.pk)


@receiver(post_save, sender=ShippingCarrier)
def add_initial_rates_for_new_carrier(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    for zone in ShippingZone.objects.all():
        CarrierZoneRate.objects.get_or_create(carrier=instance, zone=zone, defaults=NEW_CARRIER_RATE)
    logger.info("Transportadora %s creada: tarifas iniciales para todas las zonas", instance.pk)
