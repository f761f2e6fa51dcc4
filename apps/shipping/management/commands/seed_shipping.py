from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.shipping.models import CarrierZoneRate, ShippingCarrier, ShippingSettings, ShippingZone

ZONES = [
    ("Bogota y alrededores", ["Bogota", "Chia", "Cota", "Soacha", "Zipaquira", "Funza", "Mosquera"]),
    ("Principales ciudades", ["Medellin", "Cali", "Barranquilla", "Cartagena", "Bucaramanga", "Pereira", "Manizales"]),
    ("Resto del pais", []),
]

# (nombre, código, url de rastreo, factor, activa, tarifas por zona en el orden de ZONES)
# tarifa: (base, por kg, envío gratis desde, días min, días max, peso máx)
CARRIERS = [
    ("Servientrega", "SERVI", "https://www.servientrega.com/wps/portal/rastreo-envio?guia={tracking}", 5000, True, [
        (8000, 1500, 150000, 1, 2, 30),
        (12000, 2000, 200000, 2, 4, 25),
        (18000, 2500, None, 4, 7, None),
    ]),
    ("Coordinadora", "COORD", "https://www.coordinadora.com/rastreo/?guia={tracking}", 5000, True, [
        (9000, 1800, 180000, 1, 2, 25),
        (14000, 2200, 220000, 2, 3, 20),
        (20000, 2800, None, 3, 5, None),
    ]),
    ("Interrapidisimo", "INTER", "https://www.interrapidisimo.com/rastreo/?guia={tracking}", 6000, False, [
        (7500, 1400, None, 1, 3, None),
        (11000, 1900, None, 3, 5, None),
        (16000, 2400, None, 5, 8, None),
    ]),
]


def _dec(v):
    return None if v is None else Decimal(str(v))


class Command(BaseCommand):
    help = "Carga la configuración de envíos por defecto (zonas, transportadoras y tarifas)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Borra zonas y transportadoras existentes antes de cargar",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            ShippingCarrier.objects.all().delete()
            ShippingZone.objects.all().delete()
            self.stdout.write("Configuración de envíos anterior eliminada.")

        zones = []
        for position, (name, cities) in enumerate(ZONES, start=1):
            zone, _ = ShippingZone.objects.update_or_create(
                name=name,
                defaults={"cities": cities, "position": position, "is_active": True},
            )
            zones.append(zone)

        carriers = []
        for name, code, tracking, factor, active, rates in CARRIERS:
            carrier, _ = ShippingCarrier.objects.update_or_create(
                code=code,
                defaults={
                    "name": name,
                    "tracking_url_template": tracking,
                    "volumetric_factor": factor,
                    "is_active": active,
                },
            )
            carriers.append(carrier)

            # Las señales ya crearon tarifas provisionales; aquí se fijan los valores reales
            for zone, (base, per_kg, free_from, dmin, dmax, max_w) in zip(zones, rates):
                CarrierZoneRate.objects.update_or_create(
                    carrier=carrier,
                    zone=zone,
                    defaults={
                        "base_cost": _dec(base),
                        "cost_per_kg": _dec(per_kg),
                        "free_shipping_threshold": _dec(free_from),
                        "min_days": dmin,
                        "max_days": dmax,
                        "max_weight": _dec(max_w),
                    },
                )

        shop = ShippingSettings.load()
        shop.default_carrier = carriers[0]
        shop.handling_time = 2
        shop.default_length = Decimal("30")
        shop.default_width = Decimal("25")
        shop.default_height = Decimal("5")
        shop.default_weight_per_item = Decimal("0.25")
        shop.volumetric_divisor = 5000
        if not shop.company_name:
            shop.company_name = "Confecciones Ismael"
        shop.save()

        self.stdout.write(self.style.SUCCESS(
            f"Envíos listos: {len(zones)} zonas, {len(carriers)} transportadoras."
        ))
