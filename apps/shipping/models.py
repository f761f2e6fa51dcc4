from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


def _clean_cities(cities):
    # Quita espacios y repetidos, respetando el orden
    if isinstance(cities, str):
        cities = cities.split(",")
    seen = []
    for city in cities or []:
        city = (str(city) if city is not None else "").strip()
        if city and city not in seen:
            seen.append(city)
    return seen


# ==========================================
# 1. ZONA DE ENVÍO
# ==========================================
class ShippingZone(models.Model):
    name = models.CharField("Nombre", max_length=80, unique=True)
    cities = models.JSONField(
        "Ciudades",
        default=list,
        blank=True,
        help_text="Si se deja vacío, la zona aplica a cualquier ciudad no listada en otras zonas.",
    )
    position = models.PositiveIntegerField("Orden", default=0)
    is_active = models.BooleanField("Activa", default=True)
    created_at = models.DateTimeField("Creado", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado", auto_now=True)

    class Meta:
        verbose_name = "Zona de envío"
        verbose_name_plural = "Zonas de envío"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        status = "Activa" if self.is_active else "Inactiva"
        if self.is_fallback:
            return f"{self.name} (resto del país) - {status}"
        return f"{self.name} ({len(self.cities)} ciudades) - {status}"

    @property
    def is_fallback(self) -> bool:
        return not self.cities

    def clean(self):
        self.cities = _clean_cities(self.cities)
        if not self.is_active:
            return

        others = ShippingZone.objects.filter(is_active=True).exclude(pk=self.pk)

        if self.is_fallback:
            if any(not z.cities for z in others):
                raise ValidationError({
                    "cities": "Ya existe una zona activa para el resto del país (sin ciudades)."
                })
            return

        repeated = []
        for zone in others:
            for city in self.cities:
                if city in (zone.cities or []):
                    repeated.append(f"{city} ({zone.name})")
        if repeated:
            raise ValidationError({
                "cities": "Estas ciudades ya pertenecen a otra zona activa: " + ", ".join(repeated)
            })

    def save(self, *args, **kwargs):
        self.cities = _clean_cities(self.cities)
        super().save(*args, **kwargs)


# ==========================================
# 2. TRANSPORTADORA
# ==========================================
class ShippingCarrier(models.Model):
    name = models.CharField("Nombre", max_length=80)
    code = models.CharField("Código", max_length=20, unique=True)
    tracking_url_template = models.CharField(
        "URL de rastreo",
        max_length=255,
        blank=True,
        help_text="Use {tracking} donde va el número de guía.",
    )
    volumetric_factor = models.PositiveIntegerField(
        "Factor volumétrico",
        default=5000,
        help_text="Peso volumétrico = (Largo x Ancho x Alto) / Factor. Aéreo usa 5000, terrestre 6000.",
    )
    is_active = models.BooleanField("Activa", default=True)

    class Meta:
        verbose_name = "Transportadora"
        verbose_name_plural = "Transportadoras"
        ordering = ["name"]

    def __str__(self) -> str:
        status = "Activa" if self.is_active else "Inactiva"
        return f"{self.name} [{self.code}] - {status}"

    def tracking_url(self, tracking_number):
        if not self.tracking_url_template or not tracking_number:
            return ""
        return self.tracking_url_template.replace("{tracking}", tracking_number)


# ==========================================
# 3. TARIFA POR ZONA
# ==========================================
class CarrierZoneRate(models.Model):
    carrier = models.ForeignKey(
        ShippingCarrier,
        verbose_name="Transportadora",
        on_delete=models.CASCADE,
        related_name="zone_rates",
    )
    # Borrar una zona borra sus tarifas en todas las transportadoras
    zone = models.ForeignKey(
        ShippingZone,
        verbose_name="Zona",
        on_delete=models.CASCADE,
        related_name="carrier_rates",
    )
    base_cost = models.DecimalField("Costo base", max_digits=12, decimal_places=2)
    cost_per_kg = models.DecimalField("Costo por kg", max_digits=12, decimal_places=2, default=0)
    free_shipping_threshold = models.DecimalField(
        "Envío gratis desde",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Subtotal a partir del cual el envío es gratis. Vacío = nunca.",
    )
    min_days = models.PositiveSmallIntegerField("Días mínimos", default=1)
    max_days = models.PositiveSmallIntegerField("Días máximos", default=3)
    max_weight = models.DecimalField(
        "Peso máximo (kg)", max_digits=8, decimal_places=2, null=True, blank=True
    )

    class Meta:
        verbose_name = "Tarifa por zona"
        verbose_name_plural = "Tarifas por zona"
        ordering = ["carrier", "zone__position", "zone_id"]
        constraints = [
            models.UniqueConstraint(fields=["carrier", "zone"], name="unique_rate_per_carrier_zone")
        ]

    def __str__(self) -> str:
        return f"{self.carrier.name} → {self.zone.name}: ${self.base_cost} + ${self.cost_per_kg}/kg"

    def clean(self):
        if self.min_days is not None and self.max_days is not None and self.min_days > self.max_days:
            raise ValidationError({"max_days": "Los días máximos no pueden ser menores que los mínimos."})


# ==========================================
# 4. AJUSTES GENERALES DE ENVÍO (una sola fila)
# ==========================================
class ShippingSettings(models.Model):
    default_carrier = models.ForeignKey(
        ShippingCarrier,
        verbose_name="Transportadora predeterminada",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    handling_time = models.PositiveSmallIntegerField(
        "Tiempo de alistamiento (días)", default=2
    )

    # Paquete estándar (camiseta doblada)
    default_length = models.DecimalField("Largo (cm)", max_digits=6, decimal_places=2, default=Decimal("30"))
    default_width = models.DecimalField("Ancho (cm)", max_digits=6, decimal_places=2, default=Decimal("25"))
    default_height = models.DecimalField("Alto (cm)", max_digits=6, decimal_places=2, default=Decimal("5"))
    default_weight_per_item = models.DecimalField(
        "Peso por producto (kg)", max_digits=6, decimal_places=3, default=Decimal("0.25")
    )
    volumetric_divisor = models.PositiveIntegerField("Factor volumétrico", default=5000)

    # Remitente (para guías)
    company_name = models.CharField("Empresa", max_length=120, blank=True)
    contact_name = models.CharField("Contacto", max_length=120, blank=True)
    phone = models.CharField("Teléfono", max_length=30, blank=True)
    address = models.CharField("Dirección", max_length=220, blank=True)
    city = models.CharField("Ciudad", max_length=80, blank=True)
    state = models.CharField("Departamento", max_length=80, blank=True)
    postal_code = models.CharField("Código postal", max_length=20, blank=True)
    country = models.CharField("País", max_length=60, default="Colombia")

    class Meta:
        verbose_name = "Ajustes de envío"
        verbose_name_plural = "Ajustes de envío"

    def __str__(self) -> str:
        return "Ajustes de envío"

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj
