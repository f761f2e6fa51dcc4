"""
Foto inmutable de la configuración de envíos.

El cálculo de costos nunca lee la base de datos ni un estado global: recibe un
ShippingConfig ya resuelto (con todos los valores por defecto aplicados una sola vez).
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings

DEFAULT_VOLUMETRIC_DIVISOR = 5000
DEFAULT_CURRENCY_DECIMALS = 2


@dataclass(frozen=True)
class DeliveryWindow:
    min: int
    max: int

    def shifted(self, days: int) -> "DeliveryWindow":
        return DeliveryWindow(self.min + days, self.max + days)

    def as_dict(self):
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class Zone:
    id: object
    name: str
    cities: frozenset = frozenset()
    is_active: bool = True

    @property
    def is_fallback(self) -> bool:
        return not self.cities


@dataclass(frozen=True)
class ZoneRate:
    zone_id: object
    base_cost: Decimal
    cost_per_kg: Decimal
    estimated_days: DeliveryWindow
    free_shipping_threshold: Optional[Decimal] = None
    max_weight: Optional[float] = None


@dataclass(frozen=True)
class Carrier:
    id: object
    name: str
    code: str
    volumetric_factor: int = DEFAULT_VOLUMETRIC_DIVISOR
    rates: Tuple[ZoneRate, ...] = ()
    is_active: bool = True
    tracking_url_template: str = ""

    def rate_for(self, zone_id) -> Optional[ZoneRate]:
        for rate in self.rates:
            if rate.zone_id == zone_id:
                return rate
        return None

    def tracking_url(self, tracking_number: str) -> str:
        if not self.tracking_url_template or not tracking_number:
            return ""
        return self.tracking_url_template.replace("{tracking}", tracking_number)


@dataclass(frozen=True)
class PackageDefaults:
    length: float = 30.0
    width: float = 25.0
    height: float = 5.0
    weight_per_item: float = 0.25
    volumetric_divisor: int = DEFAULT_VOLUMETRIC_DIVISOR


@dataclass(frozen=True)
class Package:
    """Paquete explícito (reemplaza las medidas por defecto)."""
    length: float
    width: float
    height: float
    weight: Optional[float] = None

    def __post_init__(self):
        for name in ("length", "width", "height", "weight"):
            value = getattr(self, name)
            if value is None and name == "weight":
                continue
            if not math.isfinite(float(value)) or float(value) < 0:
                raise ValueError(f"Medida inválida del paquete ({name}): {value}")


@dataclass(frozen=True)
class ShippingOrigin:
    company_name: str = ""
    contact_name: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = "Colombia"


@dataclass(frozen=True)
class ShippingConfig:
    zones: Tuple[Zone, ...] = ()
    carriers: Tuple[Carrier, ...] = ()
    default_carrier_id: object = None
    handling_time: int = 0
    package_defaults: PackageDefaults = field(default_factory=PackageDefaults)
    origin: ShippingOrigin = field(default_factory=ShippingOrigin)
    currency_decimals: int = DEFAULT_CURRENCY_DECIMALS

    def carrier(self, carrier_id) -> Optional[Carrier]:
        for carrier in self.carriers:
            if carrier.id == carrier_id:
                return carrier
        return None

    @property
    def active_zones(self):
        return tuple(z for z in self.zones if z.is_active)

    @property
    def active_carriers(self):
        return tuple(c for c in self.carriers if c.is_active)


# ==========================================
# Carga desde la base de datos
# ==========================================
def _optional_decimal(value):
    return None if value is None else Decimal(str(value))


def _optional_float(value):
    return None if value is None else float(value)


def _rate_from_model(rate):
    return ZoneRate(
        zone_id=rate.zone_id,
        base_cost=Decimal(str(rate.base_cost)),
        cost_per_kg=Decimal(str(rate.cost_per_kg)),
        estimated_days=DeliveryWindow(rate.min_days, rate.max_days),
        free_shipping_threshold=_optional_decimal(rate.free_shipping_threshold),
        max_weight=_optional_float(rate.max_weight),
    )


def load_config() -> ShippingConfig:
    """
    Lee zonas, transportadoras, tarifas y ajustes de la tienda en una sola pasada.
    Los valores faltantes se resuelven aquí (divisor volumétrico, decimales de moneda).
    """
    from .models import ShippingCarrier, ShippingSettings, ShippingZone

    shop = ShippingSettings.load()
    divisor = shop.volumetric_divisor or DEFAULT_VOLUMETRIC_DIVISOR

    zones = tuple(
        Zone(
            id=z.pk,
            name=z.name,
            cities=frozenset(c.strip() for c in (z.cities or []) if c and c.strip()),
            is_active=z.is_active,
        )
        for z in ShippingZone.objects.order_by("position", "id")
    )

    carriers = tuple(
        Carrier(
            id=c.pk,
            name=c.name,
            code=c.code,
            volumetric_factor=c.volumetric_factor or divisor,
            rates=tuple(_rate_from_model(r) for r in c.zone_rates.all()),
            is_active=c.is_active,
            tracking_url_template=c.tracking_url_template or "",
        )
        for c in ShippingCarrier.objects.prefetch_related("zone_rates").order_by("id")
    )

    return ShippingConfig(
        zones=zones,
        carriers=carriers,
        default_carrier_id=shop.default_carrier_id,
        handling_time=shop.handling_time,
        package_defaults=PackageDefaults(
            length=float(shop.default_length),
            width=float(shop.default_width),
            height=float(shop.default_height),
            weight_per_item=float(shop.default_weight_per_item),
            volumetric_divisor=divisor,
        ),
        origin=ShippingOrigin(
            company_name=shop.company_name,
            contact_name=shop.contact_name,
            phone=shop.phone,
            address=shop.address,
            city=shop.city,
            state=shop.state,
            postal_code=shop.postal_code,
            country=shop.country,
        ),
        currency_decimals=int(
            getattr(settings, "SHIPPING_CURRENCY_DECIMALS", DEFAULT_CURRENCY_DECIMALS)
        ),
    )
