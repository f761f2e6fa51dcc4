import logging
import math
import numbers
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .errors import (
    CarrierInactive,
    CarrierNotFound,
    NoZoneConfigured,
    RateNotConfigured,
    WeightExceedsLimit,
)
from .snapshot import DeliveryWindow, Package, PackageDefaults, ShippingConfig, ZoneRate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShippingCost:
    cost: Decimal
    estimated_days: DeliveryWindow


@dataclass(frozen=True)
class Quote:
    zone_id: object
    carrier_id: object
    cost: Decimal
    estimated_days: DeliveryWindow
    billable_weight: float

    @property
    def is_free(self) -> bool:
        return self.cost == 0

    def delivery_days(self, handling_time: int = 0) -> DeliveryWindow:
        """Ventana de entrega sumando el tiempo de alistamiento de la tienda."""
        return self.estimated_days.shifted(handling_time)

    def as_dict(self):
        return {
            "zone_id": self.zone_id,
            "carrier_id": self.carrier_id,
            "cost": str(self.cost),
            "estimated_days": self.estimated_days.as_dict(),
            "billable_weight": self.billable_weight,
        }


# ==========================================
# 1. ZONAS
# ==========================================
def resolve_zone(config: ShippingConfig, city: str):
    """
    Ciudad destino -> id de zona.
    Primera zona activa que liste la ciudad (coincidencia exacta); si ninguna,
    la zona activa sin ciudades ("resto del país").
    """
    city = (city or "").strip()
    fallback = None

    for zone in config.active_zones:
        if city and city in zone.cities:
            return zone.id
        if zone.is_fallback and fallback is None:
            fallback = zone

    if fallback is None:
        raise NoZoneConfigured(city)
    return fallback.id


# ==========================================
# 2. TRANSPORTADORAS Y TARIFAS
# ==========================================
def get_carrier(config: ShippingConfig, carrier_id=None):
    if carrier_id is None:
        carrier_id = config.default_carrier_id
        if carrier_id is None:
            raise CarrierNotFound()

    carrier = config.carrier(carrier_id)
    if carrier is None:
        raise CarrierNotFound(carrier_id)
    if not carrier.is_active:
        raise CarrierInactive(carrier.id, carrier.name)
    return carrier


def get_rate(config: ShippingConfig, carrier_id, zone_id) -> ZoneRate:
    carrier = get_carrier(config, carrier_id)
    rate = carrier.rate_for(zone_id)
    if rate is None:
        raise RateNotConfigured(carrier.id, zone_id)
    return rate


# ==========================================
# 3. PESO FACTURABLE
# ==========================================
def volumetric_weight(length, width, height, divisor) -> float:
    if not divisor:
        return 0.0
    return (float(length) * float(width) * float(height)) / float(divisor)


def _finite(value, what) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{what} inválido: {value}")
    return value


def _item_quantity(item) -> int:
    qty = getattr(item, "quantity", item)
    if isinstance(qty, bool) or not isinstance(qty, (numbers.Real, Decimal)):
        raise TypeError(f"Ítem sin cantidad: {item!r}")

    qty = Decimal(str(qty))
    if not qty.is_finite() or qty != qty.to_integral_value():
        raise ValueError(f"Cantidad inválida: {qty}")
    if qty < 0:
        raise ValueError(f"Cantidad negativa: {qty}")
    return int(qty)


def _total_quantity(items) -> int:
    return sum(_item_quantity(item) for item in items)


def billable_weight(
    defaults: PackageDefaults,
    items=(),
    package: Package = None,
    volumetric_factor=None,
) -> float:
    """
    max(peso real, peso volumétrico) en kg.
    Sin ítems y sin paquete explícito el peso es 0 (la tarifa base igual se cobra).
    """
    quantity = _total_quantity(items)
    if package is None and quantity == 0:
        return 0.0

    if package is not None and package.weight is not None:
        actual = float(package.weight)
    else:
        actual = defaults.weight_per_item * quantity

    dims = package or defaults
    divisor = volumetric_factor or defaults.volumetric_divisor
    volumetric = volumetric_weight(dims.length, dims.width, dims.height, divisor)

    weight = max(actual, volumetric)
    if weight < 0:
        raise ValueError(f"Peso inválido: {weight}")
    return _finite(weight, "Peso")


# ==========================================
# 4. COSTO
# ==========================================
def _round_money(amount: Decimal, decimals: int) -> Decimal:
    return amount.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def calculate_cost(rate: ZoneRate, weight, subtotal, decimals: int = 2) -> ShippingCost:
    weight = _finite(weight, "Peso")
    if weight < 0:
        raise ValueError(f"Peso negativo: {weight}")
    if rate.max_weight is not None and weight > rate.max_weight:
        raise WeightExceedsLimit(weight, rate.max_weight)

    subtotal = Decimal(str(subtotal or 0))
    if not subtotal.is_finite():
        raise ValueError(f"Subtotal inválido: {subtotal}")
    threshold = rate.free_shipping_threshold
    if threshold is not None and subtotal >= threshold:
        cost = Decimal(0)
    else:
        cost = rate.base_cost + rate.cost_per_kg * Decimal(str(weight))

    return ShippingCost(cost=_round_money(cost, decimals), estimated_days=rate.estimated_days)


# ==========================================
# 5. COTIZACIÓN COMPLETA
# ==========================================
def quote_shipping(
    config: ShippingConfig,
    city: str,
    subtotal,
    items=(),
    package: Package = None,
    carrier_id=None,
) -> Quote:
    """
    Ciudad -> zona -> tarifa (transportadora pedida o la predeterminada) -> peso -> costo.
    Cualquier falla se propaga como ShippingError; no se cambia de transportadora aquí.
    """
    zone_id = resolve_zone(config, city)
    carrier = get_carrier(config, carrier_id)
    rate = carrier.rate_for(zone_id)
    if rate is None:
        raise RateNotConfigured(carrier.id, zone_id)

    weight = billable_weight(
        config.package_defaults, items, package, volumetric_factor=carrier.volumetric_factor
    )
    result = calculate_cost(rate, weight, subtotal, config.currency_decimals)

    logger.info(
        "Envío cotizado: ciudad=%s zona=%s transportadora=%s peso=%.3fkg costo=%s",
        city, zone_id, carrier.id, weight, result.cost,
    )
    return Quote(
        zone_id=zone_id,
        carrier_id=carrier.id,
        cost=result.cost,
        estimated_days=result.estimated_days,
        billable_weight=weight,
    )


def quote_options(config: ShippingConfig, city: str, subtotal, items=(), package: Package = None):
    """
    Cotiza con todas las transportadoras activas que puedan atender la ciudad.
    Omite las que no tienen tarifa para la zona o cuyo peso máximo se supera.
    Ordenado por costo y luego por días estimados.
    """
    zone_id = resolve_zone(config, city)
    quotes = []

    for carrier in config.active_carriers:
        rate = carrier.rate_for(zone_id)
        if rate is None:
            logger.debug("Transportadora %s sin tarifa para zona %s", carrier.id, zone_id)
            continue

        weight = billable_weight(
            config.package_defaults, items, package, volumetric_factor=carrier.volumetric_factor
        )
        try:
            result = calculate_cost(rate, weight, subtotal, config.currency_decimals)
        except WeightExceedsLimit as e:
            logger.warning("Transportadora %s omitida: %s", carrier.id, e)
            continue

        quotes.append(Quote(zone_id, carrier.id, result.cost, result.estimated_days, weight))

    quotes.sort(key=lambda q: (q.cost, q.estimated_days.max))
    return quotes
