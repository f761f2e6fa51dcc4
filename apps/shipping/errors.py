class ShippingError(ValueError):
    """
    Error base del cálculo de envíos.
    Hereda de ValueError para que las vistas lo manejen igual que los errores de stock.
    """

    code = "shipping_error"

    def as_dict(self):
        return {"ok": False, "code": self.code, "error": str(self)}


class NoZoneConfigured(ShippingError):
    code = "no_zone"

    def __init__(self, city):
        self.city = city
        super().__init__(f"No hay envíos configurados para la ciudad '{city}'.")


class CarrierUnavailable(ShippingError):
    code = "carrier_unavailable"


class CarrierNotFound(CarrierUnavailable):
    code = "carrier_not_found"

    def __init__(self, carrier_id=None):
        self.carrier_id = carrier_id
        if carrier_id is None:
            msg = "No hay una transportadora predeterminada configurada."
        else:
            msg = f"La transportadora '{carrier_id}' no existe."
        super().__init__(msg)


class CarrierInactive(CarrierUnavailable):
    code = "carrier_inactive"

    def __init__(self, carrier_id, name=""):
        self.carrier_id = carrier_id
        super().__init__(f"La transportadora '{name or carrier_id}' no está disponible.")


class RateNotConfigured(ShippingError):
    code = "rate_not_configured"

    def __init__(self, carrier_id, zone_id):
        self.carrier_id = carrier_id
        self.zone_id = zone_id
        super().__init__(
            f"La transportadora '{carrier_id}' no tiene tarifa para la zona '{zone_id}'."
        )


class WeightExceedsLimit(ShippingError):
    code = "weight_exceeds_limit"

    def __init__(self, weight, max_weight):
        self.weight = weight
        self.max_weight = max_weight
        super().__init__(
            f"El paquete pesa {weight:g} kg y supera el máximo permitido ({max_weight:g} kg)."
        )
