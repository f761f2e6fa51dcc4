import logging
from decimal import Decimal, InvalidOperation

from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_http_methods

from .errors import CarrierNotFound, ShippingError
from .labels import render_label
from .services import get_carrier, quote_options, quote_shipping
from .snapshot import Package, load_config

logger = logging.getLogger(__name__)


class BadParameter(ValueError):
    pass


def _safe_decimal(v, default=None):
    if v is None or v == "":
        return default
    try:
        value = Decimal(str(v))
    except (InvalidOperation, ValueError):
        raise BadParameter(f"Valor inválido: {v}")
    if not value.is_finite():
        raise BadParameter(f"Valor inválido: {v}")
    return value


def _safe_int(v, default=None):
    if v is None or v == "":
        return default
    try:
        return int(v)
    except (TypeError, ValueError):
        raise BadParameter(f"Valor inválido: {v}")


def _order_params(request):
    """
    Lee ciudad, subtotal, cantidad y (opcional) medidas del paquete.
    """
    city = (request.GET.get("ciudad") or "").strip()
    if not city:
        raise BadParameter("La ciudad es obligatoria.")

    subtotal = _safe_decimal(request.GET.get("subtotal"), Decimal("0"))
    if subtotal < 0:
        raise BadParameter("Subtotal inválido.")
    qty = _safe_int(request.GET.get("cantidad"), 1)
    if qty < 0:
        raise BadParameter("Cantidad inválida.")

    package = None
    dims = [_safe_decimal(request.GET.get(k)) for k in ("largo", "ancho", "alto")]
    if all(d is not None for d in dims):
        if any(d <= 0 for d in dims):
            raise BadParameter("Las medidas del paquete deben ser mayores que cero.")
        weight = _safe_decimal(request.GET.get("peso"))
        if weight is not None and weight < 0:
            raise BadParameter("Peso inválido.")
        package = Package(
            length=float(dims[0]),
            width=float(dims[1]),
            height=float(dims[2]),
            weight=float(weight) if weight is not None else None,
        )

    return city, subtotal, [qty], package


def _error_response(e):
    status = 404 if isinstance(e, CarrierNotFound) else 400
    return JsonResponse(e.as_dict(), status=status)


@require_http_methods(["GET"])
def quote_api(request):
    """
    Devuelve:
      ok, zone_id, carrier_id, cost, estimated_days, delivery_days, billable_weight
    """
    try:
        city, subtotal, items, package = _order_params(request)
        carrier_id = _safe_int(request.GET.get("transportadora"))
    except BadParameter as e:
        return JsonResponse({"ok": False, "error": str(e)}, status=400)

    config = load_config()
    try:
        quote = quote_shipping(config, city, subtotal, items, package, carrier_id=carrier_id)
    except ShippingError as e:
        logger.warning("Cotización rechazada para %s: %s", city, e)
        return _error_response(e)

    return JsonResponse({
        "ok": True,
        **quote.as_dict(),
        "delivery_days": quote.delivery_days(config.handling_time).as_dict(),
    })


@require_http_methods(["GET"])
def options_api(request):
    try:
        city, subtotal, items, package = _order_params(request)
    except BadParameter as e:
        return JsonResponse({"ok": False, "error": str(e)}, status=400)

    config = load_config()
    try:
        quotes = quote_options(config, city, subtotal, items, package)
    except ShippingError as e:
        return _error_response(e)

    options = []
    for q in quotes:
        carrier = config.carrier(q.carrier_id)
        options.append({**q.as_dict(), "carrier_name": carrier.name, "carrier_code": carrier.code})

    return JsonResponse({"ok": True, "options": options})


# ==============================================================================
# GUÍA DE ENVÍO (PDF)
# ==============================================================================
@staff_member_required
def label_pdf(request):
    try:
        city, subtotal, items, package = _order_params(request)
        carrier_id = _safe_int(request.GET.get("transportadora"))
    except BadParameter as e:
        return JsonResponse({"ok": False, "error": str(e)}, status=400)

    config = load_config()
    try:
        quote = quote_shipping(config, city, subtotal, items, package, carrier_id=carrier_id)
        carrier = get_carrier(config, quote.carrier_id)
    except ShippingError as e:
        return _error_response(e)

    tracking = (request.GET.get("guia") or "").strip()
    recipient = {
        "name": request.GET.get("nombre", ""),
        "address": request.GET.get("direccion", ""),
        "city": city,
        "phone": request.GET.get("telefono", ""),
    }

    response = HttpResponse(content_type="application/pdf")
    filename = f"guia_{tracking or carrier.code.lower()}.pdf"
    response["Content-Disposition"] = f'inline; filename="{filename}"'
    return render_label(response, config, quote, carrier, recipient, tracking)
