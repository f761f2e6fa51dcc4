from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

LABEL_SIZE = (10 * cm, 15 * cm)


def money(amount):
    if amount is None:
        return "0.00"
    return f"{amount:,.2f}"


def _block(p, x, y, title, lines):
    p.setFont("Helvetica-Bold", 9)
    p.drawString(x, y, title)
    p.setFont("Helvetica", 9)
    for line in lines:
        y -= 0.45 * cm
        p.drawString(x, y, line)
    return y


def render_label(output, config, quote, carrier, recipient, tracking_number=""):
    """
    Dibuja la guía de envío (10 x 15 cm) en `output` (HttpResponse o BytesIO).
    recipient: dict con name, address, city, phone.
    """
    p = canvas.Canvas(output, pagesize=LABEL_SIZE)
    width, height = LABEL_SIZE
    margin = 0.6 * cm
    origin = config.origin

    # =====================================================
    # 1. ENCABEZADO: TRANSPORTADORA
    # =====================================================
    y = height - margin - 0.4 * cm
    p.setFont("Helvetica-Bold", 14)
    p.drawString(margin, y, carrier.name.upper())
    p.setFont("Helvetica", 9)
    p.drawRightString(width - margin, y, f"[{carrier.code}]")

    y -= 0.4 * cm
    p.setLineWidth(1)
    p.line(margin, y, width - margin, y)

    # =====================================================
    # 2. REMITENTE
    # =====================================================
    y -= 0.6 * cm
    sender = [
        origin.company_name or "Remitente",
        origin.address,
        f"{origin.city}, {origin.state}".strip(", "),
        f"Tel: {origin.phone}" if origin.phone else "",
    ]
    y = _block(p, margin, y, "REMITENTE", [s for s in sender if s])

    # =====================================================
    # 3. DESTINATARIO
    # =====================================================
    y -= 0.8 * cm
    dest = [
        recipient.get("name") or "Cliente General",
        recipient.get("address") or "Dirección no registrada",
        recipient.get("city") or "",
        f"Tel: {recipient['phone']}" if recipient.get("phone") else "",
    ]
    y = _block(p, margin, y, "DESTINATARIO", [d for d in dest if d])

    # =====================================================
    # 4. DATOS DEL ENVÍO
    # =====================================================
    y -= 0.6 * cm
    p.line(margin, y, width - margin, y)
    y -= 0.6 * cm

    days = quote.delivery_days(config.handling_time)
    cost = "GRATIS" if quote.is_free else f"${money(quote.cost)}"
    details = [
        f"Peso facturable: {quote.billable_weight:.2f} kg",
        f"Costo de envío: {cost}",
        f"Entrega estimada: {days.min}-{days.max} días",
    ]
    y = _block(p, margin, y, "ENVÍO", details)

    if tracking_number:
        y -= 0.8 * cm
        p.setFont("Helvetica-Bold", 12)
        p.drawCentredString(width / 2, y, f"GUÍA: {tracking_number}")
        url = carrier.tracking_url(tracking_number)
        if url:
            y -= 0.5 * cm
            p.setFont("Helvetica", 6)
            p.drawCentredString(width / 2, y, url)

    p.setFont("Helvetica-Oblique", 7)
    p.drawCentredString(width / 2, margin, f"Gracias por preferir {origin.company_name or 'nuestra tienda'}")

    p.showPage()
    p.save()
    return output
