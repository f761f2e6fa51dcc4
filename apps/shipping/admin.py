from django.contrib import admin
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from .models import CarrierZoneRate, ShippingCarrier, ShippingSettings, ShippingZone


def _status(is_active):
    if is_active:
        return mark_safe('<span style="color: green;">✅ Activa</span>')
    return mark_safe('<span style="color: red;">❌ Inactiva</span>')


# ==========================================
# 1. ZONAS
# ==========================================
@admin.register(ShippingZone)
class ShippingZoneAdmin(admin.ModelAdmin):
    list_display = ("name_bold", "cities_summary", "position", "status_visual")
    list_editable = ("position",)
    list_filter = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        ("📍 Zona", {
            "fields": ("name", "cities", "position"),
            "description": "Liste las ciudades como [\"Bogota\", \"Chia\"]. Una zona sin ciudades cubre el resto del país."
        }),
        ("⚙️ Configuración", {
            "fields": ("is_active", "created_at", "updated_at"),
            "description": "Desmarque esta casilla para dejar de ofrecer envíos a esta zona temporalmente."
        }),
    )

    def name_bold(self, obj):
        return format_html('<b>{}</b>', obj.name)
    name_bold.short_description = "Nombre de la Zona"
    name_bold.admin_order_field = "name"

    def cities_summary(self, obj):
        if obj.is_fallback:
            return "🌎 Resto del país"
        return ", ".join(obj.cities)
    cities_summary.short_description = "Ciudades"

    def status_visual(self, obj):
        return _status(obj.is_active)
    status_visual.short_description = "Disponibilidad"
    status_visual.admin_order_field = "is_active"


# ==========================================
# 2. TRANSPORTADORAS (con tarifas por zona)
# ==========================================
class CarrierZoneRateInline(admin.TabularInline):
    model = CarrierZoneRate
    extra = 0
    fields = ("zone", "base_cost", "cost_per_kg", "free_shipping_threshold", "min_days", "max_days", "max_weight")
    verbose_name_plural = "🚚 Tarifas por zona"


@admin.register(ShippingCarrier)
class ShippingCarrierAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "volumetric_factor", "rates_count", "status_visual")
    list_filter = ("is_active",)
    search_fields = ("name", "code")
    inlines = [CarrierZoneRateInline]

    def rates_count(self, obj):
        return f"{obj.zone_rates.count()} tarifas"
    rates_count.short_description = "Tarifas"

    def status_visual(self, obj):
        return _status(obj.is_active)
    status_visual.short_description = "Disponibilidad"
    status_visual.admin_order_field = "is_active"


# ==========================================
# 3. AJUSTES (una sola fila)
# ==========================================
@admin.register(ShippingSettings)
class ShippingSettingsAdmin(admin.ModelAdmin):
    fieldsets = (
        ("🚚 General", {
            "fields": ("default_carrier", "handling_time"),
        }),
        ("📦 Paquete estándar", {
            "fields": ("default_length", "default_width", "default_height", "default_weight_per_item", "volumetric_divisor"),
            "description": "Peso volumétrico = (Largo x Ancho x Alto) / Factor. Se usa el mayor entre peso real y volumétrico."
        }),
        ("🏠 Remitente", {
            "fields": ("company_name", "contact_name", "phone", "address", "city", "state", "postal_code", "country"),
        }),
    )

    def has_add_permission(self, request):
        return not ShippingSettings.objects.exists()

    def has_delete_permission(self, request, obj=None): return False
