from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ShippingZone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=80, unique=True, verbose_name="Nombre")),
                ("cities", models.JSONField(blank=True, default=list, help_text="Si se deja vacío, la zona aplica a cualquier ciudad no listada en otras zonas.", verbose_name="Ciudades")),
                ("position", models.PositiveIntegerField(default=0, verbose_name="Orden")),
                ("is_active", models.BooleanField(default=True, verbose_name="Activa")),
            ],
            options={
                "verbose_name": "Zona de envío",
                "verbose_name_plural": "Zonas de envío",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="ShippingCarrier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=80, verbose_name="Nombre")),
                ("code", models.CharField(max_length=20, unique=True, verbose_name="Código")),
                ("tracking_url_template", models.CharField(blank=True, help_text="Use {tracking} donde va el número de guía.", max_length=255, verbose_name="URL de rastreo")),
                ("volumetric_factor", models.PositiveIntegerField(default=5000, help_text="Peso volumétrico = (Largo x Ancho x Alto) / Factor. Aéreo usa 5000, terrestre 6000.", verbose_name="Factor volumétrico")),
                ("is_active", models.BooleanField(default=True, verbose_name="Activa")),
            ],
            options={
                "verbose_name": "Transportadora",
                "verbose_name_plural": "Transportadoras",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="CarrierZoneRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("base_cost", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Costo base")),
                ("cost_per_kg", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="Costo por kg")),
                ("free_shipping_threshold", models.DecimalField(blank=True, decimal_places=2, help_text="Subtotal a partir del cual el envío es gratis. Vacío = nunca.", max_digits=12, null=True, verbose_name="Envío gratis desde")),
                ("min_days", models.PositiveSmallIntegerField(default=1, verbose_name="Días mínimos")),
                ("max_days", models.PositiveSmallIntegerField(default=3, verbose_name="Días máximos")),
                ("max_weight", models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, verbose_name="Peso máximo (kg)")),
                ("carrier", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="zone_rates", to="shipping.shippingcarrier", verbose_name="Transportadora")),
                ("zone", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="carrier_rates", to="shipping.shippingzone", verbose_name="Zona")),
            ],
            options={
                "verbose_name": "Tarifa por zona",
                "verbose_name_plural": "Tarifas por zona",
                "ordering": ["carrier", "zone__position", "zone_id"],
                "constraints": [
                    models.UniqueConstraint(fields=("carrier", "zone"), name="unique_rate_per_carrier_zone"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ShippingSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("handling_time", models.PositiveSmallIntegerField(default=2, verbose_name="Tiempo de alistamiento (días)")),
                ("default_length", models.DecimalField(decimal_places=2, default=Decimal("30"), max_digits=6, verbose_name="Largo (cm)")),
                ("default_width", models.DecimalField(decimal_places=2, default=Decimal("25"), max_digits=6, verbose_name="Ancho (cm)")),
                ("default_height", models.DecimalField(decimal_places=2, default=Decimal("5"), max_digits=6, verbose_name="Alto (cm)")),
                ("default_weight_per_item", models.DecimalField(decimal_places=3, default=Decimal("0.25"), max_digits=6, verbose_name="Peso por producto (kg)")),
                ("volumetric_divisor", models.PositiveIntegerField(default=5000, verbose_name="Factor volumétrico")),
                ("company_name", models.CharField(blank=True, max_length=120, verbose_name="Empresa")),
                ("contact_name", models.CharField(blank=True, max_length=120, verbose_name="Contacto")),
                ("phone", models.CharField(blank=True, max_length=30, verbose_name="Teléfono")),
                ("address", models.CharField(blank=True, max_length=220, verbose_name="Dirección")),
                ("city", models.CharField(blank=True, max_length=80, verbose_name="Ciudad")),
                ("state", models.CharField(blank=True, max_length=80, verbose_name="Departamento")),
                ("postal_code", models.CharField(blank=True, max_length=20, verbose_name="Código postal")),
                ("country", models.CharField(default="Colombia", max_length=60, verbose_name="País")),
                ("default_carrier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="shipping.shippingcarrier", verbose_name="Transportadora predeterminada")),
            ],
            options={
                "verbose_name": "Ajustes de envío",
                "verbose_name_plural": "Ajustes de envío",
            },
        ),
    ]
