from io import StringIO

from django.contrib.auth.models import User
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from apps.shipping.models import ShippingCarrier, ShippingZone


class ShippingApiTests(TestCase):
    def setUp(self):
        call_command("seed_shipping", stdout=StringIO())
        self.bogota = ShippingZone.objects.get(name="Bogota y alrededores")
        self.resto = ShippingZone.objects.get(name="Resto del pais")
        self.servi = ShippingCarrier.objects.get(code="SERVI")
        self.inter = ShippingCarrier.objects.get(code="INTER")

    def quote(self, **params):
        return self.client.get(reverse("shipping:quote_api"), params)

    def test_quote_with_default_carrier(self):
        res = self.quote(ciudad="Chia", subtotal="50000", cantidad="1")
        self.assertEqual(res.status_code, 200)
        data = res.json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["zone_id"], self.bogota.pk)
        self.assertEqual(data["carrier_id"], self.servi.pk)
        # (30 x 25 x 5) / 5000 = 0.75 kg
        self.assertEqual(data["billable_weight"], 0.75)
        self.assertEqual(data["cost"], "9125.00")
        self.assertEqual(data["estimated_days"], {"min": 1, "max": 2})
        self.assertEqual(data["delivery_days"], {"min": 3, "max": 4})

    def test_free_shipping(self):
        data = self.quote(ciudad="Chia", subtotal="200000").json()
        self.assertEqual(data["cost"], "0.00")

    def test_unknown_city_uses_rest_of_country(self):
        data = self.quote(ciudad="Leticia", subtotal="0").json()
        self.assertEqual(data["zone_id"], self.resto.pk)

    def test_no_zone_configured(self):
        self.resto.is_active = False
        self.resto.save()
        res = self.quote(ciudad="Leticia")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["code"], "no_zone")

    def test_inactive_carrier(self):
        res = self.quote(ciudad="Chia", transportadora=str(self.inter.pk))
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["code"], "carrier_inactive")

    def test_unknown_carrier(self):
        res = self.quote(ciudad="Chia", transportadora="9999")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["code"], "carrier_not_found")

    def test_package_over_weight_limit(self):
        res = self.quote(ciudad="Chia", largo="10", ancho="10", alto="10", peso="35")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["code"], "weight_exceeds_limit")

    def test_bad_parameters(self):
        self.assertEqual(self.quote(subtotal="100").status_code, 400)
        self.assertEqual(self.quote(ciudad="Chia", cantidad="dos").status_code, 400)
        self.assertEqual(self.quote(ciudad="Chia", subtotal="abc").status_code, 400)

    def test_non_finite_numbers_are_rejected(self):
        for params in (
            {"subtotal": "NaN"},
            {"subtotal": "Infinity"},
            {"largo": "Infinity", "ancho": "25", "alto": "5"},
            {"largo": "30", "ancho": "25", "alto": "5", "peso": "nan"},
        ):
            res = self.quote(ciudad="Leticia", **params)
            self.assertEqual(res.status_code, 400, params)
            self.assertFalse(res.json()["ok"])

    def test_negative_package_is_rejected(self):
        for params in (
            {"largo": "-30", "ancho": "25", "alto": "5"},
            {"largo": "30", "ancho": "0", "alto": "5"},
            {"largo": "30", "ancho": "25", "alto": "5", "peso": "-4"},
        ):
            res = self.quote(ciudad="Leticia", **params)
            self.assertEqual(res.status_code, 400, params)

    def test_negative_subtotal_is_rejected(self):
        self.assertEqual(self.quote(ciudad="Chia", subtotal="-1").status_code, 400)

    def test_options_skip_inactive_carriers(self):
        res = self.client.get(reverse("shipping:options_api"), {"ciudad": "Chia", "subtotal": "0"})
        self.assertEqual(res.status_code, 200)
        options = res.json()["options"]
        self.assertEqual([o["carrier_code"] for o in options], ["SERVI", "COORD"])
        self.assertEqual(options[1]["cost"], "10350.00")

    def test_quote_rejects_post(self):
        res = self.client.post(reverse("shipping:quote_api"), {"ciudad": "Chia"})
        self.assertEqual(res.status_code, 405)


class ShippingLabelTests(TestCase):
    def setUp(self):
        call_command("seed_shipping", stdout=StringIO())
        self.url = reverse("shipping:label_pdf")
        self.params = {
            "ciudad": "Chia",
            "nombre": "Ana Pérez",
            "direccion": "Calle 10 # 5-20",
            "telefono": "3001234567",
            "guia": "SV123",
        }

    def test_staff_gets_pdf(self):
        staff = User.objects.create_user("staff", "staff@gmail.com", "x", is_staff=True)
        self.client.force_login(staff)
        res = self.client.get(self.url, self.params)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res["Content-Type"], "application/pdf")
        self.assertIn("guia_SV123.pdf", res["Content-Disposition"])
        self.assertTrue(res.content.startswith(b"%PDF"))

    def test_customers_are_redirected(self):
        user = User.objects.create_user("cliente", "cliente@gmail.com", "x")
        self.client.force_login(user)
        res = self.client.get(self.url, self.params)
        self.assertEqual(res.status_code, 302)

    def test_label_errors_are_json(self):
        staff = User.objects.create_user("staff", "staff@gmail.com", "x", is_staff=True)
        self.client.force_login(staff)
        carrier = ShippingCarrier.objects.get(code="INTER")
        res = self.client.get(self.url, {**self.params, "transportadora": carrier.pk})
        self.assertEqual(res.status_code, 400)
