from django.urls import path
from . import views

app_name = "shipping"

urlpatterns = [
    path("envios/cotizar/", views.quote_api, name="quote_api"),
    path("envios/opciones/", views.options_api, name="options_api"),
    path("envios/guia/pdf/", views.label_pdf, name="label_pdf"),
]
