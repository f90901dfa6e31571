from django.urls import path
from . import api_views

urlpatterns = [
    path("sales/", api_views.api_create_sales_order, name="api-create-sales-order"),
    path("sales/<int:pk>/", api_views.api_sales_order, name="api-sales-order"),
    path("purchases/", api_views.api_create_purchase_order, name="api-create-purchase-order"),
    path("purchases/<int:pk>/", api_views.api_purchase_order, name="api-purchase-order"),
]
