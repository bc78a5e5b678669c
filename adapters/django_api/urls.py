"""
Pyramid Books Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("orders", views.orders_view),
    path("orders/<int:order_id>", views.order_detail_view),
    path("orders/<int:order_id>/status", views.order_status_view),
    path("cart", views.cart_view),
    path("cart/checkout", views.cart_checkout_view),
    path("cart/<int:cart_item_id>", views.cart_item_view),
    path("discount-rules", views.discount_rules_view),
    path("discount-rules/<int:rule_id>", views.discount_rule_detail_view),
    path("payments", views.payments_view),
    path("stock-receipts", views.stock_receipts_view),
    path("books", views.books_view),
]
