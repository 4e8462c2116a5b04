"""
Service Layer - Use Cases

One service per entity. Services validate requests, raise typed errors and
delegate to repositories or the payment gateway.
"""
from fiap_api.services.customer_service import CustomerService
from fiap_api.services.product_service import ProductService
from fiap_api.services.order_service import OrderService
from fiap_api.services.payment_service import PaymentService

__all__ = [
    'CustomerService',
    'ProductService',
    'OrderService',
    'PaymentService'
]
