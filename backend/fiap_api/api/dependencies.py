"""
FastAPI dependency providers wiring services to their collaborators

Tests replace these through ``app.dependency_overrides``.
"""
from fiap_api.connectors.mercadopago_connector import MercadoPagoConnector
from fiap_api.repositories import (
    CustomerRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
)
from fiap_api.services import CustomerService, OrderService, PaymentService, ProductService


def get_customer_service() -> CustomerService:
    return CustomerService(CustomerRepository())


def get_product_service() -> ProductService:
    return ProductService(ProductRepository())


def get_order_service() -> OrderService:
    return OrderService(OrderRepository(), CustomerRepository(), ProductRepository())


def get_payment_gateway() -> MercadoPagoConnector:
    return MercadoPagoConnector()


def get_payment_service() -> PaymentService:
    return PaymentService(PaymentRepository(), OrderRepository(), get_payment_gateway())
