"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from fiap_api.repositories.customer_repository import CustomerRepository
from fiap_api.repositories.product_repository import ProductRepository
from fiap_api.repositories.order_repository import OrderRepository
from fiap_api.repositories.payment_repository import PaymentRepository

__all__ = [
    'CustomerRepository',
    'ProductRepository',
    'OrderRepository',
    'PaymentRepository'
]
