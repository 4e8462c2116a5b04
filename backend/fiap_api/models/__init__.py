"""
Modelos de banco de dados (definição das tabelas)
"""
from .customer import Customer
from .product import Product
from .order import Order, OrderItem
from .payment import Payment

__all__ = [
    "Customer",
    "Product",
    "Order",
    "OrderItem",
    "Payment",
]
