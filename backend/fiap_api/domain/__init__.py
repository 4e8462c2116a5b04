"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from fiap_api.domain.customer import Customer, CustomerCreate, CustomerUpdate
from fiap_api.domain.product import Product, ProductCategory, ProductCreate, ProductUpdate
from fiap_api.domain.order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderCreate,
    OrderItemCreate,
    OrderStatusUpdate,
)
from fiap_api.domain.payment import Payment, PaymentCreate

__all__ = [
    'Customer', 'CustomerCreate', 'CustomerUpdate',
    'Product', 'ProductCategory', 'ProductCreate', 'ProductUpdate',
    'Order', 'OrderItem', 'OrderStatus', 'OrderCreate', 'OrderItemCreate', 'OrderStatusUpdate',
    'Payment', 'PaymentCreate',
]
