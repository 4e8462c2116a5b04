"""
FIAP Tech Challenge API - customers, products, orders and payments
"""
__version__ = "1.0.0"
