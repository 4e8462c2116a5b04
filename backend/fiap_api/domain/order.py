"""
Order Domain Models

Represents order-related entities.
These are the single source of truth for order data structure.
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class OrderStatus(str, Enum):
    """Order lifecycle states, serialized by name"""
    RECEBIDO = "RECEBIDO"
    EM_PREPARACAO = "EM_PREPARACAO"
    PRONTO = "PRONTO"
    FINALIZADO = "FINALIZADO"
    CANCELADO = "CANCELADO"

    @classmethod
    def parse(cls, value: str) -> Optional["OrderStatus"]:
        """Case-insensitive lookup by name; None when unknown"""
        if value is None:
            return None
        return cls.__members__.get(str(value).strip().upper())


class OrderItem(BaseModel):
    """
    Order Item domain model - represents a line item in an order

    Fields:
        id: Internal order item ID
        order_id: Parent order ID
        product_id: Reference to product catalog
        product_name: Product name (from catalog, optional)
        quantity: Number of units ordered
        unit_price: Price per unit at order time
        total: quantity * unit_price
    """

    id: int = Field(..., description="Order item ID")
    order_id: int = Field(..., description="Parent order ID")
    product_id: int = Field(..., description="Product catalog ID")
    product_name: Optional[str] = Field(None, description="Product name from catalog")
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    unit_price: Decimal = Field(..., description="Price per unit", ge=0)
    total: Decimal = Field(..., description="Total for line item", ge=0)

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump(exclude_none=True)

        for field in ['unit_price', 'total']:
            if data.get(field) is not None:
                data[field] = float(data[field])

        return data


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Internal order ID
        customer_id: Customer who placed the order
        status: Current OrderStatus
        total: Sum of item totals
        notes: Free-text notes from the customer
        items: Line items
    """

    id: int = Field(..., description="Internal order ID")
    customer_id: int = Field(..., description="Customer ID")
    status: OrderStatus = Field(OrderStatus.RECEBIDO, description="Order status")
    total: Decimal = Field(..., description="Order total", ge=0)
    notes: Optional[str] = Field(None, description="Customer notes")
    items: List[OrderItem] = Field(default_factory=list, description="Order line items")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def item_count(self) -> int:
        """Total units across all items"""
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> dict:
        """Convert to dictionary with items and Decimal to float conversion"""
        data = self.model_dump(exclude_none=True, exclude={'items'})
        data['total'] = float(data['total'])
        data['items'] = [item.to_dict() for item in self.items]
        data['item_count'] = self.item_count
        return data


class OrderItemCreate(BaseModel):
    """Line item of an OrderCreate request"""
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class OrderCreate(BaseModel):
    """Schema for creating an order"""
    customer_id: Optional[int] = None
    notes: Optional[str] = None
    items: Optional[List[OrderItemCreate]] = None


class OrderStatusUpdate(BaseModel):
    """Schema for changing the status of an order (PATCH)"""
    status: Optional[str] = None
