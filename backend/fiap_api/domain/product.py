"""
Product Domain Model

Represents a product of the menu/catalog.
This is the single source of truth for product data structure.
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ProductCategory(str, Enum):
    """Product categories, serialized by name"""
    LANCHE = "LANCHE"
    ACOMPANHAMENTO = "ACOMPANHAMENTO"
    BEBIDA = "BEBIDA"
    SOBREMESA = "SOBREMESA"

    @classmethod
    def parse(cls, value: str) -> Optional["ProductCategory"]:
        """Case-insensitive lookup by name; None when unknown"""
        if value is None:
            return None
        return cls.__members__.get(str(value).strip().upper())


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        description: Product description (optional)
        category: One of ProductCategory
        price: Unit sale price
        is_active: Whether product can be ordered
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    category: ProductCategory = Field(..., description="Product category")
    price: Decimal = Field(..., description="Unit price", ge=0)
    is_active: bool = Field(True, description="Whether product is active")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """
        Convert to dictionary without null fields

        Decimal is converted to float for JSON compatibility
        """
        data = self.model_dump(exclude_none=True)
        data['price'] = float(data['price'])
        return data


class ProductCreate(BaseModel):
    """Schema for creating (POST) or replacing (PUT) a product"""
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    is_active: Optional[bool] = None


class ProductUpdate(BaseModel):
    """Schema for partially updating (PATCH) a product"""
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    is_active: Optional[bool] = None
