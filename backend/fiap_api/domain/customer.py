"""
Customer Domain Model

Represents a customer of the store.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class Customer(BaseModel):
    """
    Customer domain model - represents a registered customer

    Fields:
        id: Internal customer ID (primary key)
        name: Full name
        email: Contact e-mail
        cpf: Brazilian taxpayer number, digits only (unique)
        created_at: When the customer was created
        updated_at: When the customer was last updated
    """

    id: int = Field(..., description="Internal customer ID")
    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Customer e-mail")
    cpf: str = Field(..., description="CPF (11 digits)")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to dictionary, leaving out null fields"""
        return self.model_dump(exclude_none=True)


class CustomerCreate(BaseModel):
    """
    Schema for creating (POST) or replacing (PUT) a customer

    Every field is optional here; CustomerService reports the missing ones.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    cpf: Optional[str] = None


class CustomerUpdate(BaseModel):
    """Schema for partially updating (PATCH) a customer"""
    name: Optional[str] = None
    email: Optional[str] = None
    cpf: Optional[str] = None
