"""
Payment Domain Model

A payment attempt for an order, as registered with the payment provider.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal


class Payment(BaseModel):
    """
    Payment domain model

    Fields:
        id: Internal payment ID
        order_id: Order being paid
        amount: Amount charged (order total at payment time)
        status: Provider status (pending, approved, rejected, ...)
        status_detail: Provider status detail
        provider: Payment provider name
        provider_payment_id: ID of the payment at the provider
        payment_method: Method used (pix, ...)
        qr_code: Copy-and-paste PIX code, when the provider returns one
    """

    id: int = Field(..., description="Internal payment ID")
    order_id: int = Field(..., description="Order ID")
    amount: Decimal = Field(..., description="Amount charged", ge=0)
    status: str = Field(..., description="Provider payment status")
    status_detail: Optional[str] = Field(None, description="Provider status detail")
    provider: str = Field("mercadopago", description="Payment provider")
    provider_payment_id: Optional[str] = Field(None, description="Provider payment ID")
    payment_method: Optional[str] = Field(None, description="Payment method")
    qr_code: Optional[str] = Field(None, description="PIX copy-and-paste code")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"

    def to_dict(self) -> dict:
        data = self.model_dump(exclude_none=True)
        data['amount'] = float(data['amount'])
        data['is_approved'] = self.is_approved
        return data


class PaymentCreate(BaseModel):
    """Schema for requesting a payment of an order"""
    order_id: Optional[int] = None
    payer_email: Optional[str] = None
    payment_method: Optional[str] = None
    description: Optional[str] = None
