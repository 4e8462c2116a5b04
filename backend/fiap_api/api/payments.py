"""
Payments API Endpoints
Charges an order through Mercado Pago and exposes the recorded payments
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fiap_api.api.dependencies import get_payment_service
from fiap_api.core.auth import get_current_user
from fiap_api.domain.payment import PaymentCreate
from fiap_api.services.payment_service import PaymentService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("")
def get_payments(
    order_id: Optional[int] = Query(None, description="Only payments of this order"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: PaymentService = Depends(get_payment_service)
):
    payments, total = service.list(order_id=order_id, limit=limit, offset=offset)
    return {
        "status": "success",
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(payments),
        "data": [payment.to_dict() for payment in payments]
    }


@router.get("/{payment_id}")
def get_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)):
    payment = service.get(payment_id)
    return {"status": "success", "data": payment.to_dict()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_payment(payload: PaymentCreate, service: PaymentService = Depends(get_payment_service)):
    """
    Charge an order

    The amount is the order total. Returns the provider status and, for PIX,
    the copy-and-paste QR code.
    """
    payment = await service.create(payload)
    return {"status": "success", "data": payment.to_dict()}


@router.post("/{payment_id}/refresh")
async def refresh_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)):
    """Re-read the payment status from the provider"""
    payment = await service.refresh_status(payment_id)
    return {"status": "success", "data": payment.to_dict()}


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)):
    service.delete(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
