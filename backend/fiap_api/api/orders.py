"""
Orders API Endpoints
Order placement, queries and status changes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fiap_api.api.dependencies import get_order_service
from fiap_api.core.auth import get_current_user
from fiap_api.domain.order import OrderCreate, OrderStatusUpdate
from fiap_api.services.order_service import OrderService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("")
def get_orders(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    customer_id: Optional[int] = Query(None, description="Filter by customer"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: OrderService = Depends(get_order_service)
):
    """Get orders, newest first"""
    orders, total = service.list(status=status_filter, customer_id=customer_id, limit=limit, offset=offset)
    return {
        "status": "success",
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(orders),
        "data": [order.to_dict() for order in orders]
    }


@router.get("/{order_id}")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    """Get a single order with its items"""
    order = service.get(order_id)
    return {"status": "success", "data": order.to_dict()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, service: OrderService = Depends(get_order_service)):
    """
    Place an order

    Unit prices come from the product catalog; the order starts as RECEBIDO.
    """
    order = service.create(payload)
    return {"status": "success", "data": order.to_dict()}


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """Move an order to another status"""
    order = service.update_status(order_id, payload)
    return {"status": "success", "data": order.to_dict()}


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    service.delete(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
