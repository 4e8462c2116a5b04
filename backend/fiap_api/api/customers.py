"""
Customers API Endpoints
CRUD over customers, plus lookup by CPF
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fiap_api.api.dependencies import get_customer_service
from fiap_api.core.auth import get_current_user
from fiap_api.domain.customer import CustomerCreate, CustomerUpdate
from fiap_api.services.customer_service import CustomerService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("")
def list_customers(
    search: Optional[str] = Query(None, description="Search by name or e-mail"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: CustomerService = Depends(get_customer_service)
):
    """List customers"""
    customers, total = service.list(search=search, limit=limit, offset=offset)
    return {
        "status": "success",
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(customers),
        "data": [customer.to_dict() for customer in customers]
    }


@router.get("/cpf/{cpf}")
def get_customer_by_cpf(cpf: str, service: CustomerService = Depends(get_customer_service)):
    """Identify a customer by CPF (digits, with or without punctuation)"""
    customer = service.get_by_cpf(cpf)
    return {"status": "success", "data": customer.to_dict()}


@router.get("/{customer_id}")
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    """Get a single customer"""
    customer = service.get(customer_id)
    return {"status": "success", "data": customer.to_dict()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerCreate, service: CustomerService = Depends(get_customer_service)):
    """
    Register a customer

    name, email and cpf are required; cpf must be unique.
    """
    customer = service.create(payload)
    return {"status": "success", "data": customer.to_dict()}


@router.put("/{customer_id}")
def replace_customer(
    customer_id: int,
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service)
):
    """Replace every field of a customer"""
    customer = service.update(customer_id, payload)
    return {"status": "success", "data": customer.to_dict()}


@router.patch("/{customer_id}")
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service)
):
    """Change only the fields sent"""
    customer = service.patch(customer_id, payload)
    return {"status": "success", "data": customer.to_dict()}


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    service.delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
