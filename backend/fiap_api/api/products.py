"""
Products API Endpoints
Handles product catalog management and queries
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fiap_api.api.dependencies import get_product_service
from fiap_api.core.auth import get_current_user
from fiap_api.domain.product import ProductCreate, ProductUpdate
from fiap_api.services.product_service import ProductService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("")
def get_products(
    category: Optional[str] = Query(None, description="Filter by category (LANCHE, ACOMPANHAMENTO, BEBIDA, SOBREMESA)"),
    is_active: Optional[bool] = Query(None, description="Filter by active status"),
    search: Optional[str] = Query(None, description="Search by name or description"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: ProductService = Depends(get_product_service)
):
    """Get all products with optional filters"""
    products, total = service.list(
        category=category,
        is_active=is_active,
        search=search,
        limit=limit,
        offset=offset
    )
    return {
        "status": "success",
        "total": total,
        "limit": limit,
        "offset": offset,
        "count": len(products),
        "data": [product.to_dict() for product in products]
    }


@router.get("/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Get a single product"""
    product = service.get(product_id)
    return {"status": "success", "data": product.to_dict()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    """
    Create a product

    name, category and price (> 0) are required.
    """
    product = service.create(payload)
    return {"status": "success", "data": product.to_dict()}


@router.put("/{product_id}")
def replace_product(
    product_id: int,
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    product = service.update(product_id, payload)
    return {"status": "success", "data": product.to_dict()}


@router.patch("/{product_id}")
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    product = service.patch(product_id, payload)
    return {"status": "success", "data": product.to_dict()}


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
