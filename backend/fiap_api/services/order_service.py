"""
Order Service
Validates order requests, prices their items from the catalog and delegates
persistence to OrderRepository
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fiap_api.core.errors import ErrorDetail, NotFoundError
from fiap_api.domain.order import Order, OrderCreate, OrderStatus, OrderStatusUpdate
from fiap_api.repositories.customer_repository import CustomerRepository
from fiap_api.repositories.order_repository import OrderRepository
from fiap_api.repositories.product_repository import ProductRepository
from fiap_api.services.validation import MAX_AMOUNT, check_quantity, raise_if_errors, require

logger = logging.getLogger(__name__)


class OrderService:
    """
    Use cases for orders

    Handles:
    - Required field validation (customer, at least one item, quantities)
    - Existence of the referenced customer and products
    - Capturing the unit price of each product at order time
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository
    ):
        self.order_repo = order_repo
        self.customer_repo = customer_repo
        self.product_repo = product_repo

    @staticmethod
    def _parse_status(value: Optional[str], field: str = "status") -> OrderStatus:
        errors: List[ErrorDetail] = []
        status = None
        if require(errors, field, value):
            status = OrderStatus.parse(value)
            if status is None:
                errors.append(ErrorDetail("invalid_value", {"field": field}))
        raise_if_errors(errors)
        return status

    def _validate_create(self, data: OrderCreate) -> None:
        errors: List[ErrorDetail] = []

        require(errors, "customer_id", data.customer_id)

        if not data.items:
            errors.append(ErrorDetail("min_items", {}))
        else:
            for index, item in enumerate(data.items):
                require(errors, f"items[{index}].product_id", item.product_id)
                if require(errors, f"items[{index}].quantity", item.quantity):
                    check_quantity(errors, f"items[{index}].quantity", item.quantity)

        raise_if_errors(errors)

    def create(self, data: OrderCreate) -> Order:
        self._validate_create(data)

        if not self.customer_repo.find_by_id(data.customer_id):
            raise NotFoundError("customer", data.customer_id)

        product_ids = list(dict.fromkeys(item.product_id for item in data.items))
        products = self.product_repo.find_by_ids(product_ids)

        for product_id in product_ids:
            if product_id not in products:
                raise NotFoundError("product", product_id)

        inactive = [ErrorDetail("product_inactive", {"id": pid}) for pid in product_ids if not products[pid].is_active]
        raise_if_errors(inactive)

        items: List[Dict[str, Any]] = []
        total = Decimal("0")
        for item in data.items:
            product = products[item.product_id]
            line_total = product.price * item.quantity
            total += line_total
            items.append({
                'product_id': product.id,
                'product_name': product.name,
                'quantity': item.quantity,
                'unit_price': product.price,
                'total': line_total
            })

        if total > MAX_AMOUNT:
            raise_if_errors([ErrorDetail("must_be_at_most", {"field": "total", "max": MAX_AMOUNT})])

        notes = data.notes.strip() if data.notes and data.notes.strip() else None
        order = self.order_repo.insert(
            customer_id=data.customer_id,
            status=OrderStatus.RECEBIDO.value,
            total=total,
            items=items,
            notes=notes
        )
        logger.info(f"Order {order.id} created for customer {order.customer_id}: {len(items)} items, total {total}")
        return order

    def get(self, order_id: int) -> Order:
        order = self.order_repo.find_by_id(order_id)
        if not order:
            raise NotFoundError("order", order_id)
        return order

    def list(
        self,
        status: Optional[str] = None,
        customer_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        status_name = self._parse_status(status).value if status else None
        return self.order_repo.find_all(
            status=status_name,
            customer_id=customer_id,
            limit=limit,
            offset=offset
        )

    def update_status(self, order_id: int, data: OrderStatusUpdate) -> Order:
        status = self._parse_status(data.status)

        order = self.order_repo.update_status(order_id, status.value)
        if not order:
            raise NotFoundError("order", order_id)
        logger.info(f"Order {order_id} moved to {status.value}")
        return order

    def delete(self, order_id: int) -> None:
        if not self.order_repo.delete(order_id):
            raise NotFoundError("order", order_id)
        logger.info(f"Order {order_id} deleted")
