"""
Product Service
Validates product requests and delegates persistence to ProductRepository
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from fiap_api.core.errors import ErrorDetail, NotFoundError
from fiap_api.domain.product import Product, ProductCategory, ProductCreate, ProductUpdate
from fiap_api.repositories.product_repository import ProductRepository
from fiap_api.services.validation import check_amount, check_length, raise_if_errors, require

logger = logging.getLogger(__name__)


class ProductService:
    """Use cases for the product catalog"""

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    def _validate(self, data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        """
        Validate and normalize product fields

        name, category and price are required unless ``partial``; category
        must be a ProductCategory name and price must fit DECIMAL(12, 2) and
        be greater than zero.
        """
        errors: List[ErrorDetail] = []
        values: Dict[str, Any] = {}

        name = data.get("name")
        if not (partial and name is None) and require(errors, "name", name):
            checked = check_length(errors, "name", name)
            if checked:
                values["name"] = checked

        category = data.get("category")
        if not (partial and category is None) and require(errors, "category", category):
            parsed = ProductCategory.parse(category)
            if parsed is None:
                errors.append(ErrorDetail("invalid_value", {"field": "category"}))
            else:
                values["category"] = parsed.value

        price = data.get("price")
        if not (partial and price is None) and require(errors, "price", price):
            amount = check_amount(errors, "price", price)
            if amount is not None:
                values["price"] = amount

        if data.get("description") is not None:
            values["description"] = data["description"].strip() or None
        elif not partial:
            values["description"] = None

        if data.get("is_active") is not None:
            values["is_active"] = data["is_active"]
        elif not partial:
            values["is_active"] = True

        raise_if_errors(errors)
        return values

    def create(self, data: ProductCreate) -> Product:
        values = self._validate(data.model_dump())
        product = self.product_repo.insert(**values)
        logger.info(f"Product {product.id} created ({product.category.value})")
        return product

    def get(self, product_id: int) -> Product:
        product = self.product_repo.find_by_id(product_id)
        if not product:
            raise NotFoundError("product", product_id)
        return product

    def list(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        category_name = None
        if category:
            parsed = ProductCategory.parse(category)
            if parsed is None:
                raise_if_errors([ErrorDetail("invalid_value", {"field": "category"})])
            category_name = parsed.value

        return self.product_repo.find_all(
            category=category_name,
            is_active=is_active,
            search=search,
            limit=limit,
            offset=offset
        )

    def update(self, product_id: int, data: ProductCreate) -> Product:
        """Replace every field of a product (PUT)"""
        return self._apply(product_id, self._validate(data.model_dump()))

    def patch(self, product_id: int, data: ProductUpdate) -> Product:
        """Change only the fields sent (PATCH)"""
        return self._apply(product_id, self._validate(data.model_dump(exclude_none=True), partial=True))

    def _apply(self, product_id: int, values: Dict[str, Any]) -> Product:
        product = self.product_repo.update(product_id, values)
        if not product:
            raise NotFoundError("product", product_id)
        logger.info(f"Product {product_id} updated: {sorted(values)}")
        return product

    def delete(self, product_id: int) -> None:
        if not self.product_repo.delete(product_id):
            raise NotFoundError("product", product_id)
        logger.info(f"Product {product_id} deleted")
