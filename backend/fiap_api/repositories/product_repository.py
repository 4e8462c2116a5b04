"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from psycopg2 import errors

from fiap_api.core.database import get_db_connection_dict
from fiap_api.core.errors import ConflictError, ErrorDetail, ValidationError
from fiap_api.domain.product import Product

PRODUCT_COLUMNS = "id, name, description, category, price, is_active, created_at, updated_at"

UPDATABLE_FIELDS = ("name", "description", "category", "price", "is_active")


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        return Product(
            id=row['id'],
            name=row['name'],
            description=row['description'],
            category=row['category'],
            price=row['price'],
            is_active=row['is_active'],
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """
        Find product by ID

        Returns:
            Product or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            conn.close()

    def find_by_ids(self, product_ids: List[int]) -> Dict[int, Product]:
        """
        Find several products at once

        Returns:
            Dict of product ID -> Product (missing IDs are simply absent)
        """
        if not product_ids:
            return {}

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = ANY(%s)
            """, (list(product_ids),))

            return {row['id']: self._map_row_to_product(row) for row in cursor.fetchall()}

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters

        Args:
            category: Filter by category name
            is_active: Filter by active status
            search: Search in name or description
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if category:
                conditions.append("category = %s")
                params.append(category)

            if is_active is not None:
                conditions.append("is_active = %s")
                params.append(is_active)

            if search:
                conditions.append("(name ILIKE %s OR description ILIKE %s)")
                search_term = f"%{search}%"
                params.extend([search_term, search_term])

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM products
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE {where_clause}
                ORDER BY category, name
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            products = [self._map_row_to_product(row) for row in cursor.fetchall()]
            return products, total

        finally:
            cursor.close()
            conn.close()

    def insert(
        self,
        name: str,
        category: str,
        price: Decimal,
        description: Optional[str] = None,
        is_active: bool = True
    ) -> Product:
        """Insert a product and return it with its generated ID"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO products (name, description, category, price, is_active)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {PRODUCT_COLUMNS}
            """, (name, description, category, price, is_active))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row)

        except errors.DataError:
            conn.rollback()
            raise ValidationError([ErrorDetail("invalid_data")])

        finally:
            cursor.close()
            conn.close()

    def update(self, product_id: int, fields: Dict[str, Any]) -> Optional[Product]:
        """
        Update the given columns of a product

        Returns:
            Updated Product or None if not found
        """
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not changes:
            return self.find_by_id(product_id)

        set_clause = ", ".join(f"{column} = %s" for column in changes)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET {set_clause}, updated_at = NOW()
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, list(changes.values()) + [product_id])

            row = cursor.fetchone()
            conn.commit()
            if not row:
                return None

            return self._map_row_to_product(row)

        except errors.DataError:
            conn.rollback()
            raise ValidationError([ErrorDetail("invalid_data")])

        finally:
            cursor.close()
            conn.close()

    def delete(self, product_id: int) -> bool:
        """
        Delete a product

        Raises:
            ConflictError: if order items still reference the product
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM products WHERE id = %s", (product_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        except errors.ForeignKeyViolation:
            conn.rollback()
            raise ConflictError("in_use", entity="product", id=product_id)

        finally:
            cursor.close()
            conn.close()
