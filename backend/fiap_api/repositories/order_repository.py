"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models
with their items.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from psycopg2 import errors

from fiap_api.core.database import get_db_connection_dict
from fiap_api.core.errors import ErrorDetail, ValidationError
from fiap_api.domain.order import Order, OrderItem

ORDER_COLUMNS = "id, customer_id, status, total, notes, created_at, updated_at"

ITEM_QUERY = """
    SELECT
        oi.id, oi.order_id, oi.product_id,
        oi.quantity, oi.unit_price, oi.total,
        p.name as product_name
    FROM order_items oi
    LEFT JOIN products p ON oi.product_id = p.id
"""


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with their items.
    """

    @staticmethod
    def _map_row_to_item(row: dict) -> OrderItem:
        return OrderItem(
            id=row['id'],
            order_id=row['order_id'],
            product_id=row['product_id'],
            product_name=row.get('product_name'),
            quantity=row['quantity'],
            unit_price=row['unit_price'],
            total=row['total']
        )

    @staticmethod
    def _map_row_to_order(row: dict, items: List[OrderItem]) -> Order:
        return Order(
            id=row['id'],
            customer_id=row['customer_id'],
            status=row['status'],
            total=row['total'],
            notes=row.get('notes'),
            items=items,
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """
        Find order by ID with its items

        Returns:
            Order or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE id = %s
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            cursor.execute(ITEM_QUERY + """
                WHERE oi.order_id = %s
                ORDER BY oi.id
            """, (order_id,))

            items = [self._map_row_to_item(item) for item in cursor.fetchall()]
            return self._map_row_to_order(row, items)

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        status: Optional[str] = None,
        customer_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Find orders with filters, newest first

        Args:
            status: Filter by OrderStatus name
            customer_id: Filter by customer
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of orders, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if status:
                conditions.append("status = %s")
                params.append(status)

            if customer_id is not None:
                conditions.append("customer_id = %s")
                params.append(customer_id)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM orders
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE {where_clause}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])
            rows = cursor.fetchall()

            if not rows:
                return [], total

            # Load items of every order in one round trip
            cursor.execute(ITEM_QUERY + """
                WHERE oi.order_id = ANY(%s)
                ORDER BY oi.order_id, oi.id
            """, ([row['id'] for row in rows],))

            items_by_order: Dict[int, List[OrderItem]] = {}
            for item_row in cursor.fetchall():
                items_by_order.setdefault(item_row['order_id'], []).append(self._map_row_to_item(item_row))

            orders = [self._map_row_to_order(row, items_by_order.get(row['id'], [])) for row in rows]
            return orders, total

        finally:
            cursor.close()
            conn.close()

    def insert(
        self,
        customer_id: int,
        status: str,
        total: Decimal,
        items: List[Dict[str, Any]],
        notes: Optional[str] = None
    ) -> Order:
        """
        Insert an order and its items, committing once at the end

        Args:
            customer_id: Customer placing the order
            status: Initial OrderStatus name
            total: Order total
            items: Dicts with product_id, quantity, unit_price, total
                   (and optionally product_name)
            notes: Customer notes

        Returns:
            The stored Order with generated IDs
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO orders (customer_id, status, total, notes)
                VALUES (%s, %s, %s, %s)
                RETURNING {ORDER_COLUMNS}
            """, (customer_id, status, total, notes))
            order_row = cursor.fetchone()

            stored_items = []
            for item in items:
                cursor.execute("""
                    INSERT INTO order_items (order_id, product_id, quantity, unit_price, total)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING id, order_id, product_id, quantity, unit_price, total
                """, (order_row['id'], item['product_id'], item['quantity'], item['unit_price'], item['total']))

                item_row = dict(cursor.fetchone())
                item_row['product_name'] = item.get('product_name')
                stored_items.append(self._map_row_to_item(item_row))

            conn.commit()
            return self._map_row_to_order(order_row, stored_items)

        except errors.DataError:
            conn.rollback()
            raise ValidationError([ErrorDetail("invalid_data")])

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update_status(self, order_id: int, status: str) -> Optional[Order]:
        """
        Change the status of an order

        Returns:
            Updated Order or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE orders
                SET status = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING id
            """, (status, order_id))

            row = cursor.fetchone()
            conn.commit()

        finally:
            cursor.close()
            conn.close()

        if not row:
            return None
        return self.find_by_id(order_id)

    def delete(self, order_id: int) -> bool:
        """
        Delete an order (items and payments go with it via ON DELETE CASCADE)

        Returns:
            True if a row was deleted
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM orders WHERE id = %s", (order_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        finally:
            cursor.close()
            conn.close()
