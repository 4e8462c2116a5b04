"""
Payment Repository - Data Access Layer for Payments
"""
from decimal import Decimal
from typing import List, Optional, Tuple

from fiap_api.core.database import get_db_connection_dict
from fiap_api.domain.payment import Payment

PAYMENT_COLUMNS = """
    id, order_id, amount, status, status_detail, provider,
    provider_payment_id, payment_method, qr_code, created_at, updated_at
"""


class PaymentRepository:
    """Repository for Payment data access"""

    @staticmethod
    def _map_row_to_payment(row: dict) -> Payment:
        return Payment(
            id=row['id'],
            order_id=row['order_id'],
            amount=row['amount'],
            status=row['status'],
            status_detail=row.get('status_detail'),
            provider=row['provider'],
            provider_payment_id=row.get('provider_payment_id'),
            payment_method=row.get('payment_method'),
            qr_code=row.get('qr_code'),
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, payment_id: int) -> Optional[Payment]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PAYMENT_COLUMNS}
                FROM payments
                WHERE id = %s
            """, (payment_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_payment(row)

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        order_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Payment], int]:
        """
        Find payments, optionally only those of one order

        Returns:
            Tuple of (list of payments, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            where_clause = "1=1"
            params = []

            if order_id is not None:
                where_clause = "order_id = %s"
                params.append(order_id)

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM payments
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PAYMENT_COLUMNS}
                FROM payments
                WHERE {where_clause}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            payments = [self._map_row_to_payment(row) for row in cursor.fetchall()]
            return payments, total

        finally:
            cursor.close()
            conn.close()

    def insert(
        self,
        order_id: int,
        amount: Decimal,
        status: str,
        provider: str,
        provider_payment_id: Optional[str] = None,
        status_detail: Optional[str] = None,
        payment_method: Optional[str] = None,
        qr_code: Optional[str] = None
    ) -> Payment:
        """Store a payment registered with the provider"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO payments (
                    order_id, amount, status, status_detail, provider,
                    provider_payment_id, payment_method, qr_code
                ) VALUES (
                    %s, %s, %s, %s, %s, %s, %s, %s
                )
                RETURNING {PAYMENT_COLUMNS}
            """, (
                order_id, amount, status, status_detail, provider,
                provider_payment_id, payment_method, qr_code
            ))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_payment(row)

        finally:
            cursor.close()
            conn.close()

    def update_status(
        self,
        payment_id: int,
        status: str,
        status_detail: Optional[str] = None
    ) -> Optional[Payment]:
        """
        Overwrite the provider status of a payment

        Returns:
            Updated Payment or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE payments
                SET status = %s, status_detail = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {PAYMENT_COLUMNS}
            """, (status, status_detail, payment_id))

            row = cursor.fetchone()
            conn.commit()
            if not row:
                return None

            return self._map_row_to_payment(row)

        finally:
            cursor.close()
            conn.close()

    def delete(self, payment_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM payments WHERE id = %s", (payment_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        finally:
            cursor.close()
            conn.close()
