"""
Customer Repository - Data Access Layer for Customers

Handles all database queries for customers and returns Customer domain models.
"""
from typing import Any, Dict, List, Optional, Tuple

from psycopg2 import errors

from fiap_api.core.database import get_db_connection_dict
from fiap_api.core.errors import ConflictError, ErrorDetail, ValidationError
from fiap_api.domain.customer import Customer

CUSTOMER_COLUMNS = "id, name, email, cpf, created_at, updated_at"

# Columns a caller may change through update()
UPDATABLE_FIELDS = ("name", "email", "cpf")


class CustomerRepository:
    """
    Repository for Customer data access

    All SQL queries for customers are centralized here.
    Returns Customer domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_customer(row: dict) -> Customer:
        return Customer(
            id=row['id'],
            name=row['name'],
            email=row['email'],
            cpf=row['cpf'],
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        """
        Find customer by ID

        Returns:
            Customer or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE id = %s
            """, (customer_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_customer(row)

        finally:
            cursor.close()
            conn.close()

    def find_by_cpf(self, cpf: str) -> Optional[Customer]:
        """
        Find customer by CPF (digits only)

        Returns:
            Customer or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE cpf = %s
            """, (cpf,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_customer(row)

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Customer], int]:
        """
        Find customers, optionally searching by name or e-mail

        Returns:
            Tuple of (list of customers, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if search:
                conditions.append("(name ILIKE %s OR email ILIKE %s)")
                search_term = f"%{search}%"
                params.extend([search_term, search_term])

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM customers
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE {where_clause}
                ORDER BY id
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            customers = [self._map_row_to_customer(row) for row in cursor.fetchall()]
            return customers, total

        finally:
            cursor.close()
            conn.close()

    def insert(self, name: str, email: str, cpf: str) -> Customer:
        """
        Insert a customer

        Raises:
            ConflictError: if the CPF is already registered
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO customers (name, email, cpf)
                VALUES (%s, %s, %s)
                RETURNING {CUSTOMER_COLUMNS}
            """, (name, email, cpf))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_customer(row)

        except errors.DataError:
            conn.rollback()
            raise ValidationError([ErrorDetail("invalid_data")])

        except errors.UniqueViolation:
            conn.rollback()
            raise ConflictError("cpf_already_registered", cpf=cpf)

        finally:
            cursor.close()
            conn.close()

    def update(self, customer_id: int, fields: Dict[str, Any]) -> Optional[Customer]:
        """
        Update the given columns of a customer

        Args:
            customer_id: Customer ID
            fields: Column -> new value (only UPDATABLE_FIELDS are applied)

        Returns:
            Updated Customer or None if not found
        """
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not changes:
            return self.find_by_id(customer_id)

        set_clause = ", ".join(f"{column} = %s" for column in changes)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE customers
                SET {set_clause}, updated_at = NOW()
                WHERE id = %s
                RETURNING {CUSTOMER_COLUMNS}
            """, list(changes.values()) + [customer_id])

            row = cursor.fetchone()
            conn.commit()
            if not row:
                return None

            return self._map_row_to_customer(row)

        except errors.DataError:
            conn.rollback()
            raise ValidationError([ErrorDetail("invalid_data")])

        except errors.UniqueViolation:
            conn.rollback()
            raise ConflictError("cpf_already_registered", cpf=changes.get('cpf'))

        finally:
            cursor.close()
            conn.close()

    def delete(self, customer_id: int) -> bool:
        """
        Delete a customer

        Returns:
            True if a row was deleted

        Raises:
            ConflictError: if orders still reference the customer
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM customers WHERE id = %s", (customer_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        except errors.ForeignKeyViolation:
            conn.rollback()
            raise ConflictError("in_use", entity="customer", id=customer_id)

        finally:
            cursor.close()
            conn.close()
