"""
Unit tests for ProductRepository

These tests validate repository logic without requiring a database connection.
"""
import pytest
from unittest.mock import patch, MagicMock
from datetime import datetime
from decimal import Decimal

from psycopg2 import errors

from fiap_api.core.errors import ConflictError, ValidationError
from fiap_api.domain.product import Product, ProductCategory
from fiap_api.repositories.product_repository import ProductRepository


def product_row(**overrides):
    row = {
        'id': 1,
        'name': 'X-Burger',
        'description': 'Pão, carne e queijo',
        'category': 'LANCHE',
        'price': Decimal('25.90'),
        'is_active': True,
        'created_at': datetime(2024, 5, 1, 12, 0),
        'updated_at': None
    }
    row.update(overrides)
    return row


class TestProductRepository:
    """Test ProductRepository methods"""

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_find_by_id_returns_product(self, mock_get_conn):
        """Test find_by_id returns a Product domain model"""
        # Arrange: Mock database connection
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchone.return_value = product_row()

        # Act: Call repository method
        product = ProductRepository().find_by_id(1)

        # Assert: Verify result
        assert isinstance(product, Product)
        assert product.category == ProductCategory.LANCHE
        assert product.price == Decimal('25.90')

        # Verify database was called correctly
        mock_cursor.execute.assert_called_once()
        mock_cursor.close.assert_called_once()
        mock_conn.close.assert_called_once()

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_find_by_id_returns_none_when_not_found(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchone.return_value = None

        assert ProductRepository().find_by_id(999) is None

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_find_by_ids_returns_dict(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchall.return_value = [product_row(id=1), product_row(id=3, name='Coca-Cola', category='BEBIDA')]

        products = ProductRepository().find_by_ids([1, 2, 3])

        assert set(products) == {1, 3}
        assert products[3].category == ProductCategory.BEBIDA
        assert mock_cursor.execute.call_args[0][1] == ([1, 2, 3],)

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_find_by_ids_with_empty_list_skips_database(self, mock_get_conn):
        assert ProductRepository().find_by_ids([]) == {}
        mock_get_conn.assert_not_called()

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_find_all_with_filters(self, mock_get_conn):
        """Test find_all builds WHERE clause from filters"""
        # Arrange
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchone.return_value = {'total': 1}
        mock_cursor.fetchall.return_value = [product_row()]

        # Act
        products, total = ProductRepository().find_all(category='LANCHE', is_active=True, limit=50, offset=10)

        # Assert
        assert total == 1
        assert len(products) == 1
        count_query, count_params = mock_cursor.execute.call_args_list[0][0]
        assert 'category = %s' in count_query
        assert 'is_active = %s' in count_query
        assert count_params == ['LANCHE', True]
        assert mock_cursor.execute.call_args_list[1][0][1] == ['LANCHE', True, 50, 10]

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_insert_returns_product(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchone.return_value = product_row(id=7, description=None)

        product = ProductRepository().insert(name='X-Burger', category='LANCHE', price=Decimal('25.90'))

        assert product.id == 7
        assert 'description' not in product.to_dict()
        mock_conn.commit.assert_called_once()

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_update_out_of_range_price_raises_validation_error(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.execute.side_effect = errors.NumericValueOutOfRange()

        with pytest.raises(ValidationError) as exc_info:
            ProductRepository().update(1, {'price': Decimal('1e15')})

        assert exc_info.value.messages('en-US') == ["One or more fields exceed the allowed limits."]
        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_update_without_changes_reads_current_row(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.fetchone.return_value = product_row()

        product = ProductRepository().update(1, {'unknown': 'value'})

        assert product.id == 1
        assert 'UPDATE' not in mock_cursor.execute.call_args[0][0]

    @patch('fiap_api.repositories.product_repository.get_db_connection_dict')
    def test_delete_referenced_product_raises_conflict(self, mock_get_conn):
        mock_conn = MagicMock()
        mock_cursor = MagicMock()
        mock_get_conn.return_value = mock_conn
        mock_conn.cursor.return_value = mock_cursor
        mock_cursor.execute.side_effect = errors.ForeignKeyViolation()

        with pytest.raises(ConflictError):
            ProductRepository().delete(1)

        mock_conn.rollback.assert_called_once()


class TestProductDomainModel:
    """Test Product domain model serialization"""

    def test_to_dict_converts_decimal_and_drops_nulls(self):
        product = Product(**product_row(description=None))

        data = product.to_dict()

        assert data['price'] == 25.9
        assert 'description' not in data
        assert 'updated_at' not in data

    def test_category_parse_is_case_insensitive(self):
        assert ProductCategory.parse(' bebida ') == ProductCategory.BEBIDA
        assert ProductCategory.parse('PIZZA') is None
