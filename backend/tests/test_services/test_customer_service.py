"""
Unit tests for CustomerService validation
"""
import pytest
from unittest.mock import Mock
from datetime import datetime

from fiap_api.core.errors import ConflictError, NotFoundError, ValidationError
from fiap_api.domain.customer import Customer, CustomerCreate, CustomerUpdate
from fiap_api.services.customer_service import CustomerService


def make_customer(**overrides):
    data = {
        'id': 1,
        'name': 'Maria Silva',
        'email': 'maria@example.com',
        'cpf': '12345678909',
        'created_at': datetime(2024, 5, 1)
    }
    data.update(overrides)
    return Customer(**data)


class TestCustomerService:

    def test_create_normalizes_cpf(self):
        # Arrange
        repo = Mock()
        repo.find_by_cpf.return_value = None
        repo.insert.return_value = make_customer()
        service = CustomerService(repo)

        # Act
        service.create(CustomerCreate(name=' Maria Silva ', email='maria@example.com', cpf='123.456.789-09'))

        # Assert
        repo.insert.assert_called_once_with(name='Maria Silva', email='maria@example.com', cpf='12345678909')

    def test_create_reports_every_missing_field(self):
        repo = Mock()
        service = CustomerService(repo)

        with pytest.raises(ValidationError) as exc_info:
            service.create(CustomerCreate(name='', email=None, cpf='   '))

        assert exc_info.value.messages('pt-BR') == [
            "O campo 'name' é obrigatório.",
            "O campo 'email' é obrigatório.",
            "O campo 'cpf' é obrigatório.",
        ]
        repo.insert.assert_not_called()

    def test_create_rejects_bad_formats(self):
        service = CustomerService(Mock())

        with pytest.raises(ValidationError) as exc_info:
            service.create(CustomerCreate(name='Maria', email='not-an-email', cpf='123'))

        assert [d.key for d in exc_info.value.details] == ['invalid_email', 'invalid_cpf']

    def test_create_rejects_text_longer_than_column(self):
        repo = Mock()
        service = CustomerService(repo)

        with pytest.raises(ValidationError) as exc_info:
            service.create(CustomerCreate(name='M' * 300, email='a' * 250 + '@example.com', cpf='12345678909'))

        assert exc_info.value.messages('en-US') == [
            "The field 'name' must be at most 255 characters long.",
            "The field 'email' must be at most 255 characters long.",
        ]
        repo.insert.assert_not_called()

    def test_patch_rejects_long_name(self):
        repo = Mock()

        with pytest.raises(ValidationError):
            CustomerService(repo).patch(1, CustomerUpdate(name='x' * 256))

        repo.update.assert_not_called()

    def test_create_duplicate_cpf_raises_conflict(self):
        repo = Mock()
        repo.find_by_cpf.return_value = make_customer(id=3)
        service = CustomerService(repo)

        with pytest.raises(ConflictError):
            service.create(CustomerCreate(name='Maria', email='maria@example.com', cpf='12345678909'))

        repo.insert.assert_not_called()

    def test_get_missing_customer_raises_not_found(self):
        repo = Mock()
        repo.find_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            CustomerService(repo).get(42)

        assert exc_info.value.status_code == 404

    def test_get_by_cpf_accepts_punctuation(self):
        repo = Mock()
        repo.find_by_cpf.return_value = make_customer()

        CustomerService(repo).get_by_cpf('123.456.789-09')

        repo.find_by_cpf.assert_called_once_with('12345678909')

    def test_patch_only_validates_sent_fields(self):
        repo = Mock()
        repo.find_by_id.return_value = make_customer()
        repo.update.return_value = make_customer(name='Maria S.')
        service = CustomerService(repo)

        service.patch(1, CustomerUpdate(name='Maria S.'))

        repo.update.assert_called_once_with(1, {'name': 'Maria S.'})
        repo.find_by_cpf.assert_not_called()

    def test_update_keeping_own_cpf_is_allowed(self):
        repo = Mock()
        repo.find_by_id.return_value = make_customer()
        repo.find_by_cpf.return_value = make_customer()
        repo.update.return_value = make_customer(email='novo@example.com')

        customer = CustomerService(repo).update(
            1, CustomerCreate(name='Maria Silva', email='novo@example.com', cpf='12345678909')
        )

        assert customer.email == 'novo@example.com'

    def test_update_missing_customer_raises_not_found(self):
        repo = Mock()
        repo.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            CustomerService(repo).patch(9, CustomerUpdate(name='X'))

        repo.update.assert_not_called()

    def test_delete_missing_customer_raises_not_found(self):
        repo = Mock()
        repo.delete.return_value = False

        with pytest.raises(NotFoundError):
            CustomerService(repo).delete(9)
