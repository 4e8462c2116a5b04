"""
Customer Service
Validates customer requests and delegates persistence to CustomerRepository
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from fiap_api.core.errors import ConflictError, ErrorDetail, NotFoundError
from fiap_api.domain.customer import Customer, CustomerCreate, CustomerUpdate
from fiap_api.repositories.customer_repository import CustomerRepository
from fiap_api.services.validation import (
    check_cpf,
    check_email,
    check_length,
    raise_if_errors,
    require,
)

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Use cases for customers

    Handles:
    - Required field and format validation (name, e-mail, CPF)
    - CPF uniqueness check before writes
    - Not-found reporting
    """

    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo

    def _validate(self, data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        """
        Validate and normalize customer fields

        Args:
            data: Field values from the request
            partial: When True only the fields present are checked (PATCH)

        Returns:
            Normalized values ready for the repository
        """
        errors: List[ErrorDetail] = []
        values: Dict[str, Any] = {}

        for field in ("name", "email", "cpf"):
            value = data.get(field)
            if partial and value is None:
                continue
            if not require(errors, field, value):
                continue

            if field == "name":
                name = check_length(errors, field, value)
                if name:
                    values["name"] = name
            elif field == "email":
                email = check_email(errors, field, value)
                if email:
                    values["email"] = email
            else:
                cpf = check_cpf(errors, field, value)
                if cpf:
                    values["cpf"] = cpf

        raise_if_errors(errors)
        return values

    def _ensure_cpf_free(self, cpf: str, customer_id: Optional[int] = None) -> None:
        existing = self.customer_repo.find_by_cpf(cpf)
        if existing and existing.id != customer_id:
            raise ConflictError("cpf_already_registered", cpf=cpf)

    def create(self, data: CustomerCreate) -> Customer:
        values = self._validate(data.model_dump())
        self._ensure_cpf_free(values["cpf"])

        customer = self.customer_repo.insert(**values)
        logger.info(f"Customer {customer.id} created")
        return customer

    def get(self, customer_id: int) -> Customer:
        customer = self.customer_repo.find_by_id(customer_id)
        if not customer:
            raise NotFoundError("customer", customer_id)
        return customer

    def get_by_cpf(self, cpf: str) -> Customer:
        """Look a customer up by CPF (punctuation allowed)"""
        errors: List[ErrorDetail] = []
        normalized = None
        if require(errors, "cpf", cpf):
            normalized = check_cpf(errors, "cpf", cpf)
        raise_if_errors(errors)

        customer = self.customer_repo.find_by_cpf(normalized)
        if not customer:
            raise NotFoundError("customer", normalized)
        return customer

    def list(self, search: Optional[str] = None, limit: int = 100, offset: int = 0) -> Tuple[List[Customer], int]:
        return self.customer_repo.find_all(search=search, limit=limit, offset=offset)

    def update(self, customer_id: int, data: CustomerCreate) -> Customer:
        """Replace every field of a customer (PUT)"""
        values = self._validate(data.model_dump())
        return self._apply(customer_id, values)

    def patch(self, customer_id: int, data: CustomerUpdate) -> Customer:
        """Change only the fields sent (PATCH)"""
        values = self._validate(data.model_dump(exclude_none=True), partial=True)
        return self._apply(customer_id, values)

    def _apply(self, customer_id: int, values: Dict[str, Any]) -> Customer:
        self.get(customer_id)
        if "cpf" in values:
            self._ensure_cpf_free(values["cpf"], customer_id)

        customer = self.customer_repo.update(customer_id, values)
        if not customer:
            raise NotFoundError("customer", customer_id)
        logger.info(f"Customer {customer_id} updated: {sorted(values)}")
        return customer

    def delete(self, customer_id: int) -> None:
        if not self.customer_repo.delete(customer_id):
            raise NotFoundError("customer", customer_id)
        logger.info(f"Customer {customer_id} deleted")
