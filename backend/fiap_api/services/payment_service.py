"""
Payment Service
Charges orders through the payment gateway and records the resulting payments
"""
import logging
from typing import List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from fiap_api.connectors.mercadopago_connector import MercadoPagoConnector, PROVIDER_NAME
from fiap_api.core.errors import ErrorDetail, NotFoundError, PaymentGatewayError
from fiap_api.domain.payment import Payment, PaymentCreate
from fiap_api.repositories.order_repository import OrderRepository
from fiap_api.repositories.payment_repository import PaymentRepository
from fiap_api.services.validation import check_email, raise_if_errors, require

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "pix"


class PaymentService:
    """
    Use cases for payments

    The amount charged is always the stored order total. A payment is only
    recorded after the provider accepted the request.

    The async use cases run every repository call in the threadpool so the
    event loop never waits on the database.
    """

    def __init__(
        self,
        payment_repo: PaymentRepository,
        order_repo: OrderRepository,
        gateway: MercadoPagoConnector
    ):
        self.payment_repo = payment_repo
        self.order_repo = order_repo
        self.gateway = gateway

    async def create(self, data: PaymentCreate) -> Payment:
        errors: List[ErrorDetail] = []
        require(errors, "order_id", data.order_id)
        payer_email = None
        if require(errors, "payer_email", data.payer_email):
            payer_email = check_email(errors, "payer_email", data.payer_email)
        raise_if_errors(errors)

        order = await run_in_threadpool(self.order_repo.find_by_id, data.order_id)
        if not order:
            raise NotFoundError("order", data.order_id)

        payment_method = (data.payment_method or DEFAULT_PAYMENT_METHOD).strip().lower()
        description = data.description or f"Pedido {order.id}"

        gateway_payment = await self.gateway.create_payment(
            amount=order.total,
            description=description,
            payer_email=payer_email,
            payment_method=payment_method,
            external_reference=str(order.id)
        )

        try:
            payment = await run_in_threadpool(
                self.payment_repo.insert,
                order_id=order.id,
                amount=order.total,
                status=gateway_payment.status,
                status_detail=gateway_payment.status_detail,
                provider=PROVIDER_NAME,
                provider_payment_id=gateway_payment.provider_payment_id,
                payment_method=gateway_payment.payment_method or payment_method,
                qr_code=gateway_payment.qr_code
            )
        except Exception:
            # The provider already holds this charge; keep its id findable
            logger.error(
                f"Could not record {PROVIDER_NAME} payment {gateway_payment.provider_payment_id} "
                f"({gateway_payment.status}) for order {order.id}"
            )
            raise

        logger.info(f"Payment {payment.id} recorded for order {order.id}: {payment.status}")
        return payment

    def get(self, payment_id: int) -> Payment:
        payment = self.payment_repo.find_by_id(payment_id)
        if not payment:
            raise NotFoundError("payment", payment_id)
        return payment

    def list(self, order_id: Optional[int] = None, limit: int = 100, offset: int = 0) -> Tuple[List[Payment], int]:
        return self.payment_repo.find_all(order_id=order_id, limit=limit, offset=offset)

    async def refresh_status(self, payment_id: int) -> Payment:
        """Re-read the payment status from the provider and store it"""
        payment = await run_in_threadpool(self.get, payment_id)
        if not payment.provider_payment_id:
            raise PaymentGatewayError("payment has no provider id")

        gateway_payment = await self.gateway.get_payment(payment.provider_payment_id)
        if gateway_payment.status == payment.status and gateway_payment.status_detail == payment.status_detail:
            return payment

        updated = await run_in_threadpool(
            self.payment_repo.update_status, payment_id, gateway_payment.status, gateway_payment.status_detail
        )
        if not updated:
            raise NotFoundError("payment", payment_id)
        logger.info(f"Payment {payment_id} status {payment.status} -> {updated.status}")
        return updated

    def delete(self, payment_id: int) -> None:
        """Remove the local payment record (the provider is not contacted)"""
        if not self.payment_repo.delete(payment_id):
            raise NotFoundError("payment", payment_id)
        logger.info(f"Payment {payment_id} deleted")
