"""
Mercado Pago API Connector
Creates and reads payments through the Mercado Pago REST API
"""
import uuid
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

from fiap_api.core.config import settings
from fiap_api.core.errors import PaymentGatewayError

logger = logging.getLogger(__name__)

PROVIDER_NAME = "mercadopago"


@dataclass
class GatewayPayment:
    """Payment as reported by the provider"""
    provider_payment_id: str
    status: str
    status_detail: Optional[str] = None
    payment_method: Optional[str] = None
    qr_code: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "GatewayPayment":
        transaction_data = (data.get('point_of_interaction') or {}).get('transaction_data') or {}
        return cls(
            provider_payment_id=str(data['id']),
            status=data.get('status', 'pending'),
            status_detail=data.get('status_detail'),
            payment_method=data.get('payment_method_id'),
            qr_code=transaction_data.get('qr_code')
        )


class MercadoPagoConnector:
    """
    Connector for the Mercado Pago payments API

    Handles:
    - Payment creation (PIX by default)
    - Payment lookup

    Every failure (transport error, non-2xx answer, malformed body) raises
    PaymentGatewayError. There is no retry.
    """

    def __init__(self, access_token: str = None, base_url: str = None,
                 timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        """
        Initialize Mercado Pago connector

        Args:
            access_token: Seller access token (default: MERCADOPAGO_ACCESS_TOKEN)
            base_url: API base URL (default: MERCADOPAGO_BASE_URL)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.access_token = access_token or settings.MERCADOPAGO_ACCESS_TOKEN
        self.base_url = (base_url or settings.MERCADOPAGO_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.MERCADOPAGO_TIMEOUT
        self._transport = transport

    async def _make_request(self, method: str, endpoint: str, json: Optional[Dict] = None) -> Dict:
        """
        Make authenticated request to the Mercado Pago API

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint (e.g., '/v1/payments')
            json: Request body

        Returns:
            API response as dictionary
        """
        if not self.access_token:
            raise PaymentGatewayError("MERCADOPAGO_ACCESS_TOKEN not configured", key="gateway_not_configured")

        url = f"{self.base_url}{endpoint}"
        headers = {
            'Authorization': f'Bearer {self.access_token}',
            'Accept': 'application/json'
        }
        if method == "POST":
            # Required by the provider on every payment creation call
            headers['X-Idempotency-Key'] = str(uuid.uuid4())

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(method, url, headers=headers, json=json)
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                logger.error(f"Mercado Pago request failed: {e.response.status_code} - {e.response.text}")
                raise PaymentGatewayError(f"HTTP {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error(f"Mercado Pago request error: {e}")
                raise PaymentGatewayError(str(e) or e.__class__.__name__) from e
            except ValueError as e:
                logger.error(f"Mercado Pago returned an invalid body: {e}")
                raise PaymentGatewayError("invalid response body") from e

    async def create_payment(
        self,
        amount: Decimal,
        description: str,
        payer_email: str,
        payment_method: str = "pix",
        external_reference: Optional[str] = None
    ) -> GatewayPayment:
        """
        Create a payment at the provider

        Args:
            amount: Amount to charge
            description: Text shown to the payer
            payer_email: Payer e-mail
            payment_method: Provider payment method ID (pix, ...)
            external_reference: Our reference (the order ID)

        Returns:
            GatewayPayment with provider ID, status and QR code (PIX)
        """
        body = {
            'transaction_amount': float(amount),
            'description': description,
            'payment_method_id': payment_method,
            'payer': {'email': payer_email}
        }
        if external_reference is not None:
            body['external_reference'] = str(external_reference)

        data = await self._make_request("POST", "/v1/payments", json=body)
        if 'id' not in data:
            raise PaymentGatewayError("response without payment id")

        payment = GatewayPayment.from_response(data)
        logger.info(
            f"Mercado Pago payment {payment.provider_payment_id} created "
            f"for reference {external_reference}: {payment.status}"
        )
        return payment

    async def get_payment(self, provider_payment_id: str) -> GatewayPayment:
        """Read a payment back from the provider"""
        data = await self._make_request("GET", f"/v1/payments/{provider_payment_id}")
        if 'id' not in data:
            raise PaymentGatewayError("response without payment id")
        return GatewayPayment.from_response(data)
