"""
Request localization

Resolves the culture of each request (query string ``culture`` first, then
``Accept-Language``) against the supported cultures and renders user-facing
messages from a small catalog. Unsupported cultures fall back to the default
culture (pt-BR).
"""
import logging
from typing import Dict, List, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from fiap_api.core.config import settings

logger = logging.getLogger(__name__)


MESSAGES: Dict[str, Dict[str, str]] = {
    "pt-BR": {
        "required": "O campo '{field}' é obrigatório.",
        "invalid_value": "O campo '{field}' possui um valor inválido.",
        "invalid_email": "O campo '{field}' deve ser um e-mail válido.",
        "invalid_cpf": "O campo '{field}' deve conter 11 dígitos.",
        "must_be_positive": "O campo '{field}' deve ser maior que zero.",
        "must_be_at_most": "O campo '{field}' deve ser no máximo {max}.",
        "too_long": "O campo '{field}' deve ter no máximo {max} caracteres.",
        "too_many_decimals": "O campo '{field}' deve ter no máximo {places} casas decimais.",
        "invalid_data": "Um ou mais campos excedem os limites permitidos.",
        "min_items": "O pedido deve conter ao menos um item.",
        "not_found": "{entity} {id} não encontrado(a).",
        "product_inactive": "O produto {id} está inativo e não pode ser pedido.",
        "cpf_already_registered": "Já existe um cliente com o CPF {cpf}.",
        "in_use": "{entity} {id} está em uso e não pode ser removido(a).",
        "gateway_not_configured": "O provedor de pagamento não está configurado.",
        "gateway_error": "Falha ao comunicar com o provedor de pagamento: {reason}",
        "internal_error": "Erro interno do servidor.",
        "entity.customer": "Cliente",
        "entity.product": "Produto",
        "entity.order": "Pedido",
        "entity.payment": "Pagamento",
    },
    "en-US": {
        "required": "The field '{field}' is required.",
        "invalid_value": "The field '{field}' has an invalid value.",
        "invalid_email": "The field '{field}' must be a valid e-mail.",
        "invalid_cpf": "The field '{field}' must contain 11 digits.",
        "must_be_positive": "The field '{field}' must be greater than zero.",
        "must_be_at_most": "The field '{field}' must be at most {max}.",
        "too_long": "The field '{field}' must be at most {max} characters long.",
        "too_many_decimals": "The field '{field}' must have at most {places} decimal places.",
        "invalid_data": "One or more fields exceed the allowed limits.",
        "min_items": "The order must contain at least one item.",
        "not_found": "{entity} {id} not found.",
        "product_inactive": "Product {id} is inactive and cannot be ordered.",
        "cpf_already_registered": "A customer with CPF {cpf} already exists.",
        "in_use": "{entity} {id} is referenced by other records and cannot be deleted.",
        "gateway_not_configured": "The payment provider is not configured.",
        "gateway_error": "Payment provider request failed: {reason}",
        "internal_error": "Internal server error.",
        "entity.customer": "Customer",
        "entity.product": "Product",
        "entity.order": "Order",
        "entity.payment": "Payment",
    },
}


def translate(key: str, culture: Optional[str] = None, **params) -> str:
    """Render a catalog message in the given culture (default culture when unknown)"""
    catalog = MESSAGES.get(culture or settings.DEFAULT_CULTURE) or MESSAGES["pt-BR"]
    template = catalog.get(key) or MESSAGES["pt-BR"].get(key, key)

    # Entity names are themselves localized
    if "entity" in params:
        params["entity"] = catalog.get(f"entity.{params['entity']}", params["entity"])

    try:
        return template.format(**params)
    except KeyError:
        logger.warning(f"Missing parameter rendering message '{key}': {params}")
        return template


def _parse_accept_language(header: str) -> List[str]:
    """Return the cultures of an Accept-Language header ordered by quality"""
    weighted = []
    for position, part in enumerate(header.split(",")):
        piece = part.strip()
        if not piece:
            continue
        culture, _, quality = piece.partition(";q=")
        try:
            weight = float(quality) if quality else 1.0
        except ValueError:
            weight = 0.0
        weighted.append((-weight, position, culture.strip()))
    return [culture for _, _, culture in sorted(weighted)]


def resolve_culture(candidates: List[str], supported: List[str], default: str) -> str:
    """
    Pick the first supported culture among the candidates.

    Matching is case-insensitive and a bare language ("pt") matches the first
    supported culture of that language ("pt-BR").
    """
    lookup = {c.lower(): c for c in supported}
    for candidate in candidates:
        if not candidate or candidate == "*":
            continue
        exact = lookup.get(candidate.lower())
        if exact:
            return exact
        language = candidate.split("-")[0].lower()
        for culture in supported:
            if culture.split("-")[0].lower() == language:
                return culture
    return default


def get_request_culture(request: Request) -> str:
    """Culture resolved by LocalizationMiddleware (default when middleware is absent)"""
    return getattr(request.state, "culture", settings.DEFAULT_CULTURE)


class LocalizationMiddleware(BaseHTTPMiddleware):
    """
    Stores the resolved culture in ``request.state.culture`` and echoes it in
    the ``Content-Language`` response header.
    """

    def __init__(self, app, default_culture: str = None, supported_cultures: List[str] = None):
        super().__init__(app)
        self.default_culture = default_culture or settings.DEFAULT_CULTURE
        self.supported_cultures = supported_cultures or settings.get_supported_cultures()

    async def dispatch(self, request: Request, call_next):
        candidates = []
        if request.query_params.get("culture"):
            candidates.append(request.query_params["culture"])
        if request.headers.get("Accept-Language"):
            candidates.extend(_parse_accept_language(request.headers["Accept-Language"]))

        culture = resolve_culture(candidates, self.supported_cultures, self.default_culture)
        request.state.culture = culture

        response = await call_next(request)
        response.headers["Content-Language"] = culture
        return response
