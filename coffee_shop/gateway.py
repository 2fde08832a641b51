"""Payment processors that decide the outcome of a validated payment."""

from __future__ import annotations

import logging
import random
from typing import Protocol

import httpx

from .config import Settings
from .domain.payment import Payment

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    def authorize(self, payment: Payment) -> bool: ...


class ApprovingGateway:
    def authorize(self, payment: Payment) -> bool:
        return True


class DecliningGateway:
    def authorize(self, payment: Payment) -> bool:
        return False


class SimulatedGateway:
    """Approves a fixed share of payments, drawing from its own RNG."""

    def __init__(self, success_rate: float = 0.95, rng: random.Random | None = None) -> None:
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def authorize(self, payment: Payment) -> bool:
        return self.rng.random() < self.success_rate


class HttpPaymentGateway:
    """Asks an external processor to approve the payment.

    The processor is expected to answer ``{"approved": true|false}``.
    Transport and HTTP errors are treated as a decline.
    """

    def __init__(self, url: str, timeout: float = 5, client: httpx.Client | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self.client = client

    def authorize(self, payment: Payment) -> bool:
        payload = {
            "order_id": payment.order_id,
            "method": payment.method.value,
            "amount": round(payment.amount, 2),
            "reference": payment.transaction_reference or None,
            "card_last_four": payment.card_last_four or None,
        }
        try:
            if self.client is not None:
                response = self.client.post(self.url, json=payload, timeout=self.timeout)
            else:
                response = httpx.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return bool(response.json().get("approved"))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Payment gateway call failed for order %s: %s", payment.order_id, exc)
            return False


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.payment_gateway_url:
        return HttpPaymentGateway(settings.payment_gateway_url, timeout=settings.payment_gateway_timeout)
    if settings.simulated_success_rate >= 1:
        return ApprovingGateway()
    return SimulatedGateway(settings.simulated_success_rate)
