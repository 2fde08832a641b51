from __future__ import annotations

import enum
import random
import time
from datetime import datetime
from typing import TYPE_CHECKING

from .clock import utcnow

if TYPE_CHECKING:
    from ..gateway import PaymentGateway


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    MOBILE_PAYMENT = "MOBILE_PAYMENT"
    LOYALTY_POINTS = "LOYALTY_POINTS"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


def generate_transaction_reference() -> str:
    return f"TXN{int(time.time() * 1000)}{random.randint(0, 999)}"


class Payment:
    """A single payment attempt against an order.

    Each ``process_*`` method validates the method-specific input first.
    Bad input fails the payment locally; good input moves it to PROCESSING
    and the gateway decides whether it completes.
    """

    def __init__(
        self,
        id: int | None,
        order_id: int,
        method: PaymentMethod,
        amount: float,
        *,
        status: PaymentStatus = PaymentStatus.PENDING,
        created_at: datetime | None = None,
    ) -> None:
        if amount < 0:
            raise ValueError("Payment amount cannot be negative")
        self.id = id
        self.order_id = order_id
        self.method = PaymentMethod(method)
        self.status = PaymentStatus(status)
        self._amount = amount
        self.amount_paid = 0.0
        self.change_given = 0.0
        self.transaction_reference = ""
        self.card_last_four = ""
        self.failure_reason = ""
        self.paid_at: datetime | None = None
        self.created_at = created_at or utcnow()

    @property
    def amount(self) -> float:
        return self._amount

    @property
    def is_successful(self) -> bool:
        return self.status is PaymentStatus.COMPLETED

    @property
    def requires_change(self) -> bool:
        return self.method is PaymentMethod.CASH and self.change_given > 0

    def process_cash(self, tendered: float, gateway: "PaymentGateway") -> bool:
        if tendered < self.amount:
            return self._fail("Insufficient cash provided")
        self.status = PaymentStatus.PROCESSING
        self.amount_paid = tendered
        self.change_given = round(tendered - self.amount, 2)
        return self._complete(gateway)

    def process_card(
        self,
        card_number: str | None,
        expiry: str | None,
        cvv: str | None,
        gateway: "PaymentGateway",
    ) -> bool:
        if not card_number or len(card_number) < 16 or not expiry or not cvv or len(cvv) != 3:
            return self._fail("Invalid card details")
        self.status = PaymentStatus.PROCESSING
        self.amount_paid = self.amount
        self.card_last_four = card_number[-4:]
        self.transaction_reference = generate_transaction_reference()
        return self._complete(gateway)

    def process_mobile(self, mobile_payment_id: str | None, gateway: "PaymentGateway") -> bool:
        if mobile_payment_id is None or not mobile_payment_id.strip():
            return self._fail("Invalid mobile payment ID")
        self.status = PaymentStatus.PROCESSING
        self.amount_paid = self.amount
        self.transaction_reference = mobile_payment_id
        return self._complete(gateway)

    def process_loyalty_points(
        self,
        points_used: float,
        point_value: float,
        gateway: "PaymentGateway",
    ) -> bool:
        # Compared in whole cents.
        if round(points_used * point_value, 2) < round(self.amount, 2):
            return self._fail("Insufficient loyalty points")
        self.status = PaymentStatus.PROCESSING
        self.amount_paid = self.amount
        self.transaction_reference = f"LOYALTY_{int(points_used)}"
        return self._complete(gateway)

    def refund(self) -> bool:
        if self.status is not PaymentStatus.COMPLETED:
            return False
        self.status = PaymentStatus.REFUNDED
        return True

    def _fail(self, reason: str) -> bool:
        self.status = PaymentStatus.FAILED
        self.failure_reason = reason
        return False

    def _complete(self, gateway: "PaymentGateway") -> bool:
        if not gateway.authorize(self):
            return self._fail("Payment processing failed")
        self.status = PaymentStatus.COMPLETED
        self.paid_at = utcnow()
        return True

    def __repr__(self) -> str:
        return f"Payment(id={self.id}, method={self.method.value}, status={self.status.value})"
