from __future__ import annotations

from datetime import datetime

from .clock import utcnow
from .order import Order


def is_valid_email(email: str | None) -> bool:
    return bool(email) and "@" in email


class Customer:
    def __init__(
        self,
        id: int | None,
        name: str,
        email: str | None = None,
        phone: str | None = None,
        *,
        loyalty_points: float = 0.0,
        registered_at: datetime | None = None,
        order_history: list[Order] | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.email = email
        self.phone = phone
        self.loyalty_points = max(0.0, loyalty_points)
        self.registered_at = registered_at or utcnow()
        self._order_history: list[Order] = list(order_history or [])

    @property
    def order_history(self) -> list[Order]:
        return list(self._order_history)

    def set_name(self, name: str | None) -> None:
        if name and name.strip():
            self.name = name.strip()

    def set_email(self, email: str | None) -> None:
        if is_valid_email(email):
            self.email = email.strip()

    def set_phone(self, phone: str | None) -> None:
        if phone and phone.strip():
            self.phone = phone.strip()

    def add_order(self, order: Order | None, points_per_dollar: float) -> None:
        if order is None:
            return
        self._order_history.append(order)
        self.add_loyalty_points(order.total * points_per_dollar)

    def add_loyalty_points(self, points: float) -> None:
        if points > 0:
            self.loyalty_points += points

    def redeem_loyalty_points(self, points: float) -> bool:
        if points <= 0 or self.loyalty_points < points:
            return False
        self.loyalty_points -= points
        return True

    @property
    def total_spent(self) -> float:
        return sum(order.total for order in self._order_history)

    @property
    def total_orders(self) -> int:
        return len(self._order_history)

    @property
    def last_order(self) -> Order | None:
        return self._order_history[-1] if self._order_history else None

    def __repr__(self) -> str:
        return f"Customer(id={self.id}, name={self.name!r}, points={self.loyalty_points:.2f})"
