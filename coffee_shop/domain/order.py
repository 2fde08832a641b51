from __future__ import annotations

import enum
from datetime import datetime

from .clock import utcnow
from .menu import MenuItem

TAX_RATE = 0.08


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class ServiceType(str, enum.Enum):
    DINE_IN = "DINE_IN"
    TAKEAWAY = "TAKEAWAY"


_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
}

ACTIVE_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
)


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    if current.is_terminal:
        return False
    if new is OrderStatus.CANCELLED:
        return True
    return _NEXT_STATUS.get(current) is new


class OrderItem:
    """One line of an order: a shared catalog item and how many of it."""

    def __init__(self, menu_item: MenuItem, quantity: int, note: str | None = "") -> None:
        if menu_item is None:
            raise ValueError("Menu item cannot be None")
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        self.menu_item = menu_item
        self.quantity = quantity
        self.note = note or ""

    def set_quantity(self, quantity: int) -> None:
        if quantity > 0:
            self.quantity = quantity

    @property
    def unit_price(self) -> float:
        return self.menu_item.effective_price()

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def __repr__(self) -> str:
        return f"OrderItem({self.menu_item.name!r} x{self.quantity})"


class Order:
    """A customer order.

    Money fields are derived: every mutation of the lines or the discount
    recomputes ``subtotal``, ``tax`` and ``total``. The status follows
    PENDING -> CONFIRMED -> PREPARING -> READY -> COMPLETED, with
    CANCELLED reachable from any non-terminal state.
    """

    def __init__(
        self,
        id: int | None,
        customer_id: int,
        service_type: ServiceType = ServiceType.TAKEAWAY,
        *,
        status: OrderStatus = OrderStatus.PENDING,
        created_at: datetime | None = None,
        completed_at: datetime | None = None,
        tax_rate: float = TAX_RATE,
    ) -> None:
        self.id = id
        self.customer_id = customer_id
        self.service_type = ServiceType(service_type)
        self.status = OrderStatus(status)
        self.created_at = created_at or utcnow()
        self.completed_at = completed_at
        self.table_number: int | None = None
        self.special_instructions = ""
        self.tax_rate = tax_rate
        self.discount = 0.0
        self.subtotal = 0.0
        self.tax = 0.0
        self.total = 0.0
        self._items: list[OrderItem] = []

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def find_item(self, menu_item_id: int) -> OrderItem | None:
        for item in self._items:
            if item.menu_item.id == menu_item_id:
                return item
        return None

    def add_item(self, menu_item: MenuItem | None, quantity: int, note: str | None = "") -> None:
        # Non-positive quantities are ignored rather than rejected.
        if menu_item is None or quantity <= 0:
            return
        existing = self.find_item(menu_item.id)
        if existing is not None:
            existing.set_quantity(existing.quantity + quantity)
        else:
            self._items.append(OrderItem(menu_item, quantity, note))
        self._recalculate()

    def remove_item(self, menu_item_id: int) -> None:
        self._items = [item for item in self._items if item.menu_item.id != menu_item_id]
        self._recalculate()

    def update_item_quantity(self, menu_item_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(menu_item_id)
            return
        item = self.find_item(menu_item_id)
        if item is not None:
            item.set_quantity(quantity)
            self._recalculate()

    def clear(self) -> None:
        self._items.clear()
        self._recalculate()

    def set_discount(self, amount: float) -> None:
        if amount < 0:
            return
        self.discount = amount
        self._recalculate()

    def set_table_number(self, table_number: int | None) -> None:
        if self.service_type is ServiceType.DINE_IN and table_number is not None and table_number > 0:
            self.table_number = table_number

    def set_special_instructions(self, text: str | None) -> None:
        self.special_instructions = text or ""

    def set_status(self, status: OrderStatus) -> bool:
        status = OrderStatus(status)
        if not can_transition(self.status, status):
            return False
        self.status = status
        if status is OrderStatus.COMPLETED:
            self.completed_at = utcnow()
        return True

    def releases_table(self) -> bool:
        """Whether this order's table should be freed in its current state."""
        return (
            self.service_type is ServiceType.DINE_IN
            and self.table_number is not None
            and self.status.is_terminal
        )

    def _recalculate(self) -> None:
        self.subtotal = sum(item.line_total for item in self._items)
        self.tax = self.subtotal * self.tax_rate
        self.total = max(0.0, self.subtotal + self.tax - self.discount)

    def __repr__(self) -> str:
        return f"Order(id={self.id}, status={self.status.value}, total={self.total:.2f})"
