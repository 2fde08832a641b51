from __future__ import annotations

import enum
from datetime import date, timedelta

from .clock import today as _today


class Unit(str, enum.Enum):
    GRAMS = "GRAMS"
    KILOGRAMS = "KILOGRAMS"
    MILLILITERS = "MILLILITERS"
    LITERS = "LITERS"
    PIECES = "PIECES"
    CUPS = "CUPS"
    TABLESPOONS = "TABLESPOONS"
    TEASPOONS = "TEASPOONS"


class StockStatus(str, enum.Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"
    LOW_STOCK = "LOW_STOCK"
    WELL_STOCKED = "WELL_STOCKED"
    NORMAL = "NORMAL"


WELL_STOCKED_RATIO = 0.8


class Ingredient:
    """Stock ledger for one ingredient.

    ``add_stock`` and ``remove_stock`` are all-or-nothing: a request that
    would push stock above ``maximum_stock`` or below zero is refused and
    leaves the level untouched.
    """

    def __init__(
        self,
        id: int | None,
        name: str,
        unit: Unit,
        minimum_stock: float,
        cost_per_unit: float,
        *,
        description: str | None = "",
        current_stock: float = 0.0,
        maximum_stock: float | None = None,
        expiration_date: date | None = None,
        supplier: str | None = "",
        is_active: bool = True,
    ) -> None:
        if minimum_stock < 0 or cost_per_unit < 0:
            raise ValueError("Stock and cost values cannot be negative")
        if maximum_stock is None:
            maximum_stock = minimum_stock * 10
        if maximum_stock < minimum_stock:
            raise ValueError("Maximum stock cannot be below minimum stock")
        if current_stock > maximum_stock:
            raise ValueError("Current stock cannot exceed maximum stock")
        self.id = id
        self.name = name
        self.description = description or ""
        self.unit = Unit(unit)
        self.current_stock = max(0.0, current_stock)
        self.minimum_stock = minimum_stock
        self.maximum_stock = maximum_stock
        self.cost_per_unit = cost_per_unit
        self.expiration_date = expiration_date
        self.supplier = supplier or ""
        self.is_active = is_active

    def add_stock(self, quantity: float) -> bool:
        if quantity <= 0 or self.current_stock + quantity > self.maximum_stock:
            return False
        self.current_stock += quantity
        return True

    def remove_stock(self, quantity: float) -> bool:
        if quantity <= 0 or quantity > self.current_stock:
            return False
        self.current_stock -= quantity
        return True

    def set_name(self, name: str | None) -> None:
        if name and name.strip():
            self.name = name.strip()

    def set_description(self, description: str | None) -> None:
        self.description = description.strip() if description else ""

    def set_minimum_stock(self, value: float) -> None:
        if 0 <= value <= self.maximum_stock:
            self.minimum_stock = value

    def set_maximum_stock(self, value: float) -> None:
        if value >= max(self.minimum_stock, self.current_stock):
            self.maximum_stock = value

    def set_cost_per_unit(self, value: float) -> None:
        if value >= 0:
            self.cost_per_unit = value

    def set_supplier(self, supplier: str | None) -> None:
        self.supplier = supplier.strip() if supplier else ""

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.minimum_stock

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_stock <= 0

    def is_expired(self, today: date | None = None) -> bool:
        if self.expiration_date is None:
            return False
        return (today or _today()) > self.expiration_date

    def is_expiring_soon(self, days: int, today: date | None = None) -> bool:
        if self.expiration_date is None:
            return False
        return self.expiration_date <= (today or _today()) + timedelta(days=days)

    @property
    def stock_value(self) -> float:
        return self.current_stock * self.cost_per_unit

    @property
    def stock_percentage(self) -> float:
        if self.maximum_stock == 0:
            return 0.0
        return self.current_stock / self.maximum_stock * 100

    @property
    def stock_status(self) -> StockStatus:
        if self.is_out_of_stock:
            return StockStatus.OUT_OF_STOCK
        if self.is_low_stock:
            return StockStatus.LOW_STOCK
        if self.current_stock >= self.maximum_stock * WELL_STOCKED_RATIO:
            return StockStatus.WELL_STOCKED
        return StockStatus.NORMAL

    def __repr__(self) -> str:
        return f"Ingredient({self.name!r}, {self.current_stock:g} {self.unit.value.lower()})"
