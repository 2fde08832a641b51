"""Menu catalog items.

A menu item is one of two variants sharing the same price capability:
``PlainItem`` (pastries, teas, anything sold at its base price) and
``Coffee`` (priced by size plus a surcharge per customization).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterable, Literal, Union

CUSTOMIZATION_SURCHARGE = 0.50


class CoffeeType(str, enum.Enum):
    ESPRESSO = "ESPRESSO"
    AMERICANO = "AMERICANO"
    LATTE = "LATTE"
    CAPPUCCINO = "CAPPUCCINO"
    MACCHIATO = "MACCHIATO"
    MOCHA = "MOCHA"
    FRAPPUCCINO = "FRAPPUCCINO"


class CoffeeSize(str, enum.Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"

    @property
    def multiplier(self) -> float:
        return _SIZE_MULTIPLIERS[self]


_SIZE_MULTIPLIERS = {
    CoffeeSize.SMALL: 1.0,
    CoffeeSize.MEDIUM: 1.3,
    CoffeeSize.LARGE: 1.6,
}


@dataclass
class _CatalogEntry:
    id: int
    name: str
    base_price: float
    description: str = ""
    category: str = "General"
    available: bool = True

    def __post_init__(self) -> None:
        if self.base_price < 0:
            raise ValueError("Menu item price cannot be negative")

    def set_base_price(self, price: float) -> None:
        if price >= 0:
            self.base_price = price


@dataclass
class PlainItem(_CatalogEntry):
    kind: Literal["plain"] = field(default="plain", init=False)
    item_type: ClassVar[str] = "Plain"

    def effective_price(self) -> float:
        return self.base_price


@dataclass
class Coffee(_CatalogEntry):
    category: str = "Coffee"
    coffee_type: CoffeeType = CoffeeType.AMERICANO
    size: CoffeeSize = CoffeeSize.MEDIUM
    is_hot: bool = True
    customizations: list[str] = field(default_factory=list)
    kind: Literal["coffee"] = field(default="coffee", init=False)
    item_type: ClassVar[str] = "Coffee"

    def effective_price(self) -> float:
        price = self.base_price * self.size.multiplier
        return price + CUSTOMIZATION_SURCHARGE * len(self.customizations)

    def add_customization(self, customization: str | None) -> None:
        if customization is None or not customization.strip():
            return
        self.customizations.append(customization.strip())

    def remove_customization(self, customization: str) -> None:
        if customization in self.customizations:
            self.customizations.remove(customization)

    def clear_customizations(self) -> None:
        self.customizations.clear()

    def configured(
        self,
        *,
        size: CoffeeSize | None = None,
        is_hot: bool | None = None,
        customizations: Iterable[str] = (),
    ) -> "Coffee":
        """Return a copy carrying one order line's choices; the catalog entry is left untouched."""
        drink = replace(
            self,
            size=size or self.size,
            is_hot=self.is_hot if is_hot is None else is_hot,
            customizations=[],
        )
        for customization in customizations:
            drink.add_customization(customization)
        return drink


MenuItem = Union[PlainItem, Coffee]