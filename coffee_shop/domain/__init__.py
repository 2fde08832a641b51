from .customer import Customer, is_valid_email
from .inventory import Ingredient, StockStatus, Unit
from .menu import Coffee, CoffeeSize, CoffeeType, MenuItem, PlainItem
from .order import ACTIVE_STATUSES, Order, OrderItem, OrderStatus, ServiceType, can_transition
from .payment import Payment, PaymentMethod, PaymentStatus
from .table import Table, TableStatus

__all__ = [
    "ACTIVE_STATUSES",
    "Coffee",
    "CoffeeSize",
    "CoffeeType",
    "Customer",
    "Ingredient",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "PlainItem",
    "ServiceType",
    "StockStatus",
    "Table",
    "TableStatus",
    "Unit",
    "can_transition",
    "is_valid_email",
]
