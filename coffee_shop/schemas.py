from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain import (
    CoffeeSize,
    CoffeeType,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ServiceType,
    StockStatus,
    TableStatus,
    Unit,
    is_valid_email,
)
from .domain.clock import as_utc


# -------------------------
# Menu
# -------------------------

class MenuItemBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    base_price: float = Field(ge=0)
    category: str = "General"
    item_type: Literal["Plain", "Coffee"] = "Plain"
    coffee_type: Optional[CoffeeType] = None
    is_available: bool = True


class MenuItemCreate(MenuItemBase):
    category: Optional[str] = None

    @model_validator(mode="after")
    def default_category(self) -> "MenuItemCreate":
        if not self.category:
            self.category = "Coffee" if self.item_type == "Coffee" else "General"
        return self


class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    coffee_type: Optional[CoffeeType] = None
    is_available: Optional[bool] = None


class MenuItemRead(MenuItemBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class AvailabilityUpdate(BaseModel):
    is_available: bool


# -------------------------
# Customers
# -------------------------

class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not is_valid_email(value):
            raise ValueError("email must contain '@'")
        return value.strip()


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    loyalty_points: float
    registered_at: datetime


class CustomerSummary(CustomerRead):
    total_orders: int
    total_spent: float
    last_order_id: Optional[int] = None


class RedeemPoints(BaseModel):
    points: float


# -------------------------
# Tables
# -------------------------

class TableCreate(BaseModel):
    number: int = Field(gt=0)
    capacity: int = Field(gt=0)
    notes: Optional[str] = None


class TableUpdate(BaseModel):
    capacity: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = None


class TableRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    capacity: int
    status: TableStatus
    customer_id: Optional[int] = None
    occupied_since: Optional[datetime] = None
    reserved_until: Optional[datetime] = None
    notes: Optional[str] = None


class TableReserve(BaseModel):
    until: datetime

    @field_validator("until")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class TableOccupy(BaseModel):
    customer_id: Optional[int] = None


class TableOutOfService(BaseModel):
    reason: Optional[str] = None


# -------------------------
# Orders
# -------------------------

class OrderLineCreate(BaseModel):
    menu_item_id: int
    quantity: int = Field(default=1, gt=0)
    size: Optional[CoffeeSize] = None
    is_hot: Optional[bool] = None
    customizations: List[str] = Field(default_factory=list)
    note: Optional[str] = None


class OrderCreate(BaseModel):
    customer_id: Optional[int] = None
    service_type: ServiceType = ServiceType.TAKEAWAY
    table_number: Optional[int] = None
    items: List[OrderLineCreate] = Field(min_length=1)
    discount: float = Field(default=0, ge=0)
    special_instructions: Optional[str] = None


class OrderLineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    menu_item_id: int
    menu_item_name: str
    quantity: int
    unit_price: float
    total_price: float
    note: Optional[str] = None
    size: Optional[CoffeeSize] = None
    is_hot: Optional[bool] = None
    extras: List[str] = Field(default_factory=list)


class OrderRead(BaseModel):
    id: int
    customer_id: Optional[int] = None
    status: OrderStatus
    service_type: ServiceType
    table_number: Optional[int] = None
    subtotal: float
    tax: float
    discount: float
    total_amount: float
    special_instructions: Optional[str] = None
    order_time: datetime
    completion_time: Optional[datetime] = None
    amount_paid: float = 0
    items: List[OrderLineRead] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# -------------------------
# Payments
# -------------------------

class PaymentCreate(BaseModel):
    method: PaymentMethod
    amount_tendered: Optional[float] = Field(default=None, ge=0)
    card_number: Optional[str] = None
    card_expiry: Optional[str] = None
    card_cvv: Optional[str] = None
    mobile_payment_id: Optional[str] = None


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    method: PaymentMethod
    status: PaymentStatus
    amount: float
    amount_paid: float
    change_given: float
    transaction_reference: Optional[str] = None
    card_last_four: Optional[str] = None
    failure_reason: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime


# -------------------------
# Inventory
# -------------------------

class IngredientCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    unit: Unit
    minimum_stock: float = Field(ge=0)
    maximum_stock: Optional[float] = Field(default=None, ge=0)
    current_stock: float = Field(default=0, ge=0)
    cost_per_unit: float = Field(ge=0)
    expiration_date: Optional[date] = None
    supplier: Optional[str] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_stock_limits(self) -> "IngredientCreate":
        maximum = self.maximum_stock if self.maximum_stock is not None else self.minimum_stock * 10
        if maximum < self.minimum_stock:
            raise ValueError("maximum_stock must not be below minimum_stock")
        if self.current_stock > maximum:
            raise ValueError("current_stock must not exceed maximum_stock")
        return self


class IngredientUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    minimum_stock: Optional[float] = None
    maximum_stock: Optional[float] = None
    cost_per_unit: Optional[float] = None
    expiration_date: Optional[date] = None
    supplier: Optional[str] = None
    is_active: Optional[bool] = None


class IngredientRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    unit: Unit
    current_stock: float
    minimum_stock: float
    maximum_stock: float
    cost_per_unit: float
    expiration_date: Optional[date] = None
    supplier: Optional[str] = None
    is_active: bool
    stock_status: StockStatus
    stock_value: float
    stock_percentage: float
    expired: bool


class StockChange(BaseModel):
    quantity: float = Field(gt=0)


# -------------------------
# Reports
# -------------------------

class OrderStats(BaseModel):
    total_orders: int
    total_revenue: float
    avg_order_value: float
    pending_orders: int
    confirmed_orders: int
    preparing_orders: int
    ready_orders: int
    completed_orders: int
    cancelled_orders: int


class PaymentStats(BaseModel):
    total_payments: int
    total_revenue: float
    avg_payment_amount: float
    pending_payments: int
    processing_payments: int
    completed_payments: int
    failed_payments: int
    refunded_payments: int
    by_method: Dict[str, int]
    success_rate: float


class CustomerStats(BaseModel):
    total_customers: int
    avg_loyalty_points: float
    max_loyalty_points: float
    total_loyalty_points: float


class TableStats(BaseModel):
    total_tables: int
    available_tables: int
    occupied_tables: int
    reserved_tables: int
    out_of_service_tables: int
    total_capacity: int
    occupancy_rate: float


class InventoryStats(BaseModel):
    total_ingredients: int
    low_stock_count: int
    out_of_stock_count: int
    expired_count: int
    total_inventory_value: float
    avg_ingredient_value: float
