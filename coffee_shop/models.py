from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import JSON, Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .domain.clock import utcnow


class MenuItemRecord(SQLModel, table=True):
    __tablename__ = "menu_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    base_price: float = Field(default=0, ge=0)
    category: str = Field(default="General", index=True)
    item_type: str = Field(default="Plain")
    coffee_type: Optional[str] = None
    is_available: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class CustomerRecord(SQLModel, table=True):
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    email: Optional[str] = Field(default=None, sa_column_kwargs={"unique": True})
    phone: Optional[str] = Field(default=None, index=True)
    loyalty_points: float = Field(default=0, ge=0)
    registered_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TableRecord(SQLModel, table=True):
    __tablename__ = "dining_tables"

    number: int = Field(primary_key=True)
    capacity: int = Field(ge=1)
    status: str = Field(default="AVAILABLE", index=True)
    customer_id: Optional[int] = Field(default=None, foreign_key="customers.id")
    occupied_since: Optional[datetime] = None
    reserved_until: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class OrderRecord(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: Optional[int] = Field(default=None, foreign_key="customers.id", index=True)
    status: str = Field(default="PENDING", index=True)
    service_type: str
    table_number: Optional[int] = Field(default=None, index=True)
    subtotal: float = 0
    tax: float = 0
    discount: float = 0
    total_amount: float = 0
    special_instructions: Optional[str] = None
    order_time: datetime = Field(default_factory=utcnow, index=True)
    completion_time: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=utcnow)


class OrderLineRecord(SQLModel, table=True):
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(
        sa_column=Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    menu_item_id: int = Field(foreign_key="menu_items.id")
    menu_item_name: str
    category: str = "General"
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0, ge=0)
    total_price: float = Field(default=0, ge=0)
    note: Optional[str] = None
    size: Optional[str] = None
    is_hot: Optional[bool] = None
    extras: list[str] = Field(default_factory=list, sa_column=Column(JSON))


class PaymentRecord(SQLModel, table=True):
    __tablename__ = "payments"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    method: str = Field(index=True)
    status: str = Field(default="PENDING", index=True)
    amount: float = Field(default=0, ge=0)
    amount_paid: float = 0
    change_given: float = 0
    transaction_reference: Optional[str] = Field(default=None, index=True)
    card_last_four: Optional[str] = None
    failure_reason: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class IngredientRecord(SQLModel, table=True):
    __tablename__ = "ingredients"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, sa_column_kwargs={"unique": True})
    description: Optional[str] = None
    unit: str
    current_stock: float = Field(default=0, ge=0)
    minimum_stock: float = Field(default=0, ge=0)
    maximum_stock: float = Field(default=0, ge=0)
    cost_per_unit: float = Field(default=0, ge=0)
    expiration_date: Optional[date] = None
    supplier: Optional[str] = Field(default=None, index=True)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


__all__ = [
    "CustomerRecord",
    "IngredientRecord",
    "MenuItemRecord",
    "OrderLineRecord",
    "OrderRecord",
    "PaymentRecord",
    "TableRecord",
]
