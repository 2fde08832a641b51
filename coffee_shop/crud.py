from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .domain import (
    ACTIVE_STATUSES,
    Coffee,
    CoffeeType,
    Customer,
    Ingredient,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PlainItem,
    Table,
    TableStatus,
)
from .domain.clock import as_utc, today, utcnow
from .domain.order import TAX_RATE
from .menu_data import DEFAULT_CUSTOMERS, DEFAULT_MENU_ITEMS, DEFAULT_TABLES
from .models import (
    CustomerRecord,
    IngredientRecord,
    MenuItemRecord,
    OrderLineRecord,
    OrderRecord,
    PaymentRecord,
    TableRecord,
)

logger = logging.getLogger(__name__)


def _commit(session: Session, action: str) -> bool:
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Failed to %s: %s", action, exc)
        return False
    return True


# -------------------------
# Menu operations
# -------------------------

def to_menu_item(record: MenuItemRecord) -> MenuItem:
    common = dict(
        id=record.id,
        name=record.name,
        base_price=record.base_price,
        description=record.description or "",
        category=record.category,
        available=record.is_available,
    )
    if record.item_type == Coffee.item_type:
        return Coffee(coffee_type=CoffeeType(record.coffee_type or CoffeeType.AMERICANO), **common)
    return PlainItem(**common)


def list_menu_items(
    session: Session,
    *,
    available_only: bool = False,
    category: str | None = None,
) -> List[MenuItemRecord]:
    statement = select(MenuItemRecord)
    if available_only:
        statement = statement.where(MenuItemRecord.is_available.is_(True))
    if category:
        statement = statement.where(MenuItemRecord.category == category)
    statement = statement.order_by(MenuItemRecord.category.asc(), MenuItemRecord.name.asc())
    return list(session.exec(statement))


def get_menu_item(session: Session, menu_item_id: int) -> MenuItemRecord | None:
    return session.get(MenuItemRecord, menu_item_id)


def list_categories(session: Session) -> List[str]:
    statement = select(MenuItemRecord.category).distinct().order_by(MenuItemRecord.category.asc())
    return list(session.exec(statement))


def create_menu_item(session: Session, data: dict) -> MenuItemRecord | None:
    now = utcnow()
    item = MenuItemRecord(**data, created_at=now, updated_at=now)
    session.add(item)
    if not _commit(session, f"create menu item {data.get('name')!r}"):
        return None
    session.refresh(item)
    return item


def update_menu_item(session: Session, menu_item: MenuItemRecord, updates: dict) -> MenuItemRecord | None:
    for key, value in updates.items():
        if value is None:
            continue
        setattr(menu_item, key, value)
    menu_item.updated_at = utcnow()
    session.add(menu_item)
    if not _commit(session, f"update menu item {menu_item.id}"):
        return None
    session.refresh(menu_item)
    return menu_item


def set_menu_item_availability(session: Session, menu_item: MenuItemRecord, available: bool) -> MenuItemRecord | None:
    return update_menu_item(session, menu_item, {"is_available": available})


def delete_menu_item(session: Session, menu_item: MenuItemRecord) -> bool:
    in_use = session.exec(
        select(func.count(OrderLineRecord.id)).where(OrderLineRecord.menu_item_id == menu_item.id)
    ).one()
    if in_use:
        raise ValueError("Cannot delete a menu item that appears on existing orders")
    session.delete(menu_item)
    return _commit(session, f"delete menu item {menu_item.id}")


# -------------------------
# Customer operations
# -------------------------

def to_customer(record: CustomerRecord, history: List[Order] | None = None) -> Customer:
    return Customer(
        record.id,
        record.name,
        record.email,
        record.phone,
        loyalty_points=record.loyalty_points,
        registered_at=as_utc(record.registered_at),
        order_history=history,
    )


def create_customer(session: Session, data: dict) -> CustomerRecord | None:
    now = utcnow()
    customer = CustomerRecord(**data, registered_at=now, updated_at=now)
    session.add(customer)
    if not _commit(session, f"create customer {data.get('email')!r}"):
        return None
    session.refresh(customer)
    return customer


def get_customer(session: Session, customer_id: int) -> CustomerRecord | None:
    return session.get(CustomerRecord, customer_id)


def get_customer_by_email(session: Session, email: str) -> CustomerRecord | None:
    return session.exec(select(CustomerRecord).where(CustomerRecord.email == email)).first()


def get_customer_by_phone(session: Session, phone: str) -> CustomerRecord | None:
    return session.exec(select(CustomerRecord).where(CustomerRecord.phone == phone)).first()


def load_customer(session: Session, customer_id: int, *, tax_rate: float = TAX_RATE) -> Customer | None:
    record = get_customer(session, customer_id)
    if record is None:
        return None
    history = [
        to_order(order, get_order_lines(session, order.id), tax_rate=tax_rate)
        for order in list_orders(session, customer_id=customer_id, newest_first=False)
        if order.status != OrderStatus.CANCELLED.value
    ]
    return to_customer(record, history)


def list_customers(session: Session, *, search: str | None = None) -> List[CustomerRecord]:
    statement = select(CustomerRecord)
    if search:
        statement = statement.where(CustomerRecord.name.contains(search))
    statement = statement.order_by(CustomerRecord.name.asc())
    return list(session.exec(statement))


def update_customer(session: Session, record: CustomerRecord, updates: dict) -> CustomerRecord | None:
    customer = to_customer(record)
    customer.set_name(updates.get("name"))
    customer.set_email(updates.get("email"))
    customer.set_phone(updates.get("phone"))
    record.name = customer.name
    record.email = customer.email
    record.phone = customer.phone
    record.updated_at = utcnow()
    session.add(record)
    if not _commit(session, f"update customer {record.id}"):
        return None
    session.refresh(record)
    return record


def save_loyalty_points(session: Session, customer: Customer) -> bool:
    record = get_customer(session, customer.id)
    if record is None:
        return False
    record.loyalty_points = customer.loyalty_points
    record.updated_at = utcnow()
    session.add(record)
    return _commit(session, f"update loyalty points for customer {customer.id}")


def add_loyalty_points(session: Session, customer_id: int, points: float) -> bool:
    record = get_customer(session, customer_id)
    if record is None or points <= 0:
        return False
    customer = to_customer(record)
    customer.add_loyalty_points(points)
    return save_loyalty_points(session, customer)


def redeem_loyalty_points(session: Session, customer_id: int, points: float) -> bool:
    record = get_customer(session, customer_id)
    if record is None:
        return False
    customer = to_customer(record)
    if not customer.redeem_loyalty_points(points):
        return False
    return save_loyalty_points(session, customer)


def delete_customer(session: Session, record: CustomerRecord) -> bool:
    order_count = session.exec(
        select(func.count(OrderRecord.id)).where(OrderRecord.customer_id == record.id)
    ).one()
    if order_count:
        raise ValueError("Cannot delete a customer with order history")
    session.delete(record)
    return _commit(session, f"delete customer {record.id}")


def top_loyalty_customers(session: Session, limit: int = 10) -> List[CustomerRecord]:
    statement = select(CustomerRecord).order_by(CustomerRecord.loyalty_points.desc()).limit(limit)
    return list(session.exec(statement))


def compute_customer_stats(session: Session) -> dict:
    row = session.exec(
        select(
            func.count(CustomerRecord.id),
            func.coalesce(func.avg(CustomerRecord.loyalty_points), 0),
            func.coalesce(func.max(CustomerRecord.loyalty_points), 0),
            func.coalesce(func.sum(CustomerRecord.loyalty_points), 0),
        )
    ).one()
    return {
        "total_customers": int(row[0] or 0),
        "avg_loyalty_points": float(row[1] or 0),
        "max_loyalty_points": float(row[2] or 0),
        "total_loyalty_points": float(row[3] or 0),
    }


# -------------------------
# Table operations
# -------------------------

def to_table(record: TableRecord) -> Table:
    return Table(
        record.number,
        record.capacity,
        status=TableStatus(record.status),
        customer_id=record.customer_id,
        occupied_since=as_utc(record.occupied_since),
        reserved_until=as_utc(record.reserved_until),
        notes=record.notes,
    )


def _apply_table(record: TableRecord, table: Table) -> None:
    record.status = table.status.value
    record.capacity = table.capacity
    record.customer_id = table.customer_id
    record.occupied_since = table.occupied_since
    record.reserved_until = table.reserved_until
    record.notes = table.notes
    record.updated_at = utcnow()


def create_table(session: Session, number: int, capacity: int, notes: str | None = None) -> TableRecord | None:
    table = Table(number, capacity, notes=notes)
    record = TableRecord(number=table.number, capacity=table.capacity)
    _apply_table(record, table)
    session.add(record)
    if not _commit(session, f"create table {number}"):
        return None
    session.refresh(record)
    return record


def get_table(session: Session, number: int) -> TableRecord | None:
    return session.get(TableRecord, number)


def save_table(session: Session, table: Table) -> bool:
    record = get_table(session, table.number)
    if record is None:
        return False
    _apply_table(record, table)
    session.add(record)
    return _commit(session, f"update table {table.number}")


def load_table(session: Session, number: int) -> Table | None:
    record = get_table(session, number)
    if record is None:
        return None
    table = to_table(record)
    if table.status.value != record.status:
        save_table(session, table)
    return table


def list_tables(
    session: Session,
    *,
    status: TableStatus | None = None,
    min_capacity: int | None = None,
    max_capacity: int | None = None,
) -> List[Table]:
    statement = select(TableRecord).order_by(TableRecord.number.asc())
    if min_capacity is not None:
        statement = statement.where(TableRecord.capacity >= min_capacity)
    if max_capacity is not None:
        statement = statement.where(TableRecord.capacity <= max_capacity)

    tables = []
    expired = False
    for record in session.exec(statement).all():
        table = to_table(record)
        if table.status.value != record.status:
            _apply_table(record, table)
            session.add(record)
            expired = True
        tables.append(table)
    if expired:
        _commit(session, "expire stale reservations")

    if status is not None:
        tables = [table for table in tables if table.status is status]
    return tables


def find_best_table(session: Session, capacity: int) -> Table | None:
    candidates = list_tables(session, status=TableStatus.AVAILABLE, min_capacity=capacity)
    if not candidates:
        return None
    return min(candidates, key=lambda table: (table.capacity, table.number))


def table_has_active_orders(session: Session, number: int) -> bool:
    count = session.exec(
        select(func.count(OrderRecord.id)).where(
            OrderRecord.table_number == number,
            OrderRecord.status.in_([status.value for status in ACTIVE_STATUSES]),
        )
    ).one()
    return bool(count)


def delete_table(session: Session, record: TableRecord) -> bool:
    if table_has_active_orders(session, record.number):
        raise ValueError("Cannot delete a table with active orders")
    session.delete(record)
    return _commit(session, f"delete table {record.number}")


def compute_table_stats(session: Session) -> dict:
    tables = list_tables(session)
    counts = {status: 0 for status in TableStatus}
    for table in tables:
        counts[table.status] += 1
    in_service = len(tables) - counts[TableStatus.OUT_OF_SERVICE]
    return {
        "total_tables": len(tables),
        "available_tables": counts[TableStatus.AVAILABLE],
        "occupied_tables": counts[TableStatus.OCCUPIED],
        "reserved_tables": counts[TableStatus.RESERVED],
        "out_of_service_tables": counts[TableStatus.OUT_OF_SERVICE],
        "total_capacity": sum(table.capacity for table in tables),
        "occupancy_rate": counts[TableStatus.OCCUPIED] / in_service * 100 if in_service else 0.0,
    }


# -------------------------
# Order operations
# -------------------------

def _line_record(order_id: int, item: OrderItem) -> OrderLineRecord:
    menu_item = item.menu_item
    line = OrderLineRecord(
        order_id=order_id,
        menu_item_id=menu_item.id,
        menu_item_name=menu_item.name,
        category=menu_item.category,
        quantity=item.quantity,
        unit_price=round(item.unit_price, 2),
        total_price=round(item.line_total, 2),
        note=item.note or None,
    )
    if isinstance(menu_item, Coffee):
        line.size = menu_item.size.value
        line.is_hot = menu_item.is_hot
        line.extras = list(menu_item.customizations)
    return line


def create_order(session: Session, order: Order) -> int | None:
    """Insert the order header and all of its lines in one transaction."""
    now = utcnow()
    record = OrderRecord(
        customer_id=order.customer_id,
        status=order.status.value,
        service_type=order.service_type.value,
        table_number=order.table_number,
        subtotal=order.subtotal,
        tax=order.tax,
        discount=order.discount,
        total_amount=order.total,
        special_instructions=order.special_instructions or None,
        order_time=order.created_at,
        updated_at=now,
    )
    try:
        session.add(record)
        session.flush()
        order_id = record.id
        session.add_all([_line_record(order_id, item) for item in order.items])
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Failed to create order for customer %s: %s", order.customer_id, exc)
        return None
    order.id = order_id
    return order_id


def get_order(session: Session, order_id: int) -> OrderRecord | None:
    return session.get(OrderRecord, order_id)


def get_order_lines(session: Session, order_id: int) -> List[OrderLineRecord]:
    statement = select(OrderLineRecord).where(OrderLineRecord.order_id == order_id).order_by(OrderLineRecord.id.asc())
    return list(session.exec(statement))


def to_order(record: OrderRecord, lines: List[OrderLineRecord], *, tax_rate: float = TAX_RATE) -> Order:
    """Rebuild a domain order; lines are priced as they were charged."""
    order = Order(
        record.id,
        record.customer_id,
        record.service_type,
        status=OrderStatus(record.status),
        created_at=as_utc(record.order_time),
        completed_at=as_utc(record.completion_time),
        tax_rate=tax_rate,
    )
    order.set_table_number(record.table_number)
    order.set_special_instructions(record.special_instructions)
    for line in lines:
        snapshot = PlainItem(
            id=line.menu_item_id,
            name=line.menu_item_name,
            base_price=line.unit_price,
            category=line.category,
        )
        order.add_item(snapshot, line.quantity, line.note)
    order.set_discount(record.discount)
    return order


def load_order(session: Session, order_id: int, *, tax_rate: float = TAX_RATE) -> Order | None:
    record = get_order(session, order_id)
    if record is None:
        return None
    return to_order(record, get_order_lines(session, order_id), tax_rate=tax_rate)


def list_orders(
    session: Session,
    *,
    status: OrderStatus | None = None,
    customer_id: int | None = None,
    table_number: int | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    newest_first: bool = True,
) -> List[OrderRecord]:
    statement = select(OrderRecord)
    if status is not None:
        statement = statement.where(OrderRecord.status == status.value)
    if customer_id is not None:
        statement = statement.where(OrderRecord.customer_id == customer_id)
    if table_number is not None:
        statement = statement.where(OrderRecord.table_number == table_number)
    if start is not None:
        statement = statement.where(OrderRecord.order_time >= start)
    if end is not None:
        statement = statement.where(OrderRecord.order_time <= end)
    if newest_first:
        statement = statement.order_by(OrderRecord.order_time.desc(), OrderRecord.id.desc())
    else:
        statement = statement.order_by(OrderRecord.order_time.asc(), OrderRecord.id.asc())
    return list(session.exec(statement))


def update_order_status(session: Session, order: Order) -> bool:
    record = get_order(session, order.id)
    if record is None:
        return False
    record.status = order.status.value
    record.completion_time = order.completed_at
    record.updated_at = utcnow()
    session.add(record)
    return _commit(session, f"update status of order {order.id}")


def delete_order(session: Session, record: OrderRecord) -> bool:
    payment_count = session.exec(
        select(func.count(PaymentRecord.id)).where(PaymentRecord.order_id == record.id)
    ).one()
    if payment_count:
        raise ValueError("Cannot delete an order that has payments")
    for line in get_order_lines(session, record.id):
        session.delete(line)
    session.delete(record)
    return _commit(session, f"delete order {record.id}")


def compute_order_stats(session: Session) -> dict:
    def count_status(status: OrderStatus):
        return func.coalesce(func.sum(case((OrderRecord.status == status.value, 1), else_=0)), 0)

    row = session.exec(
        select(
            func.count(OrderRecord.id),
            func.coalesce(func.sum(OrderRecord.total_amount), 0),
            func.coalesce(func.avg(OrderRecord.total_amount), 0),
            *[count_status(status) for status in OrderStatus],
        )
    ).one()
    stats = {
        "total_orders": int(row[0] or 0),
        "total_revenue": float(row[1] or 0),
        "avg_order_value": float(row[2] or 0),
    }
    for status, value in zip(OrderStatus, row[3:]):
        stats[f"{status.value.lower()}_orders"] = int(value or 0)
    return stats


# -------------------------
# Payment operations
# -------------------------

def to_payment(record: PaymentRecord) -> Payment:
    payment = Payment(
        record.id,
        record.order_id,
        PaymentMethod(record.method),
        record.amount,
        status=PaymentStatus(record.status),
        created_at=as_utc(record.created_at),
    )
    payment.amount_paid = record.amount_paid
    payment.change_given = record.change_given
    payment.transaction_reference = record.transaction_reference or ""
    payment.card_last_four = record.card_last_four or ""
    payment.failure_reason = record.failure_reason or ""
    payment.paid_at = as_utc(record.paid_at)
    return payment


def _apply_payment(record: PaymentRecord, payment: Payment) -> None:
    record.status = payment.status.value
    record.amount_paid = round(payment.amount_paid, 2)
    record.change_given = round(payment.change_given, 2)
    record.transaction_reference = payment.transaction_reference or None
    record.card_last_four = payment.card_last_four or None
    record.failure_reason = payment.failure_reason or None
    record.paid_at = payment.paid_at
    record.updated_at = utcnow()


def create_payment(session: Session, payment: Payment) -> PaymentRecord | None:
    record = PaymentRecord(
        order_id=payment.order_id,
        method=payment.method.value,
        amount=payment.amount,
        created_at=payment.created_at,
    )
    _apply_payment(record, payment)
    session.add(record)
    if not _commit(session, f"create payment for order {payment.order_id}"):
        return None
    session.refresh(record)
    payment.id = record.id
    return record


def save_payment(session: Session, payment: Payment) -> bool:
    record = get_payment(session, payment.id)
    if record is None:
        return False
    _apply_payment(record, payment)
    session.add(record)
    return _commit(session, f"update payment {payment.id}")


def get_payment(session: Session, payment_id: int) -> PaymentRecord | None:
    return session.get(PaymentRecord, payment_id)


def load_payment(session: Session, payment_id: int) -> Payment | None:
    record = get_payment(session, payment_id)
    return to_payment(record) if record is not None else None


def get_payment_by_reference(session: Session, reference: str) -> PaymentRecord | None:
    return session.exec(select(PaymentRecord).where(PaymentRecord.transaction_reference == reference)).first()


def list_payments(
    session: Session,
    *,
    order_id: int | None = None,
    status: PaymentStatus | None = None,
    method: PaymentMethod | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> List[PaymentRecord]:
    statement = select(PaymentRecord)
    if order_id is not None:
        statement = statement.where(PaymentRecord.order_id == order_id)
    if status is not None:
        statement = statement.where(PaymentRecord.status == status.value)
    if method is not None:
        statement = statement.where(PaymentRecord.method == method.value)
    if start is not None:
        statement = statement.where(PaymentRecord.created_at >= start)
    if end is not None:
        statement = statement.where(PaymentRecord.created_at <= end)
    statement = statement.order_by(PaymentRecord.created_at.desc(), PaymentRecord.id.desc())
    return list(session.exec(statement))


def order_has_completed_payment(session: Session, order_id: int) -> bool:
    count = session.exec(
        select(func.count(PaymentRecord.id)).where(
            PaymentRecord.order_id == order_id,
            PaymentRecord.status == PaymentStatus.COMPLETED.value,
        )
    ).one()
    return bool(count)


def total_paid_for_order(session: Session, order_id: int) -> float:
    total = session.exec(
        select(func.coalesce(func.sum(PaymentRecord.amount), 0)).where(
            PaymentRecord.order_id == order_id,
            PaymentRecord.status == PaymentStatus.COMPLETED.value,
        )
    ).one()
    return float(total or 0)


def compute_payment_stats(session: Session) -> dict:
    def count_where(column, value: str):
        return func.coalesce(func.sum(case((column == value, 1), else_=0)), 0)

    completed = PaymentRecord.status == PaymentStatus.COMPLETED.value
    row = session.exec(
        select(
            func.count(PaymentRecord.id),
            func.coalesce(func.sum(case((completed, PaymentRecord.amount), else_=0)), 0),
            func.coalesce(func.avg(PaymentRecord.amount), 0),
            *[count_where(PaymentRecord.status, status.value) for status in PaymentStatus],
            *[count_where(PaymentRecord.method, method.value) for method in PaymentMethod],
        )
    ).one()
    total = int(row[0] or 0)
    stats = {
        "total_payments": total,
        "total_revenue": float(row[1] or 0),
        "avg_payment_amount": float(row[2] or 0),
    }
    offset = 3
    for status in PaymentStatus:
        stats[f"{status.value.lower()}_payments"] = int(row[offset] or 0)
        offset += 1
    stats["by_method"] = {}
    for method in PaymentMethod:
        stats["by_method"][method.value] = int(row[offset] or 0)
        offset += 1
    stats["success_rate"] = stats["completed_payments"] / total * 100 if total else 0.0
    return stats


# -------------------------
# Ingredient operations
# -------------------------

def to_ingredient(record: IngredientRecord) -> Ingredient:
    return Ingredient(
        record.id,
        record.name,
        record.unit,
        record.minimum_stock,
        record.cost_per_unit,
        description=record.description,
        current_stock=record.current_stock,
        maximum_stock=record.maximum_stock,
        expiration_date=record.expiration_date,
        supplier=record.supplier,
        is_active=record.is_active,
    )


def _apply_ingredient(record: IngredientRecord, ingredient: Ingredient) -> None:
    record.name = ingredient.name
    record.description = ingredient.description or None
    record.unit = ingredient.unit.value
    record.current_stock = ingredient.current_stock
    record.minimum_stock = ingredient.minimum_stock
    record.maximum_stock = ingredient.maximum_stock
    record.cost_per_unit = ingredient.cost_per_unit
    record.expiration_date = ingredient.expiration_date
    record.supplier = ingredient.supplier or None
    record.is_active = ingredient.is_active
    record.updated_at = utcnow()


def create_ingredient(session: Session, ingredient: Ingredient) -> IngredientRecord | None:
    record = IngredientRecord(name=ingredient.name, unit=ingredient.unit.value, created_at=utcnow())
    _apply_ingredient(record, ingredient)
    session.add(record)
    if not _commit(session, f"create ingredient {ingredient.name!r}"):
        return None
    session.refresh(record)
    ingredient.id = record.id
    return record


def get_ingredient(session: Session, ingredient_id: int) -> IngredientRecord | None:
    return session.get(IngredientRecord, ingredient_id)


def get_ingredient_by_name(session: Session, name: str) -> IngredientRecord | None:
    return session.exec(select(IngredientRecord).where(IngredientRecord.name == name)).first()


def load_ingredient(session: Session, ingredient_id: int) -> Ingredient | None:
    record = get_ingredient(session, ingredient_id)
    return to_ingredient(record) if record is not None else None


def save_ingredient(session: Session, ingredient: Ingredient) -> bool:
    record = get_ingredient(session, ingredient.id)
    if record is None:
        return False
    _apply_ingredient(record, ingredient)
    session.add(record)
    return _commit(session, f"update ingredient {ingredient.id}")


def list_ingredients(
    session: Session,
    *,
    search: str | None = None,
    supplier: str | None = None,
    low_stock: bool = False,
    out_of_stock: bool = False,
    expired: bool = False,
    expiring_within: int | None = None,
) -> List[IngredientRecord]:
    statement = select(IngredientRecord)
    if search:
        statement = statement.where(IngredientRecord.name.contains(search))
    if supplier:
        statement = statement.where(IngredientRecord.supplier.contains(supplier))
    if low_stock:
        statement = statement.where(IngredientRecord.current_stock <= IngredientRecord.minimum_stock)
    if out_of_stock:
        statement = statement.where(IngredientRecord.current_stock <= 0)
    if expired:
        statement = statement.where(IngredientRecord.expiration_date < today())
    if expiring_within is not None:
        statement = statement.where(
            IngredientRecord.expiration_date.between(today(), today() + timedelta(days=expiring_within))
        )
    statement = statement.order_by(IngredientRecord.name.asc())
    return list(session.exec(statement))


def list_suppliers(session: Session) -> List[str]:
    statement = (
        select(IngredientRecord.supplier)
        .where(IngredientRecord.supplier.is_not(None))
        .distinct()
        .order_by(IngredientRecord.supplier.asc())
    )
    return list(session.exec(statement))


def delete_ingredient(session: Session, record: IngredientRecord) -> bool:
    session.delete(record)
    return _commit(session, f"delete ingredient {record.id}")


def compute_inventory_stats(session: Session) -> dict:
    ingredients = [to_ingredient(record) for record in list_ingredients(session)]
    total_value = sum(ingredient.stock_value for ingredient in ingredients)
    return {
        "total_ingredients": len(ingredients),
        "low_stock_count": sum(1 for ingredient in ingredients if ingredient.is_low_stock),
        "out_of_stock_count": sum(1 for ingredient in ingredients if ingredient.is_out_of_stock),
        "expired_count": sum(1 for ingredient in ingredients if ingredient.is_expired()),
        "total_inventory_value": total_value,
        "avg_ingredient_value": total_value / len(ingredients) if ingredients else 0.0,
    }


# -------------------------
# Sample data
# -------------------------

def ensure_sample_data(session: Session) -> None:
    existing_count = session.exec(select(func.count(MenuItemRecord.id))).one()
    if existing_count:
        return
    now = utcnow()
    for item in DEFAULT_MENU_ITEMS:
        session.add(MenuItemRecord(**item, is_available=True, created_at=now, updated_at=now))
    for customer in DEFAULT_CUSTOMERS:
        session.add(CustomerRecord(**customer, registered_at=now, updated_at=now))
    for number, capacity in DEFAULT_TABLES:
        if session.get(TableRecord, number) is None:
            session.add(TableRecord(number=number, capacity=capacity, created_at=now, updated_at=now))
    session.commit()
