"""Order workflows that span several entities.

Each workflow loads domain objects through ``crud``, applies the domain
rules, and writes the results back. A rejected step raises a
``ServiceError`` carrying the HTTP status the API should answer with.
"""

from __future__ import annotations

import logging

from sqlmodel import Session

from . import crud, schemas
from .config import Settings
from .domain import (
    Coffee,
    Customer,
    Order,
    OrderStatus,
    Payment,
    PaymentMethod,
    ServiceType,
    Table,
    TableStatus,
)
from .gateway import PaymentGateway

logger = logging.getLogger(__name__)


class ServiceError(ValueError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class PersistenceError(ServiceError):
    status_code = 500


def place_order(session: Session, request: schemas.OrderCreate, settings: Settings) -> Order:
    if request.customer_id is not None and crud.get_customer(session, request.customer_id) is None:
        raise NotFoundError("Customer not found")

    order = Order(None, request.customer_id, request.service_type, tax_rate=settings.tax_rate)
    for line in request.items:
        record = crud.get_menu_item(session, line.menu_item_id)
        if record is None:
            raise NotFoundError(f"Menu item {line.menu_item_id} not found")
        if not record.is_available:
            raise ConflictError(f"{record.name} is not available")
        menu_item = crud.to_menu_item(record)
        if isinstance(menu_item, Coffee):
            menu_item = menu_item.configured(
                size=line.size,
                is_hot=line.is_hot,
                customizations=line.customizations,
            )
        order.add_item(menu_item, line.quantity, line.note)
    if order.is_empty:
        raise ServiceError("Order has no items")

    if order.service_type is ServiceType.DINE_IN:
        if request.table_number is None:
            raise ServiceError("Dine-in orders need a table number")
        table = crud.load_table(session, request.table_number)
        if table is None:
            raise NotFoundError(f"Table {request.table_number} not found")
        if table.status not in (TableStatus.AVAILABLE, TableStatus.RESERVED):
            raise ConflictError(f"Table {table.number} is {table.status.value.lower()}")
        order.set_table_number(table.number)

    order.set_discount(request.discount)
    order.set_special_instructions(request.special_instructions)

    if crud.create_order(session, order) is None:
        raise PersistenceError("Order could not be saved")
    logger.info("Order %s placed: %d items, total %.2f", order.id, order.total_items, order.total)
    return order


def checkout(
    session: Session,
    order_id: int,
    request: schemas.PaymentCreate,
    gateway: PaymentGateway,
    settings: Settings,
) -> Payment:
    """Take one payment attempt for a pending order.

    On success the order is confirmed, a dine-in table is seated and the
    customer's loyalty balance is credited (or debited for a points
    payment). A failed attempt is still recorded and returned.
    """
    order = crud.load_order(session, order_id, tax_rate=settings.tax_rate)
    if order is None:
        raise NotFoundError("Order not found")
    if order.status is not OrderStatus.PENDING:
        raise ConflictError(f"Order is {order.status.value.lower()}, not awaiting payment")
    if crud.order_has_completed_payment(session, order_id):
        raise ConflictError("Order is already paid")

    customer = None
    if order.customer_id is not None:
        customer_record = crud.get_customer(session, order.customer_id)
        customer = crud.to_customer(customer_record) if customer_record else None
    if request.method is PaymentMethod.LOYALTY_POINTS and customer is None:
        raise ServiceError("Loyalty point payments need a registered customer")

    amount = round(crud.get_order(session, order_id).total_amount, 2)
    payment = Payment(None, order_id, request.method, amount)
    if crud.create_payment(session, payment) is None:
        raise PersistenceError("Payment could not be saved")

    points_needed = amount / settings.loyalty_point_value
    _process(payment, request, gateway, customer, points_needed, settings)
    if not crud.save_payment(session, payment):
        raise PersistenceError("Payment could not be saved")

    if payment.is_successful:
        _settle(session, order, payment, customer, points_needed, settings)
        logger.info("Order %s paid by %s (payment %s)", order_id, payment.method.value, payment.id)
    else:
        logger.info("Payment %s for order %s failed: %s", payment.id, order_id, payment.failure_reason)
    return payment


def _process(
    payment: Payment,
    request: schemas.PaymentCreate,
    gateway: PaymentGateway,
    customer: Customer | None,
    points_needed: float,
    settings: Settings,
) -> bool:
    method = payment.method
    if method is PaymentMethod.CASH:
        return payment.process_cash(request.amount_tendered or 0, gateway)
    if method in (PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD):
        return payment.process_card(request.card_number, request.card_expiry, request.card_cvv, gateway)
    if method is PaymentMethod.MOBILE_PAYMENT:
        return payment.process_mobile(request.mobile_payment_id, gateway)
    points_offered = min(customer.loyalty_points, points_needed)
    return payment.process_loyalty_points(points_offered, settings.loyalty_point_value, gateway)


def _settle(
    session: Session,
    order: Order,
    payment: Payment,
    customer: Customer | None,
    points_needed: float,
    settings: Settings,
) -> None:
    order.set_status(OrderStatus.CONFIRMED)
    if not crud.update_order_status(session, order):
        raise PersistenceError("Order status could not be saved")

    if order.service_type is ServiceType.DINE_IN and order.table_number is not None:
        table = crud.load_table(session, order.table_number)
        if table is not None and _seat(table, order.customer_id):
            crud.save_table(session, table)
        else:
            logger.warning("Table %s could not be occupied for order %s", order.table_number, order.id)

    if customer is None:
        return
    if payment.method is PaymentMethod.LOYALTY_POINTS:
        customer.redeem_loyalty_points(min(points_needed, customer.loyalty_points))
    else:
        customer.add_order(order, settings.loyalty_points_per_dollar)
    crud.save_loyalty_points(session, customer)


def _seat(table: Table, customer_id: int | None) -> bool:
    # The paying party claims a live reservation on its own table.
    if table.status is TableStatus.RESERVED:
        table.make_available()
    return table.occupy(customer_id)


def change_order_status(session: Session, order_id: int, status: OrderStatus, settings: Settings) -> Order:
    order = crud.load_order(session, order_id, tax_rate=settings.tax_rate)
    if order is None:
        raise NotFoundError("Order not found")
    previous = order.status
    if not order.set_status(status):
        logger.info("Rejected order %s transition %s -> %s", order_id, previous.value, status.value)
        raise ConflictError(f"Cannot move order from {previous.value} to {status.value}")
    if not crud.update_order_status(session, order):
        raise PersistenceError("Order status could not be saved")
    if order.releases_table():
        release_table(session, order.table_number)
    return order


def release_table(session: Session, table_number: int) -> bool:
    """Free an occupied table once no active order is using it."""
    table = crud.load_table(session, table_number)
    if table is None or table.status is not TableStatus.OCCUPIED:
        return False
    if crud.table_has_active_orders(session, table_number):
        return False
    table.make_available()
    return crud.save_table(session, table)


def refund_payment(session: Session, payment_id: int) -> Payment:
    payment = crud.load_payment(session, payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if not payment.refund():
        raise ConflictError(f"Cannot refund a {payment.status.value.lower()} payment")
    if not crud.save_payment(session, payment):
        raise PersistenceError("Payment could not be saved")
    logger.info("Payment %s refunded", payment_id)
    return payment
