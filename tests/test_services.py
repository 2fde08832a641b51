"""Order workflow tests: placing, paying and moving orders along."""

from datetime import timedelta

import pytest
from sqlmodel import Session

from coffee_shop import crud, services
from coffee_shop.config import Settings
from coffee_shop.domain import (
    CoffeeSize,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ServiceType,
    TableStatus,
)
from coffee_shop.domain.clock import utcnow
from coffee_shop.gateway import ApprovingGateway, DecliningGateway
from coffee_shop.schemas import OrderCreate, OrderLineCreate, PaymentCreate

JOHN, JANE, BOB = 1, 2, 3
ESPRESSO, LATTE = 1, 3


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://", _env_file=None)


def espresso_order(customer_id=JOHN, table_number=None, quantity=1):
    return OrderCreate(
        customer_id=customer_id,
        service_type=ServiceType.DINE_IN if table_number else ServiceType.TAKEAWAY,
        table_number=table_number,
        items=[OrderLineCreate(menu_item_id=ESPRESSO, quantity=quantity)],
    )


def cash(amount=50.0):
    return PaymentCreate(method=PaymentMethod.CASH, amount_tendered=amount)


class TestPlaceOrder:
    def test_coffee_lines_take_requested_options(self, seeded_session: Session, settings):
        request = OrderCreate(
            customer_id=JANE,
            items=[
                OrderLineCreate(
                    menu_item_id=LATTE,
                    quantity=2,
                    size=CoffeeSize.LARGE,
                    customizations=["oat milk", "extra shot"],
                ),
            ],
            discount=1.00,
            special_instructions="Extra hot",
        )
        order = services.place_order(seeded_session, request, settings)

        assert order.id is not None
        assert order.subtotal == pytest.approx((4.50 * 1.6 + 1.00) * 2)
        assert order.total == pytest.approx(order.subtotal * 1.08 - 1.00)
        record = crud.get_order(seeded_session, order.id)
        assert record.status == OrderStatus.PENDING.value
        assert record.special_instructions == "Extra hot"
        assert record.total_amount == pytest.approx(order.total)

    def test_catalog_item_is_not_changed_by_an_order(self, seeded_session: Session, settings):
        request = OrderCreate(
            items=[OrderLineCreate(menu_item_id=LATTE, size=CoffeeSize.SMALL, customizations=["vanilla"])],
        )
        services.place_order(seeded_session, request, settings)
        latte = crud.to_menu_item(crud.get_menu_item(seeded_session, LATTE))
        assert latte.size is CoffeeSize.MEDIUM
        assert latte.customizations == []

    def test_unknown_customer(self, seeded_session: Session, settings):
        with pytest.raises(services.NotFoundError):
            services.place_order(seeded_session, espresso_order(customer_id=99), settings)

    def test_unknown_menu_item(self, seeded_session: Session, settings):
        request = OrderCreate(items=[OrderLineCreate(menu_item_id=404)])
        with pytest.raises(services.NotFoundError):
            services.place_order(seeded_session, request, settings)

    def test_unavailable_menu_item(self, seeded_session: Session, settings):
        crud.set_menu_item_availability(seeded_session, crud.get_menu_item(seeded_session, ESPRESSO), False)
        with pytest.raises(services.ConflictError):
            services.place_order(seeded_session, espresso_order(), settings)
        assert crud.list_orders(seeded_session) == []

    def test_dine_in_needs_a_free_table(self, seeded_session: Session, settings):
        with pytest.raises(services.ServiceError):
            services.place_order(
                seeded_session,
                OrderCreate(service_type=ServiceType.DINE_IN, items=[OrderLineCreate(menu_item_id=ESPRESSO)]),
                settings,
            )
        with pytest.raises(services.NotFoundError):
            services.place_order(seeded_session, espresso_order(table_number=42), settings)

        table = crud.load_table(seeded_session, 3)
        table.set_out_of_service("Broken chair")
        crud.save_table(seeded_session, table)
        with pytest.raises(services.ConflictError):
            services.place_order(seeded_session, espresso_order(table_number=3), settings)


class TestCheckout:
    def test_cash_payment_confirms_and_seats(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(table_number=2, quantity=2), settings)
        payment = services.checkout(seeded_session, order.id, cash(10.00), ApprovingGateway(), settings)

        assert payment.status is PaymentStatus.COMPLETED
        assert payment.amount == pytest.approx(7.02)
        assert payment.change_given == pytest.approx(2.98)
        assert crud.get_order(seeded_session, order.id).status == OrderStatus.CONFIRMED.value

        table = crud.load_table(seeded_session, 2)
        assert table.status is TableStatus.OCCUPIED
        assert table.customer_id == JOHN

        john = crud.get_customer(seeded_session, JOHN)
        assert john.loyalty_points == pytest.approx(25.50 + 70.2)

    def test_declined_payment_leaves_order_pending(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        payment = services.checkout(seeded_session, order.id, cash(), DecliningGateway(), settings)

        assert payment.status is PaymentStatus.FAILED
        assert payment.failure_reason == "Payment processing failed"
        assert crud.get_order(seeded_session, order.id).status == OrderStatus.PENDING.value
        assert crud.get_customer(seeded_session, JOHN).loyalty_points == pytest.approx(25.50)

        retry = services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)
        assert retry.is_successful
        assert len(crud.list_payments(seeded_session, order_id=order.id)) == 2

    def test_short_cash_is_recorded_as_failed(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        payment = services.checkout(seeded_session, order.id, cash(1.00), ApprovingGateway(), settings)
        stored = crud.get_payment(seeded_session, payment.id)
        assert stored.status == PaymentStatus.FAILED.value
        assert stored.failure_reason == "Insufficient cash provided"
        assert stored.change_given == 0

    def test_paid_order_cannot_be_paid_again(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)
        with pytest.raises(services.ConflictError):
            services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)

    def test_unknown_order(self, seeded_session: Session, settings):
        with pytest.raises(services.NotFoundError):
            services.checkout(seeded_session, 123, cash(), ApprovingGateway(), settings)

    def test_loyalty_payment_debits_points(self, seeded_session: Session, settings):
        crud.add_loyalty_points(seeded_session, BOB, 400 - 42.25)
        order = services.place_order(seeded_session, espresso_order(customer_id=BOB), settings)
        payment = services.checkout(
            seeded_session,
            order.id,
            PaymentCreate(method=PaymentMethod.LOYALTY_POINTS),
            ApprovingGateway(),
            settings,
        )

        assert payment.is_successful
        # 3.51 at one cent per point
        assert crud.get_customer(seeded_session, BOB).loyalty_points == pytest.approx(49.0)

    def test_loyalty_payment_without_enough_points(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(customer_id=BOB), settings)
        payment = services.checkout(
            seeded_session,
            order.id,
            PaymentCreate(method=PaymentMethod.LOYALTY_POINTS),
            ApprovingGateway(),
            settings,
        )
        assert payment.status is PaymentStatus.FAILED
        assert payment.failure_reason == "Insufficient loyalty points"
        assert crud.get_customer(seeded_session, BOB).loyalty_points == pytest.approx(42.25)

    def test_loyalty_payment_needs_a_customer(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(customer_id=None), settings)
        with pytest.raises(services.ServiceError):
            services.checkout(
                seeded_session,
                order.id,
                PaymentCreate(method=PaymentMethod.LOYALTY_POINTS),
                ApprovingGateway(),
                settings,
            )

    def test_reserved_table_is_claimed_on_payment(self, seeded_session: Session, settings):
        table = crud.load_table(seeded_session, 4)
        table.reserve(utcnow() + timedelta(hours=2))
        crud.save_table(seeded_session, table)

        order = services.place_order(seeded_session, espresso_order(customer_id=JANE, table_number=4), settings)
        services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)

        table = crud.load_table(seeded_session, 4)
        assert table.status is TableStatus.OCCUPIED
        assert table.customer_id == JANE
        assert table.reserved_until is None


class TestOrderStatus:
    def test_completing_a_dine_in_order_frees_the_table(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(table_number=1), settings)
        services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)

        for status in (OrderStatus.PREPARING, OrderStatus.READY):
            services.change_order_status(seeded_session, order.id, status, settings)
            assert crud.load_table(seeded_session, 1).status is TableStatus.OCCUPIED

        done = services.change_order_status(seeded_session, order.id, OrderStatus.COMPLETED, settings)
        assert done.completed_at is not None
        assert crud.get_order(seeded_session, order.id).completion_time is not None
        assert crud.load_table(seeded_session, 1).status is TableStatus.AVAILABLE

    def test_table_stays_occupied_while_another_order_is_open(self, seeded_session: Session, settings):
        first = services.place_order(seeded_session, espresso_order(table_number=5), settings)
        second = services.place_order(seeded_session, espresso_order(table_number=5), settings)
        services.checkout(seeded_session, first.id, cash(), ApprovingGateway(), settings)

        services.change_order_status(seeded_session, second.id, OrderStatus.CANCELLED, settings)
        assert crud.load_table(seeded_session, 5).status is TableStatus.OCCUPIED

        services.change_order_status(seeded_session, first.id, OrderStatus.CANCELLED, settings)
        assert crud.load_table(seeded_session, 5).status is TableStatus.AVAILABLE

    def test_invalid_transition(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        with pytest.raises(services.ConflictError):
            services.change_order_status(seeded_session, order.id, OrderStatus.COMPLETED, settings)
        assert crud.get_order(seeded_session, order.id).status == OrderStatus.PENDING.value

    def test_cancelled_order_cannot_be_paid(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        services.change_order_status(seeded_session, order.id, OrderStatus.CANCELLED, settings)
        with pytest.raises(services.ConflictError):
            services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)


class TestRefund:
    def test_refund_once(self, seeded_session: Session, settings):
        order = services.place_order(seeded_session, espresso_order(), settings)
        payment = services.checkout(seeded_session, order.id, cash(), ApprovingGateway(), settings)

        refunded = services.refund_payment(seeded_session, payment.id)
        assert refunded.status is PaymentStatus.REFUNDED
        assert crud.get_payment(seeded_session, payment.id).status == PaymentStatus.REFUNDED.value
        with pytest.raises(services.ConflictError):
            services.refund_payment(seeded_session, payment.id)

    def test_unknown_payment(self, seeded_session: Session):
        with pytest.raises(services.NotFoundError):
            services.refund_payment(seeded_session, 77)
