from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from . import crud, schemas, services
from .config import Settings, get_settings
from .database import create_db_engine, get_session, init_db
from .domain import Ingredient, OrderStatus, PaymentMethod, PaymentStatus, TableStatus
from .gateway import PaymentGateway, build_gateway

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def verify_access_key(
    request: Request,
    x_access_key: Annotated[str | None, Header(alias="X-Access-Key")] = None,
) -> None:
    access_key = request.app.state.settings.access_key
    if access_key and x_access_key != access_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access key",
        )


AccessGuard = Annotated[None, Depends(verify_access_key)]
SessionDep = Annotated[Session, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def create_app(settings: Settings | None = None, gateway: PaymentGateway | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Coffee Shop POS", version="0.1.0")
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)
    app.state.gateway = gateway or build_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def on_startup() -> None:
        try:
            init_db(app.state.engine)
            if settings.seed_sample_data:
                with Session(app.state.engine) as session:
                    crud.ensure_sample_data(session)
        except Exception:
            logger.exception("Could not initialise the database at %s", settings.database_url)
            raise

    app.include_router(router)
    return app


@router.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


# -------------------------
# Menu
# -------------------------

@router.get("/menu-items", response_model=List[schemas.MenuItemRead])
def list_menu_items(
    session: SessionDep,
    available_only: bool = False,
    category: Optional[str] = None,
):
    return crud.list_menu_items(session, available_only=available_only, category=category)


@router.get("/menu-items/categories", response_model=List[str])
def list_categories(session: SessionDep):
    return crud.list_categories(session)


@router.get("/menu-items/{menu_item_id}", response_model=schemas.MenuItemRead)
def get_menu_item(menu_item_id: int, session: SessionDep):
    return _menu_item_or_404(session, menu_item_id)


@router.post("/menu-items", response_model=schemas.MenuItemRead, status_code=status.HTTP_201_CREATED)
def create_menu_item(payload: schemas.MenuItemCreate, _: AccessGuard, session: SessionDep):
    item = crud.create_menu_item(session, payload.model_dump(mode="json"))
    if item is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu item could not be saved")
    return item


@router.put("/menu-items/{menu_item_id}", response_model=schemas.MenuItemRead)
def update_menu_item(
    menu_item_id: int,
    payload: schemas.MenuItemUpdate,
    _: AccessGuard,
    session: SessionDep,
):
    menu_item = _menu_item_or_404(session, menu_item_id)
    updated = crud.update_menu_item(session, menu_item, payload.model_dump(mode="json", exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu item could not be saved")
    return updated


@router.post("/menu-items/{menu_item_id}/availability", response_model=schemas.MenuItemRead)
def set_menu_item_availability(
    menu_item_id: int,
    payload: schemas.AvailabilityUpdate,
    _: AccessGuard,
    session: SessionDep,
):
    menu_item = _menu_item_or_404(session, menu_item_id)
    return crud.set_menu_item_availability(session, menu_item, payload.is_available)


@router.delete("/menu-items/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(menu_item_id: int, _: AccessGuard, session: SessionDep):
    menu_item = _menu_item_or_404(session, menu_item_id)
    try:
        deleted = crud.delete_menu_item(session, menu_item)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Menu item is still referenced")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------
# Customers
# -------------------------

@router.post("/customers", response_model=schemas.CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(payload: schemas.CustomerCreate, session: SessionDep):
    customer = crud.create_customer(session, payload.model_dump())
    if customer is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered")
    return customer


@router.get("/customers", response_model=List[schemas.CustomerRead])
def list_customers(_: AccessGuard, session: SessionDep, search: Optional[str] = None):
    return crud.list_customers(session, search=search)


@router.get("/customers/top-loyalty", response_model=List[schemas.CustomerRead])
def top_loyalty_customers(_: AccessGuard, session: SessionDep, limit: int = 10):
    return crud.top_loyalty_customers(session, limit)


@router.get("/customers/lookup", response_model=schemas.CustomerRead)
def lookup_customer(session: SessionDep, email: Optional[str] = None, phone: Optional[str] = None):
    if email:
        customer = crud.get_customer_by_email(session, email.strip())
    elif phone:
        customer = crud.get_customer_by_phone(session, phone.strip())
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide an email or a phone number")
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.get("/customers/{customer_id}", response_model=schemas.CustomerSummary)
def get_customer(customer_id: int, session: SessionDep, settings: SettingsDep):
    customer = crud.load_customer(session, customer_id, tax_rate=settings.tax_rate)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    last_order = customer.last_order
    return schemas.CustomerSummary(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        loyalty_points=customer.loyalty_points,
        registered_at=customer.registered_at,
        total_orders=customer.total_orders,
        total_spent=customer.total_spent,
        last_order_id=last_order.id if last_order else None,
    )


@router.get("/customers/{customer_id}/orders", response_model=List[schemas.OrderRead])
def customer_orders(customer_id: int, session: SessionDep):
    _customer_or_404(session, customer_id)
    return [_order_read(session, order) for order in crud.list_orders(session, customer_id=customer_id)]


@router.put("/customers/{customer_id}", response_model=schemas.CustomerRead)
def update_customer(
    customer_id: int,
    payload: schemas.CustomerUpdate,
    _: AccessGuard,
    session: SessionDep,
):
    customer = _customer_or_404(session, customer_id)
    updated = crud.update_customer(session, customer, payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Customer could not be saved")
    return updated


@router.post("/customers/{customer_id}/redeem", response_model=schemas.CustomerRead)
def redeem_points(customer_id: int, payload: schemas.RedeemPoints, session: SessionDep):
    _customer_or_404(session, customer_id)
    if not crud.redeem_loyalty_points(session, customer_id, payload.points):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Insufficient loyalty points")
    return crud.get_customer(session, customer_id)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, _: AccessGuard, session: SessionDep):
    customer = _customer_or_404(session, customer_id)
    try:
        deleted = crud.delete_customer(session, customer)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Customer is still referenced")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------
# Tables
# -------------------------

@router.get("/tables", response_model=List[schemas.TableRead])
def list_tables(
    session: SessionDep,
    table_status: Annotated[Optional[TableStatus], Query(alias="status")] = None,
    min_capacity: Optional[int] = None,
    max_capacity: Optional[int] = None,
):
    return crud.list_tables(session, status=table_status, min_capacity=min_capacity, max_capacity=max_capacity)


@router.get("/tables/best", response_model=schemas.TableRead)
def best_table(capacity: int, session: SessionDep):
    table = crud.find_best_table(session, capacity)
    if table is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No available table fits the party")
    return table


@router.post("/tables", response_model=schemas.TableRead, status_code=status.HTTP_201_CREATED)
def create_table(payload: schemas.TableCreate, _: AccessGuard, session: SessionDep):
    if crud.get_table(session, payload.number) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table number already exists")
    if crud.create_table(session, payload.number, payload.capacity, payload.notes) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Table could not be saved")
    return crud.load_table(session, payload.number)


@router.put("/tables/{number}", response_model=schemas.TableRead)
def update_table(number: int, payload: schemas.TableUpdate, _: AccessGuard, session: SessionDep):
    table = _table_or_404(session, number)
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("capacity") is not None:
        table.set_capacity(updates["capacity"])
    if "notes" in updates:
        table.set_notes(updates["notes"])
    return _save_table(session, table)


@router.post("/tables/{number}/reserve", response_model=schemas.TableRead)
def reserve_table(number: int, payload: schemas.TableReserve, session: SessionDep):
    table = _table_or_404(session, number)
    if not table.reserve(payload.until):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table cannot be reserved")
    return _save_table(session, table)


@router.post("/tables/{number}/occupy", response_model=schemas.TableRead)
def occupy_table(number: int, payload: schemas.TableOccupy, _: AccessGuard, session: SessionDep):
    table = _table_or_404(session, number)
    if not table.occupy(payload.customer_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table is not available")
    return _save_table(session, table)


@router.post("/tables/{number}/release", response_model=schemas.TableRead)
def release_table(number: int, _: AccessGuard, session: SessionDep):
    table = _table_or_404(session, number)
    table.make_available()
    return _save_table(session, table)


@router.post("/tables/{number}/out-of-service", response_model=schemas.TableRead)
def table_out_of_service(
    number: int,
    payload: schemas.TableOutOfService,
    _: AccessGuard,
    session: SessionDep,
):
    table = _table_or_404(session, number)
    table.set_out_of_service(payload.reason)
    return _save_table(session, table)


@router.post("/tables/{number}/in-service", response_model=schemas.TableRead)
def table_in_service(number: int, _: AccessGuard, session: SessionDep):
    table = _table_or_404(session, number)
    table.put_back_in_service()
    return _save_table(session, table)


@router.delete("/tables/{number}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(number: int, _: AccessGuard, session: SessionDep):
    record = crud.get_table(session, number)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    try:
        deleted = crud.delete_table(session, record)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table is still referenced")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------
# Orders and payments
# -------------------------

@router.post("/orders", response_model=schemas.OrderRead, status_code=status.HTTP_201_CREATED)
def place_order(payload: schemas.OrderCreate, session: SessionDep, settings: SettingsDep):
    try:
        order = services.place_order(session, payload, settings)
    except services.ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return _order_read(session, crud.get_order(session, order.id))


@router.get("/orders", response_model=List[schemas.OrderRead])
def list_orders(
    _: AccessGuard,
    session: SessionDep,
    order_status: Annotated[Optional[OrderStatus], Query(alias="status")] = None,
    customer_id: Optional[int] = None,
    table_number: Optional[int] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    orders = crud.list_orders(
        session,
        status=order_status,
        customer_id=customer_id,
        table_number=table_number,
        start=datetime.combine(start, time.min, tzinfo=timezone.utc) if start else None,
        end=datetime.combine(end, time.max, tzinfo=timezone.utc) if end else None,
    )
    return [_order_read(session, order) for order in orders]


@router.get("/orders/{order_id}", response_model=schemas.OrderRead)
def get_order(order_id: int, session: SessionDep):
    return _order_read(session, _order_or_404(session, order_id))


@router.patch("/orders/{order_id}/status", response_model=schemas.OrderRead)
def update_order_status(
    order_id: int,
    payload: schemas.OrderStatusUpdate,
    _: AccessGuard,
    session: SessionDep,
    settings: SettingsDep,
):
    try:
        services.change_order_status(session, order_id, payload.status, settings)
    except services.ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return _order_read(session, crud.get_order(session, order_id))


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, _: AccessGuard, session: SessionDep):
    order = _order_or_404(session, order_id)
    try:
        deleted = crud.delete_order(session, order)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Order is still referenced")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/orders/{order_id}/payments", response_model=schemas.PaymentRead, status_code=status.HTTP_201_CREATED)
def pay_order(
    order_id: int,
    payload: schemas.PaymentCreate,
    session: SessionDep,
    settings: SettingsDep,
    gateway: Annotated[PaymentGateway, Depends(get_gateway)],
):
    try:
        payment = services.checkout(session, order_id, payload, gateway, settings)
    except services.ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return schemas.PaymentRead.model_validate(payment)


@router.get("/orders/{order_id}/payments", response_model=List[schemas.PaymentRead])
def list_order_payments(order_id: int, session: SessionDep):
    _order_or_404(session, order_id)
    return crud.list_payments(session, order_id=order_id)


@router.get("/payments", response_model=List[schemas.PaymentRead])
def list_payments(
    _: AccessGuard,
    session: SessionDep,
    payment_status: Annotated[Optional[PaymentStatus], Query(alias="status")] = None,
    method: Optional[PaymentMethod] = None,
):
    return crud.list_payments(session, status=payment_status, method=method)


@router.get("/payments/by-reference/{reference}", response_model=schemas.PaymentRead)
def get_payment_by_reference(reference: str, _: AccessGuard, session: SessionDep):
    payment = crud.get_payment_by_reference(session, reference)
    if payment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    return payment


@router.post("/payments/{payment_id}/refund", response_model=schemas.PaymentRead)
def refund_payment(payment_id: int, _: AccessGuard, session: SessionDep):
    try:
        payment = services.refund_payment(session, payment_id)
    except services.ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return schemas.PaymentRead.model_validate(payment)


# -------------------------
# Inventory
# -------------------------

@router.get("/ingredients", response_model=List[schemas.IngredientRead])
def list_ingredients(
    _: AccessGuard,
    session: SessionDep,
    search: Optional[str] = None,
    supplier: Optional[str] = None,
    low_stock: bool = False,
    out_of_stock: bool = False,
    expired: bool = False,
    expiring_within: Optional[int] = None,
):
    records = crud.list_ingredients(
        session,
        search=search,
        supplier=supplier,
        low_stock=low_stock,
        out_of_stock=out_of_stock,
        expired=expired,
        expiring_within=expiring_within,
    )
    return [_ingredient_read(crud.to_ingredient(record)) for record in records]


@router.get("/ingredients/suppliers", response_model=List[str])
def list_suppliers(_: AccessGuard, session: SessionDep):
    return crud.list_suppliers(session)


@router.post("/ingredients", response_model=schemas.IngredientRead, status_code=status.HTTP_201_CREATED)
def create_ingredient(payload: schemas.IngredientCreate, _: AccessGuard, session: SessionDep):
    if crud.get_ingredient_by_name(session, payload.name) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Ingredient already exists")
    data = payload.model_dump()
    ingredient = Ingredient(
        None,
        data.pop("name"),
        data.pop("unit"),
        data.pop("minimum_stock"),
        data.pop("cost_per_unit"),
        **data,
    )
    if crud.create_ingredient(session, ingredient) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ingredient could not be saved")
    return _ingredient_read(ingredient)


@router.get("/ingredients/{ingredient_id}", response_model=schemas.IngredientRead)
def get_ingredient(ingredient_id: int, _: AccessGuard, session: SessionDep):
    return _ingredient_read(_ingredient_or_404(session, ingredient_id))


@router.put("/ingredients/{ingredient_id}", response_model=schemas.IngredientRead)
def update_ingredient(
    ingredient_id: int,
    payload: schemas.IngredientUpdate,
    _: AccessGuard,
    session: SessionDep,
):
    ingredient = _ingredient_or_404(session, ingredient_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        ingredient.set_name(updates["name"])
    if "description" in updates:
        ingredient.set_description(updates["description"])
    # maximum is applied on both sides of minimum so either limit can move first
    if updates.get("maximum_stock") is not None:
        ingredient.set_maximum_stock(updates["maximum_stock"])
    if updates.get("minimum_stock") is not None:
        ingredient.set_minimum_stock(updates["minimum_stock"])
    if updates.get("maximum_stock") is not None:
        ingredient.set_maximum_stock(updates["maximum_stock"])
    if updates.get("cost_per_unit") is not None:
        ingredient.set_cost_per_unit(updates["cost_per_unit"])
    if "expiration_date" in updates:
        ingredient.expiration_date = updates["expiration_date"]
    if "supplier" in updates:
        ingredient.set_supplier(updates["supplier"])
    if updates.get("is_active") is not None:
        ingredient.is_active = updates["is_active"]
    return _save_ingredient(session, ingredient)


@router.post("/ingredients/{ingredient_id}/add-stock", response_model=schemas.IngredientRead)
def add_stock(ingredient_id: int, payload: schemas.StockChange, _: AccessGuard, session: SessionDep):
    ingredient = _ingredient_or_404(session, ingredient_id)
    if not ingredient.add_stock(payload.quantity):
        logger.info("Rejected adding %s to ingredient %s", payload.quantity, ingredient_id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Stock would exceed the maximum")
    return _save_ingredient(session, ingredient)


@router.post("/ingredients/{ingredient_id}/remove-stock", response_model=schemas.IngredientRead)
def remove_stock(ingredient_id: int, payload: schemas.StockChange, _: AccessGuard, session: SessionDep):
    ingredient = _ingredient_or_404(session, ingredient_id)
    if not ingredient.remove_stock(payload.quantity):
        logger.info("Rejected removing %s from ingredient %s", payload.quantity, ingredient_id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Insufficient stock")
    return _save_ingredient(session, ingredient)


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(ingredient_id: int, _: AccessGuard, session: SessionDep):
    record = crud.get_ingredient(session, ingredient_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    if not crud.delete_ingredient(session, record):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Ingredient could not be deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------
# Reports
# -------------------------

@router.get("/reports/orders", response_model=schemas.OrderStats)
def order_report(_: AccessGuard, session: SessionDep):
    return schemas.OrderStats(**crud.compute_order_stats(session))


@router.get("/reports/payments", response_model=schemas.PaymentStats)
def payment_report(_: AccessGuard, session: SessionDep):
    return schemas.PaymentStats(**crud.compute_payment_stats(session))


@router.get("/reports/customers", response_model=schemas.CustomerStats)
def customer_report(_: AccessGuard, session: SessionDep):
    return schemas.CustomerStats(**crud.compute_customer_stats(session))


@router.get("/reports/tables", response_model=schemas.TableStats)
def table_report(_: AccessGuard, session: SessionDep):
    return schemas.TableStats(**crud.compute_table_stats(session))


@router.get("/reports/inventory", response_model=schemas.InventoryStats)
def inventory_report(_: AccessGuard, session: SessionDep):
    return schemas.InventoryStats(**crud.compute_inventory_stats(session))


def _menu_item_or_404(session: Session, menu_item_id: int):
    menu_item = crud.get_menu_item(session, menu_item_id)
    if not menu_item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return menu_item


def _customer_or_404(session: Session, customer_id: int):
    customer = crud.get_customer(session, customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


def _table_or_404(session: Session, number: int):
    table = crud.load_table(session, number)
    if table is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    return table


def _save_table(session: Session, table):
    if not crud.save_table(session, table):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Table could not be saved")
    return table


def _order_or_404(session: Session, order_id: int):
    order = crud.get_order(session, order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


def _order_read(session: Session, order) -> schemas.OrderRead:
    lines = crud.get_order_lines(session, order.id)
    return schemas.OrderRead(
        **order.model_dump(),
        amount_paid=crud.total_paid_for_order(session, order.id),
        items=[schemas.OrderLineRead.model_validate(line) for line in lines],
    )


def _ingredient_or_404(session: Session, ingredient_id: int) -> Ingredient:
    ingredient = crud.load_ingredient(session, ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


def _save_ingredient(session: Session, ingredient: Ingredient) -> schemas.IngredientRead:
    if not crud.save_ingredient(session, ingredient):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Ingredient could not be saved")
    return _ingredient_read(ingredient)


def _ingredient_read(ingredient: Ingredient) -> schemas.IngredientRead:
    return schemas.IngredientRead(
        id=ingredient.id,
        name=ingredient.name,
        description=ingredient.description or None,
        unit=ingredient.unit,
        current_stock=ingredient.current_stock,
        minimum_stock=ingredient.minimum_stock,
        maximum_stock=ingredient.maximum_stock,
        cost_per_unit=ingredient.cost_per_unit,
        expiration_date=ingredient.expiration_date,
        supplier=ingredient.supplier or None,
        is_active=ingredient.is_active,
        stock_status=ingredient.stock_status,
        stock_value=ingredient.stock_value,
        stock_percentage=ingredient.stock_percentage,
        expired=ingredient.is_expired(),
    )


app = create_app()
