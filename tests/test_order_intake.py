import pytest
from sqlalchemy import event

from app.application.order_intake import OrderIntake, PENDING_MESSAGE, SENT_MESSAGE
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.domain.models import ORDER_KIND_CART, ORDER_KIND_SINGLE, Product
from app.infrastructure.database import Base, make_engine, make_session_factory
from app.infrastructure.repositories.crud_repository import CrudRepository
from app.infrastructure.repositories.customer_repository import SqlCustomerRepository
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from tests.conftest import FakeResponse

PHONE = "919000000001"


# ---------------------------------------------------------
# SINGLE PRODUCT
# ---------------------------------------------------------

def test_guest_order_requires_verified_phone(intake, make_product, order_repo):
    product = make_product()

    with pytest.raises(AuthorizationError):
        intake.place_order(product.id, 1, PHONE)
    assert order_repo.get_all_orders() == []


def test_guest_order_snapshots_price(intake, make_product, catalog, order_repo,
                                     verified_phone, configured_whatsapp):
    product = make_product(price=45000.0)
    verified_phone(PHONE)

    response = intake.place_order(product.id, 2, PHONE)

    order = response["order"]
    assert order["kind"] == ORDER_KIND_SINGLE
    assert order["productName"] == "6N40 Rice Polisher"
    assert order["productPrice"] == 45000.0
    assert order["quantity"] == 2
    assert order["totalAmount"] == 90000.0
    assert order["status"] == "Pending"
    assert order["customerId"] is None

    catalog.products.update(product.id, {"price": 99999.0})
    stored = order_repo.get(order["_id"])
    assert stored.total_amount == 90000.0
    assert stored.product_price == 45000.0


def test_guest_verification_is_spent_by_the_order(intake, make_product, verified_phone):
    product = make_product()
    verified_phone(PHONE)
    intake.place_order(product.id, 1, PHONE)

    with pytest.raises(AuthorizationError):
        intake.place_order(product.id, 1, PHONE)


def test_logged_in_customer_skips_otp(intake, make_product, customer_repo):
    customer = customer_repo.get_or_create_by_phone(PHONE)
    product = make_product(price=850.0)

    response = intake.place_order(product.id, 3, PHONE, customer_id=customer.id)

    assert response["order"]["customerId"] == customer.id
    assert response["order"]["totalAmount"] == 2550.0


def test_unknown_product_is_not_found(intake, verified_phone):
    verified_phone(PHONE)

    with pytest.raises(NotFoundError):
        intake.place_order("000000000000000000000000", 1, PHONE)


@pytest.mark.parametrize("product_id, quantity, phone", [
    (None, 1, PHONE),
    ("abc", None, PHONE),
    ("abc", 1, ""),
    ("abc", 0, PHONE),
    ("abc", -2, PHONE),
])
def test_missing_fields_are_rejected(intake, product_id, quantity, phone):
    with pytest.raises(ValidationError):
        intake.place_order(product_id, quantity, phone)


def test_order_notifies_owner_then_customer(intake, make_product, verified_phone, http, configured_whatsapp):
    product = make_product()
    verified_phone(PHONE)

    response = intake.place_order(product.id, 1, PHONE)

    assert response["whatsappSent"] is True
    assert response["message"] == SENT_MESSAGE
    assert http.receivers() == ["919000000099", PHONE]
    owner_text = http.calls[0]["params"]["msgtext"]
    assert "New Order Received" in owner_text
    assert response["order"]["_id"] in owner_text
    assert "₹45,000" in http.calls[1]["params"]["msgtext"]


def test_order_survives_notification_failure(intake, make_product, verified_phone, order_repo, http):
    product = make_product()
    verified_phone(PHONE)

    # No token configured: nothing can be delivered
    response = intake.place_order(product.id, 1, PHONE)

    assert response["whatsappSent"] is False
    assert response["message"] == PENDING_MESSAGE
    assert http.calls == []
    assert len(order_repo.get_all_orders()) == 1


def test_customer_delivery_failure_only_changes_message(intake, make_product, verified_phone,
                                                        http, configured_whatsapp):
    product = make_product()
    verified_phone(PHONE)
    http.response = FakeResponse(500, {"message": "quota exceeded"})

    response = intake.place_order(product.id, 1, PHONE)

    assert response["whatsappSent"] is False
    assert response["order"]["_id"]


# ---------------------------------------------------------
# CART
# ---------------------------------------------------------

def test_cart_drops_unknown_products_with_warning(intake, make_product, verified_phone, order_repo):
    product = make_product(price=1200.0, name="Rice Mill Screen 1mm")
    verified_phone(PHONE)

    response = intake.place_cart_order(
        [{"productId": product.id, "quantity": 2}, {"productId": "bogus", "quantity": 1}],
        PHONE,
    )

    order = response["order"]
    assert order["kind"] == ORDER_KIND_CART
    assert len(order["items"]) == 1
    assert order["items"][0] == {
        "productId": product.id,
        "productName": "Rice Mill Screen 1mm",
        "productPrice": 1200.0,
        "productImage": "/uploads/polisher.png",
        "quantity": 2,
        "subtotal": 2400.0,
    }
    assert order["totalAmount"] == 2400.0
    assert len(response["warnings"]) == 1
    assert "bogus" in response["warnings"][0]
    assert len(order_repo.get_all_orders()) == 1


def test_cart_total_is_sum_of_subtotals(intake, make_product, customer_repo):
    customer = customer_repo.get_or_create_by_phone(PHONE)
    screen = make_product(name="Rice Mill Screen 1mm", price=1200.0)
    roll = make_product(name="Rubber Roll 10 inch", price=4200.0)

    response = intake.place_cart_order(
        [{"productId": screen.id, "quantity": 3}, {"productId": roll.id, "quantity": 1}],
        PHONE, customer_id=customer.id,
    )

    order = response["order"]
    assert [line["subtotal"] for line in order["items"]] == [3600.0, 4200.0]
    assert order["totalAmount"] == 7800.0
    assert response["warnings"] == []


def test_cart_with_nothing_resolvable_fails(intake, verified_phone, order_repo):
    verified_phone(PHONE)

    with pytest.raises(ValidationError) as excinfo:
        intake.place_cart_order([{"productId": "gone", "quantity": 1}], PHONE)
    assert excinfo.value.message == "No valid products found in cart"
    assert order_repo.get_all_orders() == []


def test_cart_requires_verified_phone_for_guests(intake, make_product):
    product = make_product()

    with pytest.raises(AuthorizationError):
        intake.place_cart_order([{"productId": product.id, "quantity": 1}], PHONE)


def test_empty_cart_is_rejected(intake):
    with pytest.raises(ValidationError):
        intake.place_cart_order([], PHONE)


def test_cart_sends_one_aggregate_message(intake, make_product, verified_phone, http, configured_whatsapp):
    screen = make_product(name="Rice Mill Screen 1mm", price=1200.0)
    roll = make_product(name="Rubber Roll 10 inch", price=4200.0)
    verified_phone(PHONE)

    intake.place_cart_order(
        [{"productId": screen.id, "quantity": 1}, {"productId": roll.id, "quantity": 2}],
        PHONE,
    )

    assert len(http.calls) == 2
    customer_text = http.calls[1]["params"]["msgtext"]
    assert "1. Rice Mill Screen 1mm × 1 = ₹1,200" in customer_text
    assert "2. Rubber Roll 10 inch × 2 = ₹8,400" in customer_text
    assert "Items (2)" in http.calls[0]["params"]["msgtext"]


def test_cart_line_without_product_id_is_skipped(intake, make_product, verified_phone):
    product = make_product(price=1200.0)
    verified_phone(PHONE)

    response = intake.place_cart_order(
        [{"productId": None, "quantity": 1}, {"productId": product.id, "quantity": 1}],
        PHONE,
    )

    assert [line["productId"] for line in response["order"]["items"]] == [product.id]
    assert response["warnings"] == ["A cart item without a product id was skipped"]


# ---------------------------------------------------------
# MERGED PROFILES
# ---------------------------------------------------------

@pytest.fixture
def strict_engine():
    """SQLite with foreign keys enforced, the way Postgres always is."""
    engine = make_engine("sqlite://")

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def test_checkout_with_merged_away_customer_id_still_saves(strict_engine, otp_store, notifier):
    session_factory = make_session_factory(strict_engine)
    products = CrudRepository(Product, session_factory)
    orders = SqlOrderRepository(session_factory)
    customers = SqlCustomerRepository(session_factory)
    intake = OrderIntake(otp_store, products, orders, notifier)

    survivor = customers.get_or_create_by_phone(PHONE)
    merged_away = customers.get_or_create_by_phone("919000000002")
    customers.change_phone(survivor.id, "919000000002")
    assert customers.get(merged_away.id) is None

    # A second browser tab still holds the old profile id
    product = products.create({"name": "Rubber Roll 10 inch", "price": 4200.0,
                               "original_price": 5000.0, "category": "Spare Parts", "image": ""})
    response = intake.place_order(product.id, 1, "919000000002", customer_id=merged_away.id)

    stored = orders.get(response["order"]["_id"])
    assert stored is not None
    assert stored.customer_id == merged_away.id
