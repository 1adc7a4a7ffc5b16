import os
import tempfile

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="storefront-uploads-"))

import pytest
from fastapi.testclient import TestClient

from app.application.catalog import Catalog
from app.application.identity_resolver import IdentityResolver
from app.application.order_intake import OrderIntake
from app.domain.models import Banner, Category, Enquiry, Product
from app.infrastructure.database import make_engine, make_session_factory, Base
from app.infrastructure.notification_service import NotificationService
from app.infrastructure.otp_store import OtpStore
from app.infrastructure.repositories.crud_repository import CrudRepository
from app.infrastructure.repositories.customer_repository import SqlCustomerRepository
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from app.infrastructure.repositories.setting_repository import SqlSettingsProvider
from app.interfaces.ISettingsProvider import NEXTSMS_TOKEN_KEY, OWNER_PHONE_KEY


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class SequenceCodes:
    """Hands out the given codes in order, repeating the last one."""

    def __init__(self, *codes):
        self.codes = list(codes) or ["1234"]

    def __call__(self) -> str:
        if len(self.codes) > 1:
            return self.codes.pop(0)
        return self.codes[0]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self.payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeHttp:
    """Stands in for requests.Session; records every GET instead of sending it."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, {"status": "success"})
        self.error = None

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def receivers(self):
        return [call["params"]["receiver"] for call in self.calls]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def codes():
    return SequenceCodes("1234")


@pytest.fixture
def otp_store(clock, codes):
    return OtpStore(ttl_seconds=300, resend_cooldown_seconds=30, max_attempts=3,
                    clock=clock, code_generator=codes)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def settings_provider(session_factory):
    return SqlSettingsProvider(session_factory)


@pytest.fixture
def configured_whatsapp(settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "test-token")
    settings_provider.set(OWNER_PHONE_KEY, "9000000099")
    return settings_provider


@pytest.fixture
def notifier(settings_provider, http):
    return NotificationService(settings_provider, http=http, api_url="https://nextsms.test/send", timeout=5)


@pytest.fixture
def order_repo(session_factory):
    return SqlOrderRepository(session_factory)


@pytest.fixture
def customer_repo(session_factory):
    return SqlCustomerRepository(session_factory)


@pytest.fixture
def catalog(session_factory):
    return Catalog(
        products=CrudRepository(Product, session_factory),
        categories=CrudRepository(Category, session_factory, order_by="name", descending=False),
        banners=CrudRepository(Banner, session_factory),
        enquiries=CrudRepository(Enquiry, session_factory),
    )


@pytest.fixture
def intake(otp_store, catalog, order_repo, notifier):
    return OrderIntake(otp_store, catalog.products, order_repo, notifier)


@pytest.fixture
def identity(otp_store, customer_repo, order_repo):
    return IdentityResolver(otp_store, customer_repo, order_repo)


@pytest.fixture
def make_product(catalog):
    def _make(name="6N40 Rice Polisher", price=45000.0, **extra):
        fields = {
            "name": name,
            "price": price,
            "original_price": extra.pop("original_price", price + 5000),
            "category": extra.pop("category", "Rice Mill Machines"),
            "image": extra.pop("image", "/uploads/polisher.png"),
            **extra,
        }
        return catalog.products.create(fields)
    return _make


@pytest.fixture
def verified_phone(otp_store):
    """Issue and verify an OTP for a phone, leaving it ready to be consumed."""
    def _verify(phone="919000000001"):
        code = otp_store.issue(phone)
        otp_store.verify(phone, code)
        return phone
    return _verify


@pytest.fixture
def client(engine, session_factory, otp_store, http, tmp_path):
    from app.main import create_app

    app = create_app(session_factory=session_factory, engine=engine, otp_store=otp_store,
                     http=http, upload_dir=str(tmp_path))
    return TestClient(app)
