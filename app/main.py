import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.config import settings
from app.core.errors import (
    StorefrontError,
    integrity_error_handler,
    request_validation_handler,
    storefront_error_handler,
)

# 1. Infrastructure & Domain Imports
from app.domain.models import Banner, Category, Enquiry, Product
from app.infrastructure.database import Base, SessionLocal, engine as default_engine
from app.infrastructure.notification_service import NotificationService
from app.infrastructure.otp_store import OtpStore
from app.infrastructure.repositories.crud_repository import CrudRepository
from app.infrastructure.repositories.customer_repository import SqlCustomerRepository
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from app.infrastructure.repositories.setting_repository import SqlSettingsProvider
from app.application.catalog import Catalog
from app.application.identity_resolver import IdentityResolver
from app.application.order_intake import OrderIntake
from app.application.verification import VerificationService
from app.interfaces import (
    catalog_routes,
    enquiry_routes,
    order_routes,
    otp_routes,
    profile_routes,
    settings_routes,
    upload_routes,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


# ---------------------------------------------------------
# DATABASE CONNECTION (With Retry Logic)
# ---------------------------------------------------------
def init_database(engine, retries: int = settings.DB_CONNECT_RETRIES,
                  wait_seconds: int = settings.DB_RETRY_WAIT_SECONDS) -> bool:
    for attempt in range(retries):
        try:
            logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{retries})...")
            Base.metadata.create_all(bind=engine)
            logger.info("✅ DB Connected and Tables Created.")
            return True
        except OperationalError:
            logger.warning(f"⚠️ DB not ready yet. Waiting {wait_seconds}s...")
            time.sleep(wait_seconds)
    logger.error("❌ Could not connect to DB after retries.")
    return False


# ---------------------------------------------------------
# OTP SWEEP
# ---------------------------------------------------------
async def sweep_expired_otps(otp_store: OtpStore, interval_seconds: int):
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            otp_store.purge_expired()
        except Exception as e:
            logger.error(f"❌ OTP sweep failed: {e}", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = asyncio.create_task(
        sweep_expired_otps(app.state.otp_store, settings.OTP_SWEEP_INTERVAL_SECONDS)
    )
    yield
    sweeper.cancel()
    try:
        await sweeper
    except asyncio.CancelledError:
        pass


# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
def create_app(session_factory=None, engine=None, otp_store: OtpStore | None = None,
               http=None, upload_dir: str | None = None) -> FastAPI:
    session_factory = session_factory or SessionLocal
    init_database(engine or default_engine)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)

    otp_store = otp_store or OtpStore(
        ttl_seconds=settings.OTP_TTL_SECONDS,
        resend_cooldown_seconds=settings.OTP_RESEND_COOLDOWN_SECONDS,
        max_attempts=settings.OTP_MAX_ATTEMPTS,
    )
    settings_provider = SqlSettingsProvider(session_factory)
    notifier = NotificationService(settings_provider, http=http)
    order_repo = SqlOrderRepository(session_factory)
    customer_repo = SqlCustomerRepository(session_factory)
    catalog = Catalog(
        products=CrudRepository(Product, session_factory),
        categories=CrudRepository(Category, session_factory, order_by="name", descending=False),
        banners=CrudRepository(Banner, session_factory),
        enquiries=CrudRepository(Enquiry, session_factory),
    )

    app.state.otp_store = otp_store
    app.state.settings_provider = settings_provider
    app.state.notifier = notifier
    app.state.order_repo = order_repo
    app.state.catalog = catalog
    app.state.verification = VerificationService(otp_store, notifier)
    app.state.order_intake = OrderIntake(otp_store, catalog.products, order_repo, notifier)
    app.state.identity = IdentityResolver(otp_store, customer_repo, order_repo)

    upload_dir = upload_dir or settings.UPLOAD_DIR
    os.makedirs(upload_dir, exist_ok=True)
    app.state.upload_dir = upload_dir
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    # Include Routers
    app.include_router(otp_routes.router)
    app.include_router(profile_routes.router)
    app.include_router(order_routes.router)
    app.include_router(catalog_routes.router)
    app.include_router(enquiry_routes.router)
    app.include_router(settings_routes.router)
    app.include_router(upload_routes.router)

    @app.get("/")
    def health_check():
        return {"status": "active", "system": settings.PROJECT_NAME}

    @app.get("/admin/orders", response_class=HTMLResponse)
    def read_orders(request: Request):
        # Get latest 20 orders
        orders = request.app.state.order_repo.get_all_orders(limit=20)
        return templates.TemplateResponse(request, "dashboard.html", {"orders": orders})

    return app


app = create_app()
