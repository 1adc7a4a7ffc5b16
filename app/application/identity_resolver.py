import logging
from typing import Dict, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.interfaces.ICustomerRepository import ICustomerRepository
from app.interfaces.IOrderRepository import IOrderRepository
from app.infrastructure.notification_service import normalize_phone
from app.infrastructure.otp_store import OtpStore

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Maps a verified phone number to a customer profile and its orders."""

    def __init__(self, otp_store: OtpStore, customer_repo: ICustomerRepository,
                 order_repo: IOrderRepository):
        self.otp_store = otp_store
        self.customer_repo = customer_repo
        self.order_repo = order_repo

    def login(self, phone: Optional[str]) -> Dict:
        if not phone:
            raise ValidationError("Phone is required")
        self.otp_store.consume(phone, "Phone not verified. Please verify OTP first.")

        # One profile per number, however the SPA spelled it
        customer = self.customer_repo.get_or_create_by_phone(normalize_phone(phone))
        return customer.to_profile()

    def get_profile(self, customer_id: str) -> Dict:
        customer = self.customer_repo.get(customer_id)
        if customer is None:
            raise NotFoundError("Profile not found")
        return customer.to_profile()

    def change_phone(self, customer_id: str, new_phone: Optional[str]) -> Dict:
        if not new_phone:
            raise ValidationError("New phone is required")
        # Check the profile before spending the OTP on it
        if self.customer_repo.get(customer_id) is None:
            raise NotFoundError("Profile not found")

        self.otp_store.consume(new_phone, "New phone not verified.")

        new_phone = normalize_phone(new_phone)
        customer = self.customer_repo.change_phone(customer_id, new_phone)
        if customer is None:
            raise NotFoundError("Profile not found")
        logger.info(f"📱 Customer {customer_id} now uses {new_phone}")
        return customer.to_profile()

    def orders_for(self, customer_id: str) -> List[Dict]:
        return [order.to_dict() for order in self.order_repo.get_orders_for_customer(customer_id)]
