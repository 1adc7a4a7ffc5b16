import logging

from app.core.errors import ConfigurationError, UpstreamError, ValidationError
from app.domain.messages import otp_message
from app.infrastructure.notification_service import NotificationService, TOKEN_MISSING_ERROR
from app.infrastructure.otp_store import OtpStore

logger = logging.getLogger(__name__)


class VerificationService:
    """Issues OTPs over WhatsApp and checks them."""

    def __init__(self, otp_store: OtpStore, notifier: NotificationService):
        self.otp_store = otp_store
        self.notifier = notifier

    def send_code(self, phone: str) -> str:
        if not phone:
            raise ValidationError("Valid phone number is required")

        code = self.otp_store.issue(phone)
        result = self.notifier.send(phone, otp_message(code))
        if not result.success:
            # No point keeping a code the customer never received
            self.otp_store.discard(phone)
            if result.error == TOKEN_MISSING_ERROR:
                raise ConfigurationError(result.error)
            raise UpstreamError(result.error or "Failed to send OTP. Please try again.")
        return "OTP sent to your WhatsApp!"

    def verify_code(self, phone: str, code: str) -> str:
        if not phone or not code:
            raise ValidationError("Phone and OTP are required")
        self.otp_store.verify(phone, code)
        return "OTP verified successfully!"
