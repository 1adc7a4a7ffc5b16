import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from app.core.config import settings
from app.interfaces.ISettingsProvider import ISettingsProvider, NEXTSMS_TOKEN_KEY, OWNER_PHONE_KEY

logger = logging.getLogger(__name__)

TOKEN_MISSING_ERROR = "WhatsApp API token not configured. Please set it in Admin Panel."


@dataclass
class DeliveryResult:
    success: bool
    error: Optional[str] = None
    data: Any = None


def normalize_phone(phone: str, country_code: str = settings.DEFAULT_COUNTRY_CODE) -> str:
    """Digits only, with the country code NextSMS expects (e.g. 9876543210 -> 919876543210)."""
    receiver = "".join(ch for ch in (phone or "") if ch.isdigit())
    if len(receiver) == 10:
        receiver = country_code + receiver
    if receiver.startswith("0"):
        receiver = country_code + receiver[1:]
    return receiver


class NotificationService:
    """
    WhatsApp delivery through the NextSMS HTTP API.

    The API token is looked up on every send so a change in the admin panel
    applies immediately. Failures are returned, never raised; callers decide
    whether a failed delivery matters.
    """

    def __init__(self, settings_provider: ISettingsProvider, http=None,
                 api_url: str = settings.NEXTSMS_API_URL,
                 timeout: float = settings.WHATSAPP_TIMEOUT_SECONDS):
        self.settings_provider = settings_provider
        self.http = http or requests.Session()
        self.api_url = api_url
        self.timeout = timeout

    def send(self, phone: str, text: str, media_url: str = "") -> DeliveryResult:
        token = self.settings_provider.get(NEXTSMS_TOKEN_KEY)
        if not token:
            logger.error("❌ NextSMS API token not configured. Set it from Admin Panel → WhatsApp Settings.")
            return DeliveryResult(success=False, error=TOKEN_MISSING_ERROR)

        receiver = normalize_phone(phone)
        params = {"receiver": receiver, "msgtext": text, "token": token}
        if media_url:
            params["mediaUrl"] = media_url

        try:
            response = self.http.get(self.api_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ WhatsApp send error: {e}")
            return DeliveryResult(success=False, error=str(e))

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.ok:
            logger.info(f"📤 WhatsApp message sent to {receiver}")
            return DeliveryResult(success=True, data=data)

        error = data.get("message") if isinstance(data, dict) else None
        logger.error(f"❌ NextSMS API error ({response.status_code}): {data}")
        return DeliveryResult(success=False, error=error or "Failed to send message", data=data)

    def notify_owner(self, text: str) -> Optional[DeliveryResult]:
        """Sends to the merchant's number. None when no owner phone is configured."""
        owner_phone = self.settings_provider.get(OWNER_PHONE_KEY) or ""
        if not owner_phone:
            logger.warning("⚠️ Owner phone not configured. Skipping merchant notification.")
            return None
        return self.send(owner_phone, text)
