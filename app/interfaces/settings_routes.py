from fastapi import APIRouter, Depends

from app.core.errors import ValidationError
from app.domain.messages import whatsapp_test_message
from app.domain.schemas import WhatsAppSettingsUpdate, WhatsAppTestRequest
from app.infrastructure.notification_service import NotificationService
from app.interfaces.ISettingsProvider import ISettingsProvider, NEXTSMS_TOKEN_KEY, OWNER_PHONE_KEY
from app.interfaces.dependencies import get_notifier, get_settings_provider

router = APIRouter(prefix="/api/settings/whatsapp", tags=["Settings"])


@router.get("")
def get_whatsapp_settings(provider: ISettingsProvider = Depends(get_settings_provider)):
    return {
        "token": provider.get(NEXTSMS_TOKEN_KEY) or "",
        "ownerPhone": provider.get(OWNER_PHONE_KEY) or "",
    }


@router.put("")
def update_whatsapp_settings(payload: WhatsAppSettingsUpdate,
                             provider: ISettingsProvider = Depends(get_settings_provider)):
    if payload.token is not None:
        provider.set(NEXTSMS_TOKEN_KEY, payload.token)
    if payload.owner_phone is not None:
        provider.set(OWNER_PHONE_KEY, payload.owner_phone)
    return {"message": "WhatsApp settings updated successfully!"}


@router.post("/test")
def send_test_message(payload: WhatsAppTestRequest, notifier: NotificationService = Depends(get_notifier)):
    if not payload.phone:
        raise ValidationError("Phone number is required")
    result = notifier.send(payload.phone, whatsapp_test_message())
    if not result.success:
        raise ValidationError(result.error or "Failed to send test message")
    return {"message": "Test message sent successfully!"}
