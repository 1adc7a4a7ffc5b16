"""
Error taxonomy for the storefront API.

Every error raised by the application/infrastructure layers derives from
StorefrontError and carries the HTTP status it maps to. The handlers at the
bottom are registered on the FastAPI app in main.py and always answer with
{"message": "..."} so the SPA can show the text as-is.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class AuthorizationError(StorefrontError):
    status_code = 403
    default_message = "Phone number not verified. Please verify OTP first."


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class RateLimitedError(StorefrontError):
    status_code = 429
    default_message = "Please wait 30 seconds before requesting a new OTP"


# --- OTP specific (all 400) ---

class OtpError(StorefrontError):
    status_code = 400


class OtpNotFoundError(OtpError):
    default_message = "OTP expired or not found. Please request a new one."


class OtpExpiredError(OtpError):
    default_message = "OTP has expired. Please request a new one."


class TooManyAttemptsError(OtpError):
    default_message = "Too many attempts. Please request a new OTP."


class OtpMismatchError(OtpError):
    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"Incorrect OTP. {remaining} attempts remaining.")


# --- Messaging ---

class ConfigurationError(StorefrontError):
    status_code = 500
    default_message = "WhatsApp API token not configured. Please set it in Admin Panel."


class UpstreamError(StorefrontError):
    status_code = 500
    default_message = "Failed to send message"


# ---------------------------------------------------------
# FASTAPI HANDLERS
# ---------------------------------------------------------

async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", []) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"⚠️ Database integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=400, content={"message": f"Database integrity error: {exc.orig}"})
