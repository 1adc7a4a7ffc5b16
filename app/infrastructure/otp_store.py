import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from app.core.errors import (
    AuthorizationError,
    OtpExpiredError,
    OtpMismatchError,
    OtpNotFoundError,
    RateLimitedError,
    TooManyAttemptsError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_PHONE_DIGITS = 10


def digits_only(phone: Optional[str]) -> str:
    return "".join(ch for ch in (phone or "") if ch.isdigit())


def random_four_digit_code() -> str:
    return str(1000 + secrets.randbelow(9000))


@dataclass
class PendingVerification:
    code: str
    created_at: float
    expires_at: float
    attempts: int = 0
    verified: bool = False


class OtpStore:
    """
    One pending code per phone, kept in process memory.

    issue() hands back the code for delivery, verify() checks it and marks the
    record verified, consume() spends a verified record exactly once. Records
    are keyed by the phone's digits so "+91 90000 00001" and "919000000001"
    are the same phone.
    """

    def __init__(self,
                 ttl_seconds: int = 300,
                 resend_cooldown_seconds: int = 30,
                 max_attempts: int = 3,
                 clock: Callable[[], float] = time.time,
                 code_generator: Callable[[], str] = random_four_digit_code):
        self.ttl = ttl_seconds
        self.resend_cooldown = resend_cooldown_seconds
        self.max_attempts = max_attempts
        self.clock = clock
        self.code_generator = code_generator
        self._records: Dict[str, PendingVerification] = {}
        self._lock = threading.Lock()

    def issue(self, phone: str) -> str:
        key = digits_only(phone)
        if len(key) < MIN_PHONE_DIGITS:
            raise ValidationError("Valid phone number is required")

        now = self.clock()
        with self._lock:
            existing = self._records.get(key)
            if existing and now - existing.created_at < self.resend_cooldown:
                raise RateLimitedError(
                    f"Please wait {self.resend_cooldown} seconds before requesting a new OTP"
                )
            code = self.code_generator()
            self._records[key] = PendingVerification(
                code=code,
                created_at=now,
                expires_at=now + self.ttl,
            )
        logger.info(f"🔐 OTP issued for {key}")
        return code

    def verify(self, phone: str, code: str) -> None:
        key = digits_only(phone)
        now = self.clock()
        with self._lock:
            record = self._records.get(key)
            if record is None:
                raise OtpNotFoundError()

            if now > record.expires_at:
                del self._records[key]
                raise OtpExpiredError()

            record.attempts += 1
            if record.attempts > self.max_attempts:
                del self._records[key]
                logger.warning(f"⚠️ Too many OTP attempts for {key}")
                raise TooManyAttemptsError()

            if record.code != str(code).strip():
                raise OtpMismatchError(remaining=self.max_attempts - record.attempts)

            # Stays in the store until a login/order/phone change consumes it
            record.verified = True

    def consume(self, phone: str, message: Optional[str] = None) -> None:
        key = digits_only(phone)
        with self._lock:
            record = self._records.get(key)
            if record is None or not record.verified:
                raise AuthorizationError(message)
            del self._records[key]

    def discard(self, phone: str) -> None:
        with self._lock:
            self._records.pop(digits_only(phone), None)

    def peek(self, phone: str) -> Optional[PendingVerification]:
        with self._lock:
            return self._records.get(digits_only(phone))

    def purge_expired(self) -> int:
        now = self.clock()
        with self._lock:
            expired = [key for key, record in self._records.items() if now > record.expires_at]
            for key in expired:
                del self._records[key]
        if expired:
            logger.info(f"🧹 Purged {len(expired)} expired OTPs")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
