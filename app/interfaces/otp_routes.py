from fastapi import APIRouter, Depends

from app.application.verification import VerificationService
from app.domain.schemas import OtpSendRequest, OtpVerifyRequest
from app.interfaces.dependencies import get_verification

router = APIRouter(prefix="/api/otp", tags=["OTP"])


@router.post("/send")
def send_otp(payload: OtpSendRequest, verification: VerificationService = Depends(get_verification)):
    message = verification.send_code(payload.phone)
    return {"message": message}


@router.post("/verify")
def verify_otp(payload: OtpVerifyRequest, verification: VerificationService = Depends(get_verification)):
    message = verification.verify_code(payload.phone, payload.otp)
    return {"message": message}
