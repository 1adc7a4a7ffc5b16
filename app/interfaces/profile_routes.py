from fastapi import APIRouter, Depends

from app.application.identity_resolver import IdentityResolver
from app.domain.schemas import LoginRequest, PhoneChangeRequest
from app.interfaces.dependencies import get_identity

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.post("/login")
def login(payload: LoginRequest, identity: IdentityResolver = Depends(get_identity)):
    return {"profile": identity.login(payload.phone)}


@router.get("/{customer_id}")
def get_profile(customer_id: str, identity: IdentityResolver = Depends(get_identity)):
    return {"profile": identity.get_profile(customer_id)}


@router.put("/{customer_id}/phone")
def change_phone(customer_id: str, payload: PhoneChangeRequest,
                 identity: IdentityResolver = Depends(get_identity)):
    return {"profile": identity.change_phone(customer_id, payload.new_phone)}


@router.get("/{customer_id}/orders")
def get_profile_orders(customer_id: str, identity: IdentityResolver = Depends(get_identity)):
    return identity.orders_for(customer_id)
