"""
Request bodies for the REST API.

Field names are snake_case in Python and camelCase on the wire (the SPA and
admin panel speak camelCase). Update models have every field optional and are
applied with exclude_unset, so a PUT only touches what the client sent.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # protected_namespaces=() so "model_number" is allowed as a field name
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


# -----------------------------
# OTP / Profile
# -----------------------------
class OtpSendRequest(CamelModel):
    phone: Optional[str] = None


class OtpVerifyRequest(CamelModel):
    phone: Optional[str] = None
    otp: Optional[str] = None


class LoginRequest(CamelModel):
    phone: Optional[str] = None


class PhoneChangeRequest(CamelModel):
    new_phone: Optional[str] = None


# -----------------------------
# Orders
# -----------------------------
class OrderCreate(CamelModel):
    # Required-ness is checked by OrderIntake so the error text matches the SPA's expectations
    product_id: Optional[str] = None
    quantity: Optional[int] = None
    customer_phone: Optional[str] = None
    customer_id: Optional[str] = None


class CartLine(CamelModel):
    product_id: Optional[str] = None
    quantity: int = Field(..., ge=1)


class CartOrderCreate(CamelModel):
    items: List[CartLine] = Field(default_factory=list)
    customer_phone: Optional[str] = None
    customer_id: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: Literal["Pending", "Processing", "Shipped", "Delivered", "Cancelled"]


# -----------------------------
# Catalog
# -----------------------------
class Specification(CamelModel):
    label: str
    value: str


class CategoryIn(CamelModel):
    name: str = Field(..., min_length=1)
    image: Optional[str] = None
    banner: Optional[str] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    image: Optional[str] = None
    banner: Optional[str] = None


class ProductIn(CamelModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    original_price: float = Field(..., ge=0)
    category: str
    image: str
    images: List[str] = Field(default_factory=list)
    description: str = ""
    model_number: str = ""
    warranty: str = ""
    specifications: List[Specification] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    description: Optional[str] = None
    model_number: Optional[str] = None
    warranty: Optional[str] = None
    specifications: Optional[List[Specification]] = None
    features: Optional[List[str]] = None


class BannerIn(CamelModel):
    image_url: str
    title: str
    alt_text: str = ""
    link: str = ""
    active: bool = True


class BannerUpdate(CamelModel):
    image_url: Optional[str] = None
    title: Optional[str] = None
    alt_text: Optional[str] = None
    link: Optional[str] = None
    active: Optional[bool] = None


# -----------------------------
# Enquiries
# -----------------------------
class EnquiryIn(CamelModel):
    name: str
    email: Optional[str] = None
    phone: str
    subject: Optional[str] = None
    message: str


class EnquiryUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    status: Optional[Literal["new", "read", "replied"]] = None


# -----------------------------
# Settings
# -----------------------------
class WhatsAppSettingsUpdate(CamelModel):
    token: Optional[str] = None
    owner_phone: Optional[str] = None


class WhatsAppTestRequest(CamelModel):
    phone: Optional[str] = None


class UploadRequest(CamelModel):
    image: Optional[str] = None
