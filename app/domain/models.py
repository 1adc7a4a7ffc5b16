from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime, Text, JSON

from app.infrastructure.database import Base, new_id, utcnow

ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")
ENQUIRY_STATUSES = ("new", "read", "replied")

# Order variants
ORDER_KIND_SINGLE = "single"  # legacy single-product checkout
ORDER_KIND_CART = "cart"


def _iso(value):
    return value.isoformat() if value else None


class TimestampedMixin:
    id = Column(String(24), primary_key=True, default=new_id)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def _base_dict(self) -> dict:
        return {
            "_id": self.id,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class Category(TimestampedMixin, Base):
    __tablename__ = "categories"

    name = Column(String, unique=True, nullable=False)
    image = Column(String, nullable=True)   # icon
    banner = Column(String, nullable=True)  # category page banner

    def to_dict(self) -> dict:
        return {**self._base_dict(), "name": self.name, "image": self.image, "banner": self.banner}


class Product(TimestampedMixin, Base):
    __tablename__ = "products"

    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=False)
    category = Column(String, nullable=False, index=True)
    image = Column(String, nullable=False)
    images = Column(JSON, default=list)
    description = Column(Text, default="")
    model_number = Column(String, default="")
    warranty = Column(String, default="")
    specifications = Column(JSON, default=list)  # [{"label": ..., "value": ...}]
    features = Column(JSON, default=list)

    def to_dict(self) -> dict:
        return {
            **self._base_dict(),
            "name": self.name,
            "price": self.price,
            "originalPrice": self.original_price,
            "category": self.category,
            "image": self.image,
            "images": self.images or [],
            "description": self.description or "",
            "modelNumber": self.model_number or "",
            "warranty": self.warranty or "",
            "specifications": self.specifications or [],
            "features": self.features or [],
        }


class Banner(TimestampedMixin, Base):
    __tablename__ = "banners"

    image_url = Column(String, nullable=False)
    title = Column(String, nullable=False)
    alt_text = Column(String, default="")
    link = Column(String, default="")
    active = Column(Boolean, default=True)

    def to_dict(self) -> dict:
        return {
            **self._base_dict(),
            "imageUrl": self.image_url,
            "title": self.title,
            "altText": self.alt_text or "",
            "link": self.link or "",
            "active": self.active,
        }


class Customer(TimestampedMixin, Base):
    __tablename__ = "customers"

    phone = Column(String, unique=True, nullable=False, index=True)

    def to_profile(self) -> dict:
        return {"_id": self.id, "phone": self.phone}


class Order(TimestampedMixin, Base):
    __tablename__ = "orders"

    # Attribution only: a merged-away profile id must not block checkout
    customer_id = Column(String(24), nullable=True, index=True)
    kind = Column(String, nullable=False, default=ORDER_KIND_CART)

    # kind == "cart"
    items = Column(JSON, default=list)

    # kind == "single"
    product_name = Column(String, nullable=True)
    product_price = Column(Float, nullable=True)
    product_image = Column(String, nullable=True)
    quantity = Column(Integer, nullable=True)

    total_amount = Column(Float, nullable=False)
    customer_phone = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default="Pending")

    def line_items(self) -> list:
        """Order lines in the cart shape, whichever variant this order is."""
        if self.kind == ORDER_KIND_CART:
            return list(self.items or [])
        if self.kind == ORDER_KIND_SINGLE:
            return [{
                "productId": None,
                "productName": self.product_name,
                "productPrice": self.product_price,
                "productImage": self.product_image or "",
                "quantity": self.quantity,
                "subtotal": (self.product_price or 0) * (self.quantity or 0),
            }]
        raise ValueError(f"Unknown order kind: {self.kind}")

    def to_dict(self) -> dict:
        data = {
            **self._base_dict(),
            "kind": self.kind,
            "customerId": self.customer_id,
            "totalAmount": self.total_amount,
            "customerPhone": self.customer_phone,
            "status": self.status,
        }
        if self.kind == ORDER_KIND_SINGLE:
            data.update({
                "productName": self.product_name,
                "productPrice": self.product_price,
                "productImage": self.product_image or "",
                "quantity": self.quantity,
            })
        else:
            data["items"] = self.line_items()
        return data


class Enquiry(TimestampedMixin, Base):
    __tablename__ = "enquiries"

    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=False)
    subject = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="new")

    def to_dict(self) -> dict:
        return {
            **self._base_dict(),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
        }


class Setting(TimestampedMixin, Base):
    __tablename__ = "settings"

    key = Column(String, unique=True, nullable=False, index=True)
    value = Column(String, default="")
