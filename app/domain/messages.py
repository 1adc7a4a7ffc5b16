"""WhatsApp message templates (NextSMS renders *bold* like the WhatsApp app does)."""
from datetime import datetime
from typing import Dict, List

import pytz

from app.core.config import settings


def money(amount) -> str:
    if float(amount).is_integer():
        return f"₹{int(amount):,}"
    return f"₹{amount:,.2f}"


def local_timestamp(now: datetime | None = None) -> str:
    tz = pytz.timezone(settings.TIMEZONE)
    if now is None:
        now = datetime.now(tz)
    else:
        # SQLite hands back naive datetimes; they were written as UTC
        if now.tzinfo is None:
            now = pytz.utc.localize(now)
        now = now.astimezone(tz)
    return now.strftime("%d/%m/%Y, %I:%M:%S %p")


def otp_message(code: str) -> str:
    return (
        f"🔐 *{settings.STORE_NAME} - OTP Verification*\n\n"
        f"Your OTP is: *{code}*\n\n"
        f"This code expires in {settings.OTP_TTL_SECONDS // 60} minutes.\n"
        f"Do not share this code with anyone."
    )


def whatsapp_test_message() -> str:
    return f"✅ Test message from {settings.STORE_NAME}! WhatsApp API is working."


def items_list(lines: List[Dict]) -> str:
    return "\n".join(
        f"{i}. {line['productName']} × {line['quantity']} = {money(line['subtotal'])}"
        for i, line in enumerate(lines, start=1)
    )


# ---------------------------------------------------------
# SINGLE PRODUCT ORDERS
# ---------------------------------------------------------

def owner_order_message(order) -> str:
    return (
        f"🛒 *New Order Received!*\n\n"
        f"📦 *Product:* {order.product_name}\n"
        f"💰 *Price:* {money(order.product_price)}\n"
        f"📊 *Quantity:* {order.quantity}\n"
        f"💵 *Total:* {money(order.total_amount)}\n"
        f"📱 *Customer Phone:* {order.customer_phone}\n"
        f"📅 *Date:* {local_timestamp(order.created_at)}\n\n"
        f"Order ID: {order.id}"
    )


def customer_order_message(order) -> str:
    return (
        f"✅ *Order Confirmed - {settings.STORE_NAME}*\n\n"
        f"Thank you for your order!\n\n"
        f"📦 *Product:* {order.product_name}\n"
        f"📊 *Quantity:* {order.quantity}\n"
        f"💵 *Total:* {money(order.total_amount)}\n\n"
        f"We will contact you shortly to confirm delivery details."
    )


# ---------------------------------------------------------
# CART ORDERS
# ---------------------------------------------------------

def owner_cart_message(order) -> str:
    lines = order.line_items()
    return (
        f"🛒 *New Cart Order Received!*\n\n"
        f"📦 *Items ({len(lines)}):*\n{items_list(lines)}\n\n"
        f"💵 *Total:* {money(order.total_amount)}\n"
        f"📱 *Customer:* {order.customer_phone}\n"
        f"📅 *Date:* {local_timestamp(order.created_at)}\n\n"
        f"Order ID: {order.id}"
    )


def customer_cart_message(order) -> str:
    return (
        f"✅ *Order Confirmed - {settings.STORE_NAME}*\n\n"
        f"Thank you for your order!\n\n"
        f"📦 *Items:*\n{items_list(order.line_items())}\n\n"
        f"💵 *Total:* {money(order.total_amount)}\n\n"
        f"We will contact you shortly to confirm delivery details."
    )


def owner_enquiry_message(enquiry) -> str:
    return (
        f"📞 *New Enquiry Received!*\n\n"
        f"👤 *Name:* {enquiry.name}\n"
        f"📱 *Phone:* {enquiry.phone}\n"
        f"💬 *Message:* {enquiry.message or 'No message'}\n"
        f"📅 *Date:* {local_timestamp(enquiry.created_at)}"
    )
