import logging
from typing import Dict, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.domain import messages
from app.domain.models import Order
from app.interfaces.IOrderRepository import IOrderRepository
from app.infrastructure.notification_service import NotificationService
from app.infrastructure.otp_store import OtpStore
from app.infrastructure.repositories.crud_repository import CrudRepository

logger = logging.getLogger(__name__)

SENT_MESSAGE = "Order placed successfully! Check your WhatsApp for confirmation."
PENDING_MESSAGE = "Order placed successfully! WhatsApp confirmation will be sent shortly."


class OrderIntake:
    """
    Checkout for single products and carts.

    Guests must have verified their phone by OTP (the verification is spent
    here). Logged-in customers pass their customer_id instead. Once the order
    is saved it stays saved: WhatsApp failures only change the message.
    """

    def __init__(self, otp_store: OtpStore, products: CrudRepository,
                 order_repo: IOrderRepository, notifier: NotificationService):
        self.otp_store = otp_store
        self.products = products
        self.order_repo = order_repo
        self.notifier = notifier

    def place_order(self, product_id: Optional[str], quantity: Optional[int],
                    customer_phone: Optional[str], customer_id: Optional[str] = None) -> Dict:
        if not product_id or not quantity or not customer_phone:
            raise ValidationError("Product, quantity, and phone number are required")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        self._authorize(customer_phone, customer_id)

        product = self.products.get(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        order = self.order_repo.save_single_order(
            customer_phone=customer_phone,
            product={"name": product.name, "price": product.price, "image": product.image},
            quantity=quantity,
            customer_id=customer_id or None,
        )
        logger.info(f"✅ Order {order.id} saved ({product.name} × {quantity})")

        sent = self._notify(order, messages.owner_order_message, messages.customer_order_message)
        return self._response(order, sent)

    def place_cart_order(self, items: List[Dict], customer_phone: Optional[str],
                         customer_id: Optional[str] = None) -> Dict:
        if not items or not customer_phone:
            raise ValidationError("Cart items and phone number are required")
        for item in items:
            if not item.get("quantity") or item["quantity"] < 1:
                raise ValidationError("Each cart item needs a quantity of at least 1")

        self._authorize(customer_phone, customer_id)

        lines = []
        warnings = []
        total_amount = 0
        for item in items:
            product_id = item.get("productId")
            product = self.products.get(product_id)
            if product is None:
                # Tolerant checkout: drop the line, but tell the customer
                if product_id:
                    warnings.append(f"Product {product_id} is no longer available and was not ordered")
                else:
                    warnings.append("A cart item without a product id was skipped")
                continue

            subtotal = product.price * item["quantity"]
            lines.append({
                "productId": product.id,
                "productName": product.name,
                "productPrice": product.price,
                "productImage": product.image or "",
                "quantity": item["quantity"],
                "subtotal": subtotal,
            })
            total_amount += subtotal

        if not lines:
            raise ValidationError("No valid products found in cart")

        order = self.order_repo.save_cart_order(
            customer_phone=customer_phone,
            items=lines,
            total_amount=total_amount,
            customer_id=customer_id or None,
        )
        logger.info(f"✅ Cart order {order.id} saved ({len(lines)} items, {len(warnings)} skipped)")

        sent = self._notify(order, messages.owner_cart_message, messages.customer_cart_message)
        response = self._response(order, sent)
        response["warnings"] = warnings
        return response

    # --- HELPERS ---

    def _authorize(self, customer_phone: str, customer_id: Optional[str]):
        if customer_id:
            return
        self.otp_store.consume(customer_phone)

    def _notify(self, order: Order, owner_template, customer_template) -> bool:
        """Merchant first, then customer. Returns whether the customer got their copy."""
        try:
            self.notifier.notify_owner(owner_template(order))
            result = self.notifier.send(order.customer_phone, customer_template(order))
            return result.success
        except Exception as e:
            logger.error(f"❌ Notification for order {order.id} failed: {e}", exc_info=True)
            return False

    def _response(self, order: Order, sent: bool) -> Dict:
        return {
            "order": order.to_dict(),
            "whatsappSent": sent,
            "message": SENT_MESSAGE if sent else PENDING_MESSAGE,
        }
