from typing import Dict, List, Optional

from sqlalchemy import desc

from app.interfaces.IOrderRepository import IOrderRepository
from app.domain.models import Order, ORDER_KIND_SINGLE, ORDER_KIND_CART
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories.crud_repository import CrudRepository


class SqlOrderRepository(CrudRepository, IOrderRepository):
    """Orders table. Generic CRUD covers the admin status update and delete."""

    def __init__(self, session_factory=SessionLocal):
        super().__init__(Order, session_factory)

    def save_single_order(self, customer_phone: str, product: Dict, quantity: int,
                          customer_id: Optional[str] = None) -> Order:
        # Name/price/image are copied so later product edits don't rewrite history
        return self.create({
            "kind": ORDER_KIND_SINGLE,
            "customer_id": customer_id,
            "product_name": product["name"],
            "product_price": product["price"],
            "product_image": product.get("image") or "",
            "quantity": quantity,
            "total_amount": product["price"] * quantity,
            "customer_phone": customer_phone,
        })

    def save_cart_order(self, customer_phone: str, items: List[Dict], total_amount: float,
                        customer_id: Optional[str] = None) -> Order:
        return self.create({
            "kind": ORDER_KIND_CART,
            "customer_id": customer_id,
            "items": items,
            "total_amount": total_amount,
            "customer_phone": customer_phone,
        })

    def get_all_orders(self, limit: Optional[int] = None) -> List[Order]:
        """
        Retrieves orders from the database.
        Ordered by created_at DESC (Newest first).
        """
        session = self.session_factory()
        try:
            query = session.query(Order).order_by(desc(Order.created_at))
            if limit:
                query = query.limit(limit)
            return query.all()
        finally:
            session.close()

    def get_orders_for_customer(self, customer_id: str) -> List[Order]:
        session = self.session_factory()
        try:
            return (
                session.query(Order)
                .filter(Order.customer_id == customer_id)
                .order_by(desc(Order.created_at))
                .all()
            )
        finally:
            session.close()
