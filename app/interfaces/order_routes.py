from fastapi import APIRouter, Depends

from app.application.order_intake import OrderIntake
from app.core.errors import NotFoundError
from app.domain.schemas import OrderCreate, CartOrderCreate, OrderStatusUpdate
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from app.interfaces.dependencies import get_order_intake, get_order_repo

router = APIRouter(prefix="/api/orders", tags=["Orders"])


# ---------------------------------------------------------
# CHECKOUT
# ---------------------------------------------------------
@router.post("", status_code=201)
def create_order(payload: OrderCreate, intake: OrderIntake = Depends(get_order_intake)):
    return intake.place_order(
        product_id=payload.product_id,
        quantity=payload.quantity,
        customer_phone=payload.customer_phone,
        customer_id=payload.customer_id,
    )


@router.post("/cart", status_code=201)
def create_cart_order(payload: CartOrderCreate, intake: OrderIntake = Depends(get_order_intake)):
    return intake.place_cart_order(
        items=[line.model_dump(by_alias=True) for line in payload.items],
        customer_phone=payload.customer_phone,
        customer_id=payload.customer_id,
    )


# ---------------------------------------------------------
# ADMIN
# ---------------------------------------------------------
@router.get("")
def list_orders(order_repo: SqlOrderRepository = Depends(get_order_repo)):
    return [order.to_dict() for order in order_repo.get_all_orders()]


@router.get("/{order_id}")
def get_order(order_id: str, order_repo: SqlOrderRepository = Depends(get_order_repo)):
    order = order_repo.get(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order.to_dict()


@router.put("/{order_id}/status")
def update_order_status(order_id: str, payload: OrderStatusUpdate,
                        order_repo: SqlOrderRepository = Depends(get_order_repo)):
    order = order_repo.update(order_id, {"status": payload.status})
    if order is None:
        raise NotFoundError("Order not found")
    return order.to_dict()


@router.delete("/{order_id}")
def delete_order(order_id: str, order_repo: SqlOrderRepository = Depends(get_order_repo)):
    if not order_repo.delete(order_id):
        raise NotFoundError("Order not found")
    return {"message": "Order deleted"}
