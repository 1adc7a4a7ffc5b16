from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from app.domain.models import Order

class IOrderRepository(ABC):
    @abstractmethod
    def save_single_order(self, customer_phone: str, product: Dict, quantity: int,
                          customer_id: Optional[str] = None) -> Order:
        pass

    @abstractmethod
    def save_cart_order(self, customer_phone: str, items: List[Dict], total_amount: float,
                        customer_id: Optional[str] = None) -> Order:
        pass

    @abstractmethod
    def get_all_orders(self, limit: Optional[int] = None) -> List[Order]:
        pass

    @abstractmethod
    def get_orders_for_customer(self, customer_id: str) -> List[Order]:
        pass
