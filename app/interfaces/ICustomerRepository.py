from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models import Customer

class ICustomerRepository(ABC):
    @abstractmethod
    def get(self, customer_id: str) -> Optional[Customer]:
        pass

    @abstractmethod
    def get_or_create_by_phone(self, phone: str) -> Customer:
        pass

    @abstractmethod
    def change_phone(self, customer_id: str, new_phone: str) -> Optional[Customer]:
        """Move customer_id onto new_phone, absorbing whoever owned it before."""
        pass
